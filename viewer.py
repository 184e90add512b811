from typing import List, Optional, Tuple

from commands import (
    Confirm,
    EnterText,
    NextSearchResult,
    Noop,
    Quit,
    RemoveChar,
    Resize,
    Scroll,
    SearchCmd,
    Searching,
    StartSearching,
    ViewCmd,
    Viewing,
    command_for,
)
from events import Failed, KeyPressed, MoreData
from logger import setup_logger
from search import find_line, split_matches
from status_bar import render_status, search_prompt
from viewport import ScrollWindow

log = setup_logger("viewer")

STATUS_BAR_HEIGHT = 1
FILLER = "~"

# styles understood by the render surface
MATCH = "match"
STATUS = "status"


def expand_text(text: str, col: int, tab_width: int) -> Tuple[str, int]:
    """Expand tabs from column ``col`` and mask control characters."""
    out = []
    for ch in text:
        if ch == "\t":
            n = tab_width - (col % tab_width)
            out.append(" " * n)
            col += n
        elif ch.isprintable():
            out.append(ch)
            col += 1
        else:
            out.append("?")
            col += 1
    return "".join(out), col


def display_segments(
    line: str, term: Optional[str], width: int, tab_width: int = 8
) -> List[Tuple[str, bool]]:
    """Highlight segments of ``line`` as drawn, clipped to ``width`` cells."""
    segments = []
    col = 0
    for text, matched in split_matches(line, term):
        shown, col = expand_text(text, col, tab_width)
        segments.append((shown, matched))
    clipped = []
    room = width
    for shown, matched in segments:
        if room <= 0:
            break
        clipped.append((shown[:room], matched))
        room -= len(shown)
    return clipped


class Viewer:
    """Line buffer, scroll position and mode of one paging session.

    Events are fed through ``handle`` one at a time; ``render`` draws the
    result onto the surface, redrawing the text region only when it is
    dirty.
    """

    def __init__(self, surface, tab_width: int = 8):
        self.surface = surface
        self.tab_width = max(1, tab_width)
        self.lines: List[str] = []
        self.mode = Viewing()
        self.window = ScrollWindow(0, self._text_rows())
        self.dirty = True
        self.message: Optional[str] = None
        self.last_match: Optional[int] = None

    # ---------------- geometry ----------------

    @property
    def offset(self) -> int:
        return self.window.offset

    def _text_rows(self) -> int:
        return max(1, self.surface.height() - STATUS_BAR_HEIGHT)

    def _measure(self):
        before = self.window.offset
        self.window.update_page_size(self._text_rows())
        if self.window.offset != before:
            self.dirty = True

    # ---------------- events ----------------

    def handle(self, event) -> bool:
        """Apply one event; return True when the session should end."""
        if isinstance(event, MoreData):
            self.append(event.lines)
            return False
        if isinstance(event, KeyPressed):
            return self.execute(command_for(self.mode, event.key))
        if isinstance(event, Failed):
            raise event.error
        raise TypeError(f"unknown event: {event!r}")

    def append(self, lines: List[str]):
        if not lines:
            return
        self._measure()
        first_new = len(self.lines)
        self.lines.extend(lines)
        self.window.update_total_rows(len(self.lines))
        if self.window.is_visible(first_new):
            self.dirty = True

    def execute(self, cmd) -> bool:
        if isinstance(self.mode, Viewing):
            if not isinstance(cmd, ViewCmd):
                raise RuntimeError(f"{cmd!r} is not a viewing command")
            self.message = None
            return self._execute_view(cmd)
        if not isinstance(cmd, SearchCmd):
            raise RuntimeError(f"{cmd!r} is not a search command")
        self._execute_search(cmd)
        return False

    def _execute_view(self, cmd: ViewCmd) -> bool:
        if isinstance(cmd, Quit):
            return True
        if isinstance(cmd, Scroll):
            self.scroll(cmd.dir)
        elif isinstance(cmd, StartSearching):
            if self.mode.term:
                self.dirty = True  # drop the highlighting
            self.mode = Searching()
        elif isinstance(cmd, NextSearchResult):
            self.next_match()
        elif isinstance(cmd, Resize):
            self.resize()
        elif not isinstance(cmd, Noop):
            raise RuntimeError(f"unhandled viewing command: {cmd!r}")
        return False

    def _execute_search(self, cmd: SearchCmd):
        text = self.mode.text
        if isinstance(cmd, EnterText):
            self.mode = Searching(text + cmd.text)
        elif isinstance(cmd, RemoveChar):
            self.mode = Searching(text[:-1])
        elif isinstance(cmd, Confirm):
            self.confirm_search()
        elif isinstance(cmd, Resize):
            self.resize()
        elif not isinstance(cmd, Noop):
            raise RuntimeError(f"unhandled search command: {cmd!r}")

    # ---------------- scrolling ----------------

    def scroll(self, direction):
        self._measure()
        if self.window.scroll(direction):
            self.dirty = True

    def resize(self):
        self.surface.clear()
        self._measure()
        self.dirty = True

    # ---------------- searching ----------------

    def confirm_search(self) -> Optional[int]:
        """Leave search mode, jumping to the first match at or below the top line."""
        text = self.mode.text
        self.mode = Viewing()
        self.last_match = None
        self.dirty = True
        if not text:
            return None
        self._measure()
        idx = find_line(self.lines, text, self.window.offset)
        if idx is None:
            self.message = f"Pattern not found: {text}"
            log.debug("no match for %r from line %d", text, self.window.offset)
            return None
        self.mode = Viewing(text)
        self.last_match = idx
        self.window.scroll_to(idx)
        return idx

    def next_match(self) -> Optional[int]:
        term = self.mode.term
        if not term:
            return None
        self._measure()
        offset = self.window.offset
        self.dirty = True
        idx = find_line(self.lines, term, offset + 1)
        # clamped at the tail: the offset cannot reach the line it stands on
        if (
            idx is not None
            and self.last_match is not None
            and idx <= self.last_match
            and offset == self.window.max_offset
        ):
            idx = find_line(self.lines, term, self.last_match + 1)
        if idx is None:
            self.message = f"Pattern not found: {term}"
            return None
        self.last_match = idx
        self.window.scroll_to(idx)
        return idx

    # ---------------- drawing ----------------

    def render(self):
        width = self.surface.width()
        height = self.surface.height()
        self._measure()

        if self.dirty:
            self._draw_text(width)
            self.dirty = False

        self._draw_status(width, height)

        if isinstance(self.mode, Searching):
            col = len(search_prompt(self.mode.text, width)) + 1
            self.surface.move_cursor(min(col, width), height)
            self.surface.show_cursor()
        else:
            self.surface.hide_cursor()

        self.surface.flush()

    def _draw_text(self, width: int):
        term = self.mode.term if isinstance(self.mode, Viewing) else None
        rows = self.window.page_size
        visible = self.lines[self.window.offset : self.window.offset + rows]

        self.surface.move_cursor(1, 1)
        for line in visible:
            for text, matched in display_segments(line, term, width, self.tab_width):
                self.surface.write(text, MATCH if matched else None)
            self.surface.write_line()

        # fill rows past the end of the buffer
        for _ in range(rows - len(visible)):
            self.surface.write_line(FILLER)

    def _draw_status(self, width: int, height: int):
        searching = isinstance(self.mode, Searching)
        context = {
            "searching": searching,
            "search_text": self.mode.text if searching else "",
            "percent": self.window.percent,
            "total_lines": len(self.lines),
            "message": self.message,
        }
        self.surface.move_cursor(1, height)
        self.surface.write(render_status(context, width), STATUS)
