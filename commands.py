import curses
from dataclasses import dataclass
from typing import Optional, Union


# ---------------- modes ----------------


@dataclass(frozen=True)
class Viewing:
    term: Optional[str] = None  # active search term, if any


@dataclass(frozen=True)
class Searching:
    text: str = ""  # input typed so far


Mode = Union[Viewing, Searching]


# ---------------- scroll directions ----------------

UP = "up"
DOWN = "down"
HALF_PAGE_UP = "half_page_up"
HALF_PAGE_DOWN = "half_page_down"
TOP = "top"
BOTTOM = "bottom"


@dataclass(frozen=True)
class Dir:
    kind: str
    count: int = 0


def up(count=1):
    return Dir(UP, count)


def down(count=1):
    return Dir(DOWN, count)


# ---------------- commands ----------------


class ViewCmd:
    pass


class SearchCmd:
    pass


@dataclass(frozen=True)
class Quit(ViewCmd):
    pass


@dataclass(frozen=True)
class Scroll(ViewCmd):
    dir: Dir


@dataclass(frozen=True)
class StartSearching(ViewCmd):
    pass


@dataclass(frozen=True)
class NextSearchResult(ViewCmd):
    pass


@dataclass(frozen=True)
class EnterText(SearchCmd):
    text: str


@dataclass(frozen=True)
class RemoveChar(SearchCmd):
    pass


@dataclass(frozen=True)
class Confirm(SearchCmd):
    pass


@dataclass(frozen=True)
class Resize(ViewCmd, SearchCmd):
    pass


@dataclass(frozen=True)
class Noop(ViewCmd, SearchCmd):
    pass


Command = Union[ViewCmd, SearchCmd]

CTRL_C = "\x03"
CTRL_D = "\x04"
CTRL_H = "\x08"
CTRL_U = "\x15"
DEL = "\x7f"

_VIEW_KEYS = {
    "q": Quit(),
    CTRL_C: Quit(),
    "j": Scroll(down(1)),
    curses.KEY_DOWN: Scroll(down(1)),
    "\n": Scroll(down(1)),
    "\r": Scroll(down(1)),
    curses.KEY_ENTER: Scroll(down(1)),
    "k": Scroll(up(1)),
    curses.KEY_UP: Scroll(up(1)),
    "n": NextSearchResult(),
    "g": Scroll(Dir(TOP)),
    curses.KEY_HOME: Scroll(Dir(TOP)),
    "G": Scroll(Dir(BOTTOM)),
    curses.KEY_END: Scroll(Dir(BOTTOM)),
    CTRL_D: Scroll(Dir(HALF_PAGE_DOWN)),
    curses.KEY_NPAGE: Scroll(Dir(HALF_PAGE_DOWN)),
    " ": Scroll(Dir(HALF_PAGE_DOWN)),
    CTRL_U: Scroll(Dir(HALF_PAGE_UP)),
    curses.KEY_PPAGE: Scroll(Dir(HALF_PAGE_UP)),
    "/": StartSearching(),
    curses.KEY_RESIZE: Resize(),
}

_SEARCH_KEYS = {
    "\n": Confirm(),
    "\r": Confirm(),
    curses.KEY_ENTER: Confirm(),
    curses.KEY_BACKSPACE: RemoveChar(),
    DEL: RemoveChar(),
    CTRL_H: RemoveChar(),
    curses.KEY_RESIZE: Resize(),
}


def view_command(key) -> ViewCmd:
    return _VIEW_KEYS.get(key, Noop())


def search_command(key) -> SearchCmd:
    cmd = _SEARCH_KEYS.get(key)
    if cmd is not None:
        return cmd
    if isinstance(key, str) and len(key) == 1 and key.isprintable():
        return EnterText(key)
    return Noop()


def command_for(mode: Mode, key) -> Command:
    """Decode ``key`` the way the current mode reads it."""
    if isinstance(mode, Viewing):
        return view_command(key)
    if isinstance(mode, Searching):
        return search_command(key)
    raise TypeError(f"unknown mode: {mode!r}")
