import curses
import os

from errors import TerminalError


def attach_controlling_tty():
    """Point fd 0 at the controlling terminal if it is not one already.

    Needed when the text arrives through a pipe: curses reads keys from
    standard input.
    """
    if not os.isatty(1):
        raise TerminalError("standard output is not a terminal")
    if os.isatty(0):
        return
    try:
        fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError as e:
        raise TerminalError(f"cannot open controlling terminal: {e.strerror or e}") from e
    try:
        os.dup2(fd, 0)
    finally:
        os.close(fd)


class TerminalSurface:
    """Drawing primitives over a curses window.

    Coordinates passed to ``move_cursor`` are 1-based; the surface tracks
    its own write position so that filling the last column never wraps a
    line into the next row.
    """

    PAIR_MATCH = 1
    PAIR_STATUS = 2

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.row = 0
        self.col = 0
        self.styles = {
            None: curses.A_NORMAL,
            "match": curses.A_REVERSE,
            "status": curses.A_REVERSE,
        }
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_MATCH, curses.COLOR_BLACK, curses.COLOR_YELLOW)
            # bright black when the terminal has it
            status_bg = 8 if curses.COLORS > 8 else curses.COLOR_BLACK
            curses.init_pair(self.PAIR_STATUS, curses.COLOR_WHITE, status_bg)
            self.styles["match"] = curses.color_pair(self.PAIR_MATCH)
            self.styles["status"] = curses.color_pair(self.PAIR_STATUS)
        except curses.error:
            pass

    def width(self) -> int:
        return self.stdscr.getmaxyx()[1]

    def height(self) -> int:
        return self.stdscr.getmaxyx()[0]

    def fit_to_terminal(self):
        """Resize curses to the terminal after a SIGWINCH curses did not see."""
        try:
            size = os.get_terminal_size(1)
        except OSError:
            return
        try:
            curses.resizeterm(size.lines, size.columns)
        except curses.error:
            pass

    def clear(self):
        self.stdscr.clear()
        self.row = 0
        self.col = 0

    def move_cursor(self, col: int, row: int):
        self.row = max(0, row - 1)
        self.col = max(0, col - 1)
        try:
            self.stdscr.move(self.row, self.col)
        except curses.error:
            pass

    def write(self, text: str, style=None):
        room = self.width() - self.col
        if room <= 0 or not text:
            return
        chunk = text[:room]
        try:
            self.stdscr.addnstr(self.row, self.col, chunk, room, self.styles.get(style, 0))
        except curses.error:
            # writing the bottom-right cell reports an error after drawing it
            pass
        self.col += len(chunk)

    def write_line(self, text: str = "", style=None):
        self.write(text, style)
        pad = self.width() - self.col
        if pad > 0:
            self.write(" " * pad, style)
        self.row += 1
        self.col = 0

    def hide_cursor(self):
        try:
            curses.curs_set(0)
        except curses.error:
            pass

    def show_cursor(self):
        try:
            curses.curs_set(1)
        except curses.error:
            pass

    def flush(self):
        try:
            self.stdscr.refresh()
        except curses.error as e:
            raise TerminalError(f"cannot draw to terminal: {e}") from e
