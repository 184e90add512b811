import contextlib
import curses

from errors import TerminalError
from events import EventMultiplexer, KeyPressed, KeyReady
from input_reader import KeyReader, ResizeWatch, key_window, read_keys
from logger import setup_logger
from terminal import TerminalSurface
from viewer import Viewer

log = setup_logger("orchestrator")

# KeyReady wake-ups in a row that yield no key before the tty counts as gone
MAX_EMPTY_READS = 50


class Orchestrator:
    """Runs the session. Every curses call happens on the calling thread."""

    def __init__(self, stdscr, feed, config, keys=None, surface=None, key_win=None):
        self.stdscr = stdscr
        try:
            # Ctrl+C arrives as a key, not a signal
            curses.raw()
        except curses.error:
            pass

        self.feed = feed
        self.surface = surface if surface is not None else TerminalSurface(stdscr)
        self.viewer = Viewer(self.surface, tab_width=config.get("TAB_WIDTH", 8))
        self.keys = keys
        self.key_win = key_win
        self.mux = EventMultiplexer()
        self.empty_reads = 0

    # ---------------- key input ----------------

    def _read_pending_keys(self):
        if self.key_win is None:
            self.key_win = key_window()
        keys = read_keys(self.key_win)
        if keys:
            self.empty_reads = 0
            return keys
        self.empty_reads += 1
        if self.empty_reads >= MAX_EMPTY_READS:
            raise TerminalError("keyboard input closed")
        return keys

    def _handle(self, event) -> bool:
        if isinstance(event, KeyReady):
            for key in self._read_pending_keys():
                if self._handle(KeyPressed(key)):
                    return True
            return False
        if isinstance(event, KeyPressed) and event.key == curses.KEY_RESIZE:
            self.surface.fit_to_terminal()
        return self.viewer.handle(event)

    # ---------------- main loop ----------------

    def run(self):
        with contextlib.ExitStack() as stack:
            if self.keys is None:
                watch = stack.enter_context(ResizeWatch())
                self.keys = KeyReader(0, wakeup_fd=watch.fd)
            self._loop()

    def _loop(self):
        log.info("session started")
        self.surface.clear()
        self.viewer.render()

        self.mux.add_producer("keys", self.keys)
        self.mux.add_producer("lines", self.feed)

        while True:
            event = self.mux.next_event()
            if self._handle(event):
                break
            self.viewer.render()

        log.info("session ended with %d lines buffered", len(self.viewer.lines))
