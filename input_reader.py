import curses
import os
import select
import signal

from errors import TerminalError
from events import KeyPressed, KeyReady
from logger import setup_logger

log = setup_logger("input_reader")


def key_window():
    """A 1x1 pad for non-blocking key reads on the main thread.

    Reading from a pad never triggers a refresh, so draining keys does
    not draw over what the main loop renders.
    """
    win = curses.newpad(1, 1)
    win.keypad(True)
    win.nodelay(True)
    return win


def read_keys(win):
    """Return every key curses has ready on ``win`` without blocking."""
    keys = []
    while True:
        try:
            keys.append(win.get_wch())
        except curses.error:
            # "no input" in nodelay mode
            return keys


class ResizeWatch:
    """Routes SIGWINCH into a pipe the key thread can wait on.

    Must be entered on the main thread. While active curses no longer
    sees the signal itself, so the consumer calls ``resizeterm``.
    """

    def __init__(self):
        self.fd = None
        self._wakeup_w = None
        self._prev_handler = None
        self._prev_wakeup = -1

    def __enter__(self):
        self.fd, self._wakeup_w = os.pipe()
        os.set_blocking(self.fd, False)
        os.set_blocking(self._wakeup_w, False)
        self._prev_handler = signal.signal(signal.SIGWINCH, lambda signum, frame: None)
        self._prev_wakeup = signal.set_wakeup_fd(self._wakeup_w)
        return self

    def __exit__(self, *exc):
        signal.set_wakeup_fd(self._prev_wakeup)
        signal.signal(signal.SIGWINCH, self._prev_handler)
        # the key thread may still be waiting on the read end
        os.close(self._wakeup_w)
        return False


class KeyReader:
    """Waits for keyboard input on a worker thread.

    Never touches curses: it yields ``KeyReady`` when the terminal has
    bytes to read and ``KeyPressed(KEY_RESIZE)`` when ``wakeup_fd``
    reports a signal. The consumer drains the keys itself, and the next
    wait starts only after it has done so.
    """

    def __init__(self, fd=0, wakeup_fd=None):
        self.fd = fd
        self.wakeup_fd = wakeup_fd

    def _wait(self, watched):
        try:
            ready, _, _ = select.select(watched, [], [])
        except (OSError, ValueError) as e:
            raise TerminalError(f"cannot read keyboard: {e}") from e
        return ready

    def _drain_wakeup(self):
        try:
            while os.read(self.wakeup_fd, 512):
                pass
        except BlockingIOError:
            pass
        except OSError as e:
            raise TerminalError(f"cannot read keyboard: {e}") from e

    def __iter__(self):
        log.info("waiting for keys")
        watched = [self.fd]
        if self.wakeup_fd is not None:
            watched.append(self.wakeup_fd)
        while True:
            ready = self._wait(watched)
            if self.wakeup_fd is not None and self.wakeup_fd in ready:
                self._drain_wakeup()
                yield KeyPressed(curses.KEY_RESIZE)
            if self.fd in ready:
                yield KeyReady()
