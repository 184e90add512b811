import curses
import threading

import pytest

from errors import PagerError, SourceError, TerminalError
from events import KeyPressed, KeyReady, MoreData
from orchestrator import MAX_EMPTY_READS, Orchestrator
from test_viewer import DummySurface


def _orchestrator(feed, keys, h=10, w=60):
    surface = DummySurface(h=h, w=w)
    orch = Orchestrator(None, feed, {"TAB_WIDTH": 8}, keys=keys, surface=surface)
    return orch, surface


def test_session_pages_data_then_quits():
    consumed = threading.Event()

    def feed():
        yield MoreData([f"line {i}" for i in range(25)])
        # resumes only once the batch has been handled and rendered
        consumed.set()

    def keys():
        consumed.wait(2)
        yield KeyPressed("G")
        yield KeyPressed("q")

    orch, surface = _orchestrator(feed(), keys())
    orch.run()
    assert orch.viewer.offset == 16
    assert surface.text(9).startswith(" 100% of 25 lines")
    assert surface.text(8).rstrip() == "line 24"
    assert surface.clears == 1


def test_source_failure_ends_session():
    def feed():
        raise SourceError("cannot decode")
        yield

    def keys():
        threading.Event().wait()
        yield

    orch, _ = _orchestrator(feed(), keys())
    with pytest.raises(SourceError):
        orch.run()


def test_keyboard_failure_ends_session():
    def keys():
        raise TerminalError("tty closed")
        yield

    orch, _ = _orchestrator(iter([]), keys())
    with pytest.raises(TerminalError):
        orch.run()


class DummyKeyWin:
    """Stands in for the key pad: hands out queued keys, then "no input"."""

    def __init__(self, keys=()):
        self.keys = list(keys)
        self.threads = set()

    def get_wch(self):
        self.threads.add(threading.get_ident())
        if not self.keys:
            raise curses.error("no input")
        return self.keys.pop(0)


def test_ready_keys_are_read_on_the_main_thread():
    consumed = threading.Event()
    win = DummyKeyWin(["G", "q"])

    def feed():
        yield MoreData([f"line {i}" for i in range(25)])
        consumed.set()

    def keys():
        consumed.wait(2)
        yield KeyReady()
        threading.Event().wait()

    surface = DummySurface(h=10, w=60)
    orch = Orchestrator(None, feed(), {}, keys=keys(), surface=surface, key_win=win)
    orch.run()
    assert orch.viewer.offset == 16
    assert win.keys == []
    assert win.threads == {threading.get_ident()}


def test_resize_refits_terminal_before_redraw():
    win = DummyKeyWin(["q"])

    def keys():
        yield KeyPressed(curses.KEY_RESIZE)
        yield KeyReady()

    surface = DummySurface(h=10, w=60)
    orch = Orchestrator(None, iter([]), {}, keys=keys(), surface=surface, key_win=win)
    orch.run()
    assert surface.fits == 1
    assert surface.clears == 2


def test_wakeups_without_keys_end_session():
    def keys():
        while True:
            yield KeyReady()

    orch = Orchestrator(
        None, iter([]), {}, keys=keys(), surface=DummySurface(), key_win=DummyKeyWin()
    )
    with pytest.raises(TerminalError, match="keyboard input closed"):
        orch.run()
    assert orch.empty_reads == MAX_EMPTY_READS


def test_unexpected_producer_error_becomes_pager_error():
    def feed():
        raise ValueError("bad batch")
        yield

    def keys():
        threading.Event().wait()
        yield

    orch, _ = _orchestrator(feed(), keys())
    with pytest.raises(PagerError, match="lines: bad batch"):
        orch.run()
