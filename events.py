import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from errors import PagerError
from logger import setup_logger

log = setup_logger("events")


@dataclass(frozen=True)
class KeyPressed:
    key: Any  # str for characters, int for named curses keys


@dataclass(frozen=True)
class KeyReady:
    """The terminal has input; the consumer reads it with curses."""


@dataclass(frozen=True)
class MoreData:
    lines: List[str]


@dataclass(frozen=True)
class Failed:
    error: BaseException


class Channel:
    """Unbuffered hand-off between producer threads and one consumer.

    ``send`` returns only once the consumer has finished with the item,
    which it signals by asking for the next one (or calling ``done``).
    """

    def __init__(self):
        self._queue: queue.Queue = queue.Queue(maxsize=1)
        self._pending_ack: Optional[threading.Event] = None

    def send(self, item) -> None:
        ack = threading.Event()
        self._queue.put((item, ack))
        ack.wait()

    def recv(self, timeout: Optional[float] = None):
        self.done()
        item, ack = self._queue.get(timeout=timeout)
        self._pending_ack = ack
        return item

    def done(self) -> None:
        ack, self._pending_ack = self._pending_ack, None
        if ack is not None:
            ack.set()


class EventMultiplexer:
    """Merges the key and line producers into one ordered event stream."""

    def __init__(self, channel: Optional[Channel] = None):
        self.channel = channel if channel is not None else Channel()
        self.threads: List[threading.Thread] = []

    def add_producer(self, name: str, events: Iterable) -> threading.Thread:
        t = threading.Thread(
            target=self._pump, args=(name, events), name=name, daemon=True
        )
        self.threads.append(t)
        t.start()
        return t

    def _pump(self, name: str, events: Iterable) -> None:
        send: Callable = self.channel.send
        try:
            for event in events:
                send(event)
        except PagerError as e:
            failure = e
        except Exception as e:
            log.exception("%s producer crashed", name)
            failure = PagerError(f"{name}: {e}")
            failure.__cause__ = e
        else:
            log.info("%s producer finished", name)
            return
        log.error("%s producer failed: %s", name, failure)
        send(Failed(failure))

    def next_event(self, timeout: Optional[float] = None):
        return self.channel.recv(timeout=timeout)
