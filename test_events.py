import queue
import threading

import pytest

from errors import PagerError, SourceError
from events import Channel, EventMultiplexer, Failed, KeyPressed, MoreData


def test_send_blocks_until_consumer_is_done():
    channel = Channel()
    delivered = threading.Event()

    def producer():
        channel.send("a")
        delivered.set()

    threading.Thread(target=producer, daemon=True).start()
    assert channel.recv(timeout=2) == "a"
    # still being processed by the consumer
    assert not delivered.wait(0.1)
    channel.done()
    assert delivered.wait(2)


def test_recv_acknowledges_previous_item():
    channel = Channel()
    sent = []

    def producer():
        for item in range(3):
            channel.send(item)
            sent.append(item)

    threading.Thread(target=producer, daemon=True).start()
    assert channel.recv(timeout=2) == 0
    assert channel.recv(timeout=2) == 1
    assert sent == [0]
    assert channel.recv(timeout=2) == 2


def test_recv_times_out_when_nothing_arrives():
    with pytest.raises(queue.Empty):
        Channel().recv(timeout=0.05)


def test_multiplexer_keeps_producer_order():
    mux = EventMultiplexer()
    batches = [MoreData(["a"]), MoreData(["b", "c"]), MoreData(["d"])]
    mux.add_producer("lines", iter(batches))
    assert [mux.next_event(timeout=2) for _ in range(3)] == batches


def test_multiplexer_merges_two_producers():
    mux = EventMultiplexer()
    keys = [KeyPressed("j"), KeyPressed("k")]
    lines = [MoreData(["x"]), MoreData(["y"])]
    mux.add_producer("keys", iter(keys))
    mux.add_producer("lines", iter(lines))
    received = [mux.next_event(timeout=2) for _ in range(4)]
    assert [e for e in received if isinstance(e, KeyPressed)] == keys
    assert [e for e in received if isinstance(e, MoreData)] == lines


def test_producer_failure_becomes_failed_event_and_stops():
    def failing():
        yield MoreData(["first"])
        raise SourceError("disk on fire")

    mux = EventMultiplexer()
    thread = mux.add_producer("lines", failing())
    assert mux.next_event(timeout=2) == MoreData(["first"])
    event = mux.next_event(timeout=2)
    assert isinstance(event, Failed)
    assert isinstance(event.error, SourceError)
    assert "disk on fire" in str(event.error)
    mux.channel.done()
    thread.join(2)
    assert not thread.is_alive()
    with pytest.raises(queue.Empty):
        mux.next_event(timeout=0.05)


def test_unexpected_producer_exception_is_wrapped():
    def buggy():
        raise ValueError("bad state")
        yield

    mux = EventMultiplexer()
    mux.add_producer("lines", buggy())
    event = mux.next_event(timeout=2)
    assert isinstance(event, Failed)
    assert type(event.error) is PagerError
    assert str(event.error) == "lines: bad state"
    assert isinstance(event.error.__cause__, ValueError)
