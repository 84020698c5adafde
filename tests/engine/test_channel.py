from __future__ import annotations

import queue
import threading

import pytest

from tmdb_crawler.engine.channel import AggregationChannel
from tmdb_crawler.engine.messages import Completion, SecondaryIdentifier
from tmdb_crawler.errors import ChannelSendFailure


def test_concurrent_sends_are_not_lost() -> None:
    channel = AggregationChannel()

    def produce(worker_id: int) -> None:
        for n in range(500):
            channel.send(SecondaryIdentifier(worker_id * 1000 + n))
        channel.send(Completion(worker_id))

    threads = [threading.Thread(target=produce, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    received = list(channel.drain())
    assert len(received) == 8 * 501
    assert sum(isinstance(m, Completion) for m in received) == 8


def test_send_after_close_fails() -> None:
    channel = AggregationChannel()
    channel.close()
    assert channel.closed
    with pytest.raises(ChannelSendFailure):
        channel.send(Completion(0))


def test_receive_times_out_when_empty() -> None:
    with pytest.raises(queue.Empty):
        AggregationChannel().receive(timeout=0.01)
