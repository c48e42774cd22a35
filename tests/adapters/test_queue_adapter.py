from __future__ import annotations

import threading
from datetime import datetime, timezone

import pytest

from lib_biome.adapters.queue import QueueAdapter
from lib_biome.domain.messages import LogMessage
from lib_biome.errors import DrainTimeoutError


def build_message(index: int) -> LogMessage:
    return LogMessage(text=f"message-{index}", created_at=datetime(2025, 9, 23, 12, index, tzinfo=timezone.utc))


def test_queue_processes_messages_in_order() -> None:
    processed: list[str] = []
    adapter = QueueAdapter(worker=lambda message: processed.append(message.text))
    adapter.start()
    for index in range(5):
        assert adapter.put(build_message(index)) is True
    adapter.stop()
    assert processed == [f"message-{index}" for index in range(5)]


def test_queue_stop_drains_backlog_queued_behind_a_slow_worker() -> None:
    processed: list[str] = []
    first_started = threading.Event()
    release = threading.Event()

    def worker(message: LogMessage) -> None:
        if message.text == "message-0":
            first_started.set()
            assert release.wait(timeout=2.0)
        processed.append(message.text)

    adapter = QueueAdapter(worker=worker)
    adapter.start()
    adapter.put(build_message(0))
    assert first_started.wait(timeout=1.0)
    for index in range(1, 4):
        adapter.put(build_message(index))

    stopper = threading.Thread(target=adapter.stop)
    stopper.start()
    release.set()
    stopper.join(timeout=2.0)

    assert not stopper.is_alive()
    assert processed == [f"message-{index}" for index in range(4)]
    assert adapter.running is False


def test_queue_worker_exception_is_reported_and_loop_continues() -> None:
    processed: list[str] = []
    reports: list[tuple[str, dict]] = []

    def worker(message: LogMessage) -> None:
        if message.text == "message-1":
            raise RuntimeError("boom")
        processed.append(message.text)

    adapter = QueueAdapter(worker=worker, diagnostic=lambda name, payload: reports.append((name, payload)))
    adapter.start()
    for index in range(3):
        adapter.put(build_message(index))
    adapter.stop()

    assert processed == ["message-0", "message-2"]
    assert adapter.worker_failures == 1
    assert reports[0][0] == "queue_worker_error"
    assert reports[0][1]["message"] == "message-1"


def test_queue_diagnostic_hook_failure_is_swallowed() -> None:
    def worker(message: LogMessage) -> None:
        raise RuntimeError("worker")

    def hook(name: str, payload: dict) -> None:
        raise RuntimeError("hook")

    adapter = QueueAdapter(worker=worker, diagnostic=hook)
    adapter.start()
    adapter.put(build_message(0))
    adapter.stop()
    assert adapter.worker_failures == 1


def test_bounded_queue_put_times_out_when_full() -> None:
    adapter = QueueAdapter(worker=lambda message: None, maxsize=1, timeout=0.01)
    assert adapter.put(build_message(0)) is True
    assert adapter.put(build_message(1)) is False


def test_queue_rejects_negative_maxsize() -> None:
    with pytest.raises(ValueError, match="maxsize"):
        QueueAdapter(worker=lambda message: None, maxsize=-1)


def test_wait_until_idle_returns_after_processing() -> None:
    processed: list[str] = []
    adapter = QueueAdapter(worker=lambda message: processed.append(message.text))
    adapter.start()
    adapter.put(build_message(0))
    assert adapter.wait_until_idle(timeout=1.0) is True
    assert processed == ["message-0"]
    adapter.stop()


def test_stop_without_start_is_noop() -> None:
    adapter = QueueAdapter(worker=lambda message: None)
    adapter.stop()
    assert adapter.running is False


def test_stop_raises_when_drain_deadline_elapses() -> None:
    release = threading.Event()
    started = threading.Event()
    reports: list[str] = []

    def worker(message: LogMessage) -> None:
        started.set()
        release.wait(timeout=2.0)

    adapter = QueueAdapter(worker=worker, diagnostic=lambda name, payload: reports.append(name))
    adapter.start()
    adapter.put(build_message(0))
    assert started.wait(timeout=1.0)

    with pytest.raises(DrainTimeoutError):
        adapter.stop(timeout=0.05)
    assert reports == ["queue_shutdown_timeout"]

    release.set()
    adapter.stop(timeout=2.0)
    assert adapter.running is False
