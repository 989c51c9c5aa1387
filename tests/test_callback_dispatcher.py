import threading

import pytest

from minefield.leaderboard.dispatcher import CallbackDispatcher


@pytest.fixture
def dispatcher():
    d = CallbackDispatcher(max_workers=2)
    yield d
    d.shutdown()


def test_callbacks_only_run_on_pump(dispatcher):
    calls = []
    future = dispatcher.submit(lambda: 42, lambda error, result: calls.append((error, result)))
    assert future.result(timeout=5) == 42
    assert calls == []

    assert dispatcher.pump() == 1
    assert calls == [(None, 42)]
    assert dispatcher.pump() == 0


def test_callbacks_run_on_pumping_thread(dispatcher):
    threads = []
    future = dispatcher.submit(lambda: None, lambda error, result: threads.append(threading.current_thread()))
    future.result(timeout=5)
    dispatcher.pump()
    assert threads == [threading.current_thread()]


def test_job_errors_reach_callback(dispatcher):
    calls = []

    def boom():
        raise RuntimeError("offline")

    future = dispatcher.submit(boom, lambda error, result: calls.append((error, result)))
    with pytest.raises(RuntimeError):
        future.result(timeout=5)
    dispatcher.pump()
    assert len(calls) == 1
    assert isinstance(calls[0][0], RuntimeError)
    assert calls[0][1] is None


def test_failing_callback_does_not_stop_pump(dispatcher):
    calls = []

    def bad(error, result):
        raise ValueError("bad callback")

    dispatcher.submit(lambda: 1, bad).result(timeout=5)
    dispatcher.submit(lambda: 2, lambda error, result: calls.append(result)).result(timeout=5)
    assert dispatcher.pump() == 2
    assert calls == [2]


def test_defer_delivers_without_running_work(dispatcher):
    calls = []
    error = ValueError("refused")
    future = dispatcher.defer(lambda e, r: calls.append(e), error)
    assert future.exception() is error
    dispatcher.pump()
    assert calls == [error]
