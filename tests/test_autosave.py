"""Debounced saver behaviour."""

import threading
import time

import pytest

from app.client.autosave import DebouncedSaver

pytestmark = pytest.mark.unit


def test_burst_of_triggers_fires_once():
    fired = threading.Event()
    calls = []

    def action():
        calls.append(time.monotonic())
        fired.set()

    saver = DebouncedSaver(action, delay=0.05)
    for _ in range(5):
        saver.schedule()

    assert fired.wait(2.0)
    time.sleep(0.15)
    assert len(calls) == 1
    assert not saver.pending
    saver.close()


def test_flush_runs_pending_action_immediately():
    calls = []
    saver = DebouncedSaver(lambda: calls.append(1), delay=60)
    saver.schedule()

    assert saver.flush() is True
    assert calls == [1]
    assert saver.flush() is False
    saver.close()


def test_cancel_drops_pending_action():
    calls = []
    saver = DebouncedSaver(lambda: calls.append(1), delay=0.02)
    saver.schedule()
    assert saver.cancel() is True
    time.sleep(0.1)
    assert calls == []
    saver.close()


def test_close_cancels_and_ignores_later_triggers():
    calls = []
    saver = DebouncedSaver(lambda: calls.append(1), delay=0.02)
    saver.schedule()
    saver.close()
    saver.schedule()
    time.sleep(0.1)
    assert calls == []
    assert saver.closed
    assert not saver.pending


def test_failing_action_is_logged_not_raised(caplog):
    def boom():
        raise RuntimeError("network down")

    saver = DebouncedSaver(boom, delay=60)
    saver.schedule()
    assert saver.flush() is True
    assert "autosave: action failed" in caplog.text
    saver.close()
