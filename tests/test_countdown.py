"""
倒计时器测试
Countdown Timer Tests
"""
import threading

import pytest

from rps_camera.game import ThreadedCountdownTimer


def test_ticks_count_down_then_finish():
    ticks = []
    finished = threading.Event()
    timer = ThreadedCountdownTimer()

    timer.start(3, 0.0, on_tick=ticks.append, on_finish=finished.set)

    assert finished.wait(2.0)
    assert ticks == [3, 2, 1]


def test_cancel_prevents_finish():
    ticks = []
    finished = threading.Event()
    timer = ThreadedCountdownTimer()

    timer.start(3, 0.5, on_tick=ticks.append, on_finish=finished.set)
    timer.cancel()

    assert not finished.wait(0.8)
    assert ticks in ([], [3])


def test_restart_cancels_previous_run():
    first_finished = threading.Event()
    second_finished = threading.Event()
    timer = ThreadedCountdownTimer()

    timer.start(2, 0.5, on_tick=lambda r: None, on_finish=first_finished.set)
    timer.start(1, 0.0, on_tick=lambda r: None, on_finish=second_finished.set)

    assert second_finished.wait(2.0)
    assert not first_finished.wait(1.2)


def test_callback_exception_does_not_stop_countdown():
    finished = threading.Event()
    timer = ThreadedCountdownTimer()

    def failing_tick(remaining):
        raise RuntimeError("boom")

    timer.start(2, 0.0, on_tick=failing_tick, on_finish=finished.set)
    assert finished.wait(2.0)


def test_invalid_arguments():
    timer = ThreadedCountdownTimer()
    with pytest.raises(ValueError):
        timer.start(0, 1.0, on_tick=lambda r: None, on_finish=lambda: None)
    with pytest.raises(ValueError):
        timer.start(1, -1.0, on_tick=lambda r: None, on_finish=lambda: None)
    assert not timer.is_running()
