"""
测试公共工具
Shared test fixtures and fakes
"""
import sys
from pathlib import Path
from typing import List

import numpy as np
import pytest

# 添加项目根目录到Python路径（未安装时也可直接运行测试）
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rps_camera.game import (
    RoundController, RoundPresenter, CountdownTimer, FixedMoveSelector, Move, Scoreboard
)
from rps_camera.hardware import CameraBase


class FakeTimer(CountdownTimer):
    """手动驱动的倒计时器：记录 start 参数，由测试决定何时触发回调"""

    def __init__(self):
        self.starts = []
        self.cancel_count = 0
        self.active = False
        self.ticks = 0
        self.on_tick = None
        self.on_finish = None

    def start(self, ticks, interval, on_tick, on_finish):
        self.starts.append((ticks, interval))
        self.ticks = ticks
        self.on_tick = on_tick
        self.on_finish = on_finish
        self.active = True

    def cancel(self):
        self.active = False
        self.cancel_count += 1

    def fire_tick(self, remaining):
        self.on_tick(remaining)

    def finish(self):
        self.on_finish()

    def run_all(self):
        """依次触发全部拍和结束回调（不检查是否已取消，用于模拟在途回调）"""
        for remaining in range(self.ticks, 0, -1):
            self.on_tick(remaining)
        self.on_finish()


class FakeTimerFactory:
    """记录创建的计时器：控制器先创建倒计时器，再创建手势超时计时器"""

    def __init__(self):
        self.timers: List[FakeTimer] = []

    def __call__(self) -> FakeTimer:
        timer = FakeTimer()
        self.timers.append(timer)
        return timer

    @property
    def countdown(self) -> FakeTimer:
        return self.timers[0]

    @property
    def timeout(self) -> FakeTimer:
        return self.timers[1]


class RecordingPresenter(RoundPresenter):
    """记录所有界面回调"""

    def __init__(self):
        self.calls = []

    def on_state_changed(self, state):
        self.calls.append(('state', state))

    def on_countdown(self, remaining):
        self.calls.append(('countdown', remaining))

    def on_machine_move(self, move):
        self.calls.append(('machine_move', move))

    def on_outcome(self, outcome, status_text, player_move):
        self.calls.append(('outcome', outcome, status_text, player_move))

    def on_error(self, message, code):
        self.calls.append(('error', message, code))

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def timers():
    return FakeTimerFactory()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def make_controller(timers, presenter):
    """按机器出拳创建使用假计时器的控制器"""

    def _make(machine_move=Move.ROCK, **kwargs):
        kwargs.setdefault('scoreboard', Scoreboard())
        return RoundController(
            timer_factory=timers,
            move_selector=FixedMoveSelector(machine_move),
            presenter=presenter,
            **kwargs
        )

    return _make


def advance_to_awaiting(controller, timers):
    """开始回合并走完倒计时，停在等待手势状态"""
    controller.start_round()
    controller.dispatch_pending()
    timers.countdown.run_all()
    controller.dispatch_pending()


class FakeCamera(CameraBase):
    """返回固定画面的摄像头"""

    def __init__(self, width=64, height=48, fail_connect=False):
        self.width = width
        self.height = height
        self.fail_connect = fail_connect
        self.connected = False

    def connect(self):
        self.connected = not self.fail_connect
        return self.connected

    def disconnect(self):
        self.connected = False
        return True

    def is_connected(self):
        return self.connected

    def capture_frame(self):
        if not self.connected:
            return None
        return np.zeros((self.height, self.width, 3), dtype=np.uint8)

    def get_resolution(self):
        return (self.width, self.height)
