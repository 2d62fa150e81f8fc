"""
回合控制器
Round Controller - 驱动一个回合：倒计时、等待手势、判定

所有公开操作和计时器回调都只是把事件放进队列，由唯一的消费者
（分发线程，或同步调用 dispatch_pending 的线程）按顺序处理，回合
状态因此只在一个线程上被修改。
"""
import queue
import threading
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional
from .countdown import CountdownTimer, ThreadedCountdownTimer
from .game_logic import Move, Outcome, GameRules, MoveSelector, Scoreboard, RoundRecord
from .gesture_recognition import ClassificationResult, ClassifierError, ClassifierListener
from .presentation import RoundPresenter, outcome_text, DEFAULT_LANGUAGE
from .state_machine import RoundState, RoundStateMachine
from ..utils.exceptions import GameException
from ..utils.logger import setup_logger

logger = setup_logger("RPS.RoundController")


@dataclass(frozen=True)
class Round:
    """回合快照，每次状态变化都会替换为新对象"""
    round_id: int = 0
    state: RoundState = RoundState.IDLE
    machine_move: Move = Move.UNDEFINED
    last_observed_player_move: Move = Move.UNDEFINED
    outcome: Optional[Outcome] = None
    countdown_remaining: int = 0


# 控制器内部事件
@dataclass(frozen=True)
class _StartRound:
    pass


@dataclass(frozen=True)
class _AbortRound:
    pass


@dataclass(frozen=True)
class _Classification:
    result: ClassificationResult


@dataclass(frozen=True)
class _ClassifierFailed:
    error: ClassifierError


@dataclass(frozen=True)
class _CountdownTick:
    round_id: int
    remaining: int


@dataclass(frozen=True)
class _CountdownFinished:
    round_id: int


@dataclass(frozen=True)
class _GestureTimeout:
    round_id: int


_STOP = object()


class RoundController(ClassifierListener):
    """回合控制器，同时作为分类器的结果监听器"""

    def __init__(self,
                 timer_factory: Callable[[], CountdownTimer] = ThreadedCountdownTimer,
                 move_selector: Optional[MoveSelector] = None,
                 presenter: Optional[RoundPresenter] = None,
                 scoreboard: Optional[Scoreboard] = None,
                 countdown_ticks: int = 3,
                 tick_interval: float = 1.0,
                 gesture_timeout: Optional[float] = 5.0,
                 language: str = DEFAULT_LANGUAGE,
                 label_aliases: Optional[Dict[str, str]] = None):
        """
        初始化回合控制器

        Args:
            timer_factory: 创建倒计时器的工厂
            move_selector: 机器出拳选择器
            presenter: 界面回调
            scoreboard: 比分板
            countdown_ticks: 倒计时拍数
            tick_interval: 每拍间隔（秒）
            gesture_timeout: 倒计时结束后等待手势的最长秒数，None 表示一直等待
            language: 结果文本语言
            label_aliases: 分类器标签别名表
        """
        if countdown_ticks < 1:
            raise ValueError("countdown_ticks 必须至少为 1")
        if tick_interval < 0:
            raise ValueError("tick_interval 不能为负数")
        if gesture_timeout is not None and gesture_timeout <= 0:
            raise ValueError("gesture_timeout 必须为正数或 None")

        self.move_selector = move_selector or MoveSelector()
        self.presenter = presenter or RoundPresenter()
        self.scoreboard = scoreboard or Scoreboard()
        self.countdown_ticks = countdown_ticks
        self.tick_interval = tick_interval
        self.gesture_timeout = gesture_timeout
        self.language = language
        self.label_aliases = dict(label_aliases or {})

        self._countdown = timer_factory()
        self._timeout_timer = timer_factory()
        self._state_machine = RoundStateMachine(initial_state=RoundState.IDLE)
        self._round = Round()
        self._events: "queue.Queue" = queue.Queue()
        self._dispatcher: Optional[threading.Thread] = None
        self._consumer_lock = threading.Lock()
        self.ignored_events = 0

        logger.info(f"回合控制器初始化完成: 倒计时 {countdown_ticks} 拍 x {tick_interval}s, "
                    f"手势超时 {gesture_timeout}")

    # ------------------------------------------------------------------
    # 公开操作（任意线程安全调用）

    def start_round(self):
        """开始新回合；当前回合未结束时忽略"""
        self._post(_StartRound())

    def abort_round(self):
        """中止当前回合并回到空闲状态，已在途的事件全部作废"""
        self._post(_AbortRound())

    def on_classification(self, result: ClassificationResult):
        """收到一帧分类结果；只在等待手势时生效，第一帧有效结果决定本回合"""
        self._post(_Classification(result))

    def on_classifier_error(self, error: ClassifierError):
        """分类器报告错误，原样交给界面，不改变回合状态"""
        self._post(_ClassifierFailed(error))

    # ClassifierListener
    def on_results(self, result: ClassificationResult):
        self.on_classification(result)

    def on_error(self, error: ClassifierError):
        self.on_classifier_error(error)

    @property
    def round(self) -> Round:
        """当前回合快照"""
        return self._round

    @property
    def state(self) -> RoundState:
        return self._round.state

    # ------------------------------------------------------------------
    # 事件分发

    def start(self):
        """启动事件分发线程"""
        if self._dispatcher is not None and self._dispatcher.is_alive():
            logger.warning("分发线程已在运行")
            return
        self._dispatcher = threading.Thread(target=self._dispatch_loop,
                                            name="rps-round-dispatcher", daemon=True)
        self._dispatcher.start()
        logger.info("回合事件分发线程已启动")

    def stop(self, timeout: Optional[float] = 5.0):
        """停止分发线程，取消计时器"""
        self._countdown.cancel()
        self._timeout_timer.cancel()
        if self._dispatcher is None:
            return
        self._events.put(_STOP)
        self._dispatcher.join(timeout)
        if self._dispatcher.is_alive():
            logger.warning("分发线程未在超时时间内结束")
        self._dispatcher = None
        logger.info("回合事件分发线程已停止")

    def is_dispatching(self) -> bool:
        return self._dispatcher is not None and self._dispatcher.is_alive()

    def dispatch_pending(self) -> int:
        """
        在当前线程同步处理所有待处理事件（未启动分发线程时使用）

        Returns:
            int: 处理的事件数

        Raises:
            GameException: 分发线程正在运行
        """
        if self.is_dispatching():
            raise GameException("分发线程运行时不能同步分发事件", game_state=str(self.state))

        processed = 0
        with self._consumer_lock:
            while True:
                try:
                    event = self._events.get_nowait()
                except queue.Empty:
                    break
                if event is _STOP:
                    continue
                self._process(event)
                processed += 1
        return processed

    def _dispatch_loop(self):
        with self._consumer_lock:
            while True:
                event = self._events.get()
                if event is _STOP:
                    break
                self._process(event)

    def _post(self, event):
        self._events.put(event)

    def _process(self, event):
        try:
            if isinstance(event, _Classification):
                self._handle_classification(event)
            elif isinstance(event, _CountdownTick):
                self._handle_tick(event)
            elif isinstance(event, _CountdownFinished):
                self._handle_countdown_finished(event)
            elif isinstance(event, _StartRound):
                self._handle_start()
            elif isinstance(event, _AbortRound):
                self._handle_abort()
            elif isinstance(event, _ClassifierFailed):
                self._handle_error(event)
            elif isinstance(event, _GestureTimeout):
                self._handle_gesture_timeout(event)
            else:
                logger.warning(f"未知事件: {event!r}")
        except Exception as e:
            logger.error(f"处理事件 {type(event).__name__} 异常: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # 事件处理（只在消费者线程上执行）

    def _handle_start(self):
        if not self._state_machine.is_in_state(RoundState.IDLE, RoundState.JUDGED):
            logger.debug(f"回合进行中，忽略开始请求: {self.state}")
            self.ignored_events += 1
            return

        self._timeout_timer.cancel()
        round_id = self._round.round_id + 1

        # 计时器启动成功后才进入倒计时，失败时保持原状态，可以再次开始
        try:
            self._countdown.start(
                self.countdown_ticks,
                self.tick_interval,
                on_tick=lambda remaining: self._post(_CountdownTick(round_id, remaining)),
                on_finish=lambda: self._post(_CountdownFinished(round_id))
            )
        except Exception as e:
            logger.error(f"倒计时启动失败，回合 {round_id} 未开始: {e}", exc_info=True)
            return

        if not self._enter(RoundState.COUNTING_DOWN):
            self._countdown.cancel()
            return
        self._round = Round(round_id=round_id, state=RoundState.COUNTING_DOWN,
                            countdown_remaining=self.countdown_ticks)
        logger.info(f"回合 {round_id} 开始倒计时")
        self._notify('on_state_changed', RoundState.COUNTING_DOWN)

    def _handle_tick(self, event: _CountdownTick):
        if not self._is_current(event.round_id, RoundState.COUNTING_DOWN):
            return
        self._round = replace(self._round, countdown_remaining=event.remaining)
        self._notify('on_countdown', event.remaining)

    def _handle_countdown_finished(self, event: _CountdownFinished):
        if not self._is_current(event.round_id, RoundState.COUNTING_DOWN):
            return

        machine_move = self.move_selector.choose()
        if not self._enter(RoundState.AWAITING_GESTURE):
            return
        self._round = replace(self._round,
                              state=RoundState.AWAITING_GESTURE,
                              machine_move=machine_move,
                              last_observed_player_move=Move.UNDEFINED,
                              countdown_remaining=0)
        logger.info(f"回合 {event.round_id} 倒计时结束，机器出拳: {machine_move}")
        self._notify('on_machine_move', machine_move)
        self._notify('on_state_changed', RoundState.AWAITING_GESTURE)

        if self.gesture_timeout is not None:
            round_id = event.round_id
            self._timeout_timer.start(
                1,
                self.gesture_timeout,
                on_tick=lambda remaining: None,
                on_finish=lambda: self._post(_GestureTimeout(round_id))
            )

    def _handle_classification(self, event: _Classification):
        if not self._state_machine.is_in_state(RoundState.AWAITING_GESTURE):
            self.ignored_events += 1
            return

        label = event.result.top_label()
        player_move = Move.from_label(label, self.label_aliases)
        logger.debug(f"采用分类结果: {label} -> {player_move}")
        self._judge(player_move)

    def _handle_gesture_timeout(self, event: _GestureTimeout):
        if not self._is_current(event.round_id, RoundState.AWAITING_GESTURE):
            return
        logger.info(f"回合 {event.round_id} 等待手势超时")
        self._judge(Move.UNDEFINED)

    def _handle_error(self, event: _ClassifierFailed):
        logger.warning(f"分类器错误: {event.error}")
        self._notify('on_error', event.error.message, event.error.code)

    def _handle_abort(self):
        self._countdown.cancel()
        self._timeout_timer.cancel()
        if self._state_machine.is_in_state(RoundState.IDLE):
            return

        if not self._enter(RoundState.IDLE):
            return
        self._round = Round(round_id=self._round.round_id)
        logger.info(f"回合 {self._round.round_id} 已中止")
        self._notify('on_state_changed', RoundState.IDLE)

    def _judge(self, player_move: Move):
        machine_move = self._round.machine_move
        outcome = GameRules.judge(player_move, machine_move)

        self._timeout_timer.cancel()
        if not self._enter(RoundState.JUDGED):
            return
        self._round = replace(self._round,
                              state=RoundState.JUDGED,
                              last_observed_player_move=player_move,
                              outcome=outcome)

        self.scoreboard.record(RoundRecord(
            round_id=self._round.round_id,
            player_move=player_move,
            machine_move=machine_move,
            outcome=outcome
        ))
        self._notify('on_outcome', outcome, outcome_text(outcome, self.language), player_move)
        self._notify('on_state_changed', RoundState.JUDGED)

    def _enter(self, state: RoundState) -> bool:
        """状态机转换，被拒绝时记录错误，调用方不再更新回合快照"""
        if self._state_machine.transition_to(state):
            return True
        logger.error(f"拒绝状态转换: {self.state} -> {state}")
        return False

    def _is_current(self, round_id: int, state: RoundState) -> bool:
        """事件是否属于当前回合且状态匹配，过期事件计入忽略数"""
        if round_id == self._round.round_id and self._state_machine.is_in_state(state):
            return True
        logger.debug(f"丢弃过期事件: 回合 {round_id}, 当前回合 {self._round.round_id} ({self.state})")
        self.ignored_events += 1
        return False

    def _notify(self, method: str, *args):
        try:
            getattr(self.presenter, method)(*args)
        except Exception as e:
            logger.error(f"界面回调 {method} 异常: {e}", exc_info=True)
