"""
应用程序主类
Application Main Class
"""
import signal
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional
import cv2
import numpy as np
from .game import (
    RoundController, QueuePresenter, UiUpdateKind, Move, MoveSelector, Outcome,
    RoundState, Scoreboard, CountdownTimer, ThreadedCountdownTimer
)
from .game.gesture_recognition import FrameClassifier, FrameAnalyzer, ClassifierFactory
from .hardware import CameraBase, HardwareFactory
from .utils.config_loader import ConfigLoader, DEFAULT_CONFIG, merge_config
from .utils.error_handler import global_error_handler
from .utils.exceptions import CameraException, ClassifierException, ConfigurationException
from .utils.logger import setup_logger, setup_logger_from_config

logger = setup_logger("RPS.App")

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"

KEY_ESC = 27
KEY_ENTER = 13
ERROR_DISPLAY_SECONDS = 2.0


@dataclass
class ViewState:
    """界面线程持有的显示状态"""
    state: RoundState = RoundState.IDLE
    countdown: Optional[int] = None
    machine_move: Optional[Move] = None
    player_move: Optional[Move] = None
    outcome: Optional[Outcome] = None
    status_text: Optional[str] = None
    error_message: Optional[str] = None
    error_until: float = 0.0
    frozen_frame: Optional[np.ndarray] = None


class Application:
    """应用程序主类：管理一次游戏会话的资源和界面循环"""

    WINDOW_NAME = "Rock Paper Scissors"

    def __init__(self, config_path: Optional[str] = None,
                 overrides: Optional[Dict[str, Any]] = None,
                 camera: Optional[CameraBase] = None,
                 classifier: Optional[FrameClassifier] = None,
                 timer_factory: Callable[[], CountdownTimer] = ThreadedCountdownTimer,
                 move_selector: Optional[MoveSelector] = None):
        """
        初始化应用程序（不申请任何资源，见 start_session）

        Args:
            config_path: 配置文件路径，None 时使用 config/config.yaml（不存在则用默认配置）
            overrides: 覆盖配置（命令行参数）
            camera: 预先创建的摄像头（可选）
            classifier: 预先创建的分类器（可选）
            timer_factory: 倒计时器工厂
            move_selector: 机器出拳选择器
        """
        self.config_path = config_path
        self.overrides = overrides or {}
        self.config: Dict[str, Any] = {}

        self.camera = camera
        self.classifier = classifier
        self.timer_factory = timer_factory
        self.move_selector = move_selector

        self.presenter = QueuePresenter()
        self.scoreboard = Scoreboard()
        self.controller: Optional[RoundController] = None
        self.analyzer: Optional[FrameAnalyzer] = None

        self.view = ViewState()
        self.last_frame: Optional[np.ndarray] = None
        self.is_running = False
        self.is_paused = False
        self.should_exit = False

    # ------------------------------------------------------------------
    # 会话生命周期

    def load_config(self) -> Dict[str, Any]:
        """
        加载配置：默认值 <- 配置文件 <- 覆盖参数

        Raises:
            ConfigurationException: 配置文件无法解析
        """
        path = self.config_path
        if path is None and DEFAULT_CONFIG_PATH.exists():
            path = str(DEFAULT_CONFIG_PATH)

        if path is None:
            logger.info("未找到配置文件，使用默认配置")
            config = merge_config(DEFAULT_CONFIG, {})
        else:
            try:
                config = ConfigLoader.load_with_defaults(path)
            except FileNotFoundError as e:
                raise ConfigurationException(str(e), config_key=path) from e

        self.config = merge_config(config, self.overrides)
        setup_logger_from_config(ConfigLoader.get_logging_config(self.config))
        return self.config

    def start_session(self) -> bool:
        """
        开始会话：加载配置、连接摄像头、加载模型、启动后台线程

        摄像头或模型不可用时会话无法开始。

        Returns:
            bool: 是否成功
        """
        logger.info("=" * 50)
        logger.info("开始初始化游戏会话")
        logger.info("=" * 50)

        try:
            self.load_config()
            self._initialize_camera()
            self._initialize_controller()
            self._initialize_classifier()
        except (ConfigurationException, CameraException, ClassifierException) as e:
            global_error_handler.handle(e, "初始化会话")
            self.end_session()
            return False

        self.analyzer = FrameAnalyzer(self.classifier)
        self.analyzer.start()
        self.controller.start()
        self.is_running = True
        self.is_paused = False

        logger.info("游戏会话初始化成功")
        return True

    def _initialize_camera(self):
        """创建并连接摄像头"""
        if self.camera is None:
            camera_config = ConfigLoader.get_camera_config(self.config)
            try:
                self.camera = HardwareFactory.create_camera_from_config(camera_config)
            except (ValueError, TypeError) as e:
                raise ConfigurationException(f"摄像头配置无效: {e}", config_key='camera') from e

        if not self.camera.connect():
            raise CameraException("摄像头连接失败")
        logger.info(f"✓ 摄像头连接成功: {self.camera.get_status()}")

    def _initialize_controller(self):
        """创建回合控制器"""
        game_config = ConfigLoader.get_game_config(self.config)
        classifier_config = ConfigLoader.get_classifier_config(self.config)
        try:
            self.controller = RoundController(
                timer_factory=self.timer_factory,
                move_selector=self.move_selector,
                presenter=self.presenter,
                scoreboard=self.scoreboard,
                countdown_ticks=int(game_config.get('countdown_ticks', 3)),
                tick_interval=float(game_config.get('tick_interval', 1.0)),
                gesture_timeout=game_config.get('gesture_timeout', 5.0),
                language=game_config.get('language', 'en'),
                label_aliases=classifier_config.get('label_aliases')
            )
        except (ValueError, TypeError) as e:
            raise ConfigurationException(f"游戏配置无效: {e}", config_key='game') from e

    def _initialize_classifier(self):
        """创建并加载手势分类器，结果交给回合控制器"""
        if self.classifier is None:
            classifier_config = ConfigLoader.get_classifier_config(self.config)
            try:
                self.classifier = ClassifierFactory.create_from_config(classifier_config)
            except ValueError as e:
                raise ConfigurationException(str(e), config_key='classifier.type') from e

        self.classifier.set_listener(self.controller)
        self.classifier.setup()
        logger.info(f"✓ 手势分类器初始化成功: {self.classifier.get_info()}")

    def pause(self):
        """暂停：中止当前回合并释放模型"""
        if not self.is_running or self.is_paused:
            return
        self.controller.abort_round()
        self.classifier.close()
        self.is_paused = True
        logger.info("会话已暂停")

    def resume(self) -> bool:
        """
        恢复：模型已释放时重新加载

        Returns:
            bool: 是否成功
        """
        if not self.is_running or not self.is_paused:
            return True
        try:
            if self.classifier.is_closed():
                self.classifier.setup()
        except ClassifierException as e:
            global_error_handler.handle(e, "恢复会话")
            self.presenter.on_error(e.message, e.error_code)
            return False
        self.is_paused = False
        logger.info("会话已恢复")
        return True

    def end_session(self):
        """结束会话并释放所有资源"""
        logger.info("开始清理资源...")

        if self.controller is not None:
            self.controller.stop()
        if self.analyzer is not None:
            self.analyzer.stop()
        if self.classifier is not None and not self.classifier.is_closed():
            self.classifier.close()
        if self.camera is not None and self.camera.is_connected():
            self.camera.disconnect()
            logger.info("✓ 摄像头已断开")

        self.is_running = False
        stats = self.scoreboard.get_statistics()
        logger.info(f"统计信息: 总回合={stats.total_rounds}, 胜={stats.wins}, "
                    f"负={stats.losses}, 平={stats.draws}, 无效={stats.invalid_rounds}, "
                    f"胜率={stats.get_win_rate():.2%}")
        logger.info("资源清理完成")

    # ------------------------------------------------------------------
    # 界面线程

    def process_frame(self, frame: np.ndarray):
        """保存用于显示的最新帧，并交给帧分析器"""
        self.last_frame = frame
        if self.analyzer is not None and not self.is_paused:
            self.analyzer.submit_frame(frame)

    def handle_ui_updates(self, now: Optional[float] = None):
        """取出控制器产生的界面消息并更新显示状态"""
        now = time.monotonic() if now is None else now
        view = self.view

        for update in self.presenter.drain():
            if update.kind == UiUpdateKind.STATE:
                view.state = update.payload
                if update.payload == RoundState.COUNTING_DOWN:
                    view.machine_move = None
                    view.player_move = None
                    view.outcome = None
                    view.status_text = None
                    view.frozen_frame = None
                else:
                    view.countdown = None
            elif update.kind == UiUpdateKind.COUNTDOWN:
                view.countdown = update.payload
            elif update.kind == UiUpdateKind.MACHINE_MOVE:
                view.machine_move = update.payload
                if self.last_frame is not None:
                    view.frozen_frame = self.last_frame.copy()
            elif update.kind == UiUpdateKind.OUTCOME:
                view.outcome, view.status_text, view.player_move = update.payload
            elif update.kind == UiUpdateKind.ERROR:
                message, code = update.payload
                view.error_message = message
                view.error_until = now + ERROR_DISPLAY_SECONDS
                logger.warning(f"分类器错误 [代码: {code}]: {message}")

    def handle_key(self, key: int) -> bool:
        """
        处理按键

        Args:
            key: cv2.waitKey 返回值（已与 0xFF 按位与）

        Returns:
            bool: 是否继续运行
        """
        if key in (ord('q'), KEY_ESC):
            return False
        if key in (ord(' '), KEY_ENTER) and not self.is_paused:
            self.controller.start_round()
        elif key == ord('p'):
            if self.is_paused:
                self.resume()
            else:
                self.pause()
        elif key == ord('r'):
            self.scoreboard.reset()
        return True

    def render(self, frame: np.ndarray, now: Optional[float] = None) -> np.ndarray:
        """在画面上叠加倒计时、机器出拳、结果和比分"""
        now = time.monotonic() if now is None else now
        view = self.view
        display = frame.copy()
        height, width = display.shape[:2]

        if view.frozen_frame is not None:
            thumb_w, thumb_h = width // 4, height // 4
            thumb = cv2.resize(view.frozen_frame, (thumb_w, thumb_h))
            display[10:10 + thumb_h, width - thumb_w - 10:width - 10] = thumb

        if view.state == RoundState.COUNTING_DOWN and view.countdown is not None:
            cv2.putText(display, str(view.countdown), (width // 2 - 40, height // 2 + 40),
                        cv2.FONT_HERSHEY_SIMPLEX, 4, (0, 255, 255), 8)

        if view.machine_move is not None:
            cv2.putText(display, f"Machine: {view.machine_move.asset_name}", (10, 30),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.9, (255, 200, 0), 2)

        if view.state == RoundState.AWAITING_GESTURE:
            cv2.putText(display, "Show your hand!", (10, 65),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.9, (0, 255, 0), 2)
        elif view.outcome is not None:
            player = view.player_move.name.lower() if view.player_move else "?"
            cv2.putText(display, f"You: {player}  ->  {view.status_text}", (10, 65),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.9, (0, 255, 0), 2)

        stats = self.scoreboard.get_statistics()
        score = f"W {stats.wins}  L {stats.losses}  D {stats.draws}  X {stats.invalid_rounds}"
        cv2.putText(display, score, (10, height - 50),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)

        if self.is_paused:
            hint = "PAUSED - P to resume, Q to quit"
        elif view.state in (RoundState.IDLE, RoundState.JUDGED):
            hint = "SPACE to play, P to pause, Q to quit"
        else:
            hint = ""
        if hint:
            cv2.putText(display, hint, (10, height - 20),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)

        if view.error_message and now < view.error_until:
            cv2.putText(display, view.error_message[:60], (10, 100),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 0, 255), 2)

        return display

    def _signal_handler(self, signum, frame):
        """信号处理函数"""
        logger.info(f"收到信号 {signum}，准备退出")
        self.should_exit = True

    def run(self):
        """运行界面主循环，直到用户退出"""
        if not self.is_running:
            logger.error("会话未初始化，无法运行")
            return

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        logger.info("界面主循环启动")
        try:
            while not self.should_exit:
                frame = self.camera.capture_frame()
                if frame is None:
                    time.sleep(0.01)
                    continue

                self.process_frame(frame)
                self.handle_ui_updates()
                cv2.imshow(self.WINDOW_NAME, self.render(frame))

                if not self.handle_key(cv2.waitKey(1) & 0xFF):
                    break
        finally:
            cv2.destroyAllWindows()
            self.end_session()

    def start(self) -> bool:
        """
        启动应用程序

        Returns:
            bool: 启动是否成功
        """
        if not self.start_session():
            logger.error("应用程序启动失败")
            return False
        self.run()
        return True
