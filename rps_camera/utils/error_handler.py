"""
错误处理工具模块
Error Handler Utility Module
"""
import traceback
from typing import Optional, Callable, Dict
from .exceptions import (
    HardwareException, CameraException, ClassifierException,
    GameException, ConfigurationException
)
from .logger import setup_logger

logger = setup_logger("RPS.ErrorHandler")


class ErrorHandler:
    """错误处理器类，按异常类型分派到对应的处理函数"""

    def __init__(self):
        """初始化错误处理器"""
        self.error_callbacks: Dict[type, Callable] = {}
        self.setup_default_handlers()

    def setup_default_handlers(self):
        """设置默认错误处理函数（子类在前，按注册顺序匹配）"""
        self.error_callbacks[CameraException] = self._handle_camera_error
        self.error_callbacks[HardwareException] = self._handle_hardware_error
        self.error_callbacks[ClassifierException] = self._handle_classifier_error
        self.error_callbacks[GameException] = self._handle_game_error
        self.error_callbacks[ConfigurationException] = self._handle_config_error

    def register_handler(self, exception_type: type, handler: Callable):
        """
        注册错误处理函数

        Args:
            exception_type: 异常类型
            handler: 处理函数，签名为 handler(exception, context)
        """
        # 新注册的处理函数优先于默认处理函数
        self.error_callbacks = {exception_type: handler, **{
            k: v for k, v in self.error_callbacks.items() if k is not exception_type
        }}
        logger.debug(f"注册错误处理函数: {exception_type.__name__}")

    def handle(self, exception: Exception, context: Optional[str] = None) -> bool:
        """
        处理异常

        Args:
            exception: 异常对象
            context: 上下文信息

        Returns:
            bool: 是否由已注册的处理函数处理
        """
        error_msg = "异常发生"
        if context:
            error_msg += f" (上下文: {context})"
        error_msg += f": {exception}"
        logger.error(error_msg)

        handler = None
        for exc_type, handler_func in self.error_callbacks.items():
            if isinstance(exception, exc_type):
                handler = handler_func
                break

        if handler is None:
            self._handle_generic_error(exception, context)
            return False

        try:
            handler(exception, context)
            return True
        except Exception as e:
            logger.error(f"错误处理函数执行异常: {e}", exc_info=True)
            return False

    def _handle_hardware_error(self, exception: HardwareException, context: Optional[str]):
        """处理硬件错误"""
        logger.error(f"硬件错误 [{exception.hardware_type}]: {exception.message}")

    def _handle_camera_error(self, exception: CameraException, context: Optional[str]):
        """处理摄像头错误"""
        logger.error(f"摄像头错误 [代码: {exception.error_code}]: {exception.message}")

    def _handle_classifier_error(self, exception: ClassifierException, context: Optional[str]):
        """处理分类器错误"""
        logger.warning(f"手势分类器错误 [代码: {exception.error_code}]: {exception.message}")

    def _handle_game_error(self, exception: GameException, context: Optional[str]):
        """处理游戏逻辑错误"""
        logger.error(f"游戏逻辑错误 [状态: {exception.game_state}]: {exception.message}")

    def _handle_config_error(self, exception: ConfigurationException, context: Optional[str]):
        """处理配置错误"""
        logger.error(f"配置错误 [键: {exception.config_key}]: {exception.message}")

    def _handle_generic_error(self, exception: Exception, context: Optional[str]):
        """处理通用错误"""
        logger.error(f"未处理的异常: {type(exception).__name__}: {exception}")
        logger.debug("".join(traceback.format_exception(
            type(exception), exception, exception.__traceback__)))


# 全局错误处理器实例
global_error_handler = ErrorHandler()
