"""
错误处理测试
Error Handler Tests
"""
from rps_camera.utils.error_handler import ErrorHandler
from rps_camera.utils.exceptions import (
    CameraException, HardwareException, ClassifierException, GameException,
    ConfigurationException
)


def test_known_exceptions_are_handled():
    handler = ErrorHandler()
    assert handler.handle(CameraException("no device", error_code=2), "连接摄像头")
    assert handler.handle(HardwareException("bus error", hardware_type="camera"))
    assert handler.handle(ClassifierException("model missing"))
    assert handler.handle(GameException("bad state", game_state="IDLE"))
    assert handler.handle(ConfigurationException("bad key", config_key="game"))


def test_unknown_exception_uses_generic_handler():
    handler = ErrorHandler()
    assert not handler.handle(RuntimeError("unexpected"))


def test_registered_handler_takes_precedence():
    handler = ErrorHandler()
    seen = []
    handler.register_handler(HardwareException, lambda exc, ctx: seen.append((exc.message, ctx)))

    # CameraException 是 HardwareException 的子类，新注册的处理函数优先匹配
    assert handler.handle(CameraException("unplugged"), "run")
    assert seen == [("unplugged", "run")]


def test_failing_handler_reports_not_handled():
    handler = ErrorHandler()

    def broken(exc, ctx):
        raise ValueError("handler bug")

    handler.register_handler(GameException, broken)
    assert not handler.handle(GameException("x"))


def test_classifier_exception_to_error():
    error = ClassifierException("GPU init failed", ClassifierException.GPU_ERROR).to_error()
    assert error.message == "GPU init failed"
    assert error.code == 1
    assert ClassifierException("other").to_error().code == ClassifierException.OTHER_ERROR
