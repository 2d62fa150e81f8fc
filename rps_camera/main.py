"""
剪刀石头布游戏主程序入口
Rock Paper Scissors Game Main Entry
"""
import sys
import argparse
from typing import Any, Dict, List, Optional

from .app import Application
from .game.gesture_recognition.classifier_factory import SUPPORTED_TYPES
from .game.presentation import OUTCOME_TEXTS
from .utils.logger import setup_logger

logger = setup_logger("RPS.Main")


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """把命令行参数转换为覆盖配置"""
    overrides: Dict[str, Any] = {}
    if args.classifier:
        overrides.setdefault('classifier', {})['type'] = args.classifier
    if args.model:
        overrides.setdefault('classifier', {})['model_path'] = args.model
    if args.camera is not None:
        overrides.setdefault('camera', {})['device_id'] = args.camera
    if args.language:
        overrides.setdefault('game', {})['language'] = args.language
    if args.verbose:
        overrides.setdefault('logging', {})['level'] = 'DEBUG'
    return overrides


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='剪刀石头布游戏 (Rock Paper Scissors against the camera)')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='配置文件路径（默认: config/config.yaml）'
    )
    parser.add_argument(
        '--classifier',
        choices=SUPPORTED_TYPES,
        default=None,
        help='手势分类器类型'
    )
    parser.add_argument('--model', type=str, default=None, help='模型文件路径')
    parser.add_argument('--camera', type=int, default=None, help='摄像头设备ID')
    parser.add_argument(
        '--language',
        choices=sorted(OUTCOME_TEXTS),
        default=None,
        help='结果文字语言'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='输出调试日志')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """主函数"""
    args = parse_args(argv)

    logger.info("=" * 50)
    logger.info("剪刀石头布游戏启动")
    logger.info("Rock Paper Scissors Game Starting")
    logger.info("=" * 50)

    app = Application(config_path=args.config, overrides=build_overrides(args))

    try:
        success = app.start()
        if not success:
            logger.error("应用程序启动失败")
            sys.exit(1)
    except KeyboardInterrupt:
        logger.info("用户中断程序")
    except Exception as e:
        logger.error(f"程序异常退出: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("程序退出")


if __name__ == "__main__":
    main()
