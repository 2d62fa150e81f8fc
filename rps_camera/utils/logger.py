"""
日志工具模块
Logger Utility Module
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

# 所有模块日志记录器的公共前缀
ROOT_LOGGER_NAME = "RPS"
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_log_level(level_str: str) -> int:
    """
    从字符串获取日志级别

    Args:
        level_str: 日志级别字符串（DEBUG, INFO, WARNING, ERROR, CRITICAL）

    Returns:
        int: 日志级别，无法识别时返回 INFO
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    return level_map.get(str(level_str).upper(), logging.INFO)


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    设置日志记录器

    子记录器（如 "RPS.RoundController"）不挂处理器，消息向上传递给
    "RPS" 根记录器统一输出，这样修改根记录器的级别即可影响所有模块。

    Args:
        name: 日志记录器名称
        log_file: 日志文件路径（可选）
        level: 日志级别
        format_string: 日志格式字符串（可选）

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)

    if name != ROOT_LOGGER_NAME and name.startswith(ROOT_LOGGER_NAME + "."):
        # 确保根记录器已有处理器
        setup_logger(ROOT_LOGGER_NAME, level=level, format_string=format_string)
        if log_file:
            _add_file_handler(logger, log_file, level, format_string)
        return logger

    # 避免重复添加处理器，已配置的级别保持不变（用 set_global_level 修改）
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    # 控制台处理器
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 文件处理器（如果指定）
    if log_file:
        _add_file_handler(logger, log_file, level, format_string)

    return logger


def _add_file_handler(logger: logging.Logger, log_file: str, level: int,
                      format_string: Optional[str] = None):
    """为日志记录器添加文件处理器（同一文件只添加一次）"""
    log_path = Path(log_file)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and \
                Path(handler.baseFilename) == log_path.resolve():
            return

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    logger.addHandler(file_handler)


def setup_logger_from_config(config: Dict[str, Any], name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    从配置字典设置日志记录器

    Args:
        config: 配置字典（包含 level、file、format 键）
        name: 日志记录器名称

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    level = get_log_level(config.get('level', 'INFO'))
    log_file = config.get('file')
    format_string = config.get('format')

    # 级别作用在根记录器上，子记录器继承
    set_global_level(level)
    if log_file:
        _add_file_handler(logging.getLogger(ROOT_LOGGER_NAME), log_file, level, format_string)

    return setup_logger(name=name, level=level, format_string=format_string)


def set_global_level(level: int):
    """
    设置 RPS 根记录器及其处理器的日志级别

    Args:
        level: 日志级别
    """
    root = setup_logger(ROOT_LOGGER_NAME, level=level)
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)
