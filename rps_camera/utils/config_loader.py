"""
配置加载工具模块
Configuration Loader Utility
"""
import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from .exceptions import ConfigurationException
from .logger import setup_logger

logger = setup_logger("RPS.ConfigLoader")

# 默认配置，配置文件中缺失的键从这里补齐
DEFAULT_CONFIG: Dict[str, Any] = {
    'camera': {
        'type': 'usb_camera',
        'device_id': 0,
        'width': 640,
        'height': 480,
        'fps': 30,
        'mirror': True,
    },
    'classifier': {
        'type': 'yolo',
        'model_path': None,
        'confidence_threshold': 0.5,
        'min_detection_confidence': 0.25,
        'use_huggingface_model': True,
        'device': None,
        'min_hand_detection_confidence': 0.5,
        'min_hand_tracking_confidence': 0.5,
        'min_hand_presence_confidence': 0.5,
        'delegate': 'cpu',
        'label_aliases': {},
    },
    'game': {
        'countdown_ticks': 3,
        'tick_interval': 1.0,
        'gesture_timeout': 5.0,
        'language': 'en',
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    递归合并两个配置字典，override 中的值优先

    Args:
        base: 基础配置
        override: 覆盖配置

    Returns:
        Dict[str, Any]: 合并后的新字典（不修改输入）
    """
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigLoader:
    """配置加载器类"""

    @staticmethod
    def load_config(config_path: str) -> Dict[str, Any]:
        """
        从YAML文件加载配置

        Args:
            config_path: 配置文件路径

        Returns:
            Dict[str, Any]: 配置字典

        Raises:
            FileNotFoundError: 配置文件不存在
            ConfigurationException: YAML解析错误或顶层不是映射
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f"配置文件不存在: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML解析错误: {e}")
            raise ConfigurationException(f"YAML解析错误: {e}") from e

        if config is None:
            logger.warning(f"配置文件为空: {config_path}")
            return {}

        if not isinstance(config, dict):
            raise ConfigurationException(f"配置文件顶层必须是映射: {config_path}")

        logger.info(f"成功加载配置文件: {config_path}")
        return config

    @staticmethod
    def load_with_defaults(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        加载配置并用默认值补齐缺失的键

        Args:
            config_path: 配置文件路径，为 None 时只使用默认配置

        Returns:
            Dict[str, Any]: 完整配置字典
        """
        if config_path is None:
            return copy.deepcopy(DEFAULT_CONFIG)
        return merge_config(DEFAULT_CONFIG, ConfigLoader.load_config(config_path))

    @staticmethod
    def save_config(config: Dict[str, Any], config_path: str) -> bool:
        """
        保存配置到YAML文件

        Args:
            config: 配置字典
            config_path: 配置文件路径

        Returns:
            bool: 保存是否成功
        """
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(config_file, 'w', encoding='utf-8') as f:
                yaml.dump(config, f, default_flow_style=False,
                          allow_unicode=True, sort_keys=False)

            logger.info(f"成功保存配置文件: {config_path}")
            return True

        except OSError as e:
            logger.error(f"保存配置文件失败: {e}")
            return False

    @staticmethod
    def get_camera_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取摄像头配置"""
        return config.get('camera') or {}

    @staticmethod
    def get_classifier_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取手势分类器配置"""
        return config.get('classifier') or {}

    @staticmethod
    def get_game_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        从配置中获取游戏配置

        Args:
            config: 完整配置字典

        Returns:
            Dict[str, Any]: 游戏配置字典
        """
        return config.get('game') or {}

    @staticmethod
    def get_logging_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        从配置中获取日志配置

        Args:
            config: 完整配置字典

        Returns:
            Dict[str, Any]: 日志配置字典
        """
        return config.get('logging') or {}
