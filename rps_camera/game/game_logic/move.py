"""
出拳枚举类型
Move Enumeration
"""
from enum import Enum
from typing import Dict, Optional


class Move(Enum):
    """出拳类型枚举"""
    ROCK = "rock"            # 石头
    PAPER = "paper"          # 布
    SCISSORS = "scissors"    # 剪刀
    UNDEFINED = "undefined"  # 未识别/无效

    def __str__(self):
        return self.name

    @property
    def is_defined(self) -> bool:
        """是否为有效出拳"""
        return self is not Move.UNDEFINED

    @property
    def asset_name(self) -> Optional[str]:
        """界面显示用的图片资源名，UNDEFINED 没有对应资源"""
        return _ASSET_NAMES.get(self)

    @classmethod
    def playable(cls):
        """可出的三种手势（固定顺序）"""
        return (cls.ROCK, cls.PAPER, cls.SCISSORS)

    @classmethod
    def from_label(cls, label: Optional[str],
                   aliases: Optional[Dict[str, str]] = None) -> "Move":
        """
        将分类器输出的标签映射为出拳

        标签按名称匹配，忽略大小写和首尾空白（"Rock"、"PAPER"、
        " scissors "）。aliases 可以把模型自己的类别名映射到标准名称，
        例如 {"Closed_Fist": "rock"}。

        Args:
            label: 分类器标签
            aliases: 别名表（别名 -> rock/paper/scissors）

        Returns:
            Move: 对应的出拳，无法识别时返回 UNDEFINED
        """
        if not label:
            return cls.UNDEFINED

        key = label.strip().lower()
        if aliases:
            lowered = {str(k).strip().lower(): str(v).strip().lower() for k, v in aliases.items()}
            key = lowered.get(key, key)

        for move in cls.playable():
            if move.value == key:
                return move
        return cls.UNDEFINED


_ASSET_NAMES = {
    Move.ROCK: "rock",
    Move.PAPER: "paper",
    Move.SCISSORS: "scissor",
}
