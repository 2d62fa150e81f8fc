"""
手势分类结果
Gesture Classification Result
"""
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple


@dataclass(frozen=True)
class ClassificationResult:
    """
    单帧分类结果：按分类器给出的顺序排列的 (标签, 置信度) 序列

    可以为空（画面中没有手）。每一帧的结果都会被下一帧取代，不做保存。
    """
    categories: Tuple[Tuple[str, float], ...] = ()
    timestamp_ms: Optional[int] = None
    inference_time_ms: Optional[float] = None

    def __post_init__(self):
        normalized = []
        for label, confidence in self.categories:
            confidence = float(confidence)
            if math.isnan(confidence) or not 0.0 <= confidence <= 1.0:
                raise ValueError(f"置信度必须在 [0, 1] 范围内: {label}={confidence}")
            normalized.append((str(label), confidence))
        object.__setattr__(self, 'categories', tuple(normalized))

    @classmethod
    def of(cls, *pairs: Tuple[str, float], **kwargs) -> "ClassificationResult":
        """
        便捷构造：ClassificationResult.of(("Paper", 0.9), ("Rock", 0.1))
        """
        return cls(categories=tuple(pairs), **kwargs)

    @classmethod
    def empty(cls, **kwargs) -> "ClassificationResult":
        """没有任何类别的结果"""
        return cls(categories=(), **kwargs)

    def top_label(self) -> Optional[str]:
        """
        置信度最高的标签，置信度相同时取排在前面的一个

        Returns:
            Optional[str]: 标签，结果为空时返回 None
        """
        best_label = None
        best_confidence = -1.0
        for label, confidence in self.categories:
            if confidence > best_confidence:
                best_label, best_confidence = label, confidence
        return best_label

    def top_confidence(self) -> float:
        """最高置信度，结果为空时为 0.0"""
        return max((c for _, c in self.categories), default=0.0)

    def is_empty(self) -> bool:
        return not self.categories

    def __len__(self) -> int:
        return len(self.categories)

    def __iter__(self) -> Iterator[Tuple[str, float]]:
        return iter(self.categories)

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'categories': [{'label': label, 'confidence': confidence}
                           for label, confidence in self.categories],
            'timestamp_ms': self.timestamp_ms,
            'inference_time_ms': self.inference_time_ms
        }


def ranked(pairs: Iterable[Tuple[str, float]]) -> Tuple[Tuple[str, float], ...]:
    """按置信度降序排列（稳定排序，相同置信度保持原顺序）"""
    return tuple(sorted(pairs, key=lambda p: p[1], reverse=True))


@dataclass(frozen=True)
class ClassifierError:
    """分类器上报的错误，原样显示给玩家"""
    message: str
    code: int = 0

    def __str__(self):
        return f"{self.message} (code {self.code})"
