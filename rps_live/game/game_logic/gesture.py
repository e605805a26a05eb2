"""
手势枚举类型
Gesture Enumeration
"""
from enum import Enum


class Gesture(Enum):
    """手势类型枚举"""
    ROCK = "rock"          # 石头
    PAPER = "paper"        # 布
    SCISSORS = "scissors"  # 剪刀
    UNKNOWN = "unknown"    # 未看到手势 / 分类器放弃判断

    def __str__(self):
        return self.value

    @property
    def is_playable(self) -> bool:
        """是否是可以出的手势（非 UNKNOWN）"""
        return self is not Gesture.UNKNOWN

    @classmethod
    def from_string(cls, value: str):
        """
        从字符串创建手势枚举

        Args:
            value: 手势字符串（rock, paper, scissors）

        Returns:
            Gesture: 手势枚举值，无法识别时返回 UNKNOWN
        """
        value_lower = value.strip().lower()
        for gesture in cls:
            if gesture.value == value_lower:
                return gesture
        return cls.UNKNOWN


PLAYABLE_GESTURES = (Gesture.ROCK, Gesture.PAPER, Gesture.SCISSORS)
