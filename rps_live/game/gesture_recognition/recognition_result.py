"""
手势识别结果处理
Gesture Recognition Result Processing

DetectionAggregator 对逐帧识别结果做去抖：单帧高置信度不会确认回合，
必须连续两帧出现同一手势（置信度 >= 0.5）才会提交给回合结算器。
"""
from dataclasses import dataclass
from typing import Callable, Optional
from ..game_logic.gesture import Gesture
from ..game_logic.round_resolver import RoundResolver, RoundOutcome
from ...utils.logger import setup_logger

logger = setup_logger("RPSLive.RecognitionResult")


@dataclass(frozen=True)
class DetectionResult:
    """单帧识别结果"""
    gesture: Gesture
    confidence: float

    @classmethod
    def unknown(cls) -> "DetectionResult":
        return cls(Gesture.UNKNOWN, 0.0)

    def is_valid(self, min_confidence: float = 0.5) -> bool:
        """
        检查识别结果是否可以计入连续帧

        Args:
            min_confidence: 最小置信度阈值

        Returns:
            bool: 是否有效
        """
        return (self.gesture != Gesture.UNKNOWN and
                self.confidence >= min_confidence)

    @property
    def confidence_percent(self) -> int:
        return int(round(self.confidence * 100))

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'gesture': self.gesture.value,
            'confidence': self.confidence
        }


@dataclass(frozen=True)
class DetectionStreak:
    """连续帧计数"""
    gesture: Gesture = Gesture.UNKNOWN
    count: int = 0


EMPTY_STREAK = DetectionStreak()


class DetectionAggregator:
    """识别结果聚合器 / 回合去抖器"""

    def __init__(self,
                 resolver: RoundResolver,
                 min_confidence: float = 0.5,
                 required_streak: int = 2):
        """
        初始化聚合器

        Args:
            resolver: 回合结算器
            min_confidence: 计入连续帧的最小置信度
            required_streak: 确认回合所需的连续帧数
        """
        if required_streak < 1:
            raise ValueError(f"required_streak 必须大于0: {required_streak}")

        self.resolver = resolver
        self.min_confidence = min_confidence
        self.required_streak = required_streak
        self.streak = EMPTY_STREAK
        self.live_detection: Optional[DetectionResult] = None

        # 实时识别显示回调，参数为 DetectionResult
        self.on_live_detection: Optional[Callable[[DetectionResult], None]] = None

    def on_detection(self, detection: DetectionResult) -> Optional[RoundOutcome]:
        """
        处理一帧识别结果

        Args:
            detection: 识别结果

        Returns:
            Optional[RoundOutcome]: 本帧触发了回合确认时返回回合结果
        """
        self.live_detection = detection
        if self.on_live_detection:
            self.on_live_detection(detection)

        if not detection.is_valid(self.min_confidence):
            self.streak = EMPTY_STREAK
            return None

        if self.streak.gesture == detection.gesture:
            self.streak = DetectionStreak(detection.gesture, self.streak.count + 1)
        else:
            self.streak = DetectionStreak(detection.gesture, 1)

        if self.streak.count < self.required_streak or self.resolver.is_busy:
            return None

        outcome = self.resolver.commit(detection.gesture)
        if outcome is not None:
            self.streak = EMPTY_STREAK
        return outcome

    def reset(self):
        """重置连续帧和实时显示（进入实时识别时调用）"""
        self.streak = EMPTY_STREAK
        self.live_detection = None
        logger.debug("识别聚合器已重置")
