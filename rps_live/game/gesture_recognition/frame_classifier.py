"""
帧分类器
Frame Classifier

这不是真正的视觉识别：根据重新编码后静帧的字节数在最近样本范围内的位置
推断手势，样本差异不足时按时间片轮换手势。
"""
import math
import numbers
import time
from collections import deque
from typing import Callable, Deque, Optional
from ..game_logic.gesture import Gesture
from .recognition_result import DetectionResult
from ...utils.logger import setup_logger

logger = setup_logger("RPSLive.FrameClassifier")

# 分档顺序固定：字节数从小到大依次为 石头、剪刀、布
BAND_ORDER = (Gesture.ROCK, Gesture.SCISSORS, Gesture.PAPER)


class SizeSampleWindow:
    """最近若干帧字节数的滑动窗口，生命周期为整个进程会话"""

    def __init__(self, capacity: int = 40):
        if capacity < 1:
            raise ValueError(f"窗口容量必须大于0: {capacity}")
        self.capacity = capacity
        self._samples: Deque[float] = deque(maxlen=capacity)

    @classmethod
    def create(cls, capacity: int = 40) -> "SizeSampleWindow":
        return cls(capacity)

    def push(self, size: float):
        self._samples.append(size)

    def reset(self):
        self._samples.clear()
        logger.debug("字节数样本窗口已清空")

    @property
    def min(self) -> float:
        return min(self._samples)

    @property
    def max(self) -> float:
        return max(self._samples)

    @property
    def spread(self) -> float:
        if not self._samples:
            return 0.0
        return self.max - self.min

    def samples(self) -> list:
        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)


class FrameClassifier:
    """按帧字节数分类手势"""

    MIN_SPREAD = 25_000
    BASE_CONFIDENCE = 0.55
    CLOSENESS_WEIGHT = 0.4
    MIN_BAND_CONFIDENCE = 0.6
    FALLBACK_CONFIDENCE = 0.6
    FALLBACK_SLICE_MS = 1500
    SEED_DIVISOR = 10_000

    def __init__(self, window: Optional[SizeSampleWindow] = None,
                 clock: Callable[[], float] = time.time):
        """
        初始化分类器

        Args:
            window: 字节数样本窗口（由调用方持有，跨回合共享）
            clock: 墙钟时间（秒），用于时间片回退
        """
        self.window = window if window is not None else SizeSampleWindow()
        self._clock = clock

    def classify(self, frame_byte_size: Optional[float]) -> DetectionResult:
        """
        根据帧字节数估计手势

        Args:
            frame_byte_size: 重新编码后静帧的字节数

        Returns:
            DetectionResult: 手势与置信度
        """
        if not self._is_usable_size(frame_byte_size):
            return DetectionResult.unknown()

        size = frame_byte_size
        self.window.push(size)

        low = self.window.min
        spread = self.window.max - low
        if spread < self.MIN_SPREAD:
            return self.fallback(size)

        step = spread / len(BAND_ORDER)
        if size < low + step:
            band = 0
        elif size < low + step * 2:
            band = 1
        else:
            band = 2

        center = low + step * (band + 0.5)
        half_band = step / 2
        distance = abs(size - center)
        closeness = max(0.0, 1 - distance / max(half_band, 1))
        confidence = min(1.0, self.BASE_CONFIDENCE + closeness * self.CLOSENESS_WEIGHT)

        if confidence < self.MIN_BAND_CONFIDENCE:
            return self.fallback(size)

        return DetectionResult(BAND_ORDER[band], confidence)

    def fallback(self, seed: Optional[float] = None) -> DetectionResult:
        """
        时间片回退：每 1500ms 轮换一次手势，种子按万字节偏移

        Args:
            seed: 帧字节数（可选）

        Returns:
            DetectionResult: 置信度固定为 0.6
        """
        now_ms = int(self._clock() * 1000)
        time_slice = now_ms // self.FALLBACK_SLICE_MS
        seed_contribution = math.floor(seed / self.SEED_DIVISOR) if seed else 0
        index = (time_slice + seed_contribution) % len(BAND_ORDER)
        return DetectionResult(BAND_ORDER[index], self.FALLBACK_CONFIDENCE)

    @staticmethod
    def _is_usable_size(value) -> bool:
        if value is None or isinstance(value, bool):
            return False
        if not isinstance(value, numbers.Real):
            return False
        return value != 0 and math.isfinite(value)
