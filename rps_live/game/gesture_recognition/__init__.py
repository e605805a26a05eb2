"""
手势识别模块
Gesture Recognition Module
"""
from .recognition_result import DetectionResult, DetectionStreak, DetectionAggregator
from .frame_classifier import FrameClassifier, SizeSampleWindow, BAND_ORDER
from .frame_sampler import FrameSampler

__all__ = [
    'DetectionResult',
    'DetectionStreak',
    'DetectionAggregator',
    'FrameClassifier',
    'SizeSampleWindow',
    'BAND_ORDER',
    'FrameSampler'
]
