"""
硬件抽象层模块
Hardware Abstraction Layer
"""
from .base import FrameSource, CapturedFrame
from .factory.hardware_factory import HardwareFactory
from .implementations.camera import USBCamera, ImageFolderSource

__all__ = [
    'FrameSource',
    'CapturedFrame',
    'HardwareFactory',
    'USBCamera',
    'ImageFolderSource'
]
