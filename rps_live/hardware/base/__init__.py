"""
帧源抽象基类
Frame Source Base Classes
"""
from .frame_source import FrameSource, CapturedFrame

__all__ = ['FrameSource', 'CapturedFrame']
