"""
帧源工厂模块
Frame Source Factory
"""
from .hardware_factory import HardwareFactory

__all__ = ['HardwareFactory']
