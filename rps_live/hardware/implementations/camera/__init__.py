"""
帧源实现模块
Frame Source Implementations
"""
from .usb_camera import USBCamera
from .image_folder_source import ImageFolderSource
from .image_processor import ImageProcessor
from ...factory.hardware_factory import HardwareFactory

# 自动注册帧源到工厂类
HardwareFactory.register_frame_source('usb_camera', USBCamera)
HardwareFactory.register_frame_source('image_folder', ImageFolderSource)

__all__ = ['USBCamera', 'ImageFolderSource', 'ImageProcessor']
