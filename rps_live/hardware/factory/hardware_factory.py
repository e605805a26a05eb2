"""
帧源工厂类
Frame Source Factory Class
"""
from typing import Dict, Any
from ..base.frame_source import FrameSource
from ...utils.exceptions import ConfigurationException
from ...utils.logger import setup_logger

logger = setup_logger("RPSLive.HardwareFactory")


class HardwareFactory:
    """帧源工厂类，按名称注册和创建帧源"""

    _frame_source_classes: Dict[str, type] = {}

    @classmethod
    def register_frame_source(cls, name: str, source_class: type):
        """
        注册帧源类

        Args:
            name: 帧源名称（如 'usb_camera'）
            source_class: 帧源类（必须继承自FrameSource）
        """
        if not issubclass(source_class, FrameSource):
            raise TypeError(f"{source_class} must be a subclass of FrameSource")
        cls._frame_source_classes[name.lower()] = source_class

    @classmethod
    def create_frame_source(cls, name: str, config: Dict[str, Any]) -> FrameSource:
        """
        创建帧源实例

        Args:
            name: 帧源名称
            config: 构造参数

        Returns:
            FrameSource: 帧源实例

        Raises:
            ValueError: 帧源类型未注册
        """
        name_lower = name.lower()
        if name_lower not in cls._frame_source_classes:
            raise ValueError(f"Unknown frame source: {name}")

        source_class = cls._frame_source_classes[name_lower]
        return source_class(**config)

    @classmethod
    def create_from_config(cls, camera_config: Dict[str, Any]) -> FrameSource:
        """
        根据配置段创建帧源（type 字段决定类型，其余字段作为构造参数）

        Args:
            camera_config: camera 配置段

        Returns:
            FrameSource: 帧源实例
        """
        if not camera_config:
            raise ConfigurationException("配置文件中未找到摄像头配置", config_key="camera")

        source_type = camera_config.get('type')
        if not source_type:
            raise ConfigurationException("摄像头配置中未指定类型", config_key="camera.type")

        params = {k: v for k, v in camera_config.items() if k != 'type'}
        source = cls.create_frame_source(source_type, params)
        logger.info(f"成功创建帧源实例: {source_type}")
        return source

    @classmethod
    def list_frame_sources(cls) -> list:
        """列出所有已注册的帧源类型"""
        return list(cls._frame_source_classes.keys())

    @classmethod
    def is_frame_source_registered(cls, name: str) -> bool:
        return name.lower() in cls._frame_source_classes
