"""
帧源抽象基类
Frame Source Base Class
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CapturedFrame:
    """一张采集到的静帧"""
    byte_size: int                       # 编码后的字节数
    data: Optional[bytes] = None         # 编码后的图像数据（可选）
    shape: Optional[Tuple[int, ...]] = None


class FrameSource(ABC):
    """帧源抽象基类，定义采样循环需要的接口"""

    @abstractmethod
    def connect(self) -> bool:
        """
        连接帧源

        Returns:
            bool: 连接是否成功
        """
        pass

    @abstractmethod
    def disconnect(self) -> bool:
        """
        断开帧源

        Returns:
            bool: 断开是否成功
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """检查帧源是否已连接"""
        pass

    @property
    def is_ready(self) -> bool:
        """帧源是否可以立即采集（默认等同于已连接）"""
        return self.is_connected()

    @abstractmethod
    async def capture_still(self) -> Optional[CapturedFrame]:
        """
        采集一张静帧

        Returns:
            Optional[CapturedFrame]: 静帧，没有可用图像时返回None

        Raises:
            CameraException: 采集失败
        """
        pass

    def get_status(self) -> dict:
        """
        获取帧源状态信息

        Returns:
            dict: 状态信息字典
        """
        return {
            "connected": self.is_connected(),
            "ready": self.is_ready,
            "type": self.__class__.__name__
        }
