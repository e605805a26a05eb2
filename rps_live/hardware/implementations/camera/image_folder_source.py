"""
图片目录帧源
Image Folder Frame Source

按文件名顺序回放目录中的图片，字节数直接取磁盘上的文件大小。
没有摄像头时用于演示和测试。
"""
import asyncio
from pathlib import Path
from typing import List, Optional

from ...base.frame_source import FrameSource, CapturedFrame
from ....utils.exceptions import CameraException
from ....utils.logger import setup_logger

logger = setup_logger("RPSLive.ImageFolderSource")

IMAGE_SUFFIXES = {'.jpg', '.jpeg', '.png', '.bmp', '.webp'}


class ImageFolderSource(FrameSource):
    """图片目录帧源"""

    def __init__(self, folder: str, loop: bool = True, read_data: bool = False):
        """
        Args:
            folder: 图片目录
            loop: 回放到末尾后是否从头开始
            read_data: 是否把文件内容放进 CapturedFrame.data
        """
        self.folder = Path(folder)
        self.loop = loop
        self.read_data = read_data
        self._files: List[Path] = []
        self._index = 0
        self._connected = False

    def connect(self) -> bool:
        if not self.folder.is_dir():
            logger.error(f"图片目录不存在: {self.folder}")
            return False

        self._files = sorted(
            p for p in self.folder.iterdir()
            if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES
        )
        self._index = 0
        self._connected = True
        logger.info(f"图片目录已加载: {self.folder}, 共 {len(self._files)} 张")
        return True

    def disconnect(self) -> bool:
        self._connected = False
        self._files = []
        return True

    def is_connected(self) -> bool:
        return self._connected

    @property
    def is_ready(self) -> bool:
        return self._connected and bool(self._files)

    @property
    def remaining(self) -> int:
        return max(0, len(self._files) - self._index)

    async def capture_still(self) -> Optional[CapturedFrame]:
        if not self._connected:
            raise CameraException("图片目录帧源未连接")

        if self._index >= len(self._files):
            if not self.loop or not self._files:
                return None
            self._index = 0

        path = self._files[self._index]
        self._index += 1

        data = None
        try:
            byte_size = path.stat().st_size
            if self.read_data:
                loop = asyncio.get_running_loop()
                data = await loop.run_in_executor(None, path.read_bytes)
        except OSError as e:
            raise CameraException(f"读取图片失败: {path}: {e}") from e

        return CapturedFrame(byte_size=byte_size, data=data)

    def get_status(self) -> dict:
        status = super().get_status()
        status.update({"folder": str(self.folder), "images": len(self._files)})
        return status
