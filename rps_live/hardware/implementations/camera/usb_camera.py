"""
USB摄像头实现
USB Camera Implementation
"""
import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import cv2
import numpy as np

from .image_processor import ImageProcessor
from ...base.frame_source import FrameSource, CapturedFrame
from ....utils.exceptions import CameraException
from ....utils.logger import setup_logger

logger = setup_logger("RPSLive.USBCamera")


class USBCamera(FrameSource):
    """USB摄像头帧源，阻塞读取放在单线程池中执行"""

    def __init__(self, device_id: int = 0, width: int = 640, height: int = 480,
                 fps: int = 30, still_size: int = 224, jpeg_quality: int = 35,
                 backend: Optional[int] = None):
        """
        初始化USB摄像头

        Args:
            device_id: 摄像头设备ID（默认0）
            width: 采集宽度（默认640）
            height: 采集高度（默认480）
            fps: 帧率（默认30）
            still_size: 静帧缩放后的边长（默认224）
            jpeg_quality: 静帧重新编码的JPEG质量（默认35）
            backend: OpenCV后端（可选，如cv2.CAP_V4L2）
        """
        self.device_id = device_id
        self.width = width
        self.height = height
        self.fps = fps
        self.still_size = still_size
        self.jpeg_quality = jpeg_quality
        self.backend = backend
        self._cap: Optional[cv2.VideoCapture] = None
        self._connected = False
        self._current_resolution = (width, height)
        self._cap_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="usb-camera")

        logger.info(f"初始化USB摄像头: device_id={device_id}, resolution={width}x{height}, fps={fps}")

    def connect(self) -> bool:
        """
        连接摄像头

        Returns:
            bool: 连接是否成功
        """
        if self._connected:
            logger.warning("摄像头已经连接")
            return True

        try:
            if self.backend is not None:
                cap = cv2.VideoCapture(self.device_id, self.backend)
            else:
                cap = cv2.VideoCapture(self.device_id)

            if not cap.isOpened():
                logger.error(f"无法打开摄像头设备: {self.device_id}")
                cap.release()
                return False

            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            cap.set(cv2.CAP_PROP_FPS, self.fps)

            actual_width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
            actual_height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

            # 读取一帧测试连接
            ret, _ = cap.read()
            if not ret:
                logger.error("摄像头连接测试失败：无法读取图像")
                cap.release()
                return False

            with self._cap_lock:
                self._cap = cap
                self._current_resolution = (actual_width, actual_height)
                self._connected = True

            logger.info(f"摄像头连接成功: device_id={self.device_id}, "
                        f"实际分辨率={actual_width}x{actual_height}")
            return True

        except cv2.error as e:
            logger.error(f"摄像头连接异常: {e}")
            return False

    def disconnect(self) -> bool:
        """
        断开摄像头连接

        Returns:
            bool: 断开是否成功
        """
        if not self._connected:
            logger.warning("摄像头未连接")
            return True

        with self._cap_lock:
            if self._cap is not None:
                self._cap.release()
                self._cap = None
            self._connected = False

        logger.info(f"摄像头已断开: device_id={self.device_id}")
        return True

    def is_connected(self) -> bool:
        """
        检查摄像头是否已连接

        Returns:
            bool: 连接状态
        """
        if not self._connected or self._cap is None:
            return False

        if not self._cap.isOpened():
            self._connected = False
            return False

        return True

    def switch_device(self, device_id: int) -> bool:
        """
        切换到另一个摄像头设备（例如前后摄像头），切换完成前帧源不就绪

        Args:
            device_id: 新设备ID

        Returns:
            bool: 新设备是否连接成功
        """
        logger.info(f"切换摄像头: {self.device_id} -> {device_id}")
        self.disconnect()
        self.device_id = device_id
        return self.connect()

    async def capture_still(self) -> Optional[CapturedFrame]:
        """
        采集一张静帧并重新编码

        Returns:
            Optional[CapturedFrame]: 静帧，读取不到图像时返回None

        Raises:
            CameraException: 摄像头未连接或读取异常
        """
        if not self.is_connected():
            raise CameraException("摄像头未连接，无法采集静帧")

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self._grab_still)

    def _grab_still(self) -> Optional[CapturedFrame]:
        frame = self.capture_frame()
        if frame is None:
            return None

        buffer = ImageProcessor.prepare_still(frame, self.still_size, self.jpeg_quality)
        if buffer is None:
            return None

        return CapturedFrame(byte_size=int(buffer.size), data=buffer.tobytes(), shape=frame.shape)

    def capture_frame(self) -> Optional[np.ndarray]:
        """
        同步捕获一帧原始图像

        Returns:
            Optional[np.ndarray]: 图像数据（BGR格式），失败返回None
        """
        with self._cap_lock:
            if self._cap is None:
                return None
            try:
                ret, frame = self._cap.read()
            except cv2.error as e:
                raise CameraException(f"捕获图像异常: {e}") from e

        if not ret or frame is None:
            logger.warning("捕获图像失败")
            return None
        return frame

    def get_resolution(self) -> Tuple[int, int]:
        """
        获取摄像头分辨率

        Returns:
            Tuple[int, int]: (width, height)
        """
        return self._current_resolution

    def get_status(self) -> dict:
        status = super().get_status()
        status.update({
            "device_id": self.device_id,
            "resolution": self.get_resolution(),
            "still_size": self.still_size
        })
        return status

    def close(self):
        """断开连接并关闭采集线程池"""
        self.disconnect()
        self._executor.shutdown(wait=False)

    def __enter__(self):
        """上下文管理器入口"""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """上下文管理器出口"""
        self.close()
