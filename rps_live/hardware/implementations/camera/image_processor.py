"""
图像预处理工具模块
Image Processing Utility Module
"""
import cv2
import numpy as np
from typing import Optional
from ....utils.exceptions import CameraException


class ImageProcessor:
    """静帧缩放与重新编码"""

    @staticmethod
    def resize(image: np.ndarray, width: int, height: int,
               interpolation: int = cv2.INTER_AREA) -> np.ndarray:
        """
        调整图像大小

        Args:
            image: 输入图像
            width: 目标宽度
            height: 目标高度
            interpolation: 插值方法

        Returns:
            np.ndarray: 调整后的图像
        """
        return cv2.resize(image, (width, height), interpolation=interpolation)

    @staticmethod
    def encode_jpeg(image: np.ndarray, quality: int = 35) -> np.ndarray:
        """
        编码为JPEG

        Args:
            image: 输入图像（BGR）
            quality: JPEG质量（0-100）

        Returns:
            np.ndarray: 编码后的字节缓冲区（uint8 一维数组）

        Raises:
            CameraException: 编码失败
        """
        ok, buffer = cv2.imencode('.jpg', image, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
        if not ok:
            raise CameraException("JPEG编码失败")
        return buffer

    @staticmethod
    def prepare_still(image: Optional[np.ndarray], size: int = 224,
                      quality: int = 35) -> Optional[np.ndarray]:
        """
        把原始帧处理成用于分类的静帧：缩放为 size x size 后重新编码

        Args:
            image: 原始帧
            size: 目标边长
            quality: JPEG质量

        Returns:
            Optional[np.ndarray]: 编码后的缓冲区，输入为空时返回None
        """
        if image is None or image.size == 0:
            return None
        resized = ImageProcessor.resize(image, size, size)
        return ImageProcessor.encode_jpeg(resized, quality)
