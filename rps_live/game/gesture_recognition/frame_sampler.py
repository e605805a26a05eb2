"""
帧采样循环
Frame Sampling Loop

实时识别期间周期性地从帧源采集静帧，交给分类器，再把结果发给聚合器。
每次 tick 的返回值就是下一次 tick 前的等待时间。
"""
import asyncio
from typing import Callable, Optional
from .frame_classifier import FrameClassifier
from .recognition_result import DetectionResult
from ...hardware.base.frame_source import FrameSource
from ...utils.error_handler import global_error_handler
from ...utils.exceptions import RecognitionException
from ...utils.logger import setup_logger
from ...utils.periodic_task import PeriodicTask, SleepFunction

logger = setup_logger("RPSLive.FrameSampler")


class FrameSampler:
    """帧采样器"""

    NOT_READY_DELAY = 0.4      # 帧源未就绪
    IN_FLIGHT_DELAY = 0.2      # 上一帧仍在采集
    NEXT_FRAME_DELAY = 1.1     # 成功识别一帧
    EMPTY_FRAME_DELAY = 0.5    # 没有拿到可用图像
    ERROR_DELAY = 0.9          # 采集或识别出错

    def __init__(self,
                 frame_source: FrameSource,
                 classifier: FrameClassifier,
                 on_detection: Callable[[DetectionResult], object],
                 sleep: SleepFunction = asyncio.sleep):
        """
        初始化帧采样器

        Args:
            frame_source: 帧源
            classifier: 帧分类器
            on_detection: 识别结果的接收者（聚合器）
            sleep: 等待函数，测试时可替换
        """
        self.frame_source = frame_source
        self.classifier = classifier
        self.on_detection = on_detection
        self._sleep = sleep
        self.frame_in_flight = False
        self._task: Optional[PeriodicTask] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.cancelled

    def start(self) -> PeriodicTask:
        """
        启动采样循环（第一次 tick 立即执行）

        Returns:
            PeriodicTask: 采样任务句柄
        """
        if self.is_running:
            logger.warning("采样循环已在运行")
            return self._task

        self._task = PeriodicTask(self.tick, name="frame-sampler", sleep=self._sleep).start()
        logger.info("采样循环启动")
        return self._task

    def stop(self):
        """停止采样循环，取消尚未执行的 tick"""
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.info("采样循环停止")

    async def wait(self):
        """等待当前采样任务结束"""
        if self._task is not None:
            await self._task.wait()

    async def tick(self) -> float:
        """
        执行一次采样

        Returns:
            float: 下一次 tick 前的等待秒数
        """
        if not self.frame_source.is_ready:
            return self.NOT_READY_DELAY

        if self.frame_in_flight:
            return self.IN_FLIGHT_DELAY

        self.frame_in_flight = True
        next_delay = self.NEXT_FRAME_DELAY
        try:
            frame = await self.frame_source.capture_still()
            if frame is None:
                logger.debug("没有采集到可用图像")
                next_delay = self.EMPTY_FRAME_DELAY
            else:
                try:
                    detection = self.classifier.classify(frame.byte_size)
                except Exception as e:
                    raise RecognitionException(f"帧分类失败: {e}") from e
                logger.debug(f"帧识别: size={frame.byte_size}, "
                             f"gesture={detection.gesture}, confidence={detection.confidence:.2f}")
                self.on_detection(detection)
        except Exception as e:
            global_error_handler.handle(e, "帧采样")
            next_delay = self.ERROR_DELAY
        finally:
            self.frame_in_flight = False

        return next_delay
