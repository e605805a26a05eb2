"""
可取消的周期任务
Cancellable Periodic Task

每次 tick 返回下一次执行前的等待秒数（自适应间隔），
任务在事件循环上串行执行，同一时刻只有一个 tick 在运行。
"""
import asyncio
from typing import Awaitable, Callable, Optional
from .logger import setup_logger

logger = setup_logger("RPSLive.PeriodicTask")

TickFunction = Callable[[], Awaitable[float]]
SleepFunction = Callable[[float], Awaitable[None]]


class PeriodicTask:
    """周期任务句柄"""

    def __init__(self, tick: TickFunction, name: str = "periodic",
                 sleep: SleepFunction = asyncio.sleep):
        """
        Args:
            tick: 协程函数，返回下一次 tick 前的等待秒数
            name: 任务名称（用于日志）
            sleep: 等待函数，测试时可替换
        """
        self._tick = tick
        self._sleep = sleep
        self.name = name
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    def start(self) -> "PeriodicTask":
        """
        在当前运行的事件循环上启动任务（必须在协程内调用）

        Returns:
            PeriodicTask: 自身，作为取消句柄
        """
        if self._task is not None:
            raise RuntimeError(f"周期任务已启动: {self.name}")

        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug(f"周期任务启动: {self.name}")
        return self

    def cancel(self):
        """取消任务，之后不会再执行任何 tick"""
        if self._cancelled:
            return
        self._cancelled = True

        # 在 tick 内部取消自身时只设置标志，循环会在 tick 返回后退出
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()
        logger.debug(f"周期任务取消: {self.name}")

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def wait(self):
        """等待任务结束（正常退出或被取消）"""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _run(self):
        while not self._cancelled:
            delay = await self._tick()
            if self._cancelled:
                break
            await self._sleep(delay)
        logger.debug(f"周期任务结束: {self.name}")
