"""
周期任务测试
Periodic Task Tests
"""
import asyncio
import sys
import unittest
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rps_live.utils.periodic_task import PeriodicTask


class TestPeriodicTask(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.slept = []

    async def fake_sleep(self, delay):
        self.slept.append(delay)
        await asyncio.sleep(0)

    async def test_tick_delay_drives_next_sleep(self):
        delays = iter([0.4, 1.1, 0.5])
        calls = []

        async def tick():
            calls.append(len(calls))
            try:
                return next(delays)
            except StopIteration:
                task.cancel()
                return 0.0

        task = PeriodicTask(tick, name="test", sleep=self.fake_sleep).start()
        await task.wait()

        self.assertEqual(self.slept, [0.4, 1.1, 0.5])
        self.assertEqual(len(calls), 4)
        self.assertTrue(task.cancelled)
        self.assertFalse(task.running)

    async def test_external_cancel_stops_ticks(self):
        ticks = []

        async def tick():
            ticks.append(1)
            return 1.0

        task = PeriodicTask(tick, sleep=self.fake_sleep).start()
        for _ in range(4):
            await asyncio.sleep(0)
        task.cancel()
        await task.wait()
        count = len(ticks)

        for _ in range(4):
            await asyncio.sleep(0)
        self.assertEqual(len(ticks), count)
        self.assertGreater(count, 0)

    async def test_cancel_before_first_tick(self):
        ticks = []

        async def tick():
            ticks.append(1)
            return 1.0

        task = PeriodicTask(tick, sleep=self.fake_sleep).start()
        task.cancel()
        await task.wait()
        self.assertEqual(ticks, [])

    async def test_start_twice_raises(self):
        async def tick():
            return 1.0

        task = PeriodicTask(tick, sleep=self.fake_sleep).start()
        with self.assertRaises(RuntimeError):
            task.start()
        task.cancel()
        await task.wait()

    async def test_wait_without_start(self):
        async def tick():
            return 1.0

        await PeriodicTask(tick).wait()


if __name__ == '__main__':
    unittest.main()
