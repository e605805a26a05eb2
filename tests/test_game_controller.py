"""
游戏控制器测试
Game Controller Tests
"""
import asyncio
import random
import sys
import unittest
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rps_live.game import GameController, GameState
from rps_live.game.game_logic import Gesture, RoundResolver
from rps_live.game.gesture_recognition import DetectionResult
from rps_live.game.state_machine import RoundPhase
from rps_live.hardware.base.frame_source import FrameSource, CapturedFrame


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class CountingSource(FrameSource):
    def __init__(self):
        self.captures = 0

    def connect(self) -> bool:
        return True

    def disconnect(self) -> bool:
        return True

    def is_connected(self) -> bool:
        return True

    async def capture_still(self):
        self.captures += 1
        return CapturedFrame(byte_size=20_000)


class FixedClassifier:
    def __init__(self, detection):
        self.detection = detection

    def classify(self, size):
        return self.detection


async def yielding_sleep(delay):
    await asyncio.sleep(0)


async def pump(times: int = 20):
    for _ in range(times):
        await asyncio.sleep(0)


class TestGameController(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.source = CountingSource()
        self.resolver = RoundResolver(clock=self.clock, rng=random.Random(5))
        self.controller = GameController(
            self.source,
            FixedClassifier(DetectionResult(Gesture.ROCK, 0.9)),
            resolver=self.resolver,
            sleep=yielding_sleep
        )
        self.results = []
        self.states = []
        self.live = []
        self.controller.on_round_result = self.results.append
        self.controller.on_state_changed = self.states.append
        self.controller.on_live_detection = self.live.append

    async def play_round(self):
        self.assertTrue(self.controller.open_capture())
        await pump()
        await self.controller.sampler.wait()

    async def test_two_frames_commit_and_show_result(self):
        self.assertEqual(self.controller.get_current_state(), GameState.IDLE)

        await self.play_round()

        self.assertEqual(self.controller.get_current_state(), GameState.RESULT_SHOWING)
        self.assertEqual(self.source.captures, 2)
        self.assertFalse(self.controller.sampler.is_running)
        self.assertEqual(len(self.results), 1)
        self.assertEqual(self.results[0].player_gesture, Gesture.ROCK)
        self.assertEqual(self.states, [GameState.LIVE_CAPTURE, GameState.RESULT_SHOWING])
        self.assertEqual(len(self.live), 2)
        self.assertEqual(self.controller.get_round_history(), self.results)
        self.assertEqual(self.controller.get_game_statistics().total_rounds, 1)

    async def test_reopen_refused_while_processing(self):
        await self.play_round()

        self.assertFalse(self.controller.open_capture())
        self.assertEqual(self.controller.get_current_state(), GameState.RESULT_SHOWING)

        self.clock.now = 100.0 + 0.4
        self.assertTrue(self.controller.open_capture())
        self.assertEqual(self.controller.get_current_state(), GameState.LIVE_CAPTURE)
        self.assertIsNone(self.controller.live_detection)
        self.controller.close_capture()
        await self.controller.sampler.wait()

    async def test_round_phase_follows_lock_windows(self):
        self.assertEqual(self.controller.round_phase, RoundPhase.IDLE)
        await self.play_round()

        self.assertEqual(self.controller.round_phase, RoundPhase.COMMITTED)
        self.clock.now = 100.5
        self.assertEqual(self.controller.round_phase, RoundPhase.COOLING_DOWN)
        self.clock.now = 100.6
        self.assertEqual(self.controller.round_phase, RoundPhase.IDLE)

    async def test_close_capture_without_result_returns_to_idle(self):
        self.assertTrue(self.controller.open_capture())
        self.controller.close_capture()
        await pump()

        self.assertEqual(self.controller.get_current_state(), GameState.IDLE)
        self.assertEqual(self.source.captures, 0)
        self.assertEqual(self.results, [])

    async def test_labels(self):
        self.assertEqual(self.controller.live_detection_label(), "Waiting for a clear gesture…")
        self.assertEqual(self.controller.status_text(), "Waiting for a clear gesture…")

        await self.play_round()

        self.assertEqual(self.controller.live_detection_label(), "Seeing rock (90%)")
        outcome = self.controller.last_outcome
        self.assertEqual(
            self.controller.status_text(),
            f"Last round: you {outcome.result.value.lower()} (rock vs {outcome.computer_gesture.value})"
        )

    async def test_reset_game(self):
        await self.play_round()
        self.controller.reset_game()

        self.assertEqual(self.controller.get_current_state(), GameState.IDLE)
        self.assertIsNone(self.controller.last_outcome)
        self.assertEqual(self.controller.get_game_statistics().total_rounds, 0)
        self.assertTrue(self.controller.open_capture())
        self.controller.close_capture()


if __name__ == '__main__':
    unittest.main()
