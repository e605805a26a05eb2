"""
界面状态机测试
Game State Machine Tests
"""
import sys
import unittest
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rps_live.game.state_machine import GameState, GameStateMachine


class TestGameStateMachine(unittest.TestCase):
    def setUp(self):
        self.machine = GameStateMachine()
        self.transitions = []
        self.machine.add_transition_listener(lambda old, new: self.transitions.append((old, new)))

    def test_capture_result_cycle(self):
        self.assertTrue(self.machine.transition_to(GameState.LIVE_CAPTURE))
        self.assertTrue(self.machine.transition_to(GameState.RESULT_SHOWING))
        self.assertTrue(self.machine.transition_to(GameState.LIVE_CAPTURE))
        self.assertEqual(self.machine.get_previous_state(), GameState.RESULT_SHOWING)
        self.assertEqual(len(self.transitions), 3)

    def test_invalid_transition_is_refused(self):
        self.assertFalse(self.machine.transition_to(GameState.RESULT_SHOWING))
        self.assertTrue(self.machine.is_in_state(GameState.IDLE))
        self.assertEqual(self.transitions, [])

        self.assertTrue(self.machine.transition_to(GameState.RESULT_SHOWING, force=True))
        self.assertEqual(self.transitions, [(GameState.IDLE, GameState.RESULT_SHOWING)])

    def test_same_state_is_noop(self):
        self.assertTrue(self.machine.transition_to(GameState.IDLE))
        self.assertEqual(self.transitions, [])

    def test_handler_and_listener_errors_are_contained(self):
        entered = []

        def broken_listener(old, new):
            raise RuntimeError("listener failed")

        self.machine.register_state_handler(GameState.LIVE_CAPTURE, lambda: entered.append(1))
        self.machine.add_transition_listener(broken_listener)

        self.assertTrue(self.machine.transition_to(GameState.LIVE_CAPTURE))
        self.assertEqual(entered, [1])
        self.assertEqual(len(self.transitions), 1)

    def test_reset(self):
        self.machine.transition_to(GameState.LIVE_CAPTURE)
        self.machine.reset()
        self.assertEqual(self.machine.get_current_state(), GameState.IDLE)
        self.assertEqual(self.machine.get_previous_state(), GameState.LIVE_CAPTURE)


if __name__ == '__main__':
    unittest.main()
