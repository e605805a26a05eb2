"""
游戏控制器
Game Controller - 整合采样、识别去抖和回合结算
"""
import asyncio
from typing import Optional, Callable, List
from .state_machine import GameState, GameStateMachine, RoundPhase
from .game_logic import RoundResolver, RoundOutcome, GameStatistics
from .gesture_recognition import (
    DetectionAggregator, DetectionResult, FrameClassifier, FrameSampler
)
from ..hardware.base.frame_source import FrameSource
from ..utils.logger import setup_logger
from ..utils.periodic_task import SleepFunction

logger = setup_logger("RPSLive.GameController")


class GameController:
    """游戏控制器类，整合所有游戏组件"""

    def __init__(self,
                 frame_source: FrameSource,
                 classifier: FrameClassifier,
                 resolver: Optional[RoundResolver] = None,
                 min_confidence: float = 0.5,
                 required_streak: int = 2,
                 sleep: SleepFunction = asyncio.sleep):
        """
        初始化游戏控制器

        Args:
            frame_source: 帧源
            classifier: 帧分类器（持有跨回合的字节数窗口）
            resolver: 回合结算器（可选）
            min_confidence: 计入连续帧的最小置信度
            required_streak: 确认回合所需的连续帧数
            sleep: 采样循环的等待函数
        """
        self.frame_source = frame_source
        self.resolver = resolver or RoundResolver()
        self.aggregator = DetectionAggregator(
            self.resolver,
            min_confidence=min_confidence,
            required_streak=required_streak
        )
        self.sampler = FrameSampler(frame_source, classifier, self.aggregator.on_detection, sleep=sleep)

        self.state_machine = GameStateMachine(initial_state=GameState.IDLE)
        self.state_machine.register_state_handler(GameState.LIVE_CAPTURE, self._handle_live_capture)
        self.state_machine.add_transition_listener(self._handle_transition)

        self.resolver.on_round_committed = self._handle_round_committed
        self.aggregator.on_live_detection = self._handle_live_detection

        # 回调函数
        self.on_state_changed: Optional[Callable[[GameState], None]] = None
        self.on_live_detection: Optional[Callable[[DetectionResult], None]] = None
        self.on_round_result: Optional[Callable[[RoundOutcome], None]] = None

        logger.info("游戏控制器初始化完成")

    def open_capture(self) -> bool:
        """
        进入实时识别（必须在事件循环中调用）

        Returns:
            bool: 是否进入；上一回合仍在处理时返回 False
        """
        if self.state_machine.is_in_state(GameState.LIVE_CAPTURE):
            return True

        if self.resolver.is_processing:
            logger.debug("回合处理中，暂不进入实时识别")
            return False

        if not self.state_machine.transition_to(GameState.LIVE_CAPTURE):
            return False

        self.sampler.start()
        return True

    def close_capture(self):
        """离开实时识别，回到上一个界面"""
        if not self.state_machine.is_in_state(GameState.LIVE_CAPTURE):
            return

        self.sampler.stop()
        target = GameState.RESULT_SHOWING if self.last_outcome else GameState.IDLE
        self.state_machine.transition_to(target)

    def reset_game(self):
        """重置游戏（清空历史与统计）"""
        logger.info("重置游戏")
        self.sampler.stop()
        self.aggregator.reset()
        self.resolver.reset()
        self.state_machine.reset(GameState.IDLE)
        self._notify_state_changed()

    def _handle_live_capture(self):
        """进入实时识别时总是从头累计连续帧"""
        self.aggregator.reset()

    def _handle_transition(self, old_state: GameState, new_state: GameState):
        self._notify_state_changed()

    def _handle_live_detection(self, detection: DetectionResult):
        if self.on_live_detection:
            try:
                self.on_live_detection(detection)
            except Exception as e:
                logger.error(f"实时识别回调异常: {e}")

    def _handle_round_committed(self, outcome: RoundOutcome):
        self.sampler.stop()
        self.state_machine.transition_to(GameState.RESULT_SHOWING)

        if self.on_round_result:
            try:
                self.on_round_result(outcome)
            except Exception as e:
                logger.error(f"回合结果回调异常: {e}")

    def _notify_state_changed(self):
        """通知状态改变"""
        if self.on_state_changed:
            try:
                self.on_state_changed(self.state_machine.get_current_state())
            except Exception as e:
                logger.error(f"状态改变回调异常: {e}")

    @property
    def round_phase(self) -> RoundPhase:
        """当前回合阶段"""
        if self.resolver.is_locked:
            if self.resolver.is_processing:
                return RoundPhase.COMMITTED
            return RoundPhase.COOLING_DOWN
        if self.aggregator.streak.count > 0:
            return RoundPhase.STREAK_ACCUMULATING
        return RoundPhase.IDLE

    @property
    def last_outcome(self) -> Optional[RoundOutcome]:
        return self.resolver.history.latest()

    @property
    def live_detection(self) -> Optional[DetectionResult]:
        return self.aggregator.live_detection

    def live_detection_label(self) -> str:
        """实时识别提示文字"""
        detection = self.aggregator.live_detection
        if detection is None or not detection.gesture.is_playable:
            return "Waiting for a clear gesture…"
        return f"Seeing {detection.gesture} ({detection.confidence_percent}%)"

    def status_text(self) -> str:
        """首页状态文字：有结果时显示上一回合，否则显示实时识别提示"""
        outcome = self.last_outcome
        if outcome is None:
            return self.live_detection_label()
        return (f"Last round: you {outcome.result.value.lower()} "
                f"({outcome.player_gesture} vs {outcome.computer_gesture})")

    def get_current_state(self) -> GameState:
        """获取当前状态"""
        return self.state_machine.get_current_state()

    def get_round_history(self) -> List[RoundOutcome]:
        """最近回合，最新的在最前"""
        return self.resolver.history.entries()

    def get_game_statistics(self) -> GameStatistics:
        """获取游戏统计信息"""
        return self.resolver.statistics
