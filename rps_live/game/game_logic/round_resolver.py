"""
回合结算
Round Resolver

玩家手势一旦确认，由这里抽取电脑手势、判定胜负、写入回合历史，
并开启两段互相独立的冷却：
- 回合锁（600ms）：两次确认回合之间的最小间隔
- 处理中标志（400ms）：只用于阻止界面立刻重新进入实时识别
"""
import random
import time
import uuid
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional
from .gesture import Gesture
from .game_rules import GameRules, GameResult
from ...utils.logger import setup_logger

logger = setup_logger("RPSLive.RoundResolver")


@dataclass(frozen=True)
class RoundOutcome:
    """回合结果（创建后不可修改）"""
    id: str
    player_gesture: Gesture
    computer_gesture: Gesture
    result: GameResult
    timestamp: float

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'id': self.id,
            'player_gesture': self.player_gesture.value,
            'computer_gesture': self.computer_gesture.value,
            'result': self.result.value,
            'timestamp': self.timestamp
        }


@dataclass
class GameStatistics:
    """本次会话的统计信息（不受历史长度限制）"""
    total_rounds: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def record(self, result: GameResult):
        self.total_rounds += 1
        if result == GameResult.WIN:
            self.wins += 1
        elif result == GameResult.LOSE:
            self.losses += 1
        else:
            self.draws += 1

    def get_win_rate(self) -> float:
        """
        获取玩家胜率

        Returns:
            float: 胜率（0.0-1.0），没有回合时为 0
        """
        if self.total_rounds == 0:
            return 0.0
        return self.wins / self.total_rounds

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'total_rounds': self.total_rounds,
            'wins': self.wins,
            'losses': self.losses,
            'draws': self.draws,
            'win_rate': self.get_win_rate()
        }


class RoundHistory:
    """最近回合记录，最新的在最前面，超出容量时丢弃最旧的"""

    def __init__(self, max_size: int = 5):
        if max_size < 1:
            raise ValueError(f"历史记录容量必须大于0: {max_size}")
        self.max_size = max_size
        self._entries: Deque[RoundOutcome] = deque(maxlen=max_size)

    def add(self, outcome: RoundOutcome):
        self._entries.appendleft(outcome)

    def entries(self) -> List[RoundOutcome]:
        return list(self._entries)

    def latest(self) -> Optional[RoundOutcome]:
        return self._entries[0] if self._entries else None

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RoundResolver:
    """回合结算器"""

    ROUND_LOCK_SECONDS = 0.6
    PROCESSING_SECONDS = 0.4

    def __init__(self,
                 history: Optional[RoundHistory] = None,
                 clock: Callable[[], float] = time.monotonic,
                 rng: Optional[random.Random] = None):
        """
        初始化回合结算器

        Args:
            history: 回合历史（默认容量5）
            clock: 单调时钟（秒），测试时注入模拟时间
            rng: 电脑出拳使用的随机数生成器
        """
        self.history = history if history is not None else RoundHistory()
        self.statistics = GameStatistics()
        self._clock = clock
        self._rng = rng
        self._locked_until: Optional[float] = None
        self._processing_until: Optional[float] = None

        # 回合确认回调，参数为 RoundOutcome
        self.on_round_committed: Optional[Callable[[RoundOutcome], None]] = None

    @property
    def is_locked(self) -> bool:
        """回合锁是否生效"""
        return self._locked_until is not None and self._clock() < self._locked_until

    @property
    def is_processing(self) -> bool:
        """是否处于回合处理阶段（阻止重新进入实时识别）"""
        return self._processing_until is not None and self._clock() < self._processing_until

    @property
    def is_busy(self) -> bool:
        return self.is_processing or self.is_locked

    def commit(self, player_gesture: Gesture) -> Optional[RoundOutcome]:
        """
        确认玩家手势并结算一个回合

        UNKNOWN 手势或回合锁生效期间的调用会被静默忽略。

        Args:
            player_gesture: 玩家手势

        Returns:
            Optional[RoundOutcome]: 回合结果，被忽略时返回 None
        """
        if not player_gesture.is_playable or self.is_locked:
            logger.debug(f"忽略回合确认: gesture={player_gesture}, locked={self.is_locked}")
            return None

        now = self._clock()
        self._locked_until = now + self.ROUND_LOCK_SECONDS

        computer_gesture = GameRules.random_gesture(self._rng)
        result = GameRules.resolve(player_gesture, computer_gesture)

        outcome = RoundOutcome(
            id=uuid.uuid4().hex,
            player_gesture=player_gesture,
            computer_gesture=computer_gesture,
            result=result,
            timestamp=time.time()
        )
        self.history.add(outcome)
        self.statistics.record(result)

        self._processing_until = now + self.PROCESSING_SECONDS

        logger.info(f"回合确认: 玩家={player_gesture}, 电脑={computer_gesture}, 结果={result}")

        if self.on_round_committed:
            self.on_round_committed(outcome)

        return outcome

    def reset(self):
        """清空历史、统计和锁状态"""
        self.history.clear()
        self.statistics = GameStatistics()
        self._locked_until = None
        self._processing_until = None
        logger.info("回合结算器已重置")
