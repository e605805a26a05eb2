"""
游戏规则实现
Game Rules Implementation
"""
import random
from typing import Optional
from enum import Enum
from .gesture import Gesture, PLAYABLE_GESTURES
from ...utils.logger import setup_logger

logger = setup_logger("RPSLive.GameRules")


class GameResult(Enum):
    """游戏结果枚举（以玩家视角）"""
    WIN = "Win"      # 玩家获胜
    LOSE = "Lose"    # 玩家失败
    DRAW = "Draw"    # 平局

    def __str__(self):
        return self.value


class GameRules:
    """游戏规则类"""

    # 胜负规则：key胜value
    WIN_RULES = {
        Gesture.ROCK: Gesture.SCISSORS,      # 石头胜剪刀
        Gesture.SCISSORS: Gesture.PAPER,     # 剪刀胜布
        Gesture.PAPER: Gesture.ROCK          # 布胜石头
    }

    @staticmethod
    def resolve(player_gesture: Gesture, computer_gesture: Gesture) -> GameResult:
        """
        判断游戏结果

        相同手势为平局；玩家手势克制电脑手势为胜；其余情况一律为负。

        Args:
            player_gesture: 玩家手势
            computer_gesture: 电脑手势

        Returns:
            GameResult: 游戏结果
        """
        if player_gesture == computer_gesture:
            logger.debug(f"平局: {player_gesture}")
            return GameResult.DRAW

        if GameRules.WIN_RULES.get(player_gesture) == computer_gesture:
            logger.debug(f"玩家获胜: {player_gesture} 胜 {computer_gesture}")
            return GameResult.WIN

        logger.debug(f"电脑获胜: {computer_gesture} 胜 {player_gesture}")
        return GameResult.LOSE

    @staticmethod
    def random_gesture(rng: Optional[random.Random] = None) -> Gesture:
        """
        均匀随机选择电脑手势

        Args:
            rng: 随机数生成器（可选，测试时注入）

        Returns:
            Gesture: 石头、剪刀或布
        """
        return (rng or random).choice(PLAYABLE_GESTURES)
