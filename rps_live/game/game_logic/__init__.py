"""
游戏逻辑模块
Game Logic Module
"""
from .gesture import Gesture, PLAYABLE_GESTURES
from .game_rules import GameRules, GameResult
from .round_resolver import RoundResolver, RoundOutcome, RoundHistory, GameStatistics

__all__ = [
    'Gesture',
    'PLAYABLE_GESTURES',
    'GameRules',
    'GameResult',
    'RoundResolver',
    'RoundOutcome',
    'RoundHistory',
    'GameStatistics'
]
