"""
游戏逻辑模块
Game Logic Module
"""
from .game_controller import GameController
from .game_logic import (
    Gesture, GameRules, GameResult, RoundResolver, RoundOutcome, RoundHistory, GameStatistics
)
from .state_machine import GameState, RoundPhase, GameStateMachine
from .gesture_recognition import (
    DetectionResult, DetectionAggregator, FrameClassifier, FrameSampler, SizeSampleWindow
)

__all__ = [
    'GameController',
    'Gesture',
    'GameRules',
    'GameResult',
    'RoundResolver',
    'RoundOutcome',
    'RoundHistory',
    'GameStatistics',
    'GameState',
    'RoundPhase',
    'GameStateMachine',
    'DetectionResult',
    'DetectionAggregator',
    'FrameClassifier',
    'FrameSampler',
    'SizeSampleWindow'
]
