"""
游戏状态机模块
Game State Machine Module
"""
from .game_state import GameState, RoundPhase
from .game_state_machine import GameStateMachine

__all__ = ['GameState', 'RoundPhase', 'GameStateMachine']
