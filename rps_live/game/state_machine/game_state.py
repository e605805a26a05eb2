"""
游戏状态枚举
Game State Enumeration
"""
from enum import Enum, auto


class GameState(Enum):
    """界面流程状态"""
    IDLE = auto()              # 首页，还没有回合结果
    LIVE_CAPTURE = auto()      # 实时识别中
    RESULT_SHOWING = auto()    # 显示上一回合结果

    def __str__(self):
        return self.name


class RoundPhase(Enum):
    """单个回合的阶段"""
    IDLE = auto()                  # 无锁，没有累计帧
    STREAK_ACCUMULATING = auto()   # 正在累计连续帧
    COMMITTED = auto()             # 刚确认，回合锁与处理中标志均生效
    COOLING_DOWN = auto()          # 仅回合锁生效

    def __str__(self):
        return self.name
