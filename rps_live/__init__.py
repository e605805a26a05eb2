"""
剪刀石头布实时手势游戏
Live Gesture Rock Paper Scissors
"""
__version__ = "0.1.0"
