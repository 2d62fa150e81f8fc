"""
剪刀石头布摄像头游戏
Rock Paper Scissors Camera Game
"""
__version__ = "0.1.0"
