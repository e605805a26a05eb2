"""
硬件实现模块
Hardware Implementations
"""
