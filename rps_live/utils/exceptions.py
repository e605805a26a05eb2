"""
自定义异常类
Custom Exception Classes

所有异常都继承自 RPSLiveException，附加字段用于错误处理器输出上下文。
"""
from typing import Any, Dict, Optional


class RPSLiveException(Exception):
    """项目异常基类"""

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def __str__(self):
        if not self.details:
            return self.message
        extra = ", ".join(f"{k}={v}" for k, v in self.details.items() if v is not None)
        return f"{self.message} ({extra})" if extra else self.message


class HardwareException(RPSLiveException):
    """帧源硬件异常基类"""

    def __init__(self, message: str, hardware_type: Optional[str] = None, **details: Any):
        super().__init__(message, hardware_type=hardware_type, **details)
        self.hardware_type = hardware_type


class CameraException(HardwareException):
    """摄像头/图片目录采集失败"""

    def __init__(self, message: str, error_code: Optional[int] = None):
        super().__init__(message, hardware_type="camera", error_code=error_code)
        self.error_code = error_code


class RecognitionException(RPSLiveException):
    """帧分类失败"""

    def __init__(self, message: str, confidence: Optional[float] = None):
        super().__init__(message, confidence=confidence)
        self.confidence = confidence


class GameException(RPSLiveException):
    """游戏流程异常"""

    def __init__(self, message: str, game_state: Optional[str] = None):
        super().__init__(message, game_state=game_state)
        self.game_state = game_state


class ConfigurationException(RPSLiveException):
    """配置缺失或取值非法"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, config_key=config_key)
        self.config_key = config_key
