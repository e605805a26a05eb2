"""
工具类模块
Utility Classes
"""
from .logger import setup_logger, setup_logger_from_config, configure_all_loggers, get_log_level
from .config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
from .error_handler import ErrorHandler, global_error_handler
from .periodic_task import PeriodicTask
from .exceptions import (
    RPSLiveException,
    HardwareException,
    CameraException,
    RecognitionException,
    GameException,
    ConfigurationException
)

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'configure_all_loggers',
    'get_log_level',
    'ConfigLoader',
    'DEFAULT_CONFIG_PATH',
    'ErrorHandler',
    'global_error_handler',
    'PeriodicTask',
    'RPSLiveException',
    'HardwareException',
    'CameraException',
    'RecognitionException',
    'GameException',
    'ConfigurationException'
]
