"""
日志工具模块
Logger Utility Module
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_log_level(level_str: str) -> int:
    """
    从字符串获取日志级别

    Args:
        level_str: 日志级别字符串（DEBUG, INFO, WARNING, ERROR, CRITICAL）

    Returns:
        int: 日志级别，无法识别时返回 INFO
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    return level_map.get(str(level_str).upper(), logging.INFO)


def setup_logger(
    name: str = "RPSLive",
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    设置日志记录器

    同名记录器只配置一次，重复调用只会调整级别，不会重复添加处理器。

    Args:
        name: 日志记录器名称
        log_file: 日志文件路径（可选）
        level: 日志级别
        format_string: 日志格式字符串（可选）

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    # 控制台处理器
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 文件处理器（如果指定）
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # 子记录器（RPSLive.Xxx）自己带处理器，不再向上传播避免重复输出
    logger.propagate = False
    return logger


def setup_logger_from_config(config: Dict[str, Any], name: str = "RPSLive") -> logging.Logger:
    """
    从配置字典设置日志记录器

    Args:
        config: 配置字典（包含level和file键）
        name: 日志记录器名称

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    level = get_log_level(config.get('level', 'INFO'))
    log_file = config.get('file')

    return setup_logger(name=name, log_file=log_file, level=level)


def configure_all_loggers(config: Dict[str, Any], prefix: str = "RPSLive") -> Optional[logging.FileHandler]:
    """
    把日志配置应用到所有已创建的项目日志记录器

    各模块在导入时已经用默认级别创建了记录器，加载配置文件后调用一次即可。

    Args:
        config: 日志配置字典（包含level和file键）
        prefix: 记录器名称前缀

    Returns:
        Optional[logging.FileHandler]: 所有记录器共用的文件处理器，未配置文件时为None
    """
    level = get_log_level(config.get('level', 'INFO'))
    log_file = config.get('file')

    names = [name for name in logging.Logger.manager.loggerDict
             if name == prefix or name.startswith(prefix + ".")]
    shared_handler: Optional[logging.FileHandler] = None
    for name in names:
        logger = setup_logger(name=name, level=level)
        if not log_file or any(isinstance(h, logging.FileHandler) for h in logger.handlers):
            continue

        # 同一个日志文件只打开一次，所有记录器共用
        if shared_handler is None:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            shared_handler = logging.FileHandler(log_path, encoding="utf-8")
            shared_handler.setLevel(level)
            shared_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(shared_handler)

    return shared_handler
