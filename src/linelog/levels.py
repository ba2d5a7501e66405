# -*- coding: utf-8 -*-
"""
日志级别与枚举定义

- LogLevel: 日志级别，DEBUG < INFO < WARNING < ERROR
- LoggerMode: 缓冲模式（实时写入 / 缓存写入）
- LogFormatter: 级别前缀的展示风格
- OutputState: 控制台 / 调试镜像输出开关
"""

import logging
from enum import Enum, IntEnum


class LogLevel(IntEnum):
    """日志级别枚举

    ALWAYS 为内部哨兵级别，总能通过级别过滤，用于记录 logger 自身的状态变化。
    """
    DEBUG = 0
    INFO = 1
    WARNING = 2
    WARN = 2
    ERROR = 3
    ALWAYS = 999


class LoggerMode(str, Enum):
    """缓冲模式枚举"""
    REALTIME = "realtime"
    CACHED = "cached"


class LogFormatter(str, Enum):
    """级别前缀风格枚举"""
    PLAIN = "plain"
    EMOJI = "emoji"
    COLOUR = "colour"


class OutputState(str, Enum):
    """输出开关枚举"""
    ENABLED = "enabled"
    DISABLED = "disabled"


# 日志级别名称映射
LEVEL_MAP = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
}

# 与标准库 logging 级别的对应关系（调试镜像使用）
STDLIB_LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.ALWAYS: logging.INFO,
}


def parse_level(value) -> LogLevel:
    """解析日志级别

    Args:
        value: LogLevel、整数或级别名称（不区分大小写）

    Returns:
        LogLevel: 对应的日志级别

    Raises:
        ValueError: 无法识别的级别
    """
    if isinstance(value, LogLevel):
        return value
    if isinstance(value, int):
        return LogLevel(value)
    if isinstance(value, str):
        key = value.strip().lower()
        if key in LEVEL_MAP:
            return LEVEL_MAP[key]
    raise ValueError(f"unknown log level: {value!r}")
