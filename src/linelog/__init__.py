# -*- coding: utf-8 -*-
"""
linelog - 可嵌入的行缓冲日志库

支持：
- 按级别过滤的文本日志行
- 实时写入 / 按行数阈值批量写入
- 启动时按保留数量轮转历史日志文件
- 重命名 logger 与日志文件（失败自动回滚）
- 子 logger（独立文件或与父 logger 共用文件）
"""

import logging

from .__version__ import __version__
from .buffer import LineBuffer
from .config import LoggerConfig
from .errors import LineLogError, MessageFormatError, RenameError
from .formatter import LineFormatter, interpolate, render, strip_ansi
from .levels import LogFormatter, LoggerMode, LogLevel, OutputState
from .logger import Logger
from .rotate import rotate, rotated_path

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # 配置
    "LoggerConfig",
    "LogFormatter",
    "LoggerMode",
    "LogLevel",
    "OutputState",
    # 核心
    "Logger",
    "LineBuffer",
    "LineFormatter",
    "rotate",
    "rotated_path",
    # 格式化工具
    "interpolate",
    "render",
    "strip_ansi",
    # 异常
    "LineLogError",
    "MessageFormatError",
    "RenameError",
]
