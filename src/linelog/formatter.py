# -*- coding: utf-8 -*-
"""
行格式化器

将 (级别, 消息模板, 填充参数) 渲染为一行日志文本。

行模板支持以下占位符（区分大小写，可出现 0 次或多次，顺序任意）：
- <time>     当前时间
- <level>    级别前缀
- <name>     logger 名称
- <message>  消息内容

示例：
[2021-09-17 23:00:00] [INFO   ] app: Hello World
"""

import re
from datetime import datetime
from typing import Any, Optional, Sequence

from .errors import MessageFormatError
from .levels import LogFormatter, LogLevel

# ANSI 颜色转义序列：ESC[<digits>m
ANSI_ESCAPE_RE = re.compile(r"\x1b\[\d+m")

PREFIX_WIDTH = 7


def strip_ansi(text: str) -> str:
    """去除文本中的颜色转义序列"""
    return ANSI_ESCAPE_RE.sub("", text)


def interpolate(message: str, fillers: Sequence[Any]) -> str:
    """用填充参数替换消息模板中的位置占位符（{0}、{1} ...）

    无论是否提供填充参数都会执行插值，字面花括号需写成 {{ 和 }}。

    Raises:
        MessageFormatError: 占位符与参数不匹配
    """
    try:
        return message.format(*fillers)
    except (IndexError, KeyError, ValueError) as e:
        raise MessageFormatError(
            f"cannot format message {message!r} with {len(fillers)} filler(s): {e}"
        ) from e


def render(template: str, time: str, prefix: str, name: str, message: str) -> str:
    """按字面替换模板中的四个占位符"""
    return (
        template.replace("<time>", time)
        .replace("<level>", prefix)
        .replace("<name>", name)
        .replace("<message>", message)
    )


class LineFormatter:
    """级别前缀与行渲染

    支持三种前缀风格：
    - PLAIN: 大写级别名，右侧补空格至 7 个字符
    - EMOJI: 每个级别固定的符号，不补齐
    - COLOUR: 补齐后的级别名包裹在颜色转义序列中
    """

    # 级别文本映射，内部哨兵级别使用固定填充
    LEVEL_TEXT = {
        LogLevel.DEBUG: "DEBUG",
        LogLevel.INFO: "INFO",
        LogLevel.WARNING: "WARNING",
        LogLevel.ERROR: "ERROR",
    }
    FILLER = "-------"

    EMOJI = {
        LogLevel.DEBUG: "🔵",
        LogLevel.INFO: "ℹ️",
        LogLevel.WARNING: "⚠️",
        LogLevel.ERROR: "❌",
        LogLevel.ALWAYS: "💭",
    }
    EMOJI_FILLER = "--"

    # 颜色代码
    COLORS = {
        LogLevel.DEBUG: "\033[35m",    # 紫色
        LogLevel.INFO: "\033[34m",     # 蓝色
        LogLevel.WARNING: "\033[33m",  # 黄色
        LogLevel.ERROR: "\033[31m",    # 红色
        LogLevel.ALWAYS: "\033[34m",
    }
    RESET = "\033[0m"

    def __init__(self, style: LogFormatter = LogFormatter.PLAIN):
        self.style = style

    def _level_text(self, level: LogLevel) -> str:
        return self.LEVEL_TEXT.get(level, self.FILLER).ljust(PREFIX_WIDTH)

    def prefix(self, level: LogLevel) -> str:
        """获取级别前缀

        Args:
            level: 日志级别

        Returns:
            str: 按当前风格渲染的前缀
        """
        if self.style == LogFormatter.EMOJI:
            return self.EMOJI.get(level, self.EMOJI_FILLER)

        text = self._level_text(level)
        if self.style == LogFormatter.COLOUR:
            color = self.COLORS.get(level, "")
            if color:
                return f"{color}{text}{self.RESET}"
        return text

    def format(
        self,
        template: str,
        level: LogLevel,
        name: str,
        message: str,
        time_format: str,
        now: Optional[datetime] = None,
    ) -> str:
        """渲染一行日志

        Args:
            template: 行模板
            level: 日志级别
            name: logger 名称
            message: 已插值的消息
            time_format: 时间格式
            now: 时间，默认当前时间

        Returns:
            str: 渲染后的行（COLOUR 风格下包含颜色转义序列）
        """
        now = now or datetime.now()
        return render(template, now.strftime(time_format), self.prefix(level), name, message)
