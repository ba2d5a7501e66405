# -*- coding: utf-8 -*-
"""异常定义"""


class LineLogError(Exception):
    """linelog 异常基类"""


class MessageFormatError(LineLogError, ValueError):
    """消息模板与填充参数不匹配"""


class RenameError(LineLogError):
    """日志文件重命名失败"""

    def __init__(self, old_path: str, new_path: str, reason: str):
        self.old_path = old_path
        self.new_path = new_path
        self.reason = reason
        super().__init__(f"cannot move '{old_path}' to '{new_path}': {reason}")
