# -*- coding: utf-8 -*-
"""
日志轮转模块

在 logger 创建时（以及非子 logger 重命名成功时）按保留数量轮转历史日志：

- 保留 0 个：删除当前日志文件
- 保留 1 个：foo.log -> foo.previous.log
- 保留 N 个（N >= 2）：删除 foo.N.log，依次 foo.k.log -> foo.(k+1).log，
  最后 foo.log -> foo.1.log

轮转时任意位置缺失文件都直接跳过，不视为错误。
调用方需保证轮转期间没有打开的写句柄。
"""

import logging
import os

logger = logging.getLogger(__name__)

PREVIOUS_SLOT = "previous"


def rotated_path(filepath: str, slot) -> str:
    """生成历史日志文件路径

    Args:
        filepath: 当前日志文件路径，如 logs/foo.log
        slot: 序号或 "previous"

    Returns:
        str: 历史文件路径，如 logs/foo.1.log
    """
    root, ext = os.path.splitext(filepath)
    return f"{root}.{slot}{ext}"


def _remove(filepath: str) -> None:
    if os.path.exists(filepath):
        os.remove(filepath)
        logger.debug(f"Deleted old log file: {filepath}")


def _move(src: str, dst: str) -> None:
    if os.path.exists(src):
        os.replace(src, dst)
        logger.debug(f"Rotated log file: {src} -> {dst}")


def rotate(filepath: str, max_retained: int) -> None:
    """轮转日志文件

    Args:
        filepath: 当前日志文件路径
        max_retained: 历史日志保留数量

    Raises:
        OSError: 删除或移动文件失败
    """
    if max_retained < 0:
        raise ValueError(f"max_retained must be >= 0, got {max_retained}")

    if max_retained == 0:
        _remove(filepath)
        return

    if max_retained == 1:
        previous = rotated_path(filepath, PREVIOUS_SLOT)
        _remove(previous)
        _move(filepath, previous)
        return

    for seq in range(max_retained, 0, -1):
        seq_path = rotated_path(filepath, seq)
        if seq == max_retained:
            # 最旧的序号直接淘汰
            _remove(seq_path)
            continue
        _move(seq_path, rotated_path(filepath, seq + 1))

    _move(filepath, rotated_path(filepath, 1))
