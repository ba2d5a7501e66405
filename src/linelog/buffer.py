# -*- coding: utf-8 -*-
"""
行缓冲模块

按发出顺序缓存已格式化的日志行，并根据所属 logger 的配置决定何时写入磁盘：
- REALTIME 模式每行立即写入
- CACHED 模式缓存行数达到 cache_size 时写入
- 单条消息长度达到 cache_bypass_length 时立即写入
"""

import logging
import threading
from typing import List

from .config import LoggerConfig
from .levels import LoggerMode

logger = logging.getLogger(__name__)


class LineBuffer:
    """日志行缓冲

    写入路径、编码与写入策略均读取自所属 logger 的配置。
    append/flush 可在多线程中并发调用：flush 先在锁内取快照并清空，再写文件，
    写文件期间追加的行保留到下一次 flush。
    """

    def __init__(self, config: LoggerConfig):
        self.config = config
        self._lines: List[str] = []
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()
        # 重命名期间暂停自动写入
        self.hold = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    @property
    def lines(self) -> List[str]:
        """当前缓存行的快照"""
        with self._lock:
            return list(self._lines)

    def _should_flush(self, count: int, raw_length: int) -> bool:
        if self.hold:
            return False
        return (
            self.config.mode == LoggerMode.REALTIME
            or count >= self.config.cache_size
            or raw_length >= self.config.cache_bypass_length
        )

    def append(self, line: str, raw_length: int) -> None:
        """追加一行并判断是否需要写入

        Args:
            line: 已格式化的日志行
            raw_length: 原始消息长度
        """
        with self._lock:
            self._lines.append(line)
            count = len(self._lines)

        if self._should_flush(count, raw_length):
            self.flush()

    def flush(self) -> int:
        """将缓存行追加写入日志文件

        Returns:
            int: 写入的行数

        Raises:
            OSError: 写文件失败（磁盘满、目录不存在等）
        """
        with self._write_lock:
            with self._lock:
                if not self._lines:
                    return 0
                cache = self._lines
                self._lines = []

            with open(self.config.log_path, "a", encoding=self.config.encoding) as f:
                f.write("\n".join(cache) + "\n")

            logger.debug(f"Flushed {len(cache)} line(s) to {self.config.log_path}")
            return len(cache)
