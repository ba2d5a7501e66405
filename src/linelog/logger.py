# -*- coding: utf-8 -*-
"""
Logger 模块

Logger 负责：
- 按级别过滤并格式化日志行
- 将行写入自身缓冲，或（共享文件的子 logger）写入父 logger 的缓冲
- 创建时轮转历史日志
- 重命名 logger / 日志文件，失败时回滚并记录错误而不是抛出
- 管理子 logger

示例：
    config = LoggerConfig(name="app", mode=LoggerMode.CACHED, cache_size=10)
    with Logger(config) as log:
        log.info("Hello {0}", "World")
        db = log.create_child("db", share_file=True)
        db.warning("slow query: {0}ms", 1200)

注意：CACHED 模式下退出前需要调用 flush()/close()，
垃圾回收或解释器退出时的自动写入只是兜底，不保证一定执行。
"""

import logging
import os
import sys
import traceback
import weakref
from typing import List, Optional, Type, Union

from .buffer import LineBuffer
from .config import LoggerConfig
from .errors import RenameError
from .formatter import LineFormatter, interpolate, strip_ansi
from .levels import STDLIB_LEVEL_MAP, LogFormatter, LogLevel, OutputState
from .rotate import rotate

logger = logging.getLogger(__name__)

MIRROR_LOGGER_PREFIX = "linelog.mirror"


def _flush_at_exit(buffer: LineBuffer) -> None:
    """兜底写入，失败只记录不抛出"""
    try:
        buffer.flush()
    except OSError as e:
        logger.warning(f"Failed to flush pending lines to {buffer.config.log_path}: {e}")


def _describe_exception(exc: BaseException) -> str:
    tb = "".join(traceback.format_tb(exc.__traceback__)).rstrip()
    return f"{exc}\n{tb}" if tb else str(exc)


def _move_target_problem(new_path: str) -> Optional[str]:
    """日志文件无法移动到 new_path 的原因，可以移动时返回 None"""
    directory = os.path.dirname(os.path.abspath(new_path))
    if not os.path.isdir(directory):
        return f"directory {directory} does not exist"
    if os.path.isdir(new_path):
        return f"{new_path} is a directory"
    return None


class Logger:
    """带行缓冲与文件轮转的 logger

    Args:
        config: logger 独占的配置
        parent: 父 logger，仅由 create_child 传入
    """

    def __init__(self, config: LoggerConfig, parent: Optional["Logger"] = None):
        if config.is_child and parent is None:
            raise ValueError("child logger config requires a parent")

        self.config = config
        self._parent = weakref.ref(parent) if parent is not None else None
        self._children: List["Logger"] = []
        self._buffer = LineBuffer(config)
        self._formatter = LineFormatter(config.formatter)

        if not self.shares_parent_file:
            config.make_directories()
            rotate(config.log_path, config.max_retained_files)

        self._finalizer = weakref.finalize(self, _flush_at_exit, self._buffer)

    def __repr__(self) -> str:
        return f"Logger(name={self.name!r}, log_path={self.log_path!r})"

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ======================== 属性 ========================

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def log_path(self) -> str:
        return self.config.log_path

    @property
    def level(self) -> LogLevel:
        return self.config.level

    @property
    def parent(self) -> Optional["Logger"]:
        """父 logger，非子 logger 或父 logger 已被回收时返回 None"""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def children(self) -> tuple:
        return tuple(self._children)

    @property
    def shares_parent_file(self) -> bool:
        return self.config.is_child and self.config.share_file_with_parent

    @property
    def pending_lines(self) -> List[str]:
        """自身缓冲中尚未写入的行"""
        return self._buffer.lines

    # ======================== 输出 ========================

    def _target_buffer(self) -> LineBuffer:
        if self.shares_parent_file:
            parent = self.parent
            if parent is not None:
                return parent._buffer
        return self._buffer

    def _mirror(self, level: LogLevel, line: str) -> None:
        if self.config.debug_mirror_disabled:
            return
        mirror = logging.getLogger(f"{MIRROR_LOGGER_PREFIX}.{self.config.name}")
        mirror.log(STDLIB_LEVEL_MAP.get(level, logging.INFO), line)

    def _echo(self, line: str) -> None:
        if self.config.console_disabled:
            return
        try:
            sys.stdout.write(line + "\n")
        except (OSError, ValueError):
            # 控制台不可用时不影响文件输出
            pass

    def emit(
        self,
        level: LogLevel,
        message: str,
        *fillers,
        exc_info: Union[BaseException, bool, None] = None,
    ) -> None:
        """记录一条日志

        Args:
            level: 日志级别，低于配置级别的消息直接丢弃
            message: 消息模板，使用 {0}、{1} 位置占位符
            fillers: 填充参数
            exc_info: 异常对象，或 True 表示当前正在处理的异常

        Raises:
            MessageFormatError: 占位符与填充参数不匹配
        """
        if level < self.config.level:
            return

        msg = interpolate(message, fillers)
        if exc_info is True:
            exc_info = sys.exc_info()[1]
        if isinstance(exc_info, BaseException):
            msg = f"{msg}\n{_describe_exception(exc_info)}"

        self._write(level, msg)

    def _write(self, level: LogLevel, msg: str) -> None:
        # msg 已是最终文本，不再插值
        cfg = self.config
        if level < cfg.level:
            return

        line = self._formatter.format(cfg.line_format, level, cfg.name, msg, cfg.time_format)
        plain = strip_ansi(line) if cfg.formatter == LogFormatter.COLOUR else line

        self._mirror(level, plain)
        self._echo(line)
        self._target_buffer().append(plain, len(msg))

    def _log_internal(self, message: str) -> None:
        self._write(LogLevel.ALWAYS, message)

    def debug(self, message: str, *fillers) -> None:
        self.emit(LogLevel.DEBUG, message, *fillers)

    def info(self, message: str, *fillers) -> None:
        self.emit(LogLevel.INFO, message, *fillers)

    def log(self, message: str, *fillers) -> None:
        self.emit(LogLevel.INFO, message, *fillers)

    def warning(self, message: str, *fillers) -> None:
        self.emit(LogLevel.WARNING, message, *fillers)

    warn = warning

    def error(
        self,
        message: str,
        *fillers,
        exc_info: Union[BaseException, bool, None] = None,
    ) -> None:
        """记录错误日志，传入 exc_info 时追加异常信息与堆栈"""
        self.emit(LogLevel.ERROR, message, *fillers, exc_info=exc_info)

    def exception(self, exc: BaseException) -> None:
        """仅记录异常信息与堆栈"""
        self._write(LogLevel.ERROR, _describe_exception(exc))

    # ======================== 配置变更 ========================

    def set_level(self, level: LogLevel) -> None:
        self.config.set_level(level)
        self._log_internal(f"Log level changed to '{self.config.level.name}'.")

    def set_output_states(
        self,
        console: Union[OutputState, bool] = OutputState.ENABLED,
        debug: Union[OutputState, bool] = OutputState.ENABLED,
    ) -> None:
        """设置控制台 / 调试镜像输出开关"""
        self.config.set_output_states(console, debug)

    def set_name(self, name: str, rename_file: bool = False) -> bool:
        """修改 logger 名称

        rename_file 为 True 且不是子 logger 时，同时将日志文件移动到新名称对应的路径。
        子 logger 只修改内存中的名称，不会移动文件。

        重命名失败时名称与路径回滚为原值，并以 ERROR 级别记录失败原因，不向调用方抛出。

        Args:
            name: 新名称
            rename_file: 是否移动磁盘上的日志文件

        Returns:
            bool: 是否重命名成功
        """
        old_name = self.config.name
        try:
            if rename_file and not self.config.is_child:
                self._move_log_file(name)
            else:
                self.config.set_name(name)
        except (RenameError, OSError, ValueError) as e:
            self.error("Logger rename failed to complete:", exc_info=e)
            return False

        self._log_internal(f"Logger name was changed to '{name}' (was '{old_name}').")
        return True

    def rename(self, name: str, rename_file: bool = True) -> bool:
        return self.set_name(name, rename_file=rename_file)

    def _move_log_file(self, name: str) -> None:
        """写出缓存行，轮转新路径的历史日志后把当前日志文件移动过去

        轮转前先检查目标目录存在、目标路径不是目录，检查不通过时不会改动任何文件。
        检查通过后移动仍失败（如权限变化）时名称与路径会回滚，
        但新路径下已轮转的历史文件不会恢复。

        Raises:
            RenameError: 目标不可用或移动失败
        """
        cfg = self.config
        buffer = self._buffer
        old_name, old_path = cfg.name, cfg.log_path

        buffer.hold = True
        try:
            # 路径变化前写出缓存行
            buffer.flush()

            cfg.set_name(name)
            new_path = cfg.path_for(name)
            if os.path.abspath(new_path) == os.path.abspath(old_path):
                return

            reason = _move_target_problem(new_path) if os.path.exists(old_path) else None
            if reason:
                cfg.name = old_name
                raise RenameError(old_path, new_path, reason)

            cfg.log_path = new_path
            try:
                rotate(new_path, cfg.max_retained_files)
                if os.path.exists(old_path):
                    os.replace(old_path, new_path)
            except (OSError, ValueError) as e:
                cfg.name, cfg.log_path = old_name, old_path
                raise RenameError(old_path, new_path, getattr(e, "strerror", None) or str(e)) from e

            logger.debug(f"Moved log file {old_path} -> {new_path}")
        finally:
            buffer.hold = False

    # ======================== 子 logger ========================

    def create_child(
        self,
        name: str,
        share_file: bool = False,
        logger_class: Optional[Type["Logger"]] = None,
    ) -> "Logger":
        """创建子 logger

        子 logger 以本 logger 的配置为基础（深拷贝），名称为 "父名称.子名称"。
        share_file 为 True 时与父 logger 共用缓冲与日志文件，否则拥有独立的日志文件并执行轮转。

        Args:
            name: 子 logger 名称
            share_file: 是否与父 logger 共用日志文件
            logger_class: 子 logger 类型，默认与父 logger 相同

        Returns:
            Logger: 子 logger，由父 logger 持有
        """
        config = self.config.clone()
        config.mark_as_child(share_file=share_file)
        config.set_name(f"{config.name}.{name}")
        if not share_file:
            config.update_log_path()

        cls = logger_class or type(self)
        child = cls(config, parent=self)
        self._children.append(child)
        return child

    # ======================== 写入与关闭 ========================

    def flush(self) -> int:
        """立即写出待写入的行

        共享文件的子 logger 写出的是父 logger 的缓冲。

        Returns:
            int: 写入的行数
        """
        return self._target_buffer().flush()

    write_pending_lines = flush

    def close(self) -> None:
        """写出自身及所有子 logger 的待写入行

        可重复调用，关闭后仍可继续记录。
        """
        for child in self._children:
            child.close()
        self._buffer.flush()
