# -*- coding: utf-8 -*-
"""
Logger 配置模块

LoggerConfig 是 Logger 独占的值对象，支持：
- Pydantic 字段校验与默认值
- 字典 / YAML 配置文件加载
- 显式克隆（创建子 logger 时使用，不与父配置共享任何可变状态）

示例 YAML 配置:
```yaml
logger:
  name: "app"
  mode: cached
  level: info
  cache_size: 30
  cache_bypass_length: 5000
  line_format: "[<time>] [<level>] <name>: <message>"
  time_format: "%Y-%m-%d %H:%M:%S"
  directory: "./logs/"
  max_retained_files: 5
  formatter: colour
```
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .levels import LoggerMode, LogFormatter, LogLevel, OutputState, parse_level

logger = logging.getLogger(__name__)

DEFAULT_LINE_FORMAT = "[<time>] [<level>] <name>: <message>"
DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _output_disabled(state: Union[OutputState, bool]) -> bool:
    if isinstance(state, OutputState):
        return state == OutputState.DISABLED
    return not state


class LoggerConfig(BaseModel):
    """Logger 配置

    Attributes:
        name: logger 名称，与 directory 一起决定日志文件路径
        mode: 缓冲模式，REALTIME 每行写入，CACHED 达到阈值后写入
        level: 最低输出级别
        cache_size: CACHED 模式下触发写入的缓存行数
        cache_bypass_length: 单条消息长度达到该值时立即写入
        line_format: 行模板，支持 <time> <level> <name> <message>
        time_format: 时间格式（strftime）
        directory: 日志目录
        log_path: 当前日志文件路径，为空时由 directory/name.log 推导
        max_retained_files: 历史日志保留数量
        formatter: 级别前缀风格
        encoding: 日志文件编码
        console_disabled: 是否关闭控制台输出
        debug_mirror_disabled: 是否关闭调试镜像输出
        is_child: 是否为子 logger
        share_file_with_parent: 子 logger 是否与父 logger 共用文件
    """

    name: str = Field(min_length=1, description="logger 名称")
    mode: LoggerMode = Field(default=LoggerMode.CACHED, description="缓冲模式")
    level: LogLevel = Field(default=LogLevel.INFO, description="最低输出级别")
    cache_size: int = Field(default=30, ge=0, description="缓存行数阈值")
    cache_bypass_length: int = Field(default=5000, ge=0, description="立即写入的消息长度")
    line_format: str = Field(default=DEFAULT_LINE_FORMAT, description="行模板")
    time_format: str = Field(default=DEFAULT_TIME_FORMAT, description="时间格式")
    directory: str = Field(default="./logs/", description="日志目录")
    log_path: str = Field(default="", description="日志文件路径")
    max_retained_files: int = Field(default=5, ge=0, description="历史日志保留数量")
    formatter: LogFormatter = Field(default=LogFormatter.COLOUR, description="级别前缀风格")
    encoding: str = Field(default="utf-8", description="日志文件编码")
    console_disabled: bool = Field(default=False, description="关闭控制台输出")
    debug_mirror_disabled: bool = Field(default=False, description="关闭调试镜像输出")
    is_child: bool = Field(default=False, description="是否为子 logger")
    share_file_with_parent: bool = Field(default=False, description="与父 logger 共用文件")

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v):
        """解析日志级别"""
        return parse_level(v)

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v):
        """解析缓冲模式"""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("formatter", mode="before")
    @classmethod
    def validate_formatter(cls, v):
        """解析前缀风格，兼容 color / default 写法"""
        if isinstance(v, str):
            v = v.strip().lower()
            return {"color": "colour", "default": "plain"}.get(v, v)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @model_validator(mode="after")
    def derive_log_path(self) -> "LoggerConfig":
        """推导日志文件路径"""
        if not self.log_path:
            self.log_path = self.path_for(self.name)
        return self

    def path_for(self, name: str) -> str:
        """计算指定名称对应的日志文件路径"""
        return os.path.join(self.directory, f"{name}.log")

    def update_log_path(self) -> str:
        """根据当前名称刷新日志文件路径

        Returns:
            str: 刷新前的路径
        """
        old_path = self.log_path
        self.log_path = self.path_for(self.name)
        return old_path

    def set_name(self, name: str) -> str:
        """修改名称（不改动路径）

        Returns:
            str: 修改前的名称
        """
        if not name or not name.strip():
            raise ValueError("name must not be blank")
        old_name = self.name
        self.name = name
        return old_name

    def set_level(self, level) -> None:
        self.level = parse_level(level)

    def set_output_states(
        self,
        console: Union[OutputState, bool] = OutputState.ENABLED,
        debug: Union[OutputState, bool] = OutputState.ENABLED,
    ) -> None:
        """设置控制台 / 调试镜像输出开关"""
        self.console_disabled = _output_disabled(console)
        self.debug_mirror_disabled = _output_disabled(debug)

    def mark_as_child(self, share_file: bool = False) -> None:
        self.is_child = True
        self.share_file_with_parent = share_file

    def make_directories(self) -> None:
        """创建日志目录"""
        Path(self.directory).mkdir(parents=True, exist_ok=True)

    def clone(self) -> "LoggerConfig":
        """克隆配置

        逐字段按值复制，并重置父子关系字段，由调用方重新设置子 logger 相关属性。
        """
        return LoggerConfig(
            name=self.name,
            mode=self.mode,
            level=self.level,
            cache_size=self.cache_size,
            cache_bypass_length=self.cache_bypass_length,
            line_format=self.line_format,
            time_format=self.time_format,
            directory=self.directory,
            log_path=self.log_path,
            max_retained_files=self.max_retained_files,
            formatter=self.formatter,
            encoding=self.encoding,
            console_disabled=self.console_disabled,
            debug_mirror_disabled=self.debug_mirror_disabled,
            is_child=False,
            share_file_with_parent=False,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggerConfig":
        """从字典创建配置

        Args:
            data: 配置字典，支持顶层 logger 节点

        Returns:
            LoggerConfig: 配置实例
        """
        if "logger" in data and isinstance(data["logger"], dict):
            data = data["logger"]
        # 父子关系只能通过 Logger.create_child 建立
        data = {k: v for k, v in data.items() if k not in ("is_child", "share_file_with_parent")}
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str) -> "LoggerConfig":
        """从 YAML 文件加载配置"""
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        logger.debug(f"Loaded logger config from {path}")
        return cls.from_dict(data)
