#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
pytest 配置文件

提供测试夹具和配置
"""

import sys
from pathlib import Path

import pytest

# 将 src 目录添加到 Python 路径
ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src"
sys.path.insert(0, str(SRC_DIR))

from linelog import LoggerConfig  # noqa: E402


@pytest.fixture(scope="session")
def project_root() -> Path:
    """项目根目录"""
    return ROOT_DIR


@pytest.fixture(scope="function")
def log_dir(tmp_path: Path) -> Path:
    """日志目录（每个测试函数独立）"""
    return tmp_path / "logs"


@pytest.fixture
def make_config(log_dir: Path):
    """创建测试用配置

    默认关闭控制台与调试镜像，使用纯文本前缀，行模板只保留消息，便于断言文件内容。
    """

    def _make(**overrides) -> LoggerConfig:
        data = {
            "name": "app",
            "directory": str(log_dir),
            "formatter": "plain",
            "line_format": "<message>",
            "console_disabled": True,
            "debug_mirror_disabled": True,
        }
        data.update(overrides)
        return LoggerConfig(**data)

    return _make


def read_lines(path) -> list:
    """读取日志文件的所有行，文件不存在时返回空列表"""
    path = Path(path)
    if not path.exists():
        return []
    return path.read_text(encoding="utf-8").splitlines()
