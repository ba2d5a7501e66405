#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
linelog 使用示例

演示缓存写入、级别切换、重命名与子 logger
"""

import sys
from pathlib import Path

# 添加项目路径
ROOT_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT_DIR / "src"))

from linelog import Logger, LoggerConfig, LoggerMode, LogLevel


def main():
    hello = Logger(LoggerConfig(name="Hello", cache_size=3, max_retained_files=2))
    world = Logger(LoggerConfig(name="World", mode=LoggerMode.REALTIME, max_retained_files=1))
    moved = Logger(LoggerConfig(name="RenameTest", mode=LoggerMode.REALTIME, max_retained_files=1))

    for x in range(5):
        hello.info("Line {0}", x)

    world.info("World Info")
    world.warning("World Warning")
    world.debug("Pre level set")
    world.set_level(LogLevel.DEBUG)
    world.debug("After level set")

    moved.info("This logger")
    moved.rename("RenameTestMoved")
    moved.info("...was renamed!")

    db = hello.create_child("db", share_file=True)
    db.info("child lines go to {0}", hello.log_path)

    cache = hello.create_child("cache")
    cache.info("child lines go to {0}", cache.log_path)

    # CACHED 模式退出前显式写出
    hello.close()


if __name__ == "__main__":
    main()
