"""
行缓冲模块测试
"""

import threading

import pytest

from linelog import LineBuffer, LoggerMode

from conftest import read_lines


@pytest.fixture
def buffer(make_config, log_dir):
    log_dir.mkdir(parents=True, exist_ok=True)
    config = make_config(cache_size=3, cache_bypass_length=20)
    return LineBuffer(config)


class TestLineBuffer:
    """LineBuffer 测试"""

    def test_below_threshold_stays_buffered(self, buffer):
        """测试未达到阈值时不写入"""
        buffer.append("one", 3)
        buffer.append("two", 3)

        assert buffer.lines == ["one", "two"]
        assert read_lines(buffer.config.log_path) == []

    def test_threshold_flushes_in_order(self, buffer):
        """测试达到阈值时按顺序写入全部行"""
        for line in ("one", "two", "three"):
            buffer.append(line, len(line))

        assert len(buffer) == 0
        assert read_lines(buffer.config.log_path) == ["one", "two", "three"]

    def test_bypass_length_flushes(self, buffer):
        """测试超长消息立即写入"""
        buffer.append("short", 5)
        buffer.append("x" * 20, 20)

        assert read_lines(buffer.config.log_path) == ["short", "x" * 20]

    def test_realtime_flushes_every_line(self, buffer):
        """测试实时模式每行写入"""
        buffer.config.mode = LoggerMode.REALTIME
        buffer.append("one", 3)
        assert read_lines(buffer.config.log_path) == ["one"]
        buffer.append("two", 3)
        assert read_lines(buffer.config.log_path) == ["one", "two"]

    def test_flush_empty_is_noop(self, buffer):
        """测试空缓冲写入不创建文件"""
        assert buffer.flush() == 0
        assert read_lines(buffer.config.log_path) == []

    def test_flush_appends_trailing_newline(self, buffer):
        """测试写入内容以换行结尾且为追加模式"""
        buffer.append("one", 3)
        buffer.flush()
        buffer.append("two", 3)
        buffer.flush()

        with open(buffer.config.log_path, encoding="utf-8") as f:
            assert f.read() == "one\ntwo\n"

    def test_hold_suppresses_auto_flush(self, buffer):
        """测试暂停期间不自动写入"""
        buffer.hold = True
        for line in ("one", "two", "three", "four"):
            buffer.append(line, len(line))

        assert read_lines(buffer.config.log_path) == []
        assert buffer.flush() == 4

    def test_concurrent_append(self, buffer):
        """测试并发追加不丢行"""
        buffer.config.cache_size = 7

        def worker(idx):
            for n in range(50):
                buffer.append(f"{idx}-{n}", 4)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        buffer.flush()

        lines = read_lines(buffer.config.log_path)
        assert len(lines) == 200
        assert sorted(lines) == sorted(f"{i}-{n}" for i in range(4) for n in range(50))
        # 同一线程内的顺序保持不变
        assert [l for l in lines if l.startswith("0-")] == [f"0-{n}" for n in range(50)]

    def test_missing_directory_propagates(self, make_config, tmp_path):
        """测试目录不存在时写入失败向上抛出"""
        config = make_config(directory=str(tmp_path / "missing"))
        buf = LineBuffer(config)
        buf.hold = True
        buf.append("one", 3)
        with pytest.raises(OSError):
            buf.flush()
