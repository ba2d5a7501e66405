"""
行格式化器测试
"""

from datetime import datetime

import pytest

from linelog import LogFormatter, LogLevel, MessageFormatError
from linelog.formatter import LineFormatter, interpolate, render, strip_ansi


class TestPrefix:
    """级别前缀测试"""

    def test_plain_padding(self):
        """测试纯文本前缀补齐到 7 个字符"""
        f = LineFormatter(LogFormatter.PLAIN)
        assert f.prefix(LogLevel.INFO) == "INFO   "
        assert f.prefix(LogLevel.WARNING) == "WARNING"
        assert f.prefix(LogLevel.ERROR) == "ERROR  "
        assert f.prefix(LogLevel.DEBUG) == "DEBUG  "

    def test_plain_internal_level(self):
        """测试内部哨兵级别使用固定填充"""
        assert LineFormatter(LogFormatter.PLAIN).prefix(LogLevel.ALWAYS) == "-------"

    def test_emoji(self):
        """测试 emoji 前缀不补齐"""
        f = LineFormatter(LogFormatter.EMOJI)
        assert f.prefix(LogLevel.ERROR) == "❌"
        assert f.prefix(LogLevel.WARNING) == "⚠️"
        assert f.prefix(LogLevel.ALWAYS) == "💭"

    def test_colour_wraps_padded_text(self):
        """测试颜色前缀在补齐后包裹转义序列"""
        f = LineFormatter(LogFormatter.COLOUR)
        assert f.prefix(LogLevel.ERROR) == "\x1b[31mERROR  \x1b[0m"
        assert strip_ansi(f.prefix(LogLevel.WARNING)) == "WARNING"


class TestRender:
    """模板渲染测试"""

    def test_every_token_replaced(self):
        """测试所有占位符（重复出现）都被替换"""
        template = "<time>|<level>|<name>|<message>|<message>|<name>|<level>|<time>"
        line = render(template, "T", "L", "N", "M")
        assert line == "T|L|N|M|M|N|L|T"

    def test_tokens_optional(self):
        """测试模板可以省略占位符"""
        assert render("<message>", "T", "L", "N", "hello") == "hello"
        assert render("static", "T", "L", "N", "hello") == "static"

    def test_tokens_case_sensitive(self):
        """测试占位符区分大小写"""
        assert render("<MESSAGE>", "T", "L", "N", "hello") == "<MESSAGE>"

    def test_format_with_time(self):
        """测试按时间格式渲染整行"""
        f = LineFormatter(LogFormatter.PLAIN)
        line = f.format(
            "[<time>] [<level>] <name>: <message>",
            LogLevel.INFO,
            "app",
            "Hello World",
            "%Y-%m-%d %H:%M:%S",
            now=datetime(2021, 9, 17, 23, 0, 0),
        )
        assert line == "[2021-09-17 23:00:00] [INFO   ] app: Hello World"


class TestInterpolate:
    """消息插值测试"""

    def test_positional(self):
        """测试位置占位符"""
        assert interpolate("{1} {0}", ("a", "b")) == "b a"

    def test_escaped_braces_without_fillers(self):
        """测试无填充参数时同样处理转义花括号"""
        assert interpolate('{{"key": 1}}', ()) == '{"key": 1}'
        assert interpolate("{{x}}", ()) == interpolate("{{x}}", ("unused",)) == "{x}"

    def test_placeholder_without_fillers(self):
        """测试有占位符但没有填充参数时报错"""
        with pytest.raises(MessageFormatError):
            interpolate("value {0}", ())

    def test_missing_filler(self):
        """测试参数不足时报错"""
        with pytest.raises(MessageFormatError):
            interpolate("{0} {1}", ("a",))

    def test_named_placeholder(self):
        """测试命名占位符无法填充时报错"""
        with pytest.raises(MessageFormatError):
            interpolate("{name}", ("a",))


class TestStripAnsi:
    """颜色转义去除测试"""

    def test_strip(self):
        """测试去除颜色转义"""
        assert strip_ansi("\x1b[34mINFO   \x1b[0m app") == "INFO    app"

    def test_only_digit_sequences(self):
        """测试只匹配 ESC[<digits>m 语法"""
        text = "\x1b[1;31mX"
        assert strip_ansi(text) == text
