"""Tests for line structure and escape decoding."""

import pytest

from javaprops.properties import DanglingEscape, ErrorKind, MalformedUnicodeEscape
from javaprops.properties.decoder import (
    LogicalLine,
    backslashes_before,
    decode_escapes,
    has_continuation,
    is_escaped,
    logical_lines,
)


class TestBackslashParity:
    """Tests for the shared backslash counting helpers."""

    def test_count_run(self):
        """Test counting backslashes before an index."""
        assert backslashes_before("abc", 3) == 0
        assert backslashes_before("a\\\\b", 3) == 2
        assert backslashes_before("\\\\\\", 3) == 3

    def test_is_escaped(self):
        """Test odd runs escape, even runs don't."""
        assert is_escaped("a\\:b", 2)
        assert not is_escaped("a\\\\:b", 3)
        assert is_escaped("a\\\\\\:b", 4)
        assert not is_escaped(":b", 0)

    def test_has_continuation(self):
        """Test trailing backslash parity."""
        assert has_continuation("key=value\\")
        assert not has_continuation("key=value\\\\")
        assert has_continuation("key=value\\\\\\")
        assert not has_continuation("key=value")
        assert not has_continuation("")


class TestLogicalLines:
    """Tests for logical line production."""

    def texts(self, content):
        return [line.text for line in logical_lines(content)]

    def test_skips_comments_and_blanks(self):
        """Test comment and blank lines never produce records."""
        content = "# comment\n! other\n\n  \t\f\n   # indented\nkey=value\n"
        assert self.texts(content) == ["key=value"]

    def test_trims_leading_whitespace(self):
        """Test leading whitespace is removed."""
        assert self.texts("   key = value  ") == ["key = value  "]

    def test_joins_continuation(self):
        """Test a trailing backslash joins the next line."""
        assert self.texts("key=val\\\n    ue\n") == ["key=value"]

    def test_joins_several_continuations(self):
        """Test continuations chain over multiple lines."""
        content = "list=a,\\\n  b,\\\n\t c\nnext=1"
        assert self.texts(content) == ["list=a,b,c", "next=1"]

    def test_escaped_backslash_does_not_continue(self):
        """Test an even run of trailing backslashes ends the line."""
        assert self.texts("path=C:\\\\\nother=1") == ["path=C:\\\\", "other=1"]

    def test_comment_is_not_continued(self):
        """Test a comment ending in a backslash doesn't swallow the next line."""
        assert self.texts("# note \\\nkey=value") == ["key=value"]

    def test_continued_line_starting_with_hash(self):
        """Test a continuation line is joined even if it looks like a comment."""
        assert self.texts("key=a\\\n#b") == ["key=a#b"]

    def test_dangling_continuation_at_end(self):
        """Test a continuation at end of input joins an empty line."""
        assert self.texts("key=value\\") == ["key=value"]

    def test_line_endings(self):
        """Test CRLF and lone CR both end lines."""
        assert self.texts("a=1\r\nb=2\rc=3\n") == ["a=1", "b=2", "c=3"]

    def test_empty_joined_line_skipped(self):
        """Test a lone continuation followed by a blank line yields nothing."""
        assert self.texts("\\\n\nkey=value") == ["key=value"]

    def test_line_numbers(self):
        """Test records carry the physical line they start on."""
        lines = list(logical_lines("# c\n\na=1\\\n 2\nb=3\n"))
        assert [line.line_number for line in lines] == [3, 5]

    def test_is_lazy(self):
        """Test logical lines are produced on demand."""
        lines = logical_lines("a=1\nb=2\n")
        assert next(lines).text == "a=1"
        assert next(lines).text == "b=2"
        with pytest.raises(StopIteration):
            next(lines)


class TestDecodeEscapes:
    """Tests for escape decoding."""

    def test_plain_text(self):
        """Test text without escapes is unchanged."""
        assert decode_escapes("hello world") == "hello world"

    def test_special_escapes(self):
        """Test control character escapes."""
        assert decode_escapes(r"a\nb\tc\rd\fe\\f") == "a\nb\tc\rd\fe\\f"

    def test_escaped_literals(self):
        """Test other escaped characters lose their backslash."""
        assert decode_escapes(r"\:\=\#\!\ \a") == ":=#! a"

    def test_unicode_escape(self):
        """Test \\uXXXX in either case."""
        assert decode_escapes(r"\u0041\u00e9\u00E9") == "A\u00e9\u00e9"

    def test_surrogate_pair(self):
        """Test escaped surrogate pairs combine into one character."""
        assert decode_escapes(r"\uD83D\uDE00") == "\U0001F600"

    def test_range(self):
        """Test decoding only part of the text."""
        assert decode_escapes(r"key\:x=v\tal", 0, 6) == "key:x"
        assert decode_escapes(r"key=v\tal", 4) == "v\tal"

    def test_short_unicode_escape(self):
        """Test \\u with fewer than four digits is an error."""
        with pytest.raises(MalformedUnicodeEscape) as exc_info:
            decode_escapes(r"ab\u12")
        assert exc_info.value.kind == ErrorKind.MALFORMED_UNICODE_ESCAPE
        assert exc_info.value.column == 3

    def test_non_hex_unicode_escape(self):
        """Test \\u with non-hex digits is an error."""
        with pytest.raises(MalformedUnicodeEscape):
            decode_escapes(r"\uhello")

    def test_unicode_escape_cut_by_range(self):
        """Test digits beyond the decoded range don't count."""
        with pytest.raises(MalformedUnicodeEscape):
            decode_escapes(r"\u0041", 0, 4)

    def test_dangling_escape(self):
        """Test a trailing lone backslash is an error."""
        with pytest.raises(DanglingEscape) as exc_info:
            decode_escapes("abc\\")
        assert exc_info.value.kind == ErrorKind.DANGLING_ESCAPE
        assert exc_info.value.column == 4


class TestLogicalLineDecode:
    """Tests for error locations on logical lines."""

    def test_locate_first_segment(self):
        """Test offsets map onto the indented first line."""
        line = LogicalLine(line_number=2)
        line.append("key=val", 2, 3)
        assert line.locate(4) == (2, 7)

    def test_locate_continued_segment(self):
        """Test offsets past a join map onto the continuation line."""
        line = next(logical_lines("key=abc\\\n    \\u12"))
        with pytest.raises(MalformedUnicodeEscape) as exc_info:
            line.decode(4)
        assert exc_info.value.line == 2
        assert exc_info.value.column == 5
