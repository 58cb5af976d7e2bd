"""Tests for line classification and the line cursor."""

import io

import pytest

from pocatalog.po.errors import InvalidEncoding
from pocatalog.po.escaping import escape, unescape
from pocatalog.po.lines import LineCursor, LineKind, classify, plural_index


class TestClassify:
    """Tests for classify()."""

    def test_translator_comment(self):
        """Test translator comment payload."""
        line = classify("#  Greeting shown on start")
        assert line.kind == LineKind.TRANSLATOR_COMMENT
        assert line.payload == "Greeting shown on start"

    def test_bare_hash_is_empty_translator_comment(self):
        """Test that a lone hash is an empty translator comment."""
        line = classify("#")
        assert line.kind == LineKind.TRANSLATOR_COMMENT
        assert line.payload == ""

    def test_extracted_comment(self):
        """Test extracted comment payload."""
        line = classify("#. TRANSLATORS: keep short")
        assert line.kind == LineKind.EXTRACTED_COMMENT
        assert line.payload == "TRANSLATORS: keep short"

    def test_location(self):
        """Test location file and line."""
        line = classify("#: src/app/main.py:42")
        assert line.kind == LineKind.LOCATION
        assert line.file == "src/app/main.py"
        assert line.line == 42

    def test_location_with_colon_in_path(self):
        """Test that the last colon separates the line number."""
        line = classify("#: C:\\src\\main.py:7")
        assert line.file == "C:\\src\\main.py"
        assert line.line == 7

    def test_flags(self):
        """Test flag list payload."""
        line = classify("#, fuzzy, c-format")
        assert line.kind == LineKind.FLAGS
        assert line.payload == "fuzzy, c-format"

    def test_other_comment(self):
        """Test obsolete and previous-id comments."""
        assert classify('#~ msgid "old"').kind == LineKind.OTHER_COMMENT
        assert classify('#| msgid "previous"').kind == LineKind.OTHER_COMMENT

    def test_malformed_comments(self):
        """Test location without line number and empty flags."""
        assert classify("#: main.py").kind == LineKind.MALFORMED_COMMENT
        assert classify("#,").kind == LineKind.MALFORMED_COMMENT

    def test_entry(self):
        """Test keyed entry."""
        line = classify('msgid "Hello"')
        assert line.kind == LineKind.ENTRY
        assert line.key == "msgid"
        assert line.payload == "Hello"

    def test_indexed_entry(self):
        """Test plural translation entry."""
        line = classify('msgstr[1] "%d fichiers"')
        assert line.kind == LineKind.ENTRY
        assert line.key == "msgstr[1]"

    def test_entry_keeps_escapes(self):
        """Test that the payload is the raw literal content."""
        line = classify(r'msgstr "Say \"hi\"\n"')
        assert line.payload == r'Say \"hi\"\n'

    def test_continuation_literal(self):
        """Test bare literal."""
        line = classify('"World"')
        assert line.kind == LineKind.LITERAL
        assert line.payload == "World"

    def test_malformed_literals(self):
        """Test unknown escapes and unterminated quotes."""
        assert classify(r'msgid "bad \q"').kind == LineKind.MALFORMED_LITERAL
        assert classify('msgstr "open').kind == LineKind.MALFORMED_LITERAL
        assert classify(r'"\u12"').kind == LineKind.MALFORMED_LITERAL

    def test_unknown(self):
        """Test unrecognized text."""
        assert classify("garbage").kind == LineKind.UNKNOWN

    def test_empty_index_is_unknown(self):
        """Test that an entry key with empty brackets is not an entry."""
        assert classify('msgstr[] "x"').kind == LineKind.UNKNOWN

    def test_plural_index(self):
        """Test msgstr index extraction."""
        assert plural_index("msgstr[3]") == 3
        assert plural_index("msgstr") is None
        assert plural_index("msgid") is None


class TestLineCursor:
    """Tests for LineCursor."""

    @staticmethod
    def make_cursor(content: str) -> LineCursor:
        return LineCursor(io.BytesIO(content.encode("utf-8")))

    def test_skips_blank_and_generated_lines(self):
        """Test that only meaningful lines are returned, trimmed."""
        cursor = self.make_cursor('#  !Generated: 2024-01-01 00:00:00\n\n   msgid "a"  \n\n')
        line = cursor.advance()
        assert line.text == 'msgid "a"'
        assert line.number == 3
        assert cursor.advance() is None

    def test_peek_does_not_consume(self):
        """Test one-line lookahead."""
        cursor = self.make_cursor('msgid "a"\nmsgstr "b"\n')
        assert cursor.peek().key == "msgid"
        assert cursor.peek().key == "msgid"
        assert cursor.advance().key == "msgid"
        assert cursor.peek().key == "msgstr"

    def test_end_of_stream(self):
        """Test peek and advance at the end."""
        cursor = self.make_cursor("\n\n")
        assert cursor.peek() is None
        assert cursor.advance() is None

    def test_close_closes_stream(self):
        """Test that the underlying stream is closed once."""
        stream = io.BytesIO(b'msgid "a"\n')
        with LineCursor(stream) as cursor:
            cursor.peek()
        assert stream.closed
        cursor.close()
        assert cursor.peek() is None

    def test_decodes_utf8(self):
        """Test non-ASCII content."""
        cursor = LineCursor(io.BytesIO('msgstr "Grüße"\n'.encode("utf-8")))
        assert cursor.advance().payload == "Grüße"

    def test_invalid_utf8(self):
        """Test that undecodable bytes fail with their line number."""
        stream = io.BytesIO(b'msgid "a"\nmsgstr "b"\n\nmsgid "\xff"\n')
        cursor = LineCursor(stream)
        assert cursor.advance().key == "msgid"
        assert cursor.advance().key == "msgstr"
        with pytest.raises(InvalidEncoding) as exc_info:
            cursor.peek()
        assert exc_info.value.line_number == 4

    def test_generated_marker_needs_full_prefix(self):
        """Test that only the exact marker prefix is skipped."""
        cursor = self.make_cursor("#  !Generated:foo\n#  !Generated: 2024-01-01\n")
        assert cursor.advance().text == "#  !Generated:foo"
        assert cursor.advance() is None


class TestEscaping:
    """Tests for escape() and unescape()."""

    def test_escape_specials(self):
        """Test backslash escapes."""
        assert escape('a\n\t"\'\\') == 'a\\n\\t\\"\\\'\\\\'
        assert escape("\r\b\f") == "\\r\\b\\f"

    def test_escape_control_characters(self):
        """Test unicode escapes for other control characters."""
        assert escape("\x01\x7f") == "\\u0001\\u007f"

    def test_escape_keeps_printable_unicode(self):
        """Test that printable non-ASCII text is written as is."""
        assert escape("Grüße, мир") == "Grüße, мир"

    def test_unescape(self):
        """Test backslash and unicode escapes."""
        assert unescape(r'Say \"hi\"\n\u00e9\\') == 'Say "hi"\né\\'

    def test_unescape_surrogate_pair(self):
        """Test that escaped surrogate pairs become one character."""
        assert unescape(r"\ud83d\ude00") == "\U0001F600"

    def test_unescape_lone_surrogates(self):
        """Test that unpaired or reversed surrogates are kept as is."""
        assert unescape(r"\ud800") == "\ud800"
        assert unescape(r"\ude00\ud83d") == "\ude00\ud83d"
        assert unescape(r"a\udc00b") == "a\udc00b"

    def test_escape_lone_surrogate(self):
        """Test that surrogates are written as unicode escapes."""
        assert escape("\ud800x") == "\\ud800x"

    def test_unescape_unknown_sequence(self):
        """Test that unknown escapes are rejected."""
        with pytest.raises(ValueError):
            unescape(r"\q")

    @pytest.mark.parametrize("value", [
        "",
        "plain",
        "Line1\nLine2\ttab",
        'quotes "double" and \'single\'',
        "back\\slash\r\b\f",
        "bell\x07 and del\x7f",
        "Grüße 😀",
        "lone \ud800 surrogate",
    ])
    def test_unescape_inverts_escape(self, value):
        """Test unescape(escape(s)) == s."""
        assert unescape(escape(value)) == value
