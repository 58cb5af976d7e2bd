"""Errors raised while reading PO catalogs."""

from typing import Optional


class PoSyntaxError(ValueError):
    """A catalog does not follow the PO grammar.

    Attributes:
        line_number: 1-based line of the offending line, if known.
        line: Raw (trimmed) text of the offending line, if known.
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.line = line

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class PrematureEndOfStream(PoSyntaxError):
    """An entry was required but the catalog ended."""

    def __init__(self, line_number: Optional[int] = None):
        super().__init__("Premature end of stream", line_number)


class MalformedHeaderLine(PoSyntaxError):
    """A comment line matches none of the known comment forms."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        super().__init__(f"Incorrect header line: '{line}'", line_number, line)


class UndefinedFlag(PoSyntaxError):
    """A ``#,`` line names a flag outside the vocabulary."""

    def __init__(self, token: str, line_number: Optional[int] = None, line: Optional[str] = None):
        super().__init__(f"Undefined message flag: '{token}'", line_number, line)
        self.token = token


class UnexpectedEntryKey(PoSyntaxError):
    """An entry key appears where the grammar requires another one."""

    def __init__(
        self,
        key: str,
        expected: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None
    ):
        super().__init__(f"{expected} expected, got `{key}`", line_number, line)
        self.key = key
        self.expected = expected


class OutOfOrderPluralIndex(PoSyntaxError):
    """A ``msgstr[n]`` entry repeats an index that was already read."""

    def __init__(
        self,
        key: str,
        expected: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None
    ):
        super().__init__(f"Entries are out-of-order: '{key}', expected '{expected}'", line_number, line)
        self.key = key
        self.expected = expected


class MissingTranslationEntry(PoSyntaxError):
    """Neither ``msgstr`` nor ``msgid_plural`` follows a ``msgid``."""

    def __init__(self, line_number: Optional[int] = None, line: Optional[str] = None):
        super().__init__('"msgstr" or "msgid_plural" expected', line_number, line)


class MalformedLiteral(PoSyntaxError):
    """A quoted literal breaks the escape-sequence grammar."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        super().__init__(f"Malformed string literal: '{line}'", line_number, line)


class UnrecognizedLine(PoSyntaxError):
    """A line is neither a comment, an entry nor a string literal."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        super().__init__(f"Entry expected, got: '{line}'", line_number, line)


class InvalidEncoding(PoSyntaxError):
    """The catalog bytes are not valid in the catalog encoding."""

    def __init__(self, reason: str, line_number: Optional[int] = None):
        super().__init__(f"Invalid encoding: {reason}", line_number)
