"""Data models for PO catalog messages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union


@dataclass(frozen=True)
class MultipartString:
    """A value split across one or more quoted literal lines.

    Empty parts are dropped, so ``msgid ""`` followed by continuation
    lines keeps only the continuation parts, and a value with no parts
    is the empty string.

    Attributes:
        parts: Unescaped literal fragments in file order.
    """
    parts: tuple[str, ...] = ()

    def __init__(self, *parts: str):
        object.__setattr__(self, "parts", tuple(p for p in parts if p))

    @classmethod
    def from_text(cls, text: str) -> "MultipartString":
        """Split a runtime string after each newline, as gettext tools wrap values."""
        if "\n" not in text.rstrip("\n"):
            return cls(text)
        chunks = text.split("\n")
        parts = [chunk + "\n" for chunk in chunks[:-1]]
        parts.append(chunks[-1])
        return cls(*parts)

    @property
    def merged(self) -> str:
        """Concatenation of all parts."""
        return "".join(self.parts)

    def __bool__(self) -> bool:
        return bool(self.parts)

    def __str__(self) -> str:
        return self.merged


@dataclass(frozen=True)
class MessageLocation:
    """Source reference from a ``#:`` line."""
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


class MessageFlag(Enum):
    """Flags recognized on ``#,`` lines."""
    FUZZY = "fuzzy"
    C_FORMAT = "c-format"
    NO_C_FORMAT = "no-c-format"
    PYTHON_FORMAT = "python-format"
    NO_PYTHON_FORMAT = "no-python-format"
    PYTHON_BRACE_FORMAT = "python-brace-format"
    NO_PYTHON_BRACE_FORMAT = "no-python-brace-format"

    @classmethod
    def lookup(cls, token: str) -> Optional["MessageFlag"]:
        """Find a flag by name, ignoring case and surrounding whitespace."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MessageHeader:
    """Comment block preceding a message.

    Attributes:
        comments: Translator comments (``# ...``).
        extracted_comments: Comments extracted from source (``#. ...``).
        locations: Source references (``#: file:line``).
        flags: Set of flags (``#, ...``).

    Comment text is read back without surrounding whitespace, and a
    translator comment starting with ``!Generated: `` is taken for the
    generated catalog marker and skipped when read.
    """
    comments: tuple[str, ...] = ()
    extracted_comments: tuple[str, ...] = ()
    locations: tuple[MessageLocation, ...] = ()
    flags: frozenset[MessageFlag] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not (self.comments or self.extracted_comments
                    or self.locations or self.flags)

    @property
    def is_fuzzy(self) -> bool:
        return MessageFlag.FUZZY in self.flags

    def sorted_flags(self) -> list[MessageFlag]:
        """Flags in vocabulary order."""
        return [flag for flag in MessageFlag if flag in self.flags]


class Message:
    """Base class of catalog messages.

    Concrete messages are ``SingularMessage`` and ``PluralMessage``; both
    carry ``header``, ``context`` and ``message_id``.
    """
    header: MessageHeader
    context: Optional[MultipartString]
    message_id: MultipartString

    @property
    def is_plural(self) -> bool:
        return isinstance(self, PluralMessage)

    @property
    def is_fuzzy(self) -> bool:
        return self.header.is_fuzzy


@dataclass(frozen=True)
class SingularMessage(Message):
    """``[msgctxt] msgid msgstr`` message."""
    message_id: MultipartString
    translation: MultipartString
    context: Optional[MultipartString] = None
    header: MessageHeader = field(default_factory=MessageHeader)

    @property
    def is_translated(self) -> bool:
        return bool(self.translation)


@dataclass(frozen=True)
class PluralMessage(Message):
    """``[msgctxt] msgid msgid_plural msgstr[0..N]`` message."""
    message_id: MultipartString
    plural_id: MultipartString
    translations: tuple[MultipartString, ...] = ()
    context: Optional[MultipartString] = None
    header: MessageHeader = field(default_factory=MessageHeader)

    @property
    def is_translated(self) -> bool:
        return bool(self.translations) and all(self.translations)


AnyMessage = Union[SingularMessage, PluralMessage]


@dataclass
class CatalogStats:
    """Counts over a sequence of messages."""
    total: int = 0
    plural: int = 0
    fuzzy: int = 0
    untranslated: int = 0

    @property
    def translated(self) -> int:
        return self.total - self.untranslated


def catalog_stats(messages: Iterable[AnyMessage]) -> CatalogStats:
    """Count messages by kind and translation state."""
    stats = CatalogStats()
    for message in messages:
        stats.total += 1
        if message.is_plural:
            stats.plural += 1
        if message.is_fuzzy:
            stats.fuzzy += 1
        if not message.is_translated:
            stats.untranslated += 1
    return stats
