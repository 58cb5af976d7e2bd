"""PO catalog models, parsing and writing."""

from .errors import (
    InvalidEncoding,
    MalformedHeaderLine,
    MalformedLiteral,
    MissingTranslationEntry,
    OutOfOrderPluralIndex,
    PoSyntaxError,
    PrematureEndOfStream,
    UndefinedFlag,
    UnexpectedEntryKey,
    UnrecognizedLine,
)
from .models import (
    CatalogStats,
    Message,
    MessageFlag,
    MessageHeader,
    MessageLocation,
    MultipartString,
    PluralMessage,
    SingularMessage,
    catalog_stats,
)
from .parser import CatalogParser, parse, parse_string
from .writer import CatalogWriter, format_messages, write

__all__ = [
    "InvalidEncoding",
    "CatalogParser",
    "CatalogStats",
    "CatalogWriter",
    "MalformedHeaderLine",
    "MalformedLiteral",
    "Message",
    "MessageFlag",
    "MessageHeader",
    "MessageLocation",
    "MissingTranslationEntry",
    "MultipartString",
    "OutOfOrderPluralIndex",
    "PluralMessage",
    "PoSyntaxError",
    "PrematureEndOfStream",
    "SingularMessage",
    "UndefinedFlag",
    "UnexpectedEntryKey",
    "UnrecognizedLine",
    "catalog_stats",
    "format_messages",
    "parse",
    "parse_string",
    "write",
]
