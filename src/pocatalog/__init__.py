"""Reader and writer for gettext PO translation catalogs."""

from .config import CatalogConfig
from .po import (
    MessageFlag,
    MessageHeader,
    MessageLocation,
    MultipartString,
    PluralMessage,
    PoSyntaxError,
    SingularMessage,
    parse,
    parse_string,
    write,
)

__version__ = "0.1.0"

__all__ = [
    "CatalogConfig",
    "MessageFlag",
    "MessageHeader",
    "MessageLocation",
    "MultipartString",
    "PluralMessage",
    "PoSyntaxError",
    "SingularMessage",
    "parse",
    "parse_string",
    "write",
]
