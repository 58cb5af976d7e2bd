"""Line source and line classification for PO catalogs."""

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import BinaryIO, Optional

from .errors import InvalidEncoding

logger = logging.getLogger(__name__)

# Prefix of the comment line written at the top of every generated catalog
GENERATED_HEADER = "#  !Generated: "

_LITERAL = r'"((?:\\(?:u[0-9A-Fa-f]{4}|[bfrtn"\'\\])|[^\\"])*)"'

TRANSLATOR_COMMENT_PATTERN = re.compile(r"^#(?: \s*(.*))?$")
EXTRACTED_COMMENT_PATTERN = re.compile(r"^#\.\s*(.*)$")
OTHER_COMMENT_PATTERN = re.compile(r"^#[^:,.].*$")
LOCATION_PATTERN = re.compile(r"^#:\s*(.+):(\d+)$")
FLAGS_PATTERN = re.compile(r"^#,\s*(.+)$")

ENTRY_PATTERN = re.compile(rf"^([a-z_]+(?:\[\d+\])?)\s*{_LITERAL}$")
LITERAL_PATTERN = re.compile(rf"^{_LITERAL}$")

# Lines shaped like an entry or literal, whatever their escapes
QUOTED_PATTERN = re.compile(r'^(?:[a-z_]+(?:\[\d+\])?\s*)?".*$')

PLURAL_KEY_PATTERN = re.compile(r"^msgstr\[(\d+)\]$")


class LineKind(Enum):
    """Category of a trimmed, non-empty catalog line."""
    TRANSLATOR_COMMENT = "translator-comment"
    EXTRACTED_COMMENT = "extracted-comment"
    OTHER_COMMENT = "other-comment"
    LOCATION = "location"
    FLAGS = "flags"
    MALFORMED_COMMENT = "malformed-comment"
    ENTRY = "entry"
    LITERAL = "literal"
    MALFORMED_LITERAL = "malformed-literal"
    UNKNOWN = "unknown"

    @property
    def is_comment(self) -> bool:
        return self in _COMMENT_KINDS


_COMMENT_KINDS = frozenset({
    LineKind.TRANSLATOR_COMMENT,
    LineKind.EXTRACTED_COMMENT,
    LineKind.OTHER_COMMENT,
    LineKind.LOCATION,
    LineKind.FLAGS,
    LineKind.MALFORMED_COMMENT,
})


@dataclass(frozen=True)
class ClassifiedLine:
    """A line tagged with its kind.

    Attributes:
        kind: The line category.
        text: The trimmed raw line.
        key: Entry key for ``ENTRY`` lines.
        payload: Comment text, raw flag list, or escaped literal content.
        file: Location file for ``LOCATION`` lines.
        line: Location line number for ``LOCATION`` lines.
        number: 1-based line number in the catalog, set by ``LineCursor``.
    """
    kind: LineKind
    text: str
    key: Optional[str] = None
    payload: Optional[str] = None
    file: Optional[str] = None
    line: Optional[int] = None
    number: Optional[int] = None


def classify(text: str) -> ClassifiedLine:
    """Classify a trimmed, non-empty line."""
    if text.startswith("#"):
        return _classify_comment(text)

    match = ENTRY_PATTERN.match(text)
    if match:
        return ClassifiedLine(LineKind.ENTRY, text, key=match.group(1), payload=match.group(2))

    match = LITERAL_PATTERN.match(text)
    if match:
        return ClassifiedLine(LineKind.LITERAL, text, payload=match.group(1))

    if QUOTED_PATTERN.match(text):
        return ClassifiedLine(LineKind.MALFORMED_LITERAL, text)

    return ClassifiedLine(LineKind.UNKNOWN, text)


def _classify_comment(text: str) -> ClassifiedLine:
    match = TRANSLATOR_COMMENT_PATTERN.match(text)
    if match:
        return ClassifiedLine(LineKind.TRANSLATOR_COMMENT, text, payload=match.group(1) or "")

    match = EXTRACTED_COMMENT_PATTERN.match(text)
    if match:
        return ClassifiedLine(LineKind.EXTRACTED_COMMENT, text, payload=match.group(1))

    if OTHER_COMMENT_PATTERN.match(text):
        return ClassifiedLine(LineKind.OTHER_COMMENT, text)

    match = LOCATION_PATTERN.match(text)
    if match:
        return ClassifiedLine(LineKind.LOCATION, text, file=match.group(1), line=int(match.group(2)))

    match = FLAGS_PATTERN.match(text)
    if match:
        return ClassifiedLine(LineKind.FLAGS, text, payload=match.group(1))

    return ClassifiedLine(LineKind.MALFORMED_COMMENT, text)


def plural_index(key: str) -> Optional[int]:
    """Index of a ``msgstr[n]`` key, or None for any other key."""
    match = PLURAL_KEY_PATTERN.match(key)
    return int(match.group(1)) if match else None


class LineCursor:
    """Forward-only cursor over the meaningful lines of a catalog.

    Lines are trimmed; empty lines and the generated header line are
    skipped. At most one line is buffered, for ``peek``.
    """

    def __init__(self, stream: BinaryIO, encoding: str = "utf-8"):
        """Wrap a binary stream.

        Args:
            stream: Binary input; closed when the cursor is closed.
            encoding: Text encoding of the catalog.
        """
        self._stream = stream
        self._encoding = encoding
        self._buffered: Optional[ClassifiedLine] = None
        self._physical_line = 0
        self.line_number = 0
        self._closed = False

    def _fill(self) -> Optional[ClassifiedLine]:
        if self._buffered is None and not self._closed:
            while True:
                raw = self._stream.readline()
                if not raw:
                    break
                self._physical_line += 1
                try:
                    text = raw.decode(self._encoding).strip()
                except UnicodeDecodeError as e:
                    raise InvalidEncoding(e.reason, self._physical_line) from e
                if text and not text.startswith(GENERATED_HEADER):
                    self._buffered = replace(classify(text), number=self._physical_line)
                    self.line_number = self._physical_line
                    break
        return self._buffered

    def peek(self) -> Optional[ClassifiedLine]:
        """Return the next line without consuming it, or None at the end."""
        return self._fill()

    def advance(self) -> Optional[ClassifiedLine]:
        """Consume and return the next line, or None at the end."""
        line = self._fill()
        self._buffered = None
        return line

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._buffered = None
            self._stream.close()
            logger.debug("Closed catalog stream after %d lines", self._physical_line)

    def __enter__(self) -> "LineCursor":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
