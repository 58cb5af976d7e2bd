"""Parser for gettext PO catalogs.

The parser relies on a few assumptions about catalog structure, which
always hold for files produced by the writer in this package:

1. Each message has its comments before the first ``msgctxt`` or ``msgid``.
2. Parts of a multi-line string literal are separated only by empty lines.
3. Entries come in the order ``[msgctxt] msgid msgstr`` for singular
   messages and ``[msgctxt] msgid msgid_plural msgstr[0] .. msgstr[N]``
   for plural ones.
4. An entry key is always followed by a string literal on the same line.
5. The file is UTF-8 encoded.
"""

import io
import logging
import os
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from ..config import CatalogConfig
from .errors import (
    MalformedHeaderLine,
    MalformedLiteral,
    MissingTranslationEntry,
    OutOfOrderPluralIndex,
    PrematureEndOfStream,
    UndefinedFlag,
    UnexpectedEntryKey,
    UnrecognizedLine,
)
from .escaping import unescape
from .lines import ClassifiedLine, LineCursor, LineKind, plural_index
from .models import (
    AnyMessage,
    MessageFlag,
    MessageHeader,
    MessageLocation,
    MultipartString,
    PluralMessage,
    SingularMessage,
)

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, BinaryIO]


def read_header(cursor: LineCursor) -> MessageHeader:
    """Read the run of comment lines in front of a message.

    Stops without consuming at the first line that is not a comment.

    Raises:
        MalformedHeaderLine: A comment line has no recognized form.
        UndefinedFlag: A flag is not in the ``MessageFlag`` vocabulary.
    """
    comments: list[str] = []
    extracted: list[str] = []
    locations: list[MessageLocation] = []
    flags: set[MessageFlag] = set()

    while cursor.peek() is not None and cursor.peek().kind.is_comment:
        line = cursor.advance()

        if line.kind == LineKind.TRANSLATOR_COMMENT:
            comments.append(line.payload)
        elif line.kind == LineKind.EXTRACTED_COMMENT:
            extracted.append(line.payload)
        elif line.kind == LineKind.LOCATION:
            locations.append(MessageLocation(line.file, line.line))
        elif line.kind == LineKind.FLAGS:
            for token in line.payload.split(","):
                flag = MessageFlag.lookup(token)
                if flag is None:
                    raise UndefinedFlag(token.strip().lower(), line.number, line.text)
                flags.add(flag)
        elif line.kind == LineKind.MALFORMED_COMMENT:
            raise MalformedHeaderLine(line.text, line.number)
        # Other comments (obsolete entries, previous ids) are not retained

    return MessageHeader(
        comments=tuple(comments),
        extracted_comments=tuple(extracted),
        locations=tuple(locations),
        flags=frozenset(flags)
    )


def _read_keyed_entry(cursor: LineCursor) -> tuple[ClassifiedLine, MultipartString]:
    line = cursor.advance()
    if line is None:
        raise PrematureEndOfStream(cursor.line_number or None)
    if line.kind == LineKind.MALFORMED_LITERAL:
        raise MalformedLiteral(line.text, line.number)
    if line.kind != LineKind.ENTRY:
        raise UnrecognizedLine(line.text, line.number)

    parts = [unescape(line.payload)]
    while cursor.peek() is not None and cursor.peek().kind == LineKind.LITERAL:
        parts.append(unescape(cursor.advance().payload))

    return line, MultipartString(*parts)


def read_entry(cursor: LineCursor) -> tuple[str, MultipartString]:
    """Read a keyed entry and the continuation literals that follow it.

    Returns:
        Tuple of the entry key and its value.

    Raises:
        PrematureEndOfStream: The catalog ended before the entry.
        MalformedLiteral: The entry literal breaks the escape grammar.
        UnrecognizedLine: The next line is not an entry.
    """
    line, value = _read_keyed_entry(cursor)
    return line.key, value


def peek_entry_key(cursor: LineCursor) -> Optional[str]:
    """Return the key of the next line if it is an entry, without consuming it.

    Raises:
        MalformedLiteral: The next line looks like an entry but its literal
            breaks the escape grammar.
    """
    line = cursor.peek()
    if line is None:
        return None
    if line.kind == LineKind.MALFORMED_LITERAL:
        raise MalformedLiteral(line.text, line.number)
    if line.kind == LineKind.ENTRY:
        return line.key
    return None


def _read_plural_translations(cursor: LineCursor) -> tuple[MultipartString, ...]:
    translations: list[MultipartString] = []

    while True:
        expected = f"msgstr[{len(translations)}]"
        key = peek_entry_key(cursor)
        if key == expected:
            translations.append(read_entry(cursor)[1])
            continue

        index = plural_index(key) if key is not None else None
        if index is not None and index < len(translations):
            line = cursor.peek()
            raise OutOfOrderPluralIndex(key, expected, line.number, line.text)
        # A gap in the indices or any other line ends the plural forms
        return tuple(translations)


def read_message(cursor: LineCursor, header: MessageHeader) -> AnyMessage:
    """Read one singular or plural message following its header.

    Raises:
        UnexpectedEntryKey: The message does not start with ``msgctxt`` or
            ``msgid``, or ``msgctxt`` is not followed by ``msgid``.
        MissingTranslationEntry: ``msgid`` is followed by neither ``msgstr``
            nor ``msgid_plural``.
        OutOfOrderPluralIndex: A ``msgstr[n]`` index repeats.
    """
    line, value = _read_keyed_entry(cursor)
    if line.key == "msgctxt":
        context: Optional[MultipartString] = value
        line, message_id = _read_keyed_entry(cursor)
        if line.key != "msgid":
            raise UnexpectedEntryKey(line.key, "`msgid`", line.number, line.text)
    elif line.key == "msgid":
        context, message_id = None, value
    else:
        raise UnexpectedEntryKey(line.key, "Either `msgctxt` or `msgid`", line.number, line.text)

    next_key = peek_entry_key(cursor)
    if next_key == "msgstr":
        _, translation = read_entry(cursor)
        return SingularMessage(
            message_id=message_id,
            translation=translation,
            context=context,
            header=header
        )

    if next_key == "msgid_plural":
        _, plural_id = read_entry(cursor)
        return PluralMessage(
            message_id=message_id,
            plural_id=plural_id,
            translations=_read_plural_translations(cursor),
            context=context,
            header=header
        )

    line = cursor.peek()
    if line is None:
        raise MissingTranslationEntry(cursor.line_number or None)
    raise MissingTranslationEntry(line.number, line.text)


def _open_source(source: Source) -> BinaryIO:
    if isinstance(source, (str, os.PathLike)):
        return open(source, "rb")
    return source


def iter_messages(source: Source, config: Optional[CatalogConfig] = None) -> Iterator[AnyMessage]:
    """Lazily read messages from a catalog.

    The source stream is closed when the messages are exhausted, when
    reading fails, or when the generator is closed.

    Args:
        source: Path of a catalog file, or a binary stream.
        config: Catalog configuration.

    Yields:
        Messages in file order.
    """
    config = config or CatalogConfig()
    count = 0

    with LineCursor(_open_source(source), encoding=config.encoding) as cursor:
        while cursor.peek() is not None:
            header = read_header(cursor)
            if cursor.peek() is None:
                if not header.is_empty:
                    logger.warning("Dropping comments at end of catalog (line %d)", cursor.line_number)
                break

            yield read_message(cursor, header)
            count += 1

    logger.debug("Read %d messages", count)


class CatalogParser:
    """Parser for gettext PO catalogs.

    Reading is lazy: ``parse_file`` and ``parse_stream`` return
    generators which read the catalog as they are consumed.
    """

    def __init__(self, config: Optional[CatalogConfig] = None):
        """Initialize the parser.

        Args:
            config: Catalog configuration.
        """
        self.config = config or CatalogConfig()

    def parse(self, content: str) -> list[AnyMessage]:
        """Parse catalog content into messages.

        Args:
            content: The content of a PO file.

        Returns:
            List of messages.
        """
        stream = io.BytesIO(content.encode(self.config.encoding))
        return list(iter_messages(stream, self.config))

    def parse_file(self, path: Union[str, Path]) -> Iterator[AnyMessage]:
        """Lazily parse a PO file.

        Args:
            path: Path to the PO file.

        Returns:
            Generator of messages.
        """
        logger.debug("Parsing catalog %s", path)
        return iter_messages(Path(path), self.config)

    def parse_stream(self, stream: BinaryIO) -> Iterator[AnyMessage]:
        """Lazily parse a binary stream; the stream is closed afterwards."""
        return iter_messages(stream, self.config)


def parse(source: Source, config: Optional[CatalogConfig] = None) -> Iterator[AnyMessage]:
    """Lazily read messages from a path or binary stream."""
    return iter_messages(source, config)


def parse_string(content: str, config: Optional[CatalogConfig] = None) -> list[AnyMessage]:
    """Read all messages from catalog content held in memory."""
    return CatalogParser(config).parse(content)
