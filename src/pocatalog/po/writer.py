"""Writer for gettext PO catalogs."""

import io
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, TextIO, Union

from ..config import CatalogConfig
from .escaping import escape
from .lines import GENERATED_HEADER
from .models import AnyMessage, MultipartString, PluralMessage

logger = logging.getLogger(__name__)

Target = Union[str, os.PathLike, BinaryIO]


def format_entry(key: str, value: MultipartString) -> list[str]:
    """Format a keyed entry, one quoted literal per part.

    Args:
        key: Entry key such as ``msgid`` or ``msgstr[1]``.
        value: Entry value.

    Returns:
        Lines of the entry; the first part shares the line with the key.
    """
    if not value.parts:
        return [f'{key} ""']
    lines = [f'{key} "{escape(value.parts[0])}"']
    lines.extend(f'"{escape(part)}"' for part in value.parts[1:])
    return lines


def format_message(message: AnyMessage) -> list[str]:
    """Format one message with its header as catalog lines."""
    header = message.header
    lines = [f"#  {comment}" for comment in header.comments]
    lines.extend(f"#. {comment}" for comment in header.extracted_comments)
    lines.extend(f"#: {location.file}:{location.line}" for location in header.locations)
    if header.flags:
        lines.append("#, " + ", ".join(str(flag) for flag in header.sorted_flags()))

    if message.context is not None:
        lines.extend(format_entry("msgctxt", message.context))
    lines.extend(format_entry("msgid", message.message_id))

    if isinstance(message, PluralMessage):
        lines.extend(format_entry("msgid_plural", message.plural_id))
        for i, translation in enumerate(message.translations):
            lines.extend(format_entry(f"msgstr[{i}]", translation))
    else:
        lines.extend(format_entry("msgstr", message.translation))

    return lines


def generated_header(config: Optional[CatalogConfig] = None) -> str:
    """Comment line marking a generated catalog, skipped by the parser."""
    config = config or CatalogConfig()
    return GENERATED_HEADER + datetime.now().strftime(config.timestamp_format)


def write_messages(output: TextIO, messages: Iterable[AnyMessage], config: Optional[CatalogConfig] = None) -> int:
    """Write the generated header and messages to a text stream.

    Returns:
        Number of messages written.
    """
    output.write(generated_header(config) + "\n\n")

    count = 0
    for message in messages:
        for line in format_message(message):
            output.write(line + "\n")
        output.write("\n")
        count += 1
    return count


class CatalogWriter:
    """Writer for gettext PO catalogs."""

    def __init__(self, config: Optional[CatalogConfig] = None):
        """Initialize the writer.

        Args:
            config: Catalog configuration.
        """
        self.config = config or CatalogConfig()

    def format(self, messages: Iterable[AnyMessage]) -> str:
        """Format messages as catalog content.

        Args:
            messages: Messages to format.

        Returns:
            Catalog content, starting with the generated header line.
        """
        output = io.StringIO()
        write_messages(output, messages, self.config)
        return output.getvalue()

    def write(self, messages: Iterable[AnyMessage], target: Target) -> None:
        """Write messages to a catalog file or binary stream.

        A file is overwritten. The stream is closed afterwards, also when
        writing fails.

        Args:
            messages: Messages to write.
            target: Path to the output file, or a binary stream.
        """
        if isinstance(target, (str, os.PathLike)):
            path = Path(target)
            if self.config.create_parents:
                path.parent.mkdir(parents=True, exist_ok=True)
            stream = open(path, "wb")
        else:
            stream = target

        with io.TextIOWrapper(stream, encoding=self.config.encoding, newline="\n") as output:
            count = write_messages(output, messages, self.config)

        logger.debug("Wrote %d messages", count)


def write(target: Target, messages: Iterable[AnyMessage], config: Optional[CatalogConfig] = None) -> None:
    """Write messages to a path or binary stream, closing it afterwards."""
    CatalogWriter(config).write(messages, target)


def format_messages(messages: Iterable[AnyMessage], config: Optional[CatalogConfig] = None) -> str:
    """Format messages as catalog content held in memory."""
    return CatalogWriter(config).format(messages)
