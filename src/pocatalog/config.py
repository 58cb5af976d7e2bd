"""Configuration for catalog reading and writing."""

import logging
from dataclasses import dataclass


DEFAULT_ENCODING = "utf-8"
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class CatalogConfig:
    """Configuration for reading and writing PO catalogs.

    Attributes:
        encoding: Text encoding of catalog files (default: "utf-8").
        timestamp_format: strftime format of the generated header timestamp.
        create_parents: Whether writing a file creates missing parent directories.
        verbose: If True, log detailed progress.
    """
    encoding: str = DEFAULT_ENCODING
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    create_parents: bool = True
    verbose: bool = False

    @property
    def log_level(self) -> int:
        """Logging level matching the verbosity setting."""
        return logging.DEBUG if self.verbose else logging.WARNING
