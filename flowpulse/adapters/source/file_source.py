"""File-backed table source adapter.

Reads the flow table from disk and rejects content that cannot be a
table, such as an HTML page served in place of the CSV.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...config import SourceConfig, get_config
from ...domain.errors import SourceUnavailableError

HTML_MARKERS = ("<!DOCTYPE", "<html")


def looks_like_html(text: str) -> bool:
    """Check whether the text is an HTML document rather than a table."""
    head = text.lstrip()
    return head.startswith(HTML_MARKERS)


@dataclass
class FileTableSource:
    """Table source reading local files.

    This adapter implements TableSourcePort.

    Attributes:
        config: Source configuration (default path, encoding)
    """

    config: SourceConfig = field(default_factory=lambda: get_config().source)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def read_text(self, path: Optional[Path] = None) -> str:
        """Read and decode the table text.

        Args:
            path: File to read; None reads the configured data file.

        Returns:
            The decoded text.

        Raises:
            SourceUnavailableError: If the file is missing, unreadable,
                undecodable, or holds an HTML document.
        """
        source_path = Path(path) if path is not None else self.config.data_path

        self._logger.debug("Reading table", extra={"path": str(source_path)})

        try:
            raw = source_path.read_bytes()
        except OSError as e:
            raise SourceUnavailableError(
                f"Cannot read table file {source_path}",
                source=str(source_path),
                cause=e,
            )

        try:
            text = raw.decode(self.config.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise SourceUnavailableError(
                f"Cannot decode table file {source_path}",
                source=str(source_path),
                cause=e,
            )

        if looks_like_html(text):
            raise SourceUnavailableError(
                "HTML returned instead of CSV",
                source=str(source_path),
            )

        self._logger.info(
            "Table read",
            extra={"path": str(source_path), "chars": len(text)},
        )
        return text
