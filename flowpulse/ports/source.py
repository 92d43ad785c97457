"""Table source port - Acquisition of the raw table text.

The core only ever sees a text blob; where it comes from (local file,
upload, static server file) is the source's concern.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


class TableSourcePort(Protocol):
    """Port for reading the flow table as text.

    Implementation: adapters/source/file_source.py
    """

    def read_text(self, path: Optional[Path] = None) -> str:
        """Read the table text.

        Args:
            path: Explicit location; None selects the configured default.

        Returns:
            The decoded table text.
        """
        ...
