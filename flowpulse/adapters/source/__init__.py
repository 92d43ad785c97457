"""Source adapters - Implementations of TableSourcePort.

Available implementations:
- FileTableSource: Reads the table from a local file
"""

from .file_source import FileTableSource, looks_like_html

__all__ = ["FileTableSource", "looks_like_html"]
