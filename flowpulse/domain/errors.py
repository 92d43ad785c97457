"""Typed domain errors for Flow Pulse.

Malformed table data never raises: the parsing, selection, repair and
weighting stages degrade to partial or empty results. These errors are
reserved for the boundaries (configuration, source acquisition,
rendering) where the host has to decide what to show.

All errors inherit from FlowPulseError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FlowPulseError(Exception):
    """Base error for the flow pipeline.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ConfigurationError(FlowPulseError):
    """Invalid host-provided setting (filter, top-N, repair policy).

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class SourceUnavailableError(FlowPulseError):
    """The source text could not be acquired.

    Raised for missing or unreadable files, undecodable bytes and HTML
    documents served in place of a CSV.

    Attributes:
        source: Path or name of the source that failed
    """

    source: Optional[str] = None


@dataclass
class EmptyTableError(FlowPulseError):
    """The source text parsed to zero rows.

    Attributes:
        source: Path or name of the source that was empty
    """

    source: Optional[str] = None


@dataclass
class RenderingError(FlowPulseError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
