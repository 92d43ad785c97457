"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the flow pipeline and external
adapters. They enable dependency injection and make the system testable.
"""

from .rendering import FlowMapRendererPort
from .repair import CoordinateRepairPort
from .source import TableSourcePort

__all__ = [
    "CoordinateRepairPort",
    "FlowMapRendererPort",
    "TableSourcePort",
]
