"""Rendering port - Abstraction for flow map generation.

This protocol defines the contract for map rendering, allowing
different implementations (Folium, Plotly, etc.) to be used.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import FlowRecord


class FlowMapRendererPort(Protocol):
    """Port for flow map rendering.

    Implementation: adapters/rendering/folium_adapter.py

    Renderers draw the rendered subset of a FlowView: one line per
    record, stroke width taken from ``display_weight``.
    """

    def render_html(self, flows: Sequence[FlowRecord]) -> str:
        """Render flows into a standalone HTML document.

        Args:
            flows: Weighted, coordinate-valid flow records.

        Returns:
            The HTML document as a string.
        """
        ...

    def render(self, flows: Sequence[FlowRecord], output_path: Path) -> Path:
        """Render flows on a map and save to file.

        Args:
            flows: Weighted, coordinate-valid flow records.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.
        """
        ...
