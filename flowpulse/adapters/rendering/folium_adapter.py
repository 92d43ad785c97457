"""Folium flow map renderer adapter.

Draws the rendered subset of a FlowView on an OpenStreetMap base layer
restricted to the contiguous United States:
- one polyline per flow, stroke width from ``display_weight``
- one small circle marker per distinct endpoint
- a legend explaining colours and widths
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

import folium

from ...config import RenderingConfig, get_config
from ...domain.errors import RenderingError
from ...domain.models import FlowRecord, Purpose
from ...flows.summary import format_volume, unique_points

LEGEND_TEMPLATE = """
<div style="position: fixed; bottom: 24px; right: 24px; z-index: 9999;
            background: rgba(255, 255, 255, 0.95); padding: 8px 12px;
            border-radius: 8px; font-size: 12px; color: #4b5563;
            box-shadow: 0 2px 6px rgba(0, 0, 0, 0.15);">
  <div style="font-weight: bold; color: #1f2937; margin-bottom: 4px;">Legend</div>
  <div><span style="display: inline-block; width: 32px; height: 4px;
       background: {leisure}; border-radius: 2px;"></span> Leisure flow</div>
  <div><span style="display: inline-block; width: 32px; height: 4px;
       background: {business}; border-radius: 2px;"></span> Business flow</div>
  <div style="margin-top: 4px; font-size: 10px; color: #9ca3af;">
    Line width &prop; log(flow volume), normalized within current view</div>
</div>
"""


@dataclass
class FoliumFlowMapRenderer:
    """Folium-based interactive flow map renderer.

    This adapter implements FlowMapRendererPort using Folium for
    generating interactive HTML maps.

    Attributes:
        config: Map appearance settings
        min_weight: Stroke width for flows that carry no display weight
    """

    config: RenderingConfig = field(default_factory=lambda: get_config().rendering)
    min_weight: float = field(default_factory=lambda: get_config().pipeline.min_weight)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def color_for(self, flow: FlowRecord) -> str:
        if flow.display_type is Purpose.BUSINESS:
            return self.config.business_color
        return self.config.leisure_color

    def tooltip_for(self, flow: FlowRecord) -> str:
        return (
            '<div style="font-size: 12px;">'
            f"<b>{html.escape(flow.origin_name)} → "
            f"{html.escape(flow.destination_name)}</b><br>"
            f"Type: {flow.display_type.value}<br>"
            f"Vol: {format_volume(max(0.0, flow.display_value))}<br>"
            '<span style="font-size: 10px; color: #6b7280;">'
            "Line width is log-scaled by flow volume</span>"
            "</div>"
        )

    def build_map(self, flows: Sequence[FlowRecord]) -> folium.Map:
        """Build the folium map for the given flows.

        Flows without coordinates are skipped.
        """
        cfg = self.config
        center = [(cfg.south + cfg.north) / 2, (cfg.west + cfg.east) / 2]
        m = folium.Map(
            location=center,
            zoom_start=4,
            tiles="OpenStreetMap",
            max_bounds=True,
            min_lat=cfg.south,
            max_lat=cfg.north,
            min_lon=cfg.west,
            max_lon=cfg.east,
        )
        m.fit_bounds(cfg.bounds)

        drawn = [f for f in flows if f.has_coordinates]
        for flow in drawn:
            weight = flow.display_weight if flow.display_weight is not None else self.min_weight
            folium.PolyLine(
                locations=[flow.origin_coords, flow.destination_coords],
                color=self.color_for(flow),
                weight=weight,
                opacity=cfg.line_opacity,
                tooltip=folium.Tooltip(self.tooltip_for(flow), sticky=True),
            ).add_to(m)

        for point in unique_points(drawn):
            folium.CircleMarker(
                location=point.coords,
                radius=cfg.point_radius,
                color=cfg.point_color,
                weight=1,
                fill=True,
                fill_color=cfg.point_color,
                fill_opacity=0.9,
                tooltip=html.escape(point.name),
            ).add_to(m)

        legend = LEGEND_TEMPLATE.format(
            leisure=cfg.leisure_color, business=cfg.business_color
        )
        m.get_root().html.add_child(folium.Element(legend))

        self._logger.debug(
            "Flow map built",
            extra={"flows": len(drawn), "skipped": len(flows) - len(drawn)},
        )
        return m

    def render_html(self, flows: Sequence[FlowRecord]) -> str:
        """Render flows into a standalone HTML document.

        Raises:
            RenderingError: If folium fails to build the map.
        """
        try:
            return self.build_map(flows).get_root().render()
        except Exception as e:
            self._logger.error("Map rendering failed", extra={"error": str(e)})
            raise RenderingError(
                f"Map rendering failed: {e}",
                renderer_type="folium",
                cause=e,
            )

    def render(self, flows: Sequence[FlowRecord], output_path: Path) -> Path:
        """Render flows on a map and save to file.

        Args:
            flows: Weighted flow records.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If rendering or saving fails.
        """
        self._logger.info(
            "Rendering flow map",
            extra={"flows": len(flows), "output_path": str(output_path)},
        )

        try:
            m = self.build_map(flows)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

        self._logger.info(
            "Map rendered successfully",
            extra={"output_path": str(output_path)},
        )
        return output_path
