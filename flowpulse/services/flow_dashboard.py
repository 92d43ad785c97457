"""Flow dashboard service - Host-facing orchestrator.

Wires the table source, the coordinate repair policy and the map
renderer around the pure pipeline. The service keeps no rows between
calls; the host holds the parsed rows and the filter configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import PipelineConfig, get_config
from ..domain.errors import (
    ConfigurationError,
    EmptyTableError,
    FlowPulseError,
    RenderingError,
)
from ..domain.models import FilterConfig, FlowView, RawRow, RouteBar
from ..flows.summary import top_routes
from ..flows.weights import WeightScale
from ..pipeline import build_flow_view
from ..ports.rendering import FlowMapRendererPort
from ..ports.repair import CoordinateRepairPort
from ..ports.source import TableSourcePort
from ..table.parser import parse_table

NO_DATA_MESSAGE = "No data available"


@dataclass
class FlowDashboardService:
    """Main service behind the flow dashboard.

    Attributes:
        source: Reads the raw table text
        repair: Coordinate validation and repair policy
        map_renderer: Optional map rendering
        config: Ranking and weighting settings
        default_output_path: Where render_map writes when given no path
    """

    source: TableSourcePort
    repair: CoordinateRepairPort
    map_renderer: Optional[FlowMapRendererPort] = None
    config: PipelineConfig = field(default_factory=lambda: get_config().pipeline)
    default_output_path: Path = field(
        default_factory=lambda: get_config().output_dir
        / get_config().rendering.output_file
    )

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def scale(self) -> WeightScale:
        return WeightScale(
            min_weight=self.config.min_weight,
            max_weight=self.config.max_weight,
            exponent=self.config.emphasis_exponent,
        )

    def load_rows(self, path: Optional[Path] = None) -> Tuple[RawRow, ...]:
        """Read and parse a flow table.

        Args:
            path: Table file; None loads the configured default.

        Returns:
            The parsed rows.

        Raises:
            SourceUnavailableError: If the text cannot be acquired.
            EmptyTableError: If the text holds no rows.
        """
        text = self.source.read_text(path)
        rows = tuple(parse_table(text))
        if not rows:
            raise EmptyTableError(
                "Empty or invalid CSV",
                source=str(path) if path is not None else None,
            )

        self._logger.info("Rows loaded", extra={"rows": len(rows)})
        return rows

    def load_rows_safe(
        self, path: Optional[Path] = None
    ) -> Tuple[Tuple[RawRow, ...], Optional[str]]:
        """Load rows, returning an error message instead of raising.

        Returns:
            Tuple of (rows, None) or ((), "No data available").
        """
        try:
            return self.load_rows(path), None
        except FlowPulseError as e:
            self._logger.warning("Table load failed", extra={"error": str(e)})
            return (), NO_DATA_MESSAGE

    def validate_top_n(self, top_n: Optional[int]) -> int:
        if top_n is None:
            return self.config.default_top_n
        if top_n not in self.config.top_n_choices:
            raise ConfigurationError(
                f"top_n must be one of {self.config.top_n_choices}, got {top_n!r}",
                setting_name="top_n",
                expected_type=" | ".join(str(n) for n in self.config.top_n_choices),
            )
        return top_n

    def build_view(
        self,
        rows: Tuple[RawRow, ...],
        filters: FilterConfig,
        top_n: Optional[int] = None,
    ) -> FlowView:
        """Run the pipeline over previously loaded rows.

        Raises:
            ConfigurationError: If ``top_n`` is not an allowed choice.
        """
        return build_flow_view(
            rows,
            filters,
            self.validate_top_n(top_n),
            repair=self.repair,
            scale=self.scale,
        )

    def busiest_routes(self, view: FlowView) -> List[RouteBar]:
        return top_routes(view.records, self.config.chart_limit)

    def render_map_html(self, view: FlowView) -> str:
        """Render the view's weighted subset as an HTML document.

        Raises:
            RenderingError: If no renderer is configured or rendering fails.
        """
        if self.map_renderer is None:
            raise RenderingError("No map renderer configured")
        return self.map_renderer.render_html(view.rendered)

    def render_map(self, view: FlowView, output_path: Optional[Path] = None) -> Path:
        """Render the view's weighted subset to a file.

        Args:
            view: The flow view to draw.
            output_path: Target file; defaults to ``default_output_path``.

        Raises:
            RenderingError: If no renderer is configured or rendering fails.
        """
        output_path = output_path or self.default_output_path
        if self.map_renderer is None:
            raise RenderingError(
                "No map renderer configured", output_path=str(output_path)
            )
        path = self.map_renderer.render(view.rendered, output_path)
        self._logger.info("Map generated", extra={"path": str(path)})
        return path
