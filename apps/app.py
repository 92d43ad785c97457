"""Gradio dashboard for travel-flow tables.

The app owns the state (parsed rows, filter values) and reruns the pure
pipeline every time a filter changes.
"""

import html
from pathlib import Path
from typing import List, Optional, Tuple

import gradio as gr

from flowpulse.config import get_config
from flowpulse.container import get_container
from flowpulse.domain import ALL_YEARS, ConfigurationError, FilterConfig, RenderingError
from flowpulse.flows.summary import format_volume
from flowpulse.logging_setup import configure_logging
from flowpulse.services import FlowDashboardService

# ============================ CONFIG ============================
CONFIG = get_config()
configure_logging(CONFIG.observability)

SERVICE: FlowDashboardService = get_container().resolve(FlowDashboardService)

YEAR_CHOICES: List[str] = [ALL_YEARS, "2020", "2021", "2022"]
PURPOSE_CHOICES: List[str] = ["total", "leisure", "business"]
TOP_N_CHOICES: List[int] = list(CONFIG.pipeline.top_n_choices)

TABLE_HEADERS = ["Year", "Origin", "Destination", "Leisure", "Business", "Total"]
ROUTE_HEADERS = ["Route", "Volume"]


def _map_iframe_from_html(document_html: str, *, height_px: int = 560) -> str:
    escaped = html.escape(document_html, quote=True)
    return (
        f'<iframe srcdoc="{escaped}" '
        f'style="width: 100%; height: {height_px}px; border: 0;" '
        f'loading="lazy"></iframe>'
    )


def load_table(file_path: Optional[str]) -> Tuple[tuple, str]:
    path = Path(file_path) if file_path else None
    rows, error = SERVICE.load_rows_safe(path)
    if error:
        return (), f"🔴 **{error}**. Upload a CSV with `lat_o`, `lon_o`, `lat_d`, `lon_d` and flow columns."
    return rows, f"🟢 File connected | Records: {len(rows)}"


def refresh(
    rows: tuple,
    year: str,
    purpose: str,
    top_n: int,
    origin_query: str,
    destination_query: str,
) -> Tuple[str, str, List[List[str]], List[List[str]]]:
    if not rows:
        return "<p>No data available</p>", "", [], []

    try:
        filters = FilterConfig.from_values(year, purpose, origin_query, destination_query)
        view = SERVICE.build_view(rows, filters, int(top_n))
    except ConfigurationError as exc:
        return f"<pre>{html.escape(str(exc))}</pre>", "", [], []

    try:
        map_html = _map_iframe_from_html(SERVICE.render_map_html(view))
    except RenderingError as exc:
        map_html = f"<pre>{html.escape(f'No map: {exc}')}</pre>"

    summary = (
        f"**OD Flow Map (Top {view.top_n})** | Showing {len(view.rendered)} flows | "
        f"Matching records: {len(view.records)} | "
        f"Total volume: {format_volume(view.total_volume)}"
    )
    routes = [
        [bar.label, format_volume(bar.value)] for bar in SERVICE.busiest_routes(view)
    ]
    table = [
        [
            "" if record.year is None else str(record.year),
            record.origin_name,
            record.destination_name,
            format_volume(record.leisure_volume),
            format_volume(record.business_volume),
            format_volume(record.total_volume),
        ]
        for record in view.records[: CONFIG.pipeline.table_limit]
    ]
    return map_html, summary, routes, table


# ============================ UI ============================
with gr.Blocks(title="Flow Pulse • OD flow dashboard") as app:
    gr.Markdown(
        """
# 🗺️ Flow Pulse – Domestic travel flows
✔ Filter by year, purpose, origin and destination
✔ Line width is log-scaled by flow volume within the current view
"""
    )

    rows_state = gr.State(())

    with gr.Row():
        upload = gr.File(label="📄 Upload CSV", file_types=[".csv"], type="filepath")
        status_md = gr.Markdown()

    with gr.Row():
        year_dd = gr.Dropdown(YEAR_CHOICES, value=ALL_YEARS, label="📅 Year")
        purpose_dd = gr.Dropdown(PURPOSE_CHOICES, value="total", label="🎯 Purpose")
        top_n_dd = gr.Dropdown(
            TOP_N_CHOICES, value=CONFIG.pipeline.default_top_n, label="🔝 Map Top-N"
        )
        origin_tb = gr.Textbox(label="🔍 Origin", placeholder="Search origin...")
        dest_tb = gr.Textbox(label="🔍 Destination", placeholder="Search destination...")

    summary_md = gr.Markdown()
    with gr.Row():
        map_view = gr.HTML(value="<p></p>")
        routes_df = gr.Dataframe(
            headers=ROUTE_HEADERS,
            label=f"Top {CONFIG.pipeline.chart_limit} busiest routes",
            interactive=False,
        )

    table_df = gr.Dataframe(
        headers=TABLE_HEADERS,
        label=f"Data table (Top {CONFIG.pipeline.table_limit})",
        interactive=False,
    )

    filter_inputs = [rows_state, year_dd, purpose_dd, top_n_dd, origin_tb, dest_tb]
    view_outputs = [map_view, summary_md, routes_df, table_df]

    app.load(lambda: load_table(None), outputs=[rows_state, status_md]).then(
        refresh, inputs=filter_inputs, outputs=view_outputs
    )
    upload.upload(load_table, inputs=upload, outputs=[rows_state, status_md]).then(
        refresh, inputs=filter_inputs, outputs=view_outputs
    )
    for control in (year_dd, purpose_dd, top_n_dd):
        control.change(refresh, inputs=filter_inputs, outputs=view_outputs)
    for box in (origin_tb, dest_tb):
        box.submit(refresh, inputs=filter_inputs, outputs=view_outputs)

app.launch()
