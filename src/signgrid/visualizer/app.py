import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import plotly.graph_objects as go  # pyright: ignore[reportMissingTypeStubs]
from dash import Dash, Input, Output, State, dcc, html, no_update

from signgrid.config import Config
from signgrid.models import DisplayState, MultiSeries
from signgrid.source.source_base import SourceError, StatusSource
from signgrid.visualizer.figure_builder import GridFigureBuilder
from signgrid.visualizer.grid import GridRenderer, grid_width
from signgrid.visualizer.legend import LegendRenderer, legend_width
from signgrid.visualizer.surface import Page, PillowSurface
from signgrid.visualizer.theme import display_state, page_chrome, toggle_theme

logger = logging.getLogger(__name__)

UIKIT_CSS = "https://cdn.jsdelivr.net/npm/uikit@3/dist/css/uikit.min.css"
CHROME_REGIONS = ("body", "canvasDiv", "tableDiv", "legendContainer")


@dataclass(frozen=True)
class RenderedPage:
    grid: PillowSurface
    legend: PillowSurface
    builder: GridFigureBuilder | None


def render_page(multi: MultiSeries, state: DisplayState, ratio: float) -> RenderedPage:
    """Draw grid and legend onto fresh Pillow surfaces."""
    grid = PillowSurface(grid_width(multi))
    legend = PillowSurface(legend_width())
    page = Page(device_pixel_ratio=ratio, surfaces={"canvas": grid, "legend": legend})

    units = GridRenderer(state).draw(page, multi)
    _ = LegendRenderer(state).draw(page)
    builder = None if units is None else GridFigureBuilder(multi, units)
    return RenderedPage(grid, legend, builder)


class DashApp(Dash):
    def __init__(self, source: StatusSource, config: Config | None = None):
        super().__init__(__name__, external_stylesheets=[UIKIT_CSS], title="signing status")
        self.source: StatusSource = source
        self.app_config: Config = config or Config()
        self.layout = self._build_layout(display_state(self.app_config.render.dark))
        self._register_callbacks()

    def _build_layout(self, state: DisplayState) -> html.Div:
        chrome = page_chrome(state)
        return html.Div(
            id="body",
            className=chrome.classes["body"],
            style={"minHeight": "100vh"},
            children=[
                html.Div(
                    className="uk-padding-small",
                    children=[html.Button("light / dark", id="theme-toggle", n_clicks=0, className="uk-button uk-button-small")],
                ),
                html.Div(
                    id="legendContainer",
                    className=chrome.classes["legendContainer"],
                    children=[html.Img(id="legend")],
                ),
                html.Div(
                    id="canvasDiv",
                    className=chrome.classes["canvasDiv"],
                    style=chrome.styles["canvasDiv"],
                    children=[dcc.Graph(id="canvas", config={"displayModeBar": False, "scrollZoom": True})],
                ),
                html.Div(
                    id="tableDiv",
                    className=chrome.classes["tableDiv"],
                    children=[html.Pre(id="logs", style=chrome.styles["logs"])],
                ),
                dcc.Interval(id="refresh", interval=self.app_config.source.refresh_ms),
                dcc.Store(id="display-state", data=state.to_dict()),
            ],
        )

    def _register_callbacks(self) -> None:
        _ = self.callback(
            Output("display-state", "data"),
            Input("theme-toggle", "n_clicks"),
            State("display-state", "data"),
            prevent_initial_call=True,
        )(self.on_toggle)

        _ = self.callback(
            *[Output(region, "className") for region in CHROME_REGIONS],
            Output("canvasDiv", "style"),
            Output("logs", "style"),
            Input("display-state", "data"),
        )(self.on_chrome)

        _ = self.callback(
            Output("canvas", "figure"),
            Output("legend", "src"),
            Output("legend", "style"),
            Output("logs", "children"),
            Input("refresh", "n_intervals"),
            Input("display-state", "data"),
        )(self.on_redraw)

    @staticmethod
    def on_toggle(_n_clicks: int | None, data: dict[str, Any] | None) -> dict[str, object]:
        return toggle_theme(DisplayState.from_dict(data)).to_dict()

    @staticmethod
    def on_chrome(data: dict[str, Any] | None) -> tuple[object, ...]:
        chrome = page_chrome(DisplayState.from_dict(data))
        classes = [chrome.classes[region] for region in CHROME_REGIONS]
        return *classes, chrome.styles["canvasDiv"], chrome.styles["logs"]

    def on_redraw(self, _n_intervals: int | None, data: dict[str, Any] | None) -> tuple[Any, ...]:
        state = DisplayState.from_dict(data)
        try:
            multi = self.source.fetch()
        except (SourceError, OSError) as exc:
            logger.error("status refresh failed: %s", exc)
            return no_update, no_update, no_update, f"refresh failed: {exc}"

        rendered = render_page(multi, state, self.app_config.render.device_pixel_ratio)
        grid, legend = rendered.grid, rendered.legend

        figure: go.Figure | Any = no_update
        if rendered.builder is not None:
            figure = rendered.builder.build(grid.to_data_uri(), grid.get_logical_size())
        legend_w, legend_h = legend.get_logical_size()
        stamp = datetime.now(tz=timezone.utc).strftime("%H:%M:%S")
        message = f"[{stamp}] {len(multi)} validators, {multi.max_blocks} blocks"
        return figure, legend.to_data_uri(), {"width": f"{legend_w}px", "height": f"{legend_h}px"}, message
