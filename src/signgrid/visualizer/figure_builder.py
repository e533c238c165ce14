import plotly.graph_objects as go  # pyright: ignore[reportMissingTypeStubs]

from signgrid.models import MultiSeries, ScaleUnits, StatusCode
from signgrid.visualizer.style import LABEL_MAP


class GridFigureBuilder:
    """Wraps a rendered grid image in a pannable figure with per-cell hover."""

    def __init__(self, multi: MultiSeries, units: ScaleUnits):
        self.multi: MultiSeries = multi
        self.units: ScaleUnits = units

    def build(self, png_data_uri: str, logical_size: tuple[float, float]) -> go.Figure:
        fig = go.Figure()
        self._add_image(fig, png_data_uri)
        self._add_hover_points(fig)
        self._configure_layout(fig, logical_size)
        return fig

    def _add_image(self, fig: go.Figure, png_data_uri: str) -> None:
        ratio = self.units.scale_factor
        fig = fig.add_trace(  # pyright: ignore[reportUnknownMemberType]
            go.Image(
                source=png_data_uri,
                x0=0,
                y0=0,
                dx=1 / ratio,
                dy=1 / ratio,
                hoverinfo="skip",
            )
        )

    def hover_points(self) -> tuple[list[float], list[float], list[list[object]]]:
        """Logical cell centers with [validator, blocks ago, status label] per cell."""
        ratio = self.units.scale_factor
        w, h = self.units.cell_width / ratio, self.units.cell_height / ratio
        label_w = self.units.label_column_width / ratio

        xs: list[float] = []
        ys: list[float] = []
        customdata: list[list[object]] = []
        for j, series in enumerate(self.multi):
            n = len(series.blocks)
            for i, value in enumerate(series.blocks):
                xs.append(label_w + (i + 0.5) * w)
                ys.append((j + 1.5) * h)
                customdata.append([series.name, n - 1 - i, LABEL_MAP[StatusCode.classify(value)]])
        return xs, ys, customdata

    def _add_hover_points(self, fig: go.Figure) -> None:
        xs, ys, customdata = self.hover_points()
        fig = fig.add_trace(  # pyright: ignore[reportUnknownMemberType]
            go.Scatter(
                x=xs,
                y=ys,
                mode="markers",
                marker=dict(
                    size=self.units.cell_width / self.units.scale_factor,
                    symbol="square",
                    color="rgba(0,0,0,0)",
                ),
                customdata=customdata,
                hovertemplate="%{customdata[0]}<br>%{customdata[1]} blocks ago<br>%{customdata[2]}<extra></extra>",
                showlegend=False,
            )
        )

    @staticmethod
    def _configure_layout(fig: go.Figure, logical_size: tuple[float, float]) -> None:
        width, height = logical_size
        _ = fig.update_layout(  # pyright: ignore[reportUnknownMemberType]
            width=width,
            height=height,
            margin=dict(l=0, r=0, t=0, b=0),
            xaxis=dict(visible=False, range=[0, width]),
            yaxis=dict(visible=False, range=[height, 0], scaleanchor="x"),
            paper_bgcolor="rgba(0,0,0,0)",
            plot_bgcolor="rgba(0,0,0,0)",
            hovermode="closest",
            dragmode="pan",
            showlegend=False,
        )
