import logging

from signgrid.models import (
    BASE_CELL_HEIGHT,
    BASE_CELL_WIDTH,
    BASE_LABEL_COLUMN_WIDTH,
    DisplayState,
    MultiSeries,
    ScaleUnits,
    StatusCode,
)
from signgrid.visualizer.scale import fix_dpi
from signgrid.visualizer.style import (
    DIVIDER_COLOR,
    GRADIENT_MAP,
    GRADIENT_OFFSETS,
    GRID_FONT_SIZE,
    GRID_MARGIN,
    LABEL_BASELINE_OFFSET,
    LABEL_LEFT_MARGIN,
    NO_DATA_FILL,
    ROW_HEIGHT_FACTOR,
    STRIKE_COLOR,
)
from signgrid.visualizer.surface import DrawingContext, Fill, LinearGradient, Page

logger = logging.getLogger(__name__)


def grid_height(rows: int) -> int:
    """Logical height of a grid surface holding ``rows`` validators."""
    return round(ROW_HEIGHT_FACTOR * BASE_CELL_HEIGHT * rows) + GRID_MARGIN


def grid_width(multi: MultiSeries) -> int:
    """Logical width that fits the longest row."""
    return BASE_LABEL_COLUMN_WIDTH + BASE_CELL_WIDTH * multi.max_blocks + LABEL_LEFT_MARGIN


def cell_fill(value: object, x: float, y: float, width: float) -> Fill:
    code = StatusCode.classify(value)
    colors = GRADIENT_MAP.get(code)
    if colors is None:
        return NO_DATA_FILL
    return LinearGradient(x, y, x + width, y).with_stops(colors, GRADIENT_OFFSETS)


class GridRenderer:
    def __init__(self, state: DisplayState):
        self.state: DisplayState = state

    def draw(self, page: Page, multi: MultiSeries, surface_id: str = "canvas") -> ScaleUnits | None:
        surface = page.surface(surface_id)
        logical_width, _ = surface.get_logical_size()
        # resize first so the DPI fix-up sees the final height
        surface.set_logical_size(logical_width, grid_height(len(multi)))
        units = fix_dpi(page, surface_id)

        ctx = surface.get_drawing_context()
        if ctx is None:
            logger.debug("surface %r has no drawing context, grid skipped", surface_id)
            return None

        for j, series in enumerate(multi):
            self._draw_label(ctx, units, j, series.name)
            for i, value in enumerate(series.blocks or []):
                self._draw_cell(ctx, units, j, i, value)

        logger.debug("drew %d rows, %d columns max", len(multi), multi.max_blocks)
        return units

    def _draw_label(self, ctx: DrawingContext, units: ScaleUnits, j: int, name: str) -> None:
        scale = units.scale_factor
        ctx.fill_text(
            name,
            LABEL_LEFT_MARGIN * scale,
            (j + 2) * units.cell_height - LABEL_BASELINE_OFFSET * scale,
            self.state.text_color,
            GRID_FONT_SIZE * scale,
            max_width=units.label_max_width,
        )

    @staticmethod
    def _draw_cell(ctx: DrawingContext, units: ScaleUnits, j: int, i: int, value: object) -> None:
        w, h = units.cell_width, units.cell_height
        x = i * w + units.label_column_width
        y = (j + 1) * h

        ctx.clear_rect(x, y, w, h)
        ctx.fill_rect(x, y, w, h, cell_fill(value, x, y, w))

        if i > 0:
            line_y = y + h - 0.5
            ctx.stroke_line(x - w, line_y, x + w, line_y, DIVIDER_COLOR, units.scale_factor)

        if StatusCode.classify(value) == StatusCode.MISSED:
            cy = y + h / 2
            half = units.scale_factor / 2
            ctx.stroke_line(
                x + 1 + w / 4, cy - half, x + w - w / 4 - 1, cy + half, STRIKE_COLOR, units.scale_factor
            )
