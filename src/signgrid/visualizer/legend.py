import logging
import math
from dataclasses import dataclass

from signgrid.models import BASE_CELL_HEIGHT, BASE_CELL_WIDTH, DisplayState, ScaleUnits, StatusCode
from signgrid.visualizer.scale import fix_dpi
from signgrid.visualizer.style import (
    GRADIENT_MAP,
    GRADIENT_OFFSETS,
    LABEL_MAP,
    LEGEND_ADVANCE,
    LEGEND_FONT_SIZE,
    LEGEND_LABEL_PADDING,
    LEGEND_ORDER,
    LEGEND_START,
    NO_DATA_FILL,
    ROW_HEIGHT_FACTOR,
    STRIKE_COLOR,
)
from signgrid.visualizer.surface import DrawingContext, Fill, LinearGradient, Page

logger = logging.getLogger(__name__)

LEGEND_HEIGHT = round(ROW_HEIGHT_FACTOR * BASE_CELL_HEIGHT)
SWATCH_LABEL_GAP = BASE_CELL_WIDTH / 2


@dataclass(frozen=True)
class LegendSlot:
    code: StatusCode
    swatch_x: float
    label_x: float


def legend_width() -> int:
    """Logical width of the legend strip with the nominal label advances."""
    width = LEGEND_START + sum(
        BASE_CELL_WIDTH + SWATCH_LABEL_GAP + LEGEND_ADVANCE[code] for code in LEGEND_ORDER
    )
    return math.ceil(width)


class LegendRenderer:
    """Draws the six status swatches with their labels, left to right."""

    def __init__(self, state: DisplayState):
        self.state: DisplayState = state

    def layout(self, ctx: DrawingContext, units: ScaleUnits) -> tuple[list[LegendSlot], float]:
        """Swatch and label positions in physical pixels, plus the strip's right edge.

        Each label advances by its nominal spacing, or further when the
        rendered text would otherwise reach the next swatch.
        """
        scale = units.scale_factor
        slots: list[LegendSlot] = []
        offset = LEGEND_START * scale
        for code in LEGEND_ORDER:
            label_x = offset + units.cell_width + SWATCH_LABEL_GAP * scale
            slots.append(LegendSlot(code, offset, label_x))
            text_w = ctx.measure_text(LABEL_MAP[code], LEGEND_FONT_SIZE * scale)
            offset = label_x + max(LEGEND_ADVANCE[code] * scale, text_w + LEGEND_LABEL_PADDING * scale)
        return slots, offset

    def draw(self, page: Page, surface_id: str = "legend") -> ScaleUnits | None:
        surface = page.surface(surface_id)
        logical_width, _ = surface.get_logical_size()

        ctx = surface.get_drawing_context()
        if ctx is not None:
            _, right = self.layout(ctx, ScaleUnits.from_ratio(page.device_pixel_ratio))
            logical_width = max(logical_width, math.ceil(right / page.device_pixel_ratio))
        surface.set_logical_size(logical_width, LEGEND_HEIGHT)
        units = fix_dpi(page, surface_id)

        ctx = surface.get_drawing_context()
        if ctx is None:
            logger.debug("surface %r has no drawing context, legend skipped", surface_id)
            return None

        slots, _ = self.layout(ctx, units)
        for slot in slots:
            self._draw_entry(ctx, units, slot)
        return units

    def _draw_entry(self, ctx: DrawingContext, units: ScaleUnits, slot: LegendSlot) -> None:
        w, h, scale = units.cell_width, units.cell_height, units.scale_factor
        x = slot.swatch_x

        colors = GRADIENT_MAP.get(slot.code)
        fill: Fill = NO_DATA_FILL
        if colors is not None:
            fill = LinearGradient(x, 0, x + w, 0).with_stops(colors, GRADIENT_OFFSETS)
        ctx.fill_rect(x, 0, w, h, fill)

        if slot.code == StatusCode.MISSED:
            ctx.stroke_line(
                x + 1 * scale,
                h / 2 - 2 * scale,
                x + 4 * scale + w / 4,
                h / 2 - 1 * scale,
                STRIKE_COLOR,
                scale,
            )

        ctx.fill_text(
            LABEL_MAP[slot.code],
            slot.label_x,
            h / ROW_HEIGHT_FACTOR,
            self.state.text_color,
            LEGEND_FONT_SIZE * scale,
        )
