from signgrid.models import StatusCode

GRADIENT_MAP: dict[StatusCode, tuple[str, str, str]] = {
    StatusCode.PROPOSED: ("#f59e0b", "#fbbf24", "#f59e0b"),
    StatusCode.SIGNED: ("#10b981", "#34d399", "#10b981"),
    StatusCode.MISSED_PRECOMMIT: ("#3b82f6", "#60a5fa", "#3b82f6"),
    StatusCode.MISSED_PREVOTE: ("#8b5cf6", "#a78bfa", "#8b5cf6"),
    StatusCode.MISSED: ("#ef4444", "#f87171", "#ef4444"),
}
GRADIENT_OFFSETS = (0.0, 0.5, 1.0)

NO_DATA_FILL = "rgba(127,127,127,0.3)"
DIVIDER_COLOR = "rgb(51,51,51)"
STRIKE_COLOR = "white"

LABEL_MAP: dict[StatusCode, str] = {
    StatusCode.PROPOSED: "proposed",
    StatusCode.SIGNED: "signed",
    StatusCode.MISSED_PRECOMMIT: "miss/precommit",
    StatusCode.MISSED_PREVOTE: "miss/prevote",
    StatusCode.MISSED: "missed",
    StatusCode.NO_DATA: "no data",
}

DARK_TEXT_COLOR = "#b0b0b0"
DARK_SIGN_ALPHA = 0.4
LIGHT_TEXT_COLOR = "#3f3f3f"
LIGHT_SIGN_ALPHA = 0.2

# grid geometry, logical pixels
GRID_MARGIN = 30
ROW_HEIGHT_FACTOR = 1.2
LABEL_LEFT_MARGIN = 5
LABEL_BASELINE_OFFSET = 6
GRID_FONT_SIZE = 16

# legend geometry, logical pixels
LEGEND_FONT_SIZE = 14
LEGEND_START = 120
LEGEND_ORDER = (
    StatusCode.PROPOSED,
    StatusCode.SIGNED,
    StatusCode.MISSED_PRECOMMIT,
    StatusCode.MISSED_PREVOTE,
    StatusCode.MISSED,
    StatusCode.NO_DATA,
)
# nominal advance from a label's start to the next swatch
LEGEND_ADVANCE: dict[StatusCode, int] = {
    StatusCode.PROPOSED: 65,
    StatusCode.SIGNED: 50,
    StatusCode.MISSED_PRECOMMIT: 110,
    StatusCode.MISSED_PREVOTE: 90,
    StatusCode.MISSED: 59,
    StatusCode.NO_DATA: 55,
}
# minimum gap between a label's end and the next swatch
LEGEND_LABEL_PADDING = 6

# host page containers, UIkit classes
DARK_CLASSES: dict[str, str] = {
    "body": "uk-background-secondary uk-light",
    "canvasDiv": "uk-width-expand uk-overflow-auto uk-background-secondary",
    "tableDiv": "uk-padding-small uk-text-small uk-background-secondary uk-overflow-auto",
    "legendContainer": "uk-nav-center uk-background-secondary uk-padding-remove",
}
LIGHT_CLASSES: dict[str, str] = {
    "body": "uk-background-default uk-text-default",
    "canvasDiv": "uk-width-expand uk-overflow-auto uk-background-default",
    "tableDiv": "uk-padding-small uk-text-small uk-background-default uk-overflow-auto",
    "legendContainer": "uk-nav-center uk-background-default uk-padding-remove",
}
DARK_LOG_STYLE: dict[str, str] = {"background": "#080808", "height": "300px"}
LIGHT_LOG_STYLE: dict[str, str] = {"color": "#0a0a0a", "background": "#dddddd", "height": "300px"}
