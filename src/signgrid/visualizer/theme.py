import logging
from dataclasses import dataclass, field

from signgrid.models import DisplayState
from signgrid.visualizer.style import (
    DARK_CLASSES,
    DARK_LOG_STYLE,
    DARK_SIGN_ALPHA,
    DARK_TEXT_COLOR,
    LIGHT_CLASSES,
    LIGHT_LOG_STYLE,
    LIGHT_SIGN_ALPHA,
    LIGHT_TEXT_COLOR,
)

logger = logging.getLogger(__name__)


@dataclass
class PageChrome:
    classes: dict[str, str] = field(default_factory=dict)
    styles: dict[str, dict[str, str]] = field(default_factory=dict)


def display_state(is_dark: bool) -> DisplayState:
    if is_dark:
        return DisplayState(is_dark=True, text_color=DARK_TEXT_COLOR, sign_alpha=DARK_SIGN_ALPHA)
    return DisplayState(is_dark=False, text_color=LIGHT_TEXT_COLOR, sign_alpha=LIGHT_SIGN_ALPHA)


def toggle_theme(state: DisplayState) -> DisplayState:
    new_state = display_state(not state.is_dark)
    logger.info("theme switched to %s", "dark" if new_state.is_dark else "light")
    return new_state


def page_chrome(state: DisplayState) -> PageChrome:
    """Container class names and inline styles of the host page for ``state``."""
    if state.is_dark:
        classes, log_style = DARK_CLASSES, DARK_LOG_STYLE
    else:
        classes, log_style = LIGHT_CLASSES, LIGHT_LOG_STYLE
    return PageChrome(
        classes=dict(classes),
        styles={
            "logs": dict(log_style),
            "canvasDiv": {"--sign-alpha": str(state.sign_alpha)},
        },
    )
