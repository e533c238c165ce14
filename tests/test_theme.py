from __future__ import annotations

from signgrid.models import DisplayState, MultiSeries
from signgrid.visualizer.grid import GridRenderer, grid_width
from signgrid.visualizer.surface import Page, PillowSurface
from signgrid.visualizer.theme import display_state, page_chrome, toggle_theme


def test_default_is_dark() -> None:
    state = DisplayState()
    assert state.is_dark
    assert state.text_color == "#b0b0b0"
    assert state.sign_alpha == 0.4
    assert display_state(True) == state


def test_toggle_dark_to_light_and_back() -> None:
    light = toggle_theme(DisplayState())
    assert not light.is_dark
    assert light.text_color == "#3f3f3f"
    assert light.sign_alpha == 0.2
    assert toggle_theme(light) == DisplayState()


def test_page_chrome_follows_theme() -> None:
    dark = page_chrome(DisplayState())
    light = page_chrome(toggle_theme(DisplayState()))

    assert dark.classes["body"] == "uk-background-secondary uk-light"
    assert light.classes["body"] == "uk-background-default uk-text-default"
    assert set(dark.classes) == set(light.classes) == {"body", "canvasDiv", "tableDiv", "legendContainer"}
    assert dark.styles["logs"]["background"] == "#080808"
    assert light.styles["logs"]["color"] == "#0a0a0a"
    assert dark.styles["canvasDiv"]["--sign-alpha"] == "0.4"
    assert light.styles["canvasDiv"]["--sign-alpha"] == "0.2"


def test_page_chrome_returns_copies() -> None:
    chrome = page_chrome(DisplayState())
    chrome.classes["body"] = "changed"
    assert page_chrome(DisplayState()).classes["body"] != "changed"


def test_toggle_leaves_drawn_pixels_alone(scenario: MultiSeries) -> None:
    state = DisplayState()
    page = Page()
    surface = page.add("canvas", PillowSurface(grid_width(scenario)))
    assert isinstance(surface, PillowSurface)
    GridRenderer(state).draw(page, scenario)
    before = surface.image.tobytes()

    light = toggle_theme(state)
    assert surface.image.tobytes() == before

    GridRenderer(light).draw(page, scenario)
    assert surface.image.tobytes() != before
