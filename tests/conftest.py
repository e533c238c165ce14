from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from signgrid.models import DisplayState, MultiSeries, ValidatorSeries
from signgrid.visualizer.surface import DrawingContext, Fill, Page, Surface


@dataclass
class Call:
    name: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any] = field(default_factory=dict)


class RecordingContext(DrawingContext):
    """Captures drawing commands instead of rasterising them."""

    def __init__(self) -> None:
        self.calls: list[Call] = []

    def named(self, name: str) -> list[Call]:
        return [c for c in self.calls if c.name == name]

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.calls.append(Call("clear_rect", (x, y, w, h)))

    def fill_rect(self, x: float, y: float, w: float, h: float, fill: Fill) -> None:
        self.calls.append(Call("fill_rect", (x, y, w, h, fill)))

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: str,
        font_size: float,
        max_width: float | None = None,
    ) -> None:
        self.calls.append(Call("fill_text", (text, x, y, color, font_size), {"max_width": max_width}))

    def stroke_line(
        self, x0: float, y0: float, x1: float, y1: float, color: str, width: float = 1.0
    ) -> None:
        self.calls.append(Call("stroke_line", (x0, y0, x1, y1, color, width)))

    def measure_text(self, text: str, font_size: float) -> float:
        return len(text) * font_size * 0.6


class FakeSurface(Surface):
    def __init__(self, width: float, height: float = 0, context: bool = True) -> None:
        self.logical = (width, height)
        self.physical = (0, 0)
        self.context: RecordingContext | None = RecordingContext() if context else None
        self.resizes: list[tuple[int, int]] = []

    def get_logical_size(self) -> tuple[float, float]:
        return self.logical

    def set_logical_size(self, width: float, height: float) -> None:
        self.logical = (width, height)

    def get_physical_size(self) -> tuple[int, int]:
        return self.physical

    def set_physical_size(self, width: int, height: int) -> None:
        self.physical = (width, height)
        self.resizes.append((width, height))

    def get_drawing_context(self) -> RecordingContext | None:
        return self.context


@pytest.fixture
def dark() -> DisplayState:
    return DisplayState()


@pytest.fixture
def scenario() -> MultiSeries:
    return MultiSeries(status=[ValidatorSeries(name="val-A", blocks=[4, 3, 3, 0, 9])])


@pytest.fixture
def fake_page() -> Page:
    page = Page(device_pixel_ratio=1.0)
    page.add("canvas", FakeSurface(600))
    page.add("legend", FakeSurface(700))
    return page
