import base64
import io
import logging
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import lru_cache
from typing import final, override

from PIL import Image, ImageColor, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

type RGBA = tuple[int, int, int, int]

_RGBA_RE = re.compile(
    r"rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([\d.]+)\s*\)", re.IGNORECASE
)


class SurfaceNotFoundError(LookupError):
    pass


@dataclass(frozen=True)
class LinearGradient:
    x0: float
    y0: float
    x1: float
    y1: float
    stops: tuple[tuple[float, str], ...] = ()

    def with_stops(self, colors: tuple[str, ...], offsets: tuple[float, ...]) -> "LinearGradient":
        return LinearGradient(self.x0, self.y0, self.x1, self.y1, tuple(zip(offsets, colors)))


type Fill = str | LinearGradient


class DrawingContext(ABC):
    """Subset of a 2D canvas context, coordinates in physical pixels."""

    @abstractmethod
    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, fill: Fill) -> None: ...

    @abstractmethod
    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: str,
        font_size: float,
        max_width: float | None = None,
    ) -> None: ...

    @abstractmethod
    def stroke_line(
        self, x0: float, y0: float, x1: float, y1: float, color: str, width: float = 1.0
    ) -> None: ...

    @abstractmethod
    def measure_text(self, text: str, font_size: float) -> float: ...


class Surface(ABC):
    @abstractmethod
    def get_logical_size(self) -> tuple[float, float]: ...

    @abstractmethod
    def set_logical_size(self, width: float, height: float) -> None: ...

    @abstractmethod
    def get_physical_size(self) -> tuple[int, int]: ...

    @abstractmethod
    def set_physical_size(self, width: int, height: int) -> None: ...

    @abstractmethod
    def get_drawing_context(self) -> DrawingContext | None: ...


@dataclass
class Page:
    """Named surfaces of one rendered page plus its device pixel ratio."""

    device_pixel_ratio: float = 1.0
    surfaces: dict[str, Surface] = field(default_factory=dict)

    def add(self, surface_id: str, surface: Surface) -> Surface:
        self.surfaces[surface_id] = surface
        return surface

    def surface(self, surface_id: str) -> Surface:
        try:
            return self.surfaces[surface_id]
        except KeyError:
            raise SurfaceNotFoundError(f"no surface with id {surface_id!r}") from None


@lru_cache(maxsize=256)
def parse_color(color: str) -> RGBA:
    m = _RGBA_RE.fullmatch(color.strip())
    if m:
        r, g, b = (int(m.group(i)) for i in range(1, 4))
        alpha = round(float(m.group(4)) * 255)
        return r, g, b, max(0, min(255, alpha))
    r, g, b, a = ImageColor.getcolor(color, "RGBA")  # pyright: ignore[reportGeneralTypeIssues]
    return r, g, b, a


def _lerp(c0: RGBA, c1: RGBA, t: float) -> RGBA:
    return (
        round(c0[0] + (c1[0] - c0[0]) * t),
        round(c0[1] + (c1[1] - c0[1]) * t),
        round(c0[2] + (c1[2] - c0[2]) * t),
        round(c0[3] + (c1[3] - c0[3]) * t),
    )


def gradient_color_at(gradient: LinearGradient, x: float) -> RGBA:
    """Color of a horizontal gradient at physical x, stops clamped at both ends."""
    if not gradient.stops:
        return 0, 0, 0, 0
    stops = [(offset, parse_color(color)) for offset, color in gradient.stops]
    span = gradient.x1 - gradient.x0
    t = 0.0 if span == 0 else (x - gradient.x0) / span
    t = max(0.0, min(1.0, t))
    if t <= stops[0][0]:
        return stops[0][1]
    for (o0, c0), (o1, c1) in zip(stops, stops[1:]):
        if o0 <= t <= o1:
            return c0 if o1 == o0 else _lerp(c0, c1, (t - o0) / (o1 - o0))
    return stops[-1][1]


@final
class PillowContext(DrawingContext):
    def __init__(self, surface: "PillowSurface"):
        self.surface = surface
        self._fonts: dict[float, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    @property
    def image(self) -> Image.Image:
        return self.surface.image

    def _font(self, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if size not in self._fonts:
            self._fonts[size] = ImageFont.load_default(size)
        return self._fonts[size]

    def _box(self, x: float, y: float, w: float, h: float) -> tuple[int, int, int, int] | None:
        left = max(0, round(x))
        top = max(0, round(y))
        right = min(self.image.width, round(x + w))
        bottom = min(self.image.height, round(y + h))
        if right <= left or bottom <= top:
            return None
        return left, top, right, bottom

    @override
    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        box = self._box(x, y, w, h)
        if box:
            self.image.paste((0, 0, 0, 0), box)

    @override
    def fill_rect(self, x: float, y: float, w: float, h: float, fill: Fill) -> None:
        box = self._box(x, y, w, h)
        if box is None:
            return
        left, top, right, bottom = box
        if isinstance(fill, LinearGradient):
            patch = Image.new("RGBA", (right - left, bottom - top))
            draw = ImageDraw.Draw(patch)
            for col in range(right - left):
                color = gradient_color_at(fill, left + col + 0.5)
                draw.line([(col, 0), (col, bottom - top - 1)], fill=color)
        else:
            patch = Image.new("RGBA", (right - left, bottom - top), parse_color(fill))
        self.image.alpha_composite(patch, dest=(left, top))

    @override
    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: str,
        font_size: float,
        max_width: float | None = None,
    ) -> None:
        if not text:
            return
        font = self._font(font_size)
        left, top, right, bottom = font.getbbox(text, anchor="ls")
        width, height = math.ceil(right - left), math.ceil(bottom - top)
        if width <= 0 or height <= 0:
            return
        patch = Image.new("RGBA", (width, height))
        ImageDraw.Draw(patch).text((-left, -top), text, fill=parse_color(color), font=font, anchor="ls")
        if max_width is not None and width > max_width:
            # condensed like canvas fillText with maxWidth
            patch = patch.resize((max(1, math.floor(max_width)), height), Image.Resampling.LANCZOS)
        self._composite(patch, round(x + left), round(y + top))

    @override
    def stroke_line(
        self, x0: float, y0: float, x1: float, y1: float, color: str, width: float = 1.0
    ) -> None:
        draw = ImageDraw.Draw(self.image)
        draw.line(
            # a canvas line at y=n.5 covers pixel row n
            [(math.floor(x0), math.floor(y0)), (math.floor(x1), math.floor(y1))],
            fill=parse_color(color),
            width=max(1, round(width)),
        )

    @override
    def measure_text(self, text: str, font_size: float) -> float:
        return float(self._font(font_size).getlength(text))

    def _composite(self, patch: Image.Image, x: int, y: int) -> None:
        # alpha_composite rejects negative offsets, crop instead
        crop_x, crop_y = max(0, -x), max(0, -y)
        if crop_x or crop_y:
            patch = patch.crop((crop_x, crop_y, patch.width, patch.height))
        x, y = max(0, x), max(0, y)
        if x >= self.image.width or y >= self.image.height or patch.width == 0 or patch.height == 0:
            return
        patch = patch.crop((0, 0, min(patch.width, self.image.width - x), min(patch.height, self.image.height - y)))
        self.image.alpha_composite(patch, dest=(x, y))


@final
class PillowSurface(Surface):
    """In-memory surface backed by a transparent RGBA Pillow image."""

    def __init__(self, width: float, height: float = 0, context_supported: bool = True):
        self.logical_width: float = width
        self.logical_height: float = height
        self.context_supported: bool = context_supported
        self.image: Image.Image = Image.new("RGBA", (max(0, math.floor(width)), max(0, math.floor(height))))
        self._context: PillowContext | None = None

    @override
    def get_logical_size(self) -> tuple[float, float]:
        return self.logical_width, self.logical_height

    @override
    def set_logical_size(self, width: float, height: float) -> None:
        self.logical_width = width
        self.logical_height = height

    @override
    def get_physical_size(self) -> tuple[int, int]:
        return self.image.width, self.image.height

    @override
    def set_physical_size(self, width: int, height: int) -> None:
        # resizing a canvas discards its pixels
        logger.debug("surface resized to %dx%d physical pixels", width, height)
        self.image = Image.new("RGBA", (max(0, width), max(0, height)))

    @override
    def get_drawing_context(self) -> DrawingContext | None:
        if not self.context_supported:
            return None
        if self._context is None:
            self._context = PillowContext(self)
        return self._context

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()

    def to_data_uri(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.to_png()).decode("ascii")
