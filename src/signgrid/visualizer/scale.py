import math

from signgrid.models import ScaleUnits
from signgrid.visualizer.surface import Page


def physical_size(logical: tuple[float, float], ratio: float) -> tuple[int, int]:
    width, height = logical
    # float noise such as 3 * 1.1 must not lose a pixel
    return math.floor(width * ratio + 1e-9), math.floor(height * ratio + 1e-9)


def fix_dpi(page: Page, surface_id: str) -> ScaleUnits:
    """Match the surface's physical pixels to its logical size at the page's ratio.

    Raises SurfaceNotFoundError when the page has no such surface.
    """
    surface = page.surface(surface_id)
    ratio = page.device_pixel_ratio
    surface.set_physical_size(*physical_size(surface.get_logical_size(), ratio))
    return ScaleUnits.from_ratio(ratio)
