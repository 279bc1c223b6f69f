"""Color palettes for chart datasets."""

from contribution_charts.exceptions import PaletteError
from contribution_charts.models.chart import Color

# Assigned to projects by position, wrapping around
DEFAULT_PALETTE: tuple[Color, ...] = (
    Color(0, 152, 121),
    Color(54, 162, 235),
    Color(255, 99, 132),
    Color(255, 159, 64),
    Color(153, 102, 255),
    Color(255, 205, 86),
    Color(75, 192, 192),
    Color(201, 203, 207),
)

# Single-project owner charts
PROJECT_BORDER = Color(0, 152, 121)
PROJECT_BACKGROUND = Color(0, 152, 151)


def parse_color(value: str) -> Color:
    """Parse an ``r,g,b`` triple with components in 0-255.

    Raises:
        PaletteError: If the value is not three integers in range
    """
    parts = [part.strip() for part in value.strip().split(",")]
    if len(parts) != 3:
        raise PaletteError(f"Expected 'r,g,b', got {value!r}")
    try:
        r, g, b = (int(part) for part in parts)
    except ValueError as e:
        raise PaletteError(f"Color components must be integers: {value!r}") from e
    if any(not 0 <= c <= 255 for c in (r, g, b)):
        raise PaletteError(f"Color components must be in 0-255: {value!r}")
    return Color(r, g, b)


def parse_palette(value: str) -> tuple[Color, ...]:
    """Parse a semicolon-separated list of ``r,g,b`` triples.

    Example:
        >>> parse_palette("0,152,121; 255,99,132")
        (Color(r=0, g=152, b=121), Color(r=255, g=99, b=132))
    """
    palette = tuple(parse_color(item) for item in value.split(";") if item.strip())
    if not palette:
        raise PaletteError("Palette must contain at least one color")
    return palette


def pick_color(palette: tuple[Color, ...] | list[Color], index: int) -> Color:
    """Color for the item at ``index``, cycling through the palette."""
    if not palette:
        raise PaletteError("Palette must contain at least one color")
    return palette[index % len(palette)]
