"""Utility modules for Contribution Charts."""

from contribution_charts.utils.colors import (
    DEFAULT_PALETTE,
    parse_color,
    parse_palette,
    pick_color,
)

__all__ = [
    "DEFAULT_PALETTE",
    "parse_color",
    "parse_palette",
    "pick_color",
]
