"""
Color string checks shared by the resolver and the CLI.

Colors are kept as plain strings throughout: either hex (``#RRGGBB`` or
``#RGB``) or a color name known to matplotlib. Nothing here normalizes or
converts a color.
"""

import string
from typing import Any

import matplotlib.colors as mcolors


GREYSCALE_COLOR = "#0d0d0d"

_HEX_DIGITS = frozenset(string.hexdigits)


def is_hex_color(value: Any) -> bool:
    """Return True if ``value`` is a ``#RGB`` or ``#RRGGBB`` string."""
    if not isinstance(value, str):
        return False
    if len(value) not in (4, 7):
        return False
    if not value.startswith("#"):
        return False
    return all(ch in _HEX_DIGITS for ch in value[1:])


def is_known_color_name(value: Any) -> bool:
    """Return True if ``value`` names a color matplotlib knows.

    Covers the CSS4 names (``"green"``, ``"darkolivegreen"``), the single
    letter base colors and the ``tab:``/``xkcd:`` prefixed names. Matching is
    case-insensitive, as in ``matplotlib.colors.to_rgba``.
    """
    if not isinstance(value, str) or not value:
        return False
    return value.lower() in mcolors.get_named_colors_mapping()


def is_valid_color(value: Any) -> bool:
    """A color is valid if it is a known name or hex syntax."""
    return is_known_color_name(value) or is_hex_color(value)


__all__ = [
    "GREYSCALE_COLOR",
    "is_hex_color",
    "is_known_color_name",
    "is_valid_color",
]
