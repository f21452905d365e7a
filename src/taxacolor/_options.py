"""
Option and settings dataclasses for color map resolution.

``ColorMapOptions`` records *which* options a caller passed as well as their
values: several rules depend on an option merely being present (e.g.
``colorblind=False`` together with ``colors`` is still rejected).
"""

import numbers
from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Mapping, Optional, Sequence, Union

from pandas.api.types import is_bool

from .color_utils import GREYSCALE_COLOR
from .errors import ConfigurationError
from .palettes import QUALITATIVE


OPTION_NAMES = ("color_scheme", "colors", "greyscale", "colorblind")

ColorSpec = Union[Mapping[str, str], Sequence[str]]


def as_label(value: Any) -> Any:
    """Numbers are used as labels by their string form.

    Whole-number floats drop the decimal part, so ``1`` and ``1.0`` both
    label ``"1"``.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        return value
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return str(int(value))
    return str(value)


def _as_flag(name: str, value: Any) -> bool:
    if not is_bool(value):
        raise ConfigurationError(f"'{name}' must be True or False, got {value!r}")
    return bool(value)


@dataclass(frozen=True)
class ColorMapOptions:
    """Validated options for one color map.

    Build with ``from_kwargs``; the dataclass defaults describe an empty
    bundle, which selects the automatic qualitative palette.
    """
    color_scheme: Optional[str] = None
    colors: Optional[ColorSpec] = None
    greyscale: bool = False
    colorblind: bool = False
    present: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_kwargs(cls, **kwargs) -> "ColorMapOptions":
        unused = [name for name in kwargs if name not in OPTION_NAMES]
        if unused:
            raise ConfigurationError(f"unused parameters: {', '.join(unused)}")

        colors = kwargs.get("colors")
        if "colors" in kwargs:
            colors = _coerce_colors(colors)

        return cls(
            color_scheme=kwargs.get("color_scheme"),
            colors=colors,
            greyscale=_as_flag("greyscale", kwargs.get("greyscale", False)),
            colorblind=_as_flag("colorblind", kwargs.get("colorblind", False)),
            present=frozenset(kwargs),
        )

    def has(self, name: str) -> bool:
        return name in self.present

    @property
    def empty(self) -> bool:
        return not self.present

    @property
    def named_colors(self) -> bool:
        return isinstance(self.colors, Mapping)

    def color_values(self) -> List[Any]:
        if self.colors is None:
            return []
        if isinstance(self.colors, Mapping):
            return list(self.colors.values())
        return list(self.colors)


def _coerce_colors(colors: Any) -> ColorSpec:
    if colors is None:
        return []
    if isinstance(colors, Mapping) or hasattr(colors, "to_dict"):
        items = colors.items()
        return {as_label(name): color for name, color in items}
    if isinstance(colors, str):
        return [colors]
    return list(colors)


@dataclass(frozen=True)
class ResolverSettings:
    """Constants the resolver falls back on.

    Parameters
    ----------
    baseline_color : str
        Color every group starts with, and the greyscale color.
    fallback_scheme : str
        Palette substituted when the requested one has too few colors.
    max_palette_colors : int
        Largest group count any registry palette can color.
    qualitative_category : str
        Category searched when no options are given.
    """
    baseline_color: str = GREYSCALE_COLOR
    fallback_scheme: str = "Set3"
    max_palette_colors: int = 12
    qualitative_category: str = QUALITATIVE


def default_settings() -> ResolverSettings:
    return ResolverSettings()


__all__ = [
    "OPTION_NAMES",
    "ColorMapOptions",
    "ResolverSettings",
    "as_label",
    "default_settings",
]
