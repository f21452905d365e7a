"""
Color assignment for grouped items.

Given items labelled with a group (e.g. taxa labelled "Trees", "Shrubs",
"Grasses"), assign every item the color of its group. How group colors are
chosen depends on the options:

- no options: the first qualitative palette with enough colors
- ``color_scheme``: a named palette
- ``colors``: explicit colors, by group name or in group order
- ``greyscale``: every group ``#0d0d0d``
- ``colorblind``: the first colorblind-safe palette with enough colors

Usage::

    from taxacolor import create_color_map

    taxa = {"Pinus": "Trees", "Betula": "Shrubs", "Poaceae": "Grasses", "Picea": "Trees"}
    create_color_map(taxa)
    # {'Pinus': '#7FC97F', 'Betula': '#BEAED4', 'Poaceae': '#FDC086', 'Picea': '#7FC97F'}

    create_color_map(taxa, colors={"Trees": "green", "Shrubs": "#000000", "Grasses": "#000"})
    create_color_map(taxa, greyscale=True)
    create_color_map(taxa, colorblind=True)

Options are not mutually exclusive. They are applied by an ordered chain of
policy steps (color_scheme, colors, greyscale, colorblind, default) and a
later step may overwrite the colors an earlier step chose; e.g.
``greyscale=True`` wins over ``color_scheme``.
"""

import logging
import sys
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Tuple

import pandas as pd

from ._options import ColorMapOptions, ResolverSettings, as_label, default_settings
from .color_utils import is_hex_color, is_known_color_name
from .errors import ColorMapWarning, ConfigurationError
from .palettes import BrewerRegistry, PaletteRegistry, find_palette

logger = logging.getLogger(__name__)

_PACKAGE = __name__.rpartition(".")[0] + "."


@dataclass
class _Resolution:
    """Working state threaded through the policy chain."""
    groups: List[Any]
    n_items: int
    options: ColorMapOptions
    key: Dict[Any, str]

    @property
    def n_groups(self) -> int:
        return len(self.groups)

    def assign(self, colors: List[str]) -> None:
        self.key = dict(zip(self.groups, colors))


PolicyStep = Callable[[_Resolution], None]


def _warn(message: str) -> None:
    """Warn, attributing the warning to the first frame outside this package."""
    frame = sys._getframe(1)
    stacklevel = 2
    while frame is not None and frame.f_globals.get("__name__", "").startswith(_PACKAGE):
        frame = frame.f_back
        stacklevel += 1
    warnings.warn(message, ColorMapWarning, stacklevel=stacklevel)


def unique_groups(values) -> List[Any]:
    """Distinct values in order of first appearance."""
    return list(dict.fromkeys(values))


def _split_named_list(named_list) -> Tuple[List[Hashable], List[Any]]:
    """Return (item identifiers, group per item)."""
    if isinstance(named_list, pd.Series):
        return list(named_list.index), [as_label(v) for v in named_list.tolist()]
    if isinstance(named_list, Mapping):
        return list(named_list.keys()), [as_label(v) for v in named_list.values()]
    if isinstance(named_list, str):
        named_list = [named_list]
    values = [as_label(v) for v in named_list]
    return list(values), values


class ColorMapResolver:
    """Resolve color options into an item -> color map.

    Parameters
    ----------
    registry : PaletteRegistry, optional
        Palette source. Defaults to the ColorBrewer palettes.
    is_known_color : callable, optional
        Predicate for color names accepted in ``colors``. Defaults to the
        names matplotlib knows.
    settings : ResolverSettings, optional
        Baseline color, fallback palette and palette size ceiling.
    """

    def __init__(
        self,
        registry: Optional[PaletteRegistry] = None,
        is_known_color: Optional[Callable[[Any], bool]] = None,
        settings: Optional[ResolverSettings] = None,
    ):
        self.registry = registry if registry is not None else BrewerRegistry()
        self.is_known_color = is_known_color or is_known_color_name
        self.settings = settings or default_settings()

    @property
    def policy_chain(self) -> List[Tuple[str, PolicyStep]]:
        return [
            ("color_scheme", self._apply_color_scheme),
            ("colors", self._apply_colors),
            ("greyscale", self._apply_greyscale),
            ("colorblind", self._apply_colorblind),
            ("default", self._apply_default),
        ]

    def resolve(self, named_list, options=None):
        """Map every item of ``named_list`` to the color of its group.

        Parameters
        ----------
        named_list : mapping, pandas.Series or sequence
            Item -> group. A bare sequence is treated as items that are their
            own group.
        options : ColorMapOptions or mapping, optional
            Option bundle; a plain mapping is validated with
            ``ColorMapOptions.from_kwargs``.

        Returns
        -------
        dict or pandas.Series
            A dict for mapping input; a Series indexed by item for Series and
            sequence input (sequences may repeat items).
        """
        if options is None:
            options = ColorMapOptions()
        elif not isinstance(options, ColorMapOptions):
            options = ColorMapOptions.from_kwargs(**options)

        items, values = _split_named_list(named_list)
        groups = unique_groups(values)
        state = _Resolution(
            groups=groups,
            n_items=len(items),
            options=options,
            key=self._baseline(groups),
        )

        for name, step in self.policy_chain:
            step(state)
            logger.debug("After %s step: %s", name, state.key)

        colors = [state.key[g] for g in values]

        if isinstance(named_list, Mapping):
            return dict(zip(items, colors))
        name = named_list.name if isinstance(named_list, pd.Series) else None
        return pd.Series(colors, index=pd.Index(items), name=name, dtype=object)

    # ── helpers ──────────────────────────────────────────────────────

    def _baseline(self, groups) -> Dict[Any, str]:
        return {g: self.settings.baseline_color for g in groups}

    def _to_greyscale(self, state: _Resolution) -> None:
        state.key = self._baseline(state.groups)

    def _fits(self, scheme: str, n: int) -> bool:
        return scheme in self.registry and n <= self.registry.info(scheme).max_colors

    def _assign_palette(self, state: _Resolution, scheme: str) -> None:
        if not state.groups:
            return
        logger.debug("Using color scheme %s for %d groups", scheme, state.n_groups)
        state.assign(self.registry.colors(scheme, state.n_groups))

    def _is_valid_color(self, color: Any) -> bool:
        return isinstance(color, str) and (self.is_known_color(color) or is_hex_color(color))

    # ── policy steps ─────────────────────────────────────────────────

    def _apply_color_scheme(self, state: _Resolution) -> None:
        opts = state.options
        if not opts.has("color_scheme"):
            return

        scheme = opts.color_scheme
        known = isinstance(scheme, str) and scheme in self.registry
        if opts.has("colorblind") and known:
            scheme = self._colorblind_substitute(scheme, opts.colorblind)

        n = state.n_groups
        ceiling = self.settings.max_palette_colors
        fallback = self.settings.fallback_scheme

        if opts.has("colors"):
            _warn(
                "'color_scheme' and 'colors' should not be used together; "
                "ignoring the 'color_scheme' argument."
            )
        elif not known:
            raise ConfigurationError(
                f"unknown color scheme: {scheme}. "
                f"Use any of these instead: {', '.join(self.registry.names())}, "
                "or supply your own colors with the 'colors' argument."
            )
        elif n > self.registry.info(scheme).max_colors and n <= ceiling and self._fits(fallback, n):
            _warn(
                f"color scheme {scheme} has only {self.registry.info(scheme).max_colors} "
                f"colors, but there are {n} groups. Changing to {fallback}."
            )
            self._assign_palette(state, fallback)
        elif n > self.registry.info(scheme).max_colors or n > ceiling:
            _warn(
                f"too many groups ({n}) for any color scheme, changing to greyscale. "
                "Provide your own set of colors via 'colors'."
            )
            self._to_greyscale(state)
        else:
            self._assign_palette(state, scheme)

    def _colorblind_substitute(self, scheme: str, colorblind: bool) -> str:
        info = self.registry.info(scheme)
        if info.colorblind == colorblind:
            return scheme

        _warn(
            f"'colorblind' is set to {colorblind}, but color scheme {scheme} is"
            f"{'' if info.colorblind else ' not'} colorblind friendly; "
            "selecting another color scheme that fulfills 'colorblind'."
        )
        replacement = find_palette(
            self.registry,
            min_colors=info.max_colors,
            category=info.category,
            colorblind=colorblind,
        )
        if replacement is None:
            logger.info("No %s color scheme matches colorblind=%s; keeping %s",
                        info.category, colorblind, scheme)
            return scheme
        logger.info("Selected %s instead of %s", replacement.name, scheme)
        return replacement.name

    def _apply_colors(self, state: _Resolution) -> None:
        opts = state.options
        if not opts.has("colors"):
            return

        values = opts.color_values()
        invalid = [c for c in values if not self._is_valid_color(c)]
        if invalid:
            raise ConfigurationError(f"unknown color: {', '.join(map(str, invalid))}")

        if len(values) != state.n_groups:
            raise ConfigurationError(
                f"length of color values ({len(values)}) is not the same as the "
                f"number of groups ({state.n_groups}) or items ({state.n_items})"
            )

        if not opts.named_colors:
            _warn("color values are not named; colors will be assigned in order")
            state.assign(values)
            return

        unknown = [name for name in opts.colors if name not in state.key]
        if unknown:
            raise ConfigurationError(
                f"{', '.join(map(str, unknown))} are not in any assigned group "
                f"({', '.join(map(str, state.groups))})"
            )
        for name, color in opts.colors.items():
            state.key[name] = color

    def _apply_greyscale(self, state: _Resolution) -> None:
        opts = state.options
        if not (opts.has("greyscale") and opts.greyscale):
            return

        ignored = [name for name in ("colors", "color_scheme", "colorblind") if opts.has(name)]
        if ignored:
            _warn(
                "greyscale is set to True, all other optional arguments are "
                f"ignored: {', '.join(ignored)}"
            )
        self._to_greyscale(state)

    def _apply_colorblind(self, state: _Resolution) -> None:
        opts = state.options
        if not opts.has("colorblind") or opts.has("color_scheme"):
            return
        if opts.has("colors"):
            raise ConfigurationError(
                "cannot check whether manually supplied colors are colorblind friendly; "
                "drop either 'colors' or 'colorblind'."
            )
        if opts.has("greyscale"):
            raise ConfigurationError(
                "cannot create a colorblind friendly palette based on greyscale."
            )
        if not opts.colorblind:
            return

        palette = find_palette(self.registry, min_colors=state.n_groups, colorblind=True)
        if palette is None:
            _warn(
                f"too many groups ({state.n_groups}) for any colorblind friendly "
                "color scheme; changing to greyscale instead."
            )
            self._to_greyscale(state)
        else:
            self._assign_palette(state, palette.name)

    def _apply_default(self, state: _Resolution) -> None:
        if not state.options.empty:
            return

        palette = find_palette(
            self.registry,
            min_colors=state.n_groups,
            category=self.settings.qualitative_category,
        )
        if palette is None:
            _warn(
                f"too many groups ({state.n_groups}) for any qualitative color "
                "scheme; changing to greyscale instead."
            )
            self._to_greyscale(state)
        else:
            self._assign_palette(state, palette.name)


def create_color_map(
    named_list,
    *,
    registry: Optional[PaletteRegistry] = None,
    settings: Optional[ResolverSettings] = None,
    **options,
):
    """Assign each item the color of its group.

    Parameters
    ----------
    named_list : mapping, pandas.Series or sequence
        Item -> group, e.g. ``{"Pinus": "Trees", "Betula": "Shrubs"}``.
    registry : PaletteRegistry, optional
        Palette source; ColorBrewer by default.
    settings : ResolverSettings, optional
        Resolver constants.
    **options
        Any of ``color_scheme``, ``colors``, ``greyscale``, ``colorblind``.

    Raises
    ------
    ConfigurationError
        Unsupported option, unknown palette, invalid or miscounted colors,
        or a colorblind check that cannot be honored.
    """
    resolver = ColorMapResolver(registry=registry, settings=settings)
    return resolver.resolve(named_list, ColorMapOptions.from_kwargs(**options))


__all__ = [
    "ColorMapResolver",
    "create_color_map",
    "unique_groups",
]
