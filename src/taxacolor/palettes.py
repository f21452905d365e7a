"""
Palette registries.

A registry answers two questions: which palettes exist (with their maximum
color count, category and colorblind flag), and what the first ``n`` colors
of a palette are. The resolver only talks to the ``PaletteRegistry``
protocol, so callers can swap in their own palette sets.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Union

from palettable import colorbrewer


DIVERGING = "div"
QUALITATIVE = "qual"
SEQUENTIAL = "seq"


@dataclass(frozen=True)
class PaletteInfo:
    """Metadata for one palette.

    Parameters
    ----------
    name : str
        Palette name (e.g. ``"Set3"``).
    max_colors : int
        Largest number of colors the palette provides.
    category : {"div", "qual", "seq"}
        Diverging, qualitative or sequential.
    colorblind : bool
        Whether the palette is distinguishable under common color-vision
        deficiencies.
    """
    name: str
    max_colors: int
    category: str
    colorblind: bool


class PaletteRegistry(Protocol):
    def palettes(self) -> Sequence[PaletteInfo]:
        ...

    def info(self, name: str) -> PaletteInfo:
        ...

    def colors(self, name: str, n: int) -> List[str]:
        ...

    def names(self) -> List[str]:
        ...

    def __contains__(self, name: object) -> bool:
        ...


ColorTable = Union[Sequence[str], Mapping[int, Sequence[str]]]


class _PaletteSet:
    """Palette metadata lookups shared by the concrete registries."""

    def __init__(self, palettes: Sequence[PaletteInfo]):
        self._palettes = tuple(palettes)
        self._by_name: Dict[str, PaletteInfo] = {p.name: p for p in self._palettes}

    def palettes(self) -> Sequence[PaletteInfo]:
        return self._palettes

    def names(self) -> List[str]:
        return [p.name for p in self._palettes]

    def info(self, name: str) -> PaletteInfo:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown palette: {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._by_name

    def colors(self, name: str, n: int) -> List[str]:
        info = self.info(name)
        if n < 1 or n > info.max_colors:
            raise ValueError(
                f"Palette {name!r} provides 1 to {info.max_colors} colors, got n={n}"
            )
        return self._lookup(info, n)

    def _lookup(self, info: PaletteInfo, n: int) -> List[str]:
        raise NotImplementedError


class TableRegistry(_PaletteSet):
    """Registry backed by in-memory color tables.

    Each table is either a flat list of colors (``colors(name, n)`` returns
    its first ``n`` entries) or a mapping from color count to the list for
    that count. Counts below the smallest defined list are served by
    truncating that list.
    """

    def __init__(
        self,
        palettes: Sequence[PaletteInfo],
        tables: Mapping[str, ColorTable],
    ):
        missing = [p.name for p in palettes if p.name not in tables]
        if missing:
            raise ValueError(f"No color table for palettes: {', '.join(missing)}")
        super().__init__(palettes)
        self._tables = dict(tables)

    def _lookup(self, info: PaletteInfo, n: int) -> List[str]:
        table = self._tables[info.name]
        if isinstance(table, Mapping):
            if n in table:
                return list(table[n])
            smallest = min(table)
            if n < smallest:
                return list(table[smallest][:n])
            raise ValueError(f"Palette {info.name!r} has no {n}-color variant")
        return list(table[:n])


# Row order and flags follow RColorBrewer's brewer.pal.info table.
_BREWER_INFO = [
    ("BrBG", DIVERGING, True),
    ("PiYG", DIVERGING, True),
    ("PRGn", DIVERGING, True),
    ("PuOr", DIVERGING, True),
    ("RdBu", DIVERGING, True),
    ("RdGy", DIVERGING, False),
    ("RdYlBu", DIVERGING, True),
    ("RdYlGn", DIVERGING, False),
    ("Spectral", DIVERGING, False),
    ("Accent", QUALITATIVE, False),
    ("Dark2", QUALITATIVE, True),
    ("Paired", QUALITATIVE, True),
    ("Pastel1", QUALITATIVE, False),
    ("Pastel2", QUALITATIVE, False),
    ("Set1", QUALITATIVE, False),
    ("Set2", QUALITATIVE, True),
    ("Set3", QUALITATIVE, False),
    ("Blues", SEQUENTIAL, True),
    ("BuGn", SEQUENTIAL, True),
    ("BuPu", SEQUENTIAL, True),
    ("GnBu", SEQUENTIAL, True),
    ("Greens", SEQUENTIAL, True),
    ("Greys", SEQUENTIAL, True),
    ("Oranges", SEQUENTIAL, True),
    ("OrRd", SEQUENTIAL, True),
    ("PuBu", SEQUENTIAL, True),
    ("PuBuGn", SEQUENTIAL, True),
    ("PuRd", SEQUENTIAL, True),
    ("Purples", SEQUENTIAL, True),
    ("RdPu", SEQUENTIAL, True),
    ("Reds", SEQUENTIAL, True),
    ("YlGn", SEQUENTIAL, True),
    ("YlGnBu", SEQUENTIAL, True),
    ("YlOrBr", SEQUENTIAL, True),
    ("YlOrRd", SEQUENTIAL, True),
]


_PALETTABLE_TYPES = {
    DIVERGING: "diverging",
    QUALITATIVE: "qualitative",
    SEQUENTIAL: "sequential",
}


def _brewer_counts(name: str, category: str) -> List[int]:
    """Color counts palettable defines for a ColorBrewer palette."""
    map_type = _PALETTABLE_TYPES[category].capitalize()
    return sorted(int(k) for k in colorbrewer.COLOR_MAPS[map_type][name])


class BrewerRegistry(_PaletteSet):
    """The ColorBrewer palettes, served by ``palettable.colorbrewer``.

    ColorBrewer defines a separate list per color count (3 up to the
    palette maximum); 1 or 2 colors are taken from the 3-color list.
    """

    def __init__(self):
        palettes = [
            PaletteInfo(
                name=name,
                max_colors=max(_brewer_counts(name, category)),
                category=category,
                colorblind=colorblind,
            )
            for name, category, colorblind in _BREWER_INFO
        ]
        super().__init__(palettes)

    def _lookup(self, info: PaletteInfo, n: int) -> List[str]:
        smallest = min(_brewer_counts(info.name, info.category))
        brewer_map = colorbrewer.get_map(
            info.name, _PALETTABLE_TYPES[info.category], max(n, smallest)
        )
        return list(brewer_map.hex_colors[:n])


def find_palette(
    registry: PaletteRegistry,
    *,
    min_colors: int,
    category: Optional[str] = None,
    colorblind: Optional[bool] = None,
) -> Optional[PaletteInfo]:
    """Return the first palette, in registry order, that meets the constraints.

    ``category`` and ``colorblind`` are ignored when None.
    """
    for info in registry.palettes():
        if info.max_colors < min_colors:
            continue
        if category is not None and info.category != category:
            continue
        if colorblind is not None and info.colorblind != colorblind:
            continue
        return info
    return None


__all__ = [
    "DIVERGING",
    "QUALITATIVE",
    "SEQUENTIAL",
    "PaletteInfo",
    "PaletteRegistry",
    "TableRegistry",
    "BrewerRegistry",
    "find_palette",
]
