#!/usr/bin/env python3
"""
taxacolor CLI: assign plot colors to grouped items from a CSV table.

Commands:
    map         item,group CSV -> item,color CSV
    palettes    List the available palettes

Examples:
========
# Automatic qualitative palette
python -m taxacolor.cli map taxa.csv

# Named palette, written to a file
python -m taxacolor.cli map taxa.csv --color-scheme Dark2 --out colors.csv

# Explicit colors per group
python -m taxacolor.cli map taxa.csv --colors Trees=green Shrubs=#000000 Grasses=#000
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Dict, List, Optional, Union

import pandas as pd

from .color_map import create_color_map
from .errors import ConfigurationError
from .palettes import BrewerRegistry


def _parse_colors(values: List[str]) -> Union[Dict[str, str], List[str]]:
    """``GROUP=COLOR`` pairs become a mapping; bare colors stay positional."""
    named = [v for v in values if "=" in v]
    if not named:
        return list(values)
    if len(named) != len(values):
        raise ConfigurationError("--colors must be all GROUP=COLOR pairs or all bare colors")
    pairs = [v.split("=", 1) for v in values]
    return {group: color for group, color in pairs}


def _read_named_list(path: str, item_col: str, group_col: str) -> pd.Series:
    source = sys.stdin if path == "-" else path
    df = pd.read_csv(source, dtype=str, keep_default_na=False)
    missing = [c for c in (item_col, group_col) if c not in df.columns]
    if missing:
        raise ConfigurationError(
            f"missing column(s) {', '.join(missing)} in {path} "
            f"(found: {', '.join(df.columns)})"
        )
    return pd.Series(df[group_col].tolist(), index=df[item_col].tolist(), name="group")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="taxacolor", description="Assign plot colors to grouped items")
    p.add_argument("-v", "--verbose", action="store_true", help="Log palette selection details")
    sub = p.add_subparsers(dest="cmd", required=True)

    pm = sub.add_parser("map", help="Map item,group CSV rows to colors")
    pm.add_argument("mapping", help="CSV with item and group columns ('-' for stdin)")
    pm.add_argument("--item-col", default="item")
    pm.add_argument("--group-col", default="group")
    pm.add_argument("--out", help="Output CSV (default: stdout)")
    pm.add_argument("--color-scheme", help="Palette name (see `taxacolor palettes`)")
    pm.add_argument("--colors", nargs="+", metavar="COLOR", help="GROUP=COLOR pairs, or colors in group order")
    pm.add_argument("--greyscale", action="store_true", help="Color every group #0d0d0d")
    pm.add_argument("--colorblind", action="store_true", help="Use a colorblind friendly palette")

    sub.add_parser("palettes", help="List available palettes")
    return p


def _options_from_args(args) -> dict:
    options = {}
    if args.color_scheme is not None:
        options["color_scheme"] = args.color_scheme
    if args.colors:
        options["colors"] = _parse_colors(args.colors)
    if args.greyscale:
        options["greyscale"] = True
    if args.colorblind:
        options["colorblind"] = True
    return options


def _list_palettes(out) -> None:
    rows = [
        {
            "name": info.name,
            "max_colors": info.max_colors,
            "category": info.category,
            "colorblind": info.colorblind,
        }
        for info in BrewerRegistry().palettes()
    ]
    pd.DataFrame(rows).to_csv(out, index=False)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.captureWarnings(True)

    if args.cmd == "palettes":
        _list_palettes(sys.stdout)
        return 0

    try:
        named_list = _read_named_list(args.mapping, args.item_col, args.group_col)
        colors = create_color_map(named_list, **_options_from_args(args))
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    result = pd.DataFrame({args.item_col: list(colors.index), "color": list(colors)})
    result.to_csv(args.out or sys.stdout, index=False)
    if args.out:
        logging.getLogger(__name__).info("Wrote %d colors to %s", len(result), args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
