"""
Group-based color maps for plotting categorical labels.
"""

from .color_map import ColorMapResolver, create_color_map, unique_groups
from ._options import ColorMapOptions, ResolverSettings, default_settings
from .color_utils import (
    GREYSCALE_COLOR,
    is_hex_color,
    is_known_color_name,
    is_valid_color,
)
from .errors import ColorMapWarning, ConfigurationError
from .palettes import (
    BrewerRegistry,
    PaletteInfo,
    PaletteRegistry,
    TableRegistry,
    find_palette,
)

__version__ = "0.1.0"

__all__ = [
    'ColorMapResolver',
    'create_color_map',
    'unique_groups',
    'ColorMapOptions',
    'ResolverSettings',
    'default_settings',
    'GREYSCALE_COLOR',
    'is_hex_color',
    'is_known_color_name',
    'is_valid_color',
    'ColorMapWarning',
    'ConfigurationError',
    'BrewerRegistry',
    'PaletteInfo',
    'PaletteRegistry',
    'TableRegistry',
    'find_palette',
]
