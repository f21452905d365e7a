"""
Error and warning types raised while building a color map.
"""


class ConfigurationError(ValueError):
    """Raised when color map options cannot be satisfied.

    Covers unsupported option names, unknown palette names, invalid explicit
    colors, explicit color counts that do not match the number of groups,
    and colorblind checks requested against user colors or greyscale.
    """


class ColorMapWarning(UserWarning):
    """Emitted when options conflict and a substitute coloring is used."""


__all__ = [
    "ConfigurationError",
    "ColorMapWarning",
]
