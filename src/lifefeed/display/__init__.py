"""
Display helpers that turn grid snapshots into coloured frames.
"""

from .palette import (
    ColorTheme,
    FadeRule,
    FadeStage,
    THEMES,
    DEFAULT_THEME,
    DEFAULT_SATURATION,
    get_theme,
    theme_names,
    build_lookup,
    colorize,
    viewport,
    render_frame,
)

__all__ = [
    'ColorTheme',
    'FadeRule',
    'FadeStage',
    'THEMES',
    'DEFAULT_THEME',
    'DEFAULT_SATURATION',
    'get_theme',
    'theme_names',
    'build_lookup',
    'colorize',
    'viewport',
    'render_frame',
]
