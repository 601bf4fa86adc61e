"""Colour themes mapping cell ages to RGB for display.

Alive cells are white and long-dead cells black. In between, young dead
cells pass through five fixed control colours and then follow a per-theme
fade. Each fade is declared as a start colour plus ordered stages: a stage
multiplies the colour channels by fixed factors for as long as its
condition holds, then hands over to the next stage. The last stage has no
condition.

Nothing here is imported by the engine; it only consumes snapshots.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Tuple, Union
import logging

import numpy as np

from ..core.cells import as_ages
from ..core.composite_grid import GridSnapshot
from ..core.errors import InvalidArgument

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)

DEFAULT_SATURATION = 5000  # ages at or beyond this render as black
FIRST_FADE_AGE = 8

# Hidden margins of the display window: top rows and side columns are
# simulated but not shown, which hides most edge artefacts.
DEFAULT_MARGIN_TOP = 5
DEFAULT_MARGIN_SIDE = 2

_CHANNELS = {"r": 0, "g": 1, "b": 2}


def _rgb(hex_value: int) -> RGB:
    return ((hex_value >> 16) & 0xFF, (hex_value >> 8) & 0xFF, hex_value & 0xFF)


@dataclass(frozen=True)
class FadeStage:
    """Multiply the colour by `factors` while `channel op threshold` holds."""
    factors: Tuple[float, float, float]
    channel: Optional[str] = None   # 'r', 'g' or 'b'; None means always
    op: str = ">"
    threshold: float = 0.0

    def holds(self, color: np.ndarray) -> bool:
        if self.channel is None:
            return True
        value = color[_CHANNELS[self.channel]]
        return value > self.threshold if self.op == ">" else value < self.threshold


@dataclass(frozen=True)
class FadeRule:
    start: Tuple[float, float, float]
    stages: Tuple[FadeStage, ...]

    def generate(self, length: int) -> np.ndarray:
        """Produce `length` colours, the first being the start colour.

        Returns:
            (length, 3) uint8 array
        """
        if not self.stages or self.stages[-1].channel is not None:
            raise InvalidArgument("Fade rule must end with an unconditional stage")

        color = np.array(self.start, dtype=np.float64)
        colors = np.empty((length, 3), dtype=np.uint8)
        stage = 0

        for i in range(length):
            colors[i] = np.clip(color, 0, 255).astype(np.uint8)
            while not self.stages[stage].holds(color):
                stage += 1
            color = color * self.stages[stage].factors

        return colors


@dataclass(frozen=True)
class ColorTheme:
    """Static colour table for one theme.

    color1 is the main colour of recently dead cells; trans1_* lead from
    white into it and trans2_* lead from it into the fade.
    """
    name: str
    color1: RGB
    trans1_1: RGB
    trans1_2: RGB
    trans2_1: RGB
    trans2_2: RGB
    fade: FadeRule


THEMES: Dict[str, ColorTheme] = {}


def _register(theme: ColorTheme) -> ColorTheme:
    THEMES[theme.name.lower()] = theme
    return theme


LILAC = _register(ColorTheme(
    name="Lilac",
    color1=_rgb(0xff09db), trans1_1=_rgb(0xff80ec), trans1_2=_rgb(0xff54e5),
    trans2_1=_rgb(0xc73fff), trans2_2=_rgb(0x935cff),
    fade=FadeRule(start=(30.0, 240.0, 254.0), stages=(
        FadeStage((0.99, 0.966, 0.99), "b", ">", 150),
        FadeStage((0.998, 0.996, 0.998), "b", ">", 90),
        FadeStage((0.999, 0.999, 0.999)),
    )),
))

SEPTEMBER = _register(ColorTheme(
    name="September",
    color1=_rgb(0x37a13a), trans1_1=_rgb(0x5eab60), trans1_2=_rgb(0x4fab51),
    trans2_1=_rgb(0xacc756), trans2_2=_rgb(0xc7a756),
    fade=FadeRule(start=(219.0, 135.0, 79.0), stages=(
        FadeStage((0.99, 0.966, 0.966), "r", ">", 150),
        FadeStage((0.998, 0.996, 0.996), "r", ">", 90),
        FadeStage((0.999, 0.999, 0.999)),
    )),
))

SUNSET = _register(ColorTheme(
    name="Sunset",
    color1=_rgb(0xec7034), trans1_1=_rgb(0xeda02d), trans1_2=_rgb(0xd48633),
    trans2_1=_rgb(0xb835b4), trans2_2=_rgb(0xb8357d),
    fade=FadeRule(start=(184.0, 53.0, 53.0), stages=(
        FadeStage((0.99, 0.966, 0.99), "r", ">", 150),
        FadeStage((0.99, 0.90, 1.01), "r", ">", 100),
        FadeStage((0.999, 1.0, 0.9995)),
    )),
))

CHERRY_BLOSSOMS = _register(ColorTheme(
    name="Cherry Blossoms",
    color1=_rgb(0xffb7c5), trans1_1=_rgb(0xe8dfe4), trans1_2=_rgb(0xe8d3d1),
    trans2_1=_rgb(0xdfb1b6), trans2_2=_rgb(0xcea19f),
    fade=FadeRule(start=(191.0, 120.0, 133.0), stages=(
        FadeStage((0.99, 0.99, 0.99), "b", ">", 150),
        FadeStage((0.996, 0.996, 0.996), "b", ">", 100),
        FadeStage((0.999, 0.9975, 0.9985)),
    )),
))

BEACH = _register(ColorTheme(
    name="Beach",
    color1=_rgb(0xffaa01), trans1_1=_rgb(0xe1ef7e), trans1_2=_rgb(0xefcdbb),
    trans2_1=_rgb(0xae8f60), trans2_2=_rgb(0x8cae60),
    fade=FadeRule(start=(18.0, 178.0, 151.0), stages=(
        FadeStage((0.99, 0.99, 1.001), "g", ">", 123),
        FadeStage((0.996, 0.996, 0.996), "b", ">", 70),
        FadeStage((0.999, 0.999, 0.999)),
    )),
))

# Neon brightens and shifts hue several times before its final dimming
NEON = _register(ColorTheme(
    name="Neon",
    color1=_rgb(0x011ffd), trans1_1=_rgb(0x75d5fd), trans1_2=_rgb(0x5b79f5),
    trans2_1=_rgb(0x9f6cfd), trans2_2=_rgb(0xb76cfd),
    fade=FadeRule(start=(160.59, 108.0, 253.0), stages=(
        FadeStage((1.01, 1.0, 1.0), "r", "<", 241),
        FadeStage((0.992, 0.95, 0.95), "g", ">", 39),
        FadeStage((1.0, 1.01, 0.98), "g", "<", 104),
        FadeStage((1.001, 1.02, 1.0), "g", "<", 224),
        FadeStage((0.97, 1.0, 1.015), "b", "<", 224),
        FadeStage((0.985, 0.985, 0.985)),
    )),
))

DEFAULT_THEME = LILAC


def get_theme(name: str) -> ColorTheme:
    """Look up a theme by name, ignoring case and a trailing '(Default)'.

    Raises:
        InvalidArgument: If no theme has that name
    """
    key = name.replace("(Default)", "").strip().lower()
    try:
        return THEMES[key]
    except KeyError:
        raise InvalidArgument(f"Unknown colour theme {name!r}; choose from {theme_names()}") from None


def theme_names() -> list[str]:
    return [theme.name for theme in THEMES.values()]


@lru_cache(maxsize=32)
def build_lookup(theme: ColorTheme, saturation: int = DEFAULT_SATURATION) -> np.ndarray:
    """Colour for every age from 0 up to the saturation age.

    Args:
        theme: Colour theme
        saturation: First age rendered black (> 8)

    Returns:
        Read-only (saturation + 1, 3) uint8 array
    """
    if saturation <= FIRST_FADE_AGE:
        raise InvalidArgument(f"Saturation age must exceed {FIRST_FADE_AGE}, got {saturation}")

    lookup = np.empty((saturation + 1, 3), dtype=np.uint8)
    lookup[0] = WHITE
    lookup[1] = theme.trans1_1
    lookup[2] = theme.trans1_2
    lookup[3:6] = theme.color1
    lookup[6] = theme.trans2_1
    lookup[7] = theme.trans2_2
    lookup[FIRST_FADE_AGE:saturation] = theme.fade.generate(saturation - FIRST_FADE_AGE)
    lookup[saturation] = BLACK

    lookup.flags.writeable = False
    logger.debug(f"Built {theme.name} colour lookup up to age {saturation}")
    return lookup


def colorize(ages: np.ndarray, theme: Union[ColorTheme, str] = DEFAULT_THEME,
             saturation: int = DEFAULT_SATURATION) -> np.ndarray:
    """Map an array of ages to RGB colours.

    Args:
        ages: Array of non-negative ages, any shape
        theme: Theme or theme name
        saturation: Ages at or above this are black

    Returns:
        uint8 array with a trailing axis of length 3
    """
    if isinstance(theme, str):
        theme = get_theme(theme)
    values = np.asarray(ages)
    values = as_ages(values, ndim=values.ndim, name="ages")
    lookup = build_lookup(theme, saturation)
    return lookup[np.minimum(values, saturation)]


def viewport(snapshot: GridSnapshot, margin_top: int = DEFAULT_MARGIN_TOP,
             margin_side: int = DEFAULT_MARGIN_SIDE) -> np.ndarray:
    """Visible ages: board without its hidden margins stacked over the window.

    Returns:
        (rows - margin_top + window_depth, columns - 2 * margin_side) int64 array
    """
    if margin_top < 0 or margin_side < 0:
        raise InvalidArgument("Margins must be non-negative")
    if margin_top >= snapshot.rows or 2 * margin_side >= snapshot.columns:
        raise InvalidArgument(
            f"Margins ({margin_top}, {margin_side}) leave nothing visible on a "
            f"{snapshot.rows}x{snapshot.columns} board")

    right = snapshot.columns - margin_side
    return np.vstack([snapshot.board[margin_top:, margin_side:right],
                      snapshot.window[:, margin_side:right]])


def render_frame(snapshot: GridSnapshot, theme: Union[ColorTheme, str] = DEFAULT_THEME,
                 saturation: int = DEFAULT_SATURATION,
                 margin_top: int = DEFAULT_MARGIN_TOP,
                 margin_side: int = DEFAULT_MARGIN_SIDE) -> np.ndarray:
    """RGB image of the visible part of a snapshot, one pixel per cell."""
    return colorize(viewport(snapshot, margin_top, margin_side), theme, saturation)
