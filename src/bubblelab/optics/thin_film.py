from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pandas as pd

RGB = tuple[int, int, int]

BLACK_FILM_LIMIT_NM = 30.0
SILVER_GOLD_CAPTION_LIMIT_NM = 150.0
THICKNESS_RANGE_NM = (0.0, 1000.0)


class FilmBand(str, Enum):
    BLACK = "black"
    SILVER_WHITE = "silver_white"
    GOLD = "gold"
    PURPLE = "purple"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED_PINK = "red_pink"
    HIGH_ORDER = "high_order"


# Upper bound (exclusive) of each band in nm, in ascending order.
BAND_TABLE: tuple[tuple[float, FilmBand, RGB], ...] = (
    (30.0, FilmBand.BLACK, (20, 20, 20)),
    (120.0, FilmBand.SILVER_WHITE, (240, 240, 250)),
    (250.0, FilmBand.GOLD, (255, 220, 100)),
    (350.0, FilmBand.PURPLE, (200, 50, 255)),
    (450.0, FilmBand.BLUE, (50, 100, 255)),
    (550.0, FilmBand.GREEN, (50, 255, 150)),
    (650.0, FilmBand.YELLOW, (255, 255, 50)),
    (800.0, FilmBand.RED_PINK, (255, 100, 100)),
    (float("inf"), FilmBand.HIGH_ORDER, (100, 200, 200)),
)

BAND_COLORS: dict[FilmBand, RGB] = {band: rgb for _upper, band, rgb in BAND_TABLE}


@dataclass(frozen=True)
class FilmSample:
    thickness_nm: float
    color_rgb: RGB
    band: FilmBand

    def __post_init__(self) -> None:
        if self.thickness_nm < 0:
            msg = "thickness_nm must be non-negative"
            raise ValueError(msg)

    @property
    def css(self) -> str:
        return css_color(self.color_rgb)


def _clamp_thickness(thickness_nm: float) -> float:
    return max(0.0, float(thickness_nm))


def band_for(thickness_nm: float) -> FilmBand:
    thickness = _clamp_thickness(thickness_nm)
    for upper, band, _rgb in BAND_TABLE:
        if thickness < upper:
            return band
    return FilmBand.HIGH_ORDER


def color_for(thickness_nm: float) -> RGB:
    """Observed colour of a soap film, stepped along Newton's colour series.

    Bands are deliberately not blended; each thickness range shows one colour.
    """
    return BAND_COLORS[band_for(thickness_nm)]


def film_sample(thickness_nm: float) -> FilmSample:
    thickness = _clamp_thickness(thickness_nm)
    band = band_for(thickness)
    return FilmSample(thickness_nm=thickness, color_rgb=BAND_COLORS[band], band=band)


def css_color(rgb: RGB) -> str:
    red, green, blue = rgb
    return f"rgb({red}, {green}, {blue})"


def is_black_film(thickness_nm: float) -> bool:
    return _clamp_thickness(thickness_nm) < BLACK_FILM_LIMIT_NM


def band_table() -> pd.DataFrame:
    rows: list[dict[str, object]] = []
    lower = 0.0
    for upper, band, rgb in BAND_TABLE:
        rows.append(
            {
                "band": band.value,
                "lower_nm": lower,
                "upper_nm": upper,
                "red": rgb[0],
                "green": rgb[1],
                "blue": rgb[2],
                "css": css_color(rgb),
            }
        )
        lower = upper
    return pd.DataFrame(rows)


_CAPTIONS = {
    "zh": (
        "當膜厚極薄 (<30nm) 時，光程差導致破壞性干涉，泡泡呈現黑色（Black Film），即將破裂。",
        "薄膜呈現銀白色或金色。",
        "隨著厚度增加，顏色會依序呈現紫、藍、綠、黃、紅的循環變化。",
    ),
    "en": (
        "Below about 30 nm the path difference gives destructive interference: "
        "the film turns black (a black film) and is about to burst.",
        "The film looks silvery white or gold.",
        "As the film thickens the colour cycles through purple, blue, green, yellow and red.",
    ),
}


def film_caption(thickness_nm: float, language: str = "zh") -> str:
    """Caption explaining what the current thickness looks like."""
    if language not in _CAPTIONS:
        msg = f"Unsupported language: {language}"
        raise ValueError(msg)
    black, thin, cycle = _CAPTIONS[language]
    thickness = _clamp_thickness(thickness_nm)
    if thickness < BLACK_FILM_LIMIT_NM:
        return black
    if thickness < SILVER_GOLD_CAPTION_LIMIT_NM:
        return thin
    return cycle


__all__ = [
    "RGB",
    "FilmBand",
    "FilmSample",
    "BAND_TABLE",
    "BAND_COLORS",
    "THICKNESS_RANGE_NM",
    "band_for",
    "color_for",
    "film_sample",
    "css_color",
    "is_black_film",
    "band_table",
    "film_caption",
]
