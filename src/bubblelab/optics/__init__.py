from bubblelab.optics.thin_film import (
    FilmBand,
    FilmSample,
    band_for,
    band_table,
    color_for,
    css_color,
    film_caption,
    film_sample,
    is_black_film,
)

__all__ = [
    "FilmBand",
    "FilmSample",
    "band_for",
    "band_table",
    "color_for",
    "css_color",
    "film_caption",
    "film_sample",
    "is_black_film",
]
