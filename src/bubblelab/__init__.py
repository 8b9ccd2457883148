"""Bubble Lab public API: soap-bubble physics models behind the article widgets."""

from bubblelab.content.article import ArticleText, Language, article_text
from bubblelab.geometry.steiner import (
    Mode,
    Orientation,
    SteinerLayout,
    compute_layout,
    junction_angles,
)
from bubblelab.lab.simulator import (
    MechanicsSession,
    build_visual_frame,
    run_valve_simulation,
    summarize_run,
)
from bubblelab.mechanics.model import (
    BubblePair,
    FlowDirection,
    FlowStep,
    laplace_pressure,
    step,
)
from bubblelab.optics.thin_film import FilmBand, FilmSample, color_for, film_sample

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BubblePair",
    "FlowStep",
    "FlowDirection",
    "laplace_pressure",
    "step",
    "Mode",
    "Orientation",
    "SteinerLayout",
    "compute_layout",
    "junction_angles",
    "FilmBand",
    "FilmSample",
    "color_for",
    "film_sample",
    "MechanicsSession",
    "run_valve_simulation",
    "summarize_run",
    "build_visual_frame",
    "Language",
    "ArticleText",
    "article_text",
]
