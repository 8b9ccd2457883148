from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import acos, degrees, hypot, sqrt

Point = tuple[float, float]
Segment = tuple[Point, Point]


class Mode(str, Enum):
    DIRECT = "direct"
    SOAP_FILM = "soap_film"


class Orientation(str, Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class SteinerLayout:
    mode: Mode
    side: float
    corners: tuple[Point, Point, Point, Point]
    junctions: tuple[Point, Point]
    length_direct: float
    length_soap: float
    segments: tuple[Segment, ...]

    def __post_init__(self) -> None:
        if self.side <= 0:
            msg = "side must be positive"
            raise ValueError(msg)

    @property
    def total_length(self) -> float:
        if self.mode is Mode.DIRECT:
            return self.length_direct
        return self.length_soap


def unit_square_corners(side: float = 1.0) -> tuple[Point, Point, Point, Point]:
    """Corners in reading order: top-left, top-right, bottom-left, bottom-right."""
    return ((0.0, 0.0), (side, 0.0), (0.0, side), (side, side))


def junction_offset(side: float) -> float:
    """Distance from the nearer edge to a junction on the midline.

    Each junction sees its two corners half a side away horizontally; the films
    meet at 120 degrees when they make 60 degrees with the midline, which puts
    the junction (side / 2) / sqrt(3) in from the edge.
    """
    return (side / 2.0) / sqrt(3.0)


def steiner_junctions(
    side: float = 1.0,
    orientation: Orientation = Orientation.VERTICAL,
) -> tuple[Point, Point]:
    offset = junction_offset(side)
    middle = side / 2.0
    if orientation is Orientation.VERTICAL:
        return ((middle, offset), (middle, side - offset))
    return ((offset, middle), (side - offset, middle))


def _segment_length(segment: Segment) -> float:
    (x1, y1), (x2, y2) = segment
    return hypot(x2 - x1, y2 - y1)


def _soap_segments(
    corners: tuple[Point, Point, Point, Point],
    junctions: tuple[Point, Point],
    orientation: Orientation,
) -> tuple[Segment, ...]:
    top_left, top_right, bottom_left, bottom_right = corners
    first, second = junctions
    if orientation is Orientation.VERTICAL:
        near_first = (top_left, top_right)
        near_second = (bottom_left, bottom_right)
    else:
        near_first = (top_left, bottom_left)
        near_second = (top_right, bottom_right)
    return (
        (near_first[0], first),
        (near_first[1], first),
        (first, second),
        (near_second[0], second),
        (near_second[1], second),
    )


def compute_layout(
    mode: Mode = Mode.SOAP_FILM,
    side: float = 1.0,
    orientation: Orientation = Orientation.VERTICAL,
) -> SteinerLayout:
    """Closed-form comparison of the diagonal cross and the soap-film network."""
    if side <= 0:
        msg = "side must be positive"
        raise ValueError(msg)

    corners = unit_square_corners(side)
    junctions = steiner_junctions(side, orientation)
    top_left, top_right, bottom_left, bottom_right = corners

    if mode is Mode.DIRECT:
        segments: tuple[Segment, ...] = ((top_left, bottom_right), (top_right, bottom_left))
    else:
        segments = _soap_segments(corners, junctions, orientation)

    return SteinerLayout(
        mode=mode,
        side=side,
        corners=corners,
        junctions=junctions,
        length_direct=2.0 * sqrt(2.0) * side,
        length_soap=side * (1.0 + sqrt(3.0)),
        segments=segments,
    )


def network_length(layout: SteinerLayout) -> float:
    """Sum of the drawn segment lengths for the layout's mode."""
    return float(sum(_segment_length(segment) for segment in layout.segments))


def _angle_between(origin: Point, a: Point, b: Point) -> float:
    ax, ay = a[0] - origin[0], a[1] - origin[1]
    bx, by = b[0] - origin[0], b[1] - origin[1]
    cosine = ((ax * bx) + (ay * by)) / (hypot(ax, ay) * hypot(bx, by))
    return degrees(acos(max(-1.0, min(1.0, cosine))))


def junction_angles(layout: SteinerLayout) -> list[list[float]]:
    """Angles between the three films meeting at each junction, in degrees."""
    if layout.mode is not Mode.SOAP_FILM:
        return []

    angles: list[list[float]] = []
    for junction in layout.junctions:
        neighbours = [
            start if end == junction else end
            for start, end in layout.segments
            if junction in (start, end)
        ]
        first, second, third = neighbours
        angles.append(
            [
                _angle_between(junction, first, second),
                _angle_between(junction, second, third),
                _angle_between(junction, third, first),
            ]
        )
    return angles


def length_saving(side: float = 1.0) -> float:
    """Fraction of the diagonal length saved by the soap-film network."""
    layout = compute_layout(Mode.SOAP_FILM, side=side)
    return 1.0 - (layout.length_soap / layout.length_direct)


__all__ = [
    "Mode",
    "Orientation",
    "SteinerLayout",
    "unit_square_corners",
    "junction_offset",
    "steiner_junctions",
    "compute_layout",
    "network_length",
    "junction_angles",
    "length_saving",
]
