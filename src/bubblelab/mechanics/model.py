from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import pi

SURFACE_TENSION = 50.0
FLOW_RATE_CONSTANT = 0.0005
COLLAPSE_RADIUS = 0.2
MIN_PRESSURE_RADIUS = 0.1
MIN_VOLUME = 1e-4
FRAME_DT = 1.0
EQUILIBRIUM_TOLERANCE = 0.01


class FlowDirection(str, Enum):
    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"
    NONE = "none"


@dataclass(frozen=True)
class BubblePair:
    radius_a: float
    radius_b: float
    valve_open: bool = False
    terminated: bool = False

    def __post_init__(self) -> None:
        if self.radius_a <= 0:
            msg = "radius_a must be positive"
            raise ValueError(msg)
        if self.radius_b <= 0:
            msg = "radius_b must be positive"
            raise ValueError(msg)

    @property
    def total_volume(self) -> float:
        return sphere_volume(self.radius_a) + sphere_volume(self.radius_b)


@dataclass(frozen=True)
class FlowStep:
    pressure_a: float
    pressure_b: float
    volume_delta_a: float
    volume_delta_b: float
    new_radius_a: float
    new_radius_b: float
    terminated: bool

    def __post_init__(self) -> None:
        if self.new_radius_a <= 0:
            msg = "new_radius_a must be positive"
            raise ValueError(msg)
        if self.new_radius_b <= 0:
            msg = "new_radius_b must be positive"
            raise ValueError(msg)

    @property
    def flow(self) -> float:
        """Signed volume moved from A to B during the tick."""
        return self.volume_delta_b

    def to_pair(self, *, valve_open: bool = True) -> BubblePair:
        """Feed the step back in as the next tick's input."""
        return BubblePair(
            radius_a=self.new_radius_a,
            radius_b=self.new_radius_b,
            valve_open=valve_open and not self.terminated,
            terminated=self.terminated,
        )


def laplace_pressure(radius: float) -> float:
    """Young-Laplace excess pressure of a two-surfaced soap bubble."""
    return (2.0 * SURFACE_TENSION) / max(radius, MIN_PRESSURE_RADIUS)


def sphere_volume(radius: float) -> float:
    return (4.0 / 3.0) * pi * (radius**3)


def radius_from_volume(volume: float) -> float:
    safe_volume = max(MIN_VOLUME, volume)
    return ((3.0 * safe_volume) / (4.0 * pi)) ** (1.0 / 3.0)


def flow_direction(pair: BubblePair) -> FlowDirection:
    if abs(pair.radius_a - pair.radius_b) < EQUILIBRIUM_TOLERANCE:
        return FlowDirection.NONE
    # Air leaves the smaller, higher-pressure bubble.
    if pair.radius_a < pair.radius_b:
        return FlowDirection.A_TO_B
    return FlowDirection.B_TO_A


def step(pair: BubblePair, dt: float = FRAME_DT) -> FlowStep:
    """Advance the connected-bubble system by one tick.

    Pressures are reported even when the valve is shut so the differential is
    visible before the valve opens. A terminated pair behaves as if the valve
    were shut until the caller resets it.
    """
    if dt <= 0:
        msg = "dt must be positive"
        raise ValueError(msg)

    pressure_a = laplace_pressure(pair.radius_a)
    pressure_b = laplace_pressure(pair.radius_b)

    if pair.terminated or not pair.valve_open:
        return FlowStep(
            pressure_a=pressure_a,
            pressure_b=pressure_b,
            volume_delta_a=0.0,
            volume_delta_b=0.0,
            new_radius_a=pair.radius_a,
            new_radius_b=pair.radius_b,
            terminated=pair.terminated,
        )

    flow = (pressure_a - pressure_b) * FLOW_RATE_CONSTANT * dt
    volume_a = sphere_volume(pair.radius_a) - flow
    volume_b = sphere_volume(pair.radius_b) + flow

    new_radius_a = radius_from_volume(volume_a)
    new_radius_b = radius_from_volume(volume_b)
    terminated = new_radius_a < COLLAPSE_RADIUS or new_radius_b < COLLAPSE_RADIUS

    return FlowStep(
        pressure_a=pressure_a,
        pressure_b=pressure_b,
        volume_delta_a=-flow,
        volume_delta_b=flow,
        new_radius_a=max(COLLAPSE_RADIUS, new_radius_a),
        new_radius_b=max(COLLAPSE_RADIUS, new_radius_b),
        terminated=terminated,
    )


def reset_pair(radius_a: float, radius_b: float) -> BubblePair:
    """Return a fresh, unlocked pair with the valve shut."""
    return BubblePair(radius_a=radius_a, radius_b=radius_b, valve_open=False, terminated=False)


__all__ = [
    "SURFACE_TENSION",
    "FLOW_RATE_CONSTANT",
    "COLLAPSE_RADIUS",
    "FRAME_DT",
    "FlowDirection",
    "BubblePair",
    "FlowStep",
    "laplace_pressure",
    "sphere_volume",
    "radius_from_volume",
    "flow_direction",
    "step",
    "reset_pair",
]
