from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from bubblelab.mechanics.model import (
    COLLAPSE_RADIUS,
    FRAME_DT,
    BubblePair,
    FlowDirection,
    FlowStep,
    flow_direction,
    laplace_pressure,
    sphere_volume,
    step,
)

DEFAULT_RADIUS_A = 1.2
DEFAULT_RADIUS_B = 0.8
RADIUS_SLIDER_RANGE = (0.3, 2.0)
RADIUS_SLIDER_STEP = 0.1
DEFAULT_MAX_TICKS = 5000
DISPLAY_MIN_RADIUS = 0.1


def _coerce_float(value: object, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _clamp_slider_radius(value: float) -> float:
    return max(RADIUS_SLIDER_RANGE[0], min(RADIUS_SLIDER_RANGE[1], value))


def _snap_slider_radius(value: float) -> float:
    lower = RADIUS_SLIDER_RANGE[0]
    steps = round((_clamp_slider_radius(value) - lower) / RADIUS_SLIDER_STEP)
    return round(lower + (steps * RADIUS_SLIDER_STEP), 6)


def _row(tick: int, pair: BubblePair, result: FlowStep) -> dict[str, float]:
    volume_a = sphere_volume(result.new_radius_a)
    volume_b = sphere_volume(result.new_radius_b)
    return {
        "tick": float(tick),
        "radius_a_start": pair.radius_a,
        "radius_b_start": pair.radius_b,
        "radius_a": result.new_radius_a,
        "radius_b": result.new_radius_b,
        "pressure_a": result.pressure_a,
        "pressure_b": result.pressure_b,
        "pressure_diff": result.pressure_a - result.pressure_b,
        "volume_a": volume_a,
        "volume_b": volume_b,
        "total_volume": volume_a + volume_b,
        "flow": result.flow,
        "valve_open": float(pair.valve_open),
        "terminated": float(result.terminated),
    }


@dataclass
class MechanicsSession:
    """Mutable UI state for the connected-bubbles experiment."""

    radius_a: float = DEFAULT_RADIUS_A
    radius_b: float = DEFAULT_RADIUS_B
    valve_open: bool = False
    terminated: bool = False
    tick: int = 0
    history: list[dict[str, float]] = field(default_factory=list)

    def pair(self) -> BubblePair:
        return BubblePair(
            radius_a=self.radius_a,
            radius_b=self.radius_b,
            valve_open=self.valve_open,
            terminated=self.terminated,
        )

    @property
    def pressures(self) -> tuple[float, float]:
        return laplace_pressure(self.radius_a), laplace_pressure(self.radius_b)

    @property
    def direction(self) -> FlowDirection:
        return flow_direction(self.pair())

    def slider_values(self) -> tuple[float, float]:
        """Current radii snapped onto the slider grid."""
        return _snap_slider_radius(self.radius_a), _snap_slider_radius(self.radius_b)

    def set_radius(self, which: str, value: float) -> None:
        """Slider edit: shuts the valve and starts a fresh run.

        The other bubble is pulled back into the slider range too, so a bubble
        left at the collapse floor cannot start the next run.
        """
        if which not in {"a", "b"}:
            msg = "which must be 'a' or 'b'"
            raise ValueError(msg)
        radius = _clamp_slider_radius(float(value))
        if which == "a":
            self.radius_a = radius
            self.radius_b = _clamp_slider_radius(self.radius_b)
        else:
            self.radius_b = radius
            self.radius_a = _clamp_slider_radius(self.radius_a)
        self.valve_open = False
        self.terminated = False
        self.tick = 0
        self.history.clear()

    def open_valve(self) -> bool:
        if self.terminated:
            return False
        self.valve_open = True
        return True

    def close_valve(self) -> None:
        self.valve_open = False

    def reset(
        self,
        radius_a: float = DEFAULT_RADIUS_A,
        radius_b: float = DEFAULT_RADIUS_B,
    ) -> None:
        self.radius_a = radius_a
        self.radius_b = radius_b
        self.valve_open = False
        self.terminated = False
        self.tick = 0
        self.history.clear()

    def advance(self, ticks: int = 1, dt: float = FRAME_DT) -> list[FlowStep]:
        """Step while the valve stays open; a collapse shuts it and stops the loop."""
        if ticks <= 0:
            msg = "ticks must be positive"
            raise ValueError(msg)

        steps: list[FlowStep] = []
        for _ in range(ticks):
            if not self.valve_open or self.terminated:
                break
            pair = self.pair()
            result = step(pair, dt=dt)
            self.radius_a = result.new_radius_a
            self.radius_b = result.new_radius_b
            self.terminated = result.terminated
            self.tick += 1
            self.history.append(_row(self.tick, pair, result))
            steps.append(result)
            if result.terminated:
                self.valve_open = False
        return steps

    def history_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.history)


def run_valve_simulation(
    *,
    radius_a: float,
    radius_b: float,
    max_ticks: int = DEFAULT_MAX_TICKS,
    dt: float = FRAME_DT,
) -> pd.DataFrame:
    """Open the valve on a fresh pair and record every tick until collapse."""
    if max_ticks <= 0:
        msg = "max_ticks must be positive"
        raise ValueError(msg)
    if dt <= 0:
        msg = "dt must be positive"
        raise ValueError(msg)

    pair = BubblePair(radius_a=radius_a, radius_b=radius_b, valve_open=True)
    initial_total = pair.total_volume
    rows: list[dict[str, float]] = []
    for tick in range(1, max_ticks + 1):
        result = step(pair, dt=dt)
        rows.append(_row(tick, pair, result))
        if result.terminated:
            break
        pair = result.to_pair()

    df = pd.DataFrame(rows)
    df["volume_drift"] = (df["total_volume"] - initial_total) / initial_total
    return df


def summarize_run(df: pd.DataFrame) -> dict[str, float]:
    if df.empty:
        msg = "Simulation dataframe is empty"
        raise ValueError(msg)

    last = df.iloc[-1]
    collapsed = bool(last["terminated"])
    # The collapsing tick clamps a radius, so it is left out of the drift check.
    conserving = df[df["terminated"] == 0.0]
    drift = 0.0
    if not conserving.empty:
        initial_total = sphere_volume(float(df["radius_a_start"].iloc[0])) + sphere_volume(
            float(df["radius_b_start"].iloc[0])
        )
        drift = float(((conserving["total_volume"] - initial_total).abs() / initial_total).max())

    growth_a = float(last["radius_a"] - df["radius_a_start"].iloc[0])
    growth_b = float(last["radius_b"] - df["radius_b_start"].iloc[0])
    grew = 0.0
    if growth_a > growth_b:
        grew = 1.0
    elif growth_b > growth_a:
        grew = 2.0

    return {
        "ticks": float(len(df)),
        "collapsed": float(collapsed),
        "final_radius_a": float(last["radius_a"]),
        "final_radius_b": float(last["radius_b"]),
        "final_pressure_a": float(last["pressure_a"]),
        "final_pressure_b": float(last["pressure_b"]),
        "grown_bubble": grew,
        "max_volume_drift": drift,
    }


def build_visual_frame(
    row: pd.Series | dict[str, object] | MechanicsSession,
) -> dict[str, float | bool | str]:
    """Map one simulation row (or the live session) into a renderer-ready payload."""
    if isinstance(row, MechanicsSession):
        row = {
            "tick": row.tick,
            "radius_a": row.radius_a,
            "radius_b": row.radius_b,
            "valve_open": row.valve_open,
            "terminated": row.terminated,
        }
    getter = row.get  # type: ignore[union-attr]

    radius_a = max(DISPLAY_MIN_RADIUS, _coerce_float(getter("radius_a", DEFAULT_RADIUS_A)))
    radius_b = max(DISPLAY_MIN_RADIUS, _coerce_float(getter("radius_b", DEFAULT_RADIUS_B)))
    terminated = bool(_coerce_float(getter("terminated", 0.0), 0.0))
    valve_open = bool(_coerce_float(getter("valve_open", 0.0), 0.0)) and not terminated
    pressure_a = laplace_pressure(radius_a)
    pressure_b = laplace_pressure(radius_b)
    direction = flow_direction(BubblePair(radius_a=radius_a, radius_b=radius_b))

    return {
        "tick": _coerce_float(getter("tick", 0.0), 0.0),
        "radius_a": radius_a,
        "radius_b": radius_b,
        "pressure_a": pressure_a,
        "pressure_b": pressure_b,
        "valve_open": valve_open,
        "terminated": terminated,
        "particle_direction": direction.value,
        "show_particles": valve_open and direction is not FlowDirection.NONE,
        "tint_a": radius_a <= COLLAPSE_RADIUS,
        "tint_b": radius_b <= COLLAPSE_RADIUS,
        "collapse_radius": COLLAPSE_RADIUS,
    }


__all__ = [
    "DEFAULT_RADIUS_A",
    "DEFAULT_RADIUS_B",
    "RADIUS_SLIDER_RANGE",
    "RADIUS_SLIDER_STEP",
    "MechanicsSession",
    "run_valve_simulation",
    "summarize_run",
    "build_visual_frame",
]
