import pytest

from bubblelab.lab.simulator import (
    DEFAULT_RADIUS_A,
    DEFAULT_RADIUS_B,
    RADIUS_SLIDER_RANGE,
    MechanicsSession,
    build_visual_frame,
    run_valve_simulation,
    summarize_run,
)
from bubblelab.mechanics.model import COLLAPSE_RADIUS


def _collapse(session: MechanicsSession) -> None:
    for _ in range(100):
        session.advance(100)
        if session.terminated:
            return
    pytest.fail("session never collapsed")


def test_run_valve_simulation_returns_expected_columns() -> None:
    df = run_valve_simulation(radius_a=1.2, radius_b=0.8)

    expected_columns = {
        "tick",
        "radius_a_start",
        "radius_b_start",
        "radius_a",
        "radius_b",
        "pressure_a",
        "pressure_b",
        "pressure_diff",
        "volume_a",
        "volume_b",
        "total_volume",
        "flow",
        "valve_open",
        "terminated",
        "volume_drift",
    }

    assert expected_columns.issubset(set(df.columns))
    assert 0 < len(df) <= 5000
    assert df["terminated"].iloc[-1] == 1.0
    assert (df["terminated"].iloc[:-1] == 0.0).all()
    assert df["radius_a"].is_monotonic_increasing
    assert df["radius_b"].is_monotonic_decreasing
    assert (df["volume_drift"].iloc[:-1].abs() < 1e-9).all()


def test_run_valve_simulation_respects_max_ticks() -> None:
    df = run_valve_simulation(radius_a=1.2, radius_b=0.8, max_ticks=10)

    assert len(df) == 10
    assert df["terminated"].sum() == 0.0


def test_equal_bubbles_never_collapse() -> None:
    df = run_valve_simulation(radius_a=1.0, radius_b=1.0, max_ticks=25)

    assert len(df) == 25
    assert (df["flow"] == 0.0).all()
    assert df["radius_a"].iloc[-1] == pytest.approx(1.0)


def test_run_valve_simulation_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        run_valve_simulation(radius_a=1.0, radius_b=0.5, max_ticks=0)
    with pytest.raises(ValueError):
        run_valve_simulation(radius_a=1.0, radius_b=0.5, dt=-1.0)


def test_summarize_run_reports_growth_and_collapse() -> None:
    df = run_valve_simulation(radius_a=1.2, radius_b=0.8)

    summary = summarize_run(df)

    assert summary["ticks"] == float(len(df))
    assert summary["collapsed"] == 1.0
    assert summary["grown_bubble"] == 1.0
    assert summary["final_radius_b"] == pytest.approx(COLLAPSE_RADIUS)
    assert summary["final_pressure_b"] > summary["final_pressure_a"]
    assert summary["max_volume_drift"] < 1e-9


def test_summarize_run_rejects_empty_frame() -> None:
    df = run_valve_simulation(radius_a=1.2, radius_b=0.8, max_ticks=3).iloc[0:0]

    with pytest.raises(ValueError):
        summarize_run(df)


def test_session_only_flows_while_valve_open() -> None:
    session = MechanicsSession()

    assert session.advance(5) == []
    assert session.tick == 0

    assert session.open_valve()
    steps = session.advance(5)

    assert len(steps) == 5
    assert session.tick == 5
    assert len(session.history_frame()) == 5
    assert session.radius_a > DEFAULT_RADIUS_A
    assert session.radius_b < DEFAULT_RADIUS_B
    assert session.pressures[1] > session.pressures[0]


def test_session_locks_after_collapse_until_reset() -> None:
    session = MechanicsSession()
    session.open_valve()

    _collapse(session)

    assert session.terminated
    assert not session.valve_open
    assert not session.open_valve()
    assert session.advance(3) == []

    session.reset()

    assert not session.terminated
    assert session.tick == 0
    assert session.history == []
    assert session.radius_a == DEFAULT_RADIUS_A
    assert session.radius_b == DEFAULT_RADIUS_B
    assert session.open_valve()


def test_set_radius_clamps_and_restarts() -> None:
    session = MechanicsSession()
    session.open_valve()
    session.advance(3)

    session.set_radius("a", 5.0)

    assert session.radius_a == RADIUS_SLIDER_RANGE[1]
    assert not session.valve_open
    assert session.tick == 0
    assert session.history == []

    session.set_radius("b", 0.0)
    assert session.radius_b == RADIUS_SLIDER_RANGE[0]

    with pytest.raises(ValueError):
        session.set_radius("c", 1.0)
    with pytest.raises(ValueError):
        session.advance(0)


def test_build_visual_frame_maps_required_keys() -> None:
    session = MechanicsSession()
    frame = build_visual_frame(session)

    required = {
        "tick",
        "radius_a",
        "radius_b",
        "pressure_a",
        "pressure_b",
        "valve_open",
        "terminated",
        "particle_direction",
        "show_particles",
        "tint_a",
        "tint_b",
        "collapse_radius",
    }
    assert required.issubset(set(frame.keys()))
    assert frame["particle_direction"] == "b_to_a"
    assert not frame["show_particles"]

    session.open_valve()
    assert build_visual_frame(session)["show_particles"]


def test_build_visual_frame_from_collapsed_row() -> None:
    df = run_valve_simulation(radius_a=1.2, radius_b=0.8)
    frame = build_visual_frame(df.iloc[-1])

    assert frame["terminated"]
    assert not frame["valve_open"]
    assert not frame["show_particles"]
    assert frame["tint_b"]
    assert not frame["tint_a"]
    assert frame["radius_b"] >= 0.1


def test_slider_edit_after_collapse_restores_both_radii() -> None:
    session = MechanicsSession()
    session.open_valve()
    _collapse(session)
    assert session.radius_b == pytest.approx(COLLAPSE_RADIUS)

    session.set_radius("a", 1.0)

    assert not session.terminated
    assert session.radius_a == 1.0
    assert session.radius_b >= RADIUS_SLIDER_RANGE[0]
    assert session.slider_values()[1] == session.radius_b

    session.set_radius("b", 0.8)
    assert session.radius_a == 1.0
    assert session.open_valve()
    session.advance(1)
    assert not session.terminated


def test_slider_values_follow_evolved_radii() -> None:
    session = MechanicsSession()
    session.open_valve()
    _collapse(session)

    slider_a, slider_b = session.slider_values()

    assert slider_b == RADIUS_SLIDER_RANGE[0]
    assert slider_a == pytest.approx(round(session.radius_a, 1))
    assert RADIUS_SLIDER_RANGE[0] <= slider_a <= RADIUS_SLIDER_RANGE[1]

    session.reset()
    assert session.slider_values() == (DEFAULT_RADIUS_A, DEFAULT_RADIUS_B)
