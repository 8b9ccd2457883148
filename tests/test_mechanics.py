import pytest

from bubblelab.mechanics.model import (
    COLLAPSE_RADIUS,
    BubblePair,
    FlowDirection,
    flow_direction,
    laplace_pressure,
    radius_from_volume,
    reset_pair,
    sphere_volume,
    step,
)


def test_laplace_pressure_follows_young_laplace() -> None:
    assert laplace_pressure(1.0) == pytest.approx(100.0)
    assert laplace_pressure(0.5) == pytest.approx(200.0)
    # Radii below the floor are evaluated at the floor.
    assert laplace_pressure(0.05) == pytest.approx(1000.0)


def test_smaller_bubble_has_higher_pressure() -> None:
    radii = [0.3, 0.5, 0.8, 1.2, 2.0]
    pressures = [laplace_pressure(radius) for radius in radii]

    assert pressures == sorted(pressures, reverse=True)


def test_radius_from_volume_inverts_sphere_volume() -> None:
    assert radius_from_volume(sphere_volume(1.3)) == pytest.approx(1.3)
    assert radius_from_volume(-5.0) > 0


def test_closed_valve_reports_pressures_without_flow() -> None:
    pair = BubblePair(radius_a=1.2, radius_b=0.8, valve_open=False)

    result = step(pair)

    assert result.new_radius_a == pair.radius_a
    assert result.new_radius_b == pair.radius_b
    assert result.volume_delta_a == 0.0
    assert result.volume_delta_b == 0.0
    assert result.pressure_b > result.pressure_a
    assert not result.terminated


def test_open_valve_moves_air_into_larger_bubble() -> None:
    pair = BubblePair(radius_a=1.2, radius_b=0.8, valve_open=True)

    result = step(pair)

    assert result.new_radius_a > pair.radius_a
    assert result.new_radius_b < pair.radius_b
    assert result.volume_delta_a == pytest.approx(-result.volume_delta_b)
    assert result.flow < 0


@pytest.mark.parametrize("dt", [0.1, 0.5, 1.0, 2.0])
@pytest.mark.parametrize(("radius_a", "radius_b"), [(1.0, 1.1), (1.6, 1.3)])
def test_open_valve_conserves_total_volume(
    radius_a: float, radius_b: float, dt: float
) -> None:
    pair = BubblePair(radius_a=radius_a, radius_b=radius_b, valve_open=True)
    initial_total = pair.total_volume

    for _ in range(20):
        result = step(pair, dt=dt)
        assert not result.terminated
        pair = result.to_pair()
        assert pair.total_volume == pytest.approx(initial_total, rel=1e-9)


@pytest.mark.parametrize("dt", [0.1, 0.5, 1.0, 2.0])
def test_smaller_bubble_a_loses_volume_every_step(dt: float) -> None:
    pair = BubblePair(radius_a=0.9, radius_b=1.4, valve_open=True)

    for _ in range(5000):
        result = step(pair, dt=dt)
        assert result.volume_delta_a < 0
        assert result.volume_delta_b > 0
        if result.terminated:
            break
        assert result.new_radius_a < pair.radius_a
        pair = result.to_pair()

    assert result.terminated
    assert result.new_radius_a == pytest.approx(COLLAPSE_RADIUS)


def test_equal_radii_stay_in_equilibrium() -> None:
    pair = BubblePair(radius_a=1.0, radius_b=1.0, valve_open=True)

    result = step(pair)

    assert result.flow == 0.0
    assert result.new_radius_a == pytest.approx(1.0)
    assert result.new_radius_b == pytest.approx(1.0)
    assert flow_direction(pair) is FlowDirection.NONE


def test_flow_direction_points_from_smaller_bubble() -> None:
    assert flow_direction(BubblePair(radius_a=1.2, radius_b=0.8)) is FlowDirection.B_TO_A
    assert flow_direction(BubblePair(radius_a=0.5, radius_b=1.0)) is FlowDirection.A_TO_B
    assert flow_direction(BubblePair(radius_a=1.0, radius_b=1.005)) is FlowDirection.NONE


def test_small_bubble_shrinks_until_collapse() -> None:
    pair = BubblePair(radius_a=1.2, radius_b=0.8, valve_open=True)
    previous_b = pair.radius_b

    for _ in range(5000):
        result = step(pair)
        if result.terminated:
            break
        assert result.new_radius_b < previous_b
        previous_b = result.new_radius_b
        pair = result.to_pair()
    else:
        pytest.fail("smaller bubble never collapsed")

    assert result.new_radius_b == pytest.approx(COLLAPSE_RADIUS)
    assert result.new_radius_a > 1.2


def test_collapse_clamps_radius_and_terminates() -> None:
    pair = BubblePair(radius_a=2.0, radius_b=0.21, valve_open=True)

    result = step(pair)

    assert result.terminated
    assert result.new_radius_b == pytest.approx(COLLAPSE_RADIUS)
    assert not result.to_pair().valve_open


def test_terminated_pair_is_locked() -> None:
    pair = BubblePair(radius_a=1.5, radius_b=0.2, valve_open=True, terminated=True)

    result = step(pair)

    assert result.terminated
    assert result.new_radius_a == pair.radius_a
    assert result.new_radius_b == pair.radius_b
    assert result.flow == 0.0


def test_reset_pair_unlocks_and_closes_valve() -> None:
    pair = reset_pair(1.2, 0.8)

    assert not pair.valve_open
    assert not pair.terminated
    assert pair.radius_a == 1.2


def test_invalid_inputs_raise() -> None:
    with pytest.raises(ValueError):
        BubblePair(radius_a=0.0, radius_b=1.0)
    with pytest.raises(ValueError):
        BubblePair(radius_a=1.0, radius_b=-0.5)
    with pytest.raises(ValueError):
        step(BubblePair(radius_a=1.0, radius_b=0.5, valve_open=True), dt=0.0)
