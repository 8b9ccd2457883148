from math import sqrt

import pytest

from bubblelab.geometry.steiner import (
    Mode,
    Orientation,
    compute_layout,
    junction_angles,
    length_saving,
    network_length,
    steiner_junctions,
)


def test_direct_and_soap_lengths_match_closed_form() -> None:
    direct = compute_layout(Mode.DIRECT)
    soap = compute_layout(Mode.SOAP_FILM)

    assert direct.total_length == pytest.approx(2.828, abs=1e-3)
    assert soap.total_length == pytest.approx(2.732, abs=1e-3)
    assert soap.total_length < direct.total_length


def test_drawn_segments_add_up_to_reported_length() -> None:
    for mode in Mode:
        layout = compute_layout(mode)
        assert network_length(layout) == pytest.approx(layout.total_length)

    assert len(compute_layout(Mode.DIRECT).segments) == 2
    assert len(compute_layout(Mode.SOAP_FILM).segments) == 5


def test_junctions_sit_on_the_midline() -> None:
    first, second = steiner_junctions(1.0)

    assert first == pytest.approx((0.5, 0.5 / sqrt(3.0)))
    assert second == pytest.approx((0.5, 1.0 - 0.5 / sqrt(3.0)))


def test_films_meet_at_120_degrees() -> None:
    angles = junction_angles(compute_layout(Mode.SOAP_FILM))

    assert len(angles) == 2
    for junction in angles:
        assert junction == pytest.approx([120.0, 120.0, 120.0], abs=1e-6)


def test_direct_mode_has_no_junction_angles() -> None:
    assert junction_angles(compute_layout(Mode.DIRECT)) == []


def test_horizontal_orientation_gives_same_network() -> None:
    vertical = compute_layout(Mode.SOAP_FILM, orientation=Orientation.VERTICAL)
    horizontal = compute_layout(Mode.SOAP_FILM, orientation=Orientation.HORIZONTAL)

    assert network_length(horizontal) == pytest.approx(network_length(vertical))
    assert horizontal.junctions[0] == pytest.approx((0.5 / sqrt(3.0), 0.5))
    for junction in junction_angles(horizontal):
        assert junction == pytest.approx([120.0, 120.0, 120.0], abs=1e-6)


def test_lengths_scale_with_side() -> None:
    layout = compute_layout(Mode.SOAP_FILM, side=2.0)

    assert layout.length_direct == pytest.approx(4.0 * sqrt(2.0))
    assert layout.length_soap == pytest.approx(2.0 * (1.0 + sqrt(3.0)))
    assert network_length(layout) == pytest.approx(layout.length_soap)


def test_length_saving_is_a_few_percent() -> None:
    assert length_saving() == pytest.approx(1.0 - (1.0 + sqrt(3.0)) / (2.0 * sqrt(2.0)))
    assert 0.03 < length_saving() < 0.04


def test_non_positive_side_raises() -> None:
    with pytest.raises(ValueError):
        compute_layout(Mode.SOAP_FILM, side=0.0)
