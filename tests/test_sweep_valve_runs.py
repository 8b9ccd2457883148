from __future__ import annotations

import importlib.util
from pathlib import Path

import pandas as pd
import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "physics" / "sweep_valve_runs.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("sweep_valve_runs", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_slider_radii_cover_slider_range() -> None:
    script = _load_script()

    radii = script.slider_radii()

    assert len(radii) == 18
    assert radii[0] == pytest.approx(0.3)
    assert radii[-1] == pytest.approx(2.0)


def test_slider_radii_keep_requested_step() -> None:
    script = _load_script()

    radii = script.slider_radii(0.5)

    assert list(radii) == pytest.approx([0.3, 0.8, 1.3, 1.8])
    assert (radii <= 2.0).all()


def test_sweep_writes_parquet(tmp_path) -> None:
    script = _load_script()

    output_path = script.sweep_valve_runs(
        output_dir=tmp_path,
        radius_step=0.5,
        max_ticks=50,
        dt=1.0,
    )

    assert output_path.exists()
    df = pd.read_parquet(output_path)
    assert len(df) == 16
    assert sorted(df["radius_a"].unique()) == pytest.approx([0.3, 0.8, 1.3, 1.8])
    assert {"radius_a", "radius_b", "collapsed", "max_volume_drift"}.issubset(df.columns)
    assert (df["ticks"] <= 50).all()
    equal = df[df["radius_a"] == df["radius_b"]]
    assert (equal["collapsed"] == 0.0).all()


def test_sweep_rejects_bad_step(tmp_path) -> None:
    script = _load_script()

    with pytest.raises(ValueError):
        script.sweep_valve_runs(output_dir=tmp_path, radius_step=0.0, max_ticks=10, dt=1.0)
