from __future__ import annotations

import argparse
import time
from datetime import UTC, datetime
from pathlib import Path

import numpy as np
import pandas as pd

from bubblelab.lab.simulator import (
    DEFAULT_MAX_TICKS,
    RADIUS_SLIDER_RANGE,
    RADIUS_SLIDER_STEP,
    run_valve_simulation,
    summarize_run,
)
from bubblelab.mechanics.model import FRAME_DT, laplace_pressure

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "data" / "processed" / "valve_sweeps"


def slider_radii(step: float = RADIUS_SLIDER_STEP) -> np.ndarray:
    lower, upper = RADIUS_SLIDER_RANGE
    return np.round(np.arange(lower, upper + (step / 2.0), step), 6)


def sweep_valve_runs(
    *,
    output_dir: Path,
    radius_step: float,
    max_ticks: int,
    dt: float,
) -> Path:
    if radius_step <= 0:
        msg = "radius_step must be positive"
        raise ValueError(msg)
    output_dir.mkdir(parents=True, exist_ok=True)

    start_time = time.perf_counter()
    radii = slider_radii(radius_step)

    rows: list[dict[str, float]] = []
    for radius_a in radii:
        for radius_b in radii:
            run = run_valve_simulation(
                radius_a=float(radius_a),
                radius_b=float(radius_b),
                max_ticks=max_ticks,
                dt=dt,
            )
            summary = summarize_run(run)
            rows.append(
                {
                    "radius_a": float(radius_a),
                    "radius_b": float(radius_b),
                    "initial_pressure_a": laplace_pressure(float(radius_a)),
                    "initial_pressure_b": laplace_pressure(float(radius_b)),
                    **summary,
                }
            )

    df = pd.DataFrame(rows).sort_values(["radius_a", "radius_b"]).reset_index(drop=True)

    timestamp = datetime.now(tz=UTC).strftime("%Y%m%dT%H%M%SZ")
    output_path = output_dir / f"valve_sweep_{timestamp}_{len(radii)}x{len(radii)}.parquet"
    df.to_parquet(output_path, index=False)

    elapsed_s = time.perf_counter() - start_time
    collapsed = int(df["collapsed"].sum())
    print(f"Simulated {len(df)} valve runs in {elapsed_s:.2f}s ({collapsed} collapsed)")
    print(f"Max volume drift before collapse: {df['max_volume_drift'].max():.3e}")
    print(f"Wrote sweep to: {output_path}")
    return output_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the connected-bubble valve experiment over the slider grid."
    )
    parser.add_argument(
        "--output-dir",
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory where parquet output is written.",
    )
    parser.add_argument(
        "--radius-step",
        type=float,
        default=RADIUS_SLIDER_STEP,
        help="Spacing of starting radii between 0.3 and 2.0.",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=DEFAULT_MAX_TICKS,
        help="Upper bound on ticks per run when neither bubble collapses.",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=FRAME_DT,
        help="Tick length passed to the flow step.",
    )
    return parser


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    sweep_valve_runs(
        output_dir=Path(args.output_dir),
        radius_step=args.radius_step,
        max_ticks=args.max_ticks,
        dt=args.dt,
    )


if __name__ == "__main__":
    main()
