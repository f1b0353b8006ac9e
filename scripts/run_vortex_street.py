#!/usr/bin/env python3
"""
Von Karman Vortex Street Simulation Script.

Runs the Stable Fluids solver with a single smoke/force emitter upstream of
the thin plate obstacle, substepping every frame, and writes field
snapshots (.npz) for an external renderer.

Usage:
    python run_vortex_street.py
    python run_vortex_street.py --config configs/vortex_street.yaml
    python run_vortex_street.py --resolution 128 --n-frames 600 --snapshot-freq 10
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stable_fluids.config import SimulationConfig, load_yaml, apply_cli_overrides, save_yaml
from stable_fluids.io import save_snapshot, snapshot_path
from stable_fluids.solvers import FluidSolver, ConfigurationError, run_frames
from stable_fluids.utils.logging import setup_logging


def parse_args():
    parser = argparse.ArgumentParser(
        description="Run a 2D Stable Fluids vortex street simulation"
    )
    parser.add_argument("--config", "-c", type=str, default=None,
                        help="YAML config file (CLI flags override its values)")

    # Grid
    parser.add_argument("--resolution", "-N", type=int, default=None,
                        help="Interior cells per direction (default: 64)")
    parser.add_argument("--no-obstacle", action="store_true",
                        help="Run without the plate obstacle")

    # Solver
    parser.add_argument("--diffusion-rate", type=float, default=None,
                        help="Density diffusion rate (default: 1e-4)")
    parser.add_argument("--viscosity", type=float, default=None,
                        help="Velocity diffusion rate (default: same as diffusion rate)")
    parser.add_argument("--substeps", type=int, default=None,
                        help="Solver ticks per frame (default: 8)")
    parser.add_argument("--diffusion-iterations", type=int, default=None,
                        help="Gauss-Seidel sweeps per diffusion solve (default: 4)")
    parser.add_argument("--projection-iterations", type=int, default=None,
                        help="Gauss-Seidel sweeps per pressure solve (default: 10)")

    # Output
    parser.add_argument("--n-frames", "-n", type=int, default=None,
                        help="Number of frames (default: 180)")
    parser.add_argument("--output-dir", "-o", type=str, default=None,
                        help="Output directory (default: output/vortex_street)")
    parser.add_argument("--case-name", type=str, default=None,
                        help="Case name for output files (default: vortex_street)")
    parser.add_argument("--snapshot-freq", type=int, default=None,
                        help="Frames between snapshots, 0 = final only (default: 0)")
    parser.add_argument("--report-freq", type=int, default=None,
                        help="Frames between timing reports (default: 20)")
    parser.add_argument("--log-level", type=str, default="INFO",
                        help="Logging level (default: INFO)")

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()
    logger = setup_logging(level=args.log_level)

    try:
        config = load_yaml(args.config) if args.config else SimulationConfig()
        config = apply_cli_overrides(config, args)
        solver = FluidSolver(config.to_solver_config())
        emitter = config.to_emitter()
        emitter.cell(solver.N)
    except (FileNotFoundError, ConfigurationError, ValueError) as e:
        logger.error(f"ERROR: {e}")
        sys.exit(1)

    out = config.output
    output_dir = Path(out.directory)
    save_yaml(config, output_dir / f"{out.case_name}_config.yaml")

    def write_snapshot(frame, solver):
        if out.snapshot_freq > 0 and (frame + 1) % out.snapshot_freq == 0:
            save_snapshot(snapshot_path(output_dir, out.case_name, frame + 1), solver)

    logger.info(f"Running {out.n_frames} frames x {config.solver.substeps} substeps "
                f"(dt = {config.solver.dt:.6f})")
    result = run_frames(
        solver,
        emitter,
        n_frames=out.n_frames,
        substeps=config.solver.substeps,
        report_freq=out.report_freq,
        callback=write_snapshot,
        stop_on_nonfinite=True,
    )

    final = save_snapshot(output_dir / f"{out.case_name}_final.npz", solver)
    logger.info(f"Completed {result.frames} frames ({result.ticks} ticks), "
                f"final state: {final}")

    if result.stopped_early:
        logger.error("Simulation stopped: non-finite values in fields")
        sys.exit(2)


if __name__ == "__main__":
    main()
