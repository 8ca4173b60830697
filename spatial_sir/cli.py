"""Command-line interface entry-point.

Usage examples
--------------
Run the default scenario:
    python -m spatial_sir run --seed 42

Run a preset from a YAML config and export the results:
    python -m spatial_sir run --config configs/default.yaml --preset covid --json out.json --csv out.csv

List presets:
    python -m spatial_sir presets
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .config import EngineConfig, config_to_dict, default_config, load_config
from .core.disease_params import PRESETS
from .export import export_history_csv, export_json
from .spatial.spatial_sir_simulator import EpidemicEngine, plot_spatial_results


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spatial_sir", description="Spatial SIR epidemic simulator")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # ------------------------------------------------------------------
    # run
    # ------------------------------------------------------------------
    p_run = subparsers.add_parser("run", help="Run one simulation until the epidemic ends")
    p_run.add_argument("--config", type=Path, default=None, help="YAML config file")
    p_run.add_argument("--preset", choices=sorted(PRESETS), default=None, help="Disease preset")
    p_run.add_argument("--population", type=int, default=None, help="Population size")
    p_run.add_argument("--initial-infected", type=int, default=None, help="Initial infected count")
    p_run.add_argument("--transmission-rate", type=float, default=None, help="Transmission rate (beta)")
    p_run.add_argument("--recovery-rate", type=float, default=None, help="Recovery rate (gamma)")
    p_run.add_argument("--seed", type=int, default=None, help="Random seed")
    p_run.add_argument("--max-days", type=int, default=None, help="Stop after this many days")
    p_run.add_argument("--json", type=Path, default=None, help="Export snapshot JSON to this path")
    p_run.add_argument("--csv", type=Path, default=None, help="Export history CSV to this path")
    p_run.add_argument("--plot", type=str, default=None, help="Save overview plot with this filename prefix")
    p_run.add_argument("--quiet", action="store_true", help="Suppress progress output")

    # ------------------------------------------------------------------
    # presets
    # ------------------------------------------------------------------
    subparsers.add_parser("presets", help="List disease presets")

    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> EngineConfig:
    overrides = {}
    if args.seed is not None:
        overrides['seed'] = args.seed
    if args.population is not None:
        overrides['population_size'] = args.population
    if args.initial_infected is not None:
        overrides['initial_infected'] = args.initial_infected
    if args.preset is not None:
        preset = PRESETS[args.preset]
        overrides['transmission_rate'] = preset.transmission_rate
        overrides['recovery_rate'] = preset.recovery_rate
    if args.transmission_rate is not None:
        overrides['transmission_rate'] = args.transmission_rate
    if args.recovery_rate is not None:
        overrides['recovery_rate'] = args.recovery_rate

    if args.config is not None:
        return load_config(args.config, overrides)

    config_dict = config_to_dict(default_config())
    config_dict.update(overrides)
    return EngineConfig(**config_dict)


def _cmd_run(args: argparse.Namespace) -> int:
    try:
        config = _build_config(args)
        engine = EpidemicEngine(config)
    except (ValueError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    engine.run(max_days=args.max_days, verbose=not args.quiet)

    if args.json is not None:
        print(f"Snapshot saved as '{export_json(engine, args.json)}'")
    if args.csv is not None:
        print(f"History saved as '{export_history_csv(engine, args.csv)}'")
    if args.plot is not None:
        import matplotlib
        matplotlib.use("Agg")
        print(f"Plot saved as '{plot_spatial_results(engine, save_prefix=args.plot)}'")

    return 0


def _cmd_presets() -> int:
    for key, preset in PRESETS.items():
        print(f"{key:8s} {preset.display_name:14s} "
              f"beta={preset.transmission_rate:<5} gamma={preset.recovery_rate}")
    return 0


def main(argv: List[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    if args.cmd == "run":
        return _cmd_run(args)
    return _cmd_presets()


if __name__ == "__main__":
    sys.exit(main())
