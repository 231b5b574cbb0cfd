"""Command-line tools for headless Grid Snake runs."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake headless simulation, benchmarking, and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Run a scripted headless game.")
    sim_p.add_argument(
        "--moves", type=str, default="",
        help="One move per tick: U/D/L/R, '.' for no input.",
    )
    sim_p.add_argument("--frames", type=int, default=10_000)
    sim_p.add_argument("--fps", type=float, default=60.0)
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags below override it).",
    )
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--grid-width", type=int, default=None)
    sim_p.add_argument("--grid-height", type=int, default=None)
    sim_p.add_argument("--refresh-rate", type=float, default=None)

    # --- benchmark ---
    bench_p = sub.add_parser("benchmark", help="Measure simulation throughput.")
    bench_p.add_argument("--games", type=int, default=100)
    bench_p.add_argument("--max-ticks", type=int, default=500)
    bench_p.add_argument("--grid-width", type=int, default=17)
    bench_p.add_argument("--grid-height", type=int, default=17)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- config ---
    config_p = sub.add_parser("config", help="Print or save the default config.")
    config_p.add_argument(
        "--output", type=str, default=None,
        help="Write the config to this JSON file instead of stdout.",
    )

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from grid_snake.benchmark import run_script
    from grid_snake.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    flag_map = {
        "seed": "seed",
        "grid_width": "grid_width",
        "grid_height": "grid_height",
        "refresh_rate": "refresh_rate",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val
    if overrides:
        config = replace(config, **overrides)

    run = run_script(config, args.moves, max_frames=args.frames, fps=args.fps)
    print(json.dumps(run.to_dict(), indent=2))  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from grid_snake.benchmark import benchmark_throughput

    result = benchmark_throughput(
        num_games=args.games,
        max_ticks=args.max_ticks,
        grid_width=args.grid_width,
        grid_height=args.grid_height,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig

    config = GameConfig()
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
