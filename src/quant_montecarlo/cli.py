from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from quant_montecarlo.assetvaluation.monte_carlo_black_scholes import (
    MonteCarloBlackScholesModel,
)
from quant_montecarlo.config.loader import build_model, load_config


# ============================================================
# Command: simulate
# ============================================================


def _print_summary(label: str, model: MonteCarloBlackScholesModel) -> None:
    print(f"---------- {label} ----------")
    print(f"{'time':>10} {'mean':>14} {'stderr':>12} {'numeraire':>12}")
    for i, t in enumerate(model.time_grid):
        value = model.asset_value(i, 0)
        numeraire = model.numeraire(i)
        print(
            f"{t:>10.4f} {value.expectation():>14.6f} "
            f"{value.standard_error():>12.6f} {numeraire.get(0):>12.6f}"
        )


def cmd_simulate(args) -> None:
    cfg = load_config(args.config)
    base = build_model(cfg)

    print(f"[qmc] Simulation '{cfg.name}': {base!r}")
    _print_summary("base", base)

    for n, scenario in enumerate(cfg.scenarios):
        clone = base.clone_with_modified_data(scenario)
        overrides = scenario.model_dump(exclude_none=True)
        _print_summary(f"scenario {n}: {overrides}", clone)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="qmc", description="Monte-Carlo Black-Scholes simulation CLI"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # -----------------------------
    # simulate
    # -----------------------------
    sim_p = subparsers.add_parser("simulate", help="Simulate from a config file")
    sim_p.add_argument("--config", required=True, help="Path to YAML/JSON config")

    # -----------------------------
    # version
    # -----------------------------
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "simulate":
        cmd_simulate(args)

    elif args.command == "version":
        from quant_montecarlo import __version__

        print(f"quant_montecarlo version {__version__}")


if __name__ == "__main__":
    main()
