from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib
from typing import Sequence

from transposition.config.simulation_config import SimulationConfig
from transposition.engine.transposition_engine import TranspositionEngine
from transposition.io.chromosome_io import load_chromosome_table
from transposition.io.config_io import load_simulation_config
from transposition.io.output_io import save_bands_csv, save_history_csv

logger = logging.getLogger("run_simulation")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run headless transposition cycles on a banded genome map.")
    parser.add_argument("--config", default=None, help="Path to simulation YAML config (default: built-in settings)")
    parser.add_argument(
        "--chromosomes",
        default=None,
        help="Path to chromosome CSV (name,length[,color]); overrides chromosomes from the config",
    )
    parser.add_argument("--out", required=True, help="Output CSV path for the final band collection")
    parser.add_argument(
        "--events",
        type=pathlib.Path,
        default=None,
        help="Output CSV path for the transposition history (default: add _events suffix to --out).",
    )
    parser.add_argument("--n_transpositions", type=int, default=None, help="Override n_transpositions")
    parser.add_argument("--seed", type=int, default=None, help="Override random_seed")
    return parser.parse_args(argv)


def apply_overrides(
    config: SimulationConfig,
    n_transpositions: int | None,
    seed: int | None,
    chromosomes_path: str | None,
) -> SimulationConfig:
    changes: dict = {}
    if n_transpositions is not None:
        if n_transpositions < 0:
            raise ValueError("n_transpositions override must be non-negative")
        changes["n_transpositions"] = n_transpositions
    if seed is not None:
        changes["random_seed"] = seed
    if chromosomes_path is not None:
        changes["chromosomes"] = tuple(load_chromosome_table(chromosomes_path))
    if not changes:
        return config
    return dataclasses.replace(config, **changes)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    sim_config = load_simulation_config(args.config) if args.config else SimulationConfig()
    sim_config = apply_overrides(sim_config, args.n_transpositions, args.seed, args.chromosomes)

    engine = TranspositionEngine(sim_config)
    logger.info(
        "Generated %d bands on %d chromosomes with %d transposable elements",
        len(engine.bands),
        len(engine.chromosomes),
        engine.te_count,
    )
    records = engine.run()
    mutations = sum(1 for r in records if r.disrupts)

    out_path = pathlib.Path(args.out)
    events_path = args.events
    if events_path is None:
        suffix = out_path.suffix or ".csv"
        events_path = out_path.with_name(out_path.stem + "_events" + suffix)
    save_bands_csv(engine.bands, out_path)
    save_history_csv(records, events_path)

    logger.info("Completed %d transpositions (%d disrupted an exon)", len(records), mutations)
    logger.info("Wrote %d bands to %s", len(engine.bands), out_path)
    logger.info("Wrote transposition history to %s", events_path)


if __name__ == "__main__":
    main()
