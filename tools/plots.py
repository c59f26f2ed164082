from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Sequence

from transposition.analysis.band_composition import band_composition, composition_chisquare, plot_band_composition
from transposition.analysis.genome_map import animate_genome_map, plot_genome_map
from transposition.config.simulation_config import SimulationConfig
from transposition.engine.state import EngineSnapshot, Phase
from transposition.engine.transposition_engine import TranspositionEngine
from transposition.io.chromosome_io import load_chromosome_table
from transposition.io.config_io import load_simulation_config
from transposition.io.output_io import load_bands_csv
from transposition.models.band import BandType
from transposition.models.generation import build_chromosomes, validate_bands


def _load_config(config_path: str | Path | None, chromosomes_path: str | Path | None) -> SimulationConfig:
    sim_config = load_simulation_config(config_path) if config_path else SimulationConfig()
    if chromosomes_path is not None:
        sim_config = dataclasses.replace(sim_config, chromosomes=tuple(load_chromosome_table(chromosomes_path)))
    return sim_config


def _save(fig, out_path: str | Path) -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    fig.clf()


def plot_genome_map_from_csv(
    bands_path: str | Path,
    out_path: str | Path,
    config_path: str | Path | None = None,
    chromosomes_path: str | Path | None = None,
    title: str | None = None,
):
    sim_config = _load_config(config_path, chromosomes_path)
    chromosomes = build_chromosomes(sim_config.chromosomes)
    bands = load_bands_csv(bands_path)
    validate_bands(bands, len(chromosomes))
    snapshot = EngineSnapshot(
        phase=Phase.IDLE,
        bands=tuple(bands),
        chromosomes=tuple(chromosomes),
        band_width=sim_config.band_width,
        te_count=sum(1 for b in bands if b.band_type is BandType.TRANSPOSABLE),
    )
    fig, ax = plot_genome_map(snapshot, title=title)
    _save(fig, out_path)
    return fig, ax


def plot_composition_from_csv(
    bands_path: str | Path,
    out_path: str | Path,
    config_path: str | Path | None = None,
    chromosomes_path: str | Path | None = None,
    title: str = "Band composition per chromosome",
):
    sim_config = _load_config(config_path, chromosomes_path)
    chromosomes = build_chromosomes(sim_config.chromosomes)
    bands = load_bands_csv(bands_path)
    counts = band_composition(bands, chromosomes)
    if bands:
        stat, pvalue = composition_chisquare(bands, sim_config)
        logging.info("Band type chi-square vs generator probabilities: stat=%.3f p=%.3g", stat, pvalue)
    else:
        logging.info("Band CSV %s is empty; skipping chi-square", bands_path)
    fig, ax = plot_band_composition(counts, title=title)
    _save(fig, out_path)
    return fig, ax


def run_animation(
    config_path: str | Path | None = None,
    chromosomes_path: str | Path | None = None,
    interval_ms: int = 33,
) -> None:
    import matplotlib.pyplot as plt

    sim_config = _load_config(config_path, chromosomes_path)
    engine = TranspositionEngine(sim_config)
    # Animation and button are garbage collected (and stop responding) if not held
    fig, animation, button = animate_genome_map(engine, interval_ms=interval_ms)
    plt.show()


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plotting utilities.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    map_parser = subparsers.add_parser("map", help="Render a band CSV as a genome map")
    map_parser.add_argument("--bands", required=True, help="Path to bands CSV from run_simulation.py")
    map_parser.add_argument("--config", default=None, help="Path to simulation YAML config")
    map_parser.add_argument("--chromosomes", default=None, help="Path to chromosome CSV")
    map_parser.add_argument("--out", required=True, help="Output path for the PNG")
    map_parser.add_argument("--title", default=None, help="Plot title")

    comp_parser = subparsers.add_parser("composition", help="Plot band type counts per chromosome")
    comp_parser.add_argument("--bands", required=True, help="Path to bands CSV from run_simulation.py")
    comp_parser.add_argument("--config", default=None, help="Path to simulation YAML config")
    comp_parser.add_argument("--chromosomes", default=None, help="Path to chromosome CSV")
    comp_parser.add_argument("--out", required=True, help="Output path for the PNG")
    comp_parser.add_argument("--title", default="Band composition per chromosome", help="Plot title")

    anim_parser = subparsers.add_parser("animate", help="Open the interactive transposition view")
    anim_parser.add_argument("--config", default=None, help="Path to simulation YAML config")
    anim_parser.add_argument("--chromosomes", default=None, help="Path to chromosome CSV")
    anim_parser.add_argument("--interval", type=int, default=33, help="Frame interval in milliseconds")

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

    if args.command == "map":
        plot_genome_map_from_csv(
            bands_path=args.bands,
            out_path=args.out,
            config_path=args.config,
            chromosomes_path=args.chromosomes,
            title=args.title,
        )
    elif args.command == "composition":
        plot_composition_from_csv(
            bands_path=args.bands,
            out_path=args.out,
            config_path=args.config,
            chromosomes_path=args.chromosomes,
            title=args.title,
        )
    else:
        run_animation(
            config_path=args.config,
            chromosomes_path=args.chromosomes,
            interval_ms=args.interval,
        )


if __name__ == "__main__":
    main()
