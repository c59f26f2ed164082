"""Matplotlib rendering of engine snapshots.

Coordinates are domain units: x is the position along a chromosome (same
scale as band_width) and rows are stacked top to bottom in chromosome order.
The renderer only reads EngineSnapshot objects; the animated view feeds the
engine its two inputs (a button for begin_transposition, one tick per frame).
"""

from __future__ import annotations

import math
from typing import Optional

from transposition.engine.state import EngineSnapshot, Phase, TranspositionEvent
from transposition.models.band import BandType

BAND_COLORS = {
    BandType.EXON: "#66BB6A",
    BandType.INTRON: "#8D6E63",
    BandType.TRANSPOSABLE: "#EF5350",
}
BAND_SHADOW_COLORS = {
    BandType.EXON: "#52A756",
    BandType.INTRON: "#795A4F",
    BandType.TRANSPOSABLE: "#DB3F3C",
}
DEFAULT_BODY_COLOR = "#E6E6EB"
BACKGROUND_COLOR = "#F5F5FA"

CHROMOSOME_HEIGHT = 1.0
CHROMOSOME_SPACING = 0.6
ROW_PITCH = CHROMOSOME_HEIGHT + CHROMOSOME_SPACING
FLIGHT_LIFT_ROWS = 1.25
BANNER_FALL_ROWS = 3.75 # Fall distance at t=1 on the reference 1.5 timeline
BANNER_SWAY = 30.0
BANNER_REFERENCE_DURATION = 1.5


def _row_top(row: float) -> float:
    return row * ROW_PITCH


def _row_center(row: float) -> float:
    return _row_top(row) + CHROMOSOME_HEIGHT / 2


def flight_path_point(
    event: TranspositionEvent,
    t: float,
    band_width: float,
    lift: float = FLIGHT_LIFT_ROWS,
) -> tuple[float, float]:
    """Point on the arc from source to target at parameter t, as (position, row).

    Cubic Bezier with both control points at the horizontal midpoint, lifted
    `lift` rows above the higher of the two chromosomes.
    """
    t = min(max(float(t), 0.0), 1.0)
    x0 = event.source_position + band_width / 2
    y0 = float(event.source_chromosome)
    x3 = event.target_position + band_width / 2
    y3 = float(event.target_chromosome)
    mid_x = (x0 + x3) / 2
    mid_y = min(y0, y3) - lift

    u = 1.0 - t
    b0 = u ** 3
    b12 = 3 * u * u * t + 3 * u * t * t
    b3 = t ** 3
    return b0 * x0 + b12 * mid_x + b3 * x3, b0 * y0 + b12 * mid_y + b3 * y3


def mutation_banner_style(elapsed: float, alert_duration: float = BANNER_REFERENCE_DURATION) -> dict:
    """Offsets, size and opacity of the falling "MUTATION!" banner at a given alert age."""
    # Normalise onto the reference timeline so the choreography scales with alert_duration
    t = min(max(elapsed / alert_duration, 0.0), 1.0) * BANNER_REFERENCE_DURATION
    angle = t * math.pi * 0.5
    fall = t ** 2 * BANNER_FALL_ROWS
    copies = [
        (math.sin(angle) * BANNER_SWAY * (1 + i * 0.2), fall * (0.7 + i * 0.2))
        for i in range(3)
    ]
    fontsize = 24 + 12 * min(t / 0.5, 1.0)
    alpha = 1.0 if t <= 1.0 else max(0.0, (BANNER_REFERENCE_DURATION - t) / 0.5)
    return {
        "copies": copies,
        "rotation": math.degrees(math.sin(angle) * 0.1),
        "fontsize": fontsize,
        "alpha": alpha,
        "show_mark": t < 0.5,
        "mark_size": 30 + 30 * min(t / 0.5, 1.0),
    }


def _draw_chromosomes(ax, snapshot: EngineSnapshot) -> None:
    from matplotlib.patches import FancyBboxPatch

    for chrom in snapshot.chromosomes:
        top = _row_top(chrom.index)
        rounding = min(10.0, chrom.length / 4)
        shadow = FancyBboxPatch(
            (snapshot.band_width, top + 0.06),
            chrom.length,
            CHROMOSOME_HEIGHT,
            boxstyle=f"round,pad=0,rounding_size={rounding}",
            facecolor="#C8C8C8",
            edgecolor="none",
            mutation_aspect=1 / 30,
            zorder=1,
        )
        body = FancyBboxPatch(
            (0, top),
            chrom.length,
            CHROMOSOME_HEIGHT,
            boxstyle=f"round,pad=0,rounding_size={rounding}",
            facecolor=chrom.color or DEFAULT_BODY_COLOR,
            edgecolor="none",
            mutation_aspect=1 / 30,
            zorder=2,
        )
        ax.add_patch(shadow)
        ax.add_patch(body)
        ax.text(-10, _row_center(chrom.index), chrom.name, ha="right", va="center", fontsize=12)


def _draw_bands(ax, snapshot: EngineSnapshot) -> int:
    from matplotlib.collections import PatchCollection
    from matplotlib.patches import Rectangle

    hidden = snapshot.event.source_index if snapshot.phase is Phase.IN_FLIGHT else None
    lengths = [c.length for c in snapshot.chromosomes]
    w = snapshot.band_width
    rects = []
    shadows = []
    colors = []
    shadow_colors = []
    for idx, band in enumerate(snapshot.bands):
        if idx == hidden:
            continue
        # Bands past the chromosome end are tolerated in the model but not drawn
        if band.position >= lengths[band.chromosome]:
            continue
        top = _row_top(band.chromosome)
        shadows.append(Rectangle((band.position + 1, top + 0.02), w, CHROMOSOME_HEIGHT))
        rects.append(Rectangle((band.position, top), w, CHROMOSOME_HEIGHT))
        shadow_colors.append(BAND_SHADOW_COLORS[band.band_type])
        colors.append(BAND_COLORS[band.band_type])
    if rects:
        ax.add_collection(PatchCollection(shadows, facecolors=shadow_colors, edgecolors="none", zorder=3))
        ax.add_collection(PatchCollection(rects, facecolors=colors, edgecolors="none", zorder=4))
    return len(rects)


def _draw_flight(ax, snapshot: EngineSnapshot) -> None:
    from matplotlib.patches import Ellipse

    event = snapshot.event
    x, row = flight_path_point(event, event.progress, snapshot.band_width)
    y = _row_center(row)
    w = snapshot.band_width
    ax.add_patch(
        Ellipse((x + 2, y + 0.04), w * 2, CHROMOSOME_HEIGHT * 0.8, facecolor=BAND_SHADOW_COLORS[BandType.TRANSPOSABLE], zorder=6)
    )
    ax.add_patch(
        Ellipse((x, y), w * 2, CHROMOSOME_HEIGHT * 0.8, facecolor=BAND_COLORS[BandType.TRANSPOSABLE], zorder=7)
    )


def _draw_alert(ax, snapshot: EngineSnapshot) -> None:
    alert = snapshot.alert
    style = mutation_banner_style(alert.elapsed, snapshot.alert_duration)
    x0 = alert.at_position + snapshot.band_width / 2
    y0 = _row_center(alert.at_chromosome)
    for dx, dy in style["copies"]:
        ax.text(
            x0 + dx,
            y0 + dy,
            "MUTATION!",
            ha="center",
            va="center",
            fontsize=style["fontsize"],
            fontweight="bold",
            color="#FF3232",
            alpha=style["alpha"],
            rotation=style["rotation"],
            zorder=9,
        )
    if style["show_mark"]:
        ax.text(x0, y0, "!", ha="center", va="center", fontsize=style["mark_size"], color="#C80000", zorder=10)


def plot_genome_map(snapshot: EngineSnapshot, ax=None, title: Optional[str] = None):
    import matplotlib.pyplot as plt
    from matplotlib.patches import Patch

    if ax is None:
        fig, ax = plt.subplots(figsize=(11, 6.5))
    else:
        fig = ax.figure

    ax.set_facecolor(BACKGROUND_COLOR)
    _draw_chromosomes(ax, snapshot)
    _draw_bands(ax, snapshot)
    if snapshot.phase is Phase.IN_FLIGHT:
        _draw_flight(ax, snapshot)
    elif snapshot.phase is Phase.MUTATION_ALERT:
        _draw_alert(ax, snapshot)

    max_length = max(c.length for c in snapshot.chromosomes)
    n_rows = len(snapshot.chromosomes)
    ax.set_xlim(-0.08 * max_length, max_length * 1.04)
    ax.set_ylim(_row_top(n_rows) + 0.2, -FLIGHT_LIFT_ROWS - 0.2)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.set_title(title or "Drosophila Chromosomes - Transposable Elements")
    handles = [
        Patch(facecolor=BAND_COLORS[BandType.EXON], label="Exon"),
        Patch(facecolor=BAND_COLORS[BandType.INTRON], label="Intron"),
        Patch(facecolor=BAND_COLORS[BandType.TRANSPOSABLE], label="Transposable Element"),
    ]
    ax.legend(handles=handles, loc="lower center", ncol=3, frameon=True, bbox_to_anchor=(0.5, -0.08))
    return fig, ax


def animate_genome_map(engine, interval_ms: int = 33, title: Optional[str] = None):
    """Live view: one engine tick per frame plus a "Trigger Transposition" button.

    Returns (fig, animation, button); keep references to all three for as
    long as the window is open.
    """
    import matplotlib.pyplot as plt
    from matplotlib.animation import FuncAnimation
    from matplotlib.widgets import Button

    fig = plt.figure(figsize=(11, 6.5))
    ax = fig.add_axes((0.05, 0.12, 0.9, 0.83))
    button_ax = fig.add_axes((0.42, 0.01, 0.16, 0.06))
    button = Button(button_ax, "Trigger Transposition", color="#4CAF50", hovercolor="#66BB6A")
    button.label.set_color("white")
    button.on_clicked(lambda _event: engine.begin_transposition())

    def _update(_frame):
        engine.tick()
        ax.clear()
        plot_genome_map(engine.snapshot(), ax=ax, title=title)
        return []

    plot_genome_map(engine.snapshot(), ax=ax, title=title)
    animation = FuncAnimation(fig, _update, interval=interval_ms, cache_frame_data=False)
    return fig, animation, button
