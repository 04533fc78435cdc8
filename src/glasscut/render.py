from __future__ import annotations

from pathlib import Path

from .pipeline import PuzzleResult


def render_png(
    result: PuzzleResult,
    output_path: str | Path,
    cut_color: str = "#111111",
    tab_color: str = "#f59e42",
    advisory_color: str = "#d1495b",
    cell_color: str = "#5aa9e6",
    cell_alpha: float = 0.12,
    show_cells: bool = False,
    show_seeds: bool = False,
    linewidth: float = 0.6,
    dpi: int = 150,
) -> Path:
    """Render a static preview of *result* to PNG, in SVG orientation (y down).

    Requires matplotlib; imported lazily to keep the core package lightweight.
    """
    try:
        import matplotlib.pyplot as plt
        from matplotlib.patches import Polygon, Rectangle
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc

    w, h = result.width, result.height
    fig, ax = plt.subplots(figsize=(8.0, 8.0 * h / w if w else 8.0))

    if show_cells:
        for cell in result.cells:
            ax.add_patch(Polygon(cell.polygon, closed=True, facecolor=cell_color,
                                 alpha=cell_alpha, edgecolor="none"))

    ax.add_patch(Rectangle((0, 0), w, h, fill=False, edgecolor=cut_color, linewidth=linewidth))

    for record in result.records:
        if len(record.points) < 2:
            continue
        xs, ys = zip(*record.points)
        if record.is_tab:
            color = tab_color if result.params.highlight_tabs else cut_color
        elif record.kind == "advisory-cut":
            color = advisory_color
        else:
            color = cut_color
        ax.plot(xs, ys, color=color, linewidth=linewidth)

    if show_seeds:
        for seed in result.seeds:
            ax.plot(seed.x, seed.y, ".", ms=2.0,
                    color="#2b2b2b" if seed.ring_role.is_primary else advisory_color)

    ax.set_aspect("equal", "box")
    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)
    ax.axis("off")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight", pad_inches=0.05)
    plt.close(fig)
    return output_path
