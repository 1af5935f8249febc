"""
legalops.viz
============

Plotting helper for the portfolio health dashboard.  The module imports
*matplotlib*, so it is kept out of :pymod:`legalops`'s eager imports.

Outputs are PNGs written to the *images/* folder (auto‑created if
needed).  Filenames can be overridden via keyword argument.
"""
from __future__ import annotations

import os
from pathlib import Path

import matplotlib.pyplot as plt

from .health_score import ScoreSummary
from .models import ScoreBand

# default output dir
_IMG_DIR = Path("images")

_BAND_COLOURS = {
    ScoreBand.EXCELLENT: "#10b981",
    ScoreBand.GOOD: "#0ea5e9",
    ScoreBand.NEEDS_ATTENTION: "#f59e0b",
    ScoreBand.CRITICAL: "#ef4444",
}


# ---------------------------------------------------------------------
# Bar chart of entity counts by health score band
# ---------------------------------------------------------------------
def band_summary_chart(
    summary: ScoreSummary,
    out_path: str | os.PathLike = _IMG_DIR / "health_bands.png",
) -> Path:
    """
    Generate a bar chart of how many entities fall into each score band.

    Parameters
    ----------
    summary : ScoreSummary
        Output of :pyfunc:`legalops.health_score.summarize_scores`.
    out_path : str or Path, default='images/health_bands.png'
        Where to save the PNG.

    Returns
    -------
    pathlib.Path
        Final image path for convenience.
    """
    bands = list(ScoreBand)
    ys = [summary.counts.get(b, 0) for b in bands]

    plt.figure()
    bars = plt.bar([b.label for b in bands], ys,
                   color=[_BAND_COLOURS[b] for b in bands], edgecolor="#333")
    # add counts on top of each bar
    for rect, cnt in zip(bars, ys):
        plt.text(rect.get_x() + rect.get_width() / 2,
                 cnt + 0.05,
                 str(cnt),
                 ha="center", va="bottom",
                 fontsize=8, color="#333")
    # subtle y‑axis grid for readability
    plt.grid(axis="y", linestyle=":", alpha=0.3)
    title = "Health Score Bands"
    if summary.average is not None:
        title += f" (average {summary.average:g})"
    plt.title(title)
    plt.ylabel("Entity Count")
    plt.tight_layout()

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=120, bbox_inches="tight")
    plt.close()
    return out_path


#
# ---------------------------------------------------------------------
# CLI demo:  python -m legalops.viz  [--out images/health_bands.png]
# ---------------------------------------------------------------------
if __name__ == "__main__":
    import argparse

    from .health_score import summarize_scores
    from .portfolio_db import DBPortfolioManager

    parser = argparse.ArgumentParser(
        description="Generate health_bands.png from the scores stored in the entity database.")
    parser.add_argument("--out", default=str(_IMG_DIR / "health_bands.png"), help="output PNG path")
    args = parser.parse_args()

    summary = summarize_scores(DBPortfolioManager().health_scores().values())
    if not summary.scored:
        raise SystemExit("⛔  No stored health scores; run `python -m legalops.batch` first")

    out = band_summary_chart(summary, args.out)
    print(f"health_bands saved to {out}")
