"""
render.py
---------
Exports a ``SummaryTable`` to disk: a CSV for downstream use and a PNG
image of the formatted table with caption and footnote.
"""

import os
import textwrap

import matplotlib.pyplot as plt

import config
from summary_table import SummaryTable

_ROW_HEIGHT  = 0.32   # inches per table row
_FONT_SIZE   = 9


def save_table_csv(table: SummaryTable, path: str) -> str:
    """Write the labelled table (``"<group> (N=<n>)"`` headers) to *path*."""
    _ensure_parent(path)
    table.to_frame().to_csv(path, index=False)
    print(f"  Saved {path}")
    return path


def save_table_png(
    table:    SummaryTable,
    path:     str,
    caption:  str = config.TABLE_CAPTION,
    footnote: str = config.TABLE_FOOTNOTE,
) -> str:
    """
    Render *table* as an image.

    Header row and the label column are bold; variable header rows (those
    with blank values) get a light fill so each block is easy to scan.
    """
    _ensure_parent(path)
    frame = table.to_frame()

    height = _ROW_HEIGHT * (len(frame) + 1) + 1.2
    width  = 3.0 + 1.8 * len(table.groups)
    fig, ax = plt.subplots(figsize=(width, height))
    ax.axis("off")

    tbl = ax.table(
        cellText=frame.values,
        colLabels=list(frame.columns),
        loc="upper center",
        cellLoc="left",
        colLoc="left",
    )
    tbl.auto_set_font_size(False)
    tbl.set_fontsize(_FONT_SIZE)
    tbl.auto_set_column_width(list(range(len(frame.columns))))

    blank_rows = {i + 1 for i, vals in enumerate(frame.iloc[:, 1:].values) if not any(vals)}
    for (r, c), cell in tbl.get_celld().items():
        cell.set_edgecolor(config.LIGHT)
        if r == 0:
            cell.set_facecolor(config.NAVY)
            cell.get_text().set_color("white")
            cell.get_text().set_fontweight("bold")
        elif r in blank_rows:
            cell.set_facecolor(config.LIGHT)
        if c == 0:
            cell.get_text().set_fontweight("bold")

    ax.set_title(caption, loc="left", fontsize=11, fontweight="bold", color=config.NAVY)
    fig.text(0.01, 0.01, textwrap.fill(footnote, 110), fontsize=7.5, ha="left", va="bottom")

    fig.savefig(path, dpi=config.DPI, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved {path}")
    return path


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
