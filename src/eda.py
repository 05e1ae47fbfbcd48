"""
eda.py
------
The two summary figures that accompany Table 1.

  Figure 1 — NPS distribution by plan tier (boxplot + jittered points).
             Are Premium users actually happier?
  Figure 2 — Churn proportion by plan tier (100 % stacked bar).
             Compares relative risk regardless of tier size.

Each function accepts the cleaned DataFrame from ``data_loader.clean``,
drops rows missing the plotted variable or the tier, saves a JPG and
returns its path.  Every declared tier keeps its slot on the x axis even
when it has no rows, so figures from different dataset versions line up.
"""

import os

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.ticker import PercentFormatter

import config


def _style() -> None:
    plt.rcParams.update(config.PLOT_STYLE)


def plot_nps_distribution(df: pd.DataFrame, path: str, source: str | None = None) -> str:
    """
    Boxplot of ``nps_score`` per plan tier, outliers hidden and replaced by
    the raw points (jittered) so density is visible at any sample size.
    """
    _style()
    data   = df.dropna(subset=["nps_score", config.GROUP_COLUMN])
    levels = config.PLAN_LEVELS
    scores = [data.loc[data[config.GROUP_COLUMN] == lvl, "nps_score"].to_numpy(dtype=float)
              for lvl in levels]

    fig, ax = plt.subplots(figsize=config.FIGURE_SIZE)
    positions = np.arange(1, len(levels) + 1)
    bp = ax.boxplot(scores, positions=positions, widths=0.6,
                    patch_artist=True, showfliers=False)
    for patch, lvl in zip(bp["boxes"], levels):
        patch.set_facecolor(config.PLAN_COLORS.get(lvl, config.TEAL))
        patch.set_alpha(0.8)
    for median in bp["medians"]:
        median.set_color(config.GRAY)

    rng = np.random.default_rng(config.RANDOM_STATE)
    for pos, vals in zip(positions, scores):
        ax.scatter(pos + rng.uniform(-0.2, 0.2, len(vals)), vals,
                   s=8, alpha=0.3, color=config.GRAY, zorder=3)

    ax.set_xticks(positions)
    ax.set_xticklabels(levels)
    ax.xaxis.grid(False)
    ax.set_xlabel("Subscription Plan")
    ax.set_ylabel("Net Promoter Score")
    fig.suptitle("Customer Satisfaction Distribution (NPS)",
                 fontsize=15, fontweight="bold", color=config.NAVY, x=0.02, ha="left")
    ax.set_title("Are Premium users actually happier?", fontsize=11, loc="left")
    _caption(fig, source)

    return _save(fig, path)


def plot_churn_by_plan(df: pd.DataFrame, path: str, source: str | None = None) -> str:
    """
    100 % stacked bar of Retained vs Churned per plan tier.

    The y axis is always 0–100 %; the churn share is printed on each bar
    together with the tier's n.
    """
    _style()
    data    = df.dropna(subset=[config.CHURN_COLUMN, config.GROUP_COLUMN])
    levels  = config.PLAN_LEVELS
    churned = data[config.CHURN_COLUMN] == config.CHURN_TABLE_LABELS[1]

    counts = pd.DataFrame({
        "n":       [int((data[config.GROUP_COLUMN] == lvl).sum()) for lvl in levels],
        "churned": [int((churned & (data[config.GROUP_COLUMN] == lvl)).sum()) for lvl in levels],
    }, index=levels)
    share = (counts["churned"] / counts["n"].where(counts["n"] > 0)).fillna(0.0)
    rest  = np.where(counts["n"] > 0, 1.0 - share, 0.0)

    retained_label = config.CHURN_PLOT_LABELS[0]
    churned_label  = config.CHURN_PLOT_LABELS[1]

    fig, ax = plt.subplots(figsize=config.FIGURE_SIZE)
    x = np.arange(len(levels))
    ax.bar(x, share, width=0.7, color=config.CHURN_COLORS[churned_label], label=churned_label)
    ax.bar(x, rest, width=0.7, bottom=share,
           color=config.CHURN_COLORS[retained_label], label=retained_label)
    for xi, (lvl, row) in zip(x, counts.iterrows()):
        if row["n"]:
            ax.text(xi, share[lvl] / 2, f"{share[lvl]:.0%}", ha="center", va="center",
                    fontsize=11, fontweight="bold", color="white")
        ax.text(xi, 1.01, f"n={row['n']}", ha="center", va="bottom", fontsize=9)

    ax.set_xticks(x)
    ax.set_xticklabels(levels)
    ax.xaxis.grid(False)
    ax.set_ylim(0, 1.08)
    ax.yaxis.set_major_formatter(PercentFormatter(1.0))
    ax.set_xlabel("Subscription Plan")
    ax.set_ylabel("Proportion (%)")
    ax.legend(title="Customer Status", loc="lower center", bbox_to_anchor=(0.5, 1.0),
              ncol=2, frameon=False, fontsize=10, title_fontsize=10)
    fig.suptitle("Churn Risk by Plan Type",
                 fontsize=15, fontweight="bold", color=config.NAVY, x=0.02, ha="left")
    _caption(fig, source, note="Proportion of customers leaving within 90 days")

    return _save(fig, path)


def _caption(fig, source: str | None, note: str | None = None) -> None:
    parts = [note] if note else []
    if source:
        parts.append(f"Source: {os.path.basename(source)}")
    if parts:
        fig.text(0.98, 0.01, "  |  ".join(parts), ha="right", va="bottom",
                 fontsize=8, color=config.GRAY)


def _save(fig, path: str) -> str:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    fig.tight_layout(rect=(0, 0.03, 1, 1))
    fig.savefig(path, dpi=config.DPI, facecolor="white")
    plt.close(fig)
    print(f"  Saved {path}")
    return path
