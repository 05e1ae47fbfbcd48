"""
summary_table.py
----------------
Stratified descriptive-statistics table ("Table 1").

``build_table`` summarises a fixed list of variables once per plan tier and
once over the whole dataset.  Each variable is one of three kinds:

  Categorical  — header row, then ``n (%)`` per observed level
  Binary       — single ``n (%)`` row for the positive level
  Continuous   — single ``median (Q1, Q3)`` row

Percentages use the group's *non-missing* count of that column as the
denominator.  If a column has any missing value in the dataset, a
``"<name> (Missing)"`` row follows, whose denominator is the group's full N.

Rounding is half-up on the decimal value (12.5 → 13, 3.25 → 3.3) for both
percentages and one-decimal statistics.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

import numpy as np
import pandas as pd

from errors import ConfigurationError

LABEL_COLUMN = "Variable"
EMPTY_STAT   = "-"
LEVEL_PREFIX = "- "


@dataclass(frozen=True)
class Categorical:
    name:   str
    column: str


@dataclass(frozen=True)
class Binary:
    name:     str
    column:   str
    positive: str = "Yes"


@dataclass(frozen=True)
class Continuous:
    name:   str
    column: str


Variable = Categorical | Binary | Continuous

_KINDS = {
    "categorical": Categorical,
    "binary":      Binary,
    "continuous":  Continuous,
}


@dataclass(frozen=True, eq=False)
class SummaryTable:
    """
    Result of ``build_table``.

    ``rows`` has a ``Variable`` label column followed by one column per
    group, keyed by the bare group name.  ``to_frame`` gives the
    presentation form with ``"<group> (N=<n>)"`` headers.
    """
    groups: tuple[str, ...]
    sizes:  dict[str, int]
    rows:   pd.DataFrame

    def header(self, group: str) -> str:
        return f"{group} (N={self.sizes[group]})"

    def to_frame(self) -> pd.DataFrame:
        return self.rows.rename(columns={g: self.header(g) for g in self.groups})


def parse_variables(entries) -> list[Variable]:
    """
    Turn ``(display name, column, kind)`` triples into variable records.

    Raises
    ------
    ConfigurationError
        If a kind is not one of categorical / binary / continuous.
    """
    variables = []
    for name, column, kind in entries:
        if kind not in _KINDS:
            raise ConfigurationError(
                f"Unknown variable kind {kind!r} for {name!r}; "
                f"expected one of {sorted(_KINDS)}"
            )
        variables.append(_KINDS[kind](name, column))
    return variables


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def fmt_n_pct(n: int, denom: int) -> str:
    """``n (p%)`` with p rounded to a whole percent; ``0 (0%)`` when denom is 0."""
    if denom == 0:
        return "0 (0%)"
    pct = _round_half_up(100 * n / denom, 0)
    return f"{int(n)} ({int(pct)}%)"


def fmt_median_iqr(values) -> str:
    """
    ``median (Q1, Q3)`` of the non-missing *values*, or ``"-"`` if none.

    Quartiles use linear interpolation between order statistics.  The three
    numbers share one format: whole numbers print bare (``12 (10, 14)``),
    otherwise all three get one decimal (``12.0 (10.5, 14.0)``).  Thousands
    are comma-separated.
    """
    x = pd.to_numeric(pd.Series(values), errors="coerce").dropna().to_numpy(dtype=float)
    if len(x) == 0:
        return EMPTY_STAT

    q1, q3 = np.quantile(x, [0.25, 0.75])
    stats  = [_round_half_up(v, 1) for v in (np.median(x), q1, q3)]
    stats  = [s.copy_abs() if s.is_zero() else s for s in stats]
    places = 0 if all(s == s.to_integral_value() for s in stats) else 1
    med, lo, hi = (f"{s:,.{places}f}" for s in stats)
    return f"{med} ({lo}, {hi})"


def _round_half_up(value: float, places: int) -> Decimal:
    step = Decimal(1).scaleb(-places)
    return Decimal(repr(float(value))).quantize(step, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def build_table(
    dataset:       pd.DataFrame,
    group_column:  str,
    overall_label: str,
    variable_spec: list[Variable],
) -> SummaryTable:
    """
    Build the stratified summary table.

    Parameters
    ----------
    dataset : pd.DataFrame
        Cleaned data; columns outside *variable_spec* are ignored.
    group_column : str
        Stratification column.  For a categorical column its declared
        categories are the groups (in order, even if unobserved); otherwise
        its sorted non-missing values.
    overall_label : str
        Name of the extra whole-dataset group, placed last.
    variable_spec : list[Variable]
        Rows of the table, in order.

    Returns
    -------
    SummaryTable

    Raises
    ------
    ConfigurationError
        If *group_column* or any variable column is absent, or the group
        column has no levels, or *overall_label* is also one of its levels.
    """
    if group_column not in dataset.columns:
        raise ConfigurationError(f"Stratification column {group_column!r} not found")
    absent = [v.column for v in variable_spec if v.column not in dataset.columns]
    if absent:
        raise ConfigurationError(f"Variable column(s) not found: {', '.join(absent)}")

    levels = _group_levels(dataset[group_column])
    if not levels:
        raise ConfigurationError(f"Stratification column {group_column!r} has no levels")
    if overall_label in map(str, levels):
        raise ConfigurationError(
            f"Overall label {overall_label!r} clashes with a level of {group_column!r}"
        )

    # rows with a missing / unknown group are only counted in Overall
    subsets = {str(lvl): dataset[dataset[group_column] == lvl] for lvl in levels}
    subsets[overall_label] = dataset
    sizes = {g: len(d) for g, d in subsets.items()}

    rows = []
    for var in variable_spec:
        rows.extend(_ROW_BUILDERS[type(var)](var, dataset, subsets))

    groups = tuple(subsets)
    frame  = pd.DataFrame(rows, columns=[LABEL_COLUMN, *groups])
    return SummaryTable(groups=groups, sizes=sizes, rows=frame)


def _categorical_rows(var: Categorical, dataset: pd.DataFrame, subsets: dict) -> list[list[str]]:
    rows = [[f"{var.name}, n (%)"] + [""] * len(subsets)]
    for level in _observed_levels(dataset[var.column]):
        row = [f"{LEVEL_PREFIX}{level}"]
        for d in subsets.values():
            col = d[var.column]
            row.append(fmt_n_pct(int((col == level).sum()), int(col.notna().sum())))
        rows.append(row)
    return rows + _missing_rows(var, dataset, subsets)


def _binary_rows(var: Binary, dataset: pd.DataFrame, subsets: dict) -> list[list[str]]:
    row = [f"{var.name}, n (%)"]
    for d in subsets.values():
        col = d[var.column]
        row.append(fmt_n_pct(int(_is_positive(col, var.positive).sum()), int(col.notna().sum())))
    return [row] + _missing_rows(var, dataset, subsets)


def _continuous_rows(var: Continuous, dataset: pd.DataFrame, subsets: dict) -> list[list[str]]:
    row = [f"{var.name}, median (IQR)"]
    row += [fmt_median_iqr(d[var.column]) for d in subsets.values()]
    return [row] + _missing_rows(var, dataset, subsets)


def _missing_rows(var: Variable, dataset: pd.DataFrame, subsets: dict) -> list[list[str]]:
    """One "(Missing)" row if the column has any missing value, else none."""
    if not dataset[var.column].isna().any():
        return []
    row = [f"{var.name} (Missing)"]
    row += [fmt_n_pct(int(d[var.column].isna().sum()), len(d)) for d in subsets.values()]
    return [row]


_ROW_BUILDERS = {
    Categorical: _categorical_rows,
    Binary:      _binary_rows,
    Continuous:  _continuous_rows,
}


def _group_levels(col: pd.Series) -> list:
    if isinstance(col.dtype, pd.CategoricalDtype):
        return list(col.cat.categories)
    return sorted(col.dropna().unique())


def _observed_levels(col: pd.Series) -> list:
    """Levels present in *col*: declared order for categoricals, sorted otherwise."""
    if isinstance(col.dtype, pd.CategoricalDtype):
        present = set(col.dropna().unique())
        return [c for c in col.cat.categories if c in present]
    return sorted(col.dropna().unique())


def _is_positive(col: pd.Series, positive) -> pd.Series:
    """Numeric or boolean 0/1 columns count 1 as positive for a label like ``"Yes"``."""
    if isinstance(positive, str) and (pd.api.types.is_numeric_dtype(col)
                                      or pd.api.types.is_bool_dtype(col)):
        return col == 1
    return col == positive
