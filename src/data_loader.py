"""
data_loader.py
--------------
Loads the subscription CSV, checks it against the declared schema in
``config.SCHEMA`` and converts every core column to its analysis type.

Columns outside the schema (``marketing_channel``, ``device_type``,
``income_band`` ... in the v3 file) are carried through untouched and never
inspected, so any dataset version with the core columns loads the same way.

Typical usage
-------------
    from data_loader import load_data, audit_nulls
    df = load_data("data/raw/st422_week3_subscription_v3.csv")
    audit_nulls(df)
"""

import os

import pandas as pd

import config
from errors import ConfigurationError

_MAX_SHOWN = 5   # offending values quoted in a schema error


def load_data(path: str = config.INPUT_FILE) -> pd.DataFrame:
    """
    Read, validate and clean the subscription dataset at *path*.

    Parameters
    ----------
    path : str
        CSV file with a header row.  Defaults to ``config.INPUT_FILE``.

    Returns
    -------
    pd.DataFrame
        The cleaned frame (see ``clean``), one row per customer.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ConfigurationError
        If a core column is missing or holds values of the wrong type.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Missing file: {path}\n"
            f"Set INPUT_FILE in config.py or pass --input to point at the CSV."
        )

    raw = pd.read_csv(path)
    validate_schema(raw)
    df = clean(raw)
    _print_summary(path, raw, df)
    return df


def validate_schema(df: pd.DataFrame, schema: dict[str, str] | None = None) -> None:
    """
    Fail fast if *df* does not satisfy *schema* (default ``config.SCHEMA``).

    Every schema column must be present, and every non-missing value must
    parse as the declared type.  Missing values are accepted everywhere.
    """
    schema = config.SCHEMA if schema is None else schema

    absent = [col for col in schema if col not in df.columns]
    if absent:
        raise ConfigurationError(f"Required column(s) not found: {', '.join(absent)}")

    for col, kind in schema.items():
        bad = _invalid_mask(df[col], kind)
        if bad.any():
            shown = df.loc[bad, col].astype(str).unique()[:_MAX_SHOWN]
            raise ConfigurationError(
                f"Column {col!r} expects {kind} values; "
                f"{int(bad.sum())} value(s) do not parse, e.g. {list(shown)}"
            )


def clean(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a typed copy of *df*.

    - dates parsed, numeric columns coerced (``customer_id`` as ``Int64``)
    - ``plan_type``: ordered categorical Basic < Standard < Premium; any
      other value becomes missing
    - ``churned_90d``: categorical No / Yes
    - ``region``: categorical with its observed levels, sorted
    """
    out = df.copy()

    for col, kind in config.SCHEMA.items():
        if kind == "numeric":
            out[col] = pd.to_numeric(out[col], errors="coerce")
        elif kind == "int":
            out[col] = pd.to_numeric(out[col], errors="coerce").astype("Int64")
        elif kind == "date":
            out[col] = pd.to_datetime(out[col], errors="coerce")
        elif kind == "binary":
            codes = pd.to_numeric(out[col], errors="coerce")
            out[col] = pd.Categorical(
                codes.map(config.CHURN_TABLE_LABELS),
                categories=list(config.CHURN_TABLE_LABELS.values()),
            )

    unknown = out[config.GROUP_COLUMN].notna() & ~out[config.GROUP_COLUMN].isin(config.PLAN_LEVELS)
    if unknown.any():
        print(f"  {int(unknown.sum())} row(s) with unrecognised {config.GROUP_COLUMN} "
              f"{sorted(out.loc[unknown, config.GROUP_COLUMN].astype(str).unique())} "
              f"-> treated as missing")
    out[config.GROUP_COLUMN] = pd.Categorical(
        out[config.GROUP_COLUMN].where(~unknown), categories=config.PLAN_LEVELS, ordered=True
    )
    out["region"] = out["region"].astype("category")
    return out


def audit_nulls(df: pd.DataFrame) -> None:
    """
    Print a per-column missing-value report for the core columns.

    Table 1 variables listed here also get a "(Missing)" row.
    """
    print("\n=== NULL AUDIT ===")
    nulls = df[list(config.SCHEMA)].isnull().sum()
    nulls = nulls[nulls > 0]
    if not len(nulls):
        print("  no missing values in core columns")
        return
    for col, n in nulls.items():
        print(f"  {col:<25} {n:>6} nulls ({n / len(df):.1%})")


def print_plan_summary(df: pd.DataFrame) -> None:
    """Print customer counts and 90-day churn rate per plan tier."""
    print("\n=== PLAN TIERS ===")
    churned = df[config.CHURN_COLUMN] == config.CHURN_TABLE_LABELS[1]
    known   = df[config.CHURN_COLUMN].notna()
    for level in config.PLAN_LEVELS:
        in_plan = df[config.GROUP_COLUMN] == level
        n       = int(in_plan.sum())
        n_known = int((in_plan & known).sum())
        rate    = (in_plan & churned).sum() / n_known if n_known else float("nan")
        print(f"  {level:<10} {n:>6}  churn {rate:.1%}")
    print(f"  {'(none)':<10} {int(df[config.GROUP_COLUMN].isna().sum()):>6}")


def _invalid_mask(series: pd.Series, kind: str) -> pd.Series:
    """True where a present value does not parse as *kind*."""
    present = series.notna()
    if kind == "category":
        return pd.Series(False, index=series.index)
    if kind == "date":
        parsed = pd.to_datetime(series, errors="coerce")
        return present & parsed.isna()

    parsed = pd.to_numeric(series, errors="coerce")
    bad = present & parsed.isna()
    if kind == "int":
        bad |= parsed.notna() & (parsed % 1 != 0)
    elif kind == "binary":
        bad |= parsed.notna() & ~parsed.isin([0, 1])
    elif kind != "numeric":
        raise ConfigurationError(f"Unknown schema type {kind!r} for column {series.name!r}")
    return bad


def _print_summary(path: str, raw: pd.DataFrame, df: pd.DataFrame) -> None:
    extra = [c for c in raw.columns if c not in config.SCHEMA]
    print(f"\nRead {os.path.basename(path)}: {df.shape[0]:,} rows x {df.shape[1]} cols")
    if extra:
        print(f"  ignoring {len(extra)} extra column(s): {', '.join(extra)}")
