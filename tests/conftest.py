import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

import config
import data_loader
import summary_table

REGIONS = ["London", "North", "Scotland", "Wales"]


def make_raw(n_basic: int = 30, n_standard: int = 30, n_premium: int = 40,
             nps_missing: int = 0) -> pd.DataFrame:
    """Raw (pre-``clean``) subscription frame, deterministic."""
    plans = ["Basic"] * n_basic + ["Standard"] * n_standard + ["Premium"] * n_premium
    n = len(plans)
    idx = np.arange(n)
    raw = pd.DataFrame({
        "customer_id":         idx + 1,
        "signup_date":         pd.date_range("2023-01-01", periods=n, freq="D").strftime("%Y-%m-%d"),
        "region":              [REGIONS[i % len(REGIONS)] for i in idx],
        "plan_type":           plans,
        "tenure_months":       (idx % 24) + 1,
        "monthly_fee_gbp":     np.round(5 + (idx % 7) * 2.5, 2),
        "support_tickets_90d": idx % 5,
        "last_login_days":     (idx * 3) % 60,
        "nps_score":           (idx % 11).astype(float),
        "churned_90d":         (idx % 4 == 0).astype(int),
    })
    if nps_missing:
        # spread across tiers: every tenth row
        step = n // nps_missing
        raw.loc[idx[::step][:nps_missing], "nps_score"] = np.nan
    return raw


@pytest.fixture
def raw_df() -> pd.DataFrame:
    return make_raw()


@pytest.fixture
def clean_df(raw_df) -> pd.DataFrame:
    return data_loader.clean(raw_df)


@pytest.fixture
def nps_missing_df() -> pd.DataFrame:
    return data_loader.clean(make_raw(nps_missing=10))


@pytest.fixture
def csv_path(tmp_path, raw_df):
    path = tmp_path / "subscriptions.csv"
    out = raw_df.copy()
    out["marketing_channel"] = "email"
    out.to_csv(path, index=False)
    return str(path)


@pytest.fixture
def variables():
    return summary_table.parse_variables(config.TABLE_VARIABLES)
