import os

import matplotlib.pyplot as plt
import numpy as np

import data_loader
import eda
from conftest import make_raw

JPEG_MAGIC = b"\xff\xd8"


def _is_jpeg(path) -> bool:
    with open(path, "rb") as fh:
        return fh.read(2) == JPEG_MAGIC


def test_nps_boxplot_saved(tmp_path, nps_missing_df):
    path = eda.plot_nps_distribution(nps_missing_df, str(tmp_path / "figures" / "nps.jpg"),
                                     source="data/raw/subscriptions.csv")
    assert os.path.exists(path)
    assert _is_jpeg(path)
    assert plt.get_fignums() == []


def test_churn_barplot_saved(tmp_path, clean_df):
    path = eda.plot_churn_by_plan(clean_df, str(tmp_path / "churn.jpg"))
    assert _is_jpeg(path)
    assert plt.get_fignums() == []


def test_figures_tolerate_empty_tier_and_missing_values(tmp_path):
    raw = make_raw(n_premium=0, nps_missing=6)
    raw["churned_90d"] = raw["churned_90d"].astype(float)
    raw.loc[:4, "churned_90d"] = np.nan
    df = data_loader.clean(raw)

    assert _is_jpeg(eda.plot_nps_distribution(df, str(tmp_path / "nps.jpg")))
    assert _is_jpeg(eda.plot_churn_by_plan(df, str(tmp_path / "churn.jpg")))
