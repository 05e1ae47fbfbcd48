import warnings

import numpy as np
import pandas as pd
import pytest

import config
import data_loader
from errors import ConfigurationError


def test_load_data_types_and_extra_columns(csv_path):
    df = data_loader.load_data(csv_path)

    assert len(df) == 100
    assert "marketing_channel" in df.columns
    assert list(df["plan_type"].cat.categories) == config.PLAN_LEVELS
    assert df["plan_type"].cat.ordered
    assert list(df["churned_90d"].cat.categories) == ["No", "Yes"]
    assert list(df["region"].cat.categories) == ["London", "North", "Scotland", "Wales"]
    assert pd.api.types.is_datetime64_any_dtype(df["signup_date"])
    assert str(df["customer_id"].dtype) == "Int64"


def test_load_data_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="nope.csv"):
        data_loader.load_data(str(tmp_path / "nope.csv"))


def test_validate_schema_missing_columns(raw_df):
    with pytest.raises(ConfigurationError, match="nps_score, churned_90d"):
        data_loader.validate_schema(raw_df.drop(columns=["nps_score", "churned_90d"]))


@pytest.mark.parametrize("column, value", [
    ("tenure_months", "twelve"),
    ("signup_date", "not a date"),
    ("churned_90d", 2),
    ("customer_id", 1.5),
])
def test_validate_schema_type_mismatch(raw_df, column, value):
    bad = raw_df.astype({column: object})
    bad.loc[3, column] = value
    with pytest.raises(ConfigurationError, match=column):
        data_loader.validate_schema(bad)


def test_validate_schema_allows_missing_values(raw_df):
    raw_df.loc[:9, ["nps_score", "monthly_fee_gbp"]] = np.nan
    raw_df.loc[5, "region"] = None
    data_loader.validate_schema(raw_df)


def test_clean_churn_labels(raw_df):
    raw_df["churned_90d"] = raw_df["churned_90d"].astype(float)
    raw_df.loc[2, "churned_90d"] = np.nan
    df = data_loader.clean(raw_df)

    assert df.loc[0, "churned_90d"] == "Yes"
    assert df.loc[1, "churned_90d"] == "No"
    assert pd.isna(df.loc[2, "churned_90d"])


def test_clean_unknown_plan_becomes_missing(raw_df, capsys):
    raw_df.loc[0, "plan_type"] = "Enterprise"
    df = data_loader.clean(raw_df)

    assert pd.isna(df.loc[0, "plan_type"])
    assert "Enterprise" in capsys.readouterr().out


def test_clean_unknown_plan_builds_categorical_without_warning(raw_df):
    raw_df.loc[[0, 40], "plan_type"] = ["Enterprise", "Trial"]
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        df = data_loader.clean(raw_df)

    assert not [w for w in caught if "categories" in str(w.message)]
    assert df["plan_type"].isna().sum() == 2
    assert list(df["plan_type"].cat.categories) == config.PLAN_LEVELS


def test_clean_does_not_mutate_input(raw_df):
    before = raw_df.copy()
    data_loader.clean(raw_df)
    pd.testing.assert_frame_equal(raw_df, before)


def test_audit_nulls_reports_missing_columns(nps_missing_df, capsys):
    data_loader.audit_nulls(nps_missing_df)
    out = capsys.readouterr().out
    assert "nps_score" in out
    assert "10.0%" in out
    assert "tenure_months" not in out


def test_print_plan_summary(clean_df, capsys):
    data_loader.print_plan_summary(clean_df)
    out = capsys.readouterr().out
    assert "Basic" in out and "Premium" in out
    assert "26.7%" in out   # 8 of 30 Basic customers churned
