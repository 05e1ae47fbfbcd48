"""
config.py
---------
Single source of truth for every project-level constant.
Edit INPUT_FILE before running to point at a different dataset version
(v1 / v2 / v3 all share the same core columns).
"""

import os

INPUT_FILE = os.path.join("data", "raw", "st422_week3_subscription_v3.csv")
OUTPUT_DIR = "outputs"   # tables/ and figures/ are created underneath
TABLE_SUBDIR  = "tables"
FIGURE_SUBDIR = "figures"

TABLE_PNG     = "table1.png"
TABLE_CSV     = "table1.csv"
FIGURE_NPS    = "figure1_nps_boxplot.jpg"
FIGURE_CHURN  = "figure2_churn_barplot.jpg"

# Stratification: plan tier in its meaningful order
GROUP_COLUMN  = "plan_type"
PLAN_LEVELS   = ["Basic", "Standard", "Premium"]
OVERALL_LABEL = "Overall"

# churned_90d is stored as 0/1; the table and the figures use different labels
CHURN_COLUMN       = "churned_90d"
CHURN_TABLE_LABELS = {0: "No", 1: "Yes"}
CHURN_PLOT_LABELS  = {0: "Retained", 1: "Churned"}

# Declared type of every core column.  Anything else in the file is ignored.
SCHEMA = {
    "customer_id":         "int",
    "signup_date":         "date",
    "region":              "category",
    "plan_type":           "category",
    "tenure_months":       "numeric",
    "monthly_fee_gbp":     "numeric",
    "support_tickets_90d": "numeric",
    "last_login_days":     "numeric",
    "nps_score":           "numeric",
    "churned_90d":         "binary",
}

# Table 1 rows, in display order: (display name, column, kind)
TABLE_VARIABLES = [
    ("Region",                "region",              "categorical"),
    ("Churned (90d)",         "churned_90d",         "binary"),
    ("Tenure (months)",       "tenure_months",       "continuous"),
    ("Monthly Fee (GBP)",     "monthly_fee_gbp",     "continuous"),
    ("NPS Score",             "nps_score",           "continuous"),
    ("Support Tickets (90d)", "support_tickets_90d", "continuous"),
    ("Last Login (days)",     "last_login_days",     "continuous"),
]

TABLE_CAPTION  = "Table 1. Customer characteristics by plan type (stratified)"
TABLE_FOOTNOTE = (
    "Note. Values are n (%) for categorical variables and median (IQR) for "
    "continuous variables. Missing values are reported explicitly if present."
)

TEAL  = "#028090"
NAVY  = "#1E2761"
CORAL = "#E15759"
BLUE  = "#4E79A7"
GRAY  = "#333333"
LIGHT = "#EEF2F7"

# One fill per plan tier (boxplot) and per churn status (stacked bar)
PLAN_COLORS  = {"Basic": "#66C2A5", "Standard": "#FC8D62", "Premium": "#8DA0CB"}
CHURN_COLORS = {"Retained": BLUE, "Churned": CORAL}

PLOT_STYLE = {
    "figure.facecolor":  "white",
    "axes.facecolor":    "white",
    "axes.spines.top":   False,
    "axes.spines.right": False,
    "axes.grid":         True,
    "grid.alpha":        0.3,
    "font.size":         14,
}

FIGURE_SIZE = (8, 6)
DPI = 300
RANDOM_STATE = 42   # jitter seed, keeps figures reproducible
