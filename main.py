# main.py — subscription Table 1 + figures pipeline
#
# python main.py                                  # run everything
# python main.py --parts 2                        # Table 1 only
# python main.py --input data/raw/other.csv --output-dir out
#
# Set INPUT_FILE in config.py (or pass --input) before running.

import argparse
import os
import sys
import warnings

warnings.filterwarnings("ignore")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import matplotlib

matplotlib.use("Agg")

import config
import data_loader
import eda
import render
import summary_table
from errors import ConfigurationError


# ---------------------------------------------------------------------------
# Individual part runners
# ---------------------------------------------------------------------------

def run_part1(df) -> None:
    """Null audit and per-tier counts."""
    print("\n-- Part 1: Data Quality --")
    data_loader.audit_nulls(df)
    data_loader.print_plan_summary(df)


def run_part2(df, output_dir: str = config.OUTPUT_DIR) -> summary_table.SummaryTable:
    """Stratified Table 1, saved as PNG and CSV."""
    print("\n-- Part 2: Table 1 --")
    table = summary_table.build_table(
        df,
        group_column=config.GROUP_COLUMN,
        overall_label=config.OVERALL_LABEL,
        variable_spec=summary_table.parse_variables(config.TABLE_VARIABLES),
    )
    print(table.to_frame().to_string(index=False))

    table_dir = os.path.join(output_dir, config.TABLE_SUBDIR)
    render.save_table_png(table, os.path.join(table_dir, config.TABLE_PNG))
    render.save_table_csv(table, os.path.join(table_dir, config.TABLE_CSV))
    return table


def run_part3(df, output_dir: str = config.OUTPUT_DIR, source: str | None = None) -> None:
    """Figure 1 (NPS boxplot) and Figure 2 (churn stacked bar)."""
    print("\n-- Part 3: Figures --")
    fig_dir = os.path.join(output_dir, config.FIGURE_SUBDIR)
    eda.plot_nps_distribution(df, os.path.join(fig_dir, config.FIGURE_NPS), source=source)
    eda.plot_churn_by_plan(df, os.path.join(fig_dir, config.FIGURE_CHURN), source=source)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

PART_DESCRIPTIONS = {
    1: "Data Quality",
    2: "Table 1 (stratified summary)",
    3: "Figures",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Subscription dataset — stratified Table 1 and summary figures"
    )
    parser.add_argument(
        "--parts", nargs="*", type=int,
        default=sorted(PART_DESCRIPTIONS),
        help="Which parts to run (default: all).  Example: --parts 2 3"
    )
    parser.add_argument(
        "--input", type=str, default=config.INPUT_FILE,
        help=f"CSV file to read (default: {config.INPUT_FILE!r})"
    )
    parser.add_argument(
        "--output-dir", type=str, default=config.OUTPUT_DIR,
        help=f"Directory for tables/ and figures/ (default: {config.OUTPUT_DIR!r})"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args  = parse_args(argv)
    parts = set(args.parts) & set(PART_DESCRIPTIONS)

    print("Subscription Report")
    print(f"Running parts: {sorted(parts)}")
    print(f"Input file: {args.input!r}")

    try:
        df = data_loader.load_data(args.input)

        if 1 in parts:
            run_part1(df)

        if 2 in parts:
            run_part2(df, output_dir=args.output_dir)

        if 3 in parts:
            run_part3(df, output_dir=args.output_dir, source=args.input)
    except ConfigurationError as exc:
        print(f"\nConfiguration error: {exc}", file=sys.stderr)
        return 2

    print("\nPipeline complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
