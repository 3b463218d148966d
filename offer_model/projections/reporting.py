# offer_model/projections/reporting.py
"""
Reporting module for offer projections.
This module turns a CompensationProjection into tables, summary files and
charts. It uses the column names from offer_model.projections.schema so the
CSV, the printed table and the plots agree.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import yaml

# To prevent GUI errors on headless servers, and for consistency:
import matplotlib
matplotlib.use('Agg')  # Use a non-interactive backend
import matplotlib.pyplot as plt
import matplotlib.ticker as mtick

from offer_model.config.models import OfferConfig
from offer_model.projections import schema
from offer_model.projections.results import CompensationProjection
from offer_model.utils.formatting import format_currency, format_lakhs, format_percentage

logger = logging.getLogger(__name__)


def breakdown_to_frame(projection: CompensationProjection) -> pd.DataFrame:
    """Yearly breakdown as a DataFrame, one row per vesting year."""
    records = [row.model_dump() for row in projection.yearly_breakdown]
    df = pd.DataFrame.from_records(records, columns=schema.BREAKDOWN_COLUMNS)
    if df.empty:
        # Keep numeric dtypes so downstream sums and plots behave
        dtypes = {col: "float64" for col in schema.BREAKDOWN_COLUMNS}
        dtypes[schema.YEAR] = "int64"
        df = df.astype(dtypes)
    return df


def first_year_composition(projection: CompensationProjection) -> pd.Series:
    """Year-1 split between base, bonuses (incl. one-time) and vested stock."""
    first = projection.first_year
    return pd.Series(
        {
            schema.COMPOSITION_BASE: first.base,
            schema.COMPOSITION_BONUSES: first.bonus,
            schema.COMPOSITION_STOCKS: first.stocks,
        },
        name="first_year",
    )


def format_breakdown_table(df: pd.DataFrame) -> pd.DataFrame:
    """Currency columns rendered for display, labelled for humans."""
    display_cols = list(schema.DISPLAY_LABELS)
    table = df[display_cols].copy()
    for col in display_cols:
        if col != schema.YEAR:
            table[col] = table[col].map(format_currency)
    return table.rename(columns=schema.DISPLAY_LABELS)


def summary_dict(projection: CompensationProjection) -> Dict[str, Any]:
    """Headline metrics as plain Python types, suitable for YAML/JSON."""
    return {
        "vesting_years": projection.vesting_years,
        "first_year": projection.first_year.model_dump(),
        "hike_percentage": float(projection.hike_percentage),
        "current_total": float(projection.current_total),
        "stock_value_local": float(projection.stock_value_local),
        "vesting_total_percentage": float(projection.vesting_total_percentage),
        "vesting_is_valid": bool(projection.vesting_is_valid),
        "total_with_pf": float(projection.total_with_pf),
        "total_without_pf": float(projection.total_without_pf),
    }


def summary_lines(projection: CompensationProjection) -> List[str]:
    first = projection.first_year
    lines = [
        f"1st year compensation: {format_currency(first.total)}",
        f"  Base:    {format_currency(first.base)}",
        f"  Bonuses: {format_currency(first.bonus)}",
        f"  Stocks:  {format_currency(first.stocks)}",
        f"Salary hike vs current ({format_currency(projection.current_total)}): "
        f"{format_percentage(projection.hike_percentage)}",
        f"Total vesting: {format_percentage(projection.vesting_total_percentage)} / 100%",
    ]
    if projection.yearly_breakdown and not projection.vesting_is_valid:
        lines.append("WARNING: vesting schedule does not add up to 100%")
    return lines


def save_projection_results(
    output_path: Path,
    scenario_name: str,
    projection: CompensationProjection,
    config_to_save: Optional[OfferConfig] = None,
) -> Dict[str, Path]:
    """Save the yearly breakdown (CSV) and the summary (YAML) to ``output_path``."""
    logger.info(f"Saving results for '{scenario_name}' to {output_path}...")
    output_path.mkdir(parents=True, exist_ok=True)

    breakdown_path = output_path / f"{scenario_name}_yearly_breakdown.csv"
    summary_path = output_path / f"{scenario_name}_summary.yaml"

    summary = summary_dict(projection)
    if config_to_save is not None:
        summary["inputs"] = config_to_save.to_dict()

    try:
        breakdown_to_frame(projection).to_csv(breakdown_path, index=False)
        logger.info(f"Yearly breakdown saved to {breakdown_path}")

        with open(summary_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(summary, f, sort_keys=False)
        logger.info(f"Summary saved to {summary_path}")
    except Exception as e:
        logger.error(f"Error saving results for '{scenario_name}': {e}", exc_info=True)
        raise

    return {"breakdown": breakdown_path, "summary": summary_path}


def plot_projection_results(
    projection: CompensationProjection, output_dir: Path, scenario_name: str = "offer"
) -> List[Path]:
    """
    Plot a stacked bar chart of the yearly breakdown and a pie of the year-1
    composition. Returns the paths written; plotting errors are logged.
    """
    df = breakdown_to_frame(projection)
    if df.empty:
        logger.warning("Yearly breakdown is empty. Skipping plotting.")
        return []

    logger.info(f"Plotting projection results to {output_dir}...")
    output_dir.mkdir(parents=True, exist_ok=True)
    saved: List[Path] = []

    try:
        fig, ax = plt.subplots(figsize=(10, 6))
        bottom = np.zeros(len(df))
        labels = {
            schema.BASE: "Base",
            schema.BONUS: "Bonus",
            schema.STOCKS: "Stocks",
            schema.ONE_TIME: "One-time Bonus",
        }
        for col in schema.STACKED_COMPONENTS:
            ax.bar(
                df[schema.YEAR],
                df[col],
                bottom=bottom,
                label=labels[col],
                color=schema.COMPONENT_COLORS[col],
            )
            bottom = bottom + df[col].to_numpy()
        ax.set_xlabel('Year')
        ax.set_xticks(df[schema.YEAR].tolist())
        ax.yaxis.set_major_formatter(mtick.FuncFormatter(lambda v, _pos: format_lakhs(v)))
        ax.legend(loc='upper right')
        plt.title('Compensation Breakdown by Year')
        fig.tight_layout()
        bar_path = output_dir / f"{scenario_name}_yearly_breakdown.png"
        plt.savefig(bar_path)
        plt.close(fig)
        saved.append(bar_path)
        logger.info(f"Saved breakdown plot to {bar_path}")

        composition = first_year_composition(projection)
        if composition.sum() <= 0:
            logger.warning("First-year composition is all zero. Skipping composition plot.")
        else:
            fig_pie, ax_pie = plt.subplots(figsize=(7, 7))
            ax_pie.pie(
                composition.values,
                labels=composition.index.tolist(),
                colors=[schema.COMPONENT_COLORS[c] for c in (schema.BASE, schema.BONUS, schema.STOCKS)],
                autopct='%1.1f%%',
                startangle=90,
            )
            ax_pie.axis('equal')
            plt.title('First Year Composition')
            pie_path = output_dir / f"{scenario_name}_first_year_composition.png"
            plt.savefig(pie_path)
            plt.close(fig_pie)
            saved.append(pie_path)
            logger.info(f"Saved composition plot to {pie_path}")

    except Exception as e:
        logger.error(f"Error during plotting: {e}", exc_info=True)
        plt.close('all')

    return saved
