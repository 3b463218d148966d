# offer_model/projections/schema.py
"""Column constants for the tabular yearly breakdown and the first-year composition."""

from typing import Dict, List

YEAR = "year"
BASE = "base"
BONUS = "bonus"
STOCKS = "stocks"
ONE_TIME = "one_time"
STOCK_PERCENTAGE = "stock_percentage"
PF_COMPONENT = "pf_component"
TOTAL_WITHOUT_PF = "total_without_pf"
TOTAL_WITH_PF = "total_with_pf"
TOTAL = "total"

BREAKDOWN_COLUMNS: List[str] = [
    YEAR,
    BASE,
    BONUS,
    STOCKS,
    ONE_TIME,
    STOCK_PERCENTAGE,
    PF_COMPONENT,
    TOTAL_WITHOUT_PF,
    TOTAL_WITH_PF,
    TOTAL,
]

# Components stacked per year in the breakdown chart, bottom to top
STACKED_COMPONENTS: List[str] = [BASE, BONUS, STOCKS, ONE_TIME]

# Currency columns shown in the printed table, with their display labels
DISPLAY_LABELS: Dict[str, str] = {
    YEAR: "Year",
    BASE: "Base",
    BONUS: "Bonus",
    STOCKS: "Stocks",
    ONE_TIME: "One-time",
    TOTAL_WITHOUT_PF: "Total (excl. PF)",
    TOTAL_WITH_PF: "Total CTC",
}

COMPOSITION_BASE = "Base Salary"
COMPOSITION_BONUSES = "Bonuses"
COMPOSITION_STOCKS = "Stocks (Year 1)"

COMPONENT_COLORS: Dict[str, str] = {
    BASE: "#6366f1",
    BONUS: "#8b5cf6",
    STOCKS: "#ec4899",
    ONE_TIME: "#f43f5e",
}
