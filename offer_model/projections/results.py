# offer_model/projections/results.py
"""
Result models produced by the offer calculator.

A ``CompensationProjection`` is a derived view: it is rebuilt from the
offer and the current package on every change and never mutated.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, computed_field


class YearlyCompensation(BaseModel):
    """One row of the year-by-year breakdown."""

    model_config = ConfigDict(frozen=True)

    year: int
    base: float
    bonus: float
    stocks: float
    one_time: float
    stock_percentage: float
    pf_component: float
    total_without_pf: float
    total_with_pf: float

    @computed_field
    @property
    def total(self) -> float:
        """Cost to company; always the PF-inclusive figure."""
        return self.total_with_pf


class FirstYearSummary(BaseModel):
    """Headline year-1 figures. ``bonus`` includes the one-time amounts."""

    model_config = ConfigDict(frozen=True)

    base: float = 0.0
    bonus: float = 0.0
    stocks: float = 0.0
    total: float = 0.0
    total_with_pf: float = 0.0
    total_without_pf: float = 0.0


class CompensationProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    yearly_breakdown: Tuple[YearlyCompensation, ...] = ()
    first_year: FirstYearSummary = FirstYearSummary()
    hike_percentage: float = 0.0
    vesting_total_percentage: float = 0.0
    vesting_is_valid: bool = False
    stock_value_local: float = 0.0
    current_total: float = 0.0

    @property
    def vesting_years(self) -> int:
        return len(self.yearly_breakdown)

    @property
    def total_with_pf(self) -> float:
        """Sum of PF-inclusive CTC across the whole vesting period."""
        return sum(row.total_with_pf for row in self.yearly_breakdown)

    @property
    def total_without_pf(self) -> float:
        return sum(row.total_without_pf for row in self.yearly_breakdown)
