# offer_model/engines/calculator.py
"""
Offer calculator: turns an offer and the current package into a
year-by-year compensation projection.

The calculation is pure. Nothing is rounded here; currency and percentages
stay as floats until they are formatted for display.
"""

import logging
from functools import lru_cache
from typing import List, Tuple

from offer_model.config.models import CurrentCompensation, OfferSpec
from offer_model.engines.vesting import stock_percentage
from offer_model.projections.results import (
    CompensationProjection,
    FirstYearSummary,
    YearlyCompensation,
)

logger = logging.getLogger(__name__)
# Per-year rows go to the debug channel (debug_detail.log when --debug is on)
debug_logger = logging.getLogger("offer_model.debug")

# A schedule is valid when its percentages add up to 100 within this tolerance
VESTING_TOLERANCE = 0.01


def pf_component(base_salary: float, employer_pf_percentage: float, pf_included_in_base: bool) -> float:
    """
    Employer provident-fund contribution for the year.

    When PF is embedded in the base, the base is treated as basic + PF with
    PF = pct% of basic, so PF = base * pct / (100 + pct).
    """
    if pf_included_in_base:
        return base_salary * employer_pf_percentage / (100 + employer_pf_percentage)
    return base_salary * employer_pf_percentage / 100


def split_pf(gross: float, pf: float, pf_included_in_base: bool) -> Tuple[float, float]:
    """Return ``(total_with_pf, total_without_pf)`` for a year's gross pay."""
    if pf_included_in_base:
        return gross, gross - pf
    return gross + pf, gross


def calculate_offer(offer: OfferSpec, current: CurrentCompensation) -> CompensationProjection:
    """
    Project the offer over its vesting period and compare year 1 against
    the current package.

    A zero-year vesting period yields an empty breakdown and a zero
    first-year summary. A zero current package yields a 0% hike.
    """
    stock_value_local = offer.stock_value_local
    one_time_total = offer.one_time_total
    pf = pf_component(offer.base_salary, offer.employer_pf_percentage, offer.pf_included_in_base)

    yearly: List[YearlyCompensation] = []
    vesting_total = 0.0

    for year in range(1, offer.vesting_years + 1):
        pct = stock_percentage(offer.vesting, offer.vesting_years, year)
        vesting_total += pct

        bonus = offer.base_salary * offer.performance_bonus_percentage / 100
        stocks = stock_value_local * pct / 100
        one_time = one_time_total if year == 1 else 0.0

        gross = offer.base_salary + bonus + stocks + one_time
        total_with_pf, total_without_pf = split_pf(gross, pf, offer.pf_included_in_base)

        row = YearlyCompensation(
            year=year,
            base=offer.base_salary,
            bonus=bonus,
            stocks=stocks,
            one_time=one_time,
            stock_percentage=pct,
            pf_component=pf,
            total_without_pf=total_without_pf,
            total_with_pf=total_with_pf,
        )
        debug_logger.debug(f"[OFFER] Year {year}: {row.model_dump()}")
        yearly.append(row)

    vesting_is_valid = abs(vesting_total - 100) < VESTING_TOLERANCE
    if yearly and not vesting_is_valid:
        logger.warning(
            f"Vesting schedule totals {vesting_total:.2f}% over {offer.vesting_years} year(s), not 100%."
        )

    if yearly:
        first = yearly[0]
        first_year = FirstYearSummary(
            base=first.base,
            bonus=first.bonus + one_time_total,
            stocks=first.stocks,
            total=first.total_with_pf,
            total_with_pf=first.total_with_pf,
            total_without_pf=first.total_without_pf,
        )
    else:
        first_year = FirstYearSummary()

    current_total = current.total
    if current_total == 0:
        hike_percentage = 0.0
    else:
        hike_percentage = (first_year.total_with_pf - current_total) / current_total * 100

    return CompensationProjection(
        yearly_breakdown=tuple(yearly),
        first_year=first_year,
        hike_percentage=hike_percentage,
        vesting_total_percentage=vesting_total,
        vesting_is_valid=vesting_is_valid,
        stock_value_local=stock_value_local,
        current_total=current_total,
    )


@lru_cache(maxsize=256)
def calculate_offer_cached(offer: OfferSpec, current: CurrentCompensation) -> CompensationProjection:
    """``calculate_offer`` memoised on input equality (the models are frozen)."""
    return calculate_offer(offer, current)
