# offer_model/engines/vesting.py
"""
Helpers for resolving and editing a stock grant's vesting schedule.

Edits never mutate an offer in place; they return a new ``OfferSpec``.
"""

import logging
from typing import Tuple

from offer_model.config.models import CustomVesting, EqualVesting, OfferSpec, VestingYear

logger = logging.getLogger(__name__)


def stock_percentage(vesting, vesting_years: int, year: int) -> float:
    """Percent of the grant that vests in ``year`` (1-indexed)."""
    if isinstance(vesting, EqualVesting):
        if vesting_years <= 0:
            return 0.0
        return 100.0 / vesting_years
    return vesting.percentage_for(year)


def equal_split_schedule(vesting_years: int) -> Tuple[VestingYear, ...]:
    """Custom schedule with the grant split evenly over ``vesting_years``."""
    if vesting_years <= 0:
        return ()
    share = 100.0 / vesting_years
    return tuple(VestingYear(year=year, percentage=share) for year in range(1, vesting_years + 1))


def set_vesting_percentage(offer: OfferSpec, year: int, percentage: float) -> OfferSpec:
    """
    Return a copy of ``offer`` in custom vesting mode with ``year`` set to
    ``percentage``. An offer still in equal mode starts from the equal split.
    """
    entry = VestingYear(year=year, percentage=percentage)

    if isinstance(offer.vesting, CustomVesting):
        schedule = list(offer.vesting.schedule)
    else:
        schedule = list(equal_split_schedule(offer.vesting_years))

    for idx, existing in enumerate(schedule):
        if existing.year == year:
            schedule[idx] = entry
            break
    else:
        schedule.append(entry)
        schedule.sort(key=lambda v: v.year)

    logger.debug(f"Vesting year {year} set to {percentage}%")
    return offer.model_copy(update={"vesting": CustomVesting(schedule=tuple(schedule))})


def with_vesting_years(offer: OfferSpec, vesting_years: int) -> OfferSpec:
    """
    Return a copy of ``offer`` with a new vesting period. A custom schedule
    is reseeded with an equal split over the new period.
    """
    if vesting_years < 0:
        raise ValueError(f"vesting_years must be non-negative, got {vesting_years}")

    update = {"vesting_years": vesting_years}
    if isinstance(offer.vesting, CustomVesting):
        update["vesting"] = CustomVesting(schedule=equal_split_schedule(vesting_years))
    return offer.model_copy(update=update)
