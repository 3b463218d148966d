"""Job offer compensation projection."""

from offer_model.config.models import (
    CurrentCompensation,
    CustomVesting,
    EqualVesting,
    OfferSpec,
    VestingYear,
)
from offer_model.engines.calculator import calculate_offer, calculate_offer_cached
from offer_model.projections.results import (
    CompensationProjection,
    FirstYearSummary,
    YearlyCompensation,
)

__all__ = [
    'CompensationProjection',
    'CurrentCompensation',
    'CustomVesting',
    'EqualVesting',
    'FirstYearSummary',
    'OfferSpec',
    'VestingYear',
    'YearlyCompensation',
    'calculate_offer',
    'calculate_offer_cached',
]
