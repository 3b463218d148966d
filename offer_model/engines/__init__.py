"""
Engines package for the offer model.

This package contains the calculator and the vesting helpers it relies on.
"""

from .calculator import calculate_offer, calculate_offer_cached

__all__ = ["calculate_offer", "calculate_offer_cached"]
