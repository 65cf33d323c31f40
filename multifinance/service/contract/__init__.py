"""
Contract number generation for financed purchases.
"""

from .generator import Clock, ContractNumberGenerator, utc_now

__all__ = [
    "Clock",
    "ContractNumberGenerator",
    "utc_now",
]
