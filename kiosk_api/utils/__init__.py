"""
Utilities package for price feeds and time handling.
"""

from .feeds import NYISOPriceFeed, deduplicate, simulate_day

__all__ = ['NYISOPriceFeed', 'deduplicate', 'simulate_day']
