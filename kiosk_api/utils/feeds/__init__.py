"""
Feeds package for upstream electricity price sources.
"""

from .nyiso_feed import NYISOPriceFeed, deduplicate
from .simulator import simulate_day

__all__ = ['NYISOPriceFeed', 'deduplicate', 'simulate_day']
