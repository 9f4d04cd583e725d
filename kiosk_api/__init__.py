"""
Household kiosk electricity API.

Ingests zonal electricity prices, labels them into percentile windows and
recommends when to run household appliances.
"""

__version__ = "1.0.0"
