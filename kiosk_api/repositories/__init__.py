"""
Repository package for data access layer.
"""

from .base_repository import BaseRepository
from .price_repository import PriceRepository
from .window_repository import WindowRepository

__all__ = [
    "BaseRepository",
    "PriceRepository",
    "WindowRepository"
]
