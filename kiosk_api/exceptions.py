"""
Exception types shared by the feed, store and service layers.
"""


class KioskError(Exception):
    """Base class for application errors."""


class SourceUnavailableError(KioskError):
    """Upstream price feed could not be reached or returned no usable rows."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source} source unavailable: {message}")


class SourceFormatError(KioskError):
    """Upstream payload is missing the columns required to read prices."""


class StoreError(KioskError):
    """Read or write against the persisted store failed."""
