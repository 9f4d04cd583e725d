"""
Merge a chronological price series into labeled windows.

Each observation counts as one nominal slot (60 minutes by default)
regardless of the real spacing between timestamps, so a 5-minute real-time
series yields the same durations per observation as an hourly one.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from ..models import PercentileBreakpoints, PriceLabel, PriceObservation, PriceWindow
from .percentile_classifier import classify

logger = logging.getLogger(__name__)


@dataclass
class _OpenWindow:
    zone: str
    label: PriceLabel
    start_time: datetime
    end_time: datetime
    values: List[float] = field(default_factory=list)

    def extend(self, observation: PriceObservation) -> None:
        self.end_time = observation.timestamp
        self.values.append(observation.value)

    def close(self, minutes_per_observation: int) -> PriceWindow:
        # avg_price stays unrounded here, rounding happens on persistence
        return PriceWindow(
            start_time=self.start_time,
            end_time=self.end_time,
            zone=self.zone,
            label=self.label,
            avg_price=sum(self.values) / len(self.values),
            percentile=self.label.percentile,
            duration_minutes=len(self.values) * minutes_per_observation,
        )


def build_windows(
    observations: Sequence[PriceObservation],
    breakpoints: PercentileBreakpoints,
    minutes_per_observation: int = 60
) -> List[PriceWindow]:
    """
    Single left-to-right scan that merges same-label neighbours.

    Args:
        observations: Price series sorted by timestamp ascending.
        breakpoints: Percentile breakpoints used to label every observation.
        minutes_per_observation: Nominal duration of one observation.

    Returns:
        List[PriceWindow]: Windows in chronological order.
    """
    windows: List[PriceWindow] = []
    current: Optional[_OpenWindow] = None

    for observation in observations:
        label = classify(observation.value, breakpoints)

        if current is None or current.label != label:
            if current is not None:
                windows.append(current.close(minutes_per_observation))
            current = _OpenWindow(
                zone=observation.zone,
                label=label,
                start_time=observation.timestamp,
                end_time=observation.timestamp,
                values=[observation.value],
            )
        else:
            current.extend(observation)

    if current is not None:
        windows.append(current.close(minutes_per_observation))

    logger.debug(f"Built {len(windows)} windows from {len(observations)} observations")
    return windows
