from datetime import timedelta

import pytest

from kiosk_api.models import PercentileBreakpoints, PriceLabel
from kiosk_api.services import build_windows, classify

from .conftest import hourly_series, local

SERIES = [10, 10, 10, 40, 40, 15, 15, 15]


@pytest.fixture
def start():
    return local(2025, 10, 15, 0)


class TestBuildWindows:
    def test_runs_merge_into_windows(self, start):
        bp = PercentileBreakpoints(zone="J", p25=15.0, p50=20.0, p75=40.0, sample_size=8)
        windows = build_windows(hourly_series(start, SERIES), bp)

        assert [(w.label, w.duration_minutes, w.avg_price) for w in windows] == [
            (PriceLabel.GREAT, 180, 10.0),
            (PriceLabel.OKAY, 120, 40.0),
            (PriceLabel.GREAT, 180, 15.0),
        ]
        assert windows[0].start_time == start
        assert windows[0].end_time == start + timedelta(hours=2)
        assert windows[2].start_time == start + timedelta(hours=5)

    def test_labels_follow_price_ladder(self, start):
        bp = PercentileBreakpoints(zone="J", p25=12.0, p50=20.0, p75=35.0, sample_size=8)
        windows = build_windows(hourly_series(start, SERIES), bp)

        assert [w.label for w in windows] == [PriceLabel.GREAT, PriceLabel.AVOID, PriceLabel.GOOD]
        assert [w.percentile for w in windows] == [25, 100, 50]

    def test_windows_cover_every_observation_once(self, start):
        values = [31, 12, 55, 55, 8, 9, 40, 41, 22, 22, 22, 70]
        bp = PercentileBreakpoints(zone="J", p25=12.0, p50=22.0, p75=41.0, sample_size=12)
        observations = hourly_series(start, values)
        windows = build_windows(observations, bp)

        assert sum(w.duration_minutes for w in windows) == len(values) * 60
        for previous, following in zip(windows, windows[1:]):
            assert previous.label != following.label
            assert previous.end_time < following.start_time

        for window in windows:
            members = [o for o in observations
                       if window.start_time <= o.timestamp <= window.end_time]
            assert {classify(o.value, bp) for o in members} == {window.label}

    def test_average_is_left_unrounded(self, start):
        bp = PercentileBreakpoints(zone="J", p25=50.0, p50=60.0, p75=70.0, sample_size=3)
        windows = build_windows(hourly_series(start, [10.0, 10.0, 10.01]), bp)
        assert windows[0].avg_price == pytest.approx(30.01 / 3)

    def test_each_observation_counts_as_nominal_slot(self, start):
        bp = PercentileBreakpoints(zone="J", p25=50.0, p50=60.0, p75=70.0, sample_size=6)
        five_minute = hourly_series(start, [20] * 6, step_minutes=5)
        windows = build_windows(five_minute, bp)

        assert len(windows) == 1
        assert windows[0].duration_minutes == 360

    def test_single_observation(self, start):
        bp = PercentileBreakpoints(zone="J", p25=50.0, p50=60.0, p75=70.0, sample_size=1)
        windows = build_windows(hourly_series(start, [99]), bp)

        assert len(windows) == 1
        assert windows[0].start_time == windows[0].end_time
        assert windows[0].duration_minutes == 60

    def test_empty_series(self):
        bp = PercentileBreakpoints(zone="J", p25=1.0, p50=2.0, p75=3.0)
        assert build_windows([], bp) == []
