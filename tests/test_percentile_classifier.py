import random
from datetime import timedelta

import pytest

from kiosk_api.models import PercentileBreakpoints, PriceLabel
from kiosk_api.services import PercentileClassifier, breakpoints_from_sample, classify
from kiosk_api.services.percentile_classifier import nearest_rank

from .conftest import hourly_series, local


class TestNearestRank:
    def test_indexes_floor_of_n_times_q(self):
        values = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
        assert nearest_rank(values, 0.25) == 3
        assert nearest_rank(values, 0.50) == 6
        assert nearest_rank(values, 0.75) == 8

    def test_single_value_sample(self):
        assert nearest_rank([42.0], 0.75) == 42.0


class TestBreakpointsFromSample:
    def test_empty_sample_uses_fallback(self):
        bp = breakpoints_from_sample("NEW", [])
        assert (bp.p25, bp.p50, bp.p75) == (25.0, 35.0, 45.0)
        assert bp.is_fallback
        assert bp.sample_size == 0

    def test_unsorted_sample_is_sorted_first(self):
        bp = breakpoints_from_sample("J", [40, 10, 30, 20])
        assert (bp.p25, bp.p50, bp.p75) == (20.0, 30.0, 40.0)
        assert bp.sample_size == 4

    def test_breakpoints_are_monotonic(self):
        rng = random.Random(7)
        for _ in range(50):
            sample = [rng.uniform(-20, 200) for _ in range(rng.randint(1, 60))]
            bp = breakpoints_from_sample("J", sample)
            assert bp.p25 <= bp.p50 <= bp.p75


class TestClassify:
    @pytest.fixture
    def breakpoints(self):
        return PercentileBreakpoints(zone="J", p25=20.0, p50=30.0, p75=40.0)

    @pytest.mark.parametrize("price,label", [
        (5.0, PriceLabel.GREAT),
        (20.0, PriceLabel.GREAT),
        (25.0, PriceLabel.GOOD),
        (30.0, PriceLabel.GOOD),
        (40.0, PriceLabel.OKAY),
        (40.01, PriceLabel.AVOID),
    ])
    def test_ladder_with_ties_to_cheaper_label(self, breakpoints, price, label):
        assert classify(price, breakpoints) is label

    def test_label_is_monotonic_in_price(self, breakpoints):
        prices = [x / 2 for x in range(0, 120)]
        order = list(PriceLabel)
        ranks = [order.index(classify(p, breakpoints)) for p in prices]
        assert ranks == sorted(ranks)

    def test_collapsed_breakpoints(self):
        bp = PercentileBreakpoints(zone="J", p25=30.0, p50=30.0, p75=30.0)
        assert classify(30.0, bp) is PriceLabel.GREAT
        assert classify(30.5, bp) is PriceLabel.AVOID


class TestPercentileClassifier:
    def test_new_zone_gets_fallback_breakpoints(self, price_repository, now):
        classifier = PercentileClassifier(price_repository)
        bp = classifier.compute_breakpoints("K", now=now)
        assert (bp.p25, bp.p50, bp.p75) == (25.0, 35.0, 45.0)

    def test_lookback_excludes_old_prices(self, price_repository, now):
        recent = hourly_series(local(2025, 10, 14), [10, 20, 30, 40])
        stale = hourly_series(now - timedelta(days=45), [500, 600])
        price_repository.upsert_many(recent + stale)

        bp = PercentileClassifier(price_repository).compute_breakpoints("J", now=now)
        assert (bp.p25, bp.p50, bp.p75) == (20.0, 30.0, 40.0)
        assert bp.sample_size == 4

    def test_sample_spans_all_sources(self, price_repository, now):
        from kiosk_api.models import PriceSource

        start = local(2025, 10, 14)
        price_repository.upsert_many(
            hourly_series(start, [10, 20]) +
            hourly_series(start, [30, 40], source=PriceSource.REAL_TIME))

        bp = PercentileClassifier(price_repository).compute_breakpoints("J", now=now)
        assert bp.sample_size == 4

    def test_empty_zone_rejected(self, price_repository):
        with pytest.raises(ValueError):
            PercentileClassifier(price_repository).compute_breakpoints("")
