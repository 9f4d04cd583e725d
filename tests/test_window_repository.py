from datetime import timedelta

from kiosk_api.models import PriceLabel, PriceWindow

from .conftest import local


def hourly_windows(start, labels, zone="J"):
    """One 60-minute window per label, back to back from `start`."""
    return [
        PriceWindow(
            start_time=start + timedelta(hours=i),
            end_time=start + timedelta(hours=i),
            zone=zone,
            label=label,
            avg_price=20.0 + i,
            percentile=label.percentile,
            duration_minutes=60,
        )
        for i, label in enumerate(labels)
    ]


def windows_on(repository, year, month, day, zone="J"):
    return repository.find_starting_between(
        zone, local(year, month, day), local(year, month, day, 23, 59))


class TestReplaceWindows:
    def test_later_horizon_survives_refresh_of_today(self, window_repository, now):
        tomorrow = hourly_windows(local(2025, 10, 16, 1), [PriceLabel.GREAT, PriceLabel.AVOID])
        window_repository.replace_windows("J", tomorrow, now)

        today = hourly_windows(local(2025, 10, 15, 15), [PriceLabel.GOOD, PriceLabel.GREAT])
        window_repository.replace_windows("J", today, now)

        assert len(windows_on(window_repository, 2025, 10, 16)) == 2
        assert len(windows_on(window_repository, 2025, 10, 15)) == 2

    def test_same_horizon_is_replaced(self, window_repository, now):
        start = local(2025, 10, 15, 15)
        window_repository.replace_windows(
            "J", hourly_windows(start, [PriceLabel.GREAT, PriceLabel.GOOD, PriceLabel.OKAY]), now)
        window_repository.replace_windows("J", hourly_windows(start, [PriceLabel.AVOID]), now)

        stored = windows_on(window_repository, 2025, 10, 15)
        assert [w.label for w in stored] == [PriceLabel.AVOID]

    def test_windows_started_before_now_are_dropped(self, window_repository, now):
        window_repository.replace_windows(
            "J", hourly_windows(local(2025, 10, 15, 2), [PriceLabel.GREAT]), local(2025, 10, 15))
        window_repository.replace_windows(
            "J", hourly_windows(local(2025, 10, 15, 18), [PriceLabel.GOOD]), now)

        stored = windows_on(window_repository, 2025, 10, 15)
        assert [w.start_time for w in stored] == [local(2025, 10, 15, 18)]

    def test_other_zones_untouched(self, window_repository, now):
        start = local(2025, 10, 15, 15)
        window_repository.replace_windows("K", hourly_windows(start, [PriceLabel.GREAT], zone="K"), now)
        window_repository.replace_windows("J", hourly_windows(start, [PriceLabel.GOOD]), now)

        assert window_repository.count("K") == 1

    def test_average_rounded_on_store(self, window_repository, now):
        window = hourly_windows(local(2025, 10, 15, 15), [PriceLabel.GREAT])[0]
        window_repository.replace_windows("J", [window.model_copy(update={"avg_price": 12.3456})], now)

        assert windows_on(window_repository, 2025, 10, 15)[0].avg_price == 12.35
