from datetime import date

import kiosk_api.services as services
from kiosk_api.exceptions import SourceUnavailableError
from kiosk_api.models import IngestResponse, Percentiles, PriceSource
from kiosk_api.utils import run_ingestion


class FakeIngestionService:
    calls = []
    fail = False

    def __init__(self, config=None):
        self.config = config

    def run_ingestion(self, zone=None, trading_day=None):
        FakeIngestionService.calls.append((zone, trading_day, self.config.feed.simulate_on_failure))
        if FakeIngestionService.fail:
            raise SourceUnavailableError("all", "offline")
        return IngestResponse(
            success=True, prices=24, windows=5,
            percentiles=Percentiles(p25=25, p50=35, p75=45),
            data_source=PriceSource.SIMULATED)


class TestRunIngestion:
    def setup_method(self):
        FakeIngestionService.calls = []
        FakeIngestionService.fail = False

    def test_parse_args(self):
        args = run_ingestion.parse_args(["--zone", "K", "--date", "2025-10-18", "--no-simulate"])
        assert args.zone == "K"
        assert args.trading_day == date(2025, 10, 18)
        assert args.no_simulate is True

    def test_prints_stats(self, monkeypatch, capsys):
        monkeypatch.setattr(services, "PriceIngestionService", FakeIngestionService)

        assert run_ingestion.main(["--zone", "J"]) == 0
        assert "Windows built: 5" in capsys.readouterr().out
        assert FakeIngestionService.calls == [("J", None, True)]

    def test_failure_exit_code(self, monkeypatch, capsys):
        monkeypatch.setattr(services, "PriceIngestionService", FakeIngestionService)
        FakeIngestionService.fail = True

        assert run_ingestion.main(["--no-simulate"]) == 1
        assert FakeIngestionService.calls[0][2] is False
        assert "unavailable" in capsys.readouterr().out
