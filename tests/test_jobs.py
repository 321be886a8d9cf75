"""Tests for the snapshot report job."""

from unittest.mock import patch

import pytest

from watchconsole.jobs.snapshot_report import main, run_report


class TestRunReport:
    @pytest.mark.asyncio
    async def test_report_success(self, gateway):
        """Loads the snapshot through the configured gateway."""
        with patch("watchconsole.jobs.snapshot_report.HttpBackendGateway", return_value=gateway):
            result = await run_report()

        assert result is True
        assert sorted(gateway.lookups) == ["t1", "t3"]

    @pytest.mark.asyncio
    async def test_report_failure(self, gateway):
        """A failed listing makes the report fail."""
        gateway.failing_listings = {"accounts"}

        with patch("watchconsole.jobs.snapshot_report.HttpBackendGateway", return_value=gateway):
            result = await run_report()

        assert result is False


class TestMain:
    def test_main_exits_nonzero_on_failure(self, gateway):
        gateway.failing_listings = {"comments"}

        with (
            patch("watchconsole.jobs.snapshot_report.HttpBackendGateway", return_value=gateway),
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 1
