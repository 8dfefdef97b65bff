"""Tests for bootstrapping through the gate."""

from __future__ import annotations

import asyncio
import os
from typing import Any
from unittest.mock import patch

import pytest

from initgate.bootstrap import bootstrap, create_reporter
from initgate.config_schema import GateSettings
from initgate.exceptions import GateTimeoutError
from initgate.registry import InitializerRegistry


class TestBootstrap:
    """Test the bootstrap entry point."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.settings = GateSettings(app_name="billing", wait_timeout=1.0)

    @pytest.mark.asyncio
    async def test_returns_opened_gate(self) -> None:
        """Test bootstrap waits for every initializer."""
        loaded: list[str] = []

        async def load_config() -> None:
            await asyncio.sleep(0.01)
            loaded.append("config")

        async def warm_cache() -> Any:
            for key in ("a", "b"):
                loaded.append(key)
                yield key

        gate = await bootstrap([lambda: 42, load_config, warm_cache], settings=self.settings)

        assert gate.finished is True
        assert gate.app_name == "billing"
        assert sorted(loaded) == ["a", "b", "config"]

    @pytest.mark.asyncio
    async def test_uses_app_registry_by_default(self) -> None:
        """Test bootstrap falls back to APP_INITIALIZERS."""
        registry = InitializerRegistry("app")
        calls: list[str] = []
        registry.register(lambda: calls.append("called"))

        with patch("initgate.bootstrap.APP_INITIALIZERS", registry):
            gate = await bootstrap(settings=self.settings)

        assert calls == ["called"]
        assert gate.finished is True

    @pytest.mark.asyncio
    async def test_async_failure_reraised(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the first failing initializer's exception reaches the caller."""

        async def migrate() -> None:
            msg = "schema mismatch"
            raise RuntimeError(msg)

        with pytest.raises(RuntimeError, match="schema mismatch"):
            await bootstrap([migrate], settings=self.settings)

        assert any(
            "Initialization of billing failed" in r.getMessage() for r in caplog.records
        )

    @pytest.mark.asyncio
    async def test_sync_failure_reraised(self) -> None:
        """Test an initializer raising on invocation propagates unchanged."""

        def broken() -> None:
            msg = "missing setting"
            raise KeyError(msg)

        with pytest.raises(KeyError):
            await bootstrap([broken], settings=self.settings)

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test a hung initializer surfaces as GateTimeoutError."""
        never = asyncio.get_running_loop().create_future()

        def hang() -> Any:
            return never

        settings = GateSettings(wait_timeout=0.01)
        with pytest.raises(GateTimeoutError) as exc_info:
            await bootstrap([hang], settings=settings)

        assert exc_info.value.details["timeout"] == 0.01
        assert "hang" in exc_info.value.pending[0]
        never.cancel()

    @pytest.mark.asyncio
    async def test_progress_printed_when_enabled(self, capsys) -> None:  # noqa: ANN001
        """Test report_progress prints progress and a summary."""
        settings = GateSettings(app_name="billing", report_progress=True)

        await bootstrap([lambda: None], settings=settings)

        out = capsys.readouterr().out
        assert "Initializing" in out
        assert "Initialization Summary:" in out

    def test_create_reporter_log_only_by_default(self) -> None:
        """Test no output stream unless progress reporting is enabled."""
        reporter = create_reporter(GateSettings())

        assert reporter.output is None

    @pytest.mark.asyncio
    async def test_invalid_environment_settings(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test bad INITGATE_* values are reported per field before anything runs."""
        calls: list[str] = []

        with (
            patch.dict(os.environ, {"INITGATE_WAIT_TIMEOUT": "-1"}, clear=True),
            pytest.raises(ValueError, match="Settings validation failed"),
        ):
            await bootstrap([lambda: calls.append("called")])

        assert calls == []
        assert any(
            "wait_timeout" in r.getMessage() for r in caplog.records if r.levelname == "ERROR"
        )

    @pytest.mark.asyncio
    async def test_settings_loaded_from_environment(self) -> None:
        """Test bootstrap reads settings from the environment when none are given."""
        with (
            patch.dict(os.environ, {"INITGATE_APP_NAME": "ledger"}, clear=True),
            patch("initgate.bootstrap.setup_logging") as mock_setup_logging,
        ):
            gate = await bootstrap([lambda: None])

        assert gate.app_name == "ledger"
        mock_setup_logging.assert_called_once()
        assert mock_setup_logging.call_args[0][0].app_name == "ledger"

    @pytest.mark.asyncio
    async def test_logging_configured_from_settings(self) -> None:
        """Test bootstrap applies the logging configuration it was given."""
        with patch("initgate.bootstrap.setup_logging") as mock_setup_logging:
            await bootstrap([lambda: None], settings=self.settings)

        mock_setup_logging.assert_called_once_with(self.settings)
