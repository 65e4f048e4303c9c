"""Unit tests for domain probes.

Tests that domain probes correctly capture domain events
following the Domain Oriented Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from infrastructure.observability import (
    DefaultConnectionProbe,
    DefaultStartupProbe,
    ObservationContext,
)
from tenancy.application.observability import DefaultOnboardingSagaProbe
from tenancy.infrastructure.observability import DefaultIdentityProviderProbe


class TestConnectionProbe:
    """Tests for ConnectionProbe protocol and implementation."""

    def test_default_probe_creates_with_default_logger(self):
        """Default probe should work without explicit logger."""
        probe = DefaultConnectionProbe()
        assert probe._logger is not None

    def test_engine_created_logs_info(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_created(connection_string="postgresql://u@h:5432/db", pool_size=5)

        mock_logger.info.assert_called_once_with(
            "database_engine_created",
            connection_string="postgresql://u@h:5432/db",
            pool_size=5,
        )


class TestStartupProbe:
    def test_context_is_merged_into_events(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultStartupProbe(logger=mock_logger).with_context(
            ObservationContext(request_id="req-1")
        )

        probe.background_worker_started(worker="alias_reservation_sweeper")

        mock_logger.info.assert_called_once_with(
            "background_worker_started",
            worker="alias_reservation_sweeper",
            request_id="req-1",
        )


class TestOnboardingSagaProbe:
    def test_step_failure_logs_warning_with_error_type(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultOnboardingSagaProbe(logger=mock_logger)

        probe.step_failed(step="create_tenant", alias="acme", error=KeyError("x"))

        mock_logger.warning.assert_called_once_with(
            "onboarding_step_failed",
            step="create_tenant",
            alias="acme",
            error="'x'",
            error_type="KeyError",
        )

    def test_compensation_failure_logs_error(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultOnboardingSagaProbe(logger=mock_logger)

        probe.compensation_action_failed(
            action="delete_organization", alias="acme", error=RuntimeError("down")
        )

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args == (
            "onboarding_compensation_action_failed",
        )

    def test_with_context_returns_new_probe(self):
        probe = DefaultOnboardingSagaProbe()
        context = ObservationContext(request_id="req-1")

        bound = probe.with_context(context)

        assert bound is not probe
        assert bound._context is context


class TestIdentityProviderProbe:
    def test_request_failure_never_logs_credentials(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultIdentityProviderProbe(logger=mock_logger)

        probe.request_failed(
            method="POST", path="/users", status_code=400, error="invalid email"
        )

        kwargs = mock_logger.mock_calls[0].kwargs
        assert kwargs["path"] == "/users"
        assert kwargs["status_code"] == 400
        assert "password" not in kwargs
