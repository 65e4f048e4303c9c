"""Unit tests for InProcessEventPublisher."""

import asyncio
from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from tenancy.domain.events import TenantProvisioned
from tenancy.infrastructure.event_publisher import InProcessEventPublisher
from tenancy.infrastructure.observability import EventPublisherProbe


@pytest.fixture
def mock_probe():
    return Mock(spec=EventPublisherProbe)


@pytest.fixture
def publisher(mock_probe):
    return InProcessEventPublisher(probe=mock_probe)


@pytest.fixture
def event():
    return TenantProvisioned(
        tenant_id="01JTENANT",
        organization_name="Acme Inc",
        admin_email="jane@acme.io",
        occurred_at=datetime.now(UTC),
    )


@pytest.mark.asyncio
async def test_publish_returns_before_handlers_finish(publisher, event):
    release = asyncio.Event()
    seen = []

    async def slow_handler(received):
        await release.wait()
        seen.append(received)

    publisher.subscribe(TenantProvisioned, slow_handler)

    publisher.publish(event)
    assert seen == []

    release.set()
    await publisher.drain()
    assert seen == [event]


@pytest.mark.asyncio
async def test_every_subscriber_receives_the_event(publisher, mock_probe, event):
    received = []

    async def first(e):
        received.append(("first", e))

    async def second(e):
        received.append(("second", e))

    publisher.subscribe(TenantProvisioned, first)
    publisher.subscribe(TenantProvisioned, second)

    publisher.publish(event)
    await publisher.drain()

    assert sorted(name for name, _ in received) == ["first", "second"]
    mock_probe.event_published.assert_called_once_with(
        event_type="TenantProvisioned", handler_count=2
    )


@pytest.mark.asyncio
async def test_failing_handler_is_isolated(publisher, mock_probe, event):
    received = []

    async def broken(e):
        raise RuntimeError("boom")

    async def healthy(e):
        received.append(e)

    publisher.subscribe(TenantProvisioned, broken)
    publisher.subscribe(TenantProvisioned, healthy)

    publisher.publish(event)
    await publisher.drain()

    assert received == [event]
    mock_probe.handler_failed.assert_called_once()
    assert mock_probe.handler_failed.call_args.kwargs["error"] == "boom"


@pytest.mark.asyncio
async def test_publish_without_subscribers(publisher, mock_probe, event):
    publisher.publish(event)
    await publisher.drain()

    mock_probe.event_published.assert_called_once_with(
        event_type="TenantProvisioned", handler_count=0
    )


@pytest.mark.asyncio
async def test_stop_cancels_pending_handlers(publisher, event):
    finished = []

    async def never_finishes(e):
        await asyncio.Event().wait()
        finished.append(e)

    publisher.subscribe(TenantProvisioned, never_finishes)
    publisher.publish(event)
    await asyncio.sleep(0)

    await publisher.stop()

    assert finished == []
