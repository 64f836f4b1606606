"""
Integration tests for metrics tracking.

These tests verify:
1. Every service exposes /metrics in Prometheus format
2. Business counters move when payments, refunds and transitions happen
3. Notification counters track sends by channel and outcome
"""

import pytest
from httpx import AsyncClient

from loan_manager.core.metrics import REGISTRY


def sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


# =============================================================================
# Metrics Endpoint Tests
# =============================================================================

class TestMetricsEndpoint:
    """Tests for GET /metrics on each app."""

    @pytest.mark.asyncio
    async def test_lending_metrics(self, client: AsyncClient):
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "loans_application_transitions_total" in response.text

    @pytest.mark.asyncio
    async def test_notification_metrics(self, notification_client: AsyncClient):
        response = await notification_client.get("/metrics")

        assert response.status_code == 200
        assert "loans_notifications_total" in response.text

    @pytest.mark.asyncio
    async def test_payment_metrics(self, payment_client: AsyncClient):
        response = await payment_client.get("/metrics")

        assert response.status_code == 200
        assert "loans_payments_total" in response.text


# =============================================================================
# Counter Tests
# =============================================================================

class TestCounters:

    @pytest.mark.asyncio
    async def test_email_sent_counter(
        self,
        notification_client: AsyncClient,
        email_request: dict,
    ):
        before = sample("loans_notifications_total", channel="email", outcome="sent")

        await notification_client.post("/api/v1/notifications/email", json=email_request)

        assert sample("loans_notifications_total", channel="email", outcome="sent") == before + 1

    @pytest.mark.asyncio
    async def test_email_failure_counter(
        self,
        notification_client: AsyncClient,
        email_provider,
        email_request: dict,
    ):
        email_provider.fail_mode = True
        before = sample("loans_notifications_total", channel="email", outcome="failed")

        await notification_client.post("/api/v1/notifications/email", json=email_request)

        assert sample("loans_notifications_total", channel="email", outcome="failed") == before + 1

    @pytest.mark.asyncio
    async def test_offline_payment_counter(self, payment_client: AsyncClient):
        before = sample("loans_payments_total", method="cash", outcome="succeeded")

        await payment_client.post(
            "/api/v1/payments/process",
            json={"borrowerId": "b-1", "amount": 20, "paymentMethod": "cash"},
        )

        assert sample("loans_payments_total", method="cash", outcome="succeeded") == before + 1

    @pytest.mark.asyncio
    async def test_transition_counter(
        self,
        client: AsyncClient,
        application_request: dict,
    ):
        before = sample("loans_application_transitions_total", status="Rejected")

        created = await client.post("/api/v1/applications", json=application_request)
        await client.post(f"/api/v1/applications/{created.json()['data']['id']}/reject")

        assert sample("loans_application_transitions_total", status="Rejected") == before + 1
