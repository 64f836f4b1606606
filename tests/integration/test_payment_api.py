"""
Integration tests for the Payment API endpoints.

These tests verify:
1. POST /api/v1/payments/process - card/ACH via the gateway, cash/check offline
2. POST /api/v1/payments/validate - errors and warnings
3. POST /api/v1/payments/refund - full and partial refunds
4. POST /api/v1/payments/create-intent and GET /api/v1/payments/{id}
"""

import re
from datetime import date, timedelta

import pytest
from httpx import AsyncClient


# =============================================================================
# POST /api/v1/payments/process Tests
# =============================================================================

class TestProcessPayment:
    """Tests for POST /api/v1/payments/process."""

    @pytest.mark.asyncio
    async def test_card_payment_confirms_intent(
        self,
        payment_client: AsyncClient,
        payment_gateway,
    ):
        response = await payment_client.post(
            "/api/v1/payments/process",
            json={
                "borrowerId": "b-1",
                "amount": 19.99,
                "paymentMethod": "card",
                "paymentMethodId": "pm_card_visa",
                "metadata": {"loan": "42"},
            },
        )

        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["paymentId"] == "pi_test_1"
        assert data["transactionId"] == "pi_test_1"
        assert data["status"] == "succeeded"
        assert data["amount"] == 19.99
        assert data["method"] == "card"

        intent = payment_gateway.intents["pi_test_1"]
        assert intent.amount == 1999
        assert intent.metadata == {"loan": "42", "borrowerId": "b-1"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["cash", "check"])
    async def test_offline_payment_never_calls_gateway(
        self,
        payment_client: AsyncClient,
        payment_gateway,
        method: str,
    ):
        response = await payment_client.post(
            "/api/v1/payments/process",
            json={"borrowerId": "b-1", "amount": 50, "paymentMethod": method},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "succeeded"
        assert re.fullmatch(r"offline_\d+_[0-9a-z]{9}", data["paymentId"])
        assert data.get("transactionId") is None
        assert payment_gateway.call_count == 0

    @pytest.mark.asyncio
    async def test_card_without_method_id_rejected(
        self,
        payment_client: AsyncClient,
        payment_gateway,
    ):
        response = await payment_client.post(
            "/api/v1/payments/process",
            json={"borrowerId": "b-1", "amount": 50, "paymentMethod": "card"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert payment_gateway.call_count == 0

    @pytest.mark.asyncio
    async def test_unknown_method_rejected(self, payment_client: AsyncClient):
        response = await payment_client.post(
            "/api/v1/payments/process",
            json={"borrowerId": "b-1", "amount": 50, "paymentMethod": "bitcoin"},
        )

        assert response.status_code == 400
        assert response.json()["error"][0]["field"] == "paymentMethod"

    @pytest.mark.asyncio
    async def test_declined_card(
        self,
        payment_client: AsyncClient,
        payment_gateway,
    ):
        payment_gateway.fail_mode = True

        response = await payment_client.post(
            "/api/v1/payments/process",
            json={
                "borrowerId": "b-1",
                "amount": 50,
                "paymentMethod": "ach",
                "paymentMethodId": "pm_bank",
            },
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Payment processing failed: Your card was declined."


# =============================================================================
# POST /api/v1/payments/validate Tests
# =============================================================================

class TestValidatePayment:
    """Tests for POST /api/v1/payments/validate."""

    @pytest.mark.asyncio
    async def test_valid_payment(self, payment_client: AsyncClient):
        response = await payment_client.post(
            "/api/v1/payments/validate",
            json={"borrowerId": "b-1", "amount": 100, "dueAmount": 100},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "isValid": True,
            "errors": [],
            "warnings": [],
        }

    @pytest.mark.asyncio
    async def test_non_positive_amount_is_an_error(self, payment_client: AsyncClient):
        response = await payment_client.post(
            "/api/v1/payments/validate",
            json={"borrowerId": "b-1", "amount": -5, "dueAmount": 100},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["isValid"] is False
        assert data["errors"] == ["Payment amount must be greater than zero"]

    @pytest.mark.asyncio
    async def test_overpayment_and_future_date_warn(self, payment_client: AsyncClient):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()

        response = await payment_client.post(
            "/api/v1/payments/validate",
            json={
                "borrowerId": "b-1",
                "amount": 111,
                "dueAmount": 100,
                "paymentDate": tomorrow,
            },
        )

        data = response.json()
        assert data["isValid"] is True
        assert data["warnings"] == [
            "Payment amount exceeds due amount by more than 10%",
            "Payment date is in the future",
        ]


# =============================================================================
# POST /api/v1/payments/refund Tests
# =============================================================================

class TestRefund:
    """Tests for POST /api/v1/payments/refund."""

    async def _pay(self, payment_client: AsyncClient) -> str:
        response = await payment_client.post(
            "/api/v1/payments/process",
            json={
                "borrowerId": "b-1",
                "amount": 100,
                "paymentMethod": "card",
                "paymentMethodId": "pm_card_visa",
            },
        )
        return response.json()["paymentId"]

    @pytest.mark.asyncio
    async def test_full_refund(self, payment_client: AsyncClient):
        payment_id = await self._pay(payment_client)

        response = await payment_client.post(
            "/api/v1/payments/refund",
            json={"paymentId": payment_id, "reason": "requested_by_customer"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["refundId"] == "re_test_1"
        assert data["amount"] == 100.0
        assert data["status"] == "succeeded"

    @pytest.mark.asyncio
    async def test_partial_refund(
        self,
        payment_client: AsyncClient,
        payment_gateway,
    ):
        payment_id = await self._pay(payment_client)

        response = await payment_client.post(
            "/api/v1/payments/refund",
            json={"paymentId": payment_id, "amount": 25.5},
        )

        assert response.status_code == 200
        assert response.json()["amount"] == 25.5
        assert payment_gateway.refunds[0].amount == 2550

    @pytest.mark.asyncio
    async def test_unknown_payment_is_404(self, payment_client: AsyncClient):
        response = await payment_client.post(
            "/api/v1/payments/refund",
            json={"paymentId": "pi_missing"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Payment not found"

    @pytest.mark.asyncio
    async def test_invalid_reason_rejected(self, payment_client: AsyncClient):
        response = await payment_client.post(
            "/api/v1/payments/refund",
            json={"paymentId": "pi_1", "reason": "changed_my_mind"},
        )

        assert response.status_code == 400


# =============================================================================
# Intent and Lookup Tests
# =============================================================================

class TestIntentsAndLookup:

    @pytest.mark.asyncio
    async def test_create_intent(
        self,
        payment_client: AsyncClient,
        payment_gateway,
    ):
        response = await payment_client.post(
            "/api/v1/payments/create-intent",
            json={"amount": 10.1, "borrowerId": "b-9"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["paymentIntentId"] == "pi_test_1"
        assert data["clientSecret"] == "pi_test_1_secret_abc"
        assert data["amount"] == 10.1

        intent = payment_gateway.intents["pi_test_1"]
        assert intent.amount == 1010
        assert intent.status == "requires_payment_method"
        assert intent.metadata == {"borrowerId": "b-9"}

    @pytest.mark.asyncio
    async def test_get_payment(self, payment_client: AsyncClient):
        await payment_client.post(
            "/api/v1/payments/create-intent",
            json={"amount": 12.34, "borrowerId": "b-9", "currency": "eur"},
        )

        response = await payment_client.get("/api/v1/payments/pi_test_1")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == "pi_test_1"
        assert data["amount"] == 12.34
        assert data["currency"] == "eur"
        assert data["created"].startswith("2025-01-15T12:00:00")

    @pytest.mark.asyncio
    async def test_get_missing_payment(self, payment_client: AsyncClient):
        response = await payment_client.get("/api/v1/payments/pi_nope")

        assert response.status_code == 404
        assert response.json()["code"] == "PAYMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_history_stub(self, payment_client: AsyncClient):
        response = await payment_client.get("/api/v1/payments/history/b-1")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "History feature coming soon",
            "borrowerId": "b-1",
            "data": [],
        }
