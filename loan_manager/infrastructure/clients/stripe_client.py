"""Stripe implementation of PaymentGateway."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
import structlog

from loan_manager.core.metrics import record_provider_failure, track_provider_latency
from loan_manager.domain.entities import PaymentIntent, Refund
from loan_manager.domain.exceptions import ProviderException, ProviderNotConfiguredException
from loan_manager.domain.interfaces import PaymentGateway

logger = structlog.get_logger(__name__)

PROVIDER = "stripe"
RESOURCE_MISSING = "resource_missing"


class StripePaymentGateway(PaymentGateway):
    """
    HTTP client for the Stripe REST API.

    Requests are form-encoded and authenticated with the secret key.
    Only PaymentIntents and Refunds are used.
    """

    def __init__(
        self,
        secret_key: str | None,
        base_url: str = "https://api.stripe.com",
        api_version: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._secret_key = secret_key
        self._base_url = base_url.rstrip("/")
        self._api_version = api_version
        self._timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: Dict[str, str],
        payment_method_id: Optional[str] = None,
        confirm: bool = False,
        description: Optional[str] = None,
    ) -> PaymentIntent:
        form: Dict[str, Any] = {"amount": amount, "currency": currency}
        if payment_method_id:
            form["payment_method"] = payment_method_id
        if confirm:
            form["confirm"] = "true"
        if description:
            form["description"] = description
        form.update(self._encode_metadata(metadata))

        data = await self._request("POST", "/v1/payment_intents", data=form)
        intent = self._parse_intent(data)

        logger.info("stripe_intent_created", payment_intent_id=intent.id, status=intent.status)
        return intent

    async def retrieve_payment_intent(self, payment_intent_id: str) -> Optional[PaymentIntent]:
        try:
            path = f"/v1/payment_intents/{quote(payment_intent_id, safe='')}"
            data = await self._request("GET", path)
        except ProviderException as e:
            if e.error_code == RESOURCE_MISSING:
                return None
            raise

        return self._parse_intent(data)

    async def create_refund(
        self,
        payment_intent_id: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> Refund:
        form: Dict[str, Any] = {"payment_intent": payment_intent_id}
        if amount is not None:
            form["amount"] = amount
        if reason:
            form["reason"] = reason

        data = await self._request("POST", "/v1/refunds", data=form)

        logger.info("stripe_refund_created", refund_id=data.get("id"), status=data.get("status"))
        return Refund(
            id=data["id"],
            amount=data["amount"],
            status=data.get("status", ""),
            payment_intent_id=data.get("payment_intent"),
        )

    async def _request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if not self.is_configured:
            record_provider_failure(PROVIDER, "not_configured")
            raise ProviderNotConfiguredException("Stripe is not configured", PROVIDER)

        headers = {}
        if self._api_version:
            headers["Stripe-Version"] = self._api_version

        try:
            with track_provider_latency(PROVIDER):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.request(
                        method,
                        f"{self._base_url}{path}",
                        data=data,
                        headers=headers,
                        auth=(self._secret_key, ""),
                    )
        except httpx.TimeoutException as e:
            record_provider_failure(PROVIDER, "timeout")
            raise ProviderException("Stripe request timed out", PROVIDER) from e
        except httpx.HTTPError as e:
            record_provider_failure(PROVIDER, "error")
            raise ProviderException(str(e), PROVIDER) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            error = body.get("error") or {}
            if error.get("code") != RESOURCE_MISSING:
                record_provider_failure(PROVIDER, "error")
            raise ProviderException(
                error.get("message") or f"Stripe returned HTTP {response.status_code}",
                PROVIDER,
                status_code=response.status_code,
                error_code=error.get("code"),
            )

        return body

    @staticmethod
    def _encode_metadata(metadata: Dict[str, str]) -> Dict[str, str]:
        return {f"metadata[{key}]": str(value) for key, value in metadata.items()}

    @staticmethod
    def _parse_intent(data: Dict[str, Any]) -> PaymentIntent:
        created = data.get("created")
        return PaymentIntent(
            id=data["id"],
            amount=data["amount"],
            currency=data.get("currency", ""),
            status=data.get("status", ""),
            client_secret=data.get("client_secret"),
            metadata=dict(data.get("metadata") or {}),
            created=datetime.fromtimestamp(created, tz=timezone.utc) if created else None,
        )
