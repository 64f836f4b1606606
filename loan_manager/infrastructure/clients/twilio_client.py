"""Twilio implementation of SmsProvider."""

import httpx
import structlog

from loan_manager.core.metrics import record_provider_failure, track_provider_latency
from loan_manager.domain.entities import DeliveryReceipt, SmsMessage
from loan_manager.domain.exceptions import ProviderException, ProviderNotConfiguredException
from loan_manager.domain.interfaces import SmsProvider

logger = structlog.get_logger(__name__)

PROVIDER = "twilio"


class TwilioSmsProvider(SmsProvider):
    """HTTP client for the Twilio Programmable Messaging REST API."""

    def __init__(
        self,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str | None,
        base_url: str = "https://api.twilio.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._account_sid and self._auth_token and self._from_number)

    async def send(self, message: SmsMessage) -> DeliveryReceipt:
        if not self.is_configured:
            record_provider_failure(PROVIDER, "not_configured")
            raise ProviderNotConfiguredException("Twilio not configured", PROVIDER)

        url = f"{self._base_url}/2010-04-01/Accounts/{self._account_sid}/Messages.json"
        form = {
            "To": message.to,
            "From": self._from_number,
            "Body": message.message,
        }

        try:
            with track_provider_latency(PROVIDER):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.post(
                        url,
                        data=form,
                        auth=(self._account_sid, self._auth_token),
                    )
        except httpx.TimeoutException as e:
            record_provider_failure(PROVIDER, "timeout")
            raise ProviderException("Twilio request timed out", PROVIDER) from e
        except httpx.HTTPError as e:
            record_provider_failure(PROVIDER, "error")
            raise ProviderException(str(e), PROVIDER) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code >= 400:
            record_provider_failure(PROVIDER, "error")
            raise ProviderException(
                data.get("message") or f"Twilio returned HTTP {response.status_code}",
                PROVIDER,
                status_code=response.status_code,
                error_code=str(data["code"]) if data.get("code") is not None else None,
            )

        logger.info("twilio_accepted", message_sid=data.get("sid"), status=data.get("status"))

        return DeliveryReceipt(message_id=data.get("sid"))
