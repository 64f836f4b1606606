"""SendGrid implementation of EmailProvider."""

import httpx
import structlog

from loan_manager.core.metrics import record_provider_failure, track_provider_latency
from loan_manager.domain.entities import DeliveryReceipt, EmailMessage
from loan_manager.domain.exceptions import ProviderException, ProviderNotConfiguredException
from loan_manager.domain.interfaces import EmailProvider

logger = structlog.get_logger(__name__)

PROVIDER = "sendgrid"


class SendGridEmailProvider(EmailProvider):
    """
    HTTP client for the SendGrid v3 Mail Send API.

    A single attempt per call; retries belong to the notification queue.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.sendgrid.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def send(self, message: EmailMessage) -> DeliveryReceipt:
        if not self.is_configured:
            record_provider_failure(PROVIDER, "not_configured")
            raise ProviderNotConfiguredException("SendGrid API key not configured", PROVIDER)

        payload = {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": message.from_email},
            "subject": message.subject,
            "content": [
                {"type": "text/plain", "value": message.body},
                {"type": "text/html", "value": message.html_content()},
            ],
        }

        try:
            with track_provider_latency(PROVIDER):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.post(
                        f"{self._base_url}/v3/mail/send",
                        json=payload,
                        headers={"Authorization": f"Bearer {self._api_key}"},
                    )
        except httpx.TimeoutException as e:
            record_provider_failure(PROVIDER, "timeout")
            raise ProviderException("SendGrid request timed out", PROVIDER) from e
        except httpx.HTTPError as e:
            record_provider_failure(PROVIDER, "error")
            raise ProviderException(str(e), PROVIDER) from e

        if response.status_code >= 400:
            record_provider_failure(PROVIDER, "error")
            raise ProviderException(
                self._error_message(response),
                PROVIDER,
                status_code=response.status_code,
            )

        message_id = response.headers.get("x-message-id")
        logger.info("sendgrid_accepted", message_id=message_id, status_code=response.status_code)

        return DeliveryReceipt(message_id=message_id)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            errors = response.json().get("errors") or []
        except ValueError:
            errors = []

        if errors:
            return "; ".join(e.get("message", "") for e in errors if isinstance(e, dict))
        return f"SendGrid returned HTTP {response.status_code}"
