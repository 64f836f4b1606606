"""HTTP client for the notification service, used by the lending API."""

from datetime import date
from typing import Any, Dict, Optional

import httpx
import structlog

from loan_manager.domain.exceptions import NotificationDeliveryException
from loan_manager.domain.interfaces import NotificationServiceClient

logger = structlog.get_logger(__name__)


class HttpNotificationServiceClient(NotificationServiceClient):
    """
    Calls the notification service's JSON API.

    Any non-success envelope is raised as NotificationDeliveryException.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def send_email(self, to: str, subject: str, body: str) -> Dict[str, Any]:
        return await self._post(
            "/api/v1/notifications/email",
            {"to": to, "subject": subject, "body": body},
            "Failed to send email",
        )

    async def send_payment_reminder(
        self,
        borrower_name: str,
        borrower_email: str,
        due_amount: float,
        due_date: date,
        borrower_phone: Optional[str] = None,
        send_email: bool = True,
        send_sms: bool = False,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "borrowerName": borrower_name,
            "borrowerEmail": borrower_email,
            "dueAmount": due_amount,
            "dueDate": due_date.isoformat(),
            "sendEmail": send_email,
            "sendSMS": send_sms,
        }
        if borrower_phone:
            payload["borrowerPhone"] = borrower_phone

        return await self._post(
            "/api/v1/notifications/payment-reminder",
            payload,
            "Failed to send payment reminder",
        )

    async def _post(self, path: str, payload: Dict[str, Any], fallback_error: str) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(f"{self._base_url}{path}", json=payload)
        except httpx.HTTPError as e:
            logger.error("notification_service_unreachable", path=path, error=str(e))
            raise NotificationDeliveryException(str(e) or fallback_error) from e

        try:
            result = response.json()
        except ValueError:
            result = {}

        if response.status_code >= 400 or not result.get("success", False):
            error = result.get("error") or fallback_error
            if not isinstance(error, str):
                error = fallback_error
            logger.warning(
                "notification_service_error",
                path=path,
                status_code=response.status_code,
                error=error,
            )
            raise NotificationDeliveryException(error, status_code=response.status_code)

        return result
