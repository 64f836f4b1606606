"""Legacy notification proxy kept for older front-end callers."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from loan_manager.core.dependencies import get_notification_service_client
from loan_manager.domain.exceptions import NotificationDeliveryException
from loan_manager.domain.interfaces import NotificationServiceClient
from loan_manager.presentation.schemas import LegacyNotifySchema

logger = structlog.get_logger(__name__)

notify_router = APIRouter()


@notify_router.post(
    "/api/notify",
    summary="Send Email (legacy)",
    description="Forward {to, subject, body} to the notification service.",
)
async def notify(
    request: LegacyNotifySchema,
    client: Annotated[NotificationServiceClient, Depends(get_notification_service_client)],
) -> JSONResponse:
    if not request.to or not request.subject or not request.body:
        return JSONResponse(status_code=400, content={"ok": False, "error": "Missing fields"})

    try:
        result = await client.send_email(request.to, request.subject, request.body)
    except NotificationDeliveryException as e:
        logger.error("legacy_notify_failed", to=request.to, error=e.message)
        return JSONResponse(status_code=500, content={"ok": False, "error": e.message})

    return JSONResponse(content={"ok": True, "messageId": result.get("messageId")})
