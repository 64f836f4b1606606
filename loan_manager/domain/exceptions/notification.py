"""Notification domain exceptions."""

from .base import DomainException


class NotificationQueueException(DomainException):
    """Raised when a notification job cannot be enqueued."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="NOTIFICATION_QUEUE_ERROR",
        )


class NotificationDeliveryException(DomainException):
    """Raised when the notification service rejects or fails a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="NOTIFICATION_DELIVERY_ERROR",
        )
        self.status_code = status_code
