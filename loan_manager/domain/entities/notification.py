"""Notification messages and queued job entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"


class JobKind(str, Enum):
    """Queue function names for deferred notifications."""

    SEND_EMAIL = "send-email"
    SEND_SMS = "send-sms"


class JobStatus(str, Enum):
    QUEUED = "queued"
    ACTIVE = "active"
    COMPLETED = "completed"
    RETRYING = "retrying"
    FAILED = "failed"


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str
    html: Optional[str] = None
    from_email: Optional[str] = None

    def html_content(self) -> str:
        """HTML part; falls back to the plain body with line breaks."""
        if self.html:
            return self.html
        return self.body.replace("\n", "<br>")

    def to_payload(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "subject": self.subject,
            "body": self.body,
            "html": self.html,
            "from_email": self.from_email,
        }


@dataclass(frozen=True)
class SmsMessage:
    to: str
    message: str

    def to_payload(self) -> dict[str, Any]:
        return {"to": self.to, "message": self.message}


@dataclass(frozen=True)
class DeliveryReceipt:
    """Result of a single email or SMS hand-off to a provider."""

    message_id: Optional[str]
    sent_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "sent_at": self.sent_at.isoformat() + "Z",
        }


@dataclass
class NotificationJob:
    """
    A deferred notification tracked through its queue lifecycle.

    queued -> active -> completed
                     -> retrying -> active ...
                     -> failed (attempts exhausted)
    """

    id: str
    kind: JobKind
    attempt: int = 0
    max_attempts: int = 3
    backoff_seconds: float = 2.0
    status: JobStatus = JobStatus.QUEUED
    last_error: Optional[str] = None

    def mark_active(self, attempt: int) -> None:
        self.status = JobStatus.ACTIVE
        self.attempt = attempt

    def mark_completed(self) -> None:
        self.status = JobStatus.COMPLETED
        self.last_error = None

    def mark_failed(self, error: str) -> None:
        """Record a failed attempt; the job retries while attempts remain."""
        self.last_error = error
        if self.attempt >= self.max_attempts:
            self.status = JobStatus.FAILED
        else:
            self.status = JobStatus.RETRYING

    @property
    def is_terminal(self) -> bool:
        return self.status in (JobStatus.COMPLETED, JobStatus.FAILED)

    def retry_delay(self) -> float:
        """Seconds to wait before the next attempt (exponential, base 2)."""
        return self.backoff_seconds * 2 ** (self.attempt - 1)
