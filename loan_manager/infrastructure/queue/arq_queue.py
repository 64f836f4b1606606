"""arq implementation of NotificationQueue."""

from arq.connections import ArqRedis
from redis.exceptions import RedisError
import structlog

from loan_manager.core.metrics import record_notification_job
from loan_manager.domain.entities import EmailMessage, JobKind, NotificationJob, SmsMessage
from loan_manager.domain.exceptions import NotificationQueueException
from loan_manager.domain.interfaces import NotificationQueue

logger = structlog.get_logger(__name__)


class ArqNotificationQueue(NotificationQueue):
    """
    Enqueues notification jobs onto Redis for the arq worker.

    The worker enforces the attempt limit and backoff; see loan_manager.worker.
    """

    def __init__(
        self,
        pool: ArqRedis,
        queue_name: str,
        max_attempts: int = 3,
        backoff_seconds: float = 2.0,
    ):
        self._pool = pool
        self._queue_name = queue_name
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds

    async def enqueue_email(self, message: EmailMessage) -> NotificationJob:
        return await self._enqueue(JobKind.SEND_EMAIL, message.to_payload())

    async def enqueue_sms(self, message: SmsMessage) -> NotificationJob:
        return await self._enqueue(JobKind.SEND_SMS, message.to_payload())

    async def _enqueue(self, kind: JobKind, payload: dict) -> NotificationJob:
        try:
            job = await self._pool.enqueue_job(
                kind.value,
                payload,
                _queue_name=self._queue_name,
            )
        except (RedisError, OSError) as e:
            logger.error("notification_enqueue_failed", kind=kind.value, error=str(e))
            raise NotificationQueueException(f"Failed to queue notification: {e}") from e

        if job is None:
            raise NotificationQueueException("Failed to queue notification: duplicate job id")

        record_notification_job(kind.value, "queued")
        logger.info("notification_job_queued", job_id=job.job_id, kind=kind.value)

        return NotificationJob(
            id=job.job_id,
            kind=kind,
            max_attempts=self._max_attempts,
            backoff_seconds=self._backoff_seconds,
        )
