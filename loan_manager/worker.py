"""
arq worker for queued notifications.

Run with:  arq loan_manager.worker.WorkerSettings

Each job gets up to NOTIFICATION_JOB_MAX_ATTEMPTS tries. A failed try is
re-queued after backoff * 2^(try - 1) seconds; the last failure is final.
"""

from typing import Any, Dict

import structlog
from arq.worker import Retry, func

from loan_manager.application.services import NotificationService
from loan_manager.core.config import settings
from loan_manager.core.dependencies import build_email_provider, build_sms_provider
from loan_manager.core.logging import setup_logging
from loan_manager.core.metrics import record_notification_job
from loan_manager.domain.entities import (
    EmailMessage,
    JobKind,
    JobStatus,
    NotificationJob,
    SmsMessage,
)
from loan_manager.domain.exceptions import DomainException
from loan_manager.infrastructure.queue import redis_settings_from

logger = structlog.get_logger(__name__)


async def startup(ctx: Dict[str, Any]) -> None:
    setup_logging()
    ctx["notification_service"] = NotificationService(
        email_provider=build_email_provider(settings),
        sms_provider=build_sms_provider(settings),
        from_email=settings.from_email,
    )
    logger.info("notification_worker_started", queue=settings.notification_queue_name)


async def shutdown(ctx: Dict[str, Any]) -> None:
    logger.info("notification_worker_stopped")


def _job(ctx: Dict[str, Any], kind: JobKind) -> NotificationJob:
    job = NotificationJob(
        id=ctx.get("job_id", ""),
        kind=kind,
        max_attempts=settings.notification_job_max_attempts,
        backoff_seconds=settings.notification_job_backoff_seconds,
    )
    job.mark_active(ctx.get("job_try", 1))
    return job


async def _run(job: NotificationJob, send) -> Dict[str, Any]:
    log = logger.bind(job_id=job.id, kind=job.kind.value, attempt=job.attempt)

    try:
        receipt = await send()
    except DomainException as e:
        job.mark_failed(e.message)

        if job.status == JobStatus.RETRYING:
            delay = job.retry_delay()
            record_notification_job(job.kind.value, "retrying")
            log.warning("notification_job_failed", error=e.message, retry_in=delay)
            raise Retry(defer=delay) from e

        record_notification_job(job.kind.value, "failed")
        log.error("notification_job_exhausted", error=e.message, max_attempts=job.max_attempts)
        raise

    job.mark_completed()
    record_notification_job(job.kind.value, "completed")
    log.info("notification_job_completed", message_id=receipt.message_id)
    return receipt.to_dict()


async def send_email_job(ctx: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
    service: NotificationService = ctx["notification_service"]
    message = EmailMessage(**payload)
    return await _run(_job(ctx, JobKind.SEND_EMAIL), lambda: service.send_email(message))


async def send_sms_job(ctx: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
    service: NotificationService = ctx["notification_service"]
    message = SmsMessage(**payload)
    return await _run(_job(ctx, JobKind.SEND_SMS), lambda: service.send_sms(message))


class WorkerSettings:
    functions = [
        func(
            send_email_job,
            name=JobKind.SEND_EMAIL.value,
            max_tries=settings.notification_job_max_attempts,
        ),
        func(
            send_sms_job,
            name=JobKind.SEND_SMS.value,
            max_tries=settings.notification_job_max_attempts,
        ),
    ]
    queue_name = settings.notification_queue_name
    redis_settings = redis_settings_from(settings)
    on_startup = startup
    on_shutdown = shutdown
