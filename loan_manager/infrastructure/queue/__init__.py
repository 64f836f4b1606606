"""Notification job queue (arq on Redis)."""

from .arq_queue import ArqNotificationQueue
from .manager import QueueManager, queue_manager, redis_settings_from

__all__ = [
    "ArqNotificationQueue",
    "QueueManager",
    "queue_manager",
    "redis_settings_from",
]
