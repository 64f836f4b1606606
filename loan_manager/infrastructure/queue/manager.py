"""Redis connection pool for the notification queue."""

from arq import create_pool
from arq.connections import ArqRedis, RedisSettings

from loan_manager.core.config import Settings, settings
from loan_manager.domain.exceptions import NotificationQueueException


def redis_settings_from(config: Settings) -> RedisSettings:
    return RedisSettings(
        host=config.redis_host,
        port=config.redis_port,
        password=config.redis_password,
    )


class QueueManager:
    """Owns the arq Redis pool shared by the notification routes."""

    def __init__(self):
        self._pool: ArqRedis | None = None

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> ArqRedis:
        if self._pool is None:
            raise NotificationQueueException("Notification queue not initialized")
        return self._pool

    async def init(self, config: Settings | None = None) -> None:
        config = config or settings
        self._pool = await create_pool(
            redis_settings_from(config),
            default_queue_name=config.notification_queue_name,
        )

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.aclose()
            self._pool = None


queue_manager = QueueManager()
