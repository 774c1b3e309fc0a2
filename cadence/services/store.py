"""Persistence of per-user queue records."""

from cadence.core.errors import ConflictError, InternalError
from cadence.core.logging import log_database_operation
from cadence.models.queue import Queue
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError


class QueueStore:
    """Loads and saves the ``queues`` row of a user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _select(self, user_id: str) -> Queue | None:
        result = await self.db.execute(select(Queue).where(Queue.user_id == user_id))
        return result.scalar_one_or_none()

    async def load(self, user_id: str, create: bool = True) -> Queue | None:
        """Get the user's queue, creating an empty one when ``create`` is set."""
        try:
            queue = await self._select(user_id)
            if queue is not None or not create:
                return queue

            queue = Queue(user_id=user_id, queue_order=[], current_position=0)
            self.db.add(queue)
            try:
                await self.db.commit()
            except IntegrityError:
                # Another request created it first
                await self.db.rollback()
                return await self._select(user_id)
            log_database_operation("INSERT", table="queues", user_id=user_id)
            return queue
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise InternalError(f"Failed to load queue: {exc}") from exc

    async def save(self, queue: Queue) -> None:
        """Commit pending changes to ``queue``.

        Raises:
            ConflictError: the row changed since it was loaded
            InternalError: any other database failure
        """
        try:
            await self.db.commit()
        except StaleDataError as exc:
            await self.db.rollback()
            raise ConflictError() from exc
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise InternalError(f"Failed to save queue: {exc}") from exc
        log_database_operation("UPDATE", table="queues", user_id=queue.user_id, version=queue.version)
