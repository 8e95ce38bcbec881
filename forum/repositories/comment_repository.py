import logging
import uuid

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.database import AfterCommit, after_commit
from forum.exceptions import PersistenceError
from forum.models import Comment

logger = logging.getLogger(__name__)


class CommentRepository:
    """SQLAlchemy implementation of ``CommentStore``."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def after_commit(self, callback: AfterCommit) -> None:
        after_commit(self.db, callback)

    async def insert_comment(self, comment: Comment) -> int:
        self.db.add(comment)
        try:
            await self.db.flush()
        except SQLAlchemyError as exc:
            logger.error("Inserting comment %s failed: %s", comment.id, exc)
            raise PersistenceError("Could not store comment") from exc
        return 1

    async def select_comments_by_post_id(self, post_id: uuid.UUID) -> list[Comment]:
        q = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.timestamp.asc())
        )
        result = await self._execute(q)
        return list(result.scalars().all())

    async def update_comment_content(self, comment_id: uuid.UUID, content: str) -> int:
        result = await self._execute(
            update(Comment).where(Comment.id == comment_id).values(content=content)
        )
        return result.rowcount

    async def delete_comment_by_id(self, comment_id: uuid.UUID) -> int:
        result = await self._execute(delete(Comment).where(Comment.id == comment_id))
        return result.rowcount

    async def _execute(self, statement):
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as exc:
            logger.error("Comment query failed: %s", exc)
            raise PersistenceError("Comment store is unavailable") from exc
