from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forum.database import get_db
from forum.repositories import CommentRepository, UserRepository


def get_user_store(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """
    Request-scoped ``UserStore`` bound to the pooled session from ``get_db``.

    Tests can swap the store for another implementation through
    ``app.dependency_overrides[get_user_store]``.
    """
    return UserRepository(db)


def get_comment_store(db: AsyncSession = Depends(get_db)) -> CommentRepository:
    return CommentRepository(db)
