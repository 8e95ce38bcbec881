import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.exceptions import PersistenceError, UniqueViolationError
from forum.models import SubMembership, User

logger = logging.getLogger(__name__)


class UserRepository:
    """SQLAlchemy implementation of ``UserStore``."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert_user(self, user: User) -> int:
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            logger.info("Rejected duplicate username %r", user.username)
            raise UniqueViolationError(
                "A user with this username already exists",
                detail={"username": user.username},
            ) from exc
        except SQLAlchemyError as exc:
            logger.error("Inserting user %r failed: %s", user.username, exc)
            raise PersistenceError("Could not store user") from exc
        return user.id

    async def select_user_by_id(self, user_id: int) -> User | None:
        result = await self._execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def select_user_by_username(self, username: str) -> User | None:
        result = await self._execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def update_user_moderator_flag(self, user_id: int, is_moderator: bool) -> int:
        result = await self._execute(
            update(User).where(User.id == user_id).values(is_moderator=is_moderator)
        )
        return result.rowcount

    async def update_user_password_hash(self, user_id: int, password_hash: str) -> int:
        result = await self._execute(
            update(User).where(User.id == user_id).values(password_hash=password_hash)
        )
        return result.rowcount

    async def delete_user_by_id(self, user_id: int) -> int:
        result = await self._execute(delete(User).where(User.id == user_id))
        return result.rowcount

    async def insert_sub_membership(self, user_id: int, sub_name: str) -> int:
        try:
            result = await self.db.execute(
                insert(SubMembership).values(user_id=user_id, sub_name=sub_name)
            )
        except IntegrityError as exc:
            raise UniqueViolationError(
                "User is already a member of this sub",
                detail={"user_id": user_id, "sub_name": sub_name},
            ) from exc
        except SQLAlchemyError as exc:
            logger.error("Adding user %d to sub %r failed: %s", user_id, sub_name, exc)
            raise PersistenceError("Could not store sub membership") from exc
        return result.rowcount

    async def select_users_by_sub(self, sub_name: str) -> list[User]:
        q = (
            select(User)
            .join(SubMembership, SubMembership.user_id == User.id)
            .where(SubMembership.sub_name == sub_name)
            .order_by(User.username)
        )
        result = await self._execute(q)
        return list(result.scalars().all())

    async def _execute(self, statement):
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as exc:
            logger.error("User query failed: %s", exc)
            raise PersistenceError("User store is unavailable") from exc
