"""
Store contracts consumed by the user and comment services.

Any object with these coroutine methods can stand in for the SQLAlchemy
repositories. Implementations must raise ``UniqueViolationError`` for a
duplicate username and ``PersistenceError`` for every other store failure;
"no such row" is reported as ``None`` or an affected count of 0, never as
an exception.

Work done through a store becomes visible to other readers only when the
surrounding unit of work commits; side effects that must not run earlier
are queued with ``after_commit``.
"""
import uuid
from typing import Protocol

from forum.database import AfterCommit
from forum.models import Comment, User


class UserStore(Protocol):
    async def insert_user(self, user: User) -> int: ...

    async def select_user_by_id(self, user_id: int) -> User | None: ...

    async def select_user_by_username(self, username: str) -> User | None: ...

    async def update_user_moderator_flag(self, user_id: int, is_moderator: bool) -> int: ...

    async def update_user_password_hash(self, user_id: int, password_hash: str) -> int: ...

    async def delete_user_by_id(self, user_id: int) -> int: ...

    async def insert_sub_membership(self, user_id: int, sub_name: str) -> int: ...

    async def select_users_by_sub(self, sub_name: str) -> list[User]: ...


class CommentStore(Protocol):
    def after_commit(self, callback: AfterCommit) -> None:
        """Run *callback* once the current unit of work is committed."""

    async def insert_comment(self, comment: Comment) -> int: ...

    async def select_comments_by_post_id(self, post_id: uuid.UUID) -> list[Comment]: ...

    async def update_comment_content(self, comment_id: uuid.UUID, content: str) -> int: ...

    async def delete_comment_by_id(self, comment_id: uuid.UUID) -> int: ...
