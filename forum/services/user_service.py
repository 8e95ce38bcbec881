"""
User service — identity, credentials and the moderator flag.

Design notes
------------
- User ids are issued by the store on insert; the service never invents one.
- Passwords are hashed with a fresh salt on every create and every
  password change, so the same password never produces the same stored
  value twice.
- ``password_hash`` never leaves this module: every read is serialised
  through ``_user_to_dict``, which omits it.
- Granting/revoking moderator status and deleting users perform no
  authorization check. Callers must decide whether the requester may do
  this before calling in.
"""
import logging

from forum.exceptions import NotFoundError
from forum.models import User
from forum.repositories.base import UserStore
from forum.schemas import UserCreate
from forum.security import hash_password, verify_and_update

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "is_moderator": user.is_moderator,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def _user_not_found(**detail) -> NotFoundError:
    return NotFoundError("User not found", detail=detail)


async def _load_user(store: UserStore, user_id: int) -> User:
    user = await store.select_user_by_id(user_id)
    if user is None:
        raise _user_not_found(user_id=user_id)
    return user


def _require_affected(affected: int, user_id: int) -> int:
    if affected == 0:
        raise _user_not_found(user_id=user_id)
    return user_id


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def create_user(store: UserStore, data: UserCreate) -> int:
    """
    Hash the password, insert the user and return the store-issued id.

    Raises ``UniqueViolationError`` when the username is taken.
    """
    user = User(
        username=data.username,
        password_hash=hash_password(data.password),
        is_moderator=data.is_moderator,
    )
    user_id = await store.insert_user(user)
    logger.info("Created user %d (%s)", user_id, data.username)
    return user_id


async def get_user_by_id(store: UserStore, user_id: int) -> dict:
    return _user_to_dict(await _load_user(store, user_id))


async def get_user_by_username(store: UserStore, username: str) -> dict:
    user = await store.select_user_by_username(username)
    if user is None:
        raise _user_not_found(username=username)
    return _user_to_dict(user)


async def verify_password(store: UserStore, user_id: int, attempt: str) -> bool:
    """
    Return whether *attempt* matches the stored password of *user_id*.

    A wrong password is ``False``; a stored hash that cannot be parsed
    raises ``HashingError``. A match against a hash made with older cost
    parameters rewrites the stored hash with the current ones.
    """
    user = await _load_user(store, user_id)
    matched, new_hash = verify_and_update(attempt, user.password_hash)
    if new_hash is not None:
        await store.update_user_password_hash(user_id, new_hash)
        logger.info("Rehashed password for user %d with current parameters", user_id)
    return matched


async def username_exists(store: UserStore, username: str) -> bool:
    return await store.select_user_by_username(username) is not None


async def grant_moderator_status(store: UserStore, user_id: int) -> int:
    """Set the moderator flag. Granting twice leaves the user a moderator."""
    affected = await store.update_user_moderator_flag(user_id, True)
    _require_affected(affected, user_id)
    logger.info("Granted moderator status to user %d", user_id)
    return user_id


async def revoke_moderator_status(store: UserStore, user_id: int) -> int:
    affected = await store.update_user_moderator_flag(user_id, False)
    _require_affected(affected, user_id)
    logger.info("Revoked moderator status from user %d", user_id)
    return user_id


async def update_password(store: UserStore, user_id: int, new_password: str) -> int:
    affected = await store.update_user_password_hash(user_id, hash_password(new_password))
    _require_affected(affected, user_id)
    logger.info("Updated password for user %d", user_id)
    return user_id


async def delete_user(store: UserStore, user_id: int) -> int:
    """
    Delete the user row. Comments written by the user are left in place
    with a dangling ``user_id``.
    """
    affected = await store.delete_user_by_id(user_id)
    _require_affected(affected, user_id)
    logger.info("Deleted user %d", user_id)
    return user_id


async def join_sub(store: UserStore, user_id: int, sub_name: str) -> int:
    """
    Add *user_id* to the community *sub_name*.

    A sub has no row of its own and comes into being with its first
    member. Joining twice raises ``UniqueViolationError``.
    """
    await _load_user(store, user_id)
    await store.insert_sub_membership(user_id, sub_name)
    logger.info("User %d joined sub %s", user_id, sub_name)
    return user_id


async def get_users_by_sub(store: UserStore, sub_name: str) -> list[dict]:
    """Members of *sub_name* ordered by username; empty for an unknown sub."""
    return [_user_to_dict(user) for user in await store.select_users_by_sub(sub_name)]
