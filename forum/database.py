from collections.abc import AsyncIterator, Awaitable, Callable

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from forum.config import settings
from forum.middleware import install_query_counter

# Bounded pool: at most DB_POOL_SIZE + DB_MAX_OVERFLOW connections are open,
# and a request waits up to DB_POOL_TIMEOUT seconds for one to free up.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
)

install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


# Coroutine callbacks queued on a session, run once its transaction commits.
AfterCommit = Callable[[], Awaitable[None]]


def after_commit(session: AsyncSession, callback: AfterCommit) -> None:
    session.info.setdefault("after_commit", []).append(callback)


async def commit(session: AsyncSession) -> None:
    """
    Commit *session*, then run the callbacks queued with ``after_commit``.

    Cache invalidation goes through here so that a concurrent reader can
    never repopulate the cache from rows that are not yet committed.
    """
    await session.commit()
    for callback in session.info.pop("after_commit", []):
        await callback()


async def rollback(session: AsyncSession) -> None:
    session.info.pop("after_commit", None)
    await session.rollback()


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Request-scoped session dependency.

    The connection goes back to the pool when the ``async with`` block
    exits, whether the handler returned normally or raised.
    """
    async with async_session() as session:
        try:
            yield session
            await commit(session)
        except Exception:
            await rollback(session)
            raise
