"""Request-scoped sessions and the transaction decorator."""

from typing import AsyncGenerator, Callable, Optional, TypeVar
import inspect
import logging
from functools import wraps

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import get_session

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request, rolled back on error."""
    async with get_session() as session:
        try:
            yield session
        except SQLAlchemyError:
            logger.exception("Database error occurred")
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            raise


def _is_session_annotation(annotation) -> bool:
    return annotation is AsyncSession or AsyncSession in getattr(annotation, "__args__", ())


def _locate_session_param(func: Callable, db_param_name: Optional[str]):
    """Return (position, name) of the session parameter, or (None, None)."""
    for position, (name, param) in enumerate(inspect.signature(func).parameters.items()):
        if db_param_name is not None:
            if name == db_param_name:
                if not _is_session_annotation(param.annotation):
                    logger.warning(f"'{name}' in '{func.__name__}' is not annotated as AsyncSession")
                return position, name
        elif _is_session_annotation(param.annotation):
            return position, name

    logger.warning(f"No session parameter found on '{func.__name__}'")
    return None, None


def db_transaction(db_param_name: Optional[str] = None) -> Callable:
    """Commit the session when the wrapped coroutine returns, roll back when it raises.

    The session is the parameter named ``db_param_name`` or, without a name,
    the first one annotated as AsyncSession. Works on route handlers (session
    passed by keyword) and on service methods (session passed positionally).

    Raises:
        ValueError: If the call carries no session
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        position, name = _locate_session_param(func, db_param_name)

        @wraps(func)
        async def wrapper(*args, **kwargs):
            if position is not None and len(args) > position:
                db = args[position]
            elif name is not None and name in kwargs:
                db = kwargs[name]
            else:
                db = next(
                    (value for value in (*args, *kwargs.values()) if isinstance(value, AsyncSession)),
                    None,
                )

            if db is None:
                raise ValueError(f"No database session passed to '{func.__name__}'")

            try:
                result = await func(*args, **kwargs)
                await db.commit()
                return result
            except SQLAlchemyError as e:
                await db.rollback()
                logger.exception(f"Transaction failed in '{func.__name__}': {e}")
                raise
            except Exception as e:
                # Domain errors are expected; the caller reports them
                await db.rollback()
                logger.debug(f"Transaction rolled back in '{func.__name__}': {e!r}")
                raise

        return wrapper
    return decorator
