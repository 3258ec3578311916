from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from newsdesk.core.errors import ConstraintViolation, NewsdeskError, PersistenceError

logger = logging.getLogger("newsdesk.repo")


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_pattern(search: str | None) -> str | None:
    text = str(search or "").strip()
    if not text:
        return None
    return f"%{escape_like(text)}%"


@contextmanager
def persistence_guard(db: Session, action: str) -> Iterator[None]:
    """Roll back and translate database failures raised inside the block.

    Typed errors (``NotFound``, ``ValidationError``) pass through after the
    rollback; SQLAlchemy errors become ``PersistenceError`` subclasses.
    """
    try:
        yield
    except NewsdeskError:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        logger.warning("%s rejected by constraint: %s", action, exc.orig)
        raise ConstraintViolation(f"{action} violates a database constraint") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s failed: %s", action, exc)
        raise PersistenceError(f"{action} failed") from exc
