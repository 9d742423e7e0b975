"""Request-scoped database session dependency."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db


def get_session() -> Generator[Session, None, None]:
    """Yield a session that commits when the handler succeeds and rolls back otherwise."""
    yield from get_db()


DbSession = Annotated[Session, Depends(get_session)]
