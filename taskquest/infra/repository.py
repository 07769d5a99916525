from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from taskquest.domain.errors import PersistenceError

from .models import KeyValueModel

logger = logging.getLogger(__name__)


class KeyValueRepository:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def load(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                row = session.get(KeyValueModel, key)
                return row.value if row else None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load {key!r}") from exc

    def save(self, key: str, blob: str) -> None:
        try:
            with self._session_factory() as session:
                row = session.get(KeyValueModel, key)
                if row is None:
                    session.add(KeyValueModel(key=key, value=blob))
                else:
                    row.value = blob
                session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to save {key!r}") from exc
        logger.debug("Saved %s (%s bytes)", key, len(blob))

