"""Database session management and the SQLAlchemy-backed store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Engine, create_engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from mediaman.core.config import get_settings
from mediaman.core.logging_config import configure_logging
from mediaman.models import Base, StoredRecord
from mediaman.services.errors import StoreError
from mediaman.services.models import MediaKind
from mediaman.services.store import KeyValueStore

logger = logging.getLogger(__name__)


def create_store_engine(
    url: str | None = None, *, echo: bool | None = None, **engine_kwargs: Any
) -> Engine:
    """Build an engine from the given URL (defaults to the configured one)."""

    settings = get_settings()
    return create_engine(
        url or settings.database_url,
        echo=settings.database_echo if echo is None else echo,
        future=True,
        **engine_kwargs,
    )


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_models(engine: Engine) -> None:
    """Create tables if they do not exist (handy for local dev)."""
    Base.metadata.create_all(bind=engine)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Commit on success, roll back on failure, always close."""

    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class SqlAlchemyStore(KeyValueStore):
    """Key-value store persisted in the media_store table."""

    def __init__(self, kind: MediaKind, session_factory: sessionmaker[Session]) -> None:
        super().__init__(kind)
        self._session_factory = session_factory

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("[%s] %s failed: %s", self.namespace, action, exc)
            raise StoreError(f"Failed to {action} in the {self.namespace} store") from exc

    def get_item(self, key: str) -> dict[str, Any] | None:
        with self._session(f"read '{key}'") as session:
            record = session.get(StoredRecord, (self.namespace, key))
            return None if record is None else record.value

    def set_item(self, key: str, value: dict[str, Any]) -> None:
        with self._session(f"write '{key}'") as session:
            record = session.get(StoredRecord, (self.namespace, key))
            if record is None:
                session.add(StoredRecord(namespace=self.namespace, key=key, value=value))
            else:
                record.value = value

    def remove_item(self, key: str) -> None:
        with self._session(f"remove '{key}'") as session:
            session.execute(
                delete(StoredRecord).where(
                    StoredRecord.namespace == self.namespace,
                    StoredRecord.key == key,
                )
            )

    def keys(self) -> list[str]:
        with self._session("list keys") as session:
            query = (
                select(StoredRecord.key)
                .where(StoredRecord.namespace == self.namespace)
                .order_by(StoredRecord.key)
            )
            return list(session.execute(query).scalars())


def open_store(kind: MediaKind, engine: Engine | None = None) -> SqlAlchemyStore:
    """Return a ready-to-use store for `kind`, creating tables if needed.

    Also applies the configured logging setup.
    """

    configure_logging()
    engine = engine or create_store_engine()
    init_models(engine)
    logger.info("Opened %s store on %s", kind.type_name, engine.url.render_as_string())
    return SqlAlchemyStore(kind, make_session_factory(engine))
