"""
Translation history for Shell AI.

HistoryRelay guards and forwards writes to a HistoryStore and reads the
recent feed back. Persistence is best-effort: store errors are logged and
never reach the translate path.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import Column, DateTime, Integer, String, Text, create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .models import HistoryRecord, Mode, Scope, TranslationResult
from .errors import PersistenceFailure
from . import config_file

logger = logging.getLogger(__name__)

Base = declarative_base()


class HistoryRow(Base):
    __tablename__ = "history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    prompt = Column(Text, nullable=False)
    command = Column(Text, nullable=False)
    mode = Column(String(16), nullable=False, default=Mode.GENERATE.value)
    user_id = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def to_record(self) -> HistoryRecord:
        return HistoryRecord(
            id=self.id,
            prompt=self.prompt,
            command=self.command,
            mode=Mode(self.mode),
            user_id=self.user_id,
            created_at=self.created_at,
        )


class HistoryStore(ABC):
    """Append-only store of history rows."""

    @abstractmethod
    async def insert(self, prompt: str, command: str, mode: Mode, user_id: Optional[str] = None) -> None:
        """Append one row. Raises PersistenceFailure."""
        pass

    @abstractmethod
    async def select_recent(self, limit: int, user_id: Optional[str] = None) -> List[HistoryRecord]:
        """Newest-first rows, optionally for one user. Raises PersistenceFailure."""
        pass


def normalize_database_url(url: str) -> str:
    """Point bare postgres URLs (as handed out by Supabase) at the psycopg driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


class SqlHistoryStore(HistoryStore):
    """
    HistoryStore over SQLAlchemy.

    Session work is synchronous and runs in a worker thread.
    """

    def __init__(self, engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, url: str, **engine_kwargs) -> "SqlHistoryStore":
        engine_kwargs.setdefault("pool_pre_ping", True)
        return cls(create_engine(normalize_database_url(url), **engine_kwargs))

    def create_schema(self):
        """Create the history table if missing."""
        Base.metadata.create_all(self.engine)

    def _insert(self, prompt, command, mode, user_id):
        with self._session_factory() as session:
            session.add(HistoryRow(prompt=prompt, command=command, mode=Mode(mode).value, user_id=user_id))
            session.commit()

    def _select_recent(self, limit, user_id):
        stmt = select(HistoryRow)
        if user_id is not None:
            stmt = stmt.where(HistoryRow.user_id == user_id)
        stmt = stmt.order_by(HistoryRow.created_at.desc(), HistoryRow.id.desc()).limit(limit)
        with self._session_factory() as session:
            return [row.to_record() for row in session.execute(stmt).scalars()]

    async def insert(self, prompt: str, command: str, mode: Mode, user_id: Optional[str] = None) -> None:
        try:
            await asyncio.to_thread(self._insert, prompt, command, mode, user_id)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"history insert failed: {e}") from e

    async def select_recent(self, limit: int, user_id: Optional[str] = None) -> List[HistoryRecord]:
        try:
            return await asyncio.to_thread(self._select_recent, limit, user_id)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"history select failed: {e}") from e

    def dispose(self):
        self.engine.dispose()


class HistoryRelay:
    """Best-effort writer and reader for the history feed."""

    def __init__(self, store: Optional[HistoryStore], page_size: Optional[int] = None):
        self.store = store
        self.page_size = page_size or config_file.get("page_size")

    @property
    def enabled(self) -> bool:
        return self.store is not None

    async def record(
        self,
        result: TranslationResult,
        prompt: str,
        mode: Mode = Mode.GENERATE,
        user_id: Optional[str] = None,
    ) -> None:
        """Persist a successful translation. Never raises on store errors."""
        if not self.enabled:
            return
        if result.is_error:
            logger.debug(f"Not recording error result: {result.text[:40]}")
            return
        try:
            await self.store.insert(prompt.strip(), result.text, Mode(mode), user_id)
        except PersistenceFailure as e:
            logger.error(f"History write failed: {e}")

    async def list(
        self,
        scope: Scope = Scope.GLOBAL,
        user_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[HistoryRecord]:
        """
        Recent history, newest first, at most one page.

        `mine` without a user yields an empty list.
        """
        if not self.enabled:
            return []
        scope = Scope(scope)
        if scope == Scope.MINE and not user_id:
            return []

        limit = self.page_size if limit is None else min(limit, self.page_size)
        if limit < 1:
            return []

        try:
            return await self.store.select_recent(
                limit, user_id=user_id if scope == Scope.MINE else None
            )
        except PersistenceFailure as e:
            logger.error(f"History read failed: {e}")
            return []


def create_history_relay(database_url: Optional[str] = None) -> HistoryRelay:
    """Build the relay from config; history is disabled without a database URL."""
    if not config_file.get("history_enabled"):
        logger.info("History disabled by config")
        return HistoryRelay(None)
    if not database_url:
        logger.warning("DATABASE_URL not set; history disabled.")
        return HistoryRelay(None)
    return HistoryRelay(SqlHistoryStore.from_url(database_url))
