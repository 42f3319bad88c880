"""Shared fixtures and fakes for Shell AI tests."""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from shell_ai import config_file
from shell_ai.errors import PersistenceFailure
from shell_ai.history import HistoryStore, SqlHistoryStore
from shell_ai.llm.manager import LLMManager
from shell_ai.llm.providers.base_provider import BaseProvider


class FakeProvider(BaseProvider):
    """Provider returning scripted replies and recording every call."""

    def __init__(self, replies=None, error: Optional[Exception] = None, models=None):
        super().__init__(api_key="test-key", model="fake-model")
        self.replies = list(replies or [])
        self.error = error
        self.models = list(models or [])
        self.calls: List[Dict[str, Any]] = []

    async def initialize(self) -> bool:
        self.client = object()
        return True

    async def generate(self, messages, system_prompt=None, model_id=None,
                       max_tokens=200, temperature=0.1, **kwargs) -> str:
        self.calls.append({
            "messages": messages,
            "system_prompt": system_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.error:
            raise self.error
        return self.replies.pop(0) if self.replies else ""

    async def list_models(self) -> List[str]:
        if self.error:
            raise self.error
        return list(self.models)

    def format_messages(self, messages, system_prompt=None):
        return messages

    async def cleanup(self):
        self.client = None


class FailingStore(HistoryStore):
    """Store whose every call fails."""

    def __init__(self):
        self.inserts = 0

    async def insert(self, prompt, command, mode, user_id=None):
        self.inserts += 1
        raise PersistenceFailure("database is down")

    async def select_recent(self, limit, user_id=None):
        raise PersistenceFailure("database is down")


@pytest.fixture(autouse=True)
def isolated_config():
    """Ignore any real user config and reset cached state."""
    config_file.reset()
    with patch.object(config_file, "CONFIG_PATH", Path("/nonexistent/shell-ai/config.toml")):
        yield
    config_file.reset()


@pytest.fixture
def make_manager():
    def _make(provider: BaseProvider) -> LLMManager:
        manager = LLMManager(provider)
        asyncio.run(manager.initialize())
        return manager
    return _make


@pytest.fixture
def sql_store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    store = SqlHistoryStore(engine)
    store.create_schema()
    yield store
    store.dispose()
