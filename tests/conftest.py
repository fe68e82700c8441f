"""Shared test fixtures."""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from festival.api.generation.generation_controller import get_generation_service
from festival.api.generation.generation_service import GenerationService
from festival.client.storage import MemoryStorage
from festival.client.store import AppStore
from festival.config import Settings
from festival.main import create_app

COUPLET = {
    "upper": "龙腾四海迎新岁",
    "lower": "马跃九州报早春",
    "horizontal": "万象更新",
    "explanation": "辞旧迎新，万事顺遂。",
}

FORTUNE = {
    "id": "3f1c2a9e-0000-4000-8000-000000000001",
    "title": "上上签",
    "content": "骏马奔腾过山川\n春风得意马蹄欢\n前程似锦光华照\n福禄双全岁岁安",
    "blessing": "此签大吉。" * 30,
    "type": "career",
    "upper_trigram": "乾",
    "lower_trigram": "震",
}


def completion(content):
    """Build an object shaped like an openai chat completion."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def fake_chat_client(reply=None, error=None) -> MagicMock:
    client = MagicMock()
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        client.chat.completions.create = AsyncMock(return_value=completion(reply))
    return client


class FakeClock:
    """Sleep replacement that only wakes up when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self._waiters = []

    async def sleep(self, delay: float) -> None:
        fut = asyncio.get_running_loop().create_future()
        self._waiters.append((self.now + delay, fut))
        await fut

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for deadline, fut in list(self._waiters):
            if deadline <= self.now:
                self._waiters.remove((deadline, fut))
                if not fut.done():
                    fut.set_result(None)


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="sk-test", ai_model="deepseek-chat")


@pytest.fixture
def make_api():
    """Return a factory building a TestClient whose upstream is a fake chat client."""

    def build(reply: str = json.dumps(COUPLET), error=None, settings: Settings | None = None):
        settings = settings or Settings(openai_api_key="sk-test")
        chat = fake_chat_client(reply=reply, error=error)
        app = create_app(settings)
        app.dependency_overrides[get_generation_service] = lambda: GenerationService(
            settings, client=chat
        )
        return TestClient(app), chat

    return build


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage) -> AppStore:
    return AppStore(storage)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
