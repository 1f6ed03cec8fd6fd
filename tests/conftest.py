import asyncio
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from promptnav.core.config import Settings
from promptnav.main import create_app
from promptnav.schemas.history import Provider
from promptnav.services.history_store import HistoryStore
from promptnav.services.providers.base import BaseResponseFetcher, FetchError


class FakeFetcher(BaseResponseFetcher):
    """Fetcher en memoria: responde 'respuesta a <prompt>' o falla si se le indica."""

    provider = Provider.GEMINI

    def __init__(self, error: Optional[str] = None):
        self.error = error
        self.prompts: list[str] = []
        self.gate: Optional[asyncio.Event] = None

    async def fetch(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        if self.error:
            raise FetchError(self.error, model="modelo-de-prueba")
        return f"respuesta a {prompt}"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, GEMINI_API_KEY="test-key", LOG_LEVEL="DEBUG")


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher(error="cuota agotada")


@pytest.fixture
def store() -> HistoryStore:
    return HistoryStore()


@pytest.fixture
def client(store: HistoryStore, fetcher: FakeFetcher, test_settings: Settings) -> TestClient:
    app = create_app(store=store, fetcher=fetcher, settings=test_settings)
    return TestClient(app)
