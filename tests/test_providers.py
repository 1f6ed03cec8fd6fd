"""
Pruebas de los fetchers de Gemini y OpenAI y de la factory.

El cliente de google-genai y requests.post se sustituyen por mocks: ninguna prueba
sale a la red.
"""
import asyncio
import time
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import requests
from google.genai import errors

from promptnav.core.config import Settings
from promptnav.schemas.history import Provider
from promptnav.services.factory import ServiceFactory
from promptnav.services.providers import openai_service
from promptnav.services.providers.base import FetchError
from promptnav.services.providers.gemini_service import GeminiResponseFetcher
from promptnav.services.providers.openai_service import OpenAIResponseFetcher


def _gemini_client(*side_effect) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(side_effect=list(side_effect))
    return client


def _api_error(code: int, message: str) -> errors.APIError:
    return errors.ClientError(code, {"error": {"code": code, "message": message, "status": "ERROR"}})


def _called_models(client: MagicMock) -> list[str]:
    return [call.kwargs["model"] for call in client.aio.models.generate_content.call_args_list]


@pytest.mark.asyncio
async def test_gemini_returns_text(test_settings):
    client = _gemini_client(SimpleNamespace(text="Hola"))
    fetcher = GeminiResponseFetcher(settings=test_settings, client=client)
    assert await fetcher.fetch("saluda") == "Hola"
    client.aio.models.generate_content.assert_awaited_once_with(
        model="gemini-2.5-flash", contents="saluda"
    )


@pytest.mark.asyncio
async def test_gemini_falls_back_when_model_not_found(test_settings):
    client = _gemini_client(
        _api_error(404, "models/gemini-2.5-flash is not found for API version v1beta"),
        SimpleNamespace(text="desde el respaldo"),
    )
    fetcher = GeminiResponseFetcher(settings=test_settings, client=client)
    assert await fetcher.fetch("hola") == "desde el respaldo"
    assert _called_models(client) == ["gemini-2.5-flash", "gemini-2.5-flash-lite"]


@pytest.mark.asyncio
async def test_gemini_falls_back_on_unsupported_message(test_settings):
    client = _gemini_client(
        _api_error(400, "Model does not support generateContent"),
        SimpleNamespace(text="ok"),
    )
    fetcher = GeminiResponseFetcher(settings=test_settings, client=client)
    assert await fetcher.fetch("hola") == "ok"


@pytest.mark.asyncio
async def test_gemini_failed_fallback_reports_original_error(test_settings):
    client = _gemini_client(
        _api_error(404, "primary model not found"),
        _api_error(403, "permission denied"),
    )
    fetcher = GeminiResponseFetcher(settings=test_settings, client=client)
    with pytest.raises(FetchError, match="primary model not found"):
        await fetcher.fetch("hola")


@pytest.mark.asyncio
async def test_gemini_other_errors_do_not_retry(test_settings):
    client = _gemini_client(_api_error(429, "quota exceeded"))
    fetcher = GeminiResponseFetcher(settings=test_settings, client=client)
    with pytest.raises(FetchError, match="quota exceeded"):
        await fetcher.fetch("hola")
    assert _called_models(client) == ["gemini-2.5-flash"]


@pytest.mark.asyncio
async def test_gemini_empty_response_is_an_error(test_settings):
    client = _gemini_client(SimpleNamespace(text=None))
    fetcher = GeminiResponseFetcher(settings=test_settings, client=client)
    with pytest.raises(FetchError):
        await fetcher.fetch("hola")


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", [None, "", "YOUR_API_KEY_HERE"])
async def test_gemini_without_key_fails_before_calling(api_key):
    fetcher = GeminiResponseFetcher(settings=Settings(_env_file=None, GEMINI_API_KEY=api_key))
    with pytest.raises(FetchError, match="Gemini"):
        await fetcher.fetch("hola")


def _openai_settings() -> Settings:
    return Settings(_env_file=None, PROVIDER=Provider.OPENAI, OPENAI_API_KEY="sk-test")


def _fake_response(status_code: int, payload=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = text
    return resp


@pytest.mark.asyncio
async def test_openai_returns_first_choice(monkeypatch):
    post = MagicMock(return_value=_fake_response(200, {"choices": [{"message": {"content": "Hola"}}]}))
    monkeypatch.setattr(openai_service.requests, "post", post)

    assert await OpenAIResponseFetcher(settings=_openai_settings()).fetch("saluda") == "Hola"
    sent = post.call_args.kwargs["json"]
    assert sent["model"] == "gpt-5"
    assert sent["messages"] == [{"role": "user", "content": "saluda"}]
    assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer sk-test"


@pytest.mark.asyncio
async def test_openai_fetch_does_not_block_event_loop(monkeypatch):
    def slow_post(*args, **kwargs):
        time.sleep(0.5)
        return _fake_response(200, {"choices": [{"message": {"content": "tarde"}}]})

    monkeypatch.setattr(openai_service.requests, "post", slow_post)
    ticks = 0

    async def ticker():
        nonlocal ticks
        while True:
            await asyncio.sleep(0.05)
            ticks += 1

    ticking = asyncio.create_task(ticker())
    try:
        result = await OpenAIResponseFetcher(settings=_openai_settings()).fetch("hola")
    finally:
        ticking.cancel()

    assert result == "tarde"
    assert ticks >= 3


@pytest.mark.asyncio
async def test_openai_http_error(monkeypatch):
    monkeypatch.setattr(
        openai_service.requests, "post", MagicMock(return_value=_fake_response(500, text="boom"))
    )
    with pytest.raises(FetchError, match="boom"):
        await OpenAIResponseFetcher(settings=_openai_settings()).fetch("hola")


@pytest.mark.asyncio
async def test_openai_network_error(monkeypatch):
    monkeypatch.setattr(
        openai_service.requests, "post", MagicMock(side_effect=requests.ConnectionError("sin red"))
    )
    with pytest.raises(FetchError, match="sin red"):
        await OpenAIResponseFetcher(settings=_openai_settings()).fetch("hola")


@pytest.mark.asyncio
async def test_openai_without_key():
    with pytest.raises(FetchError, match="OpenAI"):
        await OpenAIResponseFetcher(settings=Settings(_env_file=None)).fetch("hola")


def test_factory_returns_fetcher_per_provider(test_settings):
    for provider in Provider:
        fetcher = ServiceFactory.get_fetcher(provider, settings=test_settings)
        assert fetcher.provider == provider
        assert fetcher.settings is test_settings


def test_factory_rejects_unknown_provider():
    with pytest.raises(ValueError):
        ServiceFactory.get_fetcher("Desconocido")
