"""
Fetcher para la API de OpenAI.

FASE 1 - fetch() (punto de entrada):
  - Valida OPENAI_API_KEY y llama a POST /v1/chat/completions con un único mensaje user.
  - Cada prompt es independiente: no se envía historial previo.

FASE 2 - Errores:
  - Códigos distintos de 200, fallos de red o respuestas sin contenido se convierten
    en FetchError. OpenAI no tiene modelo de respaldo.
"""
import asyncio
import logging
from typing import Optional

import requests

from promptnav.core.config import Settings, settings as default_settings, usable_key
from promptnav.schemas.history import Provider
from .base import BaseResponseFetcher, FetchError

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
REQUEST_TIMEOUT = 120


class OpenAIResponseFetcher(BaseResponseFetcher):
    """Implementación para OpenAI: Chat Completions."""

    provider = Provider.OPENAI

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    async def fetch(self, prompt: str) -> str:
        """
        Envía el prompt a Chat Completions.
        Salida esperada: El contenido del primer choice.
        """
        api_key = usable_key(self.settings.OPENAI_API_KEY)
        if not api_key:
            raise FetchError("La API Key de OpenAI no está configurada")

        model = self.settings.OPENAI_MODEL
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        data = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
        }

        try:
            # requests es bloqueante: se ejecuta en un hilo para no congelar el event loop
            response = await asyncio.to_thread(
                requests.post,
                CHAT_COMPLETIONS_URL,
                headers=headers,
                json=data,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            logger.error("Error de red con OpenAI: %s", exc)
            raise FetchError(f"Error de red con OpenAI: {exc}", model=model) from exc

        if response.status_code != 200:
            logger.error("OpenAI respondió %s: %s", response.status_code, response.text)
            raise FetchError(f"Error de OpenAI: {response.text}", model=model)

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (KeyError, IndexError, ValueError) as exc:
            raise FetchError(f"Fallo al procesar la respuesta de OpenAI: {exc}", model=model) from exc
        if not content:
            raise FetchError("OpenAI devolvió una respuesta vacía", model=model)
        return content
