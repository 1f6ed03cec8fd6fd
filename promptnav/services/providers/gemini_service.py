"""
Fetcher para la API de Google Gemini.

FASE 1 - Validación:
  - Sin GEMINI_API_KEY (o con el placeholder del .env de ejemplo) se lanza FetchError
    antes de hacer ninguna llamada de red.

FASE 2 - Llamada principal:
  - Usa client.aio.models.generate_content() con el modelo GEMINI_MODEL.
  - El prompt se envía tal cual, sin historial: cada entrada es independiente.

FASE 3 - Modelo de respaldo:
  - Si la API responde que el modelo no existe o no soporta la operación
    ("not found", "not support" o código 404), se reintenta UNA vez con
    GEMINI_FALLBACK_MODEL. Cualquier otro error se propaga como FetchError.
"""
import logging
from typing import Optional

from google import genai
from google.genai import errors

from promptnav.core.config import Settings, settings as default_settings, usable_key
from promptnav.schemas.history import Provider
from .base import BaseResponseFetcher, FetchError

logger = logging.getLogger(__name__)

_FALLBACK_MARKERS = ("not found", "not support")


def _should_fallback(exc: errors.APIError) -> bool:
    """True si el error indica que el modelo no está disponible para esta key."""
    if exc.code == 404:
        return True
    message = (exc.message or str(exc)).lower()
    return any(marker in message for marker in _FALLBACK_MARKERS)


def _error_message(exc: Exception) -> str:
    if isinstance(exc, errors.APIError) and exc.message:
        return exc.message
    return str(exc)


class GeminiResponseFetcher(BaseResponseFetcher):
    """Implementación para Gemini: texto vía generate_content con reintento de modelo."""

    provider = Provider.GEMINI

    def __init__(self, settings: Optional[Settings] = None, client: Optional[genai.Client] = None):
        self.settings = settings or default_settings
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            api_key = usable_key(self.settings.GEMINI_API_KEY)
            if not api_key:
                raise FetchError("La API Key de Gemini no está configurada")
            self._client = genai.Client(api_key=api_key)
        return self._client

    async def _generate(self, client: genai.Client, model: str, prompt: str) -> str:
        response = await client.aio.models.generate_content(model=model, contents=prompt)
        if not response.text:
            raise FetchError("Gemini devolvió una respuesta vacía", model=model)
        return response.text

    async def fetch(self, prompt: str) -> str:
        """
        Punto de entrada principal para Gemini.
        Salida esperada: El texto de la respuesta del modelo principal o del de respaldo.
        """
        client = self._get_client()
        model = self.settings.GEMINI_MODEL
        fallback = self.settings.GEMINI_FALLBACK_MODEL

        try:
            return await self._generate(client, model, prompt)
        except FetchError:
            raise
        except errors.APIError as exc:
            if not fallback or fallback == model or not _should_fallback(exc):
                logger.error("Gemini falló con el modelo %s: %s", model, _error_message(exc))
                raise FetchError(_error_message(exc), model=model) from exc
            primary_error = exc
        except Exception as exc:
            logger.error("Error enviando el prompt a Gemini: %s", exc)
            raise FetchError(str(exc), model=model) from exc

        logger.info("Modelo %s no disponible, probando modelo de respaldo %s", model, fallback)
        try:
            return await self._generate(client, fallback, prompt)
        except Exception as exc:
            # Se informa el error original: el respaldo es un intento secundario
            logger.error(
                "El modelo de respaldo %s también falló: %s", fallback, _error_message(exc)
            )
            raise FetchError(_error_message(primary_error), model=model) from exc
