"""
Factory de fetchers por proveedor.

FASE 1 - Patrón Factory:
  - El presenter no conoce GeminiResponseFetcher ni OpenAIResponseFetcher directamente.
  - Solo pide "el fetcher de Gemini" y la factory devuelve la instancia correcta.

FASE 2 - Registro:
  - _fetchers mapea Provider -> clase de fetcher. Cada llamada a get_fetcher()
    crea una instancia nueva con el Settings indicado.

FASE 3 - Extensibilidad:
  - Para agregar un proveedor: añadir al Enum Provider, crear XxxResponseFetcher
    y registrarlo en _fetchers.
"""
from typing import Dict, Optional, Type

from promptnav.core.config import Settings
from promptnav.schemas.history import Provider
from .providers.base import BaseResponseFetcher
from .providers.gemini_service import GeminiResponseFetcher
from .providers.openai_service import OpenAIResponseFetcher


class ServiceFactory:
    """Mapeo Provider -> clase de fetcher. get_fetcher() instancia y devuelve."""

    _fetchers: Dict[Provider, Type[BaseResponseFetcher]] = {
        Provider.GEMINI: GeminiResponseFetcher,
        Provider.OPENAI: OpenAIResponseFetcher,
    }

    @classmethod
    def get_fetcher(cls, provider: Provider, settings: Optional[Settings] = None) -> BaseResponseFetcher:
        """Devuelve una instancia del fetcher. Lanza ValueError si el proveedor no existe."""
        fetcher_class = cls._fetchers.get(provider)
        if not fetcher_class:
            raise ValueError(f"El proveedor '{provider}' no está soportado")
        return fetcher_class(settings=settings)
