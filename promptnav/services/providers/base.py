"""
Clase base abstracta para todos los fetchers de respuestas.

FASE 1 - Contrato común:
  - Todos los proveedores implementan fetch(prompt) -> str.
  - Cualquier fallo de transporte o de la API se normaliza a FetchError, que es lo
    único que el presenter captura. Si fetch() falla, no se añade nada al historial.

FASE 2 - Por qué abstracto:
  - Obliga a cada proveedor a implementar fetch(). No se puede instanciar BaseResponseFetcher.
  - Facilita que ServiceFactory devuelva "cualquier fetcher" que cumpla el contrato.
"""
from abc import ABC, abstractmethod
from typing import Optional

from promptnav.schemas.history import Provider


class FetchError(Exception):
    """Error recuperable al obtener una respuesta del proveedor."""

    def __init__(self, message: str, model: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.model = model


class BaseResponseFetcher(ABC):
    """Interfaz que deben cumplir Gemini, OpenAI y cualquier proveedor futuro."""

    provider: Provider

    @abstractmethod
    async def fetch(self, prompt: str) -> str:
        """Envía el prompt al proveedor y devuelve el texto de la respuesta."""
        pass
