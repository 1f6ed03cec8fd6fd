"""
Esquemas de petición y de estado del historial.

FASE 1 - Enum base:
  - Provider: identifica el proveedor (Gemini, OpenAI). Se usa como clave en la factory.

FASE 2 - Petición:
  - PromptRequest: valida y sanitiza el prompt antes de llamar al proveedor.

FASE 3 - Estado para la vista:
  - HistoryState: todo lo que la interfaz necesita para redibujarse tras cada acción
    (entrada actual, contador, botones prev/next, lista con vistas previas).
  - NavigationResult: resultado de prev/next/jump; moved=False indica que no hubo cambio.
"""
from enum import Enum
from typing import List, Optional
import re

from pydantic import BaseModel, Field, field_validator


class Provider(str, Enum):
    """Proveedores de LLM soportados como fuente de respuestas."""
    GEMINI = "Gemini"
    OPENAI = "OpenAI"


class PromptRequest(BaseModel):
    """
    Prompt enviado por el usuario.
    Funciona para: Validar la longitud del prompt y sanitizar el contenido.
    Salida esperada: Un objeto con el prompt limpio (sin espacios sobrantes).
    """
    prompt: str = Field(..., min_length=1, max_length=2000, description="El prompt de entrada")

    @field_validator('prompt', mode='before')
    @classmethod
    def strip_prompt(cls, v):
        """
        Recorta espacios antes de comprobar la longitud: un prompt que solo tiene
        espacios queda vacío y lo rechaza min_length.
        """
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('prompt')
    @classmethod
    def sanitize_prompt(cls, v: str) -> str:
        """Bloquea patrones de inyección obvios (XSS, llamadas a exec/system)."""
        forbidden = [r"<script>", r"javascript:", r"exec\(", r"system\("]
        for pattern in forbidden:
            if re.search(pattern, v, re.IGNORECASE):
                raise ValueError("El prompt contiene patrones prohibidos")
        return v


class EntryView(BaseModel):
    """Entrada completa bajo el cursor."""
    index: int
    request: str
    response: str


class HistoryItem(BaseModel):
    """Fila de la lista de historial con vistas previas recortadas."""
    index: int
    request_preview: str
    response_preview: str
    active: bool


class HistoryState(BaseModel):
    """
    Estado completo del historial para redibujar la interfaz.
    Atributos:
        - current: Entrada actual o None si no hay historial.
        - placeholder: Texto a mostrar cuando no hay entrada seleccionada.
        - answer_placeholder: Texto del panel de respuesta cuando no hay entrada.
        - history_placeholder: Texto de la lista cuando el historial está vacío.
        - counter: Texto "Prompt N of M".
        - has_prev / has_next: Habilitan los botones de navegación.
        - busy: True mientras hay una petición al proveedor en curso.
    """
    current: Optional[EntryView] = None
    placeholder: Optional[str] = None
    answer_placeholder: Optional[str] = None
    history_placeholder: Optional[str] = None
    counter: str
    current_index: int
    size: int
    has_prev: bool
    has_next: bool
    busy: bool = False
    items: List[HistoryItem] = Field(default_factory=list)


class NavigationResult(BaseModel):
    """Resultado de un movimiento del cursor."""
    moved: bool
    state: HistoryState


class ProviderInfo(BaseModel):
    """Proveedor configurado y sus modelos (principal y de respaldo)."""
    provider: Provider
    model: str
    fallback_model: Optional[str] = None
    configured: bool
