"""
Presenter del historial: une el fetcher con el HistoryStore.

FASE 1 - Envío de prompts:
  - submit() valida el prompt, llama al fetcher y SOLO si responde bien hace append().
  - Mientras hay una petición en curso (busy) se rechaza cualquier otro envío, igual
    que el botón "Generating..." deshabilitado en la interfaz.
  - Si el fetch falla o se cancela, el historial no cambia.

FASE 2 - Navegación:
  - step_prev()/step_next()/jump_to() delegan en el store y devuelven el estado nuevo.

FASE 3 - Estado:
  - state() relee el store completo y construye el HistoryState que la vista dibuja.
"""
import logging
from typing import Optional

from promptnav.core.config import Settings, settings as default_settings
from promptnav.schemas.history import (
    EntryView,
    HistoryItem,
    HistoryState,
    NavigationResult,
    PromptRequest,
)
from .history_store import HistoryStore
from .providers.base import BaseResponseFetcher, FetchError

logger = logging.getLogger(__name__)

EMPTY_PLACEHOLDER = "No prompt selected"
EMPTY_ANSWER_PLACEHOLDER = "Enter a prompt to see the AI's response!"
EMPTY_HISTORY_PLACEHOLDER = "No prompts submitted yet"


class SubmissionInProgressError(Exception):
    """Ya hay un prompt esperando respuesta del proveedor."""


def _preview(text: str, limit: int) -> str:
    """Recorta el texto a 'limit' caracteres añadiendo '...' si se cortó."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class HistoryPresenter:
    """Traduce las acciones del usuario en operaciones sobre el store."""

    def __init__(
        self,
        store: HistoryStore,
        fetcher: BaseResponseFetcher,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.settings = settings or default_settings
        self._busy = False

    @property
    def is_busy(self) -> bool:
        return self._busy

    async def submit(self, prompt: str) -> HistoryState:
        """
        Envía un prompt y registra la respuesta.
        Lanza ValidationError si el prompt no es válido, SubmissionInProgressError si hay
        otro envío en curso y FetchError si el proveedor falla.
        """
        validated = PromptRequest(prompt=prompt)
        if self._busy:
            logger.info("Envío rechazado: ya hay una petición en curso")
            raise SubmissionInProgressError("Ya hay un prompt generándose")

        self._busy = True
        try:
            response = await self.fetcher.fetch(validated.prompt)
        except FetchError as exc:
            logger.warning(
                "No se añadió el prompt: %s falló con el modelo %s: %s",
                self.fetcher.provider.value,
                exc.model or "desconocido",
                exc.message,
            )
            raise
        finally:
            self._busy = False

        entry = self.store.append(validated.prompt, response)
        logger.debug("Entrada %d añadida al historial", entry.index)
        return self.state()

    def step_prev(self) -> NavigationResult:
        return NavigationResult(moved=self.store.step_prev(), state=self.state())

    def step_next(self) -> NavigationResult:
        return NavigationResult(moved=self.store.step_next(), state=self.state())

    def jump_to(self, index: int) -> NavigationResult:
        """Salto directo desde un clic en la lista de historial."""
        return NavigationResult(moved=self.store.jump_to(index), state=self.state())

    def state(self) -> HistoryState:
        """Relee el store y arma el estado que necesita la vista."""
        store = self.store
        current = store.current()
        current_index = store.current_index()

        items = [
            HistoryItem(
                index=entry.index,
                request_preview=_preview(entry.request, self.settings.PROMPT_PREVIEW_CHARS),
                response_preview=_preview(entry.response, self.settings.RESPONSE_PREVIEW_CHARS),
                active=entry.index == current_index,
            )
            for entry in store.all_entries()
        ]

        return HistoryState(
            current=EntryView(**current.model_dump()) if current else None,
            placeholder=None if current else EMPTY_PLACEHOLDER,
            answer_placeholder=None if current else EMPTY_ANSWER_PLACEHOLDER,
            history_placeholder=None if items else EMPTY_HISTORY_PLACEHOLDER,
            counter=f"Prompt {current_index + 1} of {store.size()}",
            current_index=current_index,
            size=store.size(),
            has_prev=store.has_prev(),
            has_next=store.has_next(),
            busy=self._busy,
            items=items,
        )
