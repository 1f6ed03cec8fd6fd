"""
Historial navegable de prompts y respuestas.

FASE 1 - Estructura:
  - Secuencia ordenada de Entry (solo se añade al final) más un cursor entero.
  - cursor == -1 significa "vacío, sin selección" y solo es válido si no hay entradas.
  - Cada Entry guarda su posición (index) al crearse, así jump_to() y
    current_index() son O(1) en lugar de recorrer la secuencia.

FASE 2 - Navegación:
  - append() coloca la entrada nueva al final y la convierte en la actual.
  - step_prev()/step_next() mueven el cursor una posición; en los extremos no
    hacen nada y devuelven False.
  - jump_to() salta directo a una entrada o índice existente (clic en la lista).

FASE 3 - Contrato:
  - Ninguna operación lanza excepciones: los casos límite devuelven False, None o -1.
  - Los colaboradores reciben Entry inmutables y tuplas; solo el store muta su estado.
"""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class Entry(BaseModel):
    """Par (request, response) registrado en el historial. Inmutable."""
    model_config = ConfigDict(frozen=True)

    index: int
    request: str
    response: str


class HistoryStore:
    """Log de entradas con un único cursor de navegación."""

    def __init__(self) -> None:
        self._entries: list[Entry] = []
        self._cursor: int = -1

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, request: str, response: str) -> Entry:
        """Añade una entrada al final y mueve el cursor a ella."""
        entry = Entry(index=len(self._entries), request=request, response=response)
        self._entries.append(entry)
        self._cursor = entry.index
        return entry

    def step_prev(self) -> bool:
        """Retrocede una posición. False (sin cambios) si ya está en la cabeza."""
        if not self.has_prev():
            return False
        self._cursor -= 1
        return True

    def step_next(self) -> bool:
        """Avanza una posición. False (sin cambios) si ya está en la cola."""
        if not self.has_next():
            return False
        self._cursor += 1
        return True

    def has_prev(self) -> bool:
        return self._cursor > 0

    def has_next(self) -> bool:
        return 0 <= self._cursor < len(self._entries) - 1

    def current(self) -> Optional[Entry]:
        """Entrada bajo el cursor, o None si el historial está vacío."""
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    def jump_to(self, target: Union[Entry, int]) -> bool:
        """
        Mueve el cursor a una entrada de este store o a un índice existente.
        Devuelve False y no cambia nada si la referencia no se encuentra.
        """
        if isinstance(target, Entry):
            index = target.index
            if not (0 <= index < len(self._entries)) or self._entries[index] is not target:
                return False
        elif isinstance(target, int) and not isinstance(target, bool):
            index = target
            if not 0 <= index < len(self._entries):
                return False
        else:
            return False
        self._cursor = index
        return True

    def all_entries(self) -> tuple[Entry, ...]:
        """Copia de solo lectura del historial completo, de la cabeza a la cola."""
        return tuple(self._entries)

    def size(self) -> int:
        return len(self._entries)

    def current_index(self) -> int:
        """Posición 0-based del cursor, o -1 si está vacío."""
        return self._cursor
