"""
Endpoints del historial de prompts.

FASE 1 - Lectura:
  - GET /history devuelve el HistoryState completo para dibujar la interfaz.
  - GET /providers informa del proveedor y modelos configurados.

FASE 2 - Envío:
  - POST /prompts recibe el prompt vía Form, lo delega en el presenter y devuelve
    el estado nuevo. 400 si el prompt no es válido, 409 si ya hay uno en curso,
    502 si el proveedor falla (el historial no cambia).

FASE 3 - Navegación:
  - POST /prev, /next y /jump/{index} mueven el cursor. En los extremos devuelven
    moved=False; un índice inexistente en /jump responde 404.
"""
from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from pydantic import ValidationError

from promptnav.core.config import Settings, usable_key
from promptnav.schemas.history import HistoryState, NavigationResult, Provider, ProviderInfo
from promptnav.services.presenter import HistoryPresenter, SubmissionInProgressError
from promptnav.services.providers.base import FetchError

router = APIRouter()


def get_presenter(request: Request) -> HistoryPresenter:
    """Presenter de la app; cada app tiene su propio store."""
    return request.app.state.presenter


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("", response_model=HistoryState)
def read_history(presenter: HistoryPresenter = Depends(get_presenter)):
    """Estado actual del historial: entrada seleccionada, contador y lista."""
    return presenter.state()


@router.post(
    "/prompts",
    response_model=HistoryState,
    summary="Enviar un prompt y registrar la respuesta",
)
async def submit_prompt(
    prompt: str = Form(..., description="El prompt de entrada"),
    presenter: HistoryPresenter = Depends(get_presenter),
):
    try:
        return await presenter.submit(prompt)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except SubmissionInProgressError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except FetchError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)


@router.post("/prev", response_model=NavigationResult)
def step_prev(presenter: HistoryPresenter = Depends(get_presenter)):
    """Mueve el cursor a la entrada anterior (flecha izquierda)."""
    return presenter.step_prev()


@router.post("/next", response_model=NavigationResult)
def step_next(presenter: HistoryPresenter = Depends(get_presenter)):
    """Mueve el cursor a la entrada siguiente (flecha derecha)."""
    return presenter.step_next()


@router.post("/jump/{index}", response_model=NavigationResult)
def jump_to(index: int, presenter: HistoryPresenter = Depends(get_presenter)):
    """Selecciona directamente una entrada de la lista."""
    result = presenter.jump_to(index)
    if not result.moved:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No existe la entrada {index}",
        )
    return result


@router.get("/providers", response_model=ProviderInfo)
def read_provider(
    presenter: HistoryPresenter = Depends(get_presenter),
    settings: Settings = Depends(get_settings),
):
    """Proveedor activo y modelos que usará para responder."""
    provider = presenter.fetcher.provider
    if provider == Provider.GEMINI:
        return ProviderInfo(
            provider=provider,
            model=settings.GEMINI_MODEL,
            fallback_model=settings.GEMINI_FALLBACK_MODEL,
            configured=usable_key(settings.GEMINI_API_KEY) is not None,
        )
    return ProviderInfo(
        provider=provider,
        model=settings.OPENAI_MODEL,
        configured=usable_key(settings.OPENAI_API_KEY) is not None,
    )
