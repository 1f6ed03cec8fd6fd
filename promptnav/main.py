"""
Punto de entrada de la aplicación Prompt History Navigator.

FASE 1 - Montaje de la app:
  - create_app() crea la instancia FastAPI con título y ruta del esquema OpenAPI.
  - Cada app tiene su propio HistoryStore y HistoryPresenter en app.state; no hay
    un store global compartido entre apps (los tests crean la suya).

FASE 2 - CORS:
  - Permite que el frontend estático consuma la API desde otro origen/puerto.

FASE 3 - Rutas:
  - Incluye el router de la API v1 bajo el prefijo /api/v1.
  - El endpoint /health queda en la raíz para monitoreo rápido.
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, settings as default_settings, usable_key
from .core.logging import configure_logging
from .api.v1.api_router import api_router
from .schemas.history import Provider
from .services.factory import ServiceFactory
from .services.history_store import HistoryStore
from .services.presenter import HistoryPresenter
from .services.providers.base import BaseResponseFetcher

logger = logging.getLogger(__name__)


def _warn_if_unconfigured(settings: Settings) -> None:
    key = settings.GEMINI_API_KEY if settings.PROVIDER == Provider.GEMINI else settings.OPENAI_API_KEY
    if usable_key(key) is None:
        logger.warning(
            "La API Key de %s no está configurada; define %s_API_KEY en el archivo .env",
            settings.PROVIDER.value,
            settings.PROVIDER.name,
        )


def create_app(
    store: Optional[HistoryStore] = None,
    fetcher: Optional[BaseResponseFetcher] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Construye la app con su store y su fetcher (inyectables para pruebas)."""
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    if fetcher is None:
        fetcher = ServiceFactory.get_fetcher(settings.PROVIDER, settings=settings)
        _warn_if_unconfigured(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json"
    )
    app.state.settings = settings
    app.state.presenter = HistoryPresenter(
        store if store is not None else HistoryStore(),
        fetcher,
        settings=settings,
    )

    # CORS: el frontend (HTML estático) suele servirse desde otro puerto o dominio
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,  # Con "*" no se puede usar True (especificación CORS)
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/health")
    def health_check():
        """Health check sin dependencias externas."""
        return {"status": "ok"}

    return app


app = create_app()
