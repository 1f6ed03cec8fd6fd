"""
Router principal de la API v1.

FASE 1 - Agrupación:
  - Centraliza los dominios bajo un solo router.
  - Se monta en main.py con el prefijo /api/v1, así las rutas quedan como
    /api/v1/history, /api/v1/history/prompts, etc.

FASE 2 - Tags:
  - El tag "history" agrupa los endpoints en la documentación Swagger.
"""
from fastapi import APIRouter
from .endpoints import history

api_router = APIRouter()

# Consulta, envío y navegación del historial bajo /history
api_router.include_router(history.router, prefix="/history", tags=["history"])
