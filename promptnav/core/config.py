"""
Configuración central de la aplicación.

FASE 1 - Carga de variables:
  - pydantic-settings lee automáticamente desde .env en la raíz del proyecto.
  - No hace falta usar python-dotenv manualmente; BaseSettings lo gestiona.

FASE 2 - Valores por defecto:
  - API_V1_STR, PROJECT_NAME y los modelos tienen valores por defecto si no se definen en .env.
  - Las API Keys son Optional para que la app arranque sin ellas; los fetchers
    validan en tiempo de ejecución y lanzan FetchError si faltan.

FASE 3 - Uso:
  - Se importa 'settings' y se accede a settings.GEMINI_API_KEY, etc.
  - Los componentes aceptan un Settings explícito para poder probarlos aislados.
"""
from typing import Optional

from pydantic_settings import BaseSettings

from promptnav.schemas.history import Provider

# Valor de ejemplo del .env de plantilla; se trata igual que una key ausente
PLACEHOLDER_API_KEY = "YOUR_API_KEY_HERE"


class Settings(BaseSettings):
    """Configuración tipada accesible desde toda la aplicación."""
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Prompt History Navigator"
    LOG_LEVEL: str = "INFO"

    PROVIDER: Provider = Provider.GEMINI

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_FALLBACK_MODEL: str = "gemini-2.5-flash-lite"

    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-5"

    # Longitud de las vistas previas en la lista de historial
    PROMPT_PREVIEW_CHARS: int = 50
    RESPONSE_PREVIEW_CHARS: int = 80

    class Config:
        case_sensitive = True
        env_file = ".env"


def usable_key(api_key: Optional[str]) -> Optional[str]:
    """Devuelve la key si es utilizable; None si falta o es el placeholder."""
    if not api_key or api_key == PLACEHOLDER_API_KEY:
        return None
    return api_key


# Instancia global: un solo punto de acceso a la configuración
settings = Settings()
