"""Configuración de logging de la aplicación."""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configura el logger raíz una sola vez; llamadas posteriores solo ajustan el nivel."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("promptnav").setLevel(level.upper())
