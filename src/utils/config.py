"""
Configuración global del sistema de planificación de rutas.

Este módulo contiene todas las constantes y parámetros de configuración
utilizados en el proyecto.
"""

import logging
from pathlib import Path

# Rutas del proyecto
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
CITY_DIR = DATA_DIR / "city"

# Archivos de datos
NETWORK_FILE = CITY_DIR / "sample_city.json"


# Parámetros de ruteo
class RoutingConfig:
    """Configuración de los algoritmos de ruta."""

    # Centinela para intersecciones no alcanzadas
    INFINITY = float('inf')

    # Rutas alternativas
    DEFAULT_MAX_ALTERNATIVES = 3


# Visualización
class VisualizationConfig:
    """Configuración de visualización."""

    FIGURE_SIZE = (12, 8)
    LAYOUT_SEED = 42  # Semilla del spring layout (dibujos reproducibles)

    NODE_COLOR = "#4ECDC4"
    ROUTE_NODE_COLOR = "#FF6B6B"
    EDGE_COLOR = "gray"
    ROUTE_EDGE_COLOR = "#d62728"


# Logging
class LoggingConfig:
    """Configuración de logging."""

    LOG_LEVEL = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE = PROJECT_ROOT / "routing.log"


def setup_logging(level: str = LoggingConfig.LOG_LEVEL, to_file: bool = False):
    """
    Configura el logging raíz según LoggingConfig.

    Se llama desde los scripts, nunca al importar la librería.

    Args:
        level: Nivel de logging ("DEBUG", "INFO", ...)
        to_file: Si True, escribe además en LoggingConfig.LOG_FILE
    """
    handlers = [logging.StreamHandler()]
    if to_file:
        handlers.append(logging.FileHandler(LoggingConfig.LOG_FILE, encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LoggingConfig.LOG_FORMAT,
        handlers=handlers,
        force=True
    )


if __name__ == "__main__":
    print(f"Directorio del proyecto: {PROJECT_ROOT}")
    print(f"Directorio de datos: {DATA_DIR}")
    print(f"Archivo de red: {NETWORK_FILE}")
    print(f"Archivo de log: {LoggingConfig.LOG_FILE}")
