"""
Configuración global del sistema de gestión de la red vial.

Este módulo contiene todas las constantes y parámetros de configuración
utilizados en el proyecto.
"""

import logging
from pathlib import Path
from typing import Optional

# Rutas del proyecto
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
NETWORKS_DIR = DATA_DIR / "networks"
RESULTS_DIR = PROJECT_ROOT / "experiments" / "results"

# Archivos de datos
DEMO_NETWORK_FILE = NETWORKS_DIR / "demo.txt"


# Formato de archivos de red
class NetworkFileConfig:
    """Configuración del formato de texto de las redes."""

    LINE_INFO_SEPARATOR = ":"  # Separa campos en una misma línea
    LINE_LIST_SEPARATOR = ","  # Separa elementos de una lista
    COMMENT = ";"              # Prefijo de líneas de comentario
    ENCODING = "utf-8"

    # Cantidad de campos permitidos por tipo de línea
    INTERSECTION_FIELDS = (1, 3)  # id[:duración:orden]
    ROUTE_FIELDS = (4, 5)         # desde:hasta:velocidad:sensores[:cartel]
    SENSOR_FIELDS = 3             # TIPO:umbral:datos


# Parámetros de semáforos
class TrafficLightConfig:
    """Configuración de semáforos."""

    MIN_YELLOW_TIME = 1  # segundos
    DEFAULT_YELLOW_TIME = 1  # segundos, hasta que la red defina otro

    # La duración del ciclo debe superar al amarillo en al menos esto
    MIN_GREEN_TIME = 1  # segundos


# Carteles electrónicos de velocidad
class SpeedSignConfig:
    """Configuración de carteles de velocidad."""

    SPEED_REDUCTION_AMOUNT = 10  # km/h
    SPEED_REDUCTION_CUTOFF = 50  # km/h, nunca se reduce por debajo


# Sensores
class SensorConfig:
    """Configuración de sensores y congestión."""

    MIN_CONGESTION = 0
    MAX_CONGESTION = 100
    MIN_THRESHOLD = 1


# Parámetros del simulador
class SimulatorConfig:
    """Configuración del simulador de tráfico."""

    TIME_STEP = 1  # Paso de simulación en segundos
    DEFAULT_SIMULATION_DURATION = 3600  # 1 hora en segundos
    REPORT_INTERVAL = 60  # segundos entre reportes de progreso


# Visualización
class VisualizationConfig:
    """Configuración de visualización."""

    FIGURE_SIZE = (12, 8)
    DPI = 100
    SAVE_FORMAT = "png"
    LAYOUT_SEED = 42

    NODE_COLOR = "#4ECDC4"
    NODE_WITH_LIGHTS_COLOR = "#FF6B6B"
    CONGESTION_CMAP = "RdYlGn_r"


# Logging
class LoggingConfig:
    """Configuración de logging."""

    LOG_LEVEL = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = LoggingConfig.LOG_LEVEL,
                  log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configura el logger raíz del paquete.

    Args:
        level: Nivel de logging ("DEBUG", "INFO", ...)
        log_file: Archivo opcional donde duplicar los mensajes

    Returns:
        logging.Logger: Logger raíz del paquete ``src``
    """
    logger = logging.getLogger("src")
    if not logger.handlers:
        formatter = logging.Formatter(LoggingConfig.LOG_FORMAT)

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if log_file is not None:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.setLevel(level)
    return logger


# Crear directorios si no existen
def ensure_directories():
    """Crea los directorios necesarios si no existen."""
    for directory in [DATA_DIR, NETWORKS_DIR, RESULTS_DIR]:
        directory.mkdir(parents=True, exist_ok=True)


if __name__ == "__main__":
    print(f"Directorio del proyecto: {PROJECT_ROOT}")
    print(f"Directorio de datos: {DATA_DIR}")
    print(f"Archivo de red de ejemplo: {DEMO_NETWORK_FILE}")
    ensure_directories()
    print("Directorios verificados/creados correctamente")
