"""
Sensores de tráfico y cálculo de congestión.

Los sensores soportados forman un conjunto cerrado (``SensorKind``). Cada
sensor recorre cíclicamente su ventana de datos, avanzando un valor por
segundo simulado, y calcula la congestión (0-100) según su tipo.
"""

import math
from enum import Enum
from typing import List, Sequence

import numpy as np

from src.utils.config import NetworkFileConfig, SensorConfig


class SensorKind(Enum):
    """Tipos de sensores soportados, con su código en los archivos de red."""
    PRESSURE_PAD = "PP"
    SPEED_CAMERA = "SC"
    VEHICLE_COUNT = "VC"

    @classmethod
    def from_code(cls, code: str) -> "SensorKind":
        """
        Retorna el tipo de sensor correspondiente a un código.

        Raises:
            ValueError: Si el código no corresponde a ningún sensor soportado
        """
        for kind in cls:
            if kind.value == code:
                return kind
        raise ValueError(f"Tipo de sensor desconocido: '{code}'")


def round_half_up(value: float) -> int:
    """Redondea al entero más cercano, con los medios hacia arriba."""
    return int(math.floor(value + 0.5))


def _clamp_congestion(value: int) -> int:
    return min(max(value, SensorConfig.MIN_CONGESTION), SensorConfig.MAX_CONGESTION)


class Sensor:
    """
    Sensor de tráfico ubicado sobre una ruta.

    El valor observado en cada instante es ``data[t % len(data)]``, donde
    ``t`` son los segundos transcurridos desde su creación.
    """

    def __init__(self, kind: SensorKind, data: Sequence[int], threshold: int):
        """
        Inicializa un sensor.

        Args:
            kind: Tipo de sensor
            data: Ventana de datos (no vacía, valores no negativos)
            threshold: Umbral que indica congestión alta (mayor que cero)

        Raises:
            ValueError: Si los datos o el umbral no son válidos
        """
        if not data:
            raise ValueError("Un sensor necesita al menos un dato")
        if any(value < 0 for value in data):
            raise ValueError(f"Datos de sensor negativos: {list(data)}")
        if threshold < SensorConfig.MIN_THRESHOLD:
            raise ValueError(f"Umbral de sensor inválido: {threshold} (mín: "
                             f"{SensorConfig.MIN_THRESHOLD})")

        self.kind = kind
        self.data = list(data)
        self.threshold = threshold
        self.time_elapsed = 0

    def get_current_value(self) -> int:
        """Retorna el dato observado en el segundo actual."""
        return self.data[self.time_elapsed % len(self.data)]

    def one_second(self):
        """Avanza el reloj del sensor un segundo."""
        self.time_elapsed += 1

    def get_congestion(self) -> int:
        """
        Calcula la congestión actual según el tipo de sensor.

        - Placa de presión: proporción de vehículos sobre el umbral.
        - Cámara de velocidad: cuánto por debajo del umbral va el tránsito.
        - Contador de vehículos: complemento del flujo sobre el umbral.

        Returns:
            int: Congestión entre 0 y 100
        """
        value = self.get_current_value()
        percentage = 100 * value / self.threshold

        if self.kind == SensorKind.PRESSURE_PAD:
            return min(SensorConfig.MAX_CONGESTION, round_half_up(percentage))
        elif self.kind == SensorKind.SPEED_CAMERA:
            if value >= self.threshold:
                return SensorConfig.MIN_CONGESTION
            return _clamp_congestion(round_half_up(100 - percentage))
        elif self.kind == SensorKind.VEHICLE_COUNT:
            return _clamp_congestion(round_half_up(100 - percentage))
        raise ValueError(f"Tipo de sensor no soportado: {self.kind}")

    def __str__(self) -> str:
        sep = NetworkFileConfig.LINE_INFO_SEPARATOR
        values = NetworkFileConfig.LINE_LIST_SEPARATOR.join(str(v) for v in self.data)
        return f"{self.kind.value}{sep}{self.threshold}{sep}{values}"

    def __repr__(self) -> str:
        return (f"Sensor(kind={self.kind.value}, threshold={self.threshold}, "
                f"window={len(self.data)}, t={self.time_elapsed})")


def create_sensor(code: str, data: Sequence[int], threshold: int) -> Sensor:
    """
    Crea un sensor a partir de su código de tipo ("PP", "SC" o "VC").

    Raises:
        ValueError: Si el código, los datos o el umbral no son válidos
    """
    return Sensor(SensorKind.from_code(code), data, threshold)


class AveragingCongestionCalculator:
    """Calcula la congestión de una ruta como el promedio de sus sensores."""

    def __init__(self, sensors: List[Sensor]):
        self.sensors = sensors

    def calculate_congestion(self) -> int:
        """
        Retorna el promedio redondeado de la congestión de los sensores.

        Returns:
            int: Congestión promedio (0 si no hay sensores)
        """
        if not self.sensors:
            return 0
        mean = np.mean([sensor.get_congestion() for sensor in self.sensors])
        return round_half_up(float(mean))
