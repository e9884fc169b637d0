"""
Rutas dirigidas entre intersecciones.

Una ruta es una arista dirigida del grafo. Guarda el ID de su intersección
de origen (no una referencia), y puede llevar una señal de semáforo, un
cartel electrónico de velocidad y sensores de tráfico.
"""

from enum import Enum
from typing import List, Optional

from .exceptions import DuplicateSensorError, NetworkStateError
from .sensors import AveragingCongestionCalculator, Sensor
from src.utils.config import NetworkFileConfig


class TrafficSignal(Enum):
    """Estados posibles de la señal de un semáforo."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class TrafficLight:
    """Señal de semáforo ubicada al final de una ruta. Empieza en rojo."""

    def __init__(self, signal: TrafficSignal = TrafficSignal.RED):
        self.signal = signal

    def get_signal(self) -> TrafficSignal:
        return self.signal

    def set_signal(self, signal: TrafficSignal):
        self.signal = signal

    def __str__(self) -> str:
        return self.signal.value

    def __repr__(self) -> str:
        return f"TrafficLight({self.signal.name})"


class SpeedSign:
    """Cartel electrónico que muestra la velocidad máxima vigente."""

    def __init__(self, initial_speed: int):
        self.current_speed = 0
        self.set_current_speed(initial_speed)

    def get_current_speed(self) -> int:
        return self.current_speed

    def set_current_speed(self, speed: int):
        if speed < 0:
            raise ValueError(f"Velocidad de cartel negativa: {speed}")
        self.current_speed = speed

    def __repr__(self) -> str:
        return f"SpeedSign({self.current_speed} km/h)"


class Route:
    """
    Representa una ruta dirigida entre dos intersecciones.

    La identidad de una ruta es el par ordenado (origen, destino); dentro de
    una red hay como máximo una ruta por par.
    """

    def __init__(self, from_id: str, to_id: str, default_speed: int):
        """
        Inicializa una ruta.

        Args:
            from_id: ID de la intersección de origen
            to_id: ID de la intersección de destino
            default_speed: Velocidad máxima por defecto (km/h, no negativa)

        Raises:
            ValueError: Si la velocidad por defecto es negativa
        """
        if default_speed < 0:
            raise ValueError(f"Velocidad por defecto negativa: {default_speed}")

        self.from_id = from_id
        self.to_id = to_id
        self.default_speed = default_speed

        self.traffic_light: Optional[TrafficLight] = None
        self.speed_sign: Optional[SpeedSign] = None
        self.sensors: List[Sensor] = []

    @property
    def id(self) -> str:
        """ID compuesto "desde:hasta"."""
        return f"{self.from_id}{NetworkFileConfig.LINE_INFO_SEPARATOR}{self.to_id}"

    def get_speed(self) -> int:
        """
        Retorna la velocidad máxima vigente.

        Returns:
            int: Velocidad del cartel si existe, si no la velocidad por defecto
        """
        if self.speed_sign is not None:
            return self.speed_sign.get_current_speed()
        return self.default_speed

    # Semáforo

    def has_traffic_light(self) -> bool:
        return self.traffic_light is not None

    def get_traffic_light(self) -> Optional[TrafficLight]:
        return self.traffic_light

    def add_traffic_light(self):
        """Agrega (o reemplaza) la señal de semáforo, inicialmente en rojo."""
        self.traffic_light = TrafficLight()

    def get_signal(self) -> Optional[TrafficSignal]:
        """Retorna la señal actual, o None si la ruta no tiene semáforo."""
        if self.traffic_light is None:
            return None
        return self.traffic_light.get_signal()

    def set_signal(self, signal: TrafficSignal):
        """
        Cambia la señal del semáforo de la ruta.

        Raises:
            NetworkStateError: Si la ruta no tiene semáforo
        """
        if self.traffic_light is None:
            raise NetworkStateError(f"La ruta {self.id} no tiene semáforo")
        self.traffic_light.set_signal(signal)

    # Cartel de velocidad

    def has_speed_sign(self) -> bool:
        return self.speed_sign is not None

    def add_speed_sign(self, initial_speed: int):
        """
        Agrega un cartel electrónico de velocidad.

        Raises:
            ValueError: Si la velocidad inicial es negativa
        """
        self.speed_sign = SpeedSign(initial_speed)

    def set_speed_limit(self, new_limit: int):
        """
        Cambia la velocidad que muestra el cartel electrónico.

        Raises:
            NetworkStateError: Si la ruta no tiene cartel
            ValueError: Si la velocidad es negativa
        """
        if self.speed_sign is None:
            raise NetworkStateError(f"La ruta {self.id} no tiene cartel de velocidad")
        self.speed_sign.set_current_speed(new_limit)

    # Sensores

    def get_sensors(self) -> List[Sensor]:
        """Retorna una copia de la lista de sensores."""
        return list(self.sensors)

    def add_sensor(self, sensor: Sensor):
        """
        Agrega un sensor a la ruta.

        Raises:
            DuplicateSensorError: Si ya hay un sensor del mismo tipo
        """
        for existing in self.sensors:
            if existing.kind == sensor.kind:
                raise DuplicateSensorError(
                    f"La ruta {self.id} ya tiene un sensor {sensor.kind.value}")
        self.sensors.append(sensor)

    def get_congestion(self) -> int:
        """Retorna la congestión promedio de los sensores de la ruta (0-100)."""
        return AveragingCongestionCalculator(self.sensors).calculate_congestion()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return self.from_id == other.from_id and self.to_id == other.to_id

    def __hash__(self) -> int:
        return hash((self.from_id, self.to_id))

    def __str__(self) -> str:
        """
        Representación en el formato de archivo de red.

        La primera línea es "desde:hasta:velocidad:sensores[:cartel]"; le
        siguen las líneas de los sensores, ordenadas alfabéticamente.
        """
        sep = NetworkFileConfig.LINE_INFO_SEPARATOR
        line = (f"{self.from_id}{sep}{self.to_id}{sep}{self.default_speed}"
                f"{sep}{len(self.sensors)}")
        if self.speed_sign is not None:
            line += f"{sep}{self.speed_sign.get_current_speed()}"

        sensor_lines = sorted(str(sensor) for sensor in self.sensors)
        return "\n".join([line] + sensor_lines)

    def __repr__(self) -> str:
        return (f"Route({self.from_id} → {self.to_id}, speed={self.get_speed()}, "
                f"sensors={len(self.sensors)})")
