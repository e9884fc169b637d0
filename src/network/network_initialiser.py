"""
Carga de redes viales desde texto.

El formato es orientado a líneas (las líneas que empiezan con ';' son
comentarios y se ignoran)::

    cantidadIntersecciones
    cantidadRutas
    tiempoAmarillo
    idInterseccion[:duracion:origen,origen,...]      (una por intersección)
    desde:hasta:velocidad:cantidadSensores[:cartel]  (una por ruta)
    TIPO:umbral:dato,dato,...                        (cantidadSensores veces)

Cualquier violación del formato o de los invariantes de la red se reporta
con ``InvalidNetworkError``; la red a medio construir nunca se devuelve.
"""

import io
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .exceptions import (
    DuplicateSensorError,
    IntersectionNotFoundError,
    InvalidNetworkError,
    InvalidOrderError,
    NetworkStateError,
)
from .sensors import create_sensor
from .traffic_network import Network
from src.utils.config import NetworkFileConfig, SensorConfig, TrafficLightConfig

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


class NetworkInitialiser:
    """
    Parser y validador de una red guardada.

    El buffer de líneas, el cursor y la red en construcción son locales a
    la instancia, y cada llamada a ``load`` los reinicia.
    """

    LINE_INFO_SEPARATOR = NetworkFileConfig.LINE_INFO_SEPARATOR
    LINE_LIST_SEPARATOR = NetworkFileConfig.LINE_LIST_SEPARATOR
    COMMENT = NetworkFileConfig.COMMENT

    def __init__(self, lines: Iterable[str]):
        """
        Inicializa el parser.

        Args:
            lines: Líneas del texto de la red (con o sin salto de línea final)
        """
        # (número de línea original, texto), sin comentarios
        self.source: List[Tuple[int, str]] = []
        for number, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            if self._is_blank(line) or not line.startswith(self.COMMENT):
                self.source.append((number, line))

        self._reset()

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "NetworkInitialiser":
        """
        Crea un parser con el contenido de un archivo.

        Raises:
            FileNotFoundError: Si el archivo no existe
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"No se encontró el archivo: {filepath}")
        # Solo \n, \r y \r\n separan líneas
        with path.open(encoding=NetworkFileConfig.ENCODING, newline=None) as handle:
            return cls(handle)

    def load(self) -> Network:
        """
        Valida las líneas y construye la red.

        Returns:
            Network: La red completamente validada

        Raises:
            InvalidNetworkError: Si el texto no respeta el formato
        """
        self._reset()
        try:
            self._check_blank_lines()
            num_intersections, num_routes = self._load_header()
            self._load_intersections(num_intersections)
            self._load_routes_and_sensors(num_routes)
            self._check_no_extra_lines()
            self._load_lights()
        except InvalidNetworkError as err:
            logger.warning(f"Red inválida: {err}")
            raise

        logger.info(f"✓ Red cargada: {num_intersections} intersecciones, "
                    f"{num_routes} rutas")
        return self.network

    def _reset(self):
        """Prepara una carga nueva: cursor al inicio y red vacía."""
        self.lines = list(self.source)
        self.position = 0
        self.network = Network()
        self.pending_lights: List[Tuple[int, str, int, List[str]]] = []

    # Validaciones generales

    @staticmethod
    def _is_blank(line: str) -> bool:
        return not line.strip()

    def _check_blank_lines(self):
        """Solo la última línea puede estar en blanco, y como máximo una."""
        if not self.lines:
            raise InvalidNetworkError("El archivo está vacío")

        for index, (number, line) in enumerate(self.lines):
            if self._is_blank(line) and index != len(self.lines) - 1:
                raise InvalidNetworkError(f"Línea {number}: línea vacía inesperada")

        if self._is_blank(self.lines[-1][1]):
            self.lines.pop()
        if not self.lines:
            raise InvalidNetworkError("El archivo está vacío")

    def _check_no_extra_lines(self):
        if self.position < len(self.lines):
            number, line = self.lines[self.position]
            raise InvalidNetworkError(
                f"Línea {number}: sobran líneas al final de la red ('{line}')")

    def _next_line(self, expected: str) -> Tuple[int, str]:
        if self.position >= len(self.lines):
            raise InvalidNetworkError(f"Fin de archivo: se esperaba {expected}")
        entry = self.lines[self.position]
        self.position += 1
        return entry

    def _split(self, number: int, line: str, allowed: Tuple[int, ...],
               what: str) -> List[str]:
        fields = line.split(self.LINE_INFO_SEPARATOR)
        if len(fields) not in allowed:
            raise InvalidNetworkError(
                f"Línea {number}: {what} con {len(fields)} campos ('{line}')")
        return fields

    @staticmethod
    def _parse_int(number: int, token: str, minimum: Optional[int] = None) -> int:
        if not _INTEGER.fullmatch(token):
            raise InvalidNetworkError(f"Línea {number}: '{token}' no es un entero")
        value = int(token)
        if minimum is not None and value < minimum:
            raise InvalidNetworkError(
                f"Línea {number}: valor {value} menor que el mínimo {minimum}")
        return value

    def _parse_int_list(self, number: int, token: str, minimum: int) -> List[int]:
        return [self._parse_int(number, item, minimum)
                for item in token.split(self.LINE_LIST_SEPARATOR)]

    # Secciones del archivo

    def _load_header(self) -> Tuple[int, int]:
        number, line = self._next_line("la cantidad de intersecciones")
        num_intersections = self._parse_int(number, line, minimum=0)

        number, line = self._next_line("la cantidad de rutas")
        num_routes = self._parse_int(number, line, minimum=0)

        number, line = self._next_line("el tiempo de amarillo")
        yellow_time = self._parse_int(number, line,
                                      minimum=TrafficLightConfig.MIN_YELLOW_TIME)
        self.network.set_yellow_time(yellow_time)

        return num_intersections, num_routes

    def _load_intersections(self, count: int):
        minimum_duration = (self.network.get_yellow_time() +
                            TrafficLightConfig.MIN_GREEN_TIME)

        for _ in range(count):
            number, line = self._next_line("una intersección")
            fields = self._split(number, line, NetworkFileConfig.INTERSECTION_FIELDS,
                                 "intersección")
            intersection_id = fields[0]

            try:
                self.network.create_intersection(intersection_id)
            except ValueError as err:
                raise InvalidNetworkError(f"Línea {number}: {err}") from err

            if len(fields) == 3:
                duration = self._parse_int(number, fields[1], minimum=minimum_duration)
                order = fields[2].split(self.LINE_LIST_SEPARATOR)
                if any(not origin for origin in order):
                    raise InvalidNetworkError(
                        f"Línea {number}: orden de semáforos vacío o incompleto")
                # Los semáforos se agregan cuando ya existen las rutas
                self.pending_lights.append((number, intersection_id, duration, order))

    def _load_routes_and_sensors(self, count: int):
        for _ in range(count):
            number, line = self._next_line("una ruta")
            fields = self._split(number, line, NetworkFileConfig.ROUTE_FIELDS, "ruta")
            from_id, to_id = fields[0], fields[1]
            speed = self._parse_int(number, fields[2], minimum=0)
            num_sensors = self._parse_int(number, fields[3], minimum=0)

            try:
                self.network.connect_intersections(from_id, to_id, speed)
            except IntersectionNotFoundError as err:
                raise InvalidNetworkError(f"Línea {number}: {err}") from err
            except NetworkStateError as err:
                raise InvalidNetworkError(f"Línea {number}: ruta duplicada") from err

            if len(fields) == 5:
                sign_speed = self._parse_int(number, fields[4], minimum=0)
                self.network.add_speed_sign(from_id, to_id, sign_speed)

            for _ in range(num_sensors):
                self._load_sensor(from_id, to_id)

    def _load_sensor(self, from_id: str, to_id: str):
        number, line = self._next_line(f"un sensor de la ruta {from_id}:{to_id}")
        code, threshold, data = self._split(
            number, line, (NetworkFileConfig.SENSOR_FIELDS,), "sensor")

        threshold = self._parse_int(number, threshold,
                                    minimum=SensorConfig.MIN_THRESHOLD)
        values = self._parse_int_list(number, data, minimum=0)

        try:
            sensor = create_sensor(code, values, threshold)
            self.network.add_sensor(from_id, to_id, sensor)
        except ValueError as err:
            raise InvalidNetworkError(f"Línea {number}: {err}") from err
        except DuplicateSensorError as err:
            raise InvalidNetworkError(f"Línea {number}: {err}") from err

    def _load_lights(self):
        for number, intersection_id, duration, order in self.pending_lights:
            try:
                self.network.add_lights(intersection_id, duration, order)
            except (InvalidOrderError, ValueError) as err:
                raise InvalidNetworkError(f"Línea {number}: {err}") from err


def load_network(filepath: Union[str, Path]) -> Network:
    """
    Carga una red guardada desde un archivo.

    Args:
        filepath: Ruta al archivo de red

    Returns:
        Network: La red cargada

    Raises:
        FileNotFoundError: Si el archivo no existe
        InvalidNetworkError: Si el archivo no respeta el formato
    """
    return NetworkInitialiser.from_file(filepath).load()


def loads_network(text: str) -> Network:
    """Carga una red a partir de su representación en texto."""
    return NetworkInitialiser(io.StringIO(text, newline=None)).load()


if __name__ == "__main__":
    from src.utils.config import DEMO_NETWORK_FILE, setup_logging

    setup_logging()
    network = load_network(DEMO_NETWORK_FILE)

    print("\n" + "="*60)
    print("RED CARGADA")
    print("="*60)
    print(network)
