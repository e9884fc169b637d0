"""
Intersecciones de la red vial.

Una intersección es un nodo con nombre. Es dueña de sus rutas entrantes y,
opcionalmente, de un conjunto de semáforos que las controla.
"""

import logging
from typing import List, Optional

from .exceptions import InvalidOrderError, NetworkStateError, RouteNotFoundError
from .intersection_lights import IntersectionLights
from .route import Route
from src.utils.config import NetworkFileConfig, SpeedSignConfig, TrafficLightConfig

logger = logging.getLogger(__name__)


class Intersection:
    """
    Representa una intersección en la red vial.

    Dos intersecciones son iguales si y solo si tienen el mismo ID.
    """

    def __init__(self, intersection_id: str):
        """
        Inicializa una intersección sin rutas ni semáforos.

        Args:
            intersection_id: Identificador único de la intersección
        """
        self.id = intersection_id
        self.incoming: List[Route] = []
        self.lights: Optional[IntersectionLights] = None

    def get_id(self) -> str:
        return self.id

    def get_connections(self) -> List[Route]:
        """Retorna una copia de la lista de rutas entrantes."""
        return list(self.incoming)

    def get_connected_intersections(self) -> List[str]:
        """Retorna los IDs de las intersecciones de origen de las rutas entrantes."""
        return [route.from_id for route in self.incoming]

    def has_traffic_lights(self) -> bool:
        return self.lights is not None

    def get_traffic_lights(self) -> Optional[IntersectionLights]:
        return self.lights

    def get_connection(self, from_id: str) -> Route:
        """
        Retorna la ruta que llega a esta intersección desde ``from_id``.

        Raises:
            RouteNotFoundError: Si no existe esa ruta
        """
        for route in self.incoming:
            if route.from_id == from_id:
                return route
        raise RouteNotFoundError(f"No existe ruta desde '{from_id}' hasta '{self.id}'")

    def add_connection(self, from_id: str, default_speed: int) -> Route:
        """
        Crea una ruta entrante desde la intersección ``from_id``.

        Si la intersección ya tiene semáforos, la ruta nueva recibe una
        señal en rojo pero no se incorpora al orden de los semáforos.

        Args:
            from_id: ID de la intersección de origen
            default_speed: Velocidad por defecto de la ruta

        Returns:
            Route: La ruta creada

        Raises:
            ValueError: Si la velocidad es negativa
            NetworkStateError: Si ya existe una ruta desde ``from_id``
        """
        if default_speed < 0:
            raise ValueError(f"Velocidad por defecto negativa: {default_speed}")
        if from_id in self.get_connected_intersections():
            raise NetworkStateError(
                f"Ya existe una ruta desde '{from_id}' hasta '{self.id}'")

        route = Route(from_id, self.id, default_speed)

        if self.has_traffic_lights():
            # TODO: permitir reprogramar el orden para incluir rutas nuevas;
            # hoy quedan en rojo sin turno hasta que se llame add_lights.
            route.add_traffic_light()
            logger.warning(f"Ruta {route.id} agregada a una intersección con "
                           f"semáforos: queda en rojo fuera del orden")

        self.incoming.append(route)
        return route

    def add_traffic_lights(self, order: List[Route], yellow_time: int, duration: int):
        """
        Agrega (o reemplaza) los semáforos de la intersección.

        Cada ruta del orden recibe una señal nueva; la primera queda en verde
        y las demás en rojo. Si algún parámetro es inválido no se modifica
        nada.

        Args:
            order: Rutas entrantes en el orden en que reciben el verde
            yellow_time: Segundos de amarillo
            duration: Segundos de verde+amarillo por ruta

        Raises:
            ValueError: Si yellow_time < 1 o duration < yellow_time + 1
            InvalidOrderError: Si el orden está vacío o no es una permutación
                de las rutas entrantes
        """
        if yellow_time < TrafficLightConfig.MIN_YELLOW_TIME:
            raise ValueError(f"Tiempo de amarillo inválido: {yellow_time}s")
        if duration < yellow_time + TrafficLightConfig.MIN_GREEN_TIME:
            raise ValueError(f"Duración inválida: {duration}s (mín: "
                             f"{yellow_time + TrafficLightConfig.MIN_GREEN_TIME}s)")

        if not order:
            raise InvalidOrderError(f"Orden de semáforos vacío en '{self.id}'")
        if not self._is_permutation(order):
            raise InvalidOrderError(
                f"El orden {[route.from_id for route in order]} no es una "
                f"permutación de las rutas entrantes de '{self.id}'")

        for route in order:
            route.add_traffic_light()
        self.lights = IntersectionLights(order, yellow_time, duration)

        logger.debug(f"Semáforos en '{self.id}': {self.lights}")

    def _is_permutation(self, order: List[Route]) -> bool:
        """Verifica que ``order`` contenga exactamente las rutas entrantes."""
        if len(order) != len(self.incoming):
            return False
        return (all(route in self.incoming for route in order) and
                all(route in order for route in self.incoming))

    def set_light_duration(self, duration: int):
        """
        Cambia la duración del ciclo de los semáforos.

        Raises:
            NetworkStateError: Si la intersección no tiene semáforos
            ValueError: Si duration < amarillo + 1
        """
        if self.lights is None:
            raise NetworkStateError(f"La intersección '{self.id}' no tiene semáforos")
        minimum = self.lights.get_yellow_time() + TrafficLightConfig.MIN_GREEN_TIME
        if duration < minimum:
            raise ValueError(f"Duración inválida: {duration}s (mín: {minimum}s)")

        self.lights.set_duration(duration)

    def reduce_incoming_speed_signs(self):
        """
        Reduce la velocidad de los carteles de las rutas entrantes.

        Cada cartel con velocidad de 50 o más pasa a ``max(50, velocidad - 10)``.
        Las rutas sin cartel no se modifican.
        """
        cutoff = SpeedSignConfig.SPEED_REDUCTION_CUTOFF
        for route in self.incoming:
            if not route.has_speed_sign():
                continue
            current = route.get_speed()
            if current >= cutoff:
                route.set_speed_limit(
                    max(cutoff, current - SpeedSignConfig.SPEED_REDUCTION_AMOUNT))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        if self.lights is None:
            return self.id
        return f"{self.id}{NetworkFileConfig.LINE_INFO_SEPARATOR}{self.lights}"

    def __repr__(self) -> str:
        return (f"Intersection(id='{self.id}', incoming={len(self.incoming)}, "
                f"lights={self.has_traffic_lights()})")
