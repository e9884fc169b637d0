"""
Semáforos de una intersección.

Este módulo implementa el autómata temporizado que controla los semáforos
de una intersección: en todo momento exactamente una ruta entrante está en
verde o amarillo, y las demás en rojo. Las rutas reciben el verde de a una,
en el orden fijado al crear los semáforos.
"""

import logging
from typing import List, Optional

from .route import Route, TrafficSignal
from src.utils.config import NetworkFileConfig

logger = logging.getLogger(__name__)


class IntersectionLights:
    """
    Conjunto de semáforos de una intersección.

    Cada ruta controlada tiene ``duration`` segundos de verde+amarillo, de
    los cuales los últimos ``yellow_time`` son amarillo. Luego pasa a rojo y
    la siguiente ruta del orden (cíclico) pasa a verde.

    Solo se crea a través de ``Intersection.add_traffic_lights``, que valida
    los parámetros.
    """

    def __init__(self, connections: List[Route], yellow_time: int, duration: int):
        """
        Inicializa los semáforos y pone en verde la primera ruta.

        Args:
            connections: Rutas entrantes en el orden en que reciben el verde
            yellow_time: Segundos de amarillo (al menos 1)
            duration: Segundos de verde+amarillo por ruta (mayor que yellow_time)
        """
        self.connections = list(connections)
        self.yellow_time = yellow_time
        self.duration = duration

        # Índice de la ruta activa (verde o amarillo)
        self.active_index = 0
        self.seconds_passed = 0

        if self.connections:
            self.connections[0].set_signal(TrafficSignal.GREEN)

    def get_yellow_time(self) -> int:
        return self.yellow_time

    def get_duration(self) -> int:
        return self.duration

    def get_connections(self) -> List[Route]:
        """Retorna las rutas controladas, en orden."""
        return list(self.connections)

    def get_active_route(self) -> Optional[Route]:
        """Retorna la ruta que está en verde o amarillo."""
        if not self.connections:
            return None
        return self.connections[self.active_index]

    def set_duration(self, duration: int):
        """
        Cambia la duración del ciclo verde+amarillo.

        El tiempo de la fase actual se reinicia, pero la ruta activa conserva
        su fase. Quien llama garantiza ``duration > yellow_time``.

        Args:
            duration: Nueva duración en segundos
        """
        self.duration = duration
        self.seconds_passed = 0
        logger.debug(f"Duración de semáforos cambiada a {duration}s")

    def one_second(self):
        """
        Simula el paso de un segundo.

        - Verde durante ``duration - yellow_time`` segundos: pasa a amarillo.
        - Amarillo durante ``yellow_time`` segundos: pasa a rojo y la
          siguiente ruta del orden pasa a verde.

        Sin rutas controladas no hace nada.
        """
        if not self.connections:
            return

        self.seconds_passed += 1

        active = self.connections[self.active_index]
        signal = active.get_signal()

        if (signal == TrafficSignal.GREEN and
                self.seconds_passed == self.duration - self.yellow_time):
            active.set_signal(TrafficSignal.YELLOW)
            self.seconds_passed = 0

        elif signal == TrafficSignal.YELLOW and self.seconds_passed == self.yellow_time:
            active.set_signal(TrafficSignal.RED)

            # Siguiente ruta (cíclico)
            self.active_index = (self.active_index + 1) % len(self.connections)
            self.connections[self.active_index].set_signal(TrafficSignal.GREEN)
            self.seconds_passed = 0

    def __str__(self) -> str:
        """Formato "duración:origen,origen,..." en el orden de los semáforos."""
        order = NetworkFileConfig.LINE_LIST_SEPARATOR.join(
            route.from_id for route in self.connections)
        return f"{self.duration}{NetworkFileConfig.LINE_INFO_SEPARATOR}{order}"

    def __repr__(self) -> str:
        active = self.get_active_route()
        return (f"IntersectionLights(order={[r.from_id for r in self.connections]}, "
                f"yellow={self.yellow_time}s, duration={self.duration}s, "
                f"active={active.from_id if active else None})")
