"""
Modelo de red vial como grafo dirigido.

Este módulo implementa la red como un conjunto de intersecciones (nodos)
unidas por rutas dirigidas (aristas). La red valida los invariantes
referenciales: toda ruta une intersecciones existentes y hay como máximo
una ruta por par ordenado de intersecciones.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import matplotlib.pyplot as plt
import networkx as nx

from .exceptions import (
    DuplicateSensorError,
    IntersectionNotFoundError,
    InvalidOrderError,
    NetworkStateError,
    RouteNotFoundError,
)
from .intersection import Intersection
from .route import Route
from .sensors import Sensor
from src.utils.config import NetworkFileConfig, TrafficLightConfig, VisualizationConfig

logger = logging.getLogger(__name__)


class Network:
    """
    Representa la red vial completa como un grafo dirigido G = (V, E).

    Las intersecciones se guardan por ID; cada ruta pertenece a su
    intersección de destino. Un ``nx.DiGraph`` replica la topología para
    las consultas de conectividad.
    """

    def __init__(self):
        """Inicializa una red vacía."""
        self.intersections: Dict[str, Intersection] = {}
        self.graph = nx.DiGraph()
        self.yellow_time = TrafficLightConfig.DEFAULT_YELLOW_TIME

    def get_yellow_time(self) -> int:
        """Retorna el tiempo de amarillo de los semáforos nuevos (segundos)."""
        return self.yellow_time

    def set_yellow_time(self, yellow_time: int):
        """
        Define el tiempo de amarillo para los semáforos que se agreguen luego.

        Los semáforos existentes conservan su tiempo de amarillo.

        Raises:
            ValueError: Si yellow_time < 1
        """
        if yellow_time < TrafficLightConfig.MIN_YELLOW_TIME:
            raise ValueError(f"Tiempo de amarillo inválido: {yellow_time}s "
                             f"(mín: {TrafficLightConfig.MIN_YELLOW_TIME}s)")
        self.yellow_time = yellow_time

    def create_intersection(self, intersection_id: str):
        """
        Crea una intersección y la agrega a la red.

        Args:
            intersection_id: ID de la nueva intersección

        Raises:
            ValueError: Si el ID ya existe, contiene ':' o es solo espacios
        """
        if intersection_id in self.intersections:
            raise ValueError(f"Ya existe la intersección '{intersection_id}'")
        if NetworkFileConfig.LINE_INFO_SEPARATOR in intersection_id:
            raise ValueError(f"ID de intersección con carácter inválido "
                             f"'{NetworkFileConfig.LINE_INFO_SEPARATOR}': "
                             f"'{intersection_id}'")
        if not intersection_id.strip():
            raise ValueError("ID de intersección vacío")

        self.intersections[intersection_id] = Intersection(intersection_id)
        self.graph.add_node(intersection_id)
        logger.debug(f"Intersección creada: {intersection_id}")

    def find_intersection(self, intersection_id: str) -> Intersection:
        """
        Retorna la intersección con el ID dado.

        Raises:
            IntersectionNotFoundError: Si no existe
        """
        intersection = self.intersections.get(intersection_id)
        if intersection is None:
            raise IntersectionNotFoundError(
                f"No existe la intersección '{intersection_id}'")
        return intersection

    def get_intersections(self) -> List[Intersection]:
        """Retorna una lista nueva con todas las intersecciones."""
        return list(self.intersections.values())

    def get_routes(self) -> List[Route]:
        """Retorna todas las rutas de la red."""
        routes = []
        for intersection in self.intersections.values():
            routes.extend(intersection.get_connections())
        return routes

    def connect_intersections(self, from_id: str, to_id: str, default_speed: int):
        """
        Crea una ruta desde ``from_id`` hasta ``to_id``.

        Args:
            from_id: ID de la intersección de origen
            to_id: ID de la intersección de destino
            default_speed: Velocidad por defecto de la ruta

        Raises:
            IntersectionNotFoundError: Si alguna de las dos no existe
            NetworkStateError: Si ya existe una ruta entre ellas
            ValueError: Si la velocidad es negativa
        """
        destination = self.find_intersection(to_id)
        self.find_intersection(from_id)

        if from_id in destination.get_connected_intersections():
            raise NetworkStateError(f"Ya existe una ruta {from_id} → {to_id}")
        if default_speed < 0:
            raise ValueError(f"Velocidad por defecto negativa: {default_speed}")

        route = destination.add_connection(from_id, default_speed)
        self.graph.add_edge(from_id, to_id, route=route)
        logger.debug(f"Ruta creada: {route.id} ({default_speed} km/h)")

    def get_connection(self, from_id: str, to_id: str) -> Route:
        """
        Retorna la ruta que une las dos intersecciones.

        Raises:
            IntersectionNotFoundError: Si alguna de las dos no existe
            RouteNotFoundError: Si no hay ruta entre ellas
        """
        self.find_intersection(from_id)
        destination = self.find_intersection(to_id)
        return destination.get_connection(from_id)

    def add_lights(self, intersection_id: str, duration: int, order: Iterable[str]):
        """
        Agrega semáforos a una intersección, reemplazando los existentes.

        Args:
            intersection_id: ID de la intersección
            duration: Segundos de verde+amarillo por ruta
            order: IDs de las intersecciones de origen, en el orden en que
                sus rutas reciben el verde

        Raises:
            IntersectionNotFoundError: Si la intersección no existe
            InvalidOrderError: Si el orden está vacío, nombra una ruta que no
                existe, o no es una permutación de las rutas entrantes
            ValueError: Si duration < amarillo de la red + 1
        """
        target = self.find_intersection(intersection_id)

        green_order = []
        for from_id in order:
            try:
                green_order.append(target.get_connection(from_id))
            except RouteNotFoundError as err:
                raise InvalidOrderError(
                    f"'{from_id}' no tiene ruta hacia '{intersection_id}'") from err

        if not green_order:
            raise InvalidOrderError(f"Orden de semáforos vacío en '{intersection_id}'")
        if duration < self.yellow_time + TrafficLightConfig.MIN_GREEN_TIME:
            raise ValueError(f"Duración inválida: {duration}s (mín: "
                             f"{self.yellow_time + TrafficLightConfig.MIN_GREEN_TIME}s)")

        target.add_traffic_lights(green_order, self.yellow_time, duration)

    def change_light_duration(self, intersection_id: str, duration: int):
        """
        Cambia la duración del ciclo de los semáforos de una intersección.

        Raises:
            IntersectionNotFoundError: Si la intersección no existe
            NetworkStateError: Si no tiene semáforos
            ValueError: Si duration < amarillo de la red + 1
        """
        intersection = self.find_intersection(intersection_id)
        if not intersection.has_traffic_lights():
            raise NetworkStateError(
                f"La intersección '{intersection_id}' no tiene semáforos")
        if duration < self.yellow_time + TrafficLightConfig.MIN_GREEN_TIME:
            raise ValueError(f"Duración inválida: {duration}s (mín: "
                             f"{self.yellow_time + TrafficLightConfig.MIN_GREEN_TIME}s)")

        intersection.set_light_duration(duration)

    def add_speed_sign(self, from_id: str, to_id: str, initial_speed: int):
        """
        Agrega un cartel electrónico de velocidad a una ruta.

        Raises:
            ValueError: Si la velocidad es negativa
            IntersectionNotFoundError: Si alguna intersección no existe
            RouteNotFoundError: Si no hay ruta entre ellas
        """
        if initial_speed < 0:
            raise ValueError(f"Velocidad de cartel negativa: {initial_speed}")
        self.get_connection(from_id, to_id).add_speed_sign(initial_speed)

    def set_speed_limit(self, from_id: str, to_id: str, new_limit: int):
        """
        Cambia la velocidad del cartel electrónico de una ruta.

        Raises:
            IntersectionNotFoundError: Si alguna intersección no existe
            RouteNotFoundError: Si no hay ruta entre ellas
            NetworkStateError: Si la ruta no tiene cartel
            ValueError: Si la velocidad es negativa
        """
        route = self.get_connection(from_id, to_id)
        if not route.has_speed_sign():
            raise NetworkStateError(f"La ruta {route.id} no tiene cartel de velocidad")
        if new_limit < 0:
            raise ValueError(f"Velocidad negativa: {new_limit}")
        route.set_speed_limit(new_limit)

    def add_sensor(self, from_id: str, to_id: str, sensor: Sensor):
        """
        Agrega un sensor a una ruta.

        Raises:
            IntersectionNotFoundError: Si alguna intersección no existe
            RouteNotFoundError: Si no hay ruta entre ellas
            DuplicateSensorError: Si la ruta ya tiene un sensor de ese tipo
        """
        route = self.get_connection(from_id, to_id)
        if any(existing.kind == sensor.kind for existing in route.get_sensors()):
            raise DuplicateSensorError(
                f"La ruta {route.id} ya tiene un sensor {sensor.kind.value}")
        route.add_sensor(sensor)

    def get_congestion(self, from_id: str, to_id: str) -> int:
        """Retorna la congestión (0-100) de la ruta entre dos intersecciones."""
        return self.get_connection(from_id, to_id).get_congestion()

    def make_two_way(self, from_id: str, to_id: str):
        """
        Crea la ruta inversa de una ruta existente.

        La ruta nueva tiene como velocidad por defecto la velocidad vigente de
        la original y, si la original tiene cartel, un cartel con la misma
        velocidad.

        Raises:
            IntersectionNotFoundError: Si alguna intersección no existe
            RouteNotFoundError: Si no existe la ruta original
            NetworkStateError: Si ya existe la ruta inversa
        """
        one_way = self.get_connection(from_id, to_id)
        origin = self.find_intersection(from_id)

        if to_id in origin.get_connected_intersections():
            raise NetworkStateError(f"Ya existe la ruta inversa {to_id} → {from_id}")

        self.connect_intersections(to_id, from_id, one_way.get_speed())
        if one_way.has_speed_sign():
            self.get_connection(to_id, from_id).add_speed_sign(one_way.get_speed())

    # Consultas de conectividad

    def get_neighbors(self, intersection_id: str) -> List[str]:
        """
        Retorna las intersecciones alcanzables por una ruta saliente.

        Raises:
            IntersectionNotFoundError: Si la intersección no existe
        """
        self.find_intersection(intersection_id)
        return list(self.graph.successors(intersection_id))

    def get_incoming_neighbors(self, intersection_id: str) -> List[str]:
        """
        Retorna las intersecciones con rutas hacia la dada.

        Raises:
            IntersectionNotFoundError: Si la intersección no existe
        """
        self.find_intersection(intersection_id)
        return list(self.graph.predecessors(intersection_id))

    def get_shortest_path(self, origin: str, destination: str) -> Optional[List[str]]:
        """
        Calcula el camino con menos rutas entre dos intersecciones.

        Returns:
            Lista de IDs de intersecciones formando el camino, o None si no
            hay camino o alguna intersección no existe
        """
        try:
            return nx.shortest_path(self.graph, origin, destination)
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return None

    def get_network_stats(self) -> Dict:
        """
        Calcula estadísticas de la red.

        Returns:
            dict: Diccionario con estadísticas de la red
        """
        routes = self.get_routes()
        return {
            'num_intersections': len(self.intersections),
            'num_routes': len(routes),
            'num_traffic_lights': sum(1 for i in self.intersections.values()
                                      if i.has_traffic_lights()),
            'num_sensors': sum(len(route.get_sensors()) for route in routes),
            'num_speed_signs': sum(1 for route in routes if route.has_speed_sign()),
            'yellow_time': self.yellow_time,
            'is_connected': (nx.is_weakly_connected(self.graph)
                             if self.intersections else False),
        }

    def save(self, filepath: Union[str, Path]):
        """
        Guarda la red en un archivo de texto en el formato de carga.

        Args:
            filepath: Ruta del archivo a escribir
        """
        path = Path(filepath)
        path.write_text(str(self) + "\n", encoding=NetworkFileConfig.ENCODING)
        logger.info(f"Red guardada en {path}")

    def visualize(self, show_labels: bool = True,
                  figsize: Tuple[int, int] = VisualizationConfig.FIGURE_SIZE):
        """
        Visualiza la red, coloreando cada ruta según su congestión.

        Args:
            show_labels: Si True, muestra los IDs de las intersecciones
            figsize: Tamaño de la figura

        Returns:
            plt.Figure: Figura de matplotlib
        """
        fig, ax = plt.subplots(figsize=figsize)

        pos = nx.spring_layout(self.graph, seed=VisualizationConfig.LAYOUT_SEED)

        # Intersecciones con semáforos resaltadas
        node_colors = [
            VisualizationConfig.NODE_WITH_LIGHTS_COLOR
            if self.intersections[node_id].has_traffic_lights()
            else VisualizationConfig.NODE_COLOR
            for node_id in self.graph.nodes()
        ]
        nx.draw_networkx_nodes(self.graph, pos, node_color=node_colors,
                               node_size=500, alpha=0.9, ax=ax)

        edges = list(self.graph.edges())
        congestion = [self.graph.edges[edge]['route'].get_congestion() for edge in edges]
        nx.draw_networkx_edges(self.graph, pos, edgelist=edges, edge_color=congestion,
                               edge_cmap=plt.get_cmap(VisualizationConfig.CONGESTION_CMAP),
                               edge_vmin=0, edge_vmax=100, width=2, arrows=True,
                               arrowsize=20, arrowstyle='->', ax=ax)

        if show_labels:
            nx.draw_networkx_labels(self.graph, pos, font_size=10, ax=ax)

        ax.set_title(f"Red vial ({len(self.intersections)} intersecciones, "
                     f"{len(edges)} rutas)", fontsize=14, fontweight='bold')
        ax.axis('off')
        fig.tight_layout()

        return fig

    def __eq__(self, other) -> bool:
        if not isinstance(other, Network):
            return NotImplemented
        return set(self.intersections.values()) == set(other.intersections.values())

    def __hash__(self) -> int:
        return hash(frozenset(self.intersections))

    def __str__(self) -> str:
        """
        Representación en el formato de archivo de red.

        Intersecciones y rutas se listan ordenadas alfabéticamente según su
        propia representación. No se agregan comentarios.
        """
        routes = self.get_routes()
        lines = [str(len(self.intersections)), str(len(routes)), str(self.yellow_time)]
        lines.extend(sorted(str(i) for i in self.intersections.values()))
        lines.extend(sorted(str(route) for route in routes))
        return "\n".join(lines)

    def __repr__(self) -> str:
        stats = self.get_network_stats()
        return (f"Network(intersections={stats['num_intersections']}, "
                f"routes={stats['num_routes']}, "
                f"traffic_lights={stats['num_traffic_lights']}, "
                f"yellow={self.yellow_time}s)")
