"""
Red vial: intersecciones, rutas, semáforos y sensores.

Este módulo contiene el modelo de la red:
- Red vial como grafo dirigido de intersecciones y rutas
- Semáforos por intersección (autómata temporizado)
- Sensores de tráfico y cálculo de congestión
- Carga y validación de redes guardadas en texto
"""

from .exceptions import (
    NetworkError,
    IntersectionNotFoundError,
    RouteNotFoundError,
    DuplicateSensorError,
    InvalidOrderError,
    NetworkStateError,
    InvalidNetworkError,
)
from .sensors import SensorKind, Sensor, AveragingCongestionCalculator, create_sensor
from .route import Route, TrafficLight, TrafficSignal, SpeedSign
from .intersection_lights import IntersectionLights
from .intersection import Intersection
from .traffic_network import Network
from .network_initialiser import NetworkInitialiser, load_network, loads_network

__all__ = [
    'NetworkError',
    'IntersectionNotFoundError',
    'RouteNotFoundError',
    'DuplicateSensorError',
    'InvalidOrderError',
    'NetworkStateError',
    'InvalidNetworkError',
    'SensorKind',
    'Sensor',
    'AveragingCongestionCalculator',
    'create_sensor',
    'Route',
    'TrafficLight',
    'TrafficSignal',
    'SpeedSign',
    'IntersectionLights',
    'Intersection',
    'Network',
    'NetworkInitialiser',
    'load_network',
    'loads_network',
]
