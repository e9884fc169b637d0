"""
Simulador de la red vial.

Este módulo contiene el motor de simulación que avanza, segundo a segundo:
- Estados de los semáforos de cada intersección
- Ventanas de datos de los sensores de cada ruta
- Registro de la congestión por ruta
"""

from .traffic_simulator import TrafficSimulator

__all__ = [
    'TrafficSimulator'
]
