"""
Motor de simulación de la red vial.

Este módulo implementa el reloj de la simulación: en cada paso (un segundo
simulado) avanza los semáforos de todas las intersecciones y los sensores
de todas las rutas, y registra la congestión de cada ruta.
"""

import logging
import time as timer
from typing import Dict, List

from src.network import Network
from src.utils.config import SimulatorConfig
from src.utils.metrics import MetricsCalculator

logger = logging.getLogger(__name__)


class TrafficSimulator:
    """
    Motor principal de simulación de tráfico.

    Los semáforos de distintas intersecciones son autómatas independientes;
    el simulador los avanza a todos una vez por paso. La topología de la red
    no debe modificarse mientras la simulación está en curso.
    """

    def __init__(self, network: Network):
        """
        Inicializa el simulador.

        Args:
            network: Red vial a simular
        """
        self.network = network

        # Estado de simulación
        self.current_time = 0
        self.dt = SimulatorConfig.TIME_STEP

        # Historial de congestión por ruta
        self.congestion_history: List[Dict] = []

        self.real_time_start = None

        logger.info(f"Simulador inicializado: {len(network.intersections)} "
                    f"intersecciones")

    def run(self, duration: int = SimulatorConfig.DEFAULT_SIMULATION_DURATION,
            verbose: bool = False) -> Dict:
        """
        Ejecuta la simulación durante una cantidad de segundos.

        Args:
            duration: Duración de la simulación en segundos
            verbose: Si True, reporta el progreso periódicamente

        Returns:
            dict: Métricas finales de la simulación

        Raises:
            ValueError: Si la duración es negativa
        """
        if duration < 0:
            raise ValueError(f"Duración de simulación negativa: {duration}")

        logger.info(f"Iniciando simulación: {duration}s")
        self.real_time_start = timer.time()

        num_steps = duration // self.dt
        for step in range(num_steps):
            self.step()

            if verbose and step % SimulatorConfig.REPORT_INTERVAL == 0:
                self._log_progress()

        metrics = self.calculate_final_metrics()
        logger.info(f"Simulación completada en t={self.current_time}s, "
                    f"congestión promedio {metrics['avg_congestion']:.1f}")
        return metrics

    def step(self):
        """
        Ejecuta un paso de simulación (un segundo).

        Este es el método central que coordina todas las actualizaciones.
        """
        # 1. Actualizar semáforos
        self._update_traffic_lights()

        # 2. Actualizar sensores
        self._update_sensors()

        # 3. Avanzar tiempo
        self.current_time += self.dt

        # 4. Registrar congestión en el nuevo instante
        self._record_metrics()

    def _update_traffic_lights(self):
        """Actualiza el estado de todos los semáforos."""
        for intersection in self.network.get_intersections():
            lights = intersection.get_traffic_lights()
            if lights is not None:
                lights.one_second()

    def _update_sensors(self):
        """Avanza el reloj de todos los sensores."""
        for route in self.network.get_routes():
            for sensor in route.get_sensors():
                sensor.one_second()

    def _record_metrics(self):
        """Registra la congestión instantánea de cada ruta."""
        snapshot = {route.id: route.get_congestion() for route in self.network.get_routes()}
        self.congestion_history.append({
            'time': self.current_time,
            'congestion': snapshot
        })

    def calculate_final_metrics(self) -> Dict:
        """
        Calcula métricas finales de la simulación.

        Returns:
            dict: Diccionario con todas las métricas
        """
        computation_time = 0.0
        if self.real_time_start:
            computation_time = timer.time() - self.real_time_start

        return {
            'simulation_time': self.current_time,
            'steps_recorded': len(self.congestion_history),
            'avg_congestion': MetricsCalculator.average_congestion(self.congestion_history),
            'max_congestion': MetricsCalculator.max_congestion(self.congestion_history),
            'most_congested_routes': MetricsCalculator.most_congested_routes(
                self.congestion_history),
            'computation_time': computation_time,
        }

    def _log_progress(self):
        """Reporta el progreso de la simulación."""
        state = self.get_current_state()
        congestion = state['congestion']
        average = sum(congestion.values()) / len(congestion) if congestion else 0.0
        logger.info(f"[T={self.current_time:6d}s] Congestión promedio: {average:.1f}")

    def get_current_state(self) -> Dict:
        """
        Retorna el estado actual completo de la simulación.

        Returns:
            dict: Estado actual
        """
        routes = self.network.get_routes()
        return {
            'time': self.current_time,
            'traffic_lights': {
                intersection.get_id(): str(intersection.get_traffic_lights())
                for intersection in self.network.get_intersections()
                if intersection.has_traffic_lights()
            },
            'signals': {
                route.id: route.get_signal().value
                for route in routes
                if route.has_traffic_light()
            },
            'congestion': {route.id: route.get_congestion() for route in routes}
        }


if __name__ == "__main__":
    # Ejemplo de uso
    import sys
    from pathlib import Path
    sys.path.insert(0, str(Path(__file__).parent.parent.parent))

    from src.network import load_network
    from src.utils.config import DEMO_NETWORK_FILE, setup_logging

    setup_logging()

    print("="*70)
    print("EJEMPLO: Simulador de Tráfico")
    print("="*70)

    network = load_network(DEMO_NETWORK_FILE)
    simulator = TrafficSimulator(network)

    metrics = simulator.run(duration=60, verbose=True)

    print("\n" + "="*70)
    print("MÉTRICAS DETALLADAS")
    print("="*70)
    for key, value in metrics.items():
        if isinstance(value, float):
            print(f"  {key:25s}: {value:.2f}")
        else:
            print(f"  {key:25s}: {value}")
