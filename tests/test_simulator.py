"""
Tests para el simulador de tráfico.
"""

import pytest
import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.network import load_network
from src.simulator import TrafficSimulator
from src.utils.config import DEMO_NETWORK_FILE


@pytest.fixture
def simulator():
    """Simulador sobre la red de demostración."""
    return TrafficSimulator(load_network(DEMO_NETWORK_FILE))


class TestTrafficSimulator:
    """Tests para la clase TrafficSimulator."""

    def test_simulator_initialization(self, simulator):
        """Test de inicialización del simulador."""
        assert simulator.current_time == 0
        assert simulator.congestion_history == []

    def test_simulation_step(self, simulator):
        """Test de un paso de simulación."""
        simulator.step()

        assert simulator.current_time == 1
        assert len(simulator.congestion_history) == 1
        assert simulator.congestion_history[0]['time'] == 1

    def test_lights_advance(self, simulator):
        """Test de avance de los semáforos (amarillo 1, duración 3)."""
        simulator.step()
        assert simulator.get_current_state()['signals'] == {'Z:Y': 'green', 'X:Y': 'red'}

        simulator.step()
        assert simulator.get_current_state()['signals'] == {'Z:Y': 'yellow', 'X:Y': 'red'}

        simulator.step()
        assert simulator.get_current_state()['signals'] == {'Z:Y': 'red', 'X:Y': 'green'}

    def test_sensors_advance(self, simulator):
        """Test de avance de los sensores."""
        # PP:5 con datos 5,2,...
        assert simulator.get_current_state()['congestion']['Y:X'] == 100

        simulator.step()
        assert simulator.get_current_state()['congestion']['Y:X'] == 40
        assert simulator.congestion_history[0]['congestion']['Y:X'] == 40

    def test_current_state(self, simulator):
        """Test de estado actual de la simulación."""
        state = simulator.get_current_state()

        assert state['time'] == 0
        assert state['traffic_lights'] == {'Y': '3:Z,X'}
        assert set(state['congestion']) == {'X:Y', 'Y:X', 'Y:Z', 'Z:X', 'Z:Y'}
        # Rutas sin sensores
        assert state['congestion']['X:Y'] == 0

    def test_run(self, simulator):
        """Test de ejecución completa."""
        metrics = simulator.run(duration=30)

        assert metrics['simulation_time'] == 30
        assert metrics['steps_recorded'] == 30
        assert 0 <= metrics['avg_congestion'] <= 100
        assert 0 <= metrics['max_congestion'] <= 100
        assert len(metrics['most_congested_routes']) == 3
        assert metrics['computation_time'] >= 0

    def test_run_zero_duration(self, simulator):
        """Test de simulación sin pasos."""
        metrics = simulator.run(duration=0)

        assert metrics['simulation_time'] == 0
        assert metrics['avg_congestion'] == 0.0
        assert metrics['most_congested_routes'] == []

    def test_negative_duration(self, simulator):
        """Test de duración negativa."""
        with pytest.raises(ValueError):
            simulator.run(duration=-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
