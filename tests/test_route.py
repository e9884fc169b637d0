"""
Tests para el módulo de rutas (Route, TrafficLight, SpeedSign).
"""

import pytest
import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.network.exceptions import DuplicateSensorError, NetworkStateError
from src.network.route import Route, SpeedSign, TrafficLight, TrafficSignal
from src.network.sensors import create_sensor


class TestTrafficLight:
    """Tests para la señal de semáforo de una ruta."""

    def test_starts_red(self):
        """Test de señal inicial en rojo."""
        light = TrafficLight()
        assert light.get_signal() == TrafficSignal.RED

    def test_set_signal(self):
        """Test de cambio de señal."""
        light = TrafficLight()
        light.set_signal(TrafficSignal.GREEN)
        assert light.get_signal() == TrafficSignal.GREEN


class TestSpeedSign:
    """Tests para el cartel electrónico de velocidad."""

    def test_negative_speed(self):
        """Test de velocidad negativa."""
        with pytest.raises(ValueError):
            SpeedSign(-10)

        sign = SpeedSign(60)
        with pytest.raises(ValueError):
            sign.set_current_speed(-1)
        assert sign.get_current_speed() == 60


class TestRoute:
    """Tests para la clase Route."""

    def test_route_creation(self):
        """Test de creación de ruta."""
        route = Route("X", "Y", 60)

        assert route.id == "X:Y"
        assert route.from_id == "X"
        assert route.to_id == "Y"
        assert route.get_speed() == 60
        assert not route.has_traffic_light()
        assert not route.has_speed_sign()
        assert route.get_signal() is None

    def test_negative_default_speed(self):
        """Test de velocidad por defecto negativa."""
        with pytest.raises(ValueError):
            Route("X", "Y", -1)

    def test_speed_sign_overrides_speed(self):
        """Test de velocidad vigente con cartel."""
        route = Route("Z", "Y", 100)
        route.add_speed_sign(80)

        assert route.get_speed() == 80
        assert route.default_speed == 100

        route.set_speed_limit(70)
        assert route.get_speed() == 70

    def test_speed_limit_requires_sign(self):
        """Test de cambio de velocidad sin cartel."""
        route = Route("X", "Y", 60)
        with pytest.raises(NetworkStateError):
            route.set_speed_limit(50)
        assert route.get_speed() == 60

    def test_signal_requires_light(self):
        """Test de cambio de señal sin semáforo."""
        route = Route("X", "Y", 60)
        with pytest.raises(NetworkStateError):
            route.set_signal(TrafficSignal.GREEN)

        route.add_traffic_light()
        route.set_signal(TrafficSignal.YELLOW)
        assert route.get_signal() == TrafficSignal.YELLOW

    def test_duplicate_sensor(self):
        """Test de sensor duplicado del mismo tipo."""
        route = Route("X", "Y", 60)
        route.add_sensor(create_sensor("PP", [1, 2], 5))
        route.add_sensor(create_sensor("VC", [1, 2], 5))

        with pytest.raises(DuplicateSensorError):
            route.add_sensor(create_sensor("PP", [3], 8))
        assert len(route.get_sensors()) == 2

    def test_congestion(self):
        """Test de congestión promedio de la ruta."""
        route = Route("X", "Y", 60)
        assert route.get_congestion() == 0

        route.add_sensor(create_sensor("PP", [2], 4))   # 50
        route.add_sensor(create_sensor("VC", [8], 10))  # 20
        assert route.get_congestion() == 35

    def test_string_without_extras(self):
        """Test de representación sin sensores ni cartel."""
        assert str(Route("X", "Y", 60)) == "X:Y:60:0"

    def test_string_with_sign_and_sensors(self):
        """Test de representación con cartel y sensores ordenados."""
        route = Route("Y", "Z", 100)
        route.add_sensor(create_sensor("VC", [42, 40], 50))
        route.add_sensor(create_sensor("PP", [1, 3], 8))
        route.add_speed_sign(80)

        assert str(route) == "Y:Z:100:2:80\nPP:8:1,3\nVC:50:42,40"

    def test_equality(self):
        """Test de igualdad por par ordenado."""
        assert Route("X", "Y", 60) == Route("X", "Y", 40)
        assert Route("X", "Y", 60) != Route("Y", "X", 60)
        assert hash(Route("X", "Y", 60)) == hash(Route("X", "Y", 10))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
