"""
Tests para el módulo de intersecciones (Intersection).
"""

import pytest
import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.network.exceptions import InvalidOrderError, NetworkStateError, RouteNotFoundError
from src.network.intersection import Intersection
from src.network.route import Route, TrafficSignal


class TestIntersection:
    """Tests para la clase Intersection."""

    def setup_method(self):
        self.intersection = Intersection("Y")
        self.from_z = self.intersection.add_connection("Z", 100)
        self.from_x = self.intersection.add_connection("X", 60)

    def test_add_connection(self):
        """Test de creación de rutas entrantes."""
        assert self.from_z.id == "Z:Y"
        assert self.intersection.get_connected_intersections() == ["Z", "X"]
        assert self.intersection.get_connection("X") is self.from_x
        assert not self.intersection.has_traffic_lights()

    def test_get_connections_is_copy(self):
        """Test de que la lista de rutas retornada es una copia."""
        connections = self.intersection.get_connections()
        connections.clear()

        assert len(self.intersection.get_connections()) == 2

    def test_missing_connection(self):
        """Test de ruta inexistente."""
        with pytest.raises(RouteNotFoundError):
            self.intersection.get_connection("W")

    def test_invalid_connection(self):
        """Test de ruta duplicada y de velocidad negativa."""
        with pytest.raises(NetworkStateError):
            self.intersection.add_connection("Z", 40)
        with pytest.raises(ValueError):
            self.intersection.add_connection("W", -5)

        assert len(self.intersection.get_connections()) == 2

    def test_add_traffic_lights(self):
        """Test de creación de semáforos."""
        self.intersection.add_traffic_lights([self.from_z, self.from_x], 1, 3)

        assert self.intersection.has_traffic_lights()
        assert self.from_z.get_signal() == TrafficSignal.GREEN
        assert self.from_x.get_signal() == TrafficSignal.RED
        assert str(self.intersection) == "Y:3:Z,X"

    def test_replace_traffic_lights(self):
        """Test de reemplazo de semáforos existentes."""
        self.intersection.add_traffic_lights([self.from_z, self.from_x], 1, 3)
        self.intersection.add_traffic_lights([self.from_x, self.from_z], 2, 7)

        assert self.from_x.get_signal() == TrafficSignal.GREEN
        assert self.from_z.get_signal() == TrafficSignal.RED
        assert str(self.intersection) == "Y:7:X,Z"

    def test_invalid_timings(self):
        """Test de tiempos inválidos."""
        order = [self.from_z, self.from_x]

        with pytest.raises(ValueError):
            self.intersection.add_traffic_lights(order, 0, 3)
        with pytest.raises(ValueError):
            self.intersection.add_traffic_lights(order, 3, 3)

        assert not self.intersection.has_traffic_lights()
        assert not self.from_z.has_traffic_light()

    def test_invalid_orders(self):
        """Test de órdenes que no son permutación de las rutas entrantes."""
        self.intersection.add_traffic_lights([self.from_z, self.from_x], 1, 3)
        foreign = Route("W", "Y", 30)

        invalid_orders = [
            [],
            [self.from_z],
            [self.from_z, self.from_z],
            [self.from_z, foreign],
            [self.from_z, self.from_x, foreign],
        ]
        for order in invalid_orders:
            with pytest.raises(InvalidOrderError):
                self.intersection.add_traffic_lights(order, 1, 5)

        # Los semáforos anteriores no cambian
        assert str(self.intersection) == "Y:3:Z,X"

    def test_connection_after_lights(self):
        """Test de ruta agregada a una intersección con semáforos."""
        self.intersection.add_traffic_lights([self.from_z, self.from_x], 1, 3)
        from_w = self.intersection.add_connection("W", 30)

        assert from_w.get_signal() == TrafficSignal.RED
        assert from_w not in self.intersection.get_traffic_lights().get_connections()
        assert str(self.intersection) == "Y:3:Z,X"

    def test_set_light_duration(self):
        """Test de cambio de duración de los semáforos."""
        with pytest.raises(NetworkStateError):
            self.intersection.set_light_duration(5)

        self.intersection.add_traffic_lights([self.from_z, self.from_x], 2, 4)
        with pytest.raises(ValueError):
            self.intersection.set_light_duration(2)

        self.intersection.set_light_duration(9)
        assert str(self.intersection) == "Y:9:Z,X"

    def test_reduce_incoming_speed_signs(self):
        """Test de reducción de carteles de velocidad entrantes."""
        intersection = Intersection("A")
        speeds = {"B": 100, "C": 55, "D": 50, "E": 40}
        for origin, speed in speeds.items():
            intersection.add_connection(origin, 80).add_speed_sign(speed)
        no_sign = intersection.add_connection("F", 80)

        intersection.reduce_incoming_speed_signs()

        result = {origin: intersection.get_connection(origin).get_speed()
                  for origin in speeds}
        assert result == {"B": 90, "C": 50, "D": 50, "E": 40}
        assert no_sign.get_speed() == 80
        assert not no_sign.has_speed_sign()

    def test_equality(self):
        """Test de igualdad por ID."""
        assert Intersection("Y") == self.intersection
        assert Intersection("X") != self.intersection
        assert hash(Intersection("Y")) == hash(self.intersection)

    def test_string_without_lights(self):
        """Test de representación sin semáforos."""
        assert str(self.intersection) == "Y"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
