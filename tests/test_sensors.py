"""
Tests para el módulo de sensores (Sensor, AveragingCongestionCalculator).
"""

import pytest
import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.network.sensors import (
    AveragingCongestionCalculator, Sensor, SensorKind, create_sensor, round_half_up
)


class TestSensor:
    """Tests para la clase Sensor."""

    def test_sensor_creation(self):
        """Test de creación de sensor a partir de su código."""
        sensor = create_sensor("PP", [5, 2, 4], 5)

        assert sensor.kind == SensorKind.PRESSURE_PAD
        assert sensor.threshold == 5
        assert sensor.data == [5, 2, 4]
        assert sensor.time_elapsed == 0

    def test_unknown_kind(self):
        """Test de código de sensor desconocido."""
        with pytest.raises(ValueError):
            create_sensor("XX", [1, 2], 5)

    def test_sensor_validation(self):
        """Test de validación de datos y umbral."""
        # Sin datos
        with pytest.raises(ValueError):
            Sensor(SensorKind.VEHICLE_COUNT, [], 5)

        # Datos negativos
        with pytest.raises(ValueError):
            Sensor(SensorKind.VEHICLE_COUNT, [1, -2], 5)

        # Umbral cero o negativo
        with pytest.raises(ValueError):
            Sensor(SensorKind.VEHICLE_COUNT, [1, 2], 0)
        with pytest.raises(ValueError):
            Sensor(SensorKind.VEHICLE_COUNT, [1, 2], -3)

    def test_data_window_cycles(self):
        """Test de recorrido cíclico de la ventana de datos."""
        sensor = create_sensor("VC", [7, 8, 9], 10)

        values = []
        for _ in range(5):
            values.append(sensor.get_current_value())
            sensor.one_second()

        assert values == [7, 8, 9, 7, 8]

    def test_pressure_pad_congestion(self):
        """Test de congestión de placa de presión."""
        sensor = create_sensor("PP", [0, 1, 6], 4)

        assert sensor.get_congestion() == 0
        sensor.one_second()
        # 1/4 = 25%
        assert sensor.get_congestion() == 25
        sensor.one_second()
        # 6/4 = 150%, limitado a 100
        assert sensor.get_congestion() == 100

    def test_speed_camera_congestion(self):
        """Test de congestión de cámara de velocidad."""
        sensor = create_sensor("SC", [60, 70, 30, 15, 0], 60)

        # A la velocidad del umbral o más rápido no hay congestión
        assert sensor.get_congestion() == 0
        sensor.one_second()
        assert sensor.get_congestion() == 0
        sensor.one_second()
        assert sensor.get_congestion() == 50
        sensor.one_second()
        assert sensor.get_congestion() == 75
        sensor.one_second()
        assert sensor.get_congestion() == 100

    def test_vehicle_count_congestion(self):
        """Test de congestión de contador de vehículos."""
        sensor = create_sensor("VC", [15, 8, 0], 10)

        # Más vehículos que el umbral: tránsito fluido
        assert sensor.get_congestion() == 0
        sensor.one_second()
        assert sensor.get_congestion() == 20
        sensor.one_second()
        assert sensor.get_congestion() == 100

    def test_half_values_round_up(self):
        """Test de redondeo de medios hacia arriba."""
        assert round_half_up(12.5) == 13
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2

        # 1/8 = 12.5%
        sensor = create_sensor("PP", [1], 8)
        assert sensor.get_congestion() == 13

    def test_string_format(self):
        """Test de representación en formato de archivo."""
        sensor = create_sensor("SC", [39, 40, 40], 40)
        assert str(sensor) == "SC:40:39,40,40"


class TestAveragingCongestionCalculator:
    """Tests para el cálculo de congestión promedio."""

    def setup_method(self):
        self.speed_camera = create_sensor("SC", [60, 70, 60, 30, 15, 0], 60)
        self.pressure_pad = create_sensor("PP", [0, 1, 2, 3, 4, 5, 6], 4)
        self.vehicle_count = create_sensor("VC", [15, 8, 4, 1, 0, 9, 20], 10)
        self.sensors = [self.speed_camera, self.pressure_pad, self.vehicle_count]

    def test_empty_calculator(self):
        """Test sin sensores."""
        assert AveragingCongestionCalculator([]).calculate_congestion() == 0

    def test_single_sensor(self):
        """Test con un solo sensor."""
        calculator = AveragingCongestionCalculator([self.vehicle_count])

        assert calculator.calculate_congestion() == 0
        self.vehicle_count.one_second()
        assert calculator.calculate_congestion() == 20

    def test_average_of_sensors(self):
        """Test de promedio redondeado de varios sensores."""
        calculator = AveragingCongestionCalculator(self.sensors)
        assert calculator.calculate_congestion() == 0

        for sensor in self.sensors:
            sensor.one_second()
        # (0 + 25 + 20) / 3 = 15
        assert calculator.calculate_congestion() == 15

        self.speed_camera.one_second()
        self.speed_camera.one_second()
        # (50 + 25 + 20) / 3 = 31.67
        assert calculator.calculate_congestion() == 32


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
