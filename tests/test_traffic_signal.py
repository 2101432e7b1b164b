"""
Tests para semáforos, vehículos y ocupación de calles.
"""

import pytest
import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.network import TrafficSignal, Vehicle, RoadOccupancy, Intersection, build_graph


class TestVehicle:
    """Tests para la clase Vehicle."""

    def test_vehicle_creation(self):
        vehicle = Vehicle("KA-01-1234")

        assert vehicle.license_plate == "KA-01-1234"
        assert vehicle == Vehicle("KA-01-1234")
        assert vehicle != Vehicle("KA-01-5678")

    def test_empty_plate(self):
        with pytest.raises(ValueError):
            Vehicle("")


class TestTrafficSignal:
    """Tests para la clase TrafficSignal."""

    def test_signal_creation(self):
        """El semáforo guarda el nombre de la intersección que controla."""
        assert TrafficSignal("A").intersection_name == "A"
        assert TrafficSignal(Intersection("B")).intersection_name == "B"

    def test_fifo_order(self):
        """Los vehículos pasan en orden de llegada."""
        signal = TrafficSignal("A")
        v1, v2, v3 = Vehicle("P1"), Vehicle("P2"), Vehicle("P3")
        for v in (v1, v2, v3):
            signal.add_vehicle_to_queue(v)

        assert signal.queue_length == 3
        assert signal.peek() is v1
        assert signal.pass_vehicle() is v1
        assert signal.pass_vehicle() is v2
        assert signal.queue_length == 1
        assert signal.total_vehicles_passed == 2

    def test_pass_empty(self):
        """Con la cola vacía no pasa nadie."""
        signal = TrafficSignal("A")

        assert signal.pass_vehicle() is None
        assert signal.peek() is None
        assert signal.total_vehicles_passed == 0


class TestRoadOccupancy:
    """Tests para la ocupación de calles."""

    @pytest.fixture
    def occupancy(self):
        network = build_graph(["A", "B"], [("A", "B", 5)])
        return RoadOccupancy(network.get_neighbors("A")[0])

    def test_insertion_order(self, occupancy):
        v1, v2 = Vehicle("P1"), Vehicle("P2")
        occupancy.add_vehicle(v2)
        occupancy.add_vehicle(v1)
        occupancy.add_vehicle(v2)

        assert occupancy.vehicles == [v2, v1]
        assert occupancy.display_vehicles() == ["P2", "P1"]
        assert len(occupancy) == 2

    def test_remove(self, occupancy):
        vehicle = Vehicle("P1")
        occupancy.add_vehicle(vehicle)

        assert occupancy.remove_vehicle(vehicle) is True
        assert occupancy.remove_vehicle(vehicle) is False
        assert occupancy.vehicles == []

    def test_vehicles_is_copy(self, occupancy):
        occupancy.vehicles.append(Vehicle("X"))

        assert len(occupancy) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
