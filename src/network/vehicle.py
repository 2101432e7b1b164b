"""
Vehículos y ocupación de calles.

El núcleo de ruteo sólo necesita identidades de intersecciones; estas
clases modelan lo mínimo que el resto del sistema guarda sobre los
vehículos: su matrícula y en qué calle están, en orden de llegada.
"""

import logging
from typing import List

from .traffic_network import Road

logger = logging.getLogger(__name__)


class Vehicle:
    """Vehículo identificado por su matrícula."""

    def __init__(self, license_plate: str):
        """
        Inicializa un vehículo.

        Args:
            license_plate: Matrícula (ej: "KA-01-1234")
        """
        if not license_plate:
            raise ValueError("La matrícula no puede estar vacía")
        self.license_plate = license_plate

    def __eq__(self, other) -> bool:
        if isinstance(other, Vehicle):
            return self.license_plate == other.license_plate
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.license_plate)

    def __str__(self) -> str:
        return f"Vehicle({self.license_plate})"

    def __repr__(self) -> str:
        return f"Vehicle(license_plate='{self.license_plate}')"


class RoadOccupancy:
    """
    Vehículos actualmente en una calle, en orden de entrada.

    Se mantiene fuera de Road para que las calles del grafo sean inmutables.
    """

    def __init__(self, road: Road):
        """
        Args:
            road: Calle cuya ocupación se registra
        """
        self.road = road
        self._vehicles: List[Vehicle] = []

    @property
    def vehicles(self) -> List[Vehicle]:
        """Copia de la lista de vehículos, en orden de entrada."""
        return list(self._vehicles)

    def add_vehicle(self, vehicle: Vehicle):
        """Agrega un vehículo al final de la calle (si no estaba ya)."""
        if vehicle not in self._vehicles:
            self._vehicles.append(vehicle)

    def remove_vehicle(self, vehicle: Vehicle) -> bool:
        """
        Remueve un vehículo de la calle.

        Returns:
            bool: True si el vehículo estaba en la calle
        """
        if vehicle in self._vehicles:
            self._vehicles.remove(vehicle)
            return True
        return False

    def display_vehicles(self) -> List[str]:
        """Retorna las matrículas presentes, en orden, y las registra en el log."""
        plates = [v.license_plate for v in self._vehicles]
        for plate in plates:
            logger.info("%s está en la calle %s", plate, self.road)
        return plates

    def __len__(self) -> int:
        return len(self._vehicles)

    def __repr__(self) -> str:
        return f"RoadOccupancy(road={self.road!r}, vehicles={len(self._vehicles)})"
