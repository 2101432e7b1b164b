"""
Semáforo como cola FIFO de vehículos.

El control de tiempos (fases, verde/amarillo/rojo) queda fuera de este
proyecto: aquí el semáforo sólo ordena a los vehículos que esperan en
la intersección que controla.
"""

import logging
from collections import deque
from typing import Optional

from .traffic_network import NodeRef, node_key
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class TrafficSignal:
    """
    Semáforo de una intersección.

    Los vehículos pasan en el mismo orden en que llegaron.
    """

    def __init__(self, intersection: NodeRef):
        """
        Inicializa un semáforo.

        Args:
            intersection: Intersección que controla (nombre o Intersection)
        """
        self.intersection_name = node_key(intersection)
        self._queue: deque = deque()

        # Estadísticas
        self.total_vehicles_passed = 0

    def add_vehicle_to_queue(self, vehicle: Vehicle):
        """Encola un vehículo que llega al semáforo."""
        self._queue.append(vehicle)

    def pass_vehicle(self) -> Optional[Vehicle]:
        """
        Deja pasar al primer vehículo de la cola.

        Returns:
            El vehículo que pasó, o None si la cola estaba vacía
        """
        if not self._queue:
            return None

        passed = self._queue.popleft()
        self.total_vehicles_passed += 1
        logger.info("Vehículo %s pasó el semáforo de %s",
                    passed.license_plate, self.intersection_name)
        return passed

    def peek(self) -> Optional[Vehicle]:
        """Retorna el primer vehículo sin sacarlo de la cola."""
        return self._queue[0] if self._queue else None

    @property
    def queue_length(self) -> int:
        return len(self._queue)

    def __str__(self) -> str:
        return f"TrafficSignal({self.intersection_name}, queue={len(self._queue)})"

    def __repr__(self) -> str:
        return (f"TrafficSignal(intersection='{self.intersection_name}', "
                f"queue_length={len(self._queue)}, passed={self.total_vehicles_passed})")
