"""
Red vial de la ciudad.

Este paquete contiene:
- Red vial como grafo dirigido ponderado (intersecciones y calles)
- Semáforos como colas de vehículos
- Ocupación de calles
- Jerarquía de regiones de control
"""

from .traffic_network import TrafficNetwork, Intersection, Road, build_graph
from .traffic_signal import TrafficSignal
from .vehicle import Vehicle, RoadOccupancy
from .region import TrafficRegion

__all__ = [
    'TrafficNetwork',
    'Intersection',
    'Road',
    'build_graph',
    'TrafficSignal',
    'Vehicle',
    'RoadOccupancy',
    'TrafficRegion'
]
