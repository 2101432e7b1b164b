"""
Algoritmos de planificación de rutas.

Este paquete contiene:
- Dijkstra para distancias mínimas desde un origen
- Búsqueda por profundidad de rutas alternativas con exclusiones
- Planificador que combina ambos
"""

from .results import DistanceVector, PathResult
from .shortest_path import shortest_paths, shortest_route
from .alternative_route import find_alternative_route, find_alternative_routes
from .route_planner import RoutePlanner, RoutePlan

__all__ = [
    'DistanceVector',
    'PathResult',
    'shortest_paths',
    'shortest_route',
    'find_alternative_route',
    'find_alternative_routes',
    'RoutePlanner',
    'RoutePlan'
]
