"""
Caminos mínimos con el algoritmo de Dijkstra.

La frontera es un heap de tuplas (distancia, orden_de_inserción, nombre).
La distancia es una foto tomada al insertar: cuando una intersección
mejora se vuelve a insertar y la entrada vieja queda en el heap. Al
extraer una entrada cuya distancia ya no coincide con la actual, se
descarta. El contador de inserción desempata de forma determinista.
"""

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Tuple

from src.network.traffic_network import Intersection, NodeRef, TrafficNetwork
from src.utils.config import RoutingConfig
from src.utils.exceptions import RouteSearchCancelled

from .results import DistanceVector, PathResult

logger = logging.getLogger(__name__)


def check_cancelled(cancel_event, algorithm: str):
    """Lanza RouteSearchCancelled si el llamador pidió cancelar."""
    if cancel_event is not None and cancel_event.is_set():
        logger.debug("%s cancelado por el llamador", algorithm)
        raise RouteSearchCancelled(f"Búsqueda cancelada: {algorithm}")


def shortest_paths(network: TrafficNetwork, source: NodeRef,
                   cancel_event=None) -> DistanceVector:
    """
    Calcula la distancia mínima desde source a cada intersección.

    Args:
        network: Red vial (sólo lectura)
        source: Intersección de origen
        cancel_event: Opcional, objeto con ``is_set()`` (ej: threading.Event)
                      consultado en cada extracción de la frontera

    Returns:
        DistanceVector: Distancias (INFINITY para las no alcanzadas) y predecesores

    Raises:
        UnknownNodeError: Si source no está registrada
        RouteSearchCancelled: Si cancel_event se activa durante la búsqueda
    """
    start = network.require_intersection(source)
    infinity = RoutingConfig.INFINITY

    distances: Dict[str, float] = {name: infinity for name in network.intersections}
    predecessors: Dict[str, str] = {}
    distances[start.name] = 0

    counter = itertools.count()
    frontier: List[Tuple[float, int, str]] = [(0, next(counter), start.name)]
    stale_pops = 0

    while frontier:
        check_cancelled(cancel_event, "dijkstra")
        current_dist, _, current = heapq.heappop(frontier)

        if current_dist != distances[current]:
            stale_pops += 1
            continue

        for road in network.get_neighbors(current):
            neighbor = road.destination.name
            candidate = current_dist + road.travel_time
            if candidate < distances[neighbor]:
                distances[neighbor] = candidate
                predecessors[neighbor] = current
                heapq.heappush(frontier, (candidate, next(counter), neighbor))

    logger.debug("Dijkstra desde %s: %d alcanzadas, %d entradas obsoletas descartadas",
                 start.name, sum(1 for d in distances.values() if d != infinity), stale_pops)

    intersections = network.intersections
    return DistanceVector(
        source=start,
        distances={intersections[name]: dist for name, dist in distances.items()},
        predecessors={intersections[name]: intersections[prev]
                      for name, prev in predecessors.items()}
    )


def reconstruct_path(predecessors: Dict[Intersection, Intersection],
                     source: Intersection, destination: Intersection) -> PathResult:
    """
    Reconstruye la ruta source → destination siguiendo predecesores hacia atrás.

    Returns:
        PathResult: La ruta, o "no encontrada" si destination no tiene cadena hasta source
    """
    path = [destination]
    current = destination
    while current != source:
        current = predecessors.get(current)
        if current is None:
            return PathResult.not_found()
        path.append(current)

    path.reverse()
    return PathResult(True, path)


def shortest_route(network: TrafficNetwork, source: NodeRef, destination: NodeRef,
                   cancel_event=None) -> PathResult:
    """
    Ruta de costo mínimo entre dos intersecciones.

    Raises:
        UnknownNodeError: Si source o destination no están registradas
    """
    target = network.require_intersection(destination)
    vector = shortest_paths(network, source, cancel_event=cancel_event)
    return reconstruct_path(vector.predecessors, vector.source, target)


def route_cost(vector: DistanceVector, destination: NodeRef) -> Optional[float]:
    """Costo mínimo hasta destination, o None si no es alcanzable."""
    if not vector.is_reachable(destination):
        return None
    return vector[destination]
