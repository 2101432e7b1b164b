"""
Búsqueda de rutas alternativas por profundidad (backtracking con pila).

No busca la ruta óptima sino *una* ruta que evite un conjunto de
intersecciones excluidas, típicamente las que ya usa otra ruta. Así se
obtienen rutas diversas respecto del camino mínimo.

La ruta se reconstruye con enlaces a predecesores registrados al apilar;
el contenido final de la pila no es una ruta válida porque los nodos ya
desapilados no están en ella.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from src.network.traffic_network import Intersection, NodeRef, TrafficNetwork, node_key
from src.utils.config import RoutingConfig

from .results import PathResult
from .shortest_path import check_cancelled, reconstruct_path

logger = logging.getLogger(__name__)

RoadRef = Tuple[NodeRef, NodeRef]


def node_keys(nodes: Union[None, NodeRef, Iterable[NodeRef]]) -> Set[str]:
    """
    Normaliza un conjunto de intersecciones a nombres.

    Un string o una Intersection sueltos cuentan como una sola
    intersección (no se iteran carácter por carácter).
    """
    if nodes is None:
        return set()
    if isinstance(nodes, (str, Intersection)):
        return {node_key(nodes)}
    return {node_key(node) for node in nodes}


def find_alternative_route(network: TrafficNetwork, source: NodeRef, destination: NodeRef,
                           excluded: Optional[Iterable[NodeRef]] = None,
                           cancel_event=None,
                           excluded_roads: Optional[Iterable[RoadRef]] = None) -> PathResult:
    """
    Busca una ruta de source a destination que no pase por intersecciones excluidas.

    Los vecinos se apilan en orden de inserción, así que se explora
    primero la última calle agregada. Cada intersección se marca como
    visitada al apilarla para no expandirla dos veces.

    Args:
        network: Red vial (sólo lectura)
        source: Intersección de origen
        destination: Intersección de destino
        excluded: Intersecciones a evitar (no se modifica; las desconocidas se ignoran)
        cancel_event: Opcional, objeto con ``is_set()`` consultado en cada extracción
        excluded_roads: Pares (origen, destino) cuyas calles, incluidas las
                        paralelas, no se pueden usar

    Returns:
        PathResult: La ruta encontrada, o found=False si no existe ninguna
                    que respete las exclusiones

    Raises:
        UnknownNodeError: Si source o destination no están registradas
        RouteSearchCancelled: Si cancel_event se activa durante la búsqueda
    """
    start = network.require_intersection(source)
    target = network.require_intersection(destination)
    excluded_names = node_keys(excluded)
    banned_pairs: Set[Tuple[str, str]] = {
        (node_key(a), node_key(b)) for a, b in excluded_roads or ()
    }

    if start.name in excluded_names or target.name in excluded_names:
        logger.debug("Ruta alternativa %s → %s: extremo excluido", start.name, target.name)
        return PathResult.not_found()

    if start == target:
        return PathResult(True, [start])

    visited: Set[str] = set(excluded_names)
    visited.add(start.name)
    predecessors: Dict[str, str] = {}
    stack: List[str] = [start.name]
    expanded = 0

    while stack:
        check_cancelled(cancel_event, "ruta alternativa")
        current = stack.pop()

        if current == target.name:
            intersections = network.intersections
            result = reconstruct_path(
                {intersections[n]: intersections[p] for n, p in predecessors.items()},
                start, target
            )
            logger.debug("Ruta alternativa %s → %s: %s (%d expandidas)",
                         start.name, target.name, result.names, expanded)
            return result

        expanded += 1
        for road in network.get_neighbors(current):
            neighbor = road.destination.name
            if neighbor not in visited and (current, neighbor) not in banned_pairs:
                visited.add(neighbor)
                predecessors[neighbor] = current
                stack.append(neighbor)

    logger.debug("Ruta alternativa %s → %s: no hay ruta (%d expandidas)",
                 start.name, target.name, expanded)
    return PathResult.not_found()


def find_alternative_routes(network: TrafficNetwork, source: NodeRef, destination: NodeRef,
                            max_routes: int = RoutingConfig.DEFAULT_MAX_ALTERNATIVES,
                            excluded: Optional[Iterable[NodeRef]] = None,
                            cancel_event=None,
                            excluded_roads: Optional[Iterable[RoadRef]] = None) -> List[PathResult]:
    """
    Busca varias rutas distintas, cada una evitando las anteriores.

    Tras cada ruta se excluyen sus intersecciones intermedias; si la ruta
    es una calle directa (sin interior) se excluye esa calle. Se detiene
    al llegar a max_routes o cuando no hay más rutas.

    Args:
        max_routes: Número máximo de rutas a retornar
        excluded: Exclusiones base, aplicadas a todas las búsquedas
        excluded_roads: Calles (pares origen, destino) excluidas en todas las búsquedas

    Returns:
        Lista de rutas encontradas (puede estar vacía)
    """
    if max_routes < 0:
        raise ValueError(f"max_routes debe ser >= 0: {max_routes}")

    avoid = node_keys(excluded)
    banned: Set[Tuple[str, str]] = {(node_key(a), node_key(b)) for a, b in excluded_roads or ()}
    routes: List[PathResult] = []

    while len(routes) < max_routes:
        result = find_alternative_route(network, source, destination,
                                        excluded=avoid, cancel_event=cancel_event,
                                        excluded_roads=banned)
        if not result.found:
            break
        routes.append(result)

        interior = result.names[1:-1]
        if interior:
            avoid.update(interior)
        elif len(result.names) == 2:
            banned.add((result.names[0], result.names[1]))
        else:
            # Origen igual a destino: no hay otra ruta distinta
            break

    return routes
