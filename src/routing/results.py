"""
Resultados de los algoritmos de ruta.

Contenedores simples creados por cada consulta y entregados al
llamador; no se comparten entre consultas.
"""

from typing import Dict, List, Optional, Sequence

from src.network.traffic_network import Intersection, NodeRef, node_key
from src.utils.config import RoutingConfig
from src.utils.exceptions import UnknownNodeError


class DistanceVector:
    """
    Distancias mínimas desde una intersección de origen fija.

    Las intersecciones no alcanzadas tienen RoutingConfig.INFINITY.
    ``predecessors`` guarda, para cada intersección alcanzada (excepto el
    origen), la intersección previa en un camino mínimo.
    """

    def __init__(self, source: Intersection, distances: Dict[Intersection, float],
                 predecessors: Optional[Dict[Intersection, Intersection]] = None):
        self.source = source
        self.distances = distances
        self.predecessors = predecessors if predecessors is not None else {}

    def __getitem__(self, node: NodeRef) -> float:
        try:
            return self.distances[Intersection(node_key(node))]
        except KeyError:
            raise UnknownNodeError(node_key(node)) from None

    def __contains__(self, node) -> bool:
        return Intersection(node_key(node)) in self.distances

    def is_reachable(self, node: NodeRef) -> bool:
        return self[node] != RoutingConfig.INFINITY

    def reachable(self) -> List[Intersection]:
        """Intersecciones con distancia finita."""
        return [node for node, dist in self.distances.items()
                if dist != RoutingConfig.INFINITY]

    def as_dict(self) -> Dict[str, float]:
        """Distancias indexadas por nombre."""
        return {node.name: dist for node, dist in self.distances.items()}

    def __eq__(self, other) -> bool:
        if not isinstance(other, DistanceVector):
            return NotImplemented
        return (self.source == other.source and self.distances == other.distances
                and self.predecessors == other.predecessors)

    def __repr__(self) -> str:
        return f"DistanceVector(source='{self.source.name}', distances={self.as_dict()})"


class PathResult:
    """
    Resultado de una búsqueda de ruta.

    ``found=False`` es la respuesta explícita "no hay ruta" y siempre
    lleva una ruta vacía; una ruta encontrada tiene al menos un nodo.
    """

    def __init__(self, found: bool, path: Sequence[Intersection] = ()):
        path = tuple(path)
        if found and not path:
            raise ValueError("Una ruta encontrada debe tener al menos una intersección")
        if not found and path:
            raise ValueError("Un resultado sin ruta no puede llevar intersecciones")
        self.found = found
        self.path = path

    @classmethod
    def not_found(cls) -> "PathResult":
        return cls(False)

    @property
    def names(self) -> List[str]:
        """Nombres de las intersecciones de la ruta."""
        return [node.name for node in self.path]

    def __eq__(self, other) -> bool:
        if not isinstance(other, PathResult):
            return NotImplemented
        return self.found == other.found and self.path == other.path

    def __hash__(self) -> int:
        return hash((self.found, self.path))

    def __str__(self) -> str:
        if not self.found:
            return "PathResult(no route found)"
        return "PathResult(" + " → ".join(self.names) + ")"

    def __repr__(self) -> str:
        return f"PathResult(found={self.found}, path={self.names})"
