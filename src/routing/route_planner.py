"""
Planificador de rutas: camino mínimo más alternativas diversas.
"""

import logging
from typing import List, Optional

import pandas as pd

from src.network.traffic_network import NodeRef, TrafficNetwork
from src.utils.config import RoutingConfig
from src.utils.metrics import MetricsCalculator

from .alternative_route import find_alternative_routes
from .results import PathResult
from .shortest_path import reconstruct_path, route_cost, shortest_paths

logger = logging.getLogger(__name__)


class RoutePlan:
    """
    Resultado de planificar un viaje.

    Attributes:
        shortest: Ruta de costo mínimo (found=False si no hay ruta)
        shortest_cost: Costo de la ruta mínima, o None
        alternatives: Rutas que evitan el interior de la ruta mínima
    """

    def __init__(self, network: TrafficNetwork, shortest: PathResult,
                 shortest_cost: Optional[float], alternatives: List[PathResult]):
        self.network = network
        self.shortest = shortest
        self.shortest_cost = shortest_cost
        self.alternatives = alternatives

    def summary(self) -> pd.DataFrame:
        """DataFrame con la ruta mínima y las alternativas."""
        routes = {'shortest': self.shortest}
        for i, route in enumerate(self.alternatives, start=1):
            routes[f'alternative_{i}'] = route
        return MetricsCalculator.create_summary_dataframe(
            self.network, routes,
            reference=self.shortest if self.shortest.found else None
        )

    def __repr__(self) -> str:
        return (f"RoutePlan(shortest={self.shortest.names}, cost={self.shortest_cost}, "
                f"alternatives={len(self.alternatives)})")


class RoutePlanner:
    """
    Fachada sobre los algoritmos de ruta para una red ya construida.

    No guarda estado por consulta, así que una misma instancia puede
    atender consultas concurrentes (ver la precondición en traffic_network).
    """

    def __init__(self, network: TrafficNetwork,
                 max_alternatives: int = RoutingConfig.DEFAULT_MAX_ALTERNATIVES):
        """
        Crea un planificador sobre una red.

        Args:
            network: Red vial completamente construida
            max_alternatives: Alternativas por defecto en plan()
        """
        self.network = network
        self.max_alternatives = max_alternatives

    def plan(self, origin: NodeRef, destination: NodeRef,
             max_alternatives: Optional[int] = None, cancel_event=None) -> RoutePlan:
        """
        Planifica un viaje.

        Args:
            origin: Intersección de origen
            destination: Intersección de destino
            max_alternatives: Número máximo de alternativas (None = valor por defecto)
            cancel_event: Opcional, se propaga a ambos algoritmos

        Raises:
            UnknownNodeError: Si origin o destination no están registradas
        """
        if max_alternatives is None:
            max_alternatives = self.max_alternatives

        target = self.network.require_intersection(destination)
        vector = shortest_paths(self.network, origin, cancel_event=cancel_event)
        shortest = reconstruct_path(vector.predecessors, vector.source, target)
        cost = route_cost(vector, target)

        alternatives: List[PathResult] = []
        if shortest.found:
            interior = shortest.names[1:-1]
            # Una ruta mínima directa no tiene interior: se excluye la calle misma
            direct = [] if interior or len(shortest.path) < 2 else [tuple(shortest.names)]
            candidates = find_alternative_routes(
                self.network, origin, destination,
                max_routes=max_alternatives,
                excluded=interior,
                excluded_roads=direct,
                cancel_event=cancel_event
            )
            alternatives = [route for route in candidates if route != shortest]

        logger.debug("Plan %s → %s: costo %s, %d alternativas",
                     vector.source.name, target.name, cost, len(alternatives))
        return RoutePlan(self.network, shortest, cost, alternatives)
