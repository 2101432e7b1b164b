"""
Métricas y análisis de rutas.

Este módulo proporciona funciones para evaluar y comparar las rutas
producidas por los algoritmos de ruteo.
"""

from typing import Dict, Sequence

import numpy as np
import pandas as pd

from src.network.traffic_network import NodeRef, TrafficNetwork, node_key
from src.utils.config import RoutingConfig


class MetricsCalculator:
    """
    Calculadora de métricas de rutas.

    Proporciona métodos estáticos para evaluar rutas individuales,
    compararlas entre sí y resumir vectores de distancias.
    """

    @staticmethod
    def path_travel_time(network: TrafficNetwork, path: Sequence[NodeRef]) -> float:
        """
        Calcula el tiempo de viaje de una ruta.

        Si hay calles paralelas entre dos intersecciones consecutivas se
        toma la más rápida.

        Args:
            network: Red vial
            path: Secuencia de intersecciones

        Returns:
            float: Tiempo total (0 para rutas de una sola intersección)

        Raises:
            ValueError: Si dos intersecciones consecutivas no están conectadas
        """
        total_time = 0
        for origin, destination in zip(path, path[1:]):
            roads = network.get_roads_between(origin, destination)
            if not roads:
                raise ValueError(f"No existe calle {node_key(origin)} → {node_key(destination)}")
            total_time += min(road.travel_time for road in roads)
        return total_time

    @staticmethod
    def route_overlap(route_a, route_b) -> float:
        """
        Similitud de Jaccard entre las intersecciones de dos rutas.

        Returns:
            float: 0.0 (disjuntas) a 1.0 (mismas intersecciones)
        """
        nodes_a, nodes_b = set(route_a.path), set(route_b.path)
        union = nodes_a | nodes_b
        if not union:
            return 0.0
        return len(nodes_a & nodes_b) / len(union)

    @staticmethod
    def distance_statistics(vector) -> Dict:
        """
        Resume un vector de distancias.

        Args:
            vector: Resultado de shortest_paths

        Returns:
            dict: Alcanzadas, fracción alcanzada, distancia media y máxima
                  (sobre las alcanzadas; el origen cuenta con distancia 0)
        """
        values = np.array(list(vector.distances.values()), dtype=float)
        finite = values[np.isfinite(values)]

        return {
            'num_intersections': len(values),
            'num_reachable': int(finite.size),
            'reachable_fraction': float(finite.size / values.size) if values.size else 0.0,
            'mean_distance': float(np.mean(finite)) if finite.size else 0.0,
            'max_distance': float(np.max(finite)) if finite.size else 0.0,
        }

    @staticmethod
    def create_summary_dataframe(network: TrafficNetwork,
                                 routes: Dict,
                                 reference=None) -> pd.DataFrame:
        """
        Crea un DataFrame resumen de varias rutas.

        Args:
            network: Red vial
            routes: Diccionario {nombre_ruta: PathResult}
            reference: Ruta contra la cual medir el solapamiento (opcional)

        Returns:
            DataFrame con una fila por ruta
        """
        rows = []
        for name, route in routes.items():
            row = {
                'route': name,
                'found': route.found,
                'hops': max(0, len(route.path) - 1),
                'travel_time': (MetricsCalculator.path_travel_time(network, route.path)
                                if route.found else RoutingConfig.INFINITY),
                'path': " → ".join(route.names),
            }
            if reference is not None:
                row['overlap'] = MetricsCalculator.route_overlap(route, reference)
            rows.append(row)

        return pd.DataFrame(rows)
