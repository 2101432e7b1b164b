"""
Tests para el cálculo de caminos mínimos (Dijkstra).
"""

import random
import threading
import pytest
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import networkx as nx

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.network.traffic_network import TrafficNetwork, Intersection, build_graph
from src.routing.results import DistanceVector
from src.routing.shortest_path import route_cost, shortest_paths, shortest_route
from src.utils.config import NETWORK_FILE, RoutingConfig
from src.utils.exceptions import RouteSearchCancelled, UnknownNodeError

INF = RoutingConfig.INFINITY


def random_network(seed: int, n_nodes: int = 6, n_roads: int = 12,
                   max_weight: int = 9) -> TrafficNetwork:
    """Red aleatoria pequeña (con calles paralelas, lazos y pesos cero posibles)."""
    rng = random.Random(seed)
    names = [f"N{i}" for i in range(n_nodes)]
    roads = [(rng.choice(names), rng.choice(names), rng.randint(0, max_weight))
             for _ in range(n_roads)]
    return build_graph(names, roads)


def brute_force_distance(network: TrafficNetwork, source: str, target: str) -> float:
    """Mínimo sobre todos los caminos simples de la suma de pesos."""
    if source == target:
        return 0
    best = INF
    for path in nx.all_simple_paths(network.graph, source, target):
        cost = sum(min(r.travel_time for r in network.get_roads_between(a, b))
                   for a, b in zip(path, path[1:]))
        best = min(best, cost)
    return best


class TestScenarios:
    """Escenarios básicos."""

    def test_linear_graph(self):
        """A→B(5), B→C(10) ⇒ {A:0, B:5, C:15}."""
        network = build_graph(["A", "B", "C"], [("A", "B", 5), ("B", "C", 10)])

        vector = shortest_paths(network, "A")

        assert isinstance(vector, DistanceVector)
        assert vector.source == Intersection("A")
        assert vector.as_dict() == {"A": 0, "B": 5, "C": 15}

    def test_unreached_node(self):
        """Una intersección sin calles queda en infinito, sin error."""
        network = build_graph(["A", "B", "C", "D"], [("A", "B", 5), ("B", "C", 10)])

        vector = shortest_paths(network, "A")

        assert vector["D"] == INF
        assert not vector.is_reachable("D")
        assert vector.is_reachable(Intersection("C"))
        assert set(n.name for n in vector.reachable()) == {"A", "B", "C"}

    def test_unknown_source(self):
        """Origen no registrado."""
        network = build_graph(["A"], [])

        with pytest.raises(UnknownNodeError):
            shortest_paths(network, "Z")

    def test_unknown_node_lookup(self):
        """Consultar una intersección no registrada en el resultado da UnknownNodeError."""
        vector = shortest_paths(build_graph(["A"], []), "A")

        with pytest.raises(UnknownNodeError) as exc_info:
            vector["Z"]
        assert exc_info.value.name == "Z"

        with pytest.raises(UnknownNodeError):
            vector.is_reachable("Z")
        with pytest.raises(UnknownNodeError):
            route_cost(vector, Intersection("Z"))
        assert "Z" not in vector

    def test_sample_city(self):
        """Distancias en la red de ejemplo."""
        network = TrafficNetwork(str(NETWORK_FILE))

        vector = shortest_paths(network, "A")

        assert vector.as_dict() == {
            "A": 0, "B": 5, "C": 11, "D": 4, "E": 6, "F": 9, "G": INF
        }

    def test_parallel_roads_use_cheapest(self):
        """Se consideran todas las calles paralelas."""
        network = build_graph(["A", "B"], [("A", "B", 7), ("A", "B", 3)])

        assert shortest_paths(network, "A")["B"] == 3

    def test_stale_entries_ignored(self):
        """Una intersección mejorada después de insertarse usa la mejor distancia."""
        network = build_graph(
            ["A", "B", "C", "D"],
            [("A", "C", 10), ("A", "B", 1), ("B", "C", 1), ("C", "D", 1)]
        )

        vector = shortest_paths(network, "A")

        assert vector["C"] == 2
        assert vector["D"] == 3
        assert vector.predecessors[Intersection("C")] == Intersection("B")

    def test_ties_break_by_insertion_order(self):
        """Con empates, el predecesor es el primero insertado en la frontera."""
        network = build_graph(
            ["A", "B", "C", "D"],
            [("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "D", 1)]
        )

        route = shortest_route(network, "A", "D")

        assert route.names == ["A", "B", "D"]

    def test_source_only(self):
        """Red de una sola intersección."""
        network = build_graph(["A"], [("A", "A", 3)])

        assert shortest_paths(network, "A").as_dict() == {"A": 0}


class TestShortestRoute:
    """Tests de reconstrucción de la ruta mínima."""

    def test_route_sample_city(self):
        """La ruta mínima A→C pasa por B, E y F."""
        network = TrafficNetwork(str(NETWORK_FILE))

        route = shortest_route(network, "A", "C")

        assert route.found
        assert route.names == ["A", "B", "E", "F", "C"]

    def test_route_unreachable(self):
        """Sin ruta se retorna found=False y una ruta vacía."""
        network = TrafficNetwork(str(NETWORK_FILE))

        route = shortest_route(network, "A", "G")

        assert not route.found
        assert route.path == ()

    def test_route_to_self(self):
        """Origen igual a destino."""
        network = TrafficNetwork(str(NETWORK_FILE))

        assert shortest_route(network, "C", "C").names == ["C"]

    def test_route_unknown_destination(self):
        """Destino no registrado."""
        network = TrafficNetwork(str(NETWORK_FILE))

        with pytest.raises(UnknownNodeError):
            shortest_route(network, "A", "Z")


class TestProperties:
    """Propiedades verificadas sobre redes aleatorias pequeñas."""

    @pytest.mark.parametrize("seed", range(15))
    def test_source_distance_is_zero(self, seed):
        """La distancia al origen siempre es 0."""
        network = random_network(seed)

        for name in network.get_all_intersection_names():
            assert shortest_paths(network, name)[name] == 0

    @pytest.mark.parametrize("seed", range(15))
    def test_matches_brute_force(self, seed):
        """Las distancias coinciden con la enumeración de caminos simples."""
        network = random_network(seed)
        source = "N0"

        vector = shortest_paths(network, source)

        for target in network.get_all_intersection_names():
            assert vector[target] == brute_force_distance(network, source, target)

    @pytest.mark.parametrize("seed", range(15))
    def test_matches_networkx(self, seed):
        """Las distancias coinciden con networkx en redes más grandes."""
        network = random_network(seed, n_nodes=25, n_roads=70, max_weight=20)

        vector = shortest_paths(network, "N0")
        expected = nx.single_source_dijkstra_path_length(
            network.graph, "N0", weight="travel_time"
        )

        for target in network.get_all_intersection_names():
            assert vector[target] == expected.get(target, INF)

    @pytest.mark.parametrize("seed", range(15))
    def test_unreached_means_no_path(self, seed):
        """Infinito si y sólo si no hay camino."""
        network = random_network(seed, n_nodes=8, n_roads=8)

        vector = shortest_paths(network, "N0")

        for target in network.get_all_intersection_names():
            has_path = nx.has_path(network.graph, "N0", target)
            assert vector.is_reachable(target) == has_path

    @pytest.mark.parametrize("seed", range(10))
    def test_route_cost_matches_distance(self, seed):
        """La ruta reconstruida cuesta exactamente la distancia reportada."""
        network = random_network(seed, n_nodes=10, n_roads=25)
        vector = shortest_paths(network, "N0")

        for target in network.get_all_intersection_names():
            route = shortest_route(network, "N0", target)
            assert route.found == vector.is_reachable(target)
            if route.found:
                cost = sum(min(r.travel_time for r in network.get_roads_between(a, b))
                           for a, b in zip(route.path, route.path[1:]))
                assert cost == vector[target]

    def test_idempotent(self):
        """Dos consultas sobre la misma red dan resultados idénticos."""
        network = random_network(3, n_nodes=12, n_roads=30)

        first = shortest_paths(network, "N0")
        second = shortest_paths(network, "N0")

        assert first == second
        assert first is not second


class TestConcurrencyAndCancellation:
    """Lecturas concurrentes y cancelación."""

    def test_concurrent_queries(self):
        """Consultas concurrentes sobre una red ya construida coinciden con las secuenciales."""
        network = random_network(7, n_nodes=30, n_roads=90)
        sources = network.get_all_intersection_names()
        expected = [shortest_paths(network, s) for s in sources]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda s: shortest_paths(network, s), sources))

        assert results == expected

    def test_cancel_before_start(self):
        """Un evento ya activado cancela antes de la primera extracción."""
        network = TrafficNetwork(str(NETWORK_FILE))
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(RouteSearchCancelled):
            shortest_paths(network, "A", cancel_event=cancel)

    def test_cancel_during_search(self):
        """La cancelación se consulta en cada extracción."""

        class CancelAfter:
            def __init__(self, checks):
                self.remaining = checks

            def is_set(self):
                self.remaining -= 1
                return self.remaining < 0

        network = TrafficNetwork(str(NETWORK_FILE))

        with pytest.raises(RouteSearchCancelled):
            shortest_paths(network, "A", cancel_event=CancelAfter(2))

        # Con suficientes consultas no se cancela
        assert shortest_paths(network, "A", cancel_event=CancelAfter(1000))["C"] == 11

    def test_unset_event(self):
        """Un evento no activado no altera el resultado."""
        network = TrafficNetwork(str(NETWORK_FILE))

        assert (shortest_paths(network, "A", cancel_event=threading.Event())
                == shortest_paths(network, "A"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
