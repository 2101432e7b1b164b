"""
Modelo de red vial como grafo dirigido ponderado.

Este módulo implementa la representación de la red de calles como un
grafo dirigido donde los nodos son intersecciones y las aristas son
calles con un tiempo de viaje no negativo.

Concurrencia: la red no tiene sincronización interna. Se construye por
completo (un único escritor) antes de lanzar consultas; a partir de ahí
cualquier número de consultas concurrentes puede leerla sin locks, ya
que ningún algoritmo la modifica.
"""

import json
import logging
import math
import numbers
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import networkx as nx

from src.utils.config import VisualizationConfig
from src.utils.exceptions import InvalidWeightError, UnknownNodeError

logger = logging.getLogger(__name__)


class Intersection:
    """
    Representa una intersección (nodo) de la red vial.

    Dos intersecciones con el mismo nombre son la misma intersección:
    igualdad y hash dependen sólo del nombre. Inmutable una vez creada.
    """

    __slots__ = ('_name',)

    def __init__(self, name: str):
        """
        Inicializa una intersección.

        Args:
            name: Nombre único de la intersección (ej: "A", "Av. Brasil y Rambla")

        Raises:
            ValueError: Si el nombre no es un string no vacío
        """
        if not isinstance(name, str) or not name:
            raise ValueError(f"Nombre de intersección inválido: {name!r}")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __eq__(self, other) -> bool:
        if isinstance(other, Intersection):
            return self._name == other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._name)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Intersection('{self._name}')"


NodeRef = Union[str, Intersection]


def node_key(node: NodeRef) -> str:
    """Normaliza una referencia a intersección (nombre o Intersection) a su nombre."""
    if isinstance(node, Intersection):
        return node.name
    return node


class Road:
    """
    Representa una calle: arista dirigida entre dos intersecciones.

    La calle pertenece a la lista de adyacencia de su intersección de
    origen; la red es dueña de las intersecciones.
    """

    __slots__ = ('_origin', '_destination', '_travel_time')

    def __init__(self, origin: Intersection, destination: Intersection, travel_time: float):
        """
        Inicializa una calle.

        Args:
            origin: Intersección de origen
            destination: Intersección de destino
            travel_time: Tiempo de viaje (ya validado por la red)
        """
        self._origin = origin
        self._destination = destination
        self._travel_time = travel_time

    @property
    def origin(self) -> Intersection:
        return self._origin

    @property
    def destination(self) -> Intersection:
        return self._destination

    @property
    def travel_time(self) -> float:
        return self._travel_time

    def __str__(self) -> str:
        return f"Road({self._origin} → {self._destination}, {self._travel_time})"

    def __repr__(self) -> str:
        return (f"Road(origin='{self._origin.name}', destination='{self._destination.name}', "
                f"travel_time={self._travel_time})")


def validate_travel_time(travel_time) -> float:
    """
    Valida el peso de una calle.

    Dijkstra sólo es correcto con pesos no negativos, por eso se
    valida al insertar y no al consultar.

    Raises:
        InvalidWeightError: Si el peso es negativo, no finito o no numérico
    """
    if isinstance(travel_time, bool) or not isinstance(travel_time, numbers.Real):
        raise InvalidWeightError(travel_time, "no es numérico")
    if not math.isfinite(travel_time):
        raise InvalidWeightError(travel_time, "no es finito")
    if travel_time < 0:
        raise InvalidWeightError(travel_time, "no puede ser negativo")
    return travel_time


class TrafficNetwork:
    """
    Representa la red vial completa como un grafo dirigido G = (V, E).

    La fuente de verdad son las listas de adyacencia ordenadas
    (intersección → calles salientes, en orden de inserción). Se mantiene
    además un espejo ``networkx.MultiDiGraph`` para estadísticas y dibujo;
    las calles paralelas aparecen allí como aristas múltiples.
    """

    def __init__(self, network_file: Optional[str] = None):
        """
        Inicializa la red vial.

        Args:
            network_file: Ruta al archivo JSON con la red.
                          Si es None, crea una red vacía.
        """
        self.graph = nx.MultiDiGraph()
        self.intersections: Dict[str, Intersection] = {}
        self._roads: Dict[str, List[Road]] = {}

        # Metadata de la red
        self.network_name = ""
        self.location = ""
        self.description = ""

        if network_file:
            self.load_from_file(network_file)

    def load_from_file(self, filepath: str):
        """
        Carga la red desde un archivo JSON.

        Formato::

            {"network_name": "...", "intersections": [{"name": "A"}, ...],
             "roads": [{"from": "A", "to": "B", "travel_time": 5}, ...]}

        Args:
            filepath: Ruta al archivo JSON con la definición de la red

        Raises:
            FileNotFoundError: Si el archivo no existe
            json.JSONDecodeError: Si el archivo no es JSON válido
            UnknownNodeError: Si una calle referencia una intersección no declarada
            InvalidWeightError: Si una calle tiene un tiempo de viaje inválido
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"No se encontró el archivo: {filepath}")

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        self.network_name = data.get('network_name', '')
        self.location = data.get('location', '')
        self.description = data.get('description', '')

        for intersection_data in data.get('intersections', []):
            self.add_intersection(intersection_data['name'])

        self.add_roads(
            (road['from'], road['to'], road['travel_time'])
            for road in data.get('roads', [])
        )

        logger.info("Red cargada: %s (%d intersecciones, %d calles)",
                    self.network_name, len(self.intersections), self.road_count)

    def add_intersection(self, name: NodeRef) -> Intersection:
        """
        Registra una intersección. Idempotente: repetir un nombre no hace nada.

        Args:
            name: Nombre de la intersección (o una Intersection)

        Returns:
            Intersection: La intersección registrada con ese nombre
        """
        key = node_key(name)
        existing = self.intersections.get(key)
        if existing is not None:
            return existing

        intersection = name if isinstance(name, Intersection) else Intersection(key)
        self.intersections[key] = intersection
        self._roads[key] = []
        self.graph.add_node(key, intersection=intersection)
        return intersection

    def _validate_road(self, from_name: NodeRef, to_name: NodeRef,
                       travel_time) -> Tuple[Intersection, Intersection, float]:
        origin = self.require_intersection(from_name)
        destination = self.require_intersection(to_name)
        return origin, destination, validate_travel_time(travel_time)

    def _append_road(self, origin: Intersection, destination: Intersection,
                     travel_time: float) -> Road:
        road = Road(origin, destination, travel_time)
        self._roads[origin.name].append(road)
        self.graph.add_edge(origin.name, destination.name,
                            travel_time=travel_time, weight=travel_time, road=road)
        return road

    def add_road(self, from_name: NodeRef, to_name: NodeRef, travel_time: float) -> Road:
        """
        Agrega una calle (arista dirigida) a la red.

        Se permiten calles paralelas entre el mismo par de intersecciones;
        todas se consideran en los algoritmos de ruta.

        Args:
            from_name: Intersección de origen
            to_name: Intersección de destino
            travel_time: Tiempo de viaje (>= 0)

        Returns:
            Road: La calle creada

        Raises:
            UnknownNodeError: Si algún extremo no está registrado
            InvalidWeightError: Si el tiempo de viaje es inválido
        """
        origin, destination, weight = self._validate_road(from_name, to_name, travel_time)
        return self._append_road(origin, destination, weight)

    def add_roads(self, roads: Iterable[Tuple[NodeRef, NodeRef, float]]) -> List[Road]:
        """
        Agrega varias calles de forma atómica.

        Todas las calles se validan antes de insertar la primera: si alguna
        falla, la red queda exactamente como estaba.

        Args:
            roads: Iterable de tuplas (origen, destino, tiempo_de_viaje)

        Returns:
            Lista de calles creadas, en orden
        """
        validated = [self._validate_road(*road) for road in roads]
        return [self._append_road(*road) for road in validated]

    def get_intersection(self, name: NodeRef) -> Optional[Intersection]:
        """Retorna la intersección con el nombre dado, o None."""
        return self.intersections.get(node_key(name))

    def require_intersection(self, name: NodeRef) -> Intersection:
        """
        Retorna la intersección con el nombre dado.

        Raises:
            UnknownNodeError: Si no está registrada
        """
        intersection = self.intersections.get(node_key(name))
        if intersection is None:
            raise UnknownNodeError(node_key(name))
        return intersection

    def has_intersection(self, name: NodeRef) -> bool:
        return node_key(name) in self.intersections

    def __contains__(self, name) -> bool:
        return self.has_intersection(name)

    def get_all_intersection_names(self) -> List[str]:
        """Retorna lista de todos los nombres de intersecciones, en orden de inserción."""
        return list(self.intersections.keys())

    def get_neighbors(self, name: NodeRef) -> Sequence[Road]:
        """
        Retorna las calles salientes de una intersección, en orden de inserción.

        Una intersección desconocida no es un error: se comporta igual que
        una sin salidas y retorna una secuencia vacía.

        Args:
            name: Nombre de la intersección

        Returns:
            Tupla de calles salientes
        """
        return tuple(self._roads.get(node_key(name), ()))

    def get_incoming_neighbors(self, name: NodeRef) -> List[str]:
        """
        Retorna los nombres de intersecciones con calles entrantes.

        Args:
            name: Nombre de la intersección

        Returns:
            Lista de nombres (sin repetir) que conectan a esta
        """
        key = node_key(name)
        if key not in self.graph:
            return []
        return list(self.graph.predecessors(key))

    def get_roads_between(self, from_name: NodeRef, to_name: NodeRef) -> List[Road]:
        """Retorna todas las calles paralelas de from_name a to_name."""
        to_key = node_key(to_name)
        return [road for road in self.get_neighbors(from_name)
                if road.destination.name == to_key]

    @property
    def road_count(self) -> int:
        return sum(len(roads) for roads in self._roads.values())

    def iter_roads(self) -> Iterator[Road]:
        """Itera todas las calles, agrupadas por intersección de origen."""
        for roads in self._roads.values():
            yield from roads

    def get_network_stats(self) -> Dict:
        """
        Calcula estadísticas de la red.

        Returns:
            dict: Diccionario con estadísticas de la red
        """
        travel_times = [road.travel_time for road in self.iter_roads()]
        total_time = sum(travel_times)

        return {
            'num_intersections': len(self.intersections),
            'num_roads': len(travel_times),
            'total_travel_time': total_time,
            'avg_travel_time': total_time / len(travel_times) if travel_times else 0,
            'is_connected': (nx.is_weakly_connected(self.graph)
                             if len(self.graph) > 0 else False),
            'network_name': self.network_name,
            'location': self.location
        }

    def visualize(self, route: Optional[Sequence[NodeRef]] = None, show_labels: bool = True,
                  figsize: Tuple[int, int] = VisualizationConfig.FIGURE_SIZE):
        """
        Visualiza la red vial.

        Las intersecciones no tienen coordenadas, así que se usa un
        spring layout con semilla fija.

        Args:
            route: Ruta opcional (secuencia de intersecciones) a resaltar
            show_labels: Si True, muestra nombres de intersecciones
            figsize: Tamaño de la figura

        Returns:
            matplotlib.figure.Figure
        """
        fig = plt.figure(figsize=figsize)
        pos = nx.spring_layout(self.graph, seed=VisualizationConfig.LAYOUT_SEED)

        route_names = [node_key(node) for node in route] if route else []
        route_edges = set(zip(route_names, route_names[1:]))

        node_colors = [
            VisualizationConfig.ROUTE_NODE_COLOR if node in route_names
            else VisualizationConfig.NODE_COLOR
            for node in self.graph.nodes()
        ]
        nx.draw_networkx_nodes(self.graph, pos, node_color=node_colors,
                               node_size=500, alpha=0.9)

        edge_colors = [
            VisualizationConfig.ROUTE_EDGE_COLOR if (u, v) in route_edges
            else VisualizationConfig.EDGE_COLOR
            for u, v in self.graph.edges()
        ]
        nx.draw_networkx_edges(self.graph, pos, edge_color=edge_colors,
                               width=2, alpha=0.6, arrows=True,
                               arrowsize=20, arrowstyle='->')

        if show_labels:
            nx.draw_networkx_labels(self.graph, pos, font_size=8)

        plt.title(self.network_name or "Red vial", fontsize=14, fontweight='bold')
        plt.axis('off')
        plt.tight_layout()

        return fig

    def __str__(self) -> str:
        return f"TrafficNetwork('{self.network_name}', {len(self.intersections)} intersections)"

    def __repr__(self) -> str:
        return (f"TrafficNetwork(name='{self.network_name}', "
                f"intersections={len(self.intersections)}, "
                f"roads={self.road_count})")


def build_graph(nodes: Iterable[NodeRef],
                edges: Iterable[Tuple[NodeRef, NodeRef, float]]) -> TrafficNetwork:
    """
    Construye una red a partir de nombres de intersecciones y calles.

    Args:
        nodes: Nombres de intersecciones (los repetidos se ignoran)
        edges: Tuplas (origen, destino, tiempo_de_viaje)

    Returns:
        TrafficNetwork: Red nueva, propiedad del llamador

    Raises:
        UnknownNodeError: Si una calle referencia una intersección no listada
        InvalidWeightError: Si una calle tiene tiempo de viaje inválido
    """
    network = TrafficNetwork()
    for node in nodes:
        network.add_intersection(node)
    network.add_roads(edges)
    return network
