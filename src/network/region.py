"""
Jerarquía de control de tráfico.

Las regiones forman un árbol (ciudad → zonas → barrios ...) y cada una
agrupa los semáforos que controla directamente.
"""

from typing import Iterator, List, Optional, Tuple

from .traffic_signal import TrafficSignal


class TrafficRegion:
    """Nodo del árbol de regiones de control."""

    def __init__(self, name: str):
        """
        Args:
            name: Nombre de la región (ej: "City", "North Zone")
        """
        self.name = name
        self.sub_regions: List["TrafficRegion"] = []
        self.signals: List[TrafficSignal] = []

    def add_sub_region(self, region: "TrafficRegion") -> "TrafficRegion":
        """Agrega una subregión y la retorna (para encadenar)."""
        if region is self:
            raise ValueError("Una región no puede contenerse a sí misma")
        self.sub_regions.append(region)
        return region

    def add_signal(self, signal: TrafficSignal):
        """Asigna un semáforo a esta región."""
        self.signals.append(signal)

    def display_sub_regions(self) -> List[str]:
        """Retorna los nombres de las subregiones directas, en orden."""
        return [region.name for region in self.sub_regions]

    def walk(self) -> Iterator[Tuple[int, "TrafficRegion"]]:
        """Recorre el árbol en preorden, produciendo (profundidad, región)."""
        stack = [(0, self)]
        while stack:
            depth, region = stack.pop()
            yield depth, region
            for child in reversed(region.sub_regions):
                stack.append((depth + 1, child))

    def find(self, name: str) -> Optional["TrafficRegion"]:
        """Busca una región por nombre en todo el subárbol."""
        for _, region in self.walk():
            if region.name == name:
                return region
        return None

    def all_signals(self) -> List[TrafficSignal]:
        """Todos los semáforos del subárbol, en preorden."""
        return [signal for _, region in self.walk() for signal in region.signals]

    def describe(self) -> str:
        """Árbol indentado, una región por línea."""
        return "\n".join("  " * depth + region.name for depth, region in self.walk())

    def __repr__(self) -> str:
        return f"TrafficRegion('{self.name}', sub_regions={len(self.sub_regions)})"
