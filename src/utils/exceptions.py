"""
Excepciones del sistema de rutas.

La ausencia de ruta NO es una excepción: se informa mediante
``PathResult(found=False)``. Aquí sólo viven los errores duros.
"""


class RoutingError(Exception):
    """Error base de la red vial y del cálculo de rutas."""


class UnknownNodeError(RoutingError, KeyError):
    """Se referenció una intersección que no está registrada en la red."""

    def __init__(self, name):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Intersección desconocida: {self.name!r}"


class InvalidWeightError(RoutingError, ValueError):
    """Tiempo de viaje inválido (negativo, no finito o no numérico)."""

    def __init__(self, weight, reason: str = "debe ser un número finito >= 0"):
        self.weight = weight
        self.reason = reason
        super().__init__(weight)

    def __str__(self) -> str:
        return f"Tiempo de viaje inválido {self.weight!r}: {self.reason}"


class RouteSearchCancelled(RoutingError):
    """La búsqueda fue cancelada por el llamador antes de terminar."""
