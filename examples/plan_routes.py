"""
Script de ejemplo: planificación de rutas en la red de ejemplo.

Este script demuestra el sistema completo: carga de la red, colas en
semáforos, ocupación de calles, camino mínimo, rutas alternativas y
jerarquía de regiones.
"""

import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.network import TrafficNetwork, TrafficSignal, Vehicle, RoadOccupancy, TrafficRegion
from src.routing import RoutePlanner, shortest_paths, find_alternative_route
from src.utils.config import NETWORK_FILE, setup_logging
from src.utils.metrics import MetricsCalculator


def demo_signals_and_roads(network: TrafficNetwork):
    """Vehículos esperando en un semáforo y circulando por una calle."""
    print("\n" + "="*70)
    print("SEMÁFOROS Y CALLES")
    print("="*70)

    signal = TrafficSignal("A")
    v1 = Vehicle("KA-01-1234")
    v2 = Vehicle("KA-01-5678")
    signal.add_vehicle_to_queue(v1)
    signal.add_vehicle_to_queue(v2)

    passed = signal.pass_vehicle()
    print(f"  Pasó el semáforo de A: {passed.license_plate}")
    print(f"  En cola: {signal.queue_length}")

    occupancy = RoadOccupancy(network.get_neighbors("A")[0])
    occupancy.add_vehicle(v1)
    occupancy.add_vehicle(v2)
    for plate in occupancy.display_vehicles():
        print(f"  {plate} está en {occupancy.road}")

    return signal


def demo_routing(network: TrafficNetwork):
    """Distancias mínimas, ruta alternativa y plan completo."""
    print("\n" + "="*70)
    print("DISTANCIAS MÍNIMAS DESDE A")
    print("="*70)

    vector = shortest_paths(network, "A")
    for name, dist in vector.as_dict().items():
        print(f"  {name}: {dist}")

    stats = MetricsCalculator.distance_statistics(vector)
    print(f"  Alcanzadas: {stats['num_reachable']}/{stats['num_intersections']}")

    print("\n" + "="*70)
    print("RUTA ALTERNATIVA A → C")
    print("="*70)

    route = find_alternative_route(network, "A", "C", excluded=set())
    if route.found:
        print(f"  Ruta alternativa encontrada: {' → '.join(route.names)}")
    else:
        print("  No se encontró ruta alternativa")

    print("\n" + "="*70)
    print("PLAN DE VIAJE A → C")
    print("="*70)

    plan = RoutePlanner(network).plan("A", "C")
    print(plan.summary().to_string(index=False))


def demo_regions(signal: TrafficSignal):
    """Jerarquía de control."""
    print("\n" + "="*70)
    print("REGIONES DE CONTROL")
    print("="*70)

    city = TrafficRegion("City")
    north = city.add_sub_region(TrafficRegion("North Zone"))
    city.add_sub_region(TrafficRegion("South Zone"))
    north.add_signal(signal)

    print(city.describe())
    print(f"  Semáforos en la ciudad: {len(city.all_signals())}")


def main():
    """Función principal del ejemplo."""
    setup_logging()

    print("="*70)
    print("EJEMPLO DE PLANIFICACIÓN DE RUTAS")
    print("="*70)

    network = TrafficNetwork(str(NETWORK_FILE))
    print(f"  {network!r}")

    signal = demo_signals_and_roads(network)
    demo_routing(network)
    demo_regions(signal)

    print("\n" + "="*70)
    print("EJEMPLO COMPLETADO")
    print("="*70)


if __name__ == "__main__":
    main()
