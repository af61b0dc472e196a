import argparse
import logging
import random
import time
from datetime import datetime, timezone

from optimization import Algorithm, OptimizationConfig, RouteConstraints, optimize_route, policy_from_env
from routing import calculate_etas, eta_policy_from_env
from routing.dataset import load_locations_csv
from drivers import assess_driver_capacity

def run_simulation(csv_path, limit=20, max_stops=15, max_iterations=200, seed=7):
    print("=== STARTING ROUTE OPTIMIZATION SIMULATION ===")

    # 1. Load Data
    locations = load_locations_csv(csv_path, limit=limit)
    print(f"Loaded {len(locations)} worker locations.\n")

    # 2. Configure System
    policy = policy_from_env()
    eta_policy = eta_policy_from_env()
    driver = assess_driver_capacity("DRV-001", declared_capacity=max_stops)
    constraints = RouteConstraints(
        max_stops=max_stops,
        max_duration=120,
        vehicle_capacity=driver.max_passengers,
        start_location=locations[0] if locations else None,
    )

    # 3. Run every algorithm on the same input
    results = []
    for algorithm in Algorithm:
        config = OptimizationConfig(
            algorithm=algorithm,
            max_iterations=max_iterations,
            prioritize_pickup_time=True,
            minimize_distance=True,
        )
        start_time = time.time()
        result = optimize_route(locations, config, constraints, policy=policy, rng=random.Random(seed))
        elapsed = time.time() - start_time
        results.append(result)
        print(
            f"{algorithm.value:>20}: {len(result.optimized_stops)} stops, "
            f"{result.total_distance:.2f} km, {result.estimated_duration:.1f} min, "
            f"score {result.optimization_score:.2f} ({elapsed:.2f}s)"
        )

    # 4. ETA table for the best route
    best = max(results, key=lambda r: r.optimization_score)
    print(f"\n--- ETAs for best route ({best.algorithm}) ---")
    etas = calculate_etas(best.optimized_stops, datetime.now(timezone.utc), policy=eta_policy)
    for eta in etas:
        print(
            f"  {eta.stop_id}: {eta.estimated_arrival:%H:%M} "
            f"(confidence {eta.confidence:.2f}, {eta.factors['distance']:.2f} km)"
        )

    skipped = best.metadata.get("locations_skipped", 0)
    print("\n=== SIMULATION COMPLETE ===")
    print(f"Workers routed: {len(best.optimized_stops)} / {len(best.optimized_stops) + skipped}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compare route optimization algorithms on a worker CSV.")
    parser.add_argument("csv_path", nargs="?", default="worker_locations_generated.csv")
    parser.add_argument("--limit", type=int, default=20)
    parser.add_argument("--max-stops", type=int, default=15)
    parser.add_argument("--max-iterations", type=int, default=200)
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_simulation(args.csv_path, args.limit, args.max_stops, args.max_iterations, args.seed)
