import pandas as pd
import numpy as np
import uuid

def generate_mock_locations(num_workers=40, num_sites=4, output_file="worker_locations_generated.csv", seed=None):
    """
    Generates a realistic dataset of worker pickup locations for route optimization runs.
    Workers live in a few residential pockets ('sites') around the city so that
    routes have both tight clusters and longer hops between them.
    """
    rng = np.random.default_rng(seed)

    # Center around Manila (Makati CBD)
    CENTER_LAT = 14.5547
    CENTER_LON = 121.0244

    # 1. Generate residential pockets within ~8km of the center (roughly 0.07 degrees)
    sites = []
    for site_index in range(num_sites):
        sites.append({
            "id": f"s_{str(uuid.uuid4())[:8]}",
            "name": f"Barangay {site_index+1}",
            "lat": CENTER_LAT + rng.uniform(-0.07, 0.07),
            "lon": CENTER_LON + rng.uniform(-0.07, 0.07),
        })

    data = []

    # 2. Scatter workers around their pocket (~1km)
    for worker_index in range(num_workers):
        site = sites[rng.integers(0, len(sites))]
        data.append({
            "worker_id": f"worker-{str(worker_index+1).zfill(4)}",
            "latitude": np.round(site["lat"] + rng.uniform(-0.01, 0.01), 6),
            "longitude": np.round(site["lon"] + rng.uniform(-0.01, 0.01), 6),
            "shift": rng.choice(["morning", "night"], p=[0.7, 0.3]),
            "site": site["name"],
        })

    # 3. Save to CSV
    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_workers} worker locations and saved to '{output_file}'")

    print("\nWorkers per site:")
    counts = df["site"].value_counts()
    for name, count in counts.items():
        print(f"  {name}: {count} workers")

    return df

if __name__ == "__main__":
    generate_mock_locations(num_workers=40, num_sites=4)
