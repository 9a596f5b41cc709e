#!/usr/bin/env python3
"""
Demo script showing grid clustering across zoom levels.
"""

import numpy as np
from grid_cluster.core import MapView, SelectGridCluster, ViewportLoadCoordinator


def main():
    """Cluster random points and zoom in on the densest cluster."""
    print("Grid Cluster Demo")
    print("=" * 40)

    rng = np.random.default_rng(123)
    coords = np.vstack([
        rng.normal(loc=(2000, 2000), scale=300, size=(3000, 2)),
        rng.uniform(0, 10000, size=(2000, 2)),
    ])
    points = [(i, x, y) for i, (x, y) in enumerate(coords)]

    source = ViewportLoadCoordinator(base_side_width=50, ignore_feature_changes=True)
    source.set_points(points)
    print(f"\nLoaded {len(source.points)} points, {len(source.features)} leaf cells")

    view = MapView(center=(5000.0, 5000.0), zoom=0, max_resolution=40.0, size=(256, 256))
    select = SelectGridCluster(view, source, animate=False)

    for _ in range(6):
        source.request_view(view.calculate_extent(), view.resolution)
        clusters = source.features
        densest = max(clusters, key=lambda record: record.fill)

        print(f"\nZoom {view.zoom}:")
        print(f"  Resolution: {view.resolution:.2f} units/px")
        print(f"  Cell side: {source.state.current_side_width:.0f}")
        print(f"  Clusters: {len(clusters)}")
        print(f"  Densest: {densest.id} fill={densest.fill:.3f} members={len(densest.members)}")

        if densest.selectable:
            select.handle_click(densest)
            print(f"  Selected single feature {densest.id}")
            break
        select.handle_click(densest)

    print(f"\nClustering passes: {source.passes}")


if __name__ == "__main__":
    main()
