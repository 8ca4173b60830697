"""
Distance Kernel
===============
Hard-cutoff contact kernel and neighbor search for proximity-based transmission
"""

import numpy as np
from typing import List
from scipy.spatial import cKDTree


# Relative slack on the KD-tree query radius; hits are re-checked exactly
TREE_RADIUS_SLACK = 1e-9


class DistanceKernel:
    """
    Step kernel: two individuals are in contact when their Euclidean
    distance is at most the infection radius
    """

    def __init__(self, radius: float = 2.0, use_spatial_index: bool = True):
        """
        Args:
            radius: Infection radius (grid units, inclusive)
            use_spatial_index: Use a KD-tree instead of a brute-force scan
        """
        self.radius = radius
        self.use_spatial_index = use_spatial_index

    def in_contact(self, dx, dy):
        """
        Step kernel on coordinate offsets: dx² + dy² <= radius²

        Works elementwise on arrays.
        """
        return dx * dx + dy * dy <= self.radius * self.radius

    def neighbors_within(self, sources: np.ndarray, targets: np.ndarray) -> List[np.ndarray]:
        """
        For every source point, the indices of target points within the radius

        Args:
            sources: (m, 2) array of source positions
            targets: (n, 2) array of target positions

        Returns:
            List of m sorted index arrays into targets
        """
        if len(sources) == 0:
            return []
        if len(targets) == 0:
            return [np.empty(0, dtype=np.intp) for _ in range(len(sources))]

        if self.use_spatial_index:
            return self._neighbors_tree(sources, targets)
        return self._neighbors_scan(sources, targets)

    def _neighbors_tree(self, sources: np.ndarray, targets: np.ndarray) -> List[np.ndarray]:
        tree = cKDTree(targets)
        hits = tree.query_ball_point(sources, r=self.radius * (1 + TREE_RADIUS_SLACK))

        neighbors = []
        for (sx, sy), candidates in zip(sources, hits):
            candidates = np.array(sorted(candidates), dtype=np.intp)
            if len(candidates) == 0:
                neighbors.append(candidates)
                continue
            close = self.in_contact(targets[candidates, 0] - sx, targets[candidates, 1] - sy)
            neighbors.append(candidates[close])
        return neighbors

    def _neighbors_scan(self, sources: np.ndarray, targets: np.ndarray) -> List[np.ndarray]:
        neighbors = []
        for sx, sy in sources:
            close = self.in_contact(targets[:, 0] - sx, targets[:, 1] - sy)
            neighbors.append(np.flatnonzero(close))
        return neighbors
