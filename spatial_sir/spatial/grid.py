"""
Spatial Grid and Placement
==========================
Grid sizing and non-overlapping placement of individuals in continuous grid space
"""

import logging
import math

import numpy as np
from typing import Tuple


logger = logging.getLogger(__name__)

GRID_AREA_FACTOR = 1.5
DEFAULT_MIN_SPACING = 1.2
DEFAULT_MAX_ATTEMPTS = 100


def grid_dimensions(population_size: int) -> Tuple[int, int]:
    """
    Grid width and height for a population

    Area exceeds the population count so that spaced placement has room:
    width = ceil(sqrt(n * 1.5)), height = ceil(n / width)
    """
    width = math.ceil(math.sqrt(population_size * GRID_AREA_FACTOR))
    height = math.ceil(population_size / width)
    return width, height


class SpatialPlacer:
    """
    Rejection-sampled placement with a minimum spacing between individuals
    """

    def __init__(self,
                 min_spacing: float = DEFAULT_MIN_SPACING,
                 max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 rng: np.random.Generator = None):
        """
        Initialize placer

        Args:
            min_spacing: Minimum Euclidean distance between accepted positions
            max_attempts: Spaced samples tried per individual before falling back
            rng: Random generator (fresh unseeded generator if None)
        """
        self.min_spacing = min_spacing
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else np.random.default_rng()

        # Fallbacks used by the most recent place() call
        self.fallback_count = 0

    def place(self, population_size: int, width: float, height: float) -> np.ndarray:
        """
        Generate one position per individual

        Interior samples keep a 1 unit margin from every edge. When no spaced
        position is found within the attempt budget, a position anywhere on
        the grid is accepted without a spacing check.

        Returns:
            (population_size, 2) array of x, y coordinates
        """
        positions = np.empty((population_size, 2), dtype=float)
        self.fallback_count = 0

        for i in range(population_size):
            accepted = positions[:i]
            found = False

            for _ in range(self.max_attempts):
                x = self.rng.random() * (width - 2) + 1
                y = self.rng.random() * (height - 2) + 1

                if i == 0:
                    found = True
                else:
                    distances = np.hypot(accepted[:, 0] - x, accepted[:, 1] - y)
                    found = bool(np.all(distances >= self.min_spacing))

                if found:
                    break

            if not found:
                x = self.rng.random() * width
                y = self.rng.random() * height
                self.fallback_count += 1

            positions[i] = (x, y)

        if self.fallback_count:
            logger.debug("Placed %d of %d individuals without spacing on a %sx%s grid",
                         self.fallback_count, population_size, width, height)

        return positions
