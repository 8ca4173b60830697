"""
Step Driver
===========
Rate-limits engine steps for a render loop that runs faster than the simulation
"""

import time
from typing import Callable

from .spatial.spatial_sir_simulator import EpidemicEngine


class StepDriver:
    """
    Steps the engine at most once per interval

    A render loop calls tick() every frame; a step is taken only when the
    engine is running and at least `interval` seconds have passed since the
    last step.
    """

    def __init__(self,
                 engine: EpidemicEngine,
                 interval: float = 0.8,
                 clock: Callable[[], float] = time.monotonic):
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.engine = engine
        self.interval = interval
        self.clock = clock
        self.last_step_time = None

    def tick(self, now: float = None) -> bool:
        """
        Advance the engine if the interval has elapsed

        Returns:
            True if a step was taken
        """
        if not self.engine.running:
            return False

        if now is None:
            now = self.clock()

        if self.last_step_time is not None and now - self.last_step_time < self.interval:
            return False

        self.last_step_time = now
        return self.engine.step()

    def restart_timer(self):
        """Next tick steps immediately"""
        self.last_step_time = None
