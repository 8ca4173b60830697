"""
Spatial SIR Epidemic Engine
===========================
Individuals placed in continuous 2-D space, proximity-based stochastic
transmission and duration-based recovery, advanced one day per step
"""

import logging

import numpy as np
import pandas as pd
from dataclasses import replace
from typing import Any, Dict, Optional

from .grid import SpatialPlacer, grid_dimensions
from .transmission import TransmissionModel
from ..config import EngineConfig, validate_config
from ..core.disease_params import DiseaseParameters, get_preset
from ..core.population import HealthState, Population
from ..core.sir_model import History, plot_results


logger = logging.getLogger(__name__)


class EpidemicEngine:
    """
    Step-driven spatial SIR simulator

    The engine is idle until start() is called; step() only has an effect
    while running, and the engine returns to idle on its own once nobody is
    infected. Population and history are owned by the engine; callers should
    treat them as read-only.
    """

    def __init__(self,
                 config: EngineConfig = None,
                 rng: np.random.Generator = None):
        """
        Initialize engine

        Args:
            config: Engine configuration (defaults if None)
            rng: Random generator shared by placement and transmission
                 (seeded from config.seed if None)
        """
        if config is None:
            config = EngineConfig()
        validate_config(config)
        self.config = config

        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        self.grid_width, self.grid_height = grid_dimensions(config.population_size)

        self.placer = SpatialPlacer(
            min_spacing=config.min_spacing,
            max_attempts=config.max_placement_attempts,
            rng=self.rng
        )
        self.transmission = TransmissionModel(
            infection_radius=config.infection_radius,
            probability_scale=config.probability_scale,
            use_spatial_index=config.use_spatial_index,
            rng=self.rng
        )

        # Run state
        self.day = 0
        self.running = False
        self.peak_infected = 0
        self.peak_day = 0
        self.history = History()
        self.population: Population = None

        self._initialize_population()
        self._record_state()

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def transmission_rate(self) -> float:
        return self.config.transmission_rate

    @property
    def recovery_rate(self) -> float:
        return self.config.recovery_rate

    @property
    def population_size(self) -> int:
        return self.config.population_size

    @property
    def initial_infected(self) -> int:
        return self.config.initial_infected

    @property
    def disease_params(self) -> DiseaseParameters:
        return DiseaseParameters(
            transmission_rate=self.config.transmission_rate,
            recovery_rate=self.config.recovery_rate,
            recovery_days=self.config.recovery_days
        )

    def update_parameters(self,
                          transmission_rate: Optional[float] = None,
                          recovery_rate: Optional[float] = None,
                          population_size: Optional[int] = None,
                          initial_infected: Optional[int] = None):
        """
        Merge the given parameters and reset the simulation

        Parameters left as None keep their current value; any other value,
        zero included, is applied. The merged configuration is validated
        before anything changes.

        Raises:
            ValueError: If the merged configuration is invalid
        """
        changes = {
            'transmission_rate': transmission_rate,
            'recovery_rate': recovery_rate,
            'population_size': population_size,
            'initial_infected': initial_infected,
        }
        changes = {k: v for k, v in changes.items() if v is not None}

        new_config = replace(self.config, **changes)
        validate_config(new_config)
        self.config = new_config

        if population_size is not None:
            self.grid_width, self.grid_height = grid_dimensions(new_config.population_size)

        logger.info("Parameters updated: %s", changes)
        self.reset()

    def load_preset(self, name: str) -> bool:
        """
        Apply a named preset's rates

        Returns:
            False if the preset is unknown (nothing changes)
        """
        preset = get_preset(name)
        if preset is None:
            logger.debug("Unknown preset %r", name)
            return False

        self.update_parameters(
            transmission_rate=preset.transmission_rate,
            recovery_rate=preset.recovery_rate
        )
        logger.info("Loaded %s preset", preset.display_name)
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _initialize_population(self):
        """Place individuals and seed initial infections"""
        positions = self.placer.place(
            self.config.population_size,
            self.grid_width,
            self.grid_height
        )
        self.population = Population(positions, recovery_days=self.config.recovery_days)
        self.population.seed_infections(self.config.initial_infected, self.rng)

    def _record_state(self):
        """Record current state for history"""
        self.history.record(self.day, self.population.get_state_counts())

    def start(self):
        """Resume stepping; no-op if already running"""
        self.running = True

    def pause(self):
        """Stop stepping; no-op if already idle"""
        self.running = False

    def reset(self):
        """Regenerate the population and return to day 0, idle"""
        self.day = 0
        self.running = False
        self.peak_infected = 0
        self.peak_day = 0
        self.history.clear()
        self._initialize_population()
        self._record_state()
        logger.debug("Reset: %d individuals on a %dx%d grid, %d infected",
                     self.config.population_size, self.grid_width, self.grid_height,
                     self.config.initial_infected)

    def step(self) -> bool:
        """
        Execute one simulated day

        Returns:
            True if a step was taken, False if the engine is not running
        """
        if not self.running:
            return False

        self.day += 1

        # 1. Peak tracking on the pre-step infected count
        current_infected = self.population.get_state_counts()[HealthState.INFECTED]
        if current_infected > self.peak_infected:
            self.peak_infected = current_infected
            self.peak_day = self.day

        # 2. Transmission (S → I)
        self.transmission.step(self.population, self.config.transmission_rate)

        # 3. Recovery (I → R)
        self.population.advance_one_day()

        # 4. Record state
        self._record_state()

        # 5. Stop once the epidemic is over
        if self.history.infected[-1] == 0:
            self.running = False
            logger.info("Epidemic ended on day %d (peak %d on day %d)",
                        self.day, self.peak_infected, self.peak_day)

        return True

    def run(self, max_days: int = None, verbose: bool = False) -> pd.DataFrame:
        """
        Step until the epidemic ends or max_days steps have been taken

        Args:
            max_days: Step limit (None = until no one is infected)
            verbose: Print progress

        Returns:
            DataFrame with time series of SIR states
        """
        self.start()

        if verbose:
            print(f"\nSpatial SIR Simulation")
            print("=" * 60)
            print(f"Grid: {self.grid_width} × {self.grid_height}")
            print(f"Population: {self.config.population_size:,}")
            print(f"Initial infections: {self.config.initial_infected}")
            print(f"R0: {self.calculate_r0()}\n")

        steps = 0
        while self.running and (max_days is None or steps < max_days):
            self.step()
            steps += 1

            if verbose and self.day % 30 == 0:
                print(f"Day {self.day:3d}: S={self.history.susceptible[-1]:6d}, "
                      f"I={self.history.infected[-1]:5d}, R={self.history.recovered[-1]:6d}")

        if verbose:
            print(f"\nFinal state (day {self.day}):")
            print(f"  Peak infections: {self.peak_infected:,} on day {self.peak_day}")
            print(f"  Attack rate: {self.get_attack_rate()}%")

        return self.get_results()

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def get_current_counts(self) -> Dict[str, int]:
        """Current {susceptible, infected, recovered} counts"""
        counts = self.population.get_state_counts()
        return {
            'susceptible': counts[HealthState.SUSCEPTIBLE],
            'infected': counts[HealthState.INFECTED],
            'recovered': counts[HealthState.RECOVERED],
        }

    def calculate_r0(self) -> str:
        """R0 = β / γ, two decimals"""
        return f"{self.disease_params.R0_estimate:.2f}"

    def get_attack_rate(self) -> str:
        """Percent of the population recovered so far, one decimal"""
        recovered = self.get_current_counts()['recovered']
        return f"{100 * recovered / self.config.population_size:.1f}"

    def metrics(self) -> Dict[str, Any]:
        return {
            'day': self.day,
            'running': self.running,
            'peak_infected': self.peak_infected,
            'peak_day': self.peak_day,
            'r0': self.calculate_r0(),
            'attack_rate': self.get_attack_rate(),
            'counts': self.get_current_counts(),
        }

    def get_results(self) -> pd.DataFrame:
        """Get results as DataFrame"""
        return self.history.to_dataframe()


STATE_COLORS = {
    HealthState.SUSCEPTIBLE: '#3498db',
    HealthState.INFECTED: '#e74c3c',
    HealthState.RECOVERED: '#2ecc71',
}


def plot_population(engine: EpidemicEngine, ax=None):
    """Scatter plot of individuals colored by health state"""
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    xy = engine.population.positions()
    states = engine.population.states()

    for state, color in STATE_COLORS.items():
        mask = states == state
        ax.scatter(xy[mask, 0], xy[mask, 1], s=12, color=color,
                   label=state.name.capitalize())

    ax.set_xlim(0, engine.grid_width)
    ax.set_ylim(0, engine.grid_height)
    ax.set_aspect('equal')
    ax.set_title(f'Population (Day {engine.day})', fontsize=14, fontweight='bold')
    ax.legend(loc='upper right', fontsize=9)

    return ax


def plot_spatial_results(engine: EpidemicEngine, save_prefix: str = "spatial_sir"):
    """Save population snapshot and SIR curves side by side"""
    import matplotlib.pyplot as plt

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(16, 7))
    plot_population(engine, ax=ax1)
    plot_results(engine.get_results(), ax=ax2)
    plt.tight_layout()

    path = f'{save_prefix}_overview.png'
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    engine = EpidemicEngine(EngineConfig(population_size=1000, initial_infected=5, seed=42))
    results = engine.run(verbose=True)
    print(f"\nPlot saved as '{plot_spatial_results(engine, save_prefix='test_spatial_sir')}'")
