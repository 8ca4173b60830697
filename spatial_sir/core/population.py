"""
Population Management
====================
Individual agents and the ordered population they live in
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple
from enum import IntEnum


class HealthState(IntEnum):
    """Enumeration of health states"""
    SUSCEPTIBLE = 0
    INFECTED = 1
    RECOVERED = 2


DEFAULT_RECOVERY_DAYS = 14


@dataclass
class Individual:
    """Individual agent in the simulation"""
    id: int
    x: float
    y: float

    state: HealthState = HealthState.SUSCEPTIBLE
    days_infected: int = 0
    recovery_days: int = DEFAULT_RECOVERY_DAYS

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def advance_one_day(self):
        """Progress infection by one day; recover once the duration is reached"""
        if self.state == HealthState.INFECTED:
            self.days_infected += 1
            if self.days_infected >= self.recovery_days:
                self.state = HealthState.RECOVERED

    def try_infect(self) -> bool:
        """
        Infect a susceptible individual

        Returns:
            True if the individual was susceptible and is now infected,
            False otherwise (state is left untouched)
        """
        if self.state == HealthState.SUSCEPTIBLE:
            self.state = HealthState.INFECTED
            self.days_infected = 0
            return True
        return False

    def is_susceptible(self) -> bool:
        return self.state == HealthState.SUSCEPTIBLE

    def is_infected(self) -> bool:
        return self.state == HealthState.INFECTED

    def is_recovered(self) -> bool:
        return self.state == HealthState.RECOVERED


class Population:
    """
    Ordered collection of individuals placed in grid space
    """

    def __init__(self,
                 positions: Sequence[Tuple[float, float]],
                 recovery_days: int = DEFAULT_RECOVERY_DAYS):
        """
        Initialize population

        Args:
            positions: One (x, y) pair per individual, in id order
            recovery_days: Days each individual stays infected
        """
        self.people: List[Individual] = [
            Individual(id=i, x=float(x), y=float(y), recovery_days=recovery_days)
            for i, (x, y) in enumerate(positions)
        ]
        self.size = len(self.people)

    def __len__(self) -> int:
        return self.size

    def __iter__(self):
        return iter(self.people)

    def __getitem__(self, index: int) -> Individual:
        return self.people[index]

    def seed_infections(self, n_infected: int, rng: np.random.Generator) -> List[Individual]:
        """
        Infect n distinct individuals chosen uniformly at random

        Args:
            n_infected: Number of initial infections (capped at population size)
            rng: Random generator

        Returns:
            The individuals that were infected
        """
        n_infected = min(n_infected, self.size)
        if n_infected <= 0:
            return []

        indices = rng.choice(self.size, size=n_infected, replace=False)
        seeded = []
        for idx in sorted(indices):
            person = self.people[idx]
            person.try_infect()
            seeded.append(person)
        return seeded

    def advance_one_day(self):
        """Recovery update for every individual"""
        for person in self.people:
            person.advance_one_day()

    def get_state_counts(self) -> Dict[HealthState, int]:
        """Count people in each health state"""
        counts = {state: 0 for state in HealthState}
        for person in self.people:
            counts[person.state] += 1
        return counts

    def get_susceptible(self) -> List[Individual]:
        """Get all susceptible individuals"""
        return [p for p in self.people if p.state == HealthState.SUSCEPTIBLE]

    def get_infected(self) -> List[Individual]:
        """Get all infected individuals"""
        return [p for p in self.people if p.state == HealthState.INFECTED]

    def get_recovered(self) -> List[Individual]:
        """Get all recovered individuals"""
        return [p for p in self.people if p.state == HealthState.RECOVERED]

    def positions(self) -> np.ndarray:
        """(n, 2) array of positions in id order"""
        if self.size == 0:
            return np.empty((0, 2))
        return np.array([(p.x, p.y) for p in self.people], dtype=float)

    def states(self) -> np.ndarray:
        """Array of state codes in id order"""
        return np.array([int(p.state) for p in self.people], dtype=np.int8)

    def summary(self) -> str:
        """Return population summary statistics"""
        counts = self.get_state_counts()

        summary = f"Population Summary\n"
        summary += f"=" * 50 + "\n"
        summary += f"Total size: {self.size}\n"

        if self.size > 0:
            xy = self.positions()
            summary += f"X range: {xy[:, 0].min():.2f} - {xy[:, 0].max():.2f}\n"
            summary += f"Y range: {xy[:, 1].min():.2f} - {xy[:, 1].max():.2f}\n"

        summary += f"\nHealth states:\n"
        for state, count in counts.items():
            pct = 100 * count / self.size if self.size else 0.0
            summary += f"  {state.name:12s}: {count:6d} ({pct:5.1f}%)\n"

        return summary
