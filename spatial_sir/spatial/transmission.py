"""
Proximity-Based Transmission
============================
Decides which susceptible individuals become infected in one daily step
"""

import numpy as np
from typing import List

from .distance_kernel import DistanceKernel
from ..core.disease_params import DiseaseParameters
from ..core.population import Individual, Population


class TransmissionModel:
    """
    Stochastic transmission between nearby infected and susceptible individuals

    Every (infected, susceptible) pair within the infection radius gets one
    independent Bernoulli trial per day with p = transmission_rate / scale.
    Trials are evaluated against the start-of-step states and infections are
    applied only afterwards, so nobody infected today transmits today.
    """

    def __init__(self,
                 infection_radius: float = 2.0,
                 probability_scale: float = 10.0,
                 use_spatial_index: bool = True,
                 rng: np.random.Generator = None):
        self.kernel = DistanceKernel(radius=infection_radius, use_spatial_index=use_spatial_index)
        self.probability_scale = probability_scale
        self.rng = rng if rng is not None else np.random.default_rng()

    def infection_probability(self, transmission_rate: float) -> float:
        """Daily per-pair infection probability"""
        params = DiseaseParameters(transmission_rate=transmission_rate)
        return params.daily_transmission_probability(self.probability_scale)

    def find_new_infections(self, population: Population, transmission_rate: float) -> List[Individual]:
        """
        Evaluate all trials for the step without mutating any state

        Returns:
            Susceptible individuals with at least one successful trial, in id order
        """
        infected = population.get_infected()
        susceptible = population.get_susceptible()

        if len(infected) == 0 or len(susceptible) == 0:
            return []

        p = self.infection_probability(transmission_rate)
        infected_xy = np.array([(person.x, person.y) for person in infected], dtype=float)
        susceptible_xy = np.array([(person.x, person.y) for person in susceptible], dtype=float)

        hit = np.zeros(len(susceptible), dtype=bool)
        for nearby in self.kernel.neighbors_within(infected_xy, susceptible_xy):
            if len(nearby) == 0:
                continue
            # One independent trial per nearby susceptible for this infected individual
            success = self.rng.random(len(nearby)) < p
            hit[nearby[success]] = True

        return [susceptible[i] for i in np.flatnonzero(hit)]

    def step(self, population: Population, transmission_rate: float) -> int:
        """
        Run one transmission step: identify, then apply

        Returns:
            Number of new infections
        """
        new_infections = self.find_new_infections(population, transmission_rate)

        n_new = 0
        for person in new_infections:
            if person.try_infect():
                n_new += 1
        return n_new
