"""Tests for spatial_sir.core.population — individuals and population counting."""

import numpy as np
import pytest

from spatial_sir.core.population import (
    DEFAULT_RECOVERY_DAYS,
    HealthState,
    Individual,
    Population,
)


class TestIndividual:
    def test_defaults(self):
        person = Individual(id=3, x=1.5, y=2.5)
        assert person.state == HealthState.SUSCEPTIBLE
        assert person.days_infected == 0
        assert person.recovery_days == DEFAULT_RECOVERY_DAYS == 14
        assert person.position == (1.5, 2.5)

    def test_try_infect_susceptible(self):
        person = Individual(id=0, x=0.0, y=0.0)
        assert person.try_infect() is True
        assert person.state == HealthState.INFECTED
        assert person.days_infected == 0

    def test_try_infect_infected_is_noop(self):
        person = Individual(id=0, x=0.0, y=0.0)
        person.try_infect()
        person.advance_one_day()
        person.advance_one_day()
        assert person.try_infect() is False
        assert person.state == HealthState.INFECTED
        assert person.days_infected == 2

    def test_try_infect_recovered_is_noop(self):
        person = Individual(id=0, x=0.0, y=0.0, state=HealthState.RECOVERED, days_infected=14)
        assert person.try_infect() is False
        assert person.state == HealthState.RECOVERED
        assert person.days_infected == 14

    def test_recovers_exactly_at_duration(self):
        person = Individual(id=0, x=0.0, y=0.0)
        person.try_infect()
        for day in range(1, 14):
            person.advance_one_day()
            assert person.days_infected == day
            assert person.state == HealthState.INFECTED
        person.advance_one_day()
        assert person.days_infected == 14
        assert person.state == HealthState.RECOVERED

    def test_custom_recovery_duration(self):
        person = Individual(id=0, x=0.0, y=0.0, recovery_days=3)
        person.try_infect()
        person.advance_one_day()
        person.advance_one_day()
        assert person.is_infected()
        person.advance_one_day()
        assert person.is_recovered()

    def test_advance_noop_when_not_infected(self):
        susceptible = Individual(id=0, x=0.0, y=0.0)
        susceptible.advance_one_day()
        assert susceptible.is_susceptible()
        assert susceptible.days_infected == 0

        recovered = Individual(id=1, x=0.0, y=0.0, state=HealthState.RECOVERED, days_infected=14)
        recovered.advance_one_day()
        assert recovered.is_recovered()
        assert recovered.days_infected == 14


class TestPopulation:
    def _population(self, n=10, recovery_days=14):
        positions = [(float(i), float(i) / 2) for i in range(n)]
        return Population(positions, recovery_days=recovery_days)

    def test_ids_follow_insertion_order(self):
        pop = self._population(10)
        assert len(pop) == 10
        assert [p.id for p in pop] == list(range(10))
        assert pop[4].x == 4.0
        assert pop[4].y == 2.0

    def test_recovery_days_propagate(self):
        pop = self._population(3, recovery_days=7)
        assert all(p.recovery_days == 7 for p in pop)

    def test_initial_counts_all_susceptible(self):
        pop = self._population(10)
        counts = pop.get_state_counts()
        assert counts[HealthState.SUSCEPTIBLE] == 10
        assert counts[HealthState.INFECTED] == 0
        assert counts[HealthState.RECOVERED] == 0

    def test_seed_infections_distinct(self):
        pop = self._population(20)
        rng = np.random.default_rng(0)
        seeded = pop.seed_infections(5, rng)
        assert len(seeded) == 5
        assert len({p.id for p in seeded}) == 5
        assert len(pop.get_infected()) == 5
        assert all(p.days_infected == 0 for p in seeded)

    def test_seed_infections_capped(self):
        pop = self._population(4)
        seeded = pop.seed_infections(10, np.random.default_rng(0))
        assert len(seeded) == 4
        assert len(pop.get_infected()) == 4

    def test_seed_zero(self):
        pop = self._population(4)
        assert pop.seed_infections(0, np.random.default_rng(0)) == []
        assert len(pop.get_infected()) == 0

    def test_seed_is_uniform(self):
        """Every index is picked with roughly equal frequency."""
        rng = np.random.default_rng(123)
        hits = np.zeros(10)
        for _ in range(2000):
            pop = self._population(10)
            for person in pop.seed_infections(2, rng):
                hits[person.id] += 1
        # Expected 400 per index
        assert hits.min() > 320
        assert hits.max() < 480

    def test_counts_sum_to_size(self):
        pop = self._population(15)
        pop.seed_infections(6, np.random.default_rng(1))
        for _ in range(20):
            pop.advance_one_day()
            assert sum(pop.get_state_counts().values()) == 15

    def test_advance_recovers_everyone(self):
        pop = self._population(5, recovery_days=2)
        pop.seed_infections(5, np.random.default_rng(0))
        pop.advance_one_day()
        assert len(pop.get_infected()) == 5
        pop.advance_one_day()
        assert len(pop.get_recovered()) == 5

    def test_positions_and_states_arrays(self):
        pop = self._population(3)
        pop[1].try_infect()
        xy = pop.positions()
        assert xy.shape == (3, 2)
        np.testing.assert_array_equal(xy[:, 0], [0.0, 1.0, 2.0])
        np.testing.assert_array_equal(pop.states(), [0, 1, 0])

    def test_empty_positions(self):
        pop = Population([])
        assert pop.positions().shape == (0, 2)

    def test_summary(self):
        pop = self._population(10)
        text = pop.summary()
        assert "Total size: 10" in text
        assert "SUSCEPTIBLE" in text
