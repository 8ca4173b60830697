"""Tests for spatial_sir.spatial — grid sizing, placement and neighbor search."""

import itertools

import numpy as np
import pytest

from spatial_sir.spatial.distance_kernel import DistanceKernel
from spatial_sir.spatial.grid import SpatialPlacer, grid_dimensions


class TestGridDimensions:
    @pytest.mark.parametrize("n, expected", [
        (100, (13, 8)),
        (1000, (39, 26)),
        (50, (9, 6)),
        (1, (2, 1)),
    ])
    def test_dimensions(self, n, expected):
        assert grid_dimensions(n) == expected

    def test_area_exceeds_population(self):
        for n in (10, 100, 500, 2000):
            w, h = grid_dimensions(n)
            assert w * h >= n


class TestSpatialPlacer:
    def test_low_density_respects_spacing(self):
        placer = SpatialPlacer(min_spacing=1.2, max_attempts=100, rng=np.random.default_rng(42))
        positions = placer.place(4, 10, 10)

        assert positions.shape == (4, 2)
        assert placer.fallback_count == 0
        for a, b in itertools.combinations(positions, 2):
            assert np.hypot(*(a - b)) >= 1.2
        assert np.all(positions >= 1.0)
        assert np.all(positions <= 9.0)

    def test_exact_count(self):
        placer = SpatialPlacer(rng=np.random.default_rng(0))
        w, h = grid_dimensions(200)
        assert placer.place(200, w, h).shape == (200, 2)

    def test_dense_population_falls_back(self):
        """Unsatisfiable spacing degrades to unconstrained placement, no error."""
        placer = SpatialPlacer(min_spacing=1.2, max_attempts=20, rng=np.random.default_rng(3))
        positions = placer.place(50, 3, 3)

        assert positions.shape == (50, 2)
        assert placer.fallback_count > 0
        assert np.all(positions >= 0.0)
        assert np.all(positions < 3.0)

    def test_fallback_count_resets(self):
        placer = SpatialPlacer(min_spacing=1.2, max_attempts=5, rng=np.random.default_rng(3))
        placer.place(50, 3, 3)
        assert placer.fallback_count > 0
        placer.place(2, 20, 20)
        assert placer.fallback_count == 0

    def test_reproducible(self):
        a = SpatialPlacer(rng=np.random.default_rng(7)).place(30, 10, 10)
        b = SpatialPlacer(rng=np.random.default_rng(7)).place(30, 10, 10)
        np.testing.assert_array_equal(a, b)

    def test_zero_spacing_never_falls_back(self):
        placer = SpatialPlacer(min_spacing=0.0, rng=np.random.default_rng(1))
        positions = placer.place(100, 5, 5)
        assert placer.fallback_count == 0
        assert np.all(positions >= 1.0)
        assert np.all(positions <= 4.0)


class TestDistanceKernel:
    def test_in_contact_inclusive(self):
        kernel = DistanceKernel(radius=2.0)
        assert kernel.in_contact(2.0, 0.0)
        assert kernel.in_contact(0.0, -2.0)
        assert not kernel.in_contact(2.0001, 0.0)

    def test_in_contact_elementwise(self):
        kernel = DistanceKernel(radius=5.0)
        dx = np.array([3.0, 3.0, 0.0])
        dy = np.array([4.0, 4.1, 0.0])
        np.testing.assert_array_equal(kernel.in_contact(dx, dy), [True, False, True])

    @pytest.mark.parametrize("use_index", [True, False])
    def test_radius_is_inclusive(self, use_index):
        kernel = DistanceKernel(radius=2.0, use_spatial_index=use_index)
        sources = np.array([[0.0, 0.0]])
        targets = np.array([[2.0, 0.0], [2.01, 0.0], [1.0, 1.0], [0.0, -2.0]])
        (hits,) = kernel.neighbors_within(sources, targets)
        np.testing.assert_array_equal(hits, [0, 2, 3])

    def test_index_matches_scan(self):
        rng = np.random.default_rng(11)
        sources = rng.random((25, 2)) * 20
        targets = rng.random((300, 2)) * 20

        tree = DistanceKernel(radius=2.0, use_spatial_index=True).neighbors_within(sources, targets)
        scan = DistanceKernel(radius=2.0, use_spatial_index=False).neighbors_within(sources, targets)

        assert len(tree) == len(scan) == 25
        for t, s in zip(tree, scan):
            np.testing.assert_array_equal(t, s)

    @pytest.mark.parametrize("use_index", [True, False])
    def test_empty_inputs(self, use_index):
        kernel = DistanceKernel(use_spatial_index=use_index)
        assert kernel.neighbors_within(np.empty((0, 2)), np.ones((3, 2))) == []
        hits = kernel.neighbors_within(np.ones((2, 2)), np.empty((0, 2)))
        assert len(hits) == 2
        assert all(len(h) == 0 for h in hits)

    def test_index_matches_scan_on_radius_boundary(self):
        # Targets at exactly the radius, up to floating-point rounding of cos/sin
        angles = np.linspace(0.0, 2 * np.pi, 2000, endpoint=False)
        source = np.array([[3.7, -1.3]])
        targets = source + 2.0 * np.column_stack([np.cos(angles), np.sin(angles)])

        (tree,) = DistanceKernel(radius=2.0, use_spatial_index=True).neighbors_within(source, targets)
        (scan,) = DistanceKernel(radius=2.0, use_spatial_index=False).neighbors_within(source, targets)

        np.testing.assert_array_equal(tree, scan)
        assert len(scan) > 0
