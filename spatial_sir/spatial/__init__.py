"""Spatial placement, transmission and the simulation engine"""

from .grid import SpatialPlacer, grid_dimensions
from .distance_kernel import DistanceKernel
from .transmission import TransmissionModel
from .spatial_sir_simulator import EpidemicEngine, plot_population, plot_spatial_results

__all__ = [
    'SpatialPlacer',
    'grid_dimensions',
    'DistanceKernel',
    'TransmissionModel',
    'EpidemicEngine',
    'plot_population',
    'plot_spatial_results'
]
