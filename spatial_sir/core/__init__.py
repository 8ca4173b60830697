"""Core epidemic modeling components"""

from .disease_params import DiseaseParameters, DiseasePreset, PRESETS, get_preset
from .population import Population, Individual, HealthState
from .sir_model import History, plot_results

__all__ = [
    'DiseaseParameters',
    'DiseasePreset',
    'PRESETS',
    'get_preset',
    'Population',
    'Individual',
    'HealthState',
    'History',
    'plot_results'
]
