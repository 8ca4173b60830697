"""Spatial SIR epidemic simulation package"""

from . import core
from . import spatial
from .config import EngineConfig, load_config, default_config
from .spatial import EpidemicEngine

__all__ = ['core', 'spatial', 'EngineConfig', 'load_config', 'default_config', 'EpidemicEngine']
