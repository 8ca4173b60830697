"""
Export
======
Snapshot of parameters, history and metrics for saving a run to disk
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, Union

from .spatial.spatial_sir_simulator import EpidemicEngine


def build_snapshot(engine: EpidemicEngine) -> Dict[str, Any]:
    """Parameters, full history and computed metrics of an engine"""
    return {
        'parameters': {
            'transmission_rate': engine.transmission_rate,
            'recovery_rate': engine.recovery_rate,
            'population_size': engine.population_size,
            'initial_infected': engine.initial_infected,
        },
        'history': engine.history.to_dict(),
        'metrics': {
            'r0': engine.calculate_r0(),
            'peak_infected': engine.peak_infected,
            'peak_day': engine.peak_day,
            'attack_rate': engine.get_attack_rate(),
        },
    }


def default_export_name() -> str:
    return f"epidemic_simulation_{date.today().isoformat()}.json"


def export_json(engine: EpidemicEngine, path: Union[str, Path] = None) -> Path:
    """
    Write the snapshot as indented JSON

    Returns:
        Path written
    """
    path = Path(path) if path is not None else Path(default_export_name())
    with open(path, 'w') as f:
        json.dump(build_snapshot(engine), f, indent=2)
    return path


def export_history_csv(engine: EpidemicEngine, path: Union[str, Path]) -> Path:
    """Write the day/S/I/R history as CSV"""
    path = Path(path)
    engine.get_results().to_csv(path, index=False)
    return path
