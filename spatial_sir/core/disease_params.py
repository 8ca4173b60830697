"""
Disease Parameters and Presets
==============================
Transmission/recovery parameters for the SIR model and the fixed preset table
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class DiseaseParameters:
    """Core disease parameters for the SIR model"""

    transmission_rate: float = 0.3  # β, scaled into a daily per-contact probability
    recovery_rate: float = 0.1      # γ, only used for the R0 ratio
    recovery_days: int = 14         # Days an individual stays infected

    @property
    def R0_estimate(self) -> float:
        """Estimate basic reproduction number (β / γ)"""
        return self.transmission_rate / self.recovery_rate

    def daily_transmission_probability(self, scale: float = 10.0) -> float:
        """
        Per-contact, per-day infection probability
        P(transmission) = β / scale, capped at 1
        """
        return min(self.transmission_rate / scale, 1.0)


@dataclass(frozen=True)
class DiseasePreset:
    """Named parameter set for a well-known disease"""
    transmission_rate: float
    recovery_rate: float
    display_name: str


PRESETS: Dict[str, DiseasePreset] = {
    'flu': DiseasePreset(transmission_rate=0.4, recovery_rate=0.14, display_name='Seasonal Flu'),
    'covid': DiseasePreset(transmission_rate=0.5, recovery_rate=0.07, display_name='COVID-19'),
    'measles': DiseasePreset(transmission_rate=0.8, recovery_rate=0.1, display_name='Measles'),
}


def get_preset(name: str) -> Optional[DiseasePreset]:
    """Look up a preset by key, None if unknown"""
    return PRESETS.get(name)


if __name__ == "__main__":
    print("Disease Presets")
    print("=" * 50)
    for key, preset in PRESETS.items():
        params = DiseaseParameters(preset.transmission_rate, preset.recovery_rate)
        print(f"  {key:8s} {preset.display_name:14s} R0={params.R0_estimate:.2f}")
