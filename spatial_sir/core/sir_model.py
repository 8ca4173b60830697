"""
SIR Time Series
===============
Daily compartment history and SIR curve plotting
"""

import pandas as pd
from typing import Dict, List
from dataclasses import dataclass, field

from .population import HealthState


@dataclass
class History:
    """Parallel daily series of S/I/R counts, day 0 included"""
    days: List[int] = field(default_factory=list)
    susceptible: List[int] = field(default_factory=list)
    infected: List[int] = field(default_factory=list)
    recovered: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.days)

    def record(self, day: int, counts: Dict[HealthState, int]):
        """Append one entry"""
        self.days.append(day)
        self.susceptible.append(counts[HealthState.SUSCEPTIBLE])
        self.infected.append(counts[HealthState.INFECTED])
        self.recovered.append(counts[HealthState.RECOVERED])

    def clear(self):
        self.days.clear()
        self.susceptible.clear()
        self.infected.clear()
        self.recovered.clear()

    def to_dict(self) -> Dict[str, List[int]]:
        return {
            'days': list(self.days),
            'susceptible': list(self.susceptible),
            'infected': list(self.infected),
            'recovered': list(self.recovered),
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Results as DataFrame with columns day, S, I, R"""
        return pd.DataFrame({
            'day': self.days,
            'S': self.susceptible,
            'I': self.infected,
            'R': self.recovered,
        })


def plot_results(df: pd.DataFrame, title: str = "SIR Epidemic Simulation", ax=None):
    """
    Plot SIR curves

    Args:
        df: Results DataFrame (History.to_dataframe())
        title: Plot title
        ax: Axes to draw on (new figure if None)
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(12, 6))

    ax.plot(df['day'], df['S'], label='Susceptible', color='#3498db', linewidth=2)
    ax.plot(df['day'], df['I'], label='Infected', color='#e74c3c', linewidth=2)
    ax.plot(df['day'], df['R'], label='Recovered', color='#2ecc71', linewidth=2)

    ax.set_xlabel('Days', fontsize=12)
    ax.set_ylabel('Number of People', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='best', fontsize=11)
    ax.grid(True, alpha=0.3)

    return ax
