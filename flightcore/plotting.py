"""
Plotting Module

Time-history plots of recorded flights:
- Altitude and airspeed
- Attitude (heading, pitch, roll)
- Controls, thrust and fuel

Uses matplotlib; histories go through the same DataFrame flattening as the
CSV export.
"""

import matplotlib.pyplot as plt
from typing import Optional, List, Dict

from .data_export import history_to_dataframe


PLOT_STYLE = {
    'figure.figsize': (10, 6),
    'figure.dpi': 100,
    'font.size': 10,
    'axes.labelsize': 11,
    'axes.titlesize': 12,
    'legend.fontsize': 9,
    'lines.linewidth': 1.5,
    'grid.alpha': 0.3
}

DEFAULT_VARIABLES = ['altitude_m', 'airspeed_m_s', 'pitch_deg', 'roll_deg', 'fuel_kg']

VAR_LABELS = {
    'altitude_m': 'Altitude (m)',
    'airspeed_m_s': 'Airspeed (m/s)',
    'heading_deg': r'$\psi$ (deg)',
    'pitch_deg': r'$\theta$ (deg)',
    'roll_deg': r'$\phi$ (deg)',
    'heading_rate_deg_s': r'$\dot\psi$ (deg/s)',
    'pitch_rate_deg_s': r'$\dot\theta$ (deg/s)',
    'roll_rate_deg_s': r'$\dot\phi$ (deg/s)',
    'alpha_deg': r'$\alpha$ (deg)',
    'throttle_pct': 'Throttle (%)',
    'thrust_N': 'Thrust (N)',
    'fuel_kg': 'Fuel (kg)',
    'mass_kg': 'Mass (kg)',
}


def setup_plot_style():
    """Apply plot styling."""
    plt.rcParams.update(PLOT_STYLE)


def plot_flight_history(
    history: List[Dict],
    variables: Optional[List[str]] = None,
    title: str = "Flight History",
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Plot time history of flight variables.

    Args:
        history: Simulation history
        variables: Columns of the flattened history to plot
        title: Plot title
        save_path: Optional save path

    Returns:
        Figure
    """
    setup_plot_style()

    variables = variables or DEFAULT_VARIABLES
    df = history_to_dataframe(history)

    missing = [v for v in variables if v not in df.columns]
    if missing:
        raise ValueError(f"Unknown variables: {missing}. Available: {df.columns.tolist()}")

    n_vars = len(variables)
    fig, axes = plt.subplots(n_vars, 1, figsize=(10, 2.5 * n_vars), sharex=True)

    if n_vars == 1:
        axes = [axes]

    time = df['time_s'].values

    for ax, var in zip(axes, variables):
        ax.plot(time, df[var].values, 'b-')
        ax.set_ylabel(VAR_LABELS.get(var, var))
        ax.grid(True)

    axes[-1].set_xlabel('Time (s)')
    fig.suptitle(title)
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
