"""
Data Export Module

Export flight histories recorded by FlightDynamicsEngine.run():
- Flat CSV (one row per step, SI units plus degree columns)
- JSON for web visualization or further processing
"""

import numpy as np
import pandas as pd
import json
from datetime import datetime
from typing import Dict, List, Optional, Any


def history_to_dataframe(history: List[Dict]) -> pd.DataFrame:
    """
    Flatten a flight history into a DataFrame.

    Args:
        history: List of per-step records from the engine

    Returns:
        DataFrame with one row per step
    """
    if not history:
        raise ValueError("History is empty")

    rows = []

    for record in history:
        row = {
            'time_s': record['time'],

            # Position (world frame, Y up)
            'x_m': record['position'][0],
            'y_m': record['position'][1],
            'z_m': record['position'][2],
            'altitude_m': record['altitude'],

            # Velocity (world frame)
            'vx_m_s': record['velocity'][0],
            'vy_m_s': record['velocity'][1],
            'vz_m_s': record['velocity'][2],
            'airspeed_m_s': record['airspeed'],

            # Orientation (degrees)
            'heading_deg': np.degrees(record['heading']),
            'pitch_deg': np.degrees(record['pitch']),
            'roll_deg': np.degrees(record['roll']),

            # Angular rates (deg/s)
            'heading_rate_deg_s': np.degrees(record['heading_rate']),
            'pitch_rate_deg_s': np.degrees(record['pitch_rate']),
            'roll_rate_deg_s': np.degrees(record['roll_rate']),

            # Controls
            'aileron': record['controls'][0],
            'elevator': record['controls'][1],
            'rudder': record['controls'][2],
            'throttle_pct': record['throttle'] * 100,

            # Propulsion and mass
            'thrust_N': record['thrust'],
            'mass_kg': record['mass'],
            'fuel_kg': record['fuel'],
        }

        # Aero data if available
        if 'alpha' in record:
            row['alpha_deg'] = np.degrees(record['alpha'])
        if 'Cl' in record:
            row['Cl'] = record['Cl']
        if 'Cd' in record:
            row['Cd'] = record['Cd']
        if 'dynamic_pressure' in record:
            row['q_bar_Pa'] = record['dynamic_pressure']

        rows.append(row)

    return pd.DataFrame(rows)


def export_history_csv(
    history: List[Dict],
    filename: str,
    metadata: Optional[Dict[str, Any]] = None
) -> None:
    """
    Export flight history to CSV with a commented metadata header.

    Args:
        history: Simulation history
        filename: Output filename
        metadata: Optional metadata dictionary for header
    """
    df = history_to_dataframe(history)

    with open(filename, 'w', newline='') as f:
        f.write("# Flight History\n")
        f.write(f"# Generated: {datetime.now().isoformat()}\n")
        if metadata:
            for key, value in metadata.items():
                f.write(f"# {key}: {value}\n")
        df.to_csv(f, index=False, float_format='%.6f')

    print(f"Exported {len(df)} records to {filename}")


def export_json(
    history: List[Dict],
    filename: str,
    metadata: Optional[Dict] = None
) -> None:
    """
    Export to JSON format for web visualization or further processing.

    Args:
        history: Simulation history
        filename: Output filename
        metadata: Optional metadata
    """
    output = {
        'metadata': metadata or {},
        'generated': datetime.now().isoformat(),
        'n_points': len(history),
        'data': history
    }

    with open(filename, 'w') as f:
        json.dump(output, f, indent=2, default=lambda x: x.tolist() if isinstance(x, np.ndarray) else str(x))

    print(f"Exported {len(history)} records to {filename}")
