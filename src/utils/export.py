"""
Export simulation results to various formats.

Supports: trajectory CSV, result JSON.
"""

import json
import csv
from typing import Any, List, Union
from pathlib import Path
import numpy as np
import logging

from core.models import DeflectionResult, ImpactResult

logger = logging.getLogger(__name__)


class ResultExporter:
    """Export trajectories and results to standard formats."""

    @staticmethod
    def trajectory_to_csv(positions: List[np.ndarray], output_path: str, dt: float = None):
        """
        Export a trajectory history to CSV.

        Args:
            positions: Positions (km) relative to Earth's centre, in step order
            output_path: Output file path
            dt: Step size (s); adds a time column when given
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', newline='') as f:
            writer = csv.writer(f)

            header = ['step', 'x_km', 'y_km', 'z_km', 'distance_km']
            if dt is not None:
                header.insert(1, 'time_sec')
            writer.writerow(header)

            for i, position in enumerate(positions):
                x, y, z = position
                row = [i, f"{x:.3f}", f"{y:.3f}", f"{z:.3f}",
                       f"{np.linalg.norm(position):.3f}"]
                if dt is not None:
                    row.insert(1, f"{i * dt:.1f}")
                writer.writerow(row)

        logger.info(f"Exported {len(positions)} trajectory points to {output_path}")

    @staticmethod
    def to_json(result: Union[ImpactResult, DeflectionResult], output_path: str,
                indent: int = 2):
        """
        Export an impact or deflection result to JSON.

        Args:
            result: Result object with to_dict()
            output_path: Output file path
            indent: JSON indentation
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w') as f:
            json.dump(result.to_dict(), f, indent=indent, default=_json_default)

        logger.info(f"Exported result to {output_path}")


def _json_default(obj: Any):
    """Serialize numpy scalars and arrays."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
