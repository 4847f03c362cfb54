"""
Curve export for chart rendering and external tools.

Supports JSON and CSV formats.
"""

import csv
import json
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from zone_grading.core.models import CurvePoint
from zone_grading.core.types import ZONE_ORDER


class CurveExporter(ABC):
    """Abstract base class for curve exporters."""

    @abstractmethod
    def export(self, points: list[CurvePoint], path: Path) -> None:
        """Export curve to file."""
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        """Get format name."""
        pass


class CSVExporter(CurveExporter):
    """Export curves to CSV, one row per sample and one weight column per zone."""

    def export(self, points: list[CurvePoint], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        zone_ids = [z for z in ZONE_ORDER if points and z in points[0].weights]
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["input_stop", "output_stop", *[z.value for z in zone_ids]])
            for p in points:
                writer.writerow(
                    [
                        f"{p.input_stop:.6f}",
                        f"{p.output_stop:.6f}",
                        *[f"{p.weights[z]:.6f}" for z in zone_ids],
                    ]
                )

    def get_format_name(self) -> str:
        return "CSV"


class JSONExporter(CurveExporter):
    """Export curves to JSON."""

    def export(self, points: list[CurvePoint], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "generated": datetime.now().isoformat(),
            "num_points": len(points),
            "points": [p.model_dump(mode="json", by_alias=True) for p in points],
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    def get_format_name(self) -> str:
        return "JSON"


def save_curve(points: list[CurvePoint], path: Path, format: Optional[str] = None) -> None:
    """
    Save curve to file in specified format.

    Args:
        points: Curve samples to save.
        path: Output file path.
        format: "json" or "csv"; inferred from the extension when None.
    """
    path = Path(path)
    if format is None:
        format = "csv" if path.suffix.lower() == ".csv" else "json"

    format = format.lower()
    if format == "csv":
        exporter: CurveExporter = CSVExporter()
    elif format == "json":
        exporter = JSONExporter()
    else:
        raise ValueError(f"Unsupported curve format: {format}")

    exporter.export(points, path)


def load_curve(path: Path) -> list[CurvePoint]:
    """Load a curve previously saved as JSON."""
    with open(path) as f:
        data = json.load(f)
    return [CurvePoint.model_validate(p) for p in data["points"]]
