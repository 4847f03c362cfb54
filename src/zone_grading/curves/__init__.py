"""
Tone curve generation and export.
"""

from zone_grading.curves.export import (
    CSVExporter,
    CurveExporter,
    JSONExporter,
    load_curve,
    save_curve,
)
from zone_grading.curves.generator import (
    DEFAULT_STEPS,
    CurveGenerator,
    curve_arrays,
    generate_curve,
)

__all__ = [
    # Generator
    "CurveGenerator",
    "DEFAULT_STEPS",
    "curve_arrays",
    "generate_curve",
    # Export
    "CurveExporter",
    "CSVExporter",
    "JSONExporter",
    "load_curve",
    "save_curve",
]
