"""
Coverage geometry calculation module

Provides camera footprint calculation and its conversion to a planning grid cell.
"""

from .footprint_calculator import (
    FootprintCalculator,
    Footprint,
    compute_grid_cell,
    LAT_DEG_PER_10M,
    LON_DEG_PER_10M,
    REFERENCE_LATITUDE_DEG,
)

__all__ = [
    'FootprintCalculator',
    'Footprint',
    'compute_grid_cell',
    'LAT_DEG_PER_10M',
    'LON_DEG_PER_10M',
    'REFERENCE_LATITUDE_DEG',
]
