"""Initialization strategies for the Lloyd loop."""

from .interpolated import MinMaxInterpolationInit
from .from_previous import SuppliedCentroidsInit

__all__ = [
    'MinMaxInterpolationInit',
    'SuppliedCentroidsInit'
]
