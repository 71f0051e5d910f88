"""
Scale construction for 31-EDO.

Includes:
- Scale and alteration records
- Degree/interval arithmetic and invariant checks
- Run-scoped name registry and namer
- Rule-table categorization
"""

from edo31.scales.models import Alteration, Scale
from edo31.scales.intervals import (
    intervals_from_degrees,
    degrees_from_intervals,
    rotate,
    flatten_degree,
    check_scale_invariants,
)
from edo31.scales.registry import NameRegistry
from edo31.scales.naming import ScaleNamer
from edo31.scales.categories import categorize

__all__ = [
    'Alteration',
    'Scale',
    'intervals_from_degrees',
    'degrees_from_intervals',
    'rotate',
    'flatten_degree',
    'check_scale_invariants',
    'NameRegistry',
    'ScaleNamer',
    'categorize',
]
