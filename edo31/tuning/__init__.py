"""
31-EDO tuning utilities.

Includes:
- Step, cent and frequency conversions
- Just-intonation ratio matching
- Interval and chord consonance ratings
"""

from edo31.tuning.edo import (
    STEPS_PER_OCTAVE,
    CENTS_PER_STEP,
    step_to_cents,
    cents_to_step,
    step_to_frequency,
    note_name,
    interval_name,
)
from edo31.tuning.just_intonation import JustRatioMatch, RatioMatch, closest_just_ratio
from edo31.tuning.consonance import (
    ConsonanceReport,
    consonance_rating,
    overall_consonance,
)

__all__ = [
    'STEPS_PER_OCTAVE',
    'CENTS_PER_STEP',
    'step_to_cents',
    'cents_to_step',
    'step_to_frequency',
    'note_name',
    'interval_name',
    'JustRatioMatch',
    'RatioMatch',
    'closest_just_ratio',
    'ConsonanceReport',
    'consonance_rating',
    'overall_consonance',
]
