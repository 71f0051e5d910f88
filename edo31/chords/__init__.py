"""
Chord derivation, classification and inversion for 31-EDO scales.
"""

from edo31.chords.models import Chord, ChordSet, ScaleChords
from edo31.chords.classifier import get_chord_type, interval_type, function_from_degree
from edo31.chords.deriver import derive_chords, traditional_chords, intervallic_chords
from edo31.chords.inversion import invert_chord, find_optimal_inversion

__all__ = [
    'Chord',
    'ChordSet',
    'ScaleChords',
    'get_chord_type',
    'interval_type',
    'function_from_degree',
    'derive_chords',
    'traditional_chords',
    'intervallic_chords',
    'invert_chord',
    'find_optimal_inversion',
]
