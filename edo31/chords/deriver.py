"""
Chord derivation from scale degrees.

Two derivations are provided:
- Traditional: stack every other scale degree (i, i+2, i+4, i+6)
- Intervallic: for each root pick the scale notes that best fit third,
  fifth and seventh bands
"""

from typing import List, Optional, Sequence, Tuple

from edo31.core.logging import get_logger
from edo31.chords.classifier import function_from_degree, get_chord_type
from edo31.chords.models import Chord, ChordSet, ScaleChords
from edo31.scales.intervals import intervals_from_degrees
from edo31.scales.models import Scale
from edo31.tuning.edo import STEPS_PER_OCTAVE

logger = get_logger(__name__)


ROMAN_NUMERALS = ["I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X", "XI", "XII"]

# (low, high, centre) step bands for the third, fifth and seventh above a root
THIRD_BAND = (7, 11, 9)
FIFTH_BAND = (17, 19, 18)
SEVENTH_BAND = (25, 28, 27)

# Octave copies needed to reach i+6 on the smallest scales
EXTENSION_OCTAVES = 3


def is_major_like(degrees: Sequence[int]) -> bool:
    """A scale is major-like when its 3rd degree sits 9 or more steps up."""
    if len(degrees) <= 2:
        return True
    return degrees[2] - degrees[0] >= 9


def roman_numeral(degree: int, major_like: bool) -> str:
    """Roman numeral for a degree, upper case for major-like scales."""
    numeral = ROMAN_NUMERALS[degree] if degree < len(ROMAN_NUMERALS) else str(degree + 1)
    return numeral if major_like else numeral.lower()


def extend_degrees(degrees: Sequence[int], octaves: int = EXTENSION_OCTAVES) -> List[int]:
    """Pitch classes of a scale followed by copies transposed up by octaves."""
    pitch_classes = list(degrees[:-1])
    return [
        pc + octave * STEPS_PER_OCTAVE
        for octave in range(octaves)
        for pc in pitch_classes
    ]


def _make_chord(degree: int, notes: Sequence[int], major_like: bool) -> Chord:
    intervals = intervals_from_degrees(notes)
    return Chord(
        degree=degree,
        degree_roman=roman_numeral(degree, major_like),
        chord_type=get_chord_type(intervals),
        function=function_from_degree(degree, major_like),
        notes=tuple(notes),
        intervals=intervals,
    )


def traditional_chords(degrees: Sequence[int], size: int) -> List[Chord]:
    """
    Tertian chords stacked from every other scale degree.
    
    Args:
        degrees: Scale degrees, 0 to 31
        size: 3 for triads, 4 for seventh chords
    """
    major_like = is_major_like(degrees)
    extended = extend_degrees(degrees)
    return [
        _make_chord(i, [extended[i + 2 * k] for k in range(size)], major_like)
        for i in range(len(degrees) - 1)
    ]


def _best_fit(
    root: int,
    candidates: Sequence[int],
    band: Tuple[int, int, int],
    floor: int,
) -> Optional[int]:
    """
    First candidate above `floor` whose interval above the root lies in the
    band; failing that, the candidate above `floor` closest to the band
    centre.
    """
    low, high, centre = band
    for note in candidates:
        if note > floor and low <= note - root <= high:
            return note
    
    best = None
    best_distance = None
    for note in candidates:
        if note <= floor:
            continue
        distance = abs(note - root - centre)
        if best_distance is None or distance < best_distance:
            best, best_distance = note, distance
    return best


def intervallic_chords(degrees: Sequence[int], size: int) -> List[Chord]:
    """
    Chords built from the scale notes that best fit the tertian bands.
    
    A chord is emitted only when at least one tone besides the root is
    found.
    """
    major_like = is_major_like(degrees)
    extended = extend_degrees(degrees)
    bands = [THIRD_BAND, FIFTH_BAND, SEVENTH_BAND][: size - 1]
    
    chords = []
    for i, root in enumerate(degrees[:-1]):
        notes = [root]
        for band in bands:
            tone = _best_fit(root, extended, band, floor=notes[-1])
            if tone is not None:
                notes.append(tone)
        if len(notes) > 1:
            chords.append(_make_chord(i, notes, major_like))
    return chords


def derive_chords(scale: Scale) -> ScaleChords:
    """
    Derive triads and seventh chords for a scale both ways.
    
    Args:
        scale: Published scale
        
    Returns:
        Traditional and intervallic chord sets
    """
    degrees = scale.degrees
    result = ScaleChords(
        traditional=ChordSet(
            triads=tuple(traditional_chords(degrees, 3)),
            sevenths=tuple(traditional_chords(degrees, 4)),
        ),
        intervallic=ChordSet(
            triads=tuple(intervallic_chords(degrees, 3)),
            sevenths=tuple(intervallic_chords(degrees, 4)),
        ),
    )
    logger.debug("chords_derived", scale=scale.name, degrees=len(degrees) - 1)
    return result
