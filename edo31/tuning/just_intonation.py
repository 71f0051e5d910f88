"""
Just-intonation matching for 31-EDO intervals.
"""

from typing import Iterable, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from edo31.core.exceptions import ValidationError
from edo31.tuning.edo import step_to_cents


# (ratio, name, cents)
PRIMARY_RATIOS: List[Tuple[str, str, float]] = [
    ("1:1", "Unison", 0.0),
    ("16:15", "Diatonic Semitone", 111.73),
    ("9:8", "Major Tone", 203.91),
    ("8:7", "Septimal Whole Tone", 231.17),
    ("7:6", "Septimal Minor Third", 266.87),
    ("6:5", "Minor Third", 315.64),
    ("5:4", "Major Third", 386.31),
    ("9:7", "Septimal Major Third", 435.08),
    ("4:3", "Perfect Fourth", 498.04),
    ("7:5", "Lesser Septimal Tritone", 582.51),
    ("3:2", "Perfect Fifth", 701.96),
    ("8:5", "Minor Sixth", 813.69),
    ("5:3", "Major Sixth", 884.36),
    ("7:4", "Harmonic Seventh", 968.83),
    ("9:5", "Minor Seventh", 1017.60),
    ("15:8", "Major Seventh", 1088.27),
    ("2:1", "Octave", 1200.0),
]

SECONDARY_RATIOS: List[Tuple[str, str, float]] = [
    ("128:125", "Lesser Diesis", 41.06),
    ("45:44", "Undecimal Diesis", 38.91),
    ("49:48", "Septimal Diesis", 35.70),
    ("21:20", "Septimal Chromatic Semitone", 84.47),
    ("25:24", "Chromatic Semitone", 70.67),
    ("15:14", "Septimal Diatonic Semitone", 119.44),
    ("11:10", "Greater Undecimal Neutral Second", 165.00),
    ("12:11", "Lesser Undecimal Neutral Second", 150.64),
    ("28:25", "Whole Tone", 196.20),
    ("10:9", "Minor Tone", 182.40),
    ("16:13", "Tridecimal Neutral Third", 359.47),
    ("11:9", "Undecimal Neutral Third", 347.41),
    ("32:25", "Diminished Fourth", 427.37),
    ("14:11", "Undecimal Major Third", 417.51),
    ("21:16", "Septimal Narrow Fourth", 470.78),
    ("13:10", "Tridecimal Augmented Third", 454.21),
    ("11:8", "Undecimal Tritone", 551.32),
    ("10:7", "Greater Septimal Tritone", 617.49),
    ("16:9", "Grave Just Minor Seventh", 996.09),
]


class RatioMatch(BaseModel):
    """A single ratio with its distance from the tempered interval."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    
    ratio: str
    name: str
    cents: float
    deviation: float


class JustRatioMatch(RatioMatch):
    """Closest primary ratio, plus a secondary ratio when it fits better."""
    
    secondary_ratio: Optional[RatioMatch] = None


def _closest(
    cents: float,
    table: List[Tuple[str, str, float]],
) -> Optional[RatioMatch]:
    """Linear scan for the minimum deviation; the first minimum wins."""
    if not table:
        return None
    deviations = np.abs(np.array([entry[2] for entry in table]) - cents)
    index = int(np.argmin(deviations))
    ratio, name, ratio_cents = table[index]
    return RatioMatch(
        ratio=ratio, name=name, cents=ratio_cents, deviation=float(deviations[index])
    )


def closest_just_ratio(steps: int, excluded: Iterable[str] = ()) -> JustRatioMatch:
    """
    Find the just ratio closest to an interval of the given size.
    
    The step count is not reduced to an octave; callers pass 0..31.
    
    Args:
        steps: Interval size in 31-EDO steps
        excluded: Ratio strings ("n:d") to skip in both tables
        
    Returns:
        Closest primary ratio, with the closest secondary ratio attached
        only when it deviates strictly less
        
    Raises:
        ValidationError: If every primary ratio is excluded
    """
    skip = set(excluded)
    cents = float(step_to_cents(steps))
    
    primary = _closest(cents, [entry for entry in PRIMARY_RATIOS if entry[0] not in skip])
    if primary is None:
        raise ValidationError("All primary just ratios were excluded")
    
    secondary = _closest(cents, [entry for entry in SECONDARY_RATIOS if entry[0] not in skip])
    if secondary is not None and secondary.deviation < primary.deviation:
        return JustRatioMatch(**primary.model_dump(), secondary_ratio=secondary)
    return JustRatioMatch(**primary.model_dump())
