"""
Xenharmonic scales: neutral-interval sets, tiled step patterns and
fixed exotic sets that lean on intervals 12-EDO lacks.
"""

from itertools import product
from typing import List, Optional, Sequence, Tuple

from edo31.core.config import settings
from edo31.core.logging import get_logger
from edo31.scales.intervals import intervals_from_degrees, within_bounds
from edo31.scales.models import Scale
from edo31.scales.naming import ScaleNamer
from edo31.tuning.edo import STEPS_PER_OCTAVE

logger = get_logger(__name__)


# (name, degrees, description)
NEUTRAL_SCALES = (
    ("Complete Neutriton", (0, 4, 9, 13, 18, 22, 26, 31),
     "Scale with all neutral intervals (2nd, 3rd, 6th, 7th)."),
    ("Neutral Triad", (0, 4, 9, 13, 18, 23, 27, 31),
     "Scale with neutral 2nd and 3rd but standard 6th and 7th."),
    ("Neutral Mediant", (0, 5, 9, 13, 18, 22, 27, 31),
     "Scale with neutral 3rd and 6th but standard 2nd and 7th."),
    ("Neutralized Minor", (0, 4, 8, 13, 18, 22, 26, 31),
     "Minor scale with 2nd, 6th and 7th replaced by neutral equivalents."),
    ("Semi-Neutralized", (0, 4, 9, 13, 18, 22, 28, 31),
     "Scale with neutral 2nd, 3rd and 6th but major 7th."),
)

EXOTIC_SCALES = (
    ("Superflat Xenotonic", (0, 3, 6, 10, 18, 21, 24, 31),
     "Scale with stacked semitones in both tetrachords."),
    ("Supermajor Xenotonic", (0, 3, 10, 13, 18, 21, 28, 31),
     "Scale featuring augmented seconds and major thirds."),
    ("Whole-tone Xenotonic", (0, 6, 12, 18, 24, 31),
     "Scale composed of 6-step intervals (augmented seconds)."),
    ("Neutral-augmented Xenotonic", (0, 4, 10, 14, 20, 24, 31),
     "Scale alternating between neutral seconds and major thirds."),
    ("Ultrachromatic Xenotonic", (0, 1, 5, 10, 13, 18, 23, 28, 31),
     "Scale featuring a diesis step and otherwise standard major intervals."),
)

PATTERN_STEPS = (3, 4, 5, 6)


def tile_pattern(pattern: Sequence[int], closing_gap: int) -> Tuple[int, ...]:
    """
    Repeat a step pattern up the octave.
    
    Whole repetitions that fit the octave are laid down first; tiling then
    continues until a degree lands within `closing_gap` of the octave, and
    the last degree is forced to the octave.
    """
    degrees = [0]
    for _ in range(STEPS_PER_OCTAVE // sum(pattern)):
        for step in pattern:
            degrees.append(degrees[-1] + step)
    i = 0
    while degrees[-1] < STEPS_PER_OCTAVE - closing_gap:
        degrees.append(degrees[-1] + pattern[i % len(pattern)])
        i += 1
    if degrees[-1] != STEPS_PER_OCTAVE:
        degrees.append(STEPS_PER_OCTAVE)
    return tuple(degrees)


def _patterns():
    for s1, s2 in product(PATTERN_STEPS, repeat=2):
        if s1 != s2:
            yield (s1, s2), "Alternator"
    for pattern in product(PATTERN_STEPS, repeat=3):
        if len(set(pattern)) > 1:
            yield pattern, "Trialternator"


def generate_xenharmonic_scales(
    namer: ScaleNamer,
    min_step: Optional[int] = None,
    max_step: Optional[int] = None,
) -> List[Scale]:
    """
    Generate neutral, patterned and exotic xenharmonic scales.
    
    Only the patterned scales are bound-checked; the neutral and exotic
    sets are authored and kept as they are.
    """
    min_step = settings.min_step if min_step is None else min_step
    max_step = settings.max_step if max_step is None else max_step
    
    scales = []
    for name, degrees, description in NEUTRAL_SCALES:
        intervals = intervals_from_degrees(degrees)
        scales.append(namer.build(
            name,
            family="xenharmonic-neutral",
            degrees=degrees,
            description=description,
            properties={
                "neutralSeconds": intervals.count(4),
                "neutralThirds": 9 in degrees,
            },
        ))
    
    for pattern, kind in _patterns():
        degrees = tile_pattern(pattern, max_step)
        intervals = intervals_from_degrees(degrees)
        if not within_bounds(intervals, min_step, max_step):
            continue
        label = "".join(str(s) for s in pattern)
        steps = ", ".join(str(s) for s in pattern)
        properties = {"pattern": ",".join(str(s) for s in pattern)}
        properties.update({f"step{i + 1}": s for i, s in enumerate(pattern)})
        scales.append(namer.build(
            f"{label}-{kind}",
            family="xenharmonic-patterned",
            degrees=degrees,
            description=f"Xenharmonic scale built from a repeating pattern of {steps}-step intervals.",
            properties=properties,
        ))
    
    for name, degrees, description in EXOTIC_SCALES:
        intervals = intervals_from_degrees(degrees)
        scales.append(namer.build(
            name,
            family="xenharmonic-exotic",
            degrees=degrees,
            description=description,
            properties={
                "uniqueIntervals": len(set(intervals)),
                "smallestInterval": min(intervals),
                "largestInterval": max(intervals),
            },
        ))
    
    logger.info("xenharmonic_scales_generated", count=len(scales))
    return scales
