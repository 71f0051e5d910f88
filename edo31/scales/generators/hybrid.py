"""
Hybrid scales spliced from two musical traditions.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from edo31.core.config import settings
from edo31.core.logging import get_logger
from edo31.scales.intervals import intervals_from_degrees, within_bounds
from edo31.scales.models import Scale
from edo31.scales.naming import ScaleNamer
from edo31.tuning.edo import STEPS_PER_OCTAVE

logger = get_logger(__name__)


# Upper tetrachords start at the first degree at or above the fourth
FOURTH = 13


@dataclass(frozen=True)
class SeedScale:
    """A reference scale from one tradition."""
    name: str
    degrees: Tuple[int, ...]
    tradition: str


WESTERN = (
    SeedScale("Major", (0, 5, 10, 13, 18, 23, 28, 31), "Western"),
    SeedScale("Minor", (0, 5, 8, 13, 18, 21, 26, 31), "Western"),
    SeedScale("Harmonic Minor", (0, 5, 8, 13, 18, 21, 28, 31), "Western"),
)

ARABIC = (
    SeedScale("Rast", (0, 5, 9, 13, 18, 23, 27, 31), "Arabic"),
    SeedScale("Bayati", (0, 4, 9, 13, 18, 22, 27, 31), "Arabic"),
    SeedScale("Hijaz", (0, 3, 9, 13, 18, 21, 27, 31), "Arabic"),
)

INDIAN = (
    SeedScale("Bilawal", (0, 5, 10, 13, 18, 23, 28, 31), "Indian"),
    SeedScale("Kafi", (0, 5, 8, 13, 18, 23, 26, 31), "Indian"),
    SeedScale("Bhairavi", (0, 3, 8, 13, 18, 21, 26, 31), "Indian"),
)

BLUES = (
    SeedScale("Blues", (0, 3, 8, 13, 15, 18, 23, 31), "Blues"),
    SeedScale("Neutral Blues", (0, 4, 8, 13, 18, 22, 26, 31), "Blues"),
)

TRADITION_PAIRS = (
    ("Arabesqued", WESTERN, ARABIC),
    ("Indionized", WESTERN, INDIAN),
    ("Raglues", INDIAN, BLUES),
    ("Maqablues", ARABIC, BLUES),
)


def tetrachord_splice(lower: Sequence[int], upper: Sequence[int]) -> Tuple[int, ...]:
    """
    Lower four degrees of one scale joined to the upper part of another.
    
    The upper part starts at its first degree at or above the fourth; a
    degree shared at the join is kept once.
    """
    head = list(lower[:4])
    start = next(i for i, d in enumerate(upper) if d >= FOURTH)
    tail = list(upper[start:])
    if tail and tail[0] == head[-1]:
        tail = tail[1:]
    degrees = head + tail
    if degrees[-1] != STEPS_PER_OCTAVE:
        degrees.append(STEPS_PER_OCTAVE)
    return tuple(degrees)


def alternating_splice(first: Sequence[int], second: Sequence[int]) -> Tuple[int, ...]:
    """Inner degrees taken from each scale in turn, sorted and deduplicated."""
    inner_a, inner_b = first[1:-1], second[1:-1]
    picked = [
        inner_a[i] if i % 2 == 0 else inner_b[i]
        for i in range(min(len(inner_a), len(inner_b)))
    ]
    return tuple(sorted({0, STEPS_PER_OCTAVE, *picked}))


def generate_hybrid_scales(
    namer: ScaleNamer,
    min_step: Optional[int] = None,
    max_step: Optional[int] = None,
) -> List[Scale]:
    """
    Generate tetrachord and alternating hybrids for every tradition pair.
    
    Splices whose intervals leave [min_step, max_step] are dropped.
    """
    min_step = settings.min_step if min_step is None else min_step
    max_step = settings.max_step if max_step is None else max_step
    
    scales = []
    for label, lowers, uppers in TRADITION_PAIRS:
        for a in lowers:
            for b in uppers:
                degrees = tetrachord_splice(a.degrees, b.degrees)
                if within_bounds(intervals_from_degrees(degrees), min_step, max_step):
                    scales.append(namer.build(
                        f"{label} {a.name}-{b.name}",
                        family="hybrid-tetrachord",
                        degrees=degrees,
                        description=(
                            f"Hybrid scale with lower tetrachord from {a.tradition} {a.name} "
                            f"and upper tetrachord from {b.tradition} {b.name}."
                        ),
                        properties={
                            "lowerTradition": a.tradition,
                            "lowerScale": a.name,
                            "upperTradition": b.tradition,
                            "upperScale": b.name,
                        },
                    ))
                
                degrees = alternating_splice(a.degrees, b.degrees)
                if within_bounds(intervals_from_degrees(degrees), min_step, max_step):
                    scales.append(namer.build(
                        f"Alternating {label} {a.name}-{b.name}",
                        family="hybrid-alternating",
                        degrees=degrees,
                        description=(
                            f"Hybrid scale alternating between notes from {a.tradition} "
                            f"{a.name} and {b.tradition} {b.name}."
                        ),
                        properties={
                            "tradition1": a.tradition,
                            "scale1": a.name,
                            "tradition2": b.tradition,
                            "scale2": b.name,
                        },
                    ))
    
    logger.info("hybrid_scales_generated", count=len(scales))
    return scales
