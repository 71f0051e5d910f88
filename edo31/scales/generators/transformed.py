"""
Transformed scales: inversion, diminution and augmentation of a handful
of Western, Arabic, Indian and modern bases.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from edo31.core.config import settings
from edo31.core.logging import get_logger
from edo31.scales.intervals import intervals_from_degrees, within_bounds
from edo31.scales.models import Alteration, Scale
from edo31.scales.naming import ScaleNamer
from edo31.tuning.edo import STEPS_PER_OCTAVE

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransformBase:
    name: str
    tradition: str
    degrees: Tuple[int, ...]


TRANSFORM_BASES = (
    TransformBase("Major", "Western", (0, 5, 10, 13, 18, 23, 28, 31)),
    TransformBase("Minor", "Western", (0, 5, 8, 13, 18, 21, 26, 31)),
    TransformBase("Harmonic Minor", "Western", (0, 5, 8, 13, 18, 21, 28, 31)),
    TransformBase("Rast", "Arabic", (0, 5, 9, 13, 18, 23, 27, 31)),
    TransformBase("Hijaz", "Arabic", (0, 3, 9, 13, 18, 21, 27, 31)),
    TransformBase("Bhairavi", "Indian", (0, 3, 8, 13, 18, 21, 26, 31)),
    TransformBase("Whole Tone", "Modern", (0, 5, 10, 15, 20, 25, 31)),
    TransformBase("Neutral", "Microtonal", (0, 4, 9, 13, 18, 22, 27, 31)),
)


def close_octave(intervals: Sequence[int]) -> Tuple[int, ...]:
    """
    Lay intervals up from 0, dropping every degree past the octave,
    and force the last degree to the octave.
    """
    degrees = [0]
    total = 0
    for interval in intervals:
        total += interval
        if total <= STEPS_PER_OCTAVE:
            degrees.append(total)
    if degrees[-1] != STEPS_PER_OCTAVE:
        degrees.append(STEPS_PER_OCTAVE)
    return tuple(degrees)


def invert(degrees: Sequence[int]) -> Tuple[int, ...]:
    """Mirror a scale around its tonic (interval pattern reversed)."""
    return close_octave(tuple(reversed(intervals_from_degrees(degrees))))


def shift_intervals(
    degrees: Sequence[int],
    change: int,
    min_step: int,
    max_step: int,
) -> Tuple[int, ...]:
    """Widen or narrow every interval by `change`, clamped to the bounds."""
    intervals = [
        max(min_step, min(max_step, interval + change))
        for interval in intervals_from_degrees(degrees)
    ]
    return close_octave(intervals)


def generate_transformed_scales(
    namer: ScaleNamer,
    min_step: Optional[int] = None,
    max_step: Optional[int] = None,
) -> List[Scale]:
    """
    Inverted, diminished and augmented versions of each base.
    
    Results with an interval outside the bounds are omitted.
    """
    min_step = settings.min_step if min_step is None else min_step
    max_step = settings.max_step if max_step is None else max_step
    
    scales = []
    for base in TRANSFORM_BASES:
        label = f"{base.tradition} {base.name}"
        candidates = (
            ("Inverted", "inversion", invert(base.degrees),
             f"Scale with inverted interval pattern of {label}."),
            ("Diminished", "diminution", shift_intervals(base.degrees, -1, min_step, max_step),
             f"Scale derived by diminishing each interval of {label} by one step."),
            ("Augmented", "augmentation", shift_intervals(base.degrees, 1, min_step, max_step),
             f"Scale derived by augmenting each interval of {label} by one step."),
        )
        for prefix, transformation, degrees, description in candidates:
            if not within_bounds(intervals_from_degrees(degrees), min_step, max_step):
                logger.debug("transformed_scale_rejected", base=base.name, transformation=transformation)
                continue
            scales.append(namer.build(
                f"{prefix} {base.name}",
                family=f"transformed-{transformation}",
                degrees=degrees,
                description=description,
                alterations=(Alteration(kind="transform", source=base.name),),
                properties={
                    "baseName": base.name,
                    "baseTradition": base.tradition,
                    "transformation": transformation,
                },
            ))
    
    logger.info("transformed_scales_generated", count=len(scales))
    return scales
