"""
Heptatonic flattening generator.

Starts from the brightest valid seven-note scale ("Hyperlydian") and
flattens one degree at a time, walking the degrees in circle-of-fourths
order. Every unique scale found is then expanded into its rotational modes.
"""

from typing import Dict, List, Optional, Set, Tuple

from edo31.core.config import settings
from edo31.core.exceptions import ValidationError
from edo31.core.logging import get_logger
from edo31.scales.categories import STANDARD_LINEAGE
from edo31.scales.intervals import flatten_degree, ordinal, rotate
from edo31.scales.models import Alteration, Scale
from edo31.scales.naming import (
    ScaleNamer,
    flattened_description,
    flattened_name,
    mode_name,
)

logger = get_logger(__name__)


# Brightest seven-note scale for each minimum step
HYPERLYDIAN: Dict[int, Tuple[int, ...]] = {
    2: (6, 6, 5, 5, 5, 2, 2),
    3: (5, 5, 3, 5, 5, 5, 3),
}

# Degree indices of F, Bb, Eb, Ab, Db, Gb, Cb relative to a C tonic
CIRCLE_OF_FOURTHS = (3, 6, 2, 5, 1, 4, 0)


def hyperlydian(min_step: int) -> Tuple[int, ...]:
    """
    Interval pattern of the Hyperlydian base for a minimum step.
    
    Raises:
        ValidationError: If no base is defined for the minimum step
    """
    if min_step not in HYPERLYDIAN:
        raise ValidationError(
            f"No Hyperlydian base for minimum step {min_step}; "
            f"expected one of {sorted(HYPERLYDIAN)}"
        )
    return HYPERLYDIAN[min_step]


def can_flatten(intervals: Tuple[int, ...], degree: int, min_step: int) -> bool:
    """Both intervals touching the degree must exceed the minimum step."""
    before = intervals[(degree - 1) % len(intervals)]
    after = intervals[degree % len(intervals)]
    return before > min_step and after > min_step


def flatten_heptatonic(
    min_step: int,
    passes: int = 5,
    stop_on_duplicate: bool = True,
) -> List[Tuple[Tuple[int, ...], Tuple[Alteration, ...]]]:
    """
    Walk the flattening search and return each unique interval pattern
    with the alteration log that produced it, base first.
    
    Args:
        min_step: Smallest allowed interval
        passes: How many times each degree may be flattened in turn
        stop_on_duplicate: End the current degree at the first duplicate
            pattern; when False the search steps past it instead
    """
    base = hyperlydian(min_step)
    found: List[Tuple[Tuple[int, ...], Tuple[Alteration, ...]]] = [(base, ())]
    seen: Set[Tuple[int, ...]] = {base}
    
    for cycle, degree in enumerate(CIRCLE_OF_FOURTHS):
        current, log = found[0] if cycle == 0 else found[-1]
        
        for step in range(1, passes + 1):
            if not can_flatten(current, degree, min_step):
                break
            candidate = flatten_degree(current, degree)
            if min(candidate) < min_step:
                break
            if candidate in seen:
                if stop_on_duplicate:
                    break
                current = candidate
                continue
            seen.add(candidate)
            
            log = log + (Alteration(degree=degree, degree_name=ordinal(degree), steps=step),)
            found.append((candidate, log))
            current = candidate
    
    return found


def generate_heptatonic_scales(
    namer: ScaleNamer,
    min_step: Optional[int] = None,
    passes: Optional[int] = None,
    stop_on_duplicate: Optional[bool] = None,
) -> List[Scale]:
    """
    Generate every flattened heptatonic scale with all of its modes.
    
    Args:
        namer: Run namer
        min_step: Smallest allowed interval (settings.heptatonic_min_step)
        passes: Flattenings per degree (settings.flatten_passes)
        stop_on_duplicate: See flatten_heptatonic (settings.stop_on_duplicate)
        
    Returns:
        Mode collection; each parent is followed by rotations 1..6
    """
    min_step = settings.heptatonic_min_step if min_step is None else min_step
    passes = settings.flatten_passes if passes is None else passes
    stop_on_duplicate = settings.stop_on_duplicate if stop_on_duplicate is None else stop_on_duplicate
    
    parents: List[Scale] = []
    for index, (intervals, log) in enumerate(flatten_heptatonic(min_step, passes, stop_on_duplicate)):
        name = "Hyperlydian" if index == 0 else flattened_name(intervals, log)
        parents.append(namer.build(
            name,
            family="heptatonic",
            intervals=intervals,
            alterations=log,
            description=flattened_description(intervals, log, min_step),
            properties={"minStep": min_step},
            lineage=STANDARD_LINEAGE,
        ))
    
    modes: List[Scale] = []
    for parent in parents:
        modes.append(parent)
        for rotation in range(1, len(parent.intervals)):
            name, description = mode_name(parent, rotation)
            modes.append(namer.build(
                name,
                family="heptatonic-mode",
                intervals=rotate(parent.intervals, rotation),
                alterations=(Alteration(kind="mode", source=parent.name, rotation=rotation),),
                description=description,
                properties={"minStep": min_step, "parent": parent.name, "rotation": rotation},
                lineage=STANDARD_LINEAGE,
            ))
    
    logger.info("heptatonic_scales_generated", parents=len(parents), modes=len(modes))
    return modes
