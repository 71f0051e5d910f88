"""
Generator-stacking scale families: moment-of-symmetry and well-formed.
"""

from collections import Counter
from typing import List, Optional, Sequence, Tuple

import numpy as np

from edo31.core.config import settings
from edo31.core.logging import get_logger
from edo31.scales.intervals import intervals_from_degrees, within_bounds
from edo31.scales.models import Scale
from edo31.scales.naming import ScaleNamer
from edo31.tuning.edo import STEPS_PER_OCTAVE

logger = get_logger(__name__)


MOS_GENERATORS = (8, 10, 13, 18, 19)
MOS_NOTE_COUNTS = range(5, 10)

# (steps, name, ratio)
WELL_FORMED_GENERATORS = (
    (8, "minor third", "6:5"),
    (10, "major third", "5:4"),
    (13, "perfect fourth", "4:3"),
    (18, "perfect fifth", "3:2"),
)
WELL_FORMED_LENGTHS = range(5, 13)


def stack_generator(generator: int, count: int) -> Tuple[int, ...]:
    """
    Sorted, deduplicated pitch classes of `count` stacked generators,
    closed with the octave.
    """
    chain = (np.arange(count) * generator) % STEPS_PER_OCTAVE
    return tuple(int(d) for d in np.unique(chain)) + (STEPS_PER_OCTAVE,)


def mos_degrees(generator: int, note_count: int) -> Optional[Tuple[int, ...]]:
    """
    Degrees of the MOS scale with this generator and size, if one exists.
    
    The stack must yield exactly `note_count` pitch classes and exactly two
    distinct step sizes.
    """
    degrees = stack_generator(generator, note_count)
    if len(degrees) - 1 != note_count:
        return None
    if len(set(intervals_from_degrees(degrees))) != 2:
        return None
    return degrees


def _mos_name(generator: int, note_count: int, large: int, small: int) -> str:
    if generator == 18 and note_count == 7:
        return f"Diatonic MOS ({large}L{small}s)"
    if generator == 18 and note_count == 5:
        return f"Pentatonic MOS ({large}L{small}s)"
    return f"{large}L{small}s MOS (g={generator})"


def generate_mos_scales(
    namer: ScaleNamer,
    generators: Sequence[int] = MOS_GENERATORS,
    note_counts: Sequence[int] = MOS_NOTE_COUNTS,
    min_step: Optional[int] = None,
    max_step: Optional[int] = None,
) -> List[Scale]:
    """
    Generate moment-of-symmetry scales.
    
    Args:
        namer: Run namer
        generators: Generator sizes in steps
        note_counts: Scale sizes to try for each generator
        min_step: Smallest allowed interval (settings.min_step)
        max_step: Largest allowed interval (settings.max_step)
        
    Returns:
        One scale per accepted (generator, size) pair
    """
    min_step = settings.min_step if min_step is None else min_step
    max_step = settings.max_step if max_step is None else max_step
    
    scales = []
    for generator in generators:
        for note_count in note_counts:
            degrees = mos_degrees(generator, note_count)
            if degrees is None:
                continue
            intervals = intervals_from_degrees(degrees)
            if not within_bounds(intervals, min_step, max_step):
                continue
            
            counts = Counter(intervals)
            small_step, large_step = sorted(counts)
            large, small = counts[large_step], counts[small_step]
            description = (
                f"Moment of Symmetry scale with {note_count} notes generated by a "
                f"{generator}-step generator. Contains {large} large steps of "
                f"{large_step} and {small} small steps of {small_step}."
            )
            if generator == 18 and note_count == 7:
                description += " This is the familiar diatonic scale."
            elif generator == 18 and note_count == 5:
                description += " This is similar to the familiar pentatonic scale."
            
            scales.append(namer.build(
                _mos_name(generator, note_count, large, small),
                family="mos",
                degrees=degrees,
                description=description,
                properties={
                    "generator": generator,
                    "noteCount": note_count,
                    "largeStep": large_step,
                    "smallStep": small_step,
                    "largeSteps": large,
                    "smallSteps": small,
                    "pattern": ",".join(str(i) for i in intervals),
                },
            ))
    
    logger.info("mos_scales_generated", count=len(scales))
    return scales


def _well_formed_prefix(intervals: Sequence[int]) -> str:
    distinct = len(set(intervals))
    return {1: "Equi", 2: "Bi", 3: "Tri"}.get(distinct, "Multi")


def generate_well_formed_scales(
    namer: ScaleNamer,
    generators: Sequence[Tuple[int, str, str]] = WELL_FORMED_GENERATORS,
    lengths: Sequence[int] = WELL_FORMED_LENGTHS,
    min_step: Optional[int] = None,
    max_step: Optional[int] = None,
) -> List[Scale]:
    """
    Generate well-formed scales: stacked generators of any step-size
    variety, kept when every interval is in bounds.
    """
    min_step = settings.min_step if min_step is None else min_step
    max_step = settings.max_step if max_step is None else max_step
    
    scales = []
    for steps, generator_name, ratio in generators:
        for length in lengths:
            degrees = stack_generator(steps, length)
            if len(degrees) - 1 != length:
                continue
            intervals = intervals_from_degrees(degrees)
            if not within_bounds(intervals, min_step, max_step):
                continue
            
            compact = generator_name.replace(" ", "")
            scales.append(namer.build(
                f"{_well_formed_prefix(intervals)}WF-{compact}-{length}",
                family="well-formed",
                degrees=degrees,
                description=(
                    f"Well-formed scale with {length} notes generated from stacked "
                    f"{generator_name}s ({ratio})."
                ),
                properties={
                    "generator": steps,
                    "generatorName": generator_name,
                    "generatorRatio": ratio,
                    "noteCount": length,
                },
            ))
    
    logger.info("well_formed_scales_generated", count=len(scales))
    return scales
