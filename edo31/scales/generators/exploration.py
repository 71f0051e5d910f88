"""
Recursive flattening explorers.

Unlike the heptatonic generator, which walks the degrees in a fixed
circle-of-fourths order, these explorers try every degree at every step.
Both are depth-first, carry a visited set keyed on the interval tuple and
stop at an explicit depth limit.
"""

from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from edo31.core.config import settings
from edo31.core.logging import get_logger
from edo31.scales.intervals import flatten_degree, ordinal, within_bounds
from edo31.scales.models import Alteration, Scale
from edo31.scales.naming import (
    CARDINALITY_TYPES,
    ScaleNamer,
    cardinality_description,
    cardinality_name,
    exploration_description,
    exploration_name,
    spacing_prefix,
)
from edo31.tuning.edo import STEPS_PER_OCTAVE

logger = get_logger(__name__)


EXPLORATION_BASE = (5, 5, 3, 5, 5, 5, 3)
CARDINALITIES = (5, 6, 8, 9)


def _flatten_count(log: Tuple[Alteration, ...], degree: int) -> int:
    return sum(1 for alt in log if alt.degree == degree)


def explore_flattenings(
    namer: ScaleNamer,
    min_step: Optional[int] = None,
    max_step: Optional[int] = None,
    max_depth: Optional[int] = None,
    max_scales: Optional[int] = None,
) -> List[Scale]:
    """
    Flatten any degree of the Hyperlydian in any order.
    
    A flatten is legal when the interval leading into the degree exceeds
    the minimum step and every resulting interval stays within bounds.
    
    Args:
        namer: Run namer
        min_step: Smallest allowed interval (settings.min_step)
        max_step: Largest allowed interval (settings.max_step)
        max_depth: Longest flattening path (settings.exploration_max_depth)
        max_scales: Cap on emitted scales (settings.exploration_max_scales)
        
    Returns:
        Base scale followed by every scale reached, in discovery order
    """
    min_step = settings.min_step if min_step is None else min_step
    max_step = settings.max_step if max_step is None else max_step
    max_depth = settings.exploration_max_depth if max_depth is None else max_depth
    max_scales = settings.exploration_max_scales if max_scales is None else max_scales
    
    scales = [namer.build(
        "Hyperlydian",
        family="heptatonic",
        intervals=EXPLORATION_BASE,
        description="Original hyperlydian scale with maximum brightness.",
    )]
    visited: Set[Tuple[int, ...]] = {EXPLORATION_BASE}
    
    def explore(
        intervals: Tuple[int, ...],
        log: Tuple[Alteration, ...],
        path: Tuple[int, ...],
    ) -> None:
        if len(path) >= max_depth:
            return
        for degree in range(len(intervals)):
            if len(scales) >= max_scales:
                return
            if intervals[(degree - 1) % len(intervals)] <= min_step:
                continue
            candidate = flatten_degree(intervals, degree)
            if not within_bounds(candidate, min_step, max_step) or candidate in visited:
                continue
            visited.add(candidate)
            
            new_log = log + (Alteration(
                degree=degree,
                degree_name=ordinal(degree),
                steps=1 + _flatten_count(log, degree),
            ),)
            new_path = path + (degree,)
            mutated = sorted(set(new_path))
            scales.append(namer.build(
                exploration_name(candidate, mutated, new_path),
                family="heptatonic",
                intervals=candidate,
                alterations=new_log,
                description=exploration_description(candidate, new_log),
                properties={"mutationPath": "-".join(str(d) for d in new_path)},
            ))
            explore(candidate, new_log, new_path)
    
    explore(EXPLORATION_BASE, (), ())
    
    logger.info(
        "non_sequential_scales_generated",
        count=len(scales),
        capped=len(scales) >= max_scales,
    )
    return scales


def equally_spaced(note_count: int, min_step: int, max_step: int) -> Tuple[int, ...]:
    """
    Interval pattern spreading the octave as evenly as the bounds allow.
    
    Each interval is the remaining span divided by the notes still to
    place, rounded half up and clamped; the last interval closes the
    octave.
    """
    intervals = []
    remaining = STEPS_PER_OCTAVE
    for i in range(1, note_count):
        step = int(np.floor(remaining / (note_count - i + 1) + 0.5))
        step = max(min_step, min(max_step, step))
        intervals.append(step)
        remaining -= step
    intervals.append(remaining)
    return tuple(intervals)


def flatten_cardinality(
    base: Tuple[int, ...],
    min_step: int,
    max_step: int,
    max_depth: int,
    max_scales: int,
) -> List[Tuple[Tuple[int, ...], Tuple[Alteration, ...]]]:
    """
    Depth-first flattening of the inner degrees of a base pattern.
    
    Returns:
        (intervals, alteration log) for each new pattern, base excluded
    """
    found: List[Tuple[Tuple[int, ...], Tuple[Alteration, ...]]] = []
    visited: Set[Tuple[int, ...]] = {base}
    
    def explore(intervals: Tuple[int, ...], log: Tuple[Alteration, ...], depth: int) -> None:
        if depth >= max_depth:
            return
        for degree in range(1, len(intervals)):
            if len(found) >= max_scales:
                return
            if intervals[degree - 1] <= min_step:
                continue
            candidate = flatten_degree(intervals, degree)
            if not within_bounds(candidate, min_step, max_step) or candidate in visited:
                continue
            visited.add(candidate)
            new_log = log + (Alteration(
                degree=degree,
                degree_name=ordinal(degree),
                steps=1 + _flatten_count(log, degree),
            ),)
            found.append((candidate, new_log))
            explore(candidate, new_log, depth + 1)
    
    explore(base, (), 0)
    return found


def generate_variable_cardinality_scales(
    namer: ScaleNamer,
    min_step: Optional[int] = None,
    max_step: Optional[int] = None,
    max_depth: Optional[int] = None,
    max_scales: Optional[int] = None,
) -> List[Scale]:
    """
    Pentatonic, hexatonic, octatonic and nonatonic scales.
    
    Each cardinality contributes its equally spaced base followed by the
    scales reached by flattening its inner degrees.
    """
    min_step = settings.min_step if min_step is None else min_step
    max_step = settings.max_step if max_step is None else max_step
    max_depth = settings.cardinality_max_depth if max_depth is None else max_depth
    max_scales = settings.exploration_max_scales if max_scales is None else max_scales
    
    scales: List[Scale] = []
    counts: Dict[int, int] = {}
    for note_count in CARDINALITIES:
        kind = CARDINALITY_TYPES[note_count]
        base_intervals = equally_spaced(note_count, min_step, max_step)
        prefix = spacing_prefix(base_intervals)
        base = namer.build(
            prefix + kind,
            family=kind,
            intervals=base_intervals,
            description=f"Base {note_count}-note scale with {prefix.lower()} spacing.",
        )
        scales.append(base)
        
        flattened = flatten_cardinality(base_intervals, min_step, max_step, max_depth, max_scales)
        for intervals, log in flattened:
            scales.append(namer.build(
                cardinality_name(intervals, log),
                family=kind,
                intervals=intervals,
                alterations=log,
                description=cardinality_description(intervals, log, base.name),
                properties={"base": base.name},
            ))
        counts[note_count] = len(flattened) + 1
    
    logger.info("variable_cardinality_scales_generated", count=len(scales), per_cardinality=counts)
    return scales
