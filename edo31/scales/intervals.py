"""
Degree/interval arithmetic shared by every scale generator.
"""

from typing import Iterable, Sequence, Tuple

from edo31.core.exceptions import ScaleInvariantError
from edo31.tuning.edo import STEPS_PER_OCTAVE


ORDINALS = ["1st", "2nd", "3rd", "4th", "5th", "6th", "7th", "8th", "9th"]


def ordinal(index: int) -> str:
    """Ordinal label of a zero-based degree index."""
    if index < len(ORDINALS):
        return ORDINALS[index]
    return f"{index + 1}th"


def intervals_from_degrees(degrees: Sequence[int]) -> Tuple[int, ...]:
    """Consecutive differences of a degree sequence."""
    return tuple(degrees[i + 1] - degrees[i] for i in range(len(degrees) - 1))


def degrees_from_intervals(intervals: Iterable[int]) -> Tuple[int, ...]:
    """Running sum of intervals, starting at 0."""
    degrees = [0]
    for interval in intervals:
        degrees.append(degrees[-1] + interval)
    return tuple(degrees)


def within_bounds(intervals: Iterable[int], min_step: int, max_step: int) -> bool:
    """True when every interval lies in [min_step, max_step]."""
    return all(min_step <= interval <= max_step for interval in intervals)


def rotate(intervals: Sequence[int], rotation: int) -> Tuple[int, ...]:
    """Rotate an interval sequence left by `rotation` positions."""
    if not intervals:
        return tuple(intervals)
    k = rotation % len(intervals)
    return tuple(intervals[k:]) + tuple(intervals[:k])


def flatten_degree(intervals: Sequence[int], degree: int) -> Tuple[int, ...]:
    """
    Lower one degree by a single step.
    
    The interval leading into the degree shrinks and the interval leaving
    it grows. Degree 0 wraps around, so flattening the tonic re-roots the
    scale a step lower and keeps it starting at 0.
    
    Args:
        intervals: Interval sequence summing to an octave
        degree: Zero-based degree index
        
    Returns:
        New interval sequence
    """
    result = list(intervals)
    result[(degree - 1) % len(result)] -= 1
    result[degree % len(result)] += 1
    return tuple(result)


def check_scale_invariants(degrees: Sequence[int], intervals: Sequence[int]) -> None:
    """
    Raise if a degree/interval pair is not a valid octave scale.
    
    Raises:
        ScaleInvariantError: On a bad first/last degree, non-increasing
            degrees, a mismatched interval list or an interval sum other
            than the octave
    """
    if len(degrees) < 2:
        raise ScaleInvariantError(f"Scale needs at least two degrees: {list(degrees)}")
    if degrees[0] != 0 or degrees[-1] != STEPS_PER_OCTAVE:
        raise ScaleInvariantError(
            f"Scale must run from 0 to {STEPS_PER_OCTAVE}: {list(degrees)}"
        )
    if any(b <= a for a, b in zip(degrees, degrees[1:])):
        raise ScaleInvariantError(f"Degrees not strictly increasing: {list(degrees)}")
    if tuple(intervals) != intervals_from_degrees(degrees):
        raise ScaleInvariantError(
            f"Intervals {list(intervals)} do not match degrees {list(degrees)}"
        )
    if sum(intervals) != STEPS_PER_OCTAVE:
        raise ScaleInvariantError(f"Intervals sum to {sum(intervals)}, not an octave")
