"""
Scale categorization.

Five independent axes (acoustic, cultural, perceptual, mathematical and
genera), each an ordered table of rules. Every rule whose predicate holds
contributes its tag; bands that are exclusive by nature (brightness,
genera) are written with exclusive predicates.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np


# Lineage recorded for scales flattened along the circle of fourths
STANDARD_LINEAGE = "hyperlydian-standard"

JUST_INTERVALS = frozenset({5, 8, 13, 18})
HARMONIC_DEGREES = frozenset({10, 18, 24, 28})
CONSONANT_INTERVALS = frozenset({8, 10, 13, 18})
DISSONANT_INTERVALS = frozenset({2, 6, 16, 17})
UNCOMMON_INTERVALS = frozenset({2, 4, 6, 7, 9, 11, 14, 16, 17, 19})
PELOG_PATTERN = (2, 5, 5, 2, 5)


@dataclass(frozen=True)
class ScaleFeatures:
    """Interval statistics the category rules are written against."""
    degrees: tuple
    intervals: tuple
    counts: Counter
    lineage: Optional[str] = None
    average: float = 0.0
    distinct: int = 0
    consonant: int = 0
    dissonant: int = 0
    small: int = 0
    large: int = 0
    
    @property
    def cardinality(self) -> int:
        return len(self.degrees) - 1
    
    @property
    def western(self) -> bool:
        return self.lineage == STANDARD_LINEAGE
    
    def count(self, *sizes: int) -> int:
        return sum(self.counts[size] for size in sizes)
    
    def has(self, size: int) -> bool:
        return self.counts[size] > 0


def scale_features(
    degrees: Sequence[int],
    intervals: Sequence[int],
    lineage: Optional[str] = None,
) -> ScaleFeatures:
    """Compute the statistics used by the category rules."""
    counts = Counter(intervals)
    return ScaleFeatures(
        degrees=tuple(degrees),
        intervals=tuple(intervals),
        counts=counts,
        lineage=lineage,
        average=float(np.mean(intervals)) if len(intervals) else 0.0,
        distinct=len(counts),
        consonant=sum(counts[size] for size in CONSONANT_INTERVALS),
        dissonant=sum(counts[size] for size in DISSONANT_INTERVALS),
        small=sum(1 for i in intervals if i <= 3),
        large=sum(1 for i in intervals if i >= 5),
    )


@dataclass(frozen=True)
class CategoryRule:
    """A tag contributed whenever its predicate holds."""
    tag: str
    predicate: Callable[[ScaleFeatures], bool] = field(repr=False)


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    return all(n % k for k in range(2, int(n ** 0.5) + 1))


def _is_palindrome(f: ScaleFeatures) -> bool:
    return f.intervals == f.intervals[::-1]


def _has_rotational_symmetry(f: ScaleFeatures) -> bool:
    n = len(f.intervals)
    rotations = {f.intervals[k:] + f.intervals[:k] for k in range(n)}
    return len(rotations) < n


def _pelog_matches(f: ScaleFeatures) -> int:
    return sum(
        1 for actual, target in zip(f.intervals, PELOG_PATTERN)
        if abs(actual - target) <= 1
    )


def _arabic(f: ScaleFeatures) -> bool:
    return f.has(4) and f.has(9)


def _brightness(f: ScaleFeatures) -> str:
    if f.average > 5 and f.large >= 5:
        return "Ultra Bright"
    if f.average > 4.5:
        return "Bright"
    if f.average < 3.5 and f.small >= 4:
        return "Ultra Dark"
    if f.average < 4:
        return "Dark"
    return "Neutral"


def _genus(f: ScaleFeatures) -> str:
    if f.count(5, 3) >= 5:
        return "Diatonic"
    if f.count(3, 2) >= 3:
        return "Chromatic"
    if f.count(1, 2) >= 2:
        return "Enharmonic"
    if f.count(4, 9, 17) >= 3:
        return "Neutral"
    return "Mixed"


ACOUSTIC_RULES = [
    CategoryRule("Just Intonation Approximation",
                 lambda f: sum(1 for i in f.intervals if i in JUST_INTERVALS) >= 4),
    CategoryRule("Harmonic Series Approximation",
                 lambda f: sum(1 for d in f.degrees if d in HARMONIC_DEGREES) >= 3),
    CategoryRule("Equal Spacing", lambda f: f.distinct <= 2),
    CategoryRule("Consonant", lambda f: f.consonant >= 5),
    CategoryRule("Dissonant", lambda f: f.dissonant >= 3),
]

CULTURAL_RULES = [
    CategoryRule("Western Classical", lambda f: f.western),
    CategoryRule("Arabic/Middle Eastern", _arabic),
    CategoryRule("Persian", lambda f: _arabic(f) and f.has(6)),
    CategoryRule("Balkan", lambda f: f.has(6) and f.has(4)),
    CategoryRule("East Asian", lambda f: f.has(8) and f.has(5) and f.cardinality <= 7),
    CategoryRule("Gamelan", lambda f: _pelog_matches(f) >= 4),
    CategoryRule("Indian",
                 lambda f: f.has(3) and (f.has(9) or f.has(4)) and f.has(18)
                 and f.cardinality >= 6),
    CategoryRule("African",
                 lambda f: f.cardinality == 7 and f.large >= 4 and f.distinct <= 2),
    CategoryRule("Microtonal Tradition",
                 lambda f: not f.western and any(i in UNCOMMON_INTERVALS for i in f.intervals)),
    CategoryRule("Experimental/Contemporary", lambda f: f.dissonant >= 4 or f.has(1)),
]

PERCEPTUAL_RULES = [
    CategoryRule("Ultra Bright", lambda f: _brightness(f) == "Ultra Bright"),
    CategoryRule("Bright", lambda f: _brightness(f) == "Bright"),
    CategoryRule("Ultra Dark", lambda f: _brightness(f) == "Ultra Dark"),
    CategoryRule("Dark", lambda f: _brightness(f) == "Dark"),
    CategoryRule("Neutral", lambda f: _brightness(f) == "Neutral"),
    CategoryRule("Tense", lambda f: f.dissonant >= 3),
    CategoryRule("Relaxed", lambda f: f.dissonant < 3 and f.consonant >= 5),
    CategoryRule("Ambiguous", lambda f: f.count(4, 9) >= 3),
]

MATHEMATICAL_RULES = [
    CategoryRule("Reflective Symmetry", _is_palindrome),
    CategoryRule("Rotational Symmetry", _has_rotational_symmetry),
    CategoryRule("Prime Cardinality", lambda f: _is_prime(f.cardinality)),
    CategoryRule("Sparse Intervals", lambda f: f.distinct <= 2),
    CategoryRule("Dense Intervals", lambda f: f.distinct >= 5),
    CategoryRule("Equipentatonic", lambda f: f.cardinality == 5 and f.distinct <= 2),
    CategoryRule("Equiheptatonic", lambda f: f.cardinality == 7 and f.distinct <= 2),
]

GENERA_RULES = [
    CategoryRule(genus, lambda f, genus=genus: _genus(f) == genus)
    for genus in ("Diatonic", "Chromatic", "Enharmonic", "Neutral", "Mixed")
]

CATEGORY_AXES: Dict[str, List[CategoryRule]] = {
    "acoustic": ACOUSTIC_RULES,
    "cultural": CULTURAL_RULES,
    "perceptual": PERCEPTUAL_RULES,
    "mathematical": MATHEMATICAL_RULES,
    "genera": GENERA_RULES,
}


def categorize(
    degrees: Sequence[int],
    intervals: Sequence[int],
    lineage: Optional[str] = None,
) -> Dict[str, List[str]]:
    """
    Tag a scale on every category axis.
    
    Args:
        degrees: Scale degrees, 0 to 31
        intervals: Consecutive intervals
        lineage: Derivation lineage; STANDARD_LINEAGE marks scales
            flattened from Hyperlydian along the circle of fourths
        
    Returns:
        Mapping of axis name to the tags that matched, in rule order
    """
    features = scale_features(degrees, intervals, lineage)
    return {
        axis: [rule.tag for rule in rules if rule.predicate(features)]
        for axis, rules in CATEGORY_AXES.items()
    }

