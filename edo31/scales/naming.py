"""
Scale naming.

Names are built from the interval content and alteration history and are
made unique through the run's NameRegistry. The ScaleNamer also assembles
the final Scale record (invariant check, categories, family type).
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from edo31.core.logging import get_logger
from edo31.scales.categories import categorize
from edo31.scales.intervals import (
    check_scale_invariants,
    degrees_from_intervals,
    intervals_from_degrees,
    ordinal,
    rotate,
)
from edo31.scales.models import Alteration, Scale, Scalar
from edo31.scales.registry import NameRegistry

logger = get_logger(__name__)


MODE_NAMES = ["Ionian", "Dorian", "Phrygian", "Lydian", "Mixolydian", "Aeolian", "Locrian"]

# 31-EDO meantone diatonic: major second = 5 steps, diatonic semitone = 3
DIATONIC_MODES: Dict[str, Tuple[int, ...]] = {
    "Ionian": (5, 5, 3, 5, 5, 5, 3),
    "Dorian": (5, 3, 5, 5, 5, 3, 5),
    "Phrygian": (3, 5, 5, 5, 3, 5, 5),
    "Lydian": (5, 5, 5, 3, 5, 5, 3),
    "Mixolydian": (5, 5, 3, 5, 5, 3, 5),
    "Aeolian": (5, 3, 5, 5, 3, 5, 5),
    "Locrian": (3, 5, 5, 3, 5, 5, 5),
}

# Closest-mode distance beyond which exploration names fall back to "Modal"
MODAL_DISTANCE_LIMIT = 6

FLATTENING_TERMS = {
    1: "lowering",
    2: "flattening",
    3: "diminishing",
    4: "severely diminishing",
}


def step_buckets(intervals: Sequence[int]) -> Dict[str, int]:
    """Counts of 2..6-step intervals, with 7 and above pooled."""
    counts = Counter(intervals)
    buckets = {str(size): counts[size] for size in range(2, 7)}
    buckets["7+"] = sum(n for size, n in counts.items() if size >= 7)
    return buckets


@dataclass(frozen=True)
class DescriptorRule:
    """A name token contributed whenever its predicate holds."""
    token: str
    predicate: Callable[[Sequence[int]], bool] = field(repr=False)


def _significant_bucket_count(intervals: Sequence[int]) -> int:
    return sum(1 for n in step_buckets(intervals).values() if n >= 2)


DESCRIPTOR_RULES = [
    DescriptorRule("Septal", lambda iv: any(i in (10, 17, 24) for i in iv)),
    DescriptorRule("Tertial", lambda iv: iv.count(3) + iv.count(4) >= 3),
    DescriptorRule("Poly", lambda iv: len(set(iv)) >= 5),
    DescriptorRule("Equi", lambda iv: len(set(iv)) <= 2),
    DescriptorRule("Micro", lambda iv: iv.count(2) >= 3),
    DescriptorRule("Macro", lambda iv: step_buckets(iv)["6"] + step_buckets(iv)["7+"] >= 2),
    DescriptorRule("Quasi", lambda iv: iv.count(4) >= 2),
    DescriptorRule("Bi", lambda iv: iv.count(2) >= 2 and iv.count(6) >= 1),
    DescriptorRule("Tri", lambda iv: _significant_bucket_count(iv) == 3),
    DescriptorRule("Mono", lambda iv: any(n >= 5 for n in step_buckets(iv).values())),
    DescriptorRule("Hyper", lambda iv: float(np.mean(iv)) > 5),
    DescriptorRule("Hypo", lambda iv: float(np.mean(iv)) < 3),
]


def structural_descriptors(intervals: Sequence[int]) -> List[str]:
    """Tokens of every descriptor rule matching the interval multiset."""
    intervals = list(intervals)
    return [rule.token for rule in DESCRIPTOR_RULES if rule.predicate(intervals)]


def exact_mode(intervals: Sequence[int]) -> Optional[str]:
    """Diatonic mode with exactly this interval pattern, if any."""
    for name, pattern in DIATONIC_MODES.items():
        if tuple(intervals) == pattern:
            return name
    return None


def closest_mode(intervals: Sequence[int]) -> Tuple[str, int]:
    """
    Diatonic mode with the smallest total per-position difference.
    
    Returns:
        Mode name and its distance; the first mode wins ties. Scales
        that are not heptatonic get ("Modal", -1).
    """
    if len(intervals) != 7:
        return "Modal", -1
    
    best_name, best_distance = MODE_NAMES[0], None
    for name, pattern in DIATONIC_MODES.items():
        distance = sum(abs(a - b) for a, b in zip(intervals, pattern))
        if best_distance is None or distance < best_distance:
            best_name, best_distance = name, distance
    return best_name, best_distance


def _join_clauses(clauses: List[str]) -> str:
    if len(clauses) == 1:
        return clauses[0]
    if len(clauses) == 2:
        return " and ".join(clauses)
    return ", ".join(clauses[:-1]) + ", and " + clauses[-1]


def _plural(steps: int) -> str:
    return f"{steps} step{'s' if steps != 1 else ''}"


def flattened_name(intervals: Sequence[int], alterations: Sequence[Alteration]) -> str:
    """
    Base name (before registry suffixing) of a flattened heptatonic scale.
    
    Exact diatonic patterns keep their mode name. Anything else gets up to
    two structural descriptors (or "Modified") before the closest mode,
    followed by its earliest significant flattening, e.g. "(4th↓2)".
    """
    mode = exact_mode(intervals)
    if mode:
        return mode
    
    closest, _ = closest_mode(intervals)
    descriptors = structural_descriptors(intervals)[:2]
    if descriptors:
        name = "".join(descriptors) + " " + closest
    else:
        name = "Modified " + closest
    
    significant = sorted(
        (alt for alt in alterations if alt.kind == "flatten" and (alt.steps or 0) >= 2),
        key=lambda alt: alt.degree,
    )
    if significant:
        main = significant[0]
        name += f" ({main.degree_name[:3]}↓{main.steps})"
    return name


def flattened_description(
    intervals: Sequence[int],
    alterations: Sequence[Alteration],
    min_step: int,
) -> str:
    """Prose account of how a scale was flattened from Hyperlydian."""
    floor = f"All intervals are at least {_plural(min_step)}."
    if not alterations:
        return f"Original hyperlydian scale with no alterations. {floor}"
    
    deepest: Dict[int, int] = {}
    for alt in alterations:
        deepest[alt.degree] = max(deepest.get(alt.degree, 0), alt.steps or 0)
    
    clauses = [
        f"{FLATTENING_TERMS.get(steps, 'maximally diminishing')} the {ordinal(degree)} "
        f"degree by {_plural(steps)}"
        for degree, steps in deepest.items()
    ]
    description = f"Derived from hyperlydian by {_join_clauses(clauses)}."
    
    counts = Counter(intervals)
    if len(counts) <= 2:
        description += " Results in a scale with high interval uniformity."
    elif len(counts) >= 5:
        description += " Results in a scale with highly varied intervals."
    
    if counts[2] >= 2:
        description += " Contains multiple whole-tone intervals."
    elif counts[6] >= 1:
        description += " Contains augmented intervals."
    return f"{description} {floor}"


def _mode_character(intervals: Sequence[int]) -> str:
    """Brightness word from the mean height of the inner degrees."""
    inner = degrees_from_intervals(intervals)[1:-1]
    height = float(np.mean(inner))
    if height > 16.0:
        return "Bright"
    if height > 15.3:
        return "Neutral"
    if height > 14.7:
        return "Mild"
    return "Dark"


def _mode_tension(intervals: Sequence[int]) -> str:
    if 6 in intervals:
        return "Open"
    if sum(1 for i in intervals if i <= 3) >= 4:
        return "Dense"
    if sum(1 for i in intervals if i >= 5) >= 5:
        return "Wide"
    return "Balanced"


def mode_name(parent: Scale, rotation: int) -> Tuple[str, str]:
    """
    Base name and description of one rotation of a heptatonic parent.
    
    Near-diatonic parents (five or more 3- and 5-step intervals) name the
    rotation after its closest mode; others also get a brightness and a
    tension word.
    """
    rotated = rotate(parent.intervals, rotation)
    closest, _ = closest_mode(rotated)
    diatonic_like = sum(1 for i in parent.intervals if i in (3, 5)) >= 5
    
    if diatonic_like:
        base = closest
        description = f"Traditional {base} mode structure."
    else:
        character = _mode_character(rotated)
        tension = _mode_tension(rotated)
        base = f"{character} {tension} {closest}"
        description = (
            f"A {character.lower()}, {tension.lower()} mode derived from {parent.name}."
        )
    
    descriptors = structural_descriptors(parent.intervals)[:2]
    if descriptors:
        name = f"{''.join(descriptors)} {base}"
    else:
        name = f"Modified {base}"
    return name, f"Mode {rotation} of {parent.name}. {description}"


def identify_base_mode(intervals: Sequence[int]) -> str:
    """Closest diatonic mode, or "Modal" when nothing is near."""
    mode = exact_mode(intervals)
    if mode:
        return mode
    closest, distance = closest_mode(intervals)
    if 0 <= distance <= MODAL_DISTANCE_LIMIT:
        return closest
    return "Modal"


def mutation_pattern(mutated: Sequence[int], size: int = 7) -> str:
    """Shape of the set of mutated degrees."""
    degrees = sorted(set(mutated))
    if all(b == a + 1 for a, b in zip(degrees, degrees[1:])):
        return "consecutive"
    if len(degrees) >= 3:
        step = degrees[1] - degrees[0]
        if all(degrees[i] == (degrees[0] + i * step) % size for i in range(len(degrees))):
            return "alternating"
    half = len(degrees) // 2
    if all(degrees[-1 - i] == (size - degrees[i]) % size for i in range(half)):
        return "symmetrical"
    return "distributed"


def exploration_name(
    intervals: Sequence[int],
    mutated: Sequence[int],
    path: Sequence[int],
) -> str:
    """
    Base name of a scale found by non-sequential flattening.
    
    Combines the spread of mutated degrees (Mono/Quasi/Semi/Nu/Tri/Poly),
    the closest mode, an interval-colour prefix and, for paths of three or
    more moves, a Zigzag or Cascade marker.
    """
    mutated_set = sorted(set(mutated))
    pattern = ""
    if len(mutated_set) == 1:
        pattern = "Mono"
    elif len(mutated_set) == 2:
        distance = abs(mutated_set[0] - mutated_set[1])
        pattern = {1: "Quasi", 6: "Quasi", 2: "Semi", 5: "Semi", 3: "Nu", 4: "Nu"}[distance]
    elif len(mutated_set) == 3:
        pattern = "Tri"
    elif len(mutated_set) >= 4:
        pattern = "Poly"
    
    counts = Counter(intervals)
    prefix = ""
    if counts[4] >= 2:
        prefix = "Neutral"
    elif counts[3] >= 3:
        prefix = "Soft"
    elif counts[6] >= 2:
        prefix = "Super"
    elif counts[5] >= 5:
        prefix = "Hard"
    if all(intervals[i] == intervals[-1 - i] for i in range(len(intervals) // 2)):
        prefix = f"{prefix} Symmetric".strip()
    
    name = pattern + identify_base_mode(intervals)
    if prefix:
        name = f"{prefix} {name}"
    
    if len(path) >= 3:
        moves = [b - a for a, b in zip(path, path[1:])]
        if all(abs(move) in (2, 5) for move in moves):
            name = "Zigzag " + name
        if all(np.sign(move) == np.sign(moves[0]) for move in moves):
            name = "Cascade " + name
    return name


def exploration_description(intervals: Sequence[int], alterations: Sequence[Alteration]) -> str:
    """Prose account of a non-sequentially flattened scale."""
    per_degree = Counter(alt.degree for alt in alterations)
    labels = ["1st (tonic)"] + [ordinal(i) for i in range(1, 7)]
    clauses = [f"the {labels[degree]} by {_plural(n)}" for degree, n in per_degree.items()]
    description = f"Derived from hyperlydian by flattening {_join_clauses(clauses)}."
    
    if len(per_degree) > 1:
        description += f" Follows a {mutation_pattern(list(per_degree))} flattening pattern."
    
    counts = Counter(intervals)
    features = []
    if counts[3] >= 3:
        features.append("multiple minor seconds")
    if counts[4] >= 2:
        features.append("neutral seconds")
    if counts[6] >= 1:
        features.append("augmented seconds")
    if counts[7] >= 1:
        features.append("superaugmented seconds")
    if features:
        description += " Contains " + ", ".join(features) + "."
    return description


CARDINALITY_TYPES = {5: "pentatonic", 6: "hexatonic", 8: "octatonic", 9: "nonatonic"}


def spacing_prefix(intervals: Sequence[int]) -> str:
    """Equi / Iso / Hetero by the number of distinct step sizes."""
    distinct = len(set(intervals))
    if distinct == 1:
        return "Equi"
    if distinct == 2:
        return "Iso"
    return "Hetero"


def cardinality_name(intervals: Sequence[int], alterations: Sequence[Alteration]) -> str:
    """
    Base name of a flattened variable-cardinality scale.
    
    The interval-colour prefix and alteration count are followed by how far
    each inner degree was flattened, e.g. "Soft multi-altered octatonic
    (2nd↓1 5th↓3)".
    """
    counts = Counter(intervals)
    if len(counts) == 1:
        prefix = "Equi"
    elif len(counts) == 2:
        prefix = "Iso" + "".join(str(size) for size in sorted(counts))
    elif counts[3] >= 2:
        prefix = "Soft"
    elif counts[4] >= 2:
        prefix = "Neutral"
    elif counts[5] >= 2:
        prefix = "Hard"
    elif counts[6] >= 1:
        prefix = "Super"
    else:
        prefix = "Hetero"
    
    if len(alterations) == 1:
        descriptor = "modified "
    elif len(alterations) == 2:
        descriptor = "dual-altered "
    else:
        descriptor = "multi-altered "
    name = f"{prefix} {descriptor}{CARDINALITY_TYPES[len(intervals)]}"
    
    per_degree = Counter(alt.degree for alt in alterations)
    if per_degree:
        marks = " ".join(f"{ordinal(degree)}↓{n}" for degree, n in sorted(per_degree.items()))
        name += f" ({marks})"
    return name


def cardinality_description(
    intervals: Sequence[int],
    alterations: Sequence[Alteration],
    base_name: str,
) -> str:
    """Prose account of a flattened variable-cardinality scale."""
    per_degree = Counter(alt.degree for alt in alterations)
    clauses = [
        f"flattening the {ordinal(degree)} degree by {_plural(n)}"
        for degree, n in per_degree.items()
    ]
    sizes = ", ".join(str(size) for size in sorted(set(intervals)))
    return (
        f"{len(intervals)}-note scale derived from {base_name} by {_join_clauses(clauses)}. "
        f"Contains intervals of {sizes} steps."
    )


class ScaleNamer:
    """
    Names and assembles scales for one generation run.
    
    Every published name passes through the namer's registry, so names
    are unique across all families of the run.
    """
    
    def __init__(self, registry: Optional[NameRegistry] = None):
        """
        Initialize namer.
        
        Args:
            registry: Name registry to share; a fresh one by default
        """
        self.registry = registry if registry is not None else NameRegistry()
    
    def claim(self, name: str) -> str:
        """Register a name and return its unique form."""
        return self.registry.claim(name)
    
    def build(
        self,
        name: str,
        family: str,
        degrees: Optional[Sequence[int]] = None,
        intervals: Optional[Sequence[int]] = None,
        description: str = "",
        alterations: Sequence[Alteration] = (),
        properties: Optional[Dict[str, Scalar]] = None,
        lineage: Optional[str] = None,
    ) -> Scale:
        """
        Assemble a published scale.
        
        Args:
            name: Desired name; suffixed if already taken this run
            family: Generator family, stored as properties["type"]
            degrees: Scale degrees (derived from intervals if omitted)
            intervals: Scale intervals (derived from degrees if omitted)
            description: Prose description
            alterations: Alteration log
            properties: Extra scalar properties
            lineage: Derivation lineage passed to the categorizer
            
        Returns:
            Immutable Scale
            
        Raises:
            ScaleInvariantError: If the degrees/intervals are not a valid
                octave scale
        """
        if degrees is None and intervals is None:
            raise ValueError("Either degrees or intervals is required")
        if degrees is None:
            degrees = degrees_from_intervals(intervals)
        if intervals is None:
            intervals = intervals_from_degrees(degrees)
        degrees = tuple(int(d) for d in degrees)
        intervals = tuple(int(i) for i in intervals)
        
        check_scale_invariants(degrees, intervals)
        
        unique = self.claim(name)
        if unique != name:
            logger.debug("scale_name_suffixed", requested=name, assigned=unique)
        
        return Scale(
            name=unique,
            degrees=degrees,
            intervals=intervals,
            alterations=tuple(alterations),
            categories=categorize(degrees, intervals, lineage),
            properties={"type": family, **(properties or {})},
            description=description,
        )
