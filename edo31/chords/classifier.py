"""
Chord classification from consecutive intervals.

31-EDO chords rarely land on exact 12-EDO sizes, so every rule works on
tolerant step bands rather than exact values. Rules are checked in order
and the first match wins.
"""

from typing import List, Sequence


def _band(low: int, high: int):
    """Inclusive step-range predicate."""
    return lambda steps: low <= steps <= high


is_minor_second_like = _band(2, 4)
is_major_second_like = _band(5, 6)
is_minor_third_like = _band(7, 9)
is_major_third_like = _band(10, 11)
is_fourth_like = _band(12, 14)
is_fifth_like = _band(18, 19)
is_major_sixth_like = _band(23, 24)
is_minor_seventh_like = _band(25, 27)
is_major_seventh_like = _band(28, 30)

# Span of the outer interval of a triad that still reads as a fifth
FIFTH_SPAN = (17, 20)

DYAD_BANDS = [
    (6, "second"),
    (11, "third"),
    (14, "fourth"),
    (17, "tritone"),
    (19, "fifth"),
    (24, "sixth"),
    (30, "seventh"),
]

INTERVAL_TYPES = {
    3: "minor second",
    4: "neutral second",
    5: "major second",
    6: "supermajor second",
    7: "subminor third",
    8: "minor third",
    9: "neutral third",
    10: "major third",
    11: "supermajor third",
    12: "subperfect fourth",
    13: "perfect fourth",
    14: "superperfect fourth",
    15: "diminished fifth",
    16: "neutral tritone",
    17: "diminished fifth",
    18: "perfect fifth",
    19: "augmented fifth",
    20: "subminor sixth",
    21: "minor sixth",
    22: "neutral sixth",
    23: "major sixth",
    24: "supermajor sixth",
    25: "subminor seventh",
    26: "minor seventh",
    27: "neutral seventh",
    28: "major seventh",
    31: "perfect octave",
}

DEGREE_FUNCTIONS = ["tonic", "supertonic", "mediant", "subdominant", "dominant", "submediant"]


def interval_type(steps: int) -> str:
    """Interval quality name, or "<n> steps" for sizes without one."""
    return INTERVAL_TYPES.get(steps, f"{steps} steps")


def function_from_degree(degree: int, major_like: bool) -> str:
    """
    Harmonic function of a chord built on a scale degree.
    
    The seventh degree is a leading tone in major-like scales and a
    subtonic otherwise.
    """
    if 0 <= degree < len(DEGREE_FUNCTIONS):
        return DEGREE_FUNCTIONS[degree]
    if degree == 6:
        return "leading tone" if major_like else "subtonic"
    return "unknown"


def _is_unclassified(label: str) -> bool:
    return label == "mixed" or label.startswith("mixed (")


def _classify_dyad(steps: int) -> str:
    for upper, label in DYAD_BANDS:
        if steps <= upper:
            return label
    return "octave"


def _classify_triad(first: int, second: int) -> str:
    total = first + second
    spans_fifth = FIFTH_SPAN[0] <= total <= FIFTH_SPAN[1]
    
    if is_major_third_like(first) and is_minor_third_like(second) and spans_fifth:
        if total > 19:
            return "augmented major"
        if total < 18:
            return "diminished major"
        return "major"
    if is_minor_third_like(first) and is_major_third_like(second) and spans_fifth:
        if total > 19:
            return "augmented minor"
        if total < 18:
            return "diminished minor"
        return "minor"
    if first == 9 and second == 9:
        return "neutral"
    if is_minor_third_like(first) and is_minor_third_like(second):
        return "diminished"
    if is_major_third_like(first) and is_major_third_like(second):
        return "augmented"
    if is_fourth_like(first) and is_major_second_like(second) and spans_fifth:
        return "sus4"
    if is_major_second_like(first) and is_fourth_like(second) and spans_fifth:
        return "sus2"
    if is_fourth_like(first) and is_fourth_like(second):
        return "quartal"
    if is_minor_second_like(first) or is_minor_second_like(second):
        return "secundal"
    if 17 <= total <= 19:
        if first <= 6 or second <= 6:
            return "quintal-secundal"
        if is_fourth_like(first) or is_fourth_like(second):
            return "mixed quartal"
    return ""


def _classify_seventh(intervals: Sequence[int]) -> str:
    triad = get_chord_type(intervals[:2])
    third = intervals[2]
    full = sum(intervals[:3])
    
    if triad == "major":
        if is_major_seventh_like(full):
            return "major seventh"
        if is_minor_seventh_like(full):
            return "dominant seventh"
        if is_major_sixth_like(full):
            return "major sixth"
        if is_fifth_like(third):
            return "major add11"
        if is_major_second_like(third):
            return "major add9"
    elif triad == "minor":
        if is_major_seventh_like(full):
            return "minor-major seventh"
        if is_minor_seventh_like(full):
            return "minor seventh"
        if is_major_sixth_like(full):
            return "minor sixth"
        if is_fifth_like(third):
            return "minor add11"
        if is_major_second_like(third):
            return "minor add9"
    elif triad == "diminished":
        if is_minor_seventh_like(full):
            return "half-diminished seventh"
        if 22 <= full <= 25:
            return "diminished seventh"
        if is_major_sixth_like(full):
            return "diminished add sixth"
    elif triad == "augmented":
        if is_major_seventh_like(full):
            return "augmented major seventh"
        if is_minor_seventh_like(full):
            return "augmented seventh"
        if is_major_sixth_like(full):
            return "augmented sixth"
    elif triad in ("sus4", "sus2"):
        if is_minor_seventh_like(full):
            return f"{triad} seventh"
        if is_major_seventh_like(full):
            return f"{triad} major seventh"
    elif triad == "quartal" and is_fourth_like(third):
        return "extended quartal"
    
    if _is_unclassified(triad):
        return ""
    if third == 9:
        return f"{triad} neutral seventh"
    return f"{triad} with extension"


def _classify_extended(intervals: Sequence[int]) -> str:
    base = get_chord_type(intervals[:3])
    fourth = intervals[3]
    if "seventh" in base or "sixth" in base:
        if is_major_second_like(fourth):
            return base.replace("seventh", "ninth").replace("sixth", "sixth-ninth")
        if is_fourth_like(fourth):
            return base.replace("seventh", "eleventh")
        if is_major_sixth_like(fourth):
            return base.replace("seventh", "thirteenth")
        return f"{base} extended"
    if "extension" not in base and not _is_unclassified(base):
        return f"{base} extended"
    return ""


def _structural_summary(intervals: Sequence[int]) -> str:
    thirds = [i for i in intervals if is_minor_third_like(i) or is_major_third_like(i)]
    fifths = [i for i in intervals if is_fifth_like(i)]
    fourths = [i for i in intervals if is_fourth_like(i)]
    seconds = [i for i in intervals if is_minor_second_like(i) or is_major_second_like(i)]
    
    has_fifth = bool(fifths) or 17 <= sum(intervals[:2]) <= 19
    has_seventh = any(is_minor_seventh_like(i) or is_major_seventh_like(i) for i in intervals)
    if len(intervals) >= 3:
        has_seventh = has_seventh or 25 <= sum(intervals[:3]) <= 30
    
    if thirds and has_fifth and has_seventh:
        return "tertian seventh"
    if thirds and has_fifth:
        return "tertian"
    if len(fourths) >= 2:
        return "quartal"
    if fifths:
        return "quintal"
    if len(seconds) >= 2:
        return "cluster"
    
    present: List[str] = []
    if seconds:
        present.append("seconds")
    if thirds:
        present.append("thirds")
    if fourths:
        present.append("fourths")
    if has_fifth:
        present.append("fifths")
    if has_seventh:
        present.append("sevenths")
    if present:
        return f"mixed ({', '.join(present)})"
    return "mixed"


def get_chord_type(intervals: Sequence[int]) -> str:
    """
    Name a chord from its consecutive intervals.
    
    Args:
        intervals: Steps between adjacent chord tones, lowest first
        
    Returns:
        Chord quality such as "major", "minor seventh" or
        "mixed (thirds, fifths)"; never empty
    
    Example:
        >>> get_chord_type([10, 8])
        'major'
        >>> get_chord_type([8, 10, 8])
        'minor seventh'
    """
    intervals = list(intervals)
    if not intervals:
        return "single note"
    if len(intervals) == 1:
        return _classify_dyad(intervals[0])
    
    if len(intervals) == 2:
        label = _classify_triad(intervals[0], intervals[1])
    elif len(intervals) == 3:
        label = _classify_seventh(intervals)
    else:
        label = _classify_extended(intervals)
    
    return label or _structural_summary(intervals)
