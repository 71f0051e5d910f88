"""
Consonance ratings for 31-EDO intervals and note sets.
"""

from typing import Iterable, List

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from edo31.tuning.edo import STEPS_PER_OCTAVE


# 0 = most dissonant, 10 = most consonant
CONSONANCE_RATINGS = {
    0: 10.0,
    1: 1.0,
    2: 0.5,
    3: 1.0,
    4: 1.5,
    5: 2.0,
    6: 1.5,
    7: 2.0,
    8: 7.0,
    9: 6.0,
    10: 8.0,
    11: 5.0,
    12: 5.5,
    13: 8.5,
    14: 5.0,
    15: 4.0,
    16: 4.0,
    17: 5.0,
    18: 9.0,
    19: 6.0,
    20: 5.5,
    21: 7.5,
    22: 6.5,
    23: 8.0,
    24: 5.5,
    25: 6.0,
    26: 6.5,
    27: 5.5,
    28: 5.0,
    29: 3.0,
    30: 2.0,
    31: 10.0,
}

# Lower bound of each description band, highest first
CONSONANCE_BANDS = [
    (9.0, "Extremely Consonant"),
    (8.0, "Very Consonant"),
    (7.0, "Consonant"),
    (6.0, "Moderately Consonant"),
    (5.0, "Somewhat Consonant"),
    (4.0, "Somewhat Dissonant"),
    (3.0, "Moderately Dissonant"),
    (2.0, "Dissonant"),
    (1.0, "Very Dissonant"),
]


class IntervalRating(BaseModel):
    """Rating of one note pair."""
    model_config = ConfigDict(frozen=True)
    
    note1: int
    note2: int
    steps: int
    rating: float


class ConsonanceReport(BaseModel):
    """Average consonance of a note set."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    
    rating: float
    description: str
    interval_ratings: List[IntervalRating] = Field(default_factory=list)


def consonance_rating(steps: int) -> float:
    """Rating of an interval, reduced to within the octave."""
    return CONSONANCE_RATINGS.get(steps % STEPS_PER_OCTAVE, 0.0)


def describe_consonance(rating: float) -> str:
    """Map an average rating onto its description band."""
    for lower, description in CONSONANCE_BANDS:
        if rating >= lower:
            return description
    return "Extremely Dissonant"


def overall_consonance(notes: Iterable[int]) -> ConsonanceReport:
    """
    Average consonance over every unordered pair of notes.
    
    Args:
        notes: Note steps; sets are sorted first so pair order is stable
        
    Returns:
        Report with the mean rating, its description band and each pair
    """
    if isinstance(notes, (set, frozenset)):
        notes = sorted(notes)
    notes = list(notes)
    
    if len(notes) < 2:
        return ConsonanceReport(rating=0.0, description="N/A")
    
    pairs = []
    for i, note1 in enumerate(notes):
        for note2 in notes[i + 1:]:
            steps = abs(note2 - note1) % STEPS_PER_OCTAVE
            pairs.append(IntervalRating(
                note1=note1, note2=note2, steps=steps, rating=consonance_rating(steps)
            ))
    
    average = float(np.mean([pair.rating for pair in pairs]))
    return ConsonanceReport(
        rating=average,
        description=describe_consonance(average),
        interval_ratings=pairs,
    )
