"""
Chord inversion and display folding.
"""

from typing import List, Sequence

from edo31.tuning.edo import STEPS_PER_OCTAVE


def find_optimal_inversion(notes: Sequence[int]) -> int:
    """Index of the rotation whose bass is lowest (first on ties)."""
    if len(notes) <= 1:
        return 0
    return min(range(len(notes)), key=lambda i: notes[i])


def rotate_up(notes: Sequence[int], inversion: int) -> List[int]:
    """Move `inversion` leading notes to the top, each an octave higher."""
    return list(notes[inversion:]) + [note + STEPS_PER_OCTAVE for note in notes[:inversion]]


def fold_to_octave(note: int) -> int:
    """Fold a note above the octave back into 1..31."""
    if note > STEPS_PER_OCTAVE:
        return ((note - 1) % STEPS_PER_OCTAVE) + 1
    return note


def invert_chord(notes: Sequence[int], inversion: int = 0, auto: bool = False) -> List[int]:
    """
    Voice a chord in a given inversion.
    
    Args:
        notes: Chord notes, root first
        inversion: Number of leading notes to move up an octave; values
            outside 1..len(notes)-1 leave the chord in root position
        auto: Pick the inversion with the lowest bass instead, ignoring
            `inversion`
        
    Returns:
        New note list folded into a single displayed octave. The input is
        not modified, and the folding is for voicing only.
    """
    if len(notes) <= 1:
        return list(notes)
    
    k = find_optimal_inversion(notes) if auto else inversion
    if not 0 < k < len(notes):
        k = 0
    return [fold_to_octave(note) for note in rotate_up(notes, k)]
