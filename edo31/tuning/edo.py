"""
31-tone equal temperament: step, cent and frequency conversions.
"""

from typing import Union

import numpy as np


STEPS_PER_OCTAVE = 31
CENTS_PER_STEP = 1200.0 / STEPS_PER_OCTAVE

# Step 0 is middle C and A sits at step 23
REFERENCE_STEP = 23
REFERENCE_HZ = 440.0
BASE_OCTAVE = 4

NOTE_NAMES = [
    "C", "D♭♭", "C♯", "D♭", "C×", "D", "E♭♭", "D♯", "E♭", "D×", "E",
    "F♭", "E♯", "F", "G♭♭", "F♯", "G♭", "F×", "G", "A♭♭", "G♯",
    "A♭", "G×", "A", "B♭♭", "A♯", "B♭", "A×", "B", "C♭", "B♯",
]

INTERVAL_NAMES = {
    0: "Perfect Unison",
    1: "Super Unison",
    2: "Augmented Unison",
    3: "Minor Second",
    4: "Neutral Second",
    5: "Major Second",
    6: "Supermajor Second",
    7: "Subminor Third",
    8: "Minor Third",
    9: "Neutral Third",
    10: "Major Third",
    11: "Supermajor Third",
    12: "Sub Fourth",
    13: "Perfect Fourth",
    14: "Super Fourth",
    15: "Augmented Fourth",
    16: "Diminished Fifth",
    17: "Sub Fifth",
    18: "Perfect Fifth",
    19: "Super Fifth",
    20: "Subminor Sixth",
    21: "Minor Sixth",
    22: "Neutral Sixth",
    23: "Major Sixth",
    24: "Supermajor Sixth",
    25: "Harmonic Seventh",
    26: "Minor Seventh",
    27: "Neutral Seventh",
    28: "Major Seventh",
    29: "Supermajor Seventh",
    30: "Sub Octave",
    31: "Perfect Octave",
}

Numeric = Union[int, float, np.ndarray]


def step_to_cents(step: Numeric) -> Numeric:
    """Convert a step count to cents."""
    return step * CENTS_PER_STEP


def cents_to_step(cents: Numeric) -> Numeric:
    """Convert cents to a (possibly fractional) step count."""
    return cents / CENTS_PER_STEP


def step_to_frequency(
    step: Numeric,
    reference_step: int = REFERENCE_STEP,
    reference_hz: float = REFERENCE_HZ,
) -> Numeric:
    """
    Convert a step to a frequency in Hz.
    
    Args:
        step: Step number (0 = middle C); scalars or numpy arrays
        reference_step: Step that sounds at reference_hz
        reference_hz: Frequency of the reference step
        
    Returns:
        Frequency in Hz
    """
    cents = (np.asarray(step, dtype=float) - reference_step) * CENTS_PER_STEP
    freq = reference_hz * np.power(2.0, cents / 1200.0)
    if np.ndim(freq) == 0:
        return float(freq)
    return freq


def note_name(step: int) -> str:
    """Note name with octave number, e.g. 18 -> 'G4'."""
    octave = step // STEPS_PER_OCTAVE + BASE_OCTAVE
    return f"{NOTE_NAMES[step % STEPS_PER_OCTAVE]}{octave}"


def interval_name(steps: int) -> str:
    """Name of an interval up to the octave."""
    if steps in INTERVAL_NAMES:
        return INTERVAL_NAMES[steps]
    return INTERVAL_NAMES[steps % STEPS_PER_OCTAVE]
