"""
Historical European temperaments approximated in 31-EDO, with their
seven rotational modes.
"""

from dataclasses import dataclass
from typing import List, Tuple

from edo31.core.logging import get_logger
from edo31.scales.intervals import intervals_from_degrees, rotate
from edo31.scales.models import Alteration, Scale
from edo31.scales.naming import MODE_NAMES, ScaleNamer

logger = get_logger(__name__)


@dataclass(frozen=True)
class Temperament:
    name: str
    degrees: Tuple[int, ...]
    era: str
    qualities: str


TEMPERAMENTS = (
    Temperament("Quarter-comma Meantone", (0, 5, 10, 13, 18, 23, 28, 31),
                "Renaissance/Baroque", "Pure major thirds, wolf fifth"),
    Temperament("Sixth-comma Meantone", (0, 5, 10, 15, 18, 23, 28, 31),
                "Baroque", "Better fifths than 1/4-comma, still good thirds"),
    Temperament("Werckmeister III", (0, 5, 10, 15, 18, 23, 27, 31),
                "Late Baroque", "Well-temperament with varying key colors"),
    Temperament("Kirnberger III", (0, 5, 9, 14, 18, 23, 27, 31),
                "Classical", "Pure fifths in most common keys"),
    Temperament("Just Intonation Major", (0, 5, 10, 13, 18, 23, 28, 31),
                "Theoretical", "Approximates pure 5-limit just intonation ratios"),
    Temperament("Pythagorean", (0, 5, 10, 15, 18, 23, 28, 31),
                "Medieval", "Chain of pure fifths, sharp major thirds"),
)


def generate_historical_temperaments(namer: ScaleNamer) -> List[Scale]:
    """
    Generate each temperament followed by its modes.
    
    Rotation k is named after the k-th traditional mode, so the
    temperament itself stands in the Ionian position.
    """
    scales = []
    for temperament in TEMPERAMENTS:
        intervals = intervals_from_degrees(temperament.degrees)
        base = namer.build(
            temperament.name,
            family="historical-temperament",
            degrees=temperament.degrees,
            description=f"31-EDO approximation of {temperament.name}.",
            properties={
                "era": temperament.era,
                "qualities": temperament.qualities,
                "mode": MODE_NAMES[0],
            },
        )
        scales.append(base)
        
        for rotation in range(1, len(intervals)):
            mode = MODE_NAMES[rotation % len(MODE_NAMES)]
            scales.append(namer.build(
                f"{temperament.name} {mode}",
                family="historical-temperament",
                intervals=rotate(intervals, rotation),
                alterations=(Alteration(kind="mode", source=base.name, rotation=rotation),),
                description=f"{mode} mode of the {temperament.name} temperament.",
                properties={
                    "era": temperament.era,
                    "qualities": temperament.qualities,
                    "baseTemperament": temperament.name,
                    "mode": mode,
                },
            ))
    
    logger.info("historical_temperaments_generated", count=len(scales))
    return scales
