"""
Cultural approximations: maqam, raga, blues and gamelan scales.

Each family is a fixed table of base scales plus variant rules. A variant
is a list of (degree index, delta) edits and is kept only when its
intervals stay within the family's bounds and it differs from its base.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from edo31.core.logging import get_logger
from edo31.scales.intervals import intervals_from_degrees, ordinal, within_bounds
from edo31.scales.models import Alteration, Scale
from edo31.scales.naming import ScaleNamer

logger = get_logger(__name__)


Edit = Tuple[int, int]

MAQAM_BOUNDS = (3, 7)
RAGA_FORM_BOUNDS = (1, 12)
BLUES_BOUNDS = (2, 9)


@dataclass(frozen=True)
class VariantRule:
    suffix: str
    edits: Tuple[Edit, ...]
    description: str


@dataclass(frozen=True)
class CulturalScale:
    name: str
    degrees: Tuple[int, ...]
    description: str
    family: str
    origin: str
    variants: Tuple[VariantRule, ...] = field(default=())


MAQAMS = (
    CulturalScale("Rast", (0, 5, 9, 13, 18, 23, 27, 31),
                  "The foundational maqam with neutral third approximation.",
                  "Rast family", "Middle Eastern", (
                      VariantRule("Suznak", ((6, -1),), "Rast with minor 7th."),
                      VariantRule("Mahur", ((1, 1),), "Rast with major 2nd."),
                  )),
    CulturalScale("Bayati", (0, 4, 9, 13, 18, 22, 27, 31),
                  "Popular maqam with a neutral second.",
                  "Bayati family", "Middle Eastern", (
                      VariantRule("Shuri", ((4, -1),), "Bayati with lowered 5th."),
                      VariantRule("Husseini", ((3, -1),), "Bayati with flattened 4th."),
                  )),
    CulturalScale("Hijaz", (0, 3, 9, 13, 18, 21, 27, 31),
                  "Distinctive maqam with augmented second.",
                  "Hijaz family", "Middle Eastern", (
                      VariantRule("Kar", ((5, -1),), "Hijaz with minor 6th."),
                      VariantRule("Kar-Kurd", ((0, 0), (5, -1)), "Hijaz variant with minor 6th."),
                  )),
    CulturalScale("Saba", (0, 3, 6, 12, 18, 21, 27, 31),
                  "Expressive maqam with lowered 4th degree.",
                  "Saba family", "Middle Eastern", (
                      VariantRule("Zamzam", ((5, 1),), "Saba with raised 6th."),
                  )),
    CulturalScale("Sikah", (0, 4, 9, 14, 18, 22, 27, 31),
                  "Maqam built on the neutral 3rd degree.",
                  "Sikah family", "Middle Eastern", (
                      VariantRule("Huzam", ((4, -1),), "Sikah with lowered 5th."),
                  )),
    CulturalScale("Nahawand", (0, 3, 8, 13, 18, 21, 26, 31),
                  "Maqam similar to the Western minor scale.",
                  "Nahawand family", "Middle Eastern", (
                      VariantRule("Kurd", ((1, -1),), "Nahawand with minor 2nd."),
                  )),
)

RAGAS = (
    CulturalScale("Bilawal", (0, 5, 10, 13, 18, 23, 28, 31),
                  "Equivalent to the Western major scale.", "Bilawal thaat", "North Indian"),
    CulturalScale("Kafi", (0, 5, 8, 13, 18, 23, 26, 31),
                  "Similar to Dorian mode with flat 3rd and 7th.", "Kafi thaat", "North Indian"),
    CulturalScale("Bhairavi", (0, 3, 8, 13, 18, 21, 26, 31),
                  "Similar to Phrygian mode with all notes flattened except Sa and Pa.",
                  "Bhairavi thaat", "North Indian"),
    CulturalScale("Kalyan", (0, 5, 10, 15, 18, 23, 28, 31),
                  "Similar to Lydian mode with sharp 4th.", "Kalyan thaat", "North Indian"),
    CulturalScale("Marwa", (0, 3, 10, 15, 18, 21, 28, 31),
                  "Distinctive scale with sharp 4th and flat 2nd and 6th.",
                  "Marwa thaat", "North Indian"),
    CulturalScale("Poorvi", (0, 3, 8, 15, 18, 21, 28, 31),
                  "Similar to Marwa but with flat 3rd.", "Poorvi thaat", "North Indian"),
    CulturalScale("Todi", (0, 3, 8, 15, 18, 21, 26, 31),
                  "Complex scale with flat 2nd, 3rd, 6th and sharp 4th.",
                  "Todi thaat", "North Indian"),
    CulturalScale("Mayamalavagowla", (0, 5, 8, 13, 18, 21, 26, 31),
                  "Fundamental scale in Carnatic music with flat 3rd and 6th.",
                  "Melakarta raga", "South Indian"),
    CulturalScale("Gandhari", (0, 4, 10, 13, 18, 23, 28, 31),
                  "Raga with neutral 2nd (11/10 ratio) approximation.",
                  "Microtonal raga", "Indian"),
    CulturalScale("Kausika", (0, 5, 9, 13, 18, 23, 28, 31),
                  "Raga with neutral 3rd (27/22 ratio) approximation.",
                  "Microtonal raga", "Indian"),
    CulturalScale("Pancama", (0, 5, 10, 13, 17, 23, 28, 31),
                  "Raga with subtle variations in the 5th.", "Microtonal raga", "Indian"),
)

# Degree index left out of the ascending form
AROHA_OMISSIONS = {"Bilawal": 2, "Kafi": 2, "Bhairavi": 6, "Kalyan": 3, "Todi": 2}
# Ragas whose descending form gains a passing tone between the 4th and 5th
AVAROHA_PASSING = frozenset({"Kalyan", "Todi"})

BLUES = (
    CulturalScale("Traditional Blues", (0, 3, 8, 13, 18, 23, 31),
                  "Six-note blues scale with characteristic blue notes.", "blues", "American"),
    CulturalScale("Microtonal Blues", (0, 4, 8, 13, 18, 22, 31),
                  "Blues scale with neutral thirds and sevenths for more authentic blue notes.",
                  "blues", "American"),
    CulturalScale("Quarter-tone Blues", (0, 3, 6, 13, 15, 18, 23, 31),
                  "Blues scale incorporating quarter-tone inflections.",
                  "blues", "American/Experimental"),
    CulturalScale("Harmonic Blues", (0, 5, 8, 13, 18, 21, 28, 31),
                  "Blues scale featuring harmonically richer intervals.", "blues", "Jazz/Fusion"),
    CulturalScale("Debop", (0, 3, 5, 10, 13, 18, 21, 26, 31),
                  "Jazz scale combining elements of major and minor with added tensions.",
                  "jazz", "Bebop"),
)

# Base blues scales that get blue-note variants
BLUE_NOTE_BASES = ("Traditional Blues", "Microtonal Blues")
BLUE_THIRD, BLUE_SEVENTH, BLUE_FIFTH = 4, 26, 17

GAMELAN = (
    CulturalScale("Pelog", (0, 2, 7, 12, 18, 21, 26, 31),
                  "Approximation of the 7-tone Javanese Pelog scale.", "gamelan", "Javanese"),
    CulturalScale("Pelog Bem", (0, 2, 7, 12, 18, 26, 31),
                  "Pelog Bem variant (pathet bem) of the Javanese gamelan scale.",
                  "gamelan", "Javanese"),
    CulturalScale("Pelog Barang", (0, 2, 7, 18, 21, 26, 31),
                  "Pelog Barang variant (pathet barang) of the Javanese gamelan scale.",
                  "gamelan", "Javanese"),
    CulturalScale("Slendro", (0, 6, 12, 19, 25, 31),
                  "Approximation of the 5-tone Javanese Slendro scale with roughly equal divisions.",
                  "gamelan", "Javanese"),
    CulturalScale("Balinese Pelog", (0, 3, 7, 14, 18, 21, 26, 31),
                  "Approximation of the Balinese Pelog scale, which differs from Javanese Pelog.",
                  "gamelan", "Balinese"),
    CulturalScale("Sundanese Pelog", (0, 4, 8, 13, 18, 22, 26, 31),
                  "Approximation of the West Javanese Sundanese Pelog scale.",
                  "gamelan", "Sundanese"),
)


def apply_edits(degrees: Sequence[int], edits: Sequence[Edit]) -> Tuple[int, ...]:
    """Shift the indexed degrees by their deltas."""
    result = list(degrees)
    for index, delta in edits:
        result[index] += delta
    return tuple(result)


def is_valid_variant(
    base: Sequence[int],
    degrees: Sequence[int],
    bounds: Tuple[int, int],
) -> bool:
    """A variant must differ from its base and keep every interval in bounds."""
    if tuple(degrees) == tuple(base):
        return False
    return within_bounds(intervals_from_degrees(degrees), *bounds)


def _edit_log(edits: Sequence[Edit]) -> Tuple[Alteration, ...]:
    return tuple(
        Alteration(kind="variant", degree=index, degree_name=ordinal(index), steps=delta)
        for index, delta in edits
        if delta
    )


def _base(namer: ScaleNamer, scale: CulturalScale, family: str, name: str) -> Scale:
    return namer.build(
        name,
        family=family,
        degrees=scale.degrees,
        description=scale.description,
        properties={"family": scale.family, "origin": scale.origin},
    )


def _variant(
    namer: ScaleNamer,
    scale: CulturalScale,
    family: str,
    name: str,
    degrees: Sequence[int],
    description: str,
    edits: Sequence[Edit] = (),
    source: Optional[str] = None,
) -> Scale:
    alterations = _edit_log(edits) or (Alteration(kind="variant", source=source),)
    return namer.build(
        name,
        family=family,
        degrees=degrees,
        description=description,
        alterations=alterations,
        properties={"family": scale.family, "origin": scale.origin, "base": source or ""},
    )


def generate_maqam_scales(namer: ScaleNamer) -> List[Scale]:
    """Maqam bases and their modulation variants."""
    scales = []
    for maqam in MAQAMS:
        base = _base(namer, maqam, "maqam", f"Maqam {maqam.name}")
        scales.append(base)
        for rule in maqam.variants:
            degrees = apply_edits(maqam.degrees, rule.edits)
            if not is_valid_variant(maqam.degrees, degrees, MAQAM_BOUNDS):
                logger.debug("maqam_variant_rejected", maqam=maqam.name, variant=rule.suffix)
                continue
            scales.append(_variant(
                namer, maqam, "maqam", f"{base.name} {rule.suffix}", degrees,
                rule.description, rule.edits, base.name,
            ))
    return scales


def aroha(degrees: Sequence[int], omit: int) -> Tuple[int, ...]:
    """Ascending form: one degree left out."""
    return tuple(d for i, d in enumerate(degrees) if i != omit)


def avaroha(degrees: Sequence[int], passing_tone: bool) -> Tuple[int, ...]:
    """Descending form, optionally with a passing tone below the 5th."""
    if not passing_tone:
        return tuple(degrees)
    passing = (degrees[3] + degrees[4]) // 2
    return tuple(degrees[:4]) + (passing,) + tuple(degrees[4:])


def generate_raga_scales(namer: ScaleNamer) -> List[Scale]:
    """Raga bases plus aroha/avaroha forms for the ragas that define them."""
    scales = []
    for raga in RAGAS:
        base = _base(namer, raga, "raga", f"Raga {raga.name}")
        scales.append(base)
        if raga.name not in AROHA_OMISSIONS:
            continue
        
        ascending = aroha(raga.degrees, AROHA_OMISSIONS[raga.name])
        if is_valid_variant(raga.degrees, ascending, RAGA_FORM_BOUNDS):
            scales.append(_variant(
                namer, raga, "raga", f"{base.name} Aroha", ascending,
                f"Ascending form of {raga.name} omitting the "
                f"{ordinal(AROHA_OMISSIONS[raga.name])} degree.",
                source=base.name,
            ))
        
        descending = avaroha(raga.degrees, raga.name in AVAROHA_PASSING)
        if is_valid_variant(raga.degrees, descending, RAGA_FORM_BOUNDS):
            scales.append(_variant(
                namer, raga, "raga", f"{base.name} Avaroha", descending,
                f"Descending form of {raga.name} with a passing tone between the 4th and 5th.",
                source=base.name,
            ))
    return scales


def blue_note_rules(degrees: Sequence[int]) -> List[Tuple[str, Tuple[Edit, ...], str]]:
    """Blue third, seventh and fifth edits for a blues scale."""
    rules = [
        ("Blue Third", ((1, BLUE_THIRD - degrees[1]),), "blue third (neutral third)"),
        ("Blue Seventh", ((len(degrees) - 2, BLUE_SEVENTH - degrees[-2]),),
         "blue seventh (neutral seventh)"),
    ]
    if 18 in degrees:
        fifth = degrees.index(18)
        rules.append(("Blue Fifth", ((fifth, BLUE_FIFTH - 18),), "blue fifth (flattened fifth)"))
    return rules


def generate_blues_scales(namer: ScaleNamer) -> List[Scale]:
    """Blues and jazz bases plus blue-note variants."""
    scales = [_base(namer, blues, blues.family, blues.name) for blues in BLUES]
    for blues in BLUES:
        if blues.name not in BLUE_NOTE_BASES:
            continue
        for prefix, edits, label in blue_note_rules(blues.degrees):
            degrees = apply_edits(blues.degrees, edits)
            if not is_valid_variant(blues.degrees, degrees, BLUES_BOUNDS):
                continue
            scales.append(_variant(
                namer, blues, blues.family, f"{prefix} {blues.name}", degrees,
                f"{blues.name} with characteristic {label}.", edits, blues.name,
            ))
    return scales


def generate_gamelan_scales(namer: ScaleNamer) -> List[Scale]:
    """Pelog and slendro approximations."""
    return [_base(namer, scale, "gamelan", scale.name) for scale in GAMELAN]


def generate_cultural_scales(namer: ScaleNamer) -> List[Scale]:
    """Maqam, raga, blues and gamelan scales, in that order."""
    scales = (
        generate_maqam_scales(namer)
        + generate_raga_scales(namer)
        + generate_blues_scales(namer)
        + generate_gamelan_scales(namer)
    )
    logger.info("cultural_scales_generated", count=len(scales))
    return scales
