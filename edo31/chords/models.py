"""
Chord records.
"""

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Chord(BaseModel):
    """
    A chord built on one degree of a scale.
    
    Notes are absolute steps and may exceed 31 for upper-octave members;
    intervals are the consecutive differences between them.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    
    degree: int
    degree_roman: str
    chord_type: str = Field(alias="type")
    function: str
    notes: Tuple[int, ...]
    intervals: Tuple[int, ...]


class ChordSet(BaseModel):
    """Triads and seventh chords derived one way."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    
    triads: Tuple[Chord, ...] = ()
    sevenths: Tuple[Chord, ...] = ()


class ScaleChords(BaseModel):
    """Both derivations for one scale."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    
    traditional: ChordSet
    intervallic: ChordSet
    
    def to_dict(self) -> Dict:
        return self.model_dump(mode="json", by_alias=True)
