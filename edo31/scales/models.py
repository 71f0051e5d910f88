"""
Scale records.

Records are immutable; every generator builds a fresh record for each
candidate instead of copying and editing its parent.
"""

from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Scalar = Union[bool, int, float, str]


class Alteration(BaseModel):
    """One entry of a scale's alteration log."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    
    kind: Literal["flatten", "mode", "variant", "transform"] = "flatten"
    degree: Optional[int] = None
    degree_name: Optional[str] = None
    steps: Optional[int] = None
    source: Optional[str] = None
    rotation: Optional[int] = None


class Scale(BaseModel):
    """
    A published scale.
    
    Degrees run from 0 to 31 inclusive and intervals are the consecutive
    differences between them.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    
    name: str
    degrees: Tuple[int, ...]
    intervals: Tuple[int, ...]
    alterations: Tuple[Alteration, ...] = ()
    categories: Dict[str, List[str]] = Field(default_factory=dict)
    properties: Dict[str, Scalar] = Field(default_factory=dict)
    description: str = ""
    
    @property
    def note_count(self) -> int:
        """Number of distinct notes (octave excluded)."""
        return len(self.degrees) - 1
    
    @property
    def family(self) -> Optional[str]:
        """Generator family recorded in the properties, if any."""
        value = self.properties.get("type")
        return str(value) if value is not None else None
    
    def to_dict(self) -> dict:
        """Serialize with camelCase keys, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
