"""
One catalogue generation run.

A run owns a fresh ScaleNamer, so names are unique across every family it
generates and never leak into another run.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from edo31.core.config import Settings, get_settings
from edo31.core.exceptions import GenerationError
from edo31.core.logging import get_logger
from edo31.scales.generators import (
    explore_flattenings,
    generate_cultural_scales,
    generate_heptatonic_scales,
    generate_historical_temperaments,
    generate_hybrid_scales,
    generate_mos_scales,
    generate_transformed_scales,
    generate_variable_cardinality_scales,
    generate_well_formed_scales,
    generate_xenharmonic_scales,
)
from edo31.scales.models import Scale
from edo31.scales.naming import ScaleNamer

logger = get_logger(__name__)


MODES = "modes"
CULTURAL_ETC = "culturalEtc"
EXTRA = "extra"

# Family key -> document it is written to, in generation order
FAMILY_DOCUMENTS: Dict[str, str] = {
    "modes": MODES,
    "nonSequentialHeptatonic": CULTURAL_ETC,
    "variableCardinality": CULTURAL_ETC,
    "cultural": CULTURAL_ETC,
    "mos": EXTRA,
    "wellFormed": EXTRA,
    "hybrid": EXTRA,
    "xenharmonic": EXTRA,
    "historical": EXTRA,
    "transformed": EXTRA,
}


@dataclass
class Catalogue:
    """Generated scales grouped by family key, in generation order."""
    families: Dict[str, List[Scale]] = field(default_factory=dict)
    
    @property
    def modes(self) -> List[Scale]:
        return self.families.get("modes", [])
    
    def document(self, name: str) -> Dict[str, List[Scale]]:
        """Families belonging to one output document."""
        return {
            key: scales
            for key, scales in self.families.items()
            if FAMILY_DOCUMENTS[key] == name
        }
    
    def all_scales(self) -> List[Scale]:
        return [scale for scales in self.families.values() for scale in scales]
    
    def counts(self) -> Dict[str, int]:
        return {key: len(scales) for key, scales in self.families.items()}


class CatalogueRun:
    """
    Generates every scale family for one catalogue.
    
    Families run in a fixed order (modes, then the cultural/exploratory
    families, then the extra families) so that earlier families win the
    unsuffixed form of a shared name.
    """
    
    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize run.
        
        Args:
            settings: Generation settings; the global settings by default
        """
        self.settings = settings or get_settings()
        self.namer = ScaleNamer()
        
        s = self.settings
        self._builders: Dict[str, Callable[[], List[Scale]]] = {
            "modes": lambda: generate_heptatonic_scales(
                self.namer, s.heptatonic_min_step, s.flatten_passes, s.stop_on_duplicate
            ),
            "nonSequentialHeptatonic": lambda: explore_flattenings(
                self.namer, s.min_step, s.max_step, s.exploration_max_depth, s.exploration_max_scales
            ),
            "variableCardinality": lambda: generate_variable_cardinality_scales(
                self.namer, s.min_step, s.max_step, s.cardinality_max_depth, s.exploration_max_scales
            ),
            "cultural": lambda: generate_cultural_scales(self.namer),
            "mos": lambda: generate_mos_scales(self.namer, min_step=s.min_step, max_step=s.max_step),
            "wellFormed": lambda: generate_well_formed_scales(
                self.namer, min_step=s.min_step, max_step=s.max_step
            ),
            "hybrid": lambda: generate_hybrid_scales(self.namer, s.min_step, s.max_step),
            "xenharmonic": lambda: generate_xenharmonic_scales(self.namer, s.min_step, s.max_step),
            "historical": lambda: generate_historical_temperaments(self.namer),
            "transformed": lambda: generate_transformed_scales(self.namer, s.min_step, s.max_step),
        }
    
    def generate_family(self, key: str) -> List[Scale]:
        """
        Generate one family with this run's namer.
        
        Raises:
            GenerationError: If the family key is unknown
        """
        if key not in self._builders:
            raise GenerationError(
                f"Unknown scale family '{key}'; expected one of {list(FAMILY_DOCUMENTS)}"
            )
        return self._builders[key]()
    
    def run(self) -> Catalogue:
        """Generate every family in order."""
        catalogue = Catalogue()
        for key in FAMILY_DOCUMENTS:
            catalogue.families[key] = self.generate_family(key)
        
        logger.info(
            "catalogue_generated",
            total=len(catalogue.all_scales()),
            unique_names=len(self.namer.registry),
            families=catalogue.counts(),
        )
        return catalogue
