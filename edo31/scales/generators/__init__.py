"""
Scale generators.

Each generator takes the run's ScaleNamer plus explicit parameters and
returns a deterministic list of Scale records.
"""

from edo31.scales.generators.heptatonic import generate_heptatonic_scales, flatten_heptatonic
from edo31.scales.generators.exploration import (
    explore_flattenings,
    generate_variable_cardinality_scales,
)
from edo31.scales.generators.cultural import generate_cultural_scales
from edo31.scales.generators.mos import generate_mos_scales, generate_well_formed_scales
from edo31.scales.generators.hybrid import generate_hybrid_scales
from edo31.scales.generators.xenharmonic import generate_xenharmonic_scales
from edo31.scales.generators.historical import generate_historical_temperaments
from edo31.scales.generators.transformed import generate_transformed_scales

__all__ = [
    'generate_heptatonic_scales',
    'flatten_heptatonic',
    'explore_flattenings',
    'generate_variable_cardinality_scales',
    'generate_cultural_scales',
    'generate_mos_scales',
    'generate_well_formed_scales',
    'generate_hybrid_scales',
    'generate_xenharmonic_scales',
    'generate_historical_temperaments',
    'generate_transformed_scales',
]
