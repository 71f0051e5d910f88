"""
Catalogue generation, serialization and queries.
"""

from edo31.catalogue.run import Catalogue, CatalogueRun
from edo31.catalogue.writer import CatalogueWriter, family_metadata
from edo31.catalogue.query import filter_scales

__all__ = [
    'Catalogue',
    'CatalogueRun',
    'CatalogueWriter',
    'family_metadata',
    'filter_scales',
]
