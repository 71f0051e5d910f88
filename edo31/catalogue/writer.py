"""
Catalogue serialization to static JSON documents.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from edo31.catalogue.run import CULTURAL_ETC, EXTRA, Catalogue
from edo31.chords.deriver import derive_chords
from edo31.core.config import settings
from edo31.core.exceptions import CatalogueError
from edo31.core.logging import get_logger
from edo31.scales.models import Scale

logger = get_logger(__name__)


MODES_FILE = "modes.json"
CULTURAL_ETC_FILE = "cultural_etc.json"
EXTRA_FILE = "extra_scales.json"
METADATA_FILE = "scale-families-metadata.json"
CHORDS_FILE = "chords.json"


def format_family_name(key: str) -> str:
    """camelCase family key to a display name ("wellFormed" -> "Well Formed")."""
    spaced = re.sub(r"([A-Z])", r" \1", key).strip()
    return spaced[:1].upper() + spaced[1:]


def family_metadata(catalogue: Catalogue) -> Dict[str, Dict[str, Any]]:
    """Display name and scale count for every non-empty family."""
    metadata = {}
    for key, scales in catalogue.families.items():
        if not scales:
            continue
        metadata[key] = {"name": format_family_name(key), "count": len(scales)}
    return metadata


def _serialize(scales: List[Scale]) -> List[Dict]:
    return [scale.to_dict() for scale in scales]


class CatalogueWriter:
    """
    Writes a catalogue as one JSON document per family group.
    
    Produces:
    - modes.json: flat array of heptatonic scales and modes
    - cultural_etc.json: {nonSequentialHeptatonic, variableCardinality, cultural}
    - extra_scales.json: {mos, wellFormed, hybrid, xenharmonic, historical, transformed}
    - scale-families-metadata.json: {key: {name, count}}
    - chords.json (optional): scale name -> traditional/intervallic chords
    """
    
    def __init__(self, output_dir: Optional[Union[str, Path]] = None, write_chords: Optional[bool] = None):
        """
        Initialize writer.
        
        Args:
            output_dir: Target directory (settings.output_dir by default)
            write_chords: Also write chords.json (settings.write_chords)
        """
        self.output_dir = Path(output_dir if output_dir is not None else settings.output_dir)
        self.write_chords = settings.write_chords if write_chords is None else write_chords
    
    def _write(self, filename: str, payload: Any) -> Path:
        path = self.output_dir / filename
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise CatalogueError(f"Failed to write {path}: {e}") from e
        logger.debug("catalogue_document_written", path=str(path))
        return path
    
    def write(self, catalogue: Catalogue) -> List[Path]:
        """
        Write every document for a catalogue.
        
        Args:
            catalogue: Generated catalogue
            
        Returns:
            Paths written, in order
            
        Raises:
            CatalogueError: If the directory or a file cannot be written
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CatalogueError(f"Cannot create output directory {self.output_dir}: {e}") from e
        
        written = [
            self._write(MODES_FILE, _serialize(catalogue.modes)),
            self._write(CULTURAL_ETC_FILE, {
                key: _serialize(scales)
                for key, scales in catalogue.document(CULTURAL_ETC).items()
            }),
            self._write(EXTRA_FILE, {
                key: _serialize(scales)
                for key, scales in catalogue.document(EXTRA).items()
            }),
            self._write(METADATA_FILE, family_metadata(catalogue)),
        ]
        
        if self.write_chords:
            chords = {
                scale.name: derive_chords(scale).to_dict()
                for scale in catalogue.all_scales()
            }
            written.append(self._write(CHORDS_FILE, chords))
        
        logger.info(
            "catalogue_written",
            output_dir=str(self.output_dir),
            files=[path.name for path in written],
        )
        return written
