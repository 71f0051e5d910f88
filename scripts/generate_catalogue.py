"""
Generate the 31-EDO scale catalogue.

Run this script to write every JSON document to the output directory:
    python scripts/generate_catalogue.py [output_dir]

Settings (step bounds, exploration limits, chord output) are read from
EDO31_* environment variables.
"""

import sys
from pathlib import Path

# Add project root to path
project_path = Path(__file__).parent.parent
sys.path.insert(0, str(project_path))

from edo31.catalogue import CatalogueRun, CatalogueWriter
from edo31.core.exceptions import Edo31Error
from edo31.core.logging import get_logger

logger = get_logger(__name__)


def main():
    """Generate and write the catalogue."""
    output_dir = sys.argv[1] if len(sys.argv) > 1 else None
    logger.info("Starting catalogue generation...")
    
    try:
        catalogue = CatalogueRun().run()
        written = CatalogueWriter(output_dir=output_dir).write(catalogue)
        logger.info("Catalogue generation complete!")
        print(f"✓ Wrote {len(catalogue.all_scales())} scales to {len(written)} files")
        for path in written:
            print(f"  {path}")
        
    except Edo31Error as e:
        logger.exception("Catalogue generation failed", error=e.message, code=e.code)
        print(f"✗ Catalogue generation failed: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
