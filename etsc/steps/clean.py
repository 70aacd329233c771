"""Output directory cleanup."""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def clean_output_dir(out_dir):
    """Remove ``out_dir`` and everything below it. A missing directory is fine."""
    out_dir = Path(out_dir)
    if not out_dir.exists():
        return
    logger.debug("Removing %s", out_dir)
    if out_dir.is_dir() and not out_dir.is_symlink():
        shutil.rmtree(out_dir)
    else:
        out_dir.unlink()
