import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_dir(path):
    p = Path(path)
    if not p.exists():
        p.mkdir(parents=True, exist_ok=True)
        logger.info("Created directory: %s", p)
    return p


def list_pdfs(directory):
    """Return the PDF files directly inside `directory`, sorted by name."""
    d = ensure_dir(directory)
    pdfs = []
    for p in sorted(d.iterdir()):
        if p.is_file() and p.suffix.lower() == ".pdf":
            pdfs.append(p)
        elif p.is_file():
            logger.info("Skipping non-PDF file: %s", p.name)
    return pdfs
