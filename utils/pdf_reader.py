import logging
from pathlib import Path

from pypdf import PdfReader

from utils.errors import DocumentError

logger = logging.getLogger(__name__)


def extract_text(pdf_path) -> str:
    """
    Extract the text of every page of a PDF, pages joined by newlines.

    Raises:
        DocumentError: if the file cannot be opened or parsed.
    """
    path = Path(pdf_path)
    try:
        stream = path.open("rb")
    except OSError as e:
        raise DocumentError(f"Could not read PDF file: {e}") from e

    with stream:
        try:
            reader = PdfReader(stream)
            texts = []
            for page in reader.pages:
                texts.append(page.extract_text() or "")
        except Exception as e:
            raise DocumentError(f"Could not parse PDF content: {e}") from e

    logger.info("Read %d page(s) from %s", len(texts), path.name)
    return "\n".join(texts)
