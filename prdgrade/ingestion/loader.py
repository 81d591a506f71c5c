"""PRD document loader — reads and writes PRD JSON files."""

from __future__ import annotations

from pathlib import Path

from prdgrade.logger import get_logger
from prdgrade.models.prd import PRDDocument

logger = get_logger(__name__)

DEFAULT_FILENAME = "PRD.json"


def load_prd_document(path: str | Path) -> PRDDocument:
    """Load a PRD from a JSON file.

    Raises FileNotFoundError for a missing file and pydantic
    ``ValidationError`` for malformed JSON or a document of the wrong shape.
    """
    path = Path(path)
    if path.is_dir():
        path = path / DEFAULT_FILENAME
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, encoding="utf-8") as f:
        doc = PRDDocument.model_validate_json(f.read())

    logger.info(
        "PRD loaded",
        file=path.name,
        document_id=doc.metadata.id,
        personas=len(doc.personas),
        user_stories=len(doc.user_stories),
    )
    return doc


def save_prd_document(doc: PRDDocument, path: str | Path) -> Path:
    """Write ``doc`` as camelCase JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(doc.model_dump_json(by_alias=True, exclude_none=True, indent=2))

    logger.info("PRD saved", path=str(path))
    return path
