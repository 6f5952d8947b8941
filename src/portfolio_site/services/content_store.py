"""One-shot loader for the site's content document."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from portfolio_site.models.content import ContentDocument, ContentLoadError

logger = logging.getLogger(__name__)

__all__ = [
    "ContentStore",
    "get_content_path",
    "load_content",
    "parse_content",
]

_CONTENT_DIR_NAME = "content"
_CONTENT_FILE_NAME = "data.json"


def get_content_path() -> Path:
    """Return the content document path, allowing overrides via environment variable."""
    env_path = os.getenv("PORTFOLIO_CONTENT_PATH")
    if env_path:
        return Path(env_path).expanduser().resolve()

    project_root = Path(__file__).resolve().parents[3]
    return project_root / _CONTENT_DIR_NAME / _CONTENT_FILE_NAME


def parse_content(raw: str | bytes) -> ContentDocument:
    """Parse and validate a JSON content document.

    Raises:
        ContentLoadError: If *raw* is not JSON or does not match the schema.
    """
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ContentLoadError(f"Content is not valid JSON: {exc}") from exc

    try:
        return ContentDocument.model_validate(payload)
    except ValidationError as exc:
        raise ContentLoadError(
            f"Content does not match the schema ({exc.error_count()} errors): {exc}"
        ) from exc


def load_content(path: Path | None = None) -> ContentDocument:
    """Read and parse the content document at *path* (default: :func:`get_content_path`).

    Raises:
        ContentLoadError: If the file cannot be read or parsed.
    """
    content_path = path or get_content_path()
    try:
        raw = content_path.read_bytes()
    except OSError as exc:
        raise ContentLoadError(f"Cannot read content file {content_path}: {exc}") from exc
    return parse_content(raw)


class ContentStore:
    """Holds the content document once it has been fetched.

    The document is fetched at most once. A failed fetch is logged and leaves
    the store unloaded for good; there is no retry and no partial document.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self.document: ContentDocument | None = None
        self.error: ContentLoadError | None = None

    @property
    def path(self) -> Path:
        return self._path or get_content_path()

    @property
    def is_loaded(self) -> bool:
        return self.document is not None

    def load(self) -> ContentDocument | None:
        """Fetch the document if not already attempted; never raises."""
        if self.document is not None or self.error is not None:
            return self.document

        try:
            self.document = load_content(self.path)
        except ContentLoadError as exc:
            self.error = exc
            logger.exception("Failed to load content from %s", self.path)
            return None

        logger.info(
            "Loaded content: %d timeline entries, %d projects, %d publications",
            len(self.document.history),
            len(self.document.projects),
            len(self.document.publications),
        )
        return self.document
