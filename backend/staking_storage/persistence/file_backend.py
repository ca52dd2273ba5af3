"""
File Persistence Backend.

One pretty-printed JSON file per document inside the data directory.
Always written, whichever remote is active, so it doubles as the durable
mirror.
"""

import json
from pathlib import Path
from typing import Any, Union

from loguru import logger

from ..documents import Document


class FileBackend:
    """JSON file store for documents."""

    def __init__(self, data_dir: Union[str, Path]):
        """Initialize file backend.

        Args:
            data_dir: Directory holding the document files
        """
        self.data_dir = Path(data_dir)

    def path_for(self, document: Document) -> Path:
        return self.data_dir / document.file_name

    async def load(self, document: Document) -> Any:
        """Load a document, returning its default if missing or corrupt."""
        path = self.path_for(document)

        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No file for {document.key} at {path}, using default")
            return document.default
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return document.default

        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Corrupt JSON in {path}: {e}")
            return document.default

    async def save(self, document: Document, value: Any) -> None:
        """Write a document to disk.

        Raises:
            OSError: If the directory or file cannot be written
            TypeError: If the value is not JSON serializable
        """
        # Serialize first so a bad value never truncates the existing file
        content = json.dumps(value, indent=2, ensure_ascii=False)

        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(document)
        path.write_text(content, encoding="utf-8")
        logger.debug(f"Saved {document.key} to {path}")
