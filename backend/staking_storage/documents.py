"""
Named JSON documents managed by the storage layer.

Each document has a logical key (used in the remote namespace), a file
name inside the data directory, and a default returned when neither the
remote nor the file holds a value.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict


@dataclass(frozen=True)
class Document:
    """A named JSON document."""
    key: str
    file_name: str
    default_factory: Callable[[], Any]

    @property
    def default(self) -> Any:
        # Fresh object per call so callers can mutate it
        return self.default_factory()


USERS = Document("users", "users.json", list)
REF_CODES = Document("refCodes", "ref-codes.json", dict)
APPROVALS = Document("approvals", "approvals.json", list)
COUNTDOWN_OVERRIDE = Document("countdownOverride", "countdown-override.json", lambda: None)

DOCUMENTS: Dict[str, Document] = {
    doc.key: doc for doc in (USERS, REF_CODES, APPROVALS, COUNTDOWN_OVERRIDE)
}


def get_document(key: str) -> Document:
    """Look up a document by logical key.

    Raises:
        KeyError: If the key is not a known document
    """
    try:
        return DOCUMENTS[key]
    except KeyError:
        raise KeyError(f"Unknown document: {key}") from None
