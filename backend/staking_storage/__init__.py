"""
staking-storage - JSON document storage over Redis, Upstash REST or local files.
"""

from .config import Settings, settings
from .documents import DOCUMENTS, Document, get_document
from .persistence import RemoteBackend, RemoteBackendError
from .storage import (
    STORAGE_MODE,
    Storage,
    get_storage,
    read_approvals,
    read_countdown_override,
    read_ref_codes,
    read_users,
    reset_storage,
    write_approvals,
    write_countdown_override,
    write_ref_codes,
    write_users,
)

__all__ = [
    "Settings",
    "settings",
    "Document",
    "DOCUMENTS",
    "get_document",
    "RemoteBackend",
    "RemoteBackendError",
    "STORAGE_MODE",
    "Storage",
    "get_storage",
    "reset_storage",
    "read_users",
    "write_users",
    "read_ref_codes",
    "write_ref_codes",
    "read_approvals",
    "write_approvals",
    "read_countdown_override",
    "write_countdown_override",
]
