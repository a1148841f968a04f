"""Expiring-object store: identifiers, durations, files and deletion timers."""

from .durations import format_duration, parse_duration
from .expiration import DeletionState, ExpirationScheduler, PendingDeletion
from .identifiers import generate_identifier
from .media_types import content_type_for_name, extension_for_content_type
from .object_store import ObjectStore, StoredObject

__all__ = [
    "DeletionState",
    "ExpirationScheduler",
    "ObjectStore",
    "PendingDeletion",
    "StoredObject",
    "content_type_for_name",
    "extension_for_content_type",
    "format_duration",
    "generate_identifier",
    "parse_duration",
]
