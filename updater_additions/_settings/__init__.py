"""Settings store for user-registered additions.

Submitted additions are sanitized, validated against the supported
addition types and de-duplicated by their slug-derived ID before being
appended to persisted storage. Storage is a pluggable backend:

- JsonFileSettingsBackend: JSON settings document on disk
- InMemorySettingsBackend: in-process list, for embedding and tests
"""

from .backends import InMemorySettingsBackend, JsonFileSettingsBackend, SettingsBackend
from .result import SubmissionResult
from .schema import ADDITIONS_SCHEMA, DEFAULT_OPTION_NAME, validate_additions
from .store import SettingsStore, find_duplicate, prepare_addition, sanitize_fields

__all__ = [
    "ADDITIONS_SCHEMA",
    "DEFAULT_OPTION_NAME",
    "InMemorySettingsBackend",
    "JsonFileSettingsBackend",
    "SettingsBackend",
    "SettingsStore",
    "SubmissionResult",
    "find_duplicate",
    "prepare_addition",
    "sanitize_fields",
    "validate_additions",
]
