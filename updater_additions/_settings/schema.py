"""JSON Schema for the persisted additions list."""

from typing import Any, Dict, List

import jsonschema

from updater_additions.exceptions import SettingsStorageError
from updater_additions.logging_config import logger

# Fixed setting name the additions list is stored under
DEFAULT_OPTION_NAME = "github_updater_additions"

ADDITIONS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Updater additions",
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "type": {"type": "string"},
            "slug": {"type": "string"},
            "uri": {"type": "string"},
            "ID": {"type": "string", "pattern": "^[0-9a-f]{32}$"},
        },
        "required": ["type", "slug", "uri", "ID"],
    },
}


def validate_additions(additions: List[Dict[str, Any]], source: str = "settings") -> None:
    """
    Validate a persisted additions list.

    Args:
        additions: List of persisted addition dicts
        source: Where the data came from, for error messages

    Raises:
        SettingsStorageError: If the data does not match ADDITIONS_SCHEMA
    """
    try:
        jsonschema.validate(instance=additions, schema=ADDITIONS_SCHEMA)
    except jsonschema.ValidationError as e:
        error_path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else None
        logger.error(f"Invalid additions in {source}: {e.message}")
        location = f" at {error_path}" if error_path else ""
        raise SettingsStorageError(f"Invalid additions in {source}{location}: {e.message}") from e
