"""Persistence backends for the additions setting.

A backend stores one list of addition dicts under a fixed setting name.
The list is always read and written as a whole.
"""

import contextlib
import copy
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any, ContextManager, Dict, Iterator, List, Optional, Protocol, Union

from updater_additions.exceptions import SettingsStorageError
from updater_additions.logging_config import logger

from .schema import DEFAULT_OPTION_NAME, validate_additions

LOCK_TIMEOUT = 10.0
LOCK_POLL_INTERVAL = 0.05


class SettingsBackend(Protocol):
    """
    Protocol for durable storage of the additions list.

    Example:
        class SiteOptionBackend:
            def load(self) -> List[Dict[str, Any]]:
                return get_site_option("github_updater_additions", [])

            def save(self, additions: List[Dict[str, Any]]) -> None:
                update_site_option("github_updater_additions", additions)

            def locked(self):
                return contextlib.nullcontext()
    """

    def load(self) -> List[Dict[str, Any]]:
        """
        Load the stored additions.

        Returns:
            Persisted addition dicts in storage order, empty if none stored
        """
        ...

    def save(self, additions: List[Dict[str, Any]]) -> None:
        """
        Replace the stored additions.

        Args:
            additions: Complete list of addition dicts to persist
        """
        ...

    def locked(self) -> ContextManager[None]:
        """
        Hold exclusive access to storage for a load-check-save cycle.

        Returns:
            Context manager; storage is locked while it is entered
        """
        ...


class InMemorySettingsBackend:
    """Backend keeping the additions list in memory."""

    def __init__(self, additions: Optional[List[Dict[str, Any]]] = None) -> None:
        self._additions: List[Dict[str, Any]] = copy.deepcopy(additions or [])
        self.save_count = 0

    def load(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._additions)

    def save(self, additions: List[Dict[str, Any]]) -> None:
        self._additions = copy.deepcopy(additions)
        self.save_count += 1

    def locked(self) -> ContextManager[None]:
        return contextlib.nullcontext()


class JsonFileSettingsBackend:
    """
    Backend storing settings in a JSON document on disk.

    The document is a JSON object of setting name -> value, one file per
    site installation. Only the additions setting is touched; other keys
    are preserved on save. Writers in separate processes serialize through
    a sibling "<name>.lock" file created exclusively by locked().

    Example file:
        {
            "github_updater_additions": [
                {
                    "type": "github_plugin",
                    "slug": "my-plugin/my-plugin.php",
                    "uri": "https://github.com/me/my-plugin",
                    "ID": "0b9c1b5c2c2b0a0a8a6f6d1e8f4c3b2a"
                }
            ]
        }
    """

    def __init__(
        self,
        path: Union[str, Path],
        option_name: str = DEFAULT_OPTION_NAME,
        lock_timeout: float = LOCK_TIMEOUT,
    ) -> None:
        self.path = Path(path)
        self.option_name = option_name
        self.lock_timeout = lock_timeout
        self.lock_path = self.path.with_name(f"{self.path.name}.lock")

    def load(self) -> List[Dict[str, Any]]:
        document = self._read_document()
        additions = document.get(self.option_name, [])
        validate_additions(additions, source=str(self.path))
        return additions

    def save(self, additions: List[Dict[str, Any]]) -> None:
        validate_additions(additions, source="new settings")

        document = self._read_document()
        document[self.option_name] = additions
        self._write_document(document)
        logger.debug(f"Saved {len(additions)} additions to {self.path}", extra={"settings_file": str(self.path)})

    @contextlib.contextmanager
    def locked(self) -> Iterator[None]:
        """
        Hold the settings lock file.

        Raises:
            SettingsStorageError: If the lock cannot be taken within
                lock_timeout seconds, or the lock file cannot be created
        """
        deadline = time.monotonic() + self.lock_timeout
        while True:
            try:
                self.lock_path.parent.mkdir(parents=True, exist_ok=True)
                fd = os.open(self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
                break
            except FileExistsError:
                if time.monotonic() >= deadline:
                    raise SettingsStorageError(
                        f"Timed out waiting for settings lock {self.lock_path}; remove it if no other writer is running"
                    ) from None
                time.sleep(LOCK_POLL_INTERVAL)
            except OSError as e:
                raise SettingsStorageError(f"Error creating settings lock {self.lock_path}: {e}") from e

        os.close(fd)
        try:
            yield
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(self.lock_path)

    def _read_document(self) -> Dict[str, Any]:
        """
        Read the whole settings document.

        Returns:
            Parsed JSON object, empty if the file does not exist yet

        Raises:
            SettingsStorageError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            logger.debug(f"Settings file {self.path} does not exist yet")
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsStorageError(f"Invalid JSON in settings file {self.path}: {e}") from e
        except OSError as e:
            raise SettingsStorageError(f"Error reading settings file {self.path}: {e}") from e

        if not isinstance(document, dict):
            raise SettingsStorageError(f"Invalid settings file format in {self.path}: expected object")

        return document

    def _write_document(self, document: Dict[str, Any]) -> None:
        """
        Write the settings document atomically.

        The JSON is written to a temporary file in the same directory and
        then moved over the target, so readers never see a partial file.

        Raises:
            SettingsStorageError: If the file cannot be written
        """
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(document, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise SettingsStorageError(f"Error writing settings file {self.path}: {e}") from e
