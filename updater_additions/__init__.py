"""updater-additions: register repositories without updater headers."""

from ._additions import (
    AdditionRecord,
    AdditionsRegistry,
    FilesystemArtifactResolver,
    HeaderSet,
    addition_id,
    build_registry,
    get_headers,
    read_file_headers,
)
from ._settings import (
    InMemorySettingsBackend,
    JsonFileSettingsBackend,
    SettingsStore,
    SubmissionResult,
    prepare_addition,
)


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    # Method 1: Try importlib.metadata (preferred for installed packages)
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("updater-additions")
    except PackageNotFoundError:
        pass

    # Method 2: Try reading from pyproject.toml directly
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
    except (OSError, ValueError):
        pass

    # Final fallback
    return "unknown"


__version__ = _get_version()

__all__ = [
    "AdditionRecord",
    "AdditionsRegistry",
    "FilesystemArtifactResolver",
    "HeaderSet",
    "InMemorySettingsBackend",
    "JsonFileSettingsBackend",
    "SettingsStore",
    "SubmissionResult",
    "__version__",
    "addition_id",
    "build_registry",
    "get_headers",
    "prepare_addition",
    "read_file_headers",
]
