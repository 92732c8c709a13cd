"""Artifact header vocabulary, entry-file resolution and header parsing.

Plugins declare their metadata in a comment block at the top of the main
plugin file; themes do the same in ``style.css``::

    /**
     * Plugin Name: My Plugin
     * Version:     1.2.0
     * Author:      Jane Doe
     */

The functions here are the default filesystem implementations of the
collaborators used by the registry builder.
"""

import re
from pathlib import Path
from typing import Dict, Optional, Union

from updater_additions.logging_config import logger

from .providers import ProviderRegistry, create_default_registry

# Only the head of the file is scanned for headers
HEADER_READ_BYTES = 8 * 1024

THEME_STYLESHEET = "style.css"

DEFAULT_PLUGIN_HEADERS: Dict[str, str] = {
    "Name": "Plugin Name",
    "PluginURI": "Plugin URI",
    "Version": "Version",
    "Description": "Description",
    "Author": "Author",
    "AuthorURI": "Author URI",
    "TextDomain": "Text Domain",
    "DomainPath": "Domain Path",
    "Network": "Network",
}

DEFAULT_THEME_HEADERS: Dict[str, str] = {
    "Name": "Theme Name",
    "ThemeURI": "Theme URI",
    "Description": "Description",
    "Author": "Author",
    "AuthorURI": "Author URI",
    "Version": "Version",
    "Template": "Template",
    "Status": "Status",
    "Tags": "Tags",
    "TextDomain": "Text Domain",
    "DomainPath": "Domain Path",
}

# Headers the host updater understands in addition to the standard ones
UPDATER_EXTRA_HEADERS: Dict[str, str] = {
    "RequiresWP": "Requires WP",
    "RequiresPHP": "Requires PHP",
    "ReleaseAsset": "Release Asset",
    "PrimaryBranch": "Primary Branch",
}

_HEADER_COMMENT_END = re.compile(r"\s*(?:\*/|\?>).*")


def get_headers(kind: str, providers: Optional[ProviderRegistry] = None) -> Dict[str, str]:
    """
    Get every header recognised for an artifact kind.

    Args:
        kind: "plugin" or "theme"
        providers: Provider registry contributing repository URI headers
                  (defaults to the standard providers)

    Returns:
        Mapping of header key to the label used in the file, empty for
        unknown kinds
    """
    if kind == "plugin":
        base = DEFAULT_PLUGIN_HEADERS
    elif kind == "theme":
        base = DEFAULT_THEME_HEADERS
    else:
        return {}

    registry = providers if providers is not None else create_default_registry()
    return {**base, **registry.extra_headers(kind), **UPDATER_EXTRA_HEADERS}


def _cleanup_header_comment(value: str) -> str:
    """Strip a trailing comment close ("*/" or "?>") and whitespace."""
    return _HEADER_COMMENT_END.sub("", value).strip()


def read_file_headers(path: Union[str, Path], headers: Dict[str, str]) -> Dict[str, str]:
    """
    Read declared header values from the head of a file.

    Each header is matched as ``Label: value`` at the start of a line,
    optionally preceded by comment characters (space, tab, ``/``, ``*``,
    ``#``, ``@``) or an opening ``<?php`` tag. Matching is case-insensitive.

    Args:
        path: File to read
        headers: Mapping of header key to label

    Returns:
        Mapping with every key of ``headers``; values are empty strings for
        headers not present in the file
    """
    try:
        with open(path, "rb") as f:
            raw = f.read(HEADER_READ_BYTES)
    except OSError as e:
        logger.warning(f"Could not read headers from {path}: {e}")
        raw = b""

    content = raw.decode("utf-8", errors="replace").replace("\r", "\n")

    values: Dict[str, str] = {}
    for key, label in headers.items():
        pattern = re.compile(
            r"^(?:[ \t]*<\?php)?[ \t/*#@]*" + re.escape(label) + r":(.*)$",
            re.MULTILINE | re.IGNORECASE,
        )
        match = pattern.search(content)
        values[key] = _cleanup_header_comment(match.group(1)) if match else ""

    return values


class FilesystemArtifactResolver:
    """
    Locates the entry file of an installed plugin or theme.

    Plugins resolve to ``plugin_dir/<slug>`` where the slug is
    "folder/file.php"; themes resolve to ``theme_root/<slug>/style.css``.
    Slugs that would escape their root directory never resolve.
    """

    def __init__(
        self,
        plugin_dir: Optional[Union[str, Path]] = None,
        theme_root: Optional[Union[str, Path]] = None,
    ) -> None:
        self.plugin_dir = Path(plugin_dir) if plugin_dir else None
        self.theme_root = Path(theme_root) if theme_root else None

    def __call__(self, kind: str, slug: str) -> Optional[Path]:
        if not slug:
            return None

        if kind == "plugin":
            root = self.plugin_dir
            relative = Path(slug)
        elif kind == "theme":
            root = self.theme_root
            relative = Path(slug) / THEME_STYLESHEET
        else:
            return None

        if root is None:
            logger.debug(f"No {kind} directory configured, cannot resolve '{slug}'")
            return None

        candidate = (root / relative).resolve()
        if not candidate.is_relative_to(root.resolve()):
            logger.warning(f"Ignoring {kind} slug outside of {root}: '{slug}'")
            return None

        return candidate
