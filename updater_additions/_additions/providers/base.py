"""Shared behaviour for hosting providers."""

from typing import Dict, Optional


class BaseHostingProvider:
    """Implements header lookups from the class-level header_names mapping."""

    name: str = ""
    display_name: str = ""
    header_names: Dict[str, str] = {}

    def header_name(self, kind: str) -> Optional[str]:
        return self.header_names.get(kind)

    def header_label(self, kind: str) -> Optional[str]:
        """
        Get the header label as written in an artifact's header block.

        Args:
            kind: "plugin" or "theme"

        Returns:
            Label such as "GitHub Plugin URI", or None for unknown kinds
        """
        if kind not in self.header_names:
            return None
        return f"{self.display_name} {kind.capitalize()} URI"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
