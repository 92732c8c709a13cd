"""HostingProvider protocol for repository hosting services."""

from typing import Dict, Optional, Protocol


class HostingProvider(Protocol):
    """
    Protocol defining the interface for repository hosting providers.

    Each provider declares the header that tells the host updater where an
    artifact's repository lives, separately for plugins and themes. The
    mapping is explicit so unsupported kinds have no header at all.

    Example:
        class GitHubProvider:
            name = "github"
            display_name = "GitHub"
            header_names = {"plugin": "GitHubPluginURI", "theme": "GitHubThemeURI"}

            def header_name(self, kind: str) -> Optional[str]:
                return self.header_names.get(kind)
    """

    @property
    def name(self) -> str:
        """
        Machine name used as the first half of an addition type.

        Examples: "github", "bitbucket", "gitlab", "gitea"
        """
        ...

    @property
    def display_name(self) -> str:
        """Human-readable name of the hosting service."""
        ...

    @property
    def header_names(self) -> Dict[str, str]:
        """Mapping of artifact kind to the repository URI header key."""
        ...

    def header_name(self, kind: str) -> Optional[str]:
        """
        Get the repository URI header key for an artifact kind.

        Args:
            kind: "plugin" or "theme"

        Returns:
            Header key such as "GitHubPluginURI", or None for unknown kinds
        """
        ...

    def header_label(self, kind: str) -> Optional[str]:
        """
        Get the header label as written in an artifact's header block.

        Args:
            kind: "plugin" or "theme"

        Returns:
            Label such as "GitHub Plugin URI", or None for unknown kinds
        """
        ...
