"""GitHub hosting provider.

Repositories on github.com or GitHub Enterprise Server. The host updater
reads the repository location from the "GitHub Plugin URI" or
"GitHub Theme URI" header.
"""

from .base import BaseHostingProvider


class GitHubProvider(BaseHostingProvider):
    """Provider for GitHub-hosted plugins and themes."""

    name = "github"
    display_name = "GitHub"
    header_names = {
        "plugin": "GitHubPluginURI",
        "theme": "GitHubThemeURI",
    }
