"""GitLab hosting provider (gitlab.com and self-managed instances)."""

from .base import BaseHostingProvider


class GitLabProvider(BaseHostingProvider):
    """Provider for GitLab-hosted plugins and themes."""

    name = "gitlab"
    display_name = "GitLab"
    header_names = {
        "plugin": "GitLabPluginURI",
        "theme": "GitLabThemeURI",
    }
