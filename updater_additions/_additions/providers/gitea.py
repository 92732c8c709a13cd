"""Gitea hosting provider.

Gitea has no canonical public host, so the URI always points at the
site's own instance.
"""

from .base import BaseHostingProvider


class GiteaProvider(BaseHostingProvider):
    """Provider for Gitea-hosted plugins and themes."""

    name = "gitea"
    display_name = "Gitea"
    header_names = {
        "plugin": "GiteaPluginURI",
        "theme": "GiteaThemeURI",
    }
