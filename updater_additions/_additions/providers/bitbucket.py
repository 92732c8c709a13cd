"""Bitbucket hosting provider.

Covers bitbucket.org as well as self-hosted Bitbucket Server instances.
"""

from .base import BaseHostingProvider


class BitbucketProvider(BaseHostingProvider):
    """Provider for Bitbucket-hosted plugins and themes."""

    name = "bitbucket"
    display_name = "Bitbucket"
    header_names = {
        "plugin": "BitbucketPluginURI",
        "theme": "BitbucketThemeURI",
    }
