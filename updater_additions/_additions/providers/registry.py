"""Provider registry mapping addition types to repository URI headers."""

from typing import Dict, List, Optional

from updater_additions.logging_config import logger

from ..models import ARTIFACT_KINDS, split_addition_type
from .protocol import HostingProvider


class ProviderRegistry:
    """
    Registry of hosting providers.

    The registry is the closed set of supported addition types: a type is
    supported only if its provider is registered and declares a header for
    its artifact kind.

    Example:
        registry = ProviderRegistry()
        registry.register(GitHubProvider())

        registry.header_name_for("github_plugin")  # "GitHubPluginURI"
        registry.header_name_for("svn_plugin")  # None
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._providers: Dict[str, HostingProvider] = {}

    def register(self, provider: HostingProvider) -> None:
        """
        Register a hosting provider.

        Providers keep registration order, which is also the order of
        addition_types().

        Args:
            provider: HostingProvider implementation to register
        """
        self._providers[provider.name] = provider
        logger.debug(f"Registered hosting provider: {provider.name}")

    def get(self, name: str) -> Optional[HostingProvider]:
        """Get a provider by machine name."""
        return self._providers.get(name)

    def header_name_for(self, addition_type: str) -> Optional[str]:
        """
        Get the repository URI header key for an addition type.

        Args:
            addition_type: Type such as "gitlab_theme"

        Returns:
            Header key, or None if the type is not supported
        """
        provider_name, kind = split_addition_type(addition_type)
        provider = self._providers.get(provider_name)
        if provider is None or kind is None:
            return None
        return provider.header_name(kind)

    def is_supported(self, addition_type: str) -> bool:
        return self.header_name_for(addition_type) is not None

    def addition_types(self) -> List[str]:
        """
        List every supported addition type.

        Returns:
            Types ordered by provider registration, plugin before theme
        """
        types = []
        for provider in self._providers.values():
            for kind in ARTIFACT_KINDS:
                if provider.header_name(kind) is not None:
                    types.append(f"{provider.name}_{kind}")
        return types

    def extra_headers(self, kind: str) -> Dict[str, str]:
        """
        Get the repository URI headers recognised for an artifact kind.

        Args:
            kind: "plugin" or "theme"

        Returns:
            Mapping of header key to header label, e.g.
            {"GitHubPluginURI": "GitHub Plugin URI", ...}
        """
        headers = {}
        for provider in self._providers.values():
            key = provider.header_name(kind)
            if key is not None:
                headers[key] = provider.header_label(kind) or key
        return headers

    def list_providers(self) -> List[Dict[str, str]]:
        """
        List all registered providers.

        Returns:
            List of dicts with 'name' and 'display_name' keys
        """
        return [{"name": p.name, "display_name": p.display_name} for p in self._providers.values()]

    def clear(self) -> None:
        """Remove all registered providers."""
        self._providers.clear()
