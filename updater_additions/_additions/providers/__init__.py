"""Repository hosting providers."""

from .bitbucket import BitbucketProvider
from .gitea import GiteaProvider
from .github import GitHubProvider
from .gitlab import GitLabProvider
from .protocol import HostingProvider
from .registry import ProviderRegistry

__all__ = [
    "BitbucketProvider",
    "GiteaProvider",
    "GitHubProvider",
    "GitLabProvider",
    "HostingProvider",
    "ProviderRegistry",
    "create_default_registry",
]


def create_default_registry() -> ProviderRegistry:
    """
    Create a registry with the supported hosting providers.

    Registration order is GitHub, Bitbucket, GitLab, Gitea, giving the
    addition types in the order they are offered to users.

    Returns:
        ProviderRegistry configured with standard providers
    """
    registry = ProviderRegistry()
    registry.register(GitHubProvider())
    registry.register(BitbucketProvider())
    registry.register(GitLabProvider())
    registry.register(GiteaProvider())
    return registry
