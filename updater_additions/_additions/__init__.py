"""Additions: user-registered artifacts and the header sets built from them.

Each addition names a plugin or theme, the service hosting its repository
and the repository URL. The registry builder turns the stored additions
into the header sets the host updater would otherwise read from the
artifact's own files, adding the provider's repository URI header:

- github_plugin / github_theme: GitHubPluginURI / GitHubThemeURI
- bitbucket_plugin / bitbucket_theme: BitbucketPluginURI / BitbucketThemeURI
- gitlab_plugin / gitlab_theme: GitLabPluginURI / GitLabThemeURI
- gitea_plugin / gitea_theme: GiteaPluginURI / GiteaThemeURI

Usage:
    from updater_additions._additions import AdditionsRegistry

    registry = AdditionsRegistry.for_directories("/srv/wp/wp-content/plugins", "/srv/wp/wp-content/themes")
    registry.register(records)
    headers = registry.headers
"""

from .headers import FilesystemArtifactResolver, get_headers, read_file_headers
from .models import AdditionRecord, HeaderSet, addition_id, split_addition_type
from .providers import ProviderRegistry, create_default_registry
from .registry import AdditionsRegistry, build_registry

__all__ = [
    "AdditionRecord",
    "AdditionsRegistry",
    "FilesystemArtifactResolver",
    "HeaderSet",
    "ProviderRegistry",
    "addition_id",
    "build_registry",
    "create_default_registry",
    "get_headers",
    "read_file_headers",
    "split_addition_type",
]
