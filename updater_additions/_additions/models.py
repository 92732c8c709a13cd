"""AdditionRecord dataclass for user-registered artifacts."""

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

ArtifactKind = Literal["plugin", "theme"]

ARTIFACT_KINDS: Tuple[str, ...] = ("plugin", "theme")

# HeaderSet: header key -> value, e.g. {"Name": "My Plugin", "GitHubPluginURI": "https://..."}
HeaderSet = Dict[str, str]


def addition_id(slug: str) -> str:
    """
    Compute the stable identifier of an addition.

    The ID is the 128-bit MD5 hex digest of the slug, so the same slug
    always maps to the same ID across runs and installations.

    Args:
        slug: Plugin folder/file or theme directory name

    Returns:
        32 character lowercase hex digest
    """
    return hashlib.md5(slug.encode("utf-8"), usedforsecurity=False).hexdigest()


def split_addition_type(addition_type: str) -> Tuple[str, Optional[str]]:
    """
    Split an addition type into provider and artifact kind.

    Args:
        addition_type: Type such as "github_plugin"

    Returns:
        (provider, kind) tuple; kind is None when the type has no separator
    """
    provider, sep, kind = addition_type.partition("_")
    if not sep:
        return provider, None
    return provider, kind


@dataclass(frozen=True)
class AdditionRecord:
    """
    One user-registered artifact.

    Attributes:
        id: MD5 hex digest of slug, used for de-duplication
        type: Addition type, e.g. "gitlab_theme"
        slug: Plugin "folder/file.php" or theme directory name
        uri: Normalized repository URL without trailing slash
    """

    id: str
    type: str
    slug: str
    uri: str

    @classmethod
    def create(cls, addition_type: str, slug: str, uri: str) -> "AdditionRecord":
        """Create a record, deriving the ID from the slug."""
        return cls(id=addition_id(slug), type=addition_type, slug=slug, uri=uri)

    @property
    def provider(self) -> str:
        return split_addition_type(self.type)[0]

    @property
    def kind(self) -> Optional[str]:
        return split_addition_type(self.type)[1]

    def to_dict(self) -> Dict[str, str]:
        """
        Convert to the persisted representation.

        The ID is stored under the upper-case "ID" key.
        """
        return {"type": self.type, "slug": self.slug, "uri": self.uri, "ID": self.id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdditionRecord":
        """
        Create an AdditionRecord from its persisted representation.

        Accepts both "ID" and "id"; a missing ID is derived from the slug.
        """
        slug = str(data.get("slug", ""))
        record_id = data.get("ID") or data.get("id") or addition_id(slug)
        return cls(
            id=str(record_id),
            type=str(data.get("type", "")),
            slug=slug,
            uri=str(data.get("uri", "")),
        )
