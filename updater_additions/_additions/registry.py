"""Registry builder turning stored additions into synthetic header sets."""

from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from updater_additions.logging_config import logger

from .headers import FilesystemArtifactResolver, get_headers, read_file_headers
from .models import AdditionRecord, HeaderSet
from .providers import ProviderRegistry, create_default_registry

HeaderSchemaLookup = Callable[[str], Dict[str, str]]
ArtifactFileResolver = Callable[[str, str], Optional[Path]]
HeaderReader = Callable[[Path, Dict[str, str]], Dict[str, str]]


def build_registry(
    records: Iterable[AdditionRecord],
    header_schema_lookup: HeaderSchemaLookup,
    artifact_file_resolver: ArtifactFileResolver,
    read_headers: HeaderReader = read_file_headers,
    providers: Optional[ProviderRegistry] = None,
) -> Dict[str, HeaderSet]:
    """
    Build the header sets the host updater merges into its inventory.

    For every record whose artifact is installed, the artifact's declared
    headers are read and the provider's repository URI header is added
    with the record's URI as value. Records whose entry file cannot be
    found are skipped; they are not installed yet.

    Args:
        records: Additions in storage order
        header_schema_lookup: Returns the header key -> label mapping for a kind
        artifact_file_resolver: Returns the entry file for (kind, slug) or None
        read_headers: Reads header values from an entry file
        providers: Provider registry for repository URI header names

    Returns:
        Mapping of slug to HeaderSet, in record order. A later record with
        the same slug replaces the earlier one.
    """
    registry = providers if providers is not None else create_default_registry()
    result: Dict[str, HeaderSet] = {}

    for record in records:
        kind = record.kind
        if kind is None:
            logger.debug(f"Skipping addition '{record.slug}' with malformed type '{record.type}'")
            continue

        file_path = artifact_file_resolver(kind, record.slug)
        if file_path is None or not Path(file_path).exists():
            logger.debug(f"Skipping addition '{record.slug}': {kind} not installed")
            continue

        headers = dict(read_headers(Path(file_path), header_schema_lookup(kind)))

        header_name = registry.header_name_for(record.type)
        if header_name is None:
            logger.warning(
                f"Unsupported addition type '{record.type}' for '{record.slug}', no repository header added",
                extra={"slug": record.slug, "addition_type": record.type},
            )
        else:
            headers[header_name] = record.uri

        result[record.slug] = headers

    return result


class AdditionsRegistry:
    """
    Holds the header sets built from the stored additions.

    One instance is created per request with its collaborators injected,
    then filled with register().

    Example:
        registry = AdditionsRegistry.for_directories(plugin_dir, theme_root)
        if registry.register(store.load_settings()):
            registry.merge_into(host_inventory)
    """

    def __init__(
        self,
        artifact_file_resolver: ArtifactFileResolver,
        header_schema_lookup: Optional[HeaderSchemaLookup] = None,
        read_headers: HeaderReader = read_file_headers,
        providers: Optional[ProviderRegistry] = None,
    ) -> None:
        self.providers = providers if providers is not None else create_default_registry()
        self.artifact_file_resolver = artifact_file_resolver
        self.header_schema_lookup = header_schema_lookup or (lambda kind: get_headers(kind, self.providers))
        self.read_headers = read_headers
        self.headers: Dict[str, HeaderSet] = {}

    @classmethod
    def for_directories(
        cls,
        plugin_dir: Optional[str] = None,
        theme_root: Optional[str] = None,
    ) -> "AdditionsRegistry":
        """Create a registry resolving artifacts under the given directories."""
        return cls(FilesystemArtifactResolver(plugin_dir, theme_root))

    def register(self, records: Iterable[AdditionRecord]) -> bool:
        """
        Build header sets for the given additions.

        Args:
            records: Additions in storage order

        Returns:
            False if there are no additions, True otherwise
        """
        records = list(records)
        if not records:
            return False

        self.headers = build_registry(
            records,
            self.header_schema_lookup,
            self.artifact_file_resolver,
            read_headers=self.read_headers,
            providers=self.providers,
        )
        logger.info(f"Registered {len(self.headers)} of {len(records)} additions with the updater")
        return True

    def merge_into(self, inventory: Dict[str, HeaderSet]) -> Dict[str, HeaderSet]:
        """
        Merge the built header sets into a host inventory.

        Existing entries for the same slug are replaced.

        Args:
            inventory: Host mapping of slug to headers, updated in place

        Returns:
            The updated inventory
        """
        inventory.update(self.headers)
        return inventory
