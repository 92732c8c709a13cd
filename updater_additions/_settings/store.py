"""Settings store appending submitted additions to persisted storage."""

import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from updater_additions.exceptions import (
    AdditionValidationError,
    DuplicateAdditionError,
    InvalidSlugError,
    InvalidTypeError,
    InvalidURIError,
)
from updater_additions.logging_config import logger
from updater_additions.sanitization import (
    check_repository_uri,
    sanitize_repository_uri,
    sanitize_text_field,
)

from .._additions.models import AdditionRecord, addition_id
from .._additions.providers import ProviderRegistry, create_default_registry
from .backends import SettingsBackend
from .result import SubmissionResult
from .schema import DEFAULT_OPTION_NAME

ADDITION_FIELDS = ("type", "slug", "uri")


def sanitize_fields(raw_fields: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Sanitize submitted addition fields.

    The URI is normalized as a URL; every other field is cleaned as plain
    text. Fields other than type, slug and uri are dropped. A payload that
    is not a mapping is treated as an empty submission.

    Args:
        raw_fields: Submitted form fields

    Returns:
        Dict with "type", "slug" and "uri" keys
    """
    if not isinstance(raw_fields, Mapping):
        if raw_fields is not None:
            logger.debug(f"Ignoring addition payload of type {type(raw_fields).__name__}")
        raw_fields = {}

    ignored = sorted(set(raw_fields) - set(ADDITION_FIELDS))
    if ignored:
        logger.debug(f"Ignoring unknown addition fields: {', '.join(map(str, ignored))}")

    fields = {}
    for key in ADDITION_FIELDS:
        value = raw_fields.get(key)
        if key == "uri":
            fields[key] = sanitize_repository_uri(value)
        else:
            fields[key] = sanitize_text_field(value)
    return fields


def find_duplicate(record_id: str, existing: Sequence[AdditionRecord]) -> Optional[AdditionRecord]:
    """Return the existing record with the given ID, if any."""
    for record in existing:
        if record.id == record_id:
            return record
    return None


def prepare_addition(
    raw_fields: Optional[Mapping[str, Any]],
    existing: Sequence[AdditionRecord],
    providers: Optional[ProviderRegistry] = None,
) -> AdditionRecord:
    """
    Sanitize, validate and de-duplicate a submitted addition.

    Nothing is persisted; SettingsStore.submit_addition() does that.

    Args:
        raw_fields: Submitted fields ("type", "slug", "uri")
        existing: Additions already stored
        providers: Provider registry defining the supported types

    Returns:
        The new AdditionRecord

    Raises:
        InvalidTypeError: If the type is not a supported addition type
        InvalidSlugError: If the slug is empty
        InvalidURIError: If the URI is not an http(s) URL with a host
        DuplicateAdditionError: If an addition with the same slug exists
    """
    registry = providers if providers is not None else create_default_registry()
    fields = sanitize_fields(raw_fields)

    if not registry.is_supported(fields["type"]):
        supported = ", ".join(registry.addition_types())
        raise InvalidTypeError(f"Unsupported addition type '{fields['type']}'. Expected one of: {supported}")

    if not fields["slug"]:
        raise InvalidSlugError("Repository slug is required")

    problem = check_repository_uri(fields["uri"])
    if problem:
        raise InvalidURIError(f"Invalid repository URI '{fields['uri']}': {problem}")

    record_id = addition_id(fields["slug"])
    if find_duplicate(record_id, existing) is not None:
        raise DuplicateAdditionError(record_id, fields["slug"])

    return AdditionRecord(id=record_id, type=fields["type"], slug=fields["slug"], uri=fields["uri"])


class SettingsStore:
    """
    Persisted list of additions.

    Construct one store per request or session; the stored additions are
    loaded on construction. Submissions re-read storage and run the
    duplicate check, append and save under the store lock and the
    backend's storage lock, so two submissions for the same slug never
    both succeed, even through separate stores or processes.

    Example:
        store = SettingsStore(JsonFileSettingsBackend("settings.json"))
        record = store.submit_addition(
            {"type": "github_plugin", "slug": "my-plugin/my-plugin.php", "uri": "https://github.com/me/my-plugin/"}
        )
    """

    def __init__(
        self,
        backend: SettingsBackend,
        providers: Optional[ProviderRegistry] = None,
        option_name: str = DEFAULT_OPTION_NAME,
    ) -> None:
        self.backend = backend
        self.providers = providers if providers is not None else create_default_registry()
        self.option_name = option_name
        self._lock = threading.Lock()
        self.additions: List[AdditionRecord] = self.load_settings()

    def load_settings(self) -> List[AdditionRecord]:
        """
        Reload the additions from the backend.

        Returns:
            Stored additions in storage order
        """
        self.additions = [AdditionRecord.from_dict(item) for item in self.backend.load()]
        return list(self.additions)

    def submit_addition(self, raw_fields: Optional[Mapping[str, Any]]) -> AdditionRecord:
        """
        Validate a submitted addition and append it to storage.

        Args:
            raw_fields: Submitted fields ("type", "slug", "uri")

        Returns:
            The stored AdditionRecord

        Raises:
            AdditionValidationError: If the submission is rejected; storage
                is left untouched
        """
        with self._lock, self.backend.locked():
            existing = self.load_settings()
            try:
                record = prepare_addition(raw_fields, existing, self.providers)
            except DuplicateAdditionError as e:
                logger.warning(
                    f"Rejected duplicate addition for '{e.slug}'",
                    extra={"slug": e.slug, "addition_id": e.addition_id},
                )
                raise

            updated = existing + [record]
            self.backend.save([r.to_dict() for r in updated])
            self.additions = updated

        logger.info(
            f"Added {record.type} '{record.slug}' ({record.uri})",
            extra={"slug": record.slug, "addition_type": record.type, "addition_id": record.id},
        )
        return record

    def save_settings(self, post_data: Mapping[str, Any]) -> Optional[SubmissionResult]:
        """
        Handle a settings form submission.

        Only submissions for this store's option page are processed; the
        addition fields are read from ``post_data[option_name]``.

        Args:
            post_data: Submitted form data

        Returns:
            SubmissionResult for this option page, None for other pages
        """
        if post_data.get("option_page") != self.option_name:
            return None

        redirect = [self.option_name]
        try:
            record = self.submit_addition(post_data.get(self.option_name))
        except AdditionValidationError as e:
            return SubmissionResult.failure_result(e, redirect_option_pages=redirect)

        return SubmissionResult.success_result(record, redirect_option_pages=redirect)
