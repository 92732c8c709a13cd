"""Tests for the settings store."""

import threading

import pytest

from updater_additions._additions.models import AdditionRecord, addition_id
from updater_additions._settings import (
    InMemorySettingsBackend,
    SettingsStore,
    SubmissionResult,
    prepare_addition,
    sanitize_fields,
)
from updater_additions.exceptions import (
    AdditionValidationError,
    DuplicateAdditionError,
    InvalidSlugError,
    InvalidTypeError,
    InvalidURIError,
)

EXAMPLE_FIELDS = {
    "type": "github_plugin",
    "slug": "my-plugin/my-plugin.php",
    "uri": "https://github.com/me/my-plugin/",
}


@pytest.fixture
def backend():
    return InMemorySettingsBackend()


@pytest.fixture
def store(backend):
    return SettingsStore(backend)


class TestSanitizeFields:
    """Tests for sanitize_fields()."""

    def test_sanitizes_each_field(self):
        fields = sanitize_fields({"type": " github_plugin\n", "slug": "<b>my-theme</b>", "uri": "github.com/me/t/"})
        assert fields == {"type": "github_plugin", "slug": "my-theme", "uri": "http://github.com/me/t"}

    def test_drops_unknown_fields(self):
        fields = sanitize_fields({"type": "github_theme", "slug": "t", "uri": "https://x.org/t", "ID": "forged"})
        assert set(fields) == {"type", "slug", "uri"}

    def test_missing_fields_are_empty(self):
        assert sanitize_fields(None) == {"type": "", "slug": "", "uri": ""}

    @pytest.mark.parametrize("payload", [["github_plugin"], "github_plugin", 42])
    def test_non_mapping_payload_is_empty(self, payload):
        assert sanitize_fields(payload) == {"type": "", "slug": "", "uri": ""}


class TestPrepareAddition:
    """Tests for prepare_addition()."""

    def test_example_submission(self):
        record = prepare_addition(EXAMPLE_FIELDS, [])

        assert record.uri == "https://github.com/me/my-plugin"
        assert record.id == addition_id("my-plugin/my-plugin.php")
        assert record.type == "github_plugin"
        assert record.slug == "my-plugin/my-plugin.php"

    def test_duplicate_slug_with_different_type_and_uri(self):
        existing = [AdditionRecord.create("github_plugin", "my-plugin/my-plugin.php", "https://github.com/me/a")]
        fields = {"type": "gitlab_plugin", "slug": "my-plugin/my-plugin.php", "uri": "https://gitlab.com/me/b"}

        with pytest.raises(DuplicateAdditionError) as exc_info:
            prepare_addition(fields, existing)

        assert exc_info.value.addition_id == addition_id("my-plugin/my-plugin.php")
        assert exc_info.value.slug == "my-plugin/my-plugin.php"

    def test_duplicate_detected_after_sanitizing_slug(self):
        existing = [AdditionRecord.create("github_theme", "my-theme", "https://github.com/me/my-theme")]
        with pytest.raises(DuplicateAdditionError):
            prepare_addition({"type": "github_theme", "slug": "  <i>my-theme</i> ", "uri": "https://x.org/t"}, existing)

    @pytest.mark.parametrize("addition_type", ["", "github", "svn_plugin", "github_widget", "GitHub_Plugin"])
    def test_rejects_unsupported_type(self, addition_type):
        with pytest.raises(InvalidTypeError):
            prepare_addition({**EXAMPLE_FIELDS, "type": addition_type}, [])

    def test_rejects_empty_slug(self):
        with pytest.raises(InvalidSlugError):
            prepare_addition({**EXAMPLE_FIELDS, "slug": "<b></b>  "}, [])

    @pytest.mark.parametrize("uri", ["", "javascript:alert(1)", "ftp://example.com/repo", "/relative", "http://"])
    def test_rejects_malformed_uri(self, uri):
        with pytest.raises(InvalidURIError):
            prepare_addition({**EXAMPLE_FIELDS, "uri": uri}, [])

    def test_rejections_share_base_class(self):
        with pytest.raises(AdditionValidationError):
            prepare_addition({}, [])


class TestSettingsStore:
    """Tests for SettingsStore."""

    def test_loads_existing_additions_on_construction(self):
        record = AdditionRecord.create("github_theme", "my-theme", "https://github.com/me/my-theme")
        store = SettingsStore(InMemorySettingsBackend([record.to_dict()]))
        assert store.additions == [record]

    def test_submit_appends_and_persists(self, store, backend):
        record = store.submit_addition(EXAMPLE_FIELDS)

        assert record.uri == "https://github.com/me/my-plugin"
        assert backend.load() == [record.to_dict()]
        assert backend.save_count == 1
        assert store.additions == [record]

    def test_round_trip_returns_sanitized_values(self, store):
        raw = {"type": "gitlab_theme", "slug": " <em>my-theme</em>\n", "uri": "  https://gitlab.com/me/my-theme/ "}
        record = store.submit_addition(raw)

        loaded = store.load_settings()

        assert record in loaded
        assert loaded[-1].slug == "my-theme"
        assert loaded[-1].uri == "https://gitlab.com/me/my-theme"
        assert loaded[-1].type == "gitlab_theme"

    def test_appends_in_order(self, store):
        first = store.submit_addition(EXAMPLE_FIELDS)
        second = store.submit_addition({"type": "gitea_theme", "slug": "t", "uri": "https://git.example.com/me/t"})

        assert store.load_settings() == [first, second]

    def test_duplicate_leaves_storage_untouched(self, store, backend):
        store.submit_addition(EXAMPLE_FIELDS)

        with pytest.raises(DuplicateAdditionError):
            store.submit_addition({**EXAMPLE_FIELDS, "uri": "https://github.com/someone-else/my-plugin"})

        assert backend.save_count == 1
        stored = store.load_settings()
        assert len(stored) == 1
        assert stored[0].uri == "https://github.com/me/my-plugin"

    def test_invalid_submission_is_not_persisted(self, store, backend):
        with pytest.raises(InvalidTypeError):
            store.submit_addition({**EXAMPLE_FIELDS, "type": "svn_plugin"})

        assert backend.save_count == 0
        assert store.load_settings() == []

    def test_sees_additions_written_by_another_store(self, backend):
        """Test submissions re-read storage before the duplicate check."""
        first = SettingsStore(backend)
        second = SettingsStore(backend)

        first.submit_addition(EXAMPLE_FIELDS)

        with pytest.raises(DuplicateAdditionError):
            second.submit_addition(EXAMPLE_FIELDS)

    def test_concurrent_submissions_store_one_record(self, store, backend):
        errors = []

        def submit():
            try:
                store.submit_addition(EXAMPLE_FIELDS)
            except DuplicateAdditionError as e:
                errors.append(e)

        threads = [threading.Thread(target=submit) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store.load_settings()) == 1
        assert len(errors) == 7


class TestSaveSettings:
    """Tests for SettingsStore.save_settings()."""

    def test_ignores_other_option_pages(self, store, backend):
        assert store.save_settings({"option_page": "github_updater", "github_updater_additions": EXAMPLE_FIELDS}) is None
        assert store.save_settings({}) is None
        assert backend.save_count == 0

    def test_success(self, store):
        result = store.save_settings(
            {"option_page": "github_updater_additions", "github_updater_additions": EXAMPLE_FIELDS}
        )

        assert isinstance(result, SubmissionResult)
        assert result.success is True
        assert result.record.slug == "my-plugin/my-plugin.php"
        assert result.redirect_option_pages == ["github_updater_additions"]

    def test_duplicate_is_reported(self, store):
        post_data = {"option_page": "github_updater_additions", "github_updater_additions": EXAMPLE_FIELDS}
        store.save_settings(post_data)

        result = store.save_settings(post_data)

        assert result.success is False
        assert result.is_duplicate is True
        assert "already exists" in result.error_message
        assert result.redirect_option_pages == ["github_updater_additions"]

    def test_missing_fields_are_reported(self, store):
        result = store.save_settings({"option_page": "github_updater_additions"})

        assert result.success is False
        assert result.error_type == "InvalidTypeError"

    def test_non_mapping_fields_are_rejected(self, store, backend):
        result = store.save_settings(
            {"option_page": "github_updater_additions", "github_updater_additions": ["github_plugin"]}
        )

        assert result.success is False
        assert result.error_type == "InvalidTypeError"
        assert backend.save_count == 0


class TestSubmissionResult:
    """Tests for SubmissionResult state validation."""

    def test_success_with_error_message_is_invalid(self):
        with pytest.raises(ValueError):
            SubmissionResult(success=True, error_message="boom")

    def test_failure_without_error_message_is_invalid(self):
        with pytest.raises(ValueError):
            SubmissionResult(success=False)
