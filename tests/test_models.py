"""Tests for the AdditionRecord model and ID derivation."""

import hashlib

from updater_additions._additions.models import AdditionRecord, addition_id, split_addition_type


class TestAdditionId:
    """Tests for addition_id()."""

    def test_is_md5_of_slug(self):
        """Test the ID is the MD5 hex digest of the slug."""
        slug = "my-plugin/my-plugin.php"
        assert addition_id(slug) == hashlib.md5(slug.encode("utf-8")).hexdigest()

    def test_is_deterministic(self):
        """Test repeated calls give the same ID."""
        assert addition_id("my-theme") == addition_id("my-theme")

    def test_differs_per_slug(self):
        """Test different slugs give different IDs."""
        assert addition_id("my-theme") != addition_id("other-theme")


class TestSplitAdditionType:
    """Tests for split_addition_type()."""

    def test_splits_provider_and_kind(self):
        assert split_addition_type("gitlab_theme") == ("gitlab", "theme")

    def test_no_separator_has_no_kind(self):
        assert split_addition_type("github") == ("github", None)


class TestAdditionRecord:
    """Tests for AdditionRecord."""

    def test_create_derives_id(self):
        """Test create() fills the ID from the slug."""
        record = AdditionRecord.create("github_plugin", "my-plugin/my-plugin.php", "https://github.com/me/my-plugin")
        assert record.id == addition_id("my-plugin/my-plugin.php")
        assert record.provider == "github"
        assert record.kind == "plugin"

    def test_to_dict_uses_upper_case_id_key(self):
        """Test the persisted form stores the ID under "ID"."""
        record = AdditionRecord.create("gitea_theme", "my-theme", "https://git.example.com/me/my-theme")
        assert record.to_dict() == {
            "type": "gitea_theme",
            "slug": "my-theme",
            "uri": "https://git.example.com/me/my-theme",
            "ID": addition_id("my-theme"),
        }

    def test_from_dict_round_trip(self):
        """Test from_dict() restores a persisted record."""
        record = AdditionRecord.create("bitbucket_plugin", "a/a.php", "https://bitbucket.org/me/a")
        assert AdditionRecord.from_dict(record.to_dict()) == record

    def test_from_dict_without_id_derives_it(self):
        """Test a persisted record without ID gets one from its slug."""
        record = AdditionRecord.from_dict({"type": "github_theme", "slug": "t", "uri": "https://github.com/me/t"})
        assert record.id == addition_id("t")

    def test_from_dict_accepts_lower_case_id(self):
        record = AdditionRecord.from_dict({"type": "github_theme", "slug": "t", "uri": "u", "id": "abc"})
        assert record.id == "abc"
