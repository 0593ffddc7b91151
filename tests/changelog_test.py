from datetime import date, datetime

import pytest

from changelog_release.changelog import (
    extract_unreleased_changes,
    get_latest_version,
    insert_new_version_heading,
    latest_release_heading_start,
    release,
    rewrite_links_footer,
    unreleased_heading_end,
    unreleased_link_span,
    version_link,
)
from changelog_release.common.exceptions import MissingArgumentError, StructureError
from changelog_release.common.testing import ChangelogReleaseTestCase

REPO_URL = "https://example.com/repo"

FIRST_RELEASE = (
    "# Changelog\n"
    "\n"
    "## [Unreleased]\n"
    "\n"
    "- first thing\n"
    "\n"
    "[unreleased]: https://example.com/repo/commits/main\n"
)

SUBSEQUENT_RELEASE = (
    "# Changelog\n"
    "\n"
    "## [Unreleased]\n"
    "\n"
    "### Added\n"
    "\n"
    "- thing\n"
    "\n"
    "## [1.0.0] - 2023-01-01\n"
    "\n"
    "- first\n"
    "\n"
    "[unreleased]: https://example.com/repo/compare/v1.0.0...HEAD\n"
    "[1.0.0]: https://example.com/repo/releases/tag/v1.0.0\n"
)


class TestLocate(ChangelogReleaseTestCase):
    def test_unreleased_heading_end(self):
        assert unreleased_heading_end(SUBSEQUENT_RELEASE) == len("# Changelog\n\n## [Unreleased]")

    def test_unreleased_heading_end_at_start_of_document(self):
        assert unreleased_heading_end("## [Unreleased]\n") == len("## [Unreleased]")

    def test_unreleased_heading_must_start_a_line(self):
        with pytest.raises(StructureError):
            unreleased_heading_end("See ## [Unreleased] below\n")

    def test_unreleased_heading_is_case_sensitive(self):
        with pytest.raises(StructureError):
            unreleased_heading_end("## [unreleased]\n")

    def test_latest_release_heading_start(self):
        assert latest_release_heading_start(SUBSEQUENT_RELEASE) == SUBSEQUENT_RELEASE.index(
            "## [1.0.0]"
        )

    def test_latest_release_heading_start_before_first_release(self):
        assert latest_release_heading_start(FIRST_RELEASE) is None

    def test_release_heading_needs_a_date(self):
        assert latest_release_heading_start("## [Unreleased]\n\n## [1.0.0]\n") is None

    def test_unreleased_link_span(self):
        start, end = unreleased_link_span(FIRST_RELEASE)
        assert FIRST_RELEASE[start:end] == "[unreleased]: https://example.com/repo/commits/main"

    def test_unreleased_link_needs_a_url(self):
        assert unreleased_link_span("## [Unreleased]\n\n[unreleased]: \n") is None


class TestExtract(ChangelogReleaseTestCase):
    def test_extract_between_headings(self):
        assert extract_unreleased_changes(SUBSEQUENT_RELEASE) == "### Added\n\n- thing"

    def test_extract_up_to_link_on_first_release(self):
        assert extract_unreleased_changes(FIRST_RELEASE) == "- first thing"

    def test_extract_empty_section(self):
        text = "## [Unreleased]\n\n## [1.0.0] - 2023-01-01\n"
        assert extract_unreleased_changes(text) == ""

    def test_extract_stops_at_first_release_only(self):
        text = self.copy_fixture("subsequent_release.md").read_text()
        assert extract_unreleased_changes(text) == (
            "### Added\n\n- Support for widgets.\n\n### Fixed\n\n- A crash on startup."
        )

    def test_extract_without_link_on_first_release(self):
        with pytest.raises(StructureError):
            extract_unreleased_changes("## [Unreleased]\n\n- thing\n")

    def test_extract_with_release_before_unreleased(self):
        text = "## [1.0.0] - 2023-01-01\n\n## [Unreleased]\n\n[unreleased]: https://x\n"
        with pytest.raises(StructureError):
            extract_unreleased_changes(text)


class TestLatestVersion(ChangelogReleaseTestCase):
    def test_no_releases(self):
        assert get_latest_version(FIRST_RELEASE) is None

    def test_first_heading_wins(self):
        text = self.copy_fixture("subsequent_release.md").read_text()
        assert get_latest_version(text) == "1.2.0"

    def test_version_is_captured_lazily(self):
        assert get_latest_version("## [2.0.0-rc.1] - 2024-01-01 [yanked]\n") == "2.0.0-rc.1"


class TestLinks(ChangelogReleaseTestCase):
    def test_version_link(self):
        assert version_link(REPO_URL, "1.1.0") == "https://example.com/repo/releases/tag/v1.1.0"
        assert (
            version_link(REPO_URL, "1.1.0", "1.0.0")
            == "https://example.com/repo/compare/v1.0.0...v1.1.0"
        )

    def test_first_release_links_to_tag(self):
        result = rewrite_links_footer(FIRST_RELEASE, "0.1.0", REPO_URL)
        assert result.endswith(
            "[unreleased]: https://example.com/repo/compare/v0.1.0...HEAD\n"
            "[0.1.0]: https://example.com/repo/releases/tag/v0.1.0\n"
        )
        assert "commits/main" not in result

    def test_subsequent_release_links_to_compare(self):
        text = self.copy_fixture("subsequent_release.md").read_text()
        result = rewrite_links_footer(text, "1.3.0", "https://github.com/owner/repo")
        assert result.endswith(
            "[unreleased]: https://github.com/owner/repo/compare/v1.3.0...HEAD\n"
            "[1.3.0]: https://github.com/owner/repo/compare/v1.2.0...v1.3.0\n"
            "[1.2.0]: https://github.com/owner/repo/compare/v1.1.0...v1.2.0\n"
            "[1.1.0]: https://github.com/owner/repo/releases/tag/v1.1.0\n"
        )
        assert result.count("[unreleased]: ") == 1

    def test_footer_without_trailing_newline(self):
        text = "## [Unreleased]\n\n[unreleased]: https://example.com/repo/commits/main"
        assert rewrite_links_footer(text, "0.1.0", REPO_URL) == (
            "## [Unreleased]\n\n"
            "[unreleased]: https://example.com/repo/compare/v0.1.0...HEAD\n"
            "[0.1.0]: https://example.com/repo/releases/tag/v0.1.0"
        )

    def test_custom_tag_prefix(self):
        result = rewrite_links_footer(SUBSEQUENT_RELEASE, "1.1.0", REPO_URL, tag_prefix="")
        assert "[unreleased]: https://example.com/repo/compare/1.1.0...HEAD\n" in result
        assert "[1.1.0]: https://example.com/repo/compare/1.0.0...1.1.0\n" in result

    def test_missing_link(self):
        with pytest.raises(StructureError):
            rewrite_links_footer("## [Unreleased]\n", "0.1.0", REPO_URL)


class TestInsertHeading(ChangelogReleaseTestCase):
    def test_heading_goes_right_after_unreleased(self):
        text = "## [Unreleased]\n### Added\n- thing\n\n## [1.0.0] - 2023-01-01"
        assert insert_new_version_heading(text, "1.1.0", date(2024, 5, 1)) == (
            "## [Unreleased]\n\n## [1.1.0] - 2024-05-01\n### Added\n- thing\n\n"
            "## [1.0.0] - 2023-01-01"
        )

    def test_datetime_has_no_time_component(self):
        result = insert_new_version_heading(
            "## [Unreleased]\n", "1.1.0", datetime(2024, 5, 1, 13, 45)
        )
        assert result == "## [Unreleased]\n\n## [1.1.0] - 2024-05-01\n"

    def test_missing_unreleased_heading(self):
        with pytest.raises(StructureError):
            insert_new_version_heading("# Changelog\n", "1.1.0", date(2024, 5, 1))


class TestRelease(ChangelogReleaseTestCase):
    def test_subsequent_release(self):
        result = release(SUBSEQUENT_RELEASE, "1.1.0", date(2024, 5, 1), REPO_URL)
        assert result.changes == "### Added\n\n- thing"
        assert result.changelog == (
            "# Changelog\n"
            "\n"
            "## [Unreleased]\n"
            "\n"
            "## [1.1.0] - 2024-05-01\n"
            "\n"
            "### Added\n"
            "\n"
            "- thing\n"
            "\n"
            "## [1.0.0] - 2023-01-01\n"
            "\n"
            "- first\n"
            "\n"
            "[unreleased]: https://example.com/repo/compare/v1.1.0...HEAD\n"
            "[1.1.0]: https://example.com/repo/compare/v1.0.0...v1.1.0\n"
            "[1.0.0]: https://example.com/repo/releases/tag/v1.0.0\n"
        )

    def test_first_release(self):
        changelog, changes = release(FIRST_RELEASE, "0.1.0", date(2024, 5, 1), REPO_URL)
        assert changes == "- first thing"
        assert changelog == (
            "# Changelog\n"
            "\n"
            "## [Unreleased]\n"
            "\n"
            "## [0.1.0] - 2024-05-01\n"
            "\n"
            "- first thing\n"
            "\n"
            "[unreleased]: https://example.com/repo/compare/v0.1.0...HEAD\n"
            "[0.1.0]: https://example.com/repo/releases/tag/v0.1.0\n"
        )

    def test_keep_unreleased(self):
        result = release(
            SUBSEQUENT_RELEASE, "1.1.0", date(2024, 5, 1), REPO_URL, keep_unreleased=True
        )
        assert result.changelog.startswith(
            "# Changelog\n"
            "\n"
            "## [Unreleased]\n"
            "\n"
            "### Added\n"
            "\n"
            "- thing\n"
            "\n"
            "## [1.1.0] - 2024-05-01\n"
        )
        unreleased_end = unreleased_heading_end(result.changelog)
        assert result.changelog[unreleased_end:].startswith("\n\n" + result.changes + "\n\n##")

    def test_changes_come_from_the_original_text(self):
        result = release(SUBSEQUENT_RELEASE, "1.1.0", date(2024, 5, 1), REPO_URL)
        assert "[unreleased]" not in result.changes
        assert "## [1.1.0]" not in result.changes

    def test_missing_unreleased_heading(self):
        text = self.copy_fixture("no_unreleased_heading.md").read_text()
        with pytest.raises(StructureError):
            release(text, "1.1.0", date(2024, 5, 1), REPO_URL)

    @pytest.mark.parametrize(
        "new_version, repo_url", [("", REPO_URL), (None, REPO_URL), ("1.1.0", "")]
    )
    def test_missing_arguments(self, new_version, repo_url):
        with pytest.raises(MissingArgumentError):
            release(SUBSEQUENT_RELEASE, new_version, date(2024, 5, 1), repo_url)
