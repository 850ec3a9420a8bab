"""Unit tests for upgradecheck.versions — major-version parsing and selection."""

import pytest

from upgradecheck.errors import AlreadyLatestError, NoCompatibleVersionError, ParseError, SelectionError
from upgradecheck.versions import (
    compatible_versions,
    major_version_of,
    newest_first,
    pick_candidate,
    select_candidate,
)

# ── major_version_of ─────────────────────────────────────────────────────────


class TestMajorVersionOf:
    @pytest.mark.parametrize(
        "version,expected",
        [
            ("1.2.3", "1"),
            ("2.13.4.2", "2"),
            ("10.0", "10"),
            ("01.5", "01"),
            ("3.0.0-RC1", "3"),
            (".5", ""),
        ],
    )
    def test_returns_prefix_before_first_dot(self, version, expected):
        assert major_version_of(version) == expected

    @pytest.mark.parametrize("version", ["", "1", "release", "2-SNAPSHOT"])
    def test_no_dot_raises(self, version):
        with pytest.raises(ParseError) as exc:
            major_version_of(version)
        assert exc.value.version == version
        assert "not in expected dotted format" in str(exc.value)

    def test_string_compare_not_numeric(self):
        assert major_version_of("1.0") != major_version_of("01.0")


# ── compatible_versions ──────────────────────────────────────────────────────


class TestCompatibleVersions:
    def test_filters_and_preserves_order(self):
        versions = ["2.5.0", "1.9.0", "2.4.0", "3.0.0", "2.6.0"]
        assert compatible_versions("2.3.0", versions) == ["2.5.0", "2.4.0", "2.6.0"]

    def test_empty_input(self):
        assert compatible_versions("2.3.0", []) == []

    def test_malformed_entry_raises(self):
        with pytest.raises(ParseError) as exc:
            compatible_versions("2.3.0", ["2.5.0", "nightly", "2.4.0"])
        assert exc.value.version == "nightly"

    def test_malformed_current_raises(self):
        with pytest.raises(ParseError):
            compatible_versions("2", ["2.5.0"])


# ── select_candidate ─────────────────────────────────────────────────────────


class TestSelectCandidate:
    def test_first_major_match(self):
        assert select_candidate("2.3.0", ["2.5.0", "2.4.0", "1.9.0"]) == "2.5.0"

    def test_skips_other_majors(self):
        assert select_candidate("2.3.0", ["3.1.0", "1.9.0", "2.4.1"]) == "2.4.1"

    def test_no_match_raises(self):
        with pytest.raises(NoCompatibleVersionError) as exc:
            select_candidate("2.3.0", ["1.9.0"])
        assert exc.value.major_version == "2"
        assert "no versions with matching major version" in str(exc.value).lower()

    def test_empty_registry_raises(self):
        with pytest.raises(NoCompatibleVersionError):
            select_candidate("2.3.0", [])

    def test_already_latest(self):
        with pytest.raises(AlreadyLatestError) as exc:
            select_candidate("2.5.0", ["2.5.0", "2.4.0"])
        assert "already at latest compatible version" in str(exc.value)

    def test_selection_errors_share_base(self):
        assert issubclass(AlreadyLatestError, SelectionError)
        assert issubclass(NoCompatibleVersionError, SelectionError)
        assert not issubclass(AlreadyLatestError, NoCompatibleVersionError)

    def test_malformed_candidate_surfaces(self):
        with pytest.raises(ParseError):
            select_candidate("2.3.0", ["2.5.0", "latest"])

    def test_registry_order_is_trusted_by_default(self):
        assert select_candidate("2.3.0", ["2.4.0", "2.5.0"]) == "2.4.0"

    def test_semver_order_picks_highest(self):
        assert select_candidate("2.3.0", ["2.4.0", "2.10.0", "2.5.0"], order="semver") == "2.10.0"

    def test_semver_order_already_latest(self):
        with pytest.raises(AlreadyLatestError):
            select_candidate("2.10.0", ["2.4.0", "2.10.0", "2.5.0"], order="semver")


class TestPickCandidate:
    def test_takes_first_of_filtered(self):
        assert pick_candidate("2.3.0", ["2.5.0", "2.4.0"]) == "2.5.0"

    def test_empty_raises(self):
        with pytest.raises(NoCompatibleVersionError):
            pick_candidate("2.3.0", [])

    def test_equal_to_current_raises(self):
        with pytest.raises(AlreadyLatestError):
            pick_candidate("2.5.0", ["2.5.0"])

    def test_semver_order(self):
        assert pick_candidate("2.3.0", ["2.4.0", "2.11.0"], order="semver") == "2.11.0"


# ── newest_first ─────────────────────────────────────────────────────────────


class TestNewestFirst:
    def test_numeric_ordering(self):
        assert newest_first(["2.9.0", "2.10.0", "2.1.5"]) == ["2.10.0", "2.9.0", "2.1.5"]

    def test_unparseable_last_in_original_order(self):
        result = newest_first(["2.0.0-M2", "2.1.0", "2.0.0-M1", "2.2.0"])
        assert result == ["2.2.0", "2.1.0", "2.0.0-M2", "2.0.0-M1"]

    def test_does_not_mutate_input(self):
        versions = ["1.0", "1.2"]
        newest_first(versions)
        assert versions == ["1.0", "1.2"]
