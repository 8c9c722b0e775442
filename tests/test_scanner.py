"""Tests for install naming and installed-content detection."""

import tempfile
from pathlib import Path

import pytest

from ecc2cursor.exceptions import NamingError
from ecc2cursor.models import ScanResult
from ecc2cursor.naming import NamingPolicy, is_safe_name, prefix_name, validate_prefix
from ecc2cursor.scanner import format_scan_result, scan_all, scan_directory


class TestNaming:
    """Test prefix naming rules."""

    def test_prefix_name(self) -> None:
        """Test names are decorated only when a prefix is set."""
        assert prefix_name("ecc", "typescript") == "ecc-typescript"
        assert prefix_name("", "typescript") == "typescript"

    @pytest.mark.parametrize("prefix", ["", "ecc", "team_2", "v1.0"])
    def test_valid_prefixes(self, prefix: str) -> None:
        """Test accepted prefixes pass through."""
        assert validate_prefix(prefix) == prefix

    @pytest.mark.parametrize("prefix", ["ecc-beta", "a/b", "has space", "../x"])
    def test_invalid_prefixes(self, prefix: str) -> None:
        """Test prefixes that could blur ownership are rejected."""
        with pytest.raises(NamingError, match="Invalid prefix"):
            validate_prefix(prefix)

    def test_policy_rejects_invalid_prefix(self) -> None:
        """Test the policy validates on construction."""
        with pytest.raises(NamingError):
            NamingPolicy("ecc-beta")

    def test_tracked_policy(self) -> None:
        """Test ownership and base-name recovery under a prefix."""
        policy = NamingPolicy("ecc")

        assert policy.mode == "tracked"
        assert policy.name("planner") == "ecc-planner"
        assert policy.owns("ecc-planner.md")
        assert not policy.owns("eccx-planner.md")
        assert not policy.owns("planner.md")
        assert policy.base_name("ecc-planner.md") == "planner"
        assert policy.base_name("ecc-tdd-workflow") == "tdd-workflow"
        assert policy.base_name("planner.md") is None

    def test_untracked_policy(self) -> None:
        """Test an empty prefix owns nothing."""
        policy = NamingPolicy("")

        assert policy.mode == "untracked"
        assert not policy.tracks_installs
        assert policy.name("planner") == "planner"
        assert not policy.owns("planner.md")
        assert not policy.owns("-planner.md")

    @pytest.mark.parametrize(
        ("name", "safe"),
        [
            ("planner", True),
            ("tdd-guide.v2", True),
            ("", False),
            ("../escape", False),
            ("a/b", False),
            ("a\\b", False),
            ("x..y", False),
        ],
    )
    def test_is_safe_name(self, name: str, safe: bool) -> None:
        """Test names must stay a single path component."""
        assert is_safe_name(name) is safe


class TestScanner:
    """Test stateless detection of installed entries."""

    @pytest.fixture
    def cursor_dir(self) -> Path:
        """Create a target root with installed and user-authored entries."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir) / ".cursor"
            (root / "skills" / "ecc-typescript").mkdir(parents=True)
            (root / "skills" / "ecc-coding-standards").mkdir()
            (root / "skills" / "my-skill").mkdir()
            (root / "skills" / "team-plan").mkdir()
            (root / "agents").mkdir()
            (root / "agents" / "ecc-planner.md").write_text("x")
            (root / "agents" / "mine.md").write_text("x")
            (root / "commands").mkdir()
            (root / "commands" / "ecc-plan.md").write_text("x")
            yield root

    def test_scan_finds_prefixed_entries(self, cursor_dir: Path) -> None:
        """Test only prefixed entries are reported, sorted by name."""
        result = scan_directory(cursor_dir, "ecc")

        assert result.skills == ["ecc-coding-standards", "ecc-typescript"]
        assert result.agents == ["ecc-planner.md"]
        assert result.commands == ["ecc-plan.md"]
        assert result.total_files == 4

    def test_scan_other_prefix(self, cursor_dir: Path) -> None:
        """Test prefixes select disjoint sets of entries."""
        result = scan_directory(cursor_dir, "team")

        assert result.skills == ["team-plan"]
        assert result.total_files == 1

    def test_scan_untracked_finds_nothing(self, cursor_dir: Path) -> None:
        """Test untracked mode never claims entries."""
        assert scan_directory(cursor_dir, "").total_files == 0

    def test_scan_missing_directory(self) -> None:
        """Test a missing root scans as empty."""
        with tempfile.TemporaryDirectory() as temp_dir:
            result = scan_directory(Path(temp_dir) / "missing", "ecc")

            assert result.total_files == 0

    def test_scan_all_dedupes_and_filters(self, cursor_dir: Path) -> None:
        """Test repeated roots are scanned once and empty roots are dropped."""
        with tempfile.TemporaryDirectory() as empty_dir:
            results = scan_all("ecc", roots=[cursor_dir, cursor_dir, Path(empty_dir)])

            assert len(results) == 1
            assert results[0].cursor_dir == cursor_dir

    def test_format_scan_result(self) -> None:
        """Test the one-line summary lists non-empty groups only."""
        result = ScanResult(
            cursor_dir=Path("/home/me/.cursor"),
            skills=["ecc-a", "ecc-b"],
            commands=["ecc-plan.md"],
        )

        assert format_scan_result(result) == "/home/me/.cursor (2 skills, 1 commands)"
