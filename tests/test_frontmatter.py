"""Tests for the markdown header codec."""

from ecc2cursor.frontmatter import (
    GENERIC_DESCRIPTION,
    MAX_DESCRIPTION_LENGTH,
    build_frontmatter,
    compose_document,
    extract_title,
    infer_description,
    parse_frontmatter,
    resolve_description,
)


class TestParseFrontmatter:
    """Test header parsing."""

    def test_parse_simple_header(self) -> None:
        """Test fields and body are split at the closing delimiter."""
        content = '---\nname: planner\ndescription: "Plans things"\n---\n# Title\nBody'

        header, body = parse_frontmatter(content)

        assert header == {"name": "planner", "description": "Plans things"}
        assert body == "# Title\nBody"

    def test_parse_without_header(self) -> None:
        """Test documents without a header come back untouched."""
        content = "# Title\n\nJust a body.\n"

        header, body = parse_frontmatter(content)

        assert header == {}
        assert body == content

    def test_parse_is_tolerant(self) -> None:
        """Test lines that are not simple fields are ignored."""
        content = (
            "---\n"
            "allowed-tools: Read, Grep\n"
            "tools:\n"
            "  - Read\n"
            "not a field\n"
            "title: 'quoted'\n"
            "mixed: 'half\"\n"
            "---\n"
            "body\n"
        )

        header, body = parse_frontmatter(content)

        assert header["allowed-tools"] == "Read, Grep"
        assert header["tools"] == ""
        assert header["title"] == "quoted"
        assert header["mixed"] == "'half\""
        assert "not a field" not in header
        assert body == "body\n"

    def test_round_trip(self) -> None:
        """Test a composed document parses back to the same fields and body."""
        fields = {"name": "ecc-plan", "description": "Plan work"}
        document = compose_document(fields, "\n\n# Plan\n\nSteps.\n")

        header, body = parse_frontmatter(document)

        assert header == fields
        assert body == "# Plan\n\nSteps.\n"


class TestBuildFrontmatter:
    """Test header serialization."""

    def test_build_renders_booleans(self) -> None:
        """Test booleans render as lowercase literals."""
        header = build_frontmatter({"name": "x", "alwaysApply": False, "enabled": True})

        assert header == "---\nname: x\nalwaysApply: false\nenabled: true\n---"

    def test_build_flattens_newlines(self) -> None:
        """Test multi-line values become a single line."""
        header = build_frontmatter({"description": "first line\n\nsecond line\n"})

        assert header == "---\ndescription: first line second line\n---"

    def test_compose_has_one_blank_line(self) -> None:
        """Test exactly one blank line separates header and body."""
        document = compose_document({"name": "x"}, "\n\n\nBody\n")

        assert document == "---\nname: x\n---\n\nBody\n"


    def test_build_keeps_quoted_values(self) -> None:
        """Test values wrapped in quotes survive a parse of the built header."""
        fields = {"a": '"x"', "b": "'y'", "c": '"left" and "right"', "d": "plain"}
        document = compose_document(fields, "Body\n")

        header, _ = parse_frontmatter(document)

        assert header == fields


class TestDescriptions:
    """Test title extraction and description inference."""

    def test_extract_title(self) -> None:
        """Test the first level-one heading is returned."""
        assert extract_title("intro\n# Hello World\n## Sub\n") == "Hello World"
        assert extract_title("no heading here") == ""

    def test_infer_first_paragraph(self) -> None:
        """Test the paragraph after the first heading is used."""
        content = "# Title\n\nFirst paragraph here.\n\nMore text.\n"

        assert infer_description(content) == "First paragraph here."

    def test_infer_skips_header(self) -> None:
        """Test a leading header is ignored during inference."""
        content = "---\ndescription: ignored\n---\n# Title\n\nPara.\n"

        assert infer_description(content) == "Para."

    def test_infer_truncates_long_paragraph(self) -> None:
        """Test long paragraphs are cut with an ellipsis."""
        content = "# T\n\n" + "a" * 250 + "\n"

        description = infer_description(content)

        assert len(description) == MAX_DESCRIPTION_LENGTH
        assert description.endswith("...")

    def test_infer_falls_back_to_title(self) -> None:
        """Test a heading without a paragraph yields the title."""
        assert infer_description("# Just Title\n") == "Just Title"

    def test_infer_falls_back_to_generic(self) -> None:
        """Test text without headings yields the generic description."""
        assert infer_description("plain text") == GENERIC_DESCRIPTION
        assert infer_description("plain text", fallback="custom") == "custom"

    def test_resolve_precedence(self) -> None:
        """Test override beats header, which beats inference."""
        content = "# Title\n\nInferred text.\n"

        assert resolve_description("Override", {"description": "Header"}, content) == "Override"
        assert resolve_description(None, {"description": "Header"}, content) == "Header"
        assert resolve_description(None, {}, content) == "Inferred text."
