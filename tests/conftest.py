"""Shared fixtures: a small source tree covering every category."""

import json
import tempfile
from pathlib import Path

import pytest

SOURCE_FILES = {
    "agents/planner.md": (
        "---\n"
        "name: planner\n"
        "description: Plans features\n"
        'tools: ["Read", "Grep"]\n'
        "---\n"
        "# Planner\n"
        "\n"
        "Use the **architect** agent for design. See ~/.claude/agents/architect.md.\n"
    ),
    "agents/helper.md": "# Helper\n\nHelps with `/plan` tasks.\n",
    "rules/README.md": "# Rules\n",
    "rules/common/coding-style.md": (
        "# Coding Style\n\nPrefer immutability | always.\n\nMore detail.\n"
    ),
    "rules/common/hooks.md": "# Hooks\n\nHook-only rule.\n",
    "rules/common/performance.md": (
        "# Performance\n"
        "\n"
        "## Model Selection Strategy\n"
        "\n"
        "Use haiku.\n"
        "\n"
        "## Caching\n"
        "\n"
        "Cache things.\n"
    ),
    "rules/typescript/patterns.md": "# TS Patterns\n\nUse strict types.\n",
    "rules/.hidden/ignored.md": "# Ignored\n",
    "commands/plan.md": (
        "---\n"
        "description: Plan a feature. Then wait.\n"
        "---\n"
        "# Plan\n"
        "\n"
        "Run /tdd next.\n"
    ),
    "commands/deploy.md": "# Deploy App\n\nShip it to production. Carefully.\n",
    "commands/learn.md": "# Learn\n\nPlugin only.\n",
    "skills/tdd-workflow/SKILL.md": (
        "---\n"
        "name: tdd-workflow\n"
        "description: TDD workflow\n"
        "---\n"
        "# TDD\n"
        "\n"
        "Use ~/.claude/skills/tdd-workflow/ for notes.\n"
    ),
    "skills/tdd-workflow/notes.md": "# Loose notes\n",
    "skills/tdd-workflow/references/deep/guide.md": "# Guide\n\nClaude Code tips.\n",
    "skills/no-index/readme.md": "# No index\n",
    "skills/continuous-learning/SKILL.md": "# Session only\n",
    "skills/coding-standards/SKILL.md": "# Duplicate of rules\n",
    "contexts/dev.md": "# Dev Mode\n\nFocus on shipping.\n",
    "contexts/review.md": "---\ndescription: Review mode\n---\n# Review\n\nBody\n",
}

MCP_SERVERS = {
    "mcpServers": {
        "memory": {
            "command": "npx",
            "args": ["-y", "@modelcontextprotocol/server-memory"],
            "description": "Knowledge graph memory",
        },
        "github": {
            "command": "npx",
            "args": ["-y", "@modelcontextprotocol/server-github"],
        },
        "tokened": {
            "command": "npx",
            "args": ["-y", "some-server"],
            "env": {"SERVICE_API_KEY": "x"},
        },
        "placeholder": {
            "command": "node",
            "args": ["/path/to/server.js"],
        },
        "fetch": {
            "command": "uvx",
            "args": ["mcp-server-fetch"],
        },
    },
}


def build_source_tree(root: Path) -> Path:
    """Write the sample source tree under ``root``."""
    for relative, content in SOURCE_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    (root / "hooks").mkdir()
    (root / "hooks" / "hooks.json").write_text('{"hooks": {}}\n', encoding="utf-8")

    (root / "mcp-configs").mkdir()
    (root / "mcp-configs" / "mcp-servers.json").write_text(
        json.dumps(MCP_SERVERS, indent=2),
        encoding="utf-8",
    )
    return root


@pytest.fixture
def source_root() -> Path:
    """Create a temporary source tree."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield build_source_tree(Path(temp_dir) / "source")


@pytest.fixture
def target_root() -> Path:
    """Create a temporary, not yet existing target root."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir) / ".cursor"
