"""Service (MCP server) discovery, selection and registry merge.

Only servers that can run without credentials are offered. The target
registry is merged, never rewritten: names already present are left exactly
as they are, and unknown top-level keys survive the round trip.
"""

from __future__ import annotations

import copy
import json
import logging
import re
import threading
from pathlib import Path
from typing import Any

from ..catalog import Catalog, default_catalog
from ..exceptions import RegistryError
from ..models import AvailableServer, McpResult, McpSelection, TargetContext

logger = logging.getLogger(__name__)

SOURCE_DIR = "mcp-configs"
SOURCE_FILE = "mcp-servers.json"
SERVERS_KEY = "mcpServers"

AUTH_PATTERNS = [
    re.compile(r"api[_-]?key", re.IGNORECASE),
    re.compile(r"token", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"password", re.IGNORECASE),
    re.compile(r"auth", re.IGNORECASE),
    re.compile(r"bearer", re.IGNORECASE),
    re.compile(r"credentials", re.IGNORECASE),
    # Templated placeholders and env interpolation
    re.compile(r"\$\{[^}]*\}"),
    re.compile(r"process\.env\."),
    re.compile(r"YOUR_[A-Z_]+"),
    re.compile(r"/path/to/"),
]
AUTH_ENV_KEY = re.compile(r"key|token|secret|password|auth|api", re.IGNORECASE)

# read-modify-write of the registry file is not atomic
_REGISTRY_LOCK = threading.Lock()


def requires_auth(config: dict[str, Any]) -> bool:
    """Heuristic: does this server definition look like it needs a credential?"""
    serialized = json.dumps(config)
    if any(pattern.search(serialized) for pattern in AUTH_PATTERNS):
        return True

    env = config.get("env")
    if isinstance(env, dict) and env:
        return any(AUTH_ENV_KEY.search(key) for key in env)
    return False


def get_available_servers(
    source_root: Path,
    catalog: Catalog | None = None,
) -> list[AvailableServer]:
    """Installable servers from the source tree.

    The catalog denylist is checked first, then the credential heuristic.
    """
    catalog = catalog or default_catalog()
    source_file = Path(source_root) / SOURCE_DIR / SOURCE_FILE
    if not source_file.is_file():
        return []

    try:
        data = json.loads(source_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable service map %s: %s", source_file, e)
        return []

    servers = data.get(SERVERS_KEY) if isinstance(data, dict) else None
    if not isinstance(servers, dict):
        return []

    available = []
    for name, config in servers.items():
        if name in catalog.token_required_set:
            logger.debug("Skipping %s: requires credentials", name)
            continue
        if not isinstance(config, dict) or requires_auth(config):
            logger.debug("Skipping %s: looks credential-bound", name)
            continue
        available.append(
            AvailableServer(
                name=name,
                description=str(config.get("description") or ""),
                config=config,
            ),
        )
    return available


def resolve_selection(
    available: list[AvailableServer],
    selection: McpSelection,
) -> list[AvailableServer]:
    """Apply a selection to the available servers; unknown names are ignored."""
    if selection == "none":
        return []
    if selection == "all":
        return list(available)
    wanted = set(selection)
    return [server for server in available if server.name in wanted]


def parse_selection(value: str) -> McpSelection:
    """Parse ``none``, ``all`` or a comma-separated list of names."""
    value = value.strip()
    if value.lower() in {"none", "all"}:
        return value.lower()  # type: ignore[return-value]
    names = [name.strip() for name in value.split(",") if name.strip()]
    return names or "none"


def read_registry(mcp_file: Path) -> dict[str, Any]:
    """Read the target registry; missing or corrupt files read as empty."""
    if not mcp_file.is_file():
        return {SERVERS_KEY: {}}
    try:
        data = json.loads(mcp_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Treating unreadable registry %s as empty: %s", mcp_file, e)
        return {SERVERS_KEY: {}}

    if not isinstance(data, dict):
        logger.warning("Treating non-object registry %s as empty", mcp_file)
        return {SERVERS_KEY: {}}
    if not isinstance(data.get(SERVERS_KEY), dict):
        data[SERVERS_KEY] = {}
    return data


def write_registry(mcp_file: Path, registry: dict[str, Any]) -> None:
    """Write the registry with stable formatting and a trailing newline."""
    try:
        mcp_file.parent.mkdir(parents=True, exist_ok=True)
        mcp_file.write_text(
            json.dumps(registry, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"Failed to write service registry: {e}"
        raise RegistryError(msg, details={"path": str(mcp_file)}) from e


def installed_server_names(mcp_file: Path) -> set[str]:
    """Names currently present in the target registry."""
    return set(read_registry(mcp_file)[SERVERS_KEY])


def prepare_server(config: dict[str, Any], catalog: Catalog | None = None) -> dict[str, Any]:
    """Copy a definition for the target: drop the description, alias the command."""
    catalog = catalog or default_catalog()
    clean = copy.deepcopy(config)
    clean.pop("description", None)
    command = clean.get("command")
    if isinstance(command, str) and command in catalog.command_aliases:
        clean["command"] = catalog.command_aliases[command]
    return clean


def merge_servers(
    mcp_file: Path,
    servers: list[AvailableServer],
    dry_run: bool = False,
    catalog: Catalog | None = None,
) -> tuple[int, int]:
    """Add servers missing from the registry.

    Args:
        mcp_file: Target registry path
        servers: Candidates, already resolved against a selection
        dry_run: Count without writing
        catalog: Source of command aliases

    Returns:
        Tuple of (added, skipped)
    """
    with _REGISTRY_LOCK:
        registry = read_registry(mcp_file)
        installed = registry[SERVERS_KEY]

        added = 0
        skipped = 0
        for server in servers:
            if server.name in installed:
                skipped += 1
                continue
            if not dry_run:
                installed[server.name] = prepare_server(server.config, catalog)
            added += 1

        if added and not dry_run:
            write_registry(mcp_file, registry)

    logger.info("mcp: %d added, %d already present", added, skipped)
    return added, skipped


def translate_mcp(
    source_root: Path,
    ctx: TargetContext,
    dry_run: bool,
    selection: McpSelection,
    catalog: Catalog | None = None,
) -> McpResult:
    """Install the selected credential-free servers into the target registry."""
    if selection == "none":
        return McpResult(selection=selection)

    available = get_available_servers(source_root, catalog)
    if not available:
        return McpResult(selection=selection)

    to_install = resolve_selection(available, selection)
    added, skipped = merge_servers(ctx.mcp_file, to_install, dry_run, catalog)
    return McpResult(added=added, skipped=skipped, selection=selection)
