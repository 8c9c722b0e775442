"""ecc2cursor: translate Claude Code configuration trees into Cursor configuration."""

__version__ = "0.1.0"
__author__ = "ecc2cursor Contributors"
__description__ = "Sync Everything Claude Code configs into Cursor"

from .catalog import Catalog, CatalogLoader, default_catalog
from .models import Category, McpSelection, SyncOptions, SyncResult, TargetContext
from .naming import NamingPolicy, prefix_name
from .scanner import scan_all, scan_directory
from .sync import run_clean, run_sync, run_translation

__all__ = [
    "Catalog",
    "CatalogLoader",
    "Category",
    "McpSelection",
    "NamingPolicy",
    "SyncOptions",
    "SyncResult",
    "TargetContext",
    "default_catalog",
    "prefix_name",
    "run_clean",
    "run_sync",
    "run_translation",
    "scan_all",
    "scan_directory",
]
