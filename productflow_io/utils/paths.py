"""Filesystem helpers for the standard ProductFlow workspace structure."""

# Module responsibilities:
# - Define the default ~/ProductFlow directory layout and create folders on demand.
# - The ``out`` folder is the default destination for CLI exports.

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

DEFAULT_BASE = Path.home() / "ProductFlow"


def ensure_default_structure(base: Optional[Path] = None) -> Dict[str, Path]:
    """Ensure the default ProductFlow directory structure exists.

    Args:
        base: Optional override for the ProductFlow base directory.

    Returns:
        Mapping with keys ``base``, ``inbox``, ``out``, ``tmp``, ``logs``.
    """

    target_base = base or DEFAULT_BASE
    paths = {
        "base": target_base,
        "inbox": target_base / "inbox",
        "out": target_base / "out",
        "tmp": target_base / "tmp",
        "logs": target_base / "logs",
    }
    for path in paths.values():
        path.mkdir(parents=True, exist_ok=True)
    return paths
