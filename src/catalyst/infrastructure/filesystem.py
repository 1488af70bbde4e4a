"""Filesystem helpers shared by config layers and workspace containers.

INVARIANT: Persisted files are replaced, never rewritten in place. A write
goes to a temporary sibling first and is renamed over the destination, so
a failure at any point leaves the previous file untouched.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

# Directories never searched for packages or workspaces.
SKIP_DIRS = frozenset(
    {
        ".git",
        ".build",
        "DerivedData",
        ".swiftpm",
        "build",
        "Pods",
        "node_modules",
        ".vscode",
        ".idea",
    }
)

WORKSPACE_SUFFIX = ".xcworkspace"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


def atomic_write_text(path: Path, text: str) -> None:
    """Write *text* to *path* via write-temp-then-replace.

    Creates parent directories if they don't exist. The temporary file
    lives in the destination directory so the final ``os.replace`` is a
    same-filesystem rename. An existing destination keeps its permission
    bits. Raises ``OSError`` on failure, after removing the temporary file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode: int | None = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = None
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            tmp_path.chmod(mode)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_workspace(start: Path) -> Path | None:
    """Return the first ``*.xcworkspace`` directly inside *start* (sorted by name)."""
    if not start.is_dir():
        return None
    candidates = sorted(
        p for p in start.iterdir() if p.suffix == WORKSPACE_SUFFIX and p.is_dir()
    )
    return candidates[0] if candidates else None


def find_package_dirs(root: Path) -> list[Path]:
    """Directories under *root* (inclusive) that contain a ``Package.swift``.

    Skips build output and tooling directories listed in :data:`SKIP_DIRS`.
    Results are in depth-first, name-sorted order.
    """
    results: list[Path] = []
    if not root.is_dir():
        return results
    if (root / "Package.swift").is_file():
        results.append(root)
    try:
        children = sorted(root.iterdir())
    except OSError:
        return results
    for child in children:
        if child.name in SKIP_DIRS or child.suffix == WORKSPACE_SUFFIX:
            continue
        if child.is_dir() and not child.is_symlink():
            results.extend(find_package_dirs(child))
    return results
