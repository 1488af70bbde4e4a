"""PackageCatalog: Swift packages found below a project directory.

Complements ``workspace list``: it reports what exists on disk, and marks
which of those packages a workspace already references.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from catalyst.domain.errors import CatalystError
from catalyst.domain.paths import relative_path
from catalyst.services.result import ServiceResult
from catalyst.services.selection import discover_packages
from catalyst.services.workspace import WorkspaceRegistry


class PackageCatalog:
    """Discover local packages and their library products."""

    def __init__(self, root: Path, registry: WorkspaceRegistry | None = None) -> None:
        self._root = root.resolve()
        self._registry = registry or WorkspaceRegistry()

    def list_local(
        self, workspace: Path | None = None, *, full_paths: bool = False
    ) -> ServiceResult:
        """Every package below the root, in discovery order.

        Paths are relative to the root unless *full_paths* is set. With a
        *workspace*, each item also says whether the workspace references it.
        """
        op = "list_local_packages"
        members: set[Path] | None = None
        if workspace is not None:
            try:
                members = {m.path for m in self._registry.list_packages(workspace)}
            except CatalystError as exc:
                return ServiceResult.failure(op, exc)

        base = self._root.as_posix()
        items: list[dict[str, Any]] = []
        for package in discover_packages(self._root):
            item: dict[str, Any] = {
                "name": package.name,
                "path": (
                    str(package.path)
                    if full_paths
                    else relative_path(base, package.path.as_posix())
                ),
                "products": list(package.products),
            }
            if members is not None:
                item["in_workspace"] = package.path in members
            items.append(item)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": str(self._root),
                "workspace": str(workspace) if workspace is not None else None,
                "items": items,
                "count": len(items),
            },
        )
