"""WorkspaceRegistry — keep a workspace container's member list consistent.

Members are identified by their canonical absolute path. Every mutating
operation loads the container once, applies the change in memory and
persists it with a single atomic replace, so an interrupted command leaves
either the old or the new file on disk and never a partial one.

:class:`WorkspaceService` adapts the registry to the ``ServiceResult``
contract consumed by the CLI.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from catalyst.domain.errors import (
    CatalystError,
    WorkspaceCorruptionError,
    WorkspaceIOError,
    WorkspaceInvalidError,
)
from catalyst.domain.paths import relative_path
from catalyst.domain.types import PackageKind
from catalyst.infrastructure import workspace_file as wsf
from catalyst.infrastructure.filesystem import find_workspace
from catalyst.services.result import ServiceResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MemberPackage:
    """One package referenced by a workspace."""

    name: str
    path: Path
    location: str
    kind: PackageKind

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "location": self.location,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class WorkspaceContainer:
    path: Path
    members: tuple[MemberPackage, ...]


@dataclass(frozen=True)
class WorkspaceValid:
    member_count: int


@dataclass(frozen=True)
class WorkspaceInvalid:
    reason: str


WorkspaceValidation = WorkspaceValid | WorkspaceInvalid


def infer_package_kind(path: Path) -> PackageKind:
    """Classify a member directory by what it contains."""
    if (path / "Package.swift").is_file():
        return PackageKind.SWIFT_PACKAGE
    if path.suffix == ".xcodeproj":
        return PackageKind.XCODE_PROJECT
    if path.is_dir() and any(child.suffix == ".xcodeproj" for child in path.iterdir()):
        return PackageKind.XCODE_PROJECT
    return PackageKind.FOLDER


def _canonical(path: Path) -> Path:
    return path.expanduser().resolve()


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class WorkspaceRegistry:
    """Create, inspect and edit ``.xcworkspace`` containers."""

    def create_workspace(self, at: Path, name: str) -> Path:
        """Create an empty container named *name* inside directory *at*.

        Raises:
            WorkspaceIOError: The container already exists or cannot be written.
        """
        container = _canonical(at) / wsf.container_name(name)
        if container.exists():
            raise WorkspaceIOError(container, "already exists")
        try:
            container.mkdir(parents=True)
        except OSError as exc:
            raise WorkspaceIOError(container, f"cannot create directory: {exc}") from exc
        try:
            wsf.write_document(container, wsf.new_document())
        except WorkspaceIOError:
            container.rmdir()
            raise
        logger.info("Created workspace %s", container)
        return container

    def load(self, workspace_path: Path) -> WorkspaceContainer:
        """Read a container and its members in persisted order.

        Raises:
            WorkspaceCorruptionError: The container is unreadable, not XML or
                structurally invalid.
        """
        container = wsf.container_dir(workspace_path)
        root = wsf.read_document(container)
        members, defect = self._collect(root, container)
        if defect is not None:
            raise WorkspaceCorruptionError(container, defect)
        return WorkspaceContainer(path=container, members=tuple(members))

    def list_packages(self, workspace_path: Path) -> list[MemberPackage]:
        return list(self.load(workspace_path).members)

    def add_package(self, package_path: Path, workspace_path: Path) -> MemberPackage:
        """Reference *package_path* from the workspace unless already present.

        Raises:
            WorkspaceIOError: The package directory does not exist or the
                container cannot be written.
            WorkspaceCorruptionError: The container cannot be read.
        """
        package = _canonical(package_path)
        if not package.is_dir():
            raise WorkspaceIOError(package, "package directory does not exist")

        container = wsf.container_dir(workspace_path)
        root = wsf.read_document(container)
        members, defect = self._collect(root, container)
        if defect is not None:
            raise WorkspaceCorruptionError(container, defect)
        for member in members:
            if member.path == package:
                logger.debug("%s is already a member of %s", package, container)
                return member

        base = wsf.workspace_base_dir(container)
        location = wsf.group_location(relative_path(base.as_posix(), package.as_posix()))
        ET.SubElement(root, wsf.FILE_REF_TAG, {"location": location})
        wsf.write_document(container, root)

        member = MemberPackage(
            name=package.name,
            path=package,
            location=location,
            kind=infer_package_kind(package),
        )
        logger.info("Added %s to %s", member.name, container)
        return member

    def remove_package(self, package_path: Path, workspace_path: Path) -> bool:
        """Drop every reference to *package_path*; ``False`` when none existed.

        Raises:
            WorkspaceIOError: The container cannot be written.
            WorkspaceCorruptionError: The container cannot be read or
                holds a malformed entry.
        """
        package = _canonical(package_path)
        container = wsf.container_dir(workspace_path)
        root = wsf.read_document(container)
        _, defect = self._collect(root, container)
        if defect is not None:
            raise WorkspaceCorruptionError(container, defect)

        removed = False
        for entry in list(wsf.iter_file_refs(root, wsf.workspace_base_dir(container))):
            if isinstance(entry, str) or not entry.location:
                continue
            target = wsf.resolve_location(entry.location, entry.base_dir)
            if target is not None and _canonical(target) == package:
                entry.parent.remove(entry.element)
                removed = True

        if removed:
            wsf.write_document(container, root)
            logger.info("Removed %s from %s", package.name, container)
        return removed

    def validate_workspace(self, workspace_path: Path) -> WorkspaceValidation:
        """Check a container without modifying it.

        Raises:
            WorkspaceCorruptionError: The data file exists but is unreadable
                or not XML.
        """
        container = wsf.container_dir(workspace_path)
        if not wsf.data_file(container).is_file():
            return WorkspaceInvalid(f"{container} does not contain {wsf.DATA_FILENAME}")
        root = wsf.read_document(container)
        members, defect = self._collect(root, container)
        if defect is not None:
            return WorkspaceInvalid(defect)
        return WorkspaceValid(member_count=len(members))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _collect(root: ET.Element, container: Path) -> tuple[list[MemberPackage], str | None]:
        """Flatten members in document order; report the first defect found."""
        if root.tag != wsf.ROOT_TAG:
            return [], f"root element is <{root.tag}>, expected <{wsf.ROOT_TAG}>"

        members: list[MemberPackage] = []
        seen: set[Path] = set()
        for entry in wsf.iter_file_refs(root, wsf.workspace_base_dir(container)):
            if isinstance(entry, str):
                return members, entry
            location = entry.location
            if not location:
                return members, f"FileRef #{entry.index} has no location"
            target = wsf.resolve_location(location, entry.base_dir)
            if target is None:
                return members, f"FileRef #{entry.index} has unsupported location {location!r}"
            path = _canonical(target)
            if path in seen:
                return members, f"duplicate member {path}"
            seen.add(path)
            members.append(
                MemberPackage(
                    name=path.name,
                    path=path,
                    location=location,
                    kind=infer_package_kind(path),
                )
            )
        return members, None


# ---------------------------------------------------------------------------
# Service adapter
# ---------------------------------------------------------------------------


class WorkspaceService:
    """Workspace operations returning :class:`ServiceResult`."""

    def __init__(self, registry: WorkspaceRegistry | None = None) -> None:
        self._registry = registry or WorkspaceRegistry()

    def locate(self, workspace: Path | None, project_dir: Path) -> Path | None:
        """Explicit workspace path, or the first container in *project_dir*."""
        if workspace is not None:
            return workspace
        return find_workspace(project_dir)

    def create(self, at: Path, name: str) -> ServiceResult:
        op = "create_workspace"
        try:
            path = self._registry.create_workspace(at, name)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"path": str(path)})

    def add(self, package_path: Path, workspace_path: Path) -> ServiceResult:
        op = "add_package"
        try:
            before = {m.path for m in self._registry.list_packages(workspace_path)}
            member = self._registry.add_package(package_path, workspace_path)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "workspace": str(workspace_path),
                "package": member.to_dict(),
                "added": member.path not in before,
            },
        )

    def remove(self, package_path: Path, workspace_path: Path) -> ServiceResult:
        op = "remove_package"
        try:
            removed = self._registry.remove_package(package_path, workspace_path)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "workspace": str(workspace_path),
                "path": str(_canonical(package_path)),
                "removed": removed,
            },
        )

    def list_packages(self, workspace_path: Path, *, sort_by_name: bool = False) -> ServiceResult:
        op = "list_packages"
        try:
            members = self._registry.list_packages(workspace_path)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        if sort_by_name:
            members = sorted(members, key=lambda m: m.name.lower())
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "workspace": str(workspace_path),
                "items": [m.to_dict() for m in members],
                "count": len(members),
            },
        )

    def validate(self, workspace_path: Path) -> ServiceResult:
        op = "validate_workspace"
        try:
            outcome = self._registry.validate_workspace(workspace_path)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        if isinstance(outcome, WorkspaceInvalid):
            invalid = WorkspaceInvalidError(workspace_path, outcome.reason)
            return ServiceResult.failure(op, invalid)
        return ServiceResult(
            ok=True,
            op=op,
            data={"workspace": str(workspace_path), "valid": True, "members": outcome.member_count},
        )
