"""Read and write Xcode workspace containers.

A workspace is a ``<Name>.xcworkspace`` directory holding
``contents.xcworkspacedata``::

    <?xml version="1.0" encoding="UTF-8"?>
    <Workspace version="1.0">
       <FileRef location="group:Modules/Feature" />
    </Workspace>

References may be nested inside ``<Group>`` elements whose own location
shifts the base directory of their children. This module only knows the
file format; membership rules live in :mod:`catalyst.services.workspace`.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from catalyst.domain.errors import WorkspaceCorruptionError, WorkspaceIOError
from catalyst.infrastructure.filesystem import WORKSPACE_SUFFIX, atomic_write_text

DATA_FILENAME = "contents.xcworkspacedata"
ROOT_TAG = "Workspace"
FILE_REF_TAG = "FileRef"
GROUP_TAG = "Group"

# Location schemes resolved against the directory that holds the workspace.
RELATIVE_SCHEMES = frozenset({"group", "container", "self"})
ABSOLUTE_SCHEME = "absolute"

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass(frozen=True)
class FileRefEntry:
    """One ``<FileRef>`` element with enough context to resolve or remove it."""

    element: ET.Element
    parent: ET.Element
    base_dir: Path
    index: int

    @property
    def location(self) -> str | None:
        return self.element.get("location")


def container_dir(path: Path) -> Path:
    """Normalize a workspace argument to the ``.xcworkspace`` directory."""
    if path.name == DATA_FILENAME:
        return path.parent
    return path


def data_file(workspace: Path) -> Path:
    return container_dir(workspace) / DATA_FILENAME


def workspace_base_dir(workspace: Path) -> Path:
    """Directory that ``group:`` locations are relative to."""
    return container_dir(workspace).resolve().parent


def container_name(name: str) -> str:
    """``Modules`` or ``Modules.xcworkspace`` → ``Modules.xcworkspace``."""
    return name if name.endswith(WORKSPACE_SUFFIX) else f"{name}{WORKSPACE_SUFFIX}"


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


def split_location(location: str) -> tuple[str, str]:
    """``"group:Modules/Feature"`` → ``("group", "Modules/Feature")``."""
    scheme, sep, rest = location.partition(":")
    if not sep:
        return "", location
    return scheme, rest


def resolve_location(location: str, base_dir: Path) -> Path | None:
    """Absolute path a location points at, or ``None`` for an unknown scheme."""
    scheme, rest = split_location(location)
    if scheme == ABSOLUTE_SCHEME:
        return Path(rest)
    if scheme in RELATIVE_SCHEMES:
        return base_dir / rest if rest else base_dir
    return None


def group_location(relative: str) -> str:
    return f"group:{relative}"


# ---------------------------------------------------------------------------
# Document I/O
# ---------------------------------------------------------------------------


def new_document() -> ET.Element:
    return ET.Element(ROOT_TAG, {"version": "1.0"})


def read_document(workspace: Path) -> ET.Element:
    """Parse a workspace's data file.

    Raises:
        WorkspaceCorruptionError: The file is missing, unreadable or not XML.
    """
    path = data_file(workspace)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise WorkspaceCorruptionError(path, str(exc)) from exc
    try:
        return ET.fromstring(raw)
    except ET.ParseError as exc:
        raise WorkspaceCorruptionError(path, f"not valid XML: {exc}") from exc


def render_document(root: ET.Element) -> str:
    tree = ET.ElementTree(root)
    ET.indent(tree, space="   ")
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def write_document(workspace: Path, root: ET.Element) -> None:
    """Persist *root* atomically; the previous file survives any failure."""
    path = data_file(workspace)
    try:
        atomic_write_text(path, render_document(root))
    except OSError as exc:
        raise WorkspaceIOError(path, f"write failed: {exc}") from exc


def iter_file_refs(root: ET.Element, base_dir: Path) -> Iterator[FileRefEntry | str]:
    """Yield every ``<FileRef>`` in document order, descending into groups.

    Structural defects are yielded as strings describing the problem so
    that callers can decide whether to report or raise.
    """
    counter = 0

    def walk(parent: ET.Element, base: Path) -> Iterator[FileRefEntry | str]:
        nonlocal counter
        for child in list(parent):
            if child.tag == FILE_REF_TAG:
                counter += 1
                yield FileRefEntry(element=child, parent=parent, base_dir=base, index=counter)
            elif child.tag == GROUP_TAG:
                location = child.get("location") or "container:"
                group_base = resolve_location(location, base)
                if group_base is None:
                    yield f"Group has unsupported location {location!r}"
                    continue
                yield from walk(child, group_base)

    yield from walk(root, base_dir)
