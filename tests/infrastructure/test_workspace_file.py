"""Tests for the workspace container file format."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from conftest import write_workspace

from catalyst.domain.errors import WorkspaceCorruptionError
from catalyst.infrastructure.workspace_file import (
    FileRefEntry,
    container_dir,
    container_name,
    data_file,
    group_location,
    iter_file_refs,
    new_document,
    read_document,
    render_document,
    resolve_location,
    split_location,
    workspace_base_dir,
)


class TestPaths:
    def test_container_dir_accepts_data_file(self, tmp_path: Path) -> None:
        container = tmp_path / "App.xcworkspace"
        assert container_dir(container / "contents.xcworkspacedata") == container
        assert container_dir(container) == container
        assert data_file(container) == container / "contents.xcworkspacedata"

    def test_base_dir_is_parent(self, tmp_path: Path) -> None:
        container = write_workspace(tmp_path)
        assert workspace_base_dir(container) == tmp_path.resolve()

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("Modules", "Modules.xcworkspace"), ("Modules.xcworkspace", "Modules.xcworkspace")],
    )
    def test_container_name(self, name: str, expected: str) -> None:
        assert container_name(name) == expected


class TestLocations:
    def test_split(self) -> None:
        assert split_location("group:Modules/Feature") == ("group", "Modules/Feature")
        assert split_location("Feature") == ("", "Feature")

    def test_resolve(self, tmp_path: Path) -> None:
        assert resolve_location("group:Kit", tmp_path) == tmp_path / "Kit"
        assert resolve_location("self:", tmp_path) == tmp_path
        assert resolve_location("absolute:/opt/Kit", tmp_path) == Path("/opt/Kit")
        assert resolve_location("developer:Kit", tmp_path) is None

    def test_group_location(self) -> None:
        assert group_location("../Shared") == "group:../Shared"


class TestDocument:
    def test_render_format(self) -> None:
        root = new_document()
        ET.SubElement(root, "FileRef", {"location": "group:Kit"})
        assert render_document(root) == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<Workspace version="1.0">\n'
            '   <FileRef location="group:Kit" />\n'
            "</Workspace>\n"
        )

    def test_read_missing(self, tmp_path: Path) -> None:
        with pytest.raises(WorkspaceCorruptionError):
            read_document(tmp_path / "App.xcworkspace")

    def test_read_invalid_xml(self, tmp_path: Path) -> None:
        container = tmp_path / "App.xcworkspace"
        container.mkdir()
        (container / "contents.xcworkspacedata").write_text("<<", encoding="utf-8")
        with pytest.raises(WorkspaceCorruptionError, match="not valid XML"):
            read_document(container)


class TestIterFileRefs:
    def test_groups_shift_base(self, tmp_path: Path) -> None:
        root = ET.fromstring(
            '<Workspace version="1.0">'
            '<FileRef location="group:Top"/>'
            '<Group location="group:Modules" name="Modules">'
            '<FileRef location="group:Core"/>'
            "<Group><FileRef location=\"group:Deep\"/></Group>"
            "</Group>"
            "</Workspace>"
        )
        entries = list(iter_file_refs(root, tmp_path))
        assert all(isinstance(e, FileRefEntry) for e in entries)
        refs = [e for e in entries if isinstance(e, FileRefEntry)]
        assert [e.location for e in refs] == ["group:Top", "group:Core", "group:Deep"]
        assert [e.base_dir for e in refs] == [tmp_path, tmp_path / "Modules", tmp_path / "Modules"]
        assert [e.index for e in refs] == [1, 2, 3]
        assert refs[1].parent.tag == "Group"

    def test_unsupported_group_is_reported(self, tmp_path: Path) -> None:
        root = ET.fromstring(
            '<Workspace><Group location="web:x"><FileRef location="group:a"/></Group></Workspace>'
        )
        entries = list(iter_file_refs(root, tmp_path))
        assert entries == ["Group has unsupported location 'web:x'"]
