"""Tests for TemplateService."""

from __future__ import annotations

from pathlib import Path

import pytest

from catalyst.config.store import ConfigLayer, LayerKind, MergedConfiguration
from catalyst.infrastructure.templates import TemplateRenderer
from catalyst.services.templates import TemplateService, template_search_paths


@pytest.fixture
def overrides(tmp_path: Path) -> Path:
    root = tmp_path / "templates"
    widget = root / "Widget"
    widget.mkdir(parents=True)
    (widget / "Package.swift.j2").write_text(
        "// {{ ModuleName }} by {{ Author }}\n{% set local = 1 %}{{ local }}\n", encoding="utf-8"
    )
    core = root / "CoreModule"
    core.mkdir()
    (core / "README.md.j2").write_text("# {{ ModuleName }}\n", encoding="utf-8")
    return root


class TestListTemplates:
    def test_packaged_groups_carry_kind_text(self) -> None:
        result = TemplateService(TemplateRenderer()).list_templates()
        assert result.ok
        assert result.data["count"] == 4
        by_name = {item["name"]: item for item in result.data["items"]}
        feature = by_name["FeatureModule"]
        assert feature["kind"] == "feature"
        assert feature["display_name"] == "Feature Module"
        assert "UI components" in feature["description"]
        assert feature["files"] > 0

    def test_custom_group(self, overrides: Path) -> None:
        result = TemplateService(TemplateRenderer([overrides])).list_templates()
        widget = next(item for item in result.data["items"] if item["name"] == "Widget")
        assert widget["kind"] is None
        assert widget["files"] == 1


class TestShowTemplate:
    def test_files_and_variables(self) -> None:
        result = TemplateService(TemplateRenderer()).show_template("CoreModule")
        assert result.ok
        outputs = [entry["output"] for entry in result.data["files"]]
        assert "Package.swift" in outputs
        assert "Sources/{{ModuleName}}/{{ModuleName}}.swift" in outputs
        assert "ModuleName" in result.data["variables"]
        assert all("content" not in entry for entry in result.data["files"])

    def test_assigned_names_are_not_variables(self, overrides: Path) -> None:
        service = TemplateService(TemplateRenderer([overrides]))
        result = service.show_template("Widget", content=True)
        assert result.data["variables"] == ["Author", "ModuleName"]
        assert result.data["files"][0]["content"].startswith("// {{ ModuleName }}")

    def test_override_origin(self, overrides: Path) -> None:
        result = TemplateService(TemplateRenderer([overrides])).show_template("CoreModule")
        origins = {entry["output"]: entry["origin"] for entry in result.data["files"]}
        assert origins["README.md"] == str(overrides / "CoreModule" / "README.md.j2")
        assert origins["Package.swift"] != str(overrides / "CoreModule" / "Package.swift.j2")

    def test_unknown_group(self) -> None:
        result = TemplateService(TemplateRenderer()).show_template("Nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "TEMPLATE_NOT_FOUND"
        assert "CoreModule" in result.error.detail["available"]


class TestSearchPaths:
    def test_relative_entries_anchor_at_project(self, tmp_path: Path) -> None:
        layer = ConfigLayer(
            kind=LayerKind.PROJECT, data={"templatesPath": ["templates", "/abs/t"]}
        )
        merged = MergedConfiguration.fold([layer])
        assert template_search_paths(merged, tmp_path) == [
            tmp_path / "templates",
            Path("/abs/t"),
        ]
