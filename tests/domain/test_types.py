"""Tests for module and package enums."""

from __future__ import annotations

import pytest

from catalyst.domain.types import ModuleKind, PackageKind


class TestModuleKind:
    @pytest.mark.parametrize(
        ("kind", "template"),
        [
            (ModuleKind.CORE, "CoreModule"),
            (ModuleKind.FEATURE, "FeatureModule"),
            (ModuleKind.SHARED, "SharedModule"),
            (ModuleKind.MICROAPP, "MicroApp"),
        ],
    )
    def test_template_name(self, kind: ModuleKind, template: str) -> None:
        assert kind.template_name == template

    def test_paths_key(self) -> None:
        assert ModuleKind.FEATURE.paths_key == "paths.featureModules"
        assert ModuleKind.MICROAPP.paths_key == "paths.microApps"

    def test_for_template(self) -> None:
        assert ModuleKind.for_template("MicroApp") is ModuleKind.MICROAPP
        assert ModuleKind.for_template("SharedModule") is ModuleKind.SHARED
        assert ModuleKind.for_template("Custom") is None

    def test_every_kind_has_display_text(self) -> None:
        for kind in ModuleKind:
            assert kind.display_name
            assert kind.description


class TestPackageKind:
    def test_values(self) -> None:
        assert {k.value for k in PackageKind} == {"swift_package", "xcode_project", "folder"}

