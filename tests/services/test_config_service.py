"""Tests for ConfigService."""

from __future__ import annotations

from pathlib import Path

import pytest

from catalyst.config.store import ConfigSource, ConfigurationStore, LayerKind
from catalyst.services.config import ConfigService


@pytest.fixture
def service(tmp_path: Path) -> ConfigService:
    return ConfigService(
        [
            ConfigSource(kind=LayerKind.USER, path=tmp_path / "user.yml"),
            ConfigSource(kind=LayerKind.PROJECT, path=tmp_path / "project.yml"),
        ]
    )


class TestGet:
    def test_default_value(self, service: ConfigService) -> None:
        result = service.get("paths.microApps")
        assert result.ok
        assert result.data == {
            "key": "paths.microApps",
            "value": "./MicroApps",
            "source": "default",
        }

    def test_mapping_value(self, service: ConfigService) -> None:
        result = service.get("paths")
        assert result.ok
        assert result.data["value"]["coreModules"] == "."

    def test_not_set(self, service: ConfigService) -> None:
        result = service.get("author")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CONFIG_KEY_ERROR"
        assert result.error.detail == {"key": "author", "reason": "not set"}


class TestSet:
    def test_set_persists_project_layer(self, service: ConfigService, tmp_path: Path) -> None:
        result = service.set("dependencyExclusions", "PackageA, PackageB")
        assert result.ok
        assert result.data["value"] == ["PackageA", "PackageB"]
        assert result.data["layer"] == "project"
        assert result.data["path"] == str(tmp_path / "project.yml")
        assert "PackageA" in (tmp_path / "project.yml").read_text(encoding="utf-8")

    def test_set_user_layer(self, service: ConfigService, tmp_path: Path) -> None:
        result = service.set("author", "Jane", LayerKind.USER)
        assert result.ok
        assert (tmp_path / "user.yml").is_file()
        assert service.get("author").data["source"] == "user"

    def test_set_reports_layer_value_not_merged(self, service: ConfigService) -> None:
        service.set("author", "Project", LayerKind.PROJECT)
        result = service.set("author", "User", LayerKind.USER)
        assert result.data["value"] == "User"
        assert service.get("author").data["value"] == "Project"

    def test_set_failure(self, service: ConfigService, tmp_path: Path) -> None:
        result = service.set("colorOutput", "purple")
        assert not result.ok
        assert result.data == {"key": "colorOutput"}
        assert not (tmp_path / "project.yml").exists()


class TestList:
    def test_merged(self, service: ConfigService) -> None:
        result = service.list_settings()
        assert result.data["layer"] == "merged"
        assert result.data["path"] is None
        assert result.data["settings"]["swiftVersion"] == "6.0"
        assert result.data["count"] == len(result.data["settings"])

    def test_single_layer(self, service: ConfigService, tmp_path: Path) -> None:
        service.set("author", "Jane")
        result = service.list_settings(LayerKind.PROJECT)
        assert result.data["settings"] == {"author": "Jane"}
        assert result.data["path"] == str(tmp_path / "project.yml")


class TestResetAndInit:
    def test_reset(self, service: ConfigService, tmp_path: Path) -> None:
        service.set("author", "Jane")
        result = service.reset(LayerKind.PROJECT)
        assert result.ok
        assert result.data["removed"] is True
        assert not (tmp_path / "project.yml").exists()

    def test_reset_missing_file(self, service: ConfigService) -> None:
        result = service.reset(LayerKind.USER)
        assert result.ok
        assert result.data["removed"] is False

    def test_reset_defaults_fails(self, service: ConfigService) -> None:
        result = service.reset(LayerKind.DEFAULT)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CONFIG_IO_ERROR"

    def test_init(self, service: ConfigService, tmp_path: Path) -> None:
        result = service.init(LayerKind.USER)
        assert result.ok
        text = (tmp_path / "user.yml").read_text(encoding="utf-8")
        assert "swiftVersion: '6.0'" in text or 'swiftVersion: "6.0"' in text

    def test_init_refuses_overwrite(self, service: ConfigService, tmp_path: Path) -> None:
        (tmp_path / "project.yml").write_text("author: Jane\n", encoding="utf-8")
        assert not service.init().ok
        assert service.init(force=True).ok

    def test_reset_then_get_sees_defaults(self, service: ConfigService) -> None:
        service.set("author", "Jane")
        service.reset(LayerKind.PROJECT)
        result = service.get("author")
        assert result.error is not None
        assert result.error.code == "CONFIG_KEY_ERROR"


class TestUnparseableLayer:
    @pytest.fixture
    def broken(self, tmp_path: Path) -> Path:
        path = tmp_path / "project.yml"
        path.write_text("author: [unclosed\n", encoding="utf-8")
        return path

    def test_reads_report_parse_error(self, service: ConfigService, broken: Path) -> None:
        for result in (service.get("author"), service.list_settings(), service.set("a", "b")):
            assert not result.ok
            assert result.error is not None
            assert result.error.code == "CONFIG_PARSE_ERROR"

    def test_reset_removes_file_without_parsing(
        self, service: ConfigService, broken: Path
    ) -> None:
        result = service.reset(LayerKind.PROJECT)
        assert result.ok
        assert result.data["removed"] is True
        assert not broken.exists()
        assert service.get("swiftVersion").ok

    def test_init_force_replaces_file(self, service: ConfigService, broken: Path) -> None:
        assert not service.init().ok
        assert service.init(force=True).ok
        assert service.get("swiftVersion").data["source"] == "project"

    def test_preloaded_store_is_used(self, tmp_path: Path, broken: Path) -> None:
        store = ConfigurationStore.load(
            [ConfigSource(kind=LayerKind.USER, path=tmp_path / "user.yml")]
        )
        result = ConfigService([], store).get("swiftVersion")
        assert result.ok
        assert result.data["source"] == "default"
