"""Tests for the ``catalyst template`` command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from catalyst.cli import cli


class TestTemplateList:
    def test_lists_packaged_groups(self, cli_runner: CliRunner, project: Path) -> None:
        result = cli_runner.invoke(cli, ["template", "list"])
        assert result.exit_code == 0, result.output
        for name in ("CoreModule", "FeatureModule", "SharedModule", "MicroApp"):
            assert name in result.output
        assert "4 template groups" in result.output

    def test_quiet_prints_names(self, cli_runner: CliRunner, project: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "template", "list"])
        assert result.output.split() == ["CoreModule", "FeatureModule", "MicroApp", "SharedModule"]

    def test_configured_template_path(self, cli_runner: CliRunner, project: Path) -> None:
        (project / "templates" / "Widget").mkdir(parents=True)
        (project / "templates" / "Widget" / "Package.swift.j2").write_text(
            "// {{ ModuleName }}\n", encoding="utf-8"
        )
        (project / ".catalyst.yml").write_text("templatesPath:\n  - templates\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["--json", "template", "list"])
        names = [item["name"] for item in json.loads(result.output)["data"]["items"]]
        assert "Widget" in names


class TestTemplateShow:
    def test_show(self, cli_runner: CliRunner, project: Path) -> None:
        result = cli_runner.invoke(cli, ["template", "show", "FeatureModule"])
        assert result.exit_code == 0, result.output
        assert "FeatureModule (Feature Module)" in result.output
        assert "Package.swift" in result.output
        assert "ModuleName" in result.output

    def test_show_content(self, cli_runner: CliRunner, project: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "template", "show", "CoreModule", "--content"])
        files = json.loads(result.output)["data"]["files"]
        manifest = next(entry for entry in files if entry["output"] == "Package.swift")
        assert "{{ ModuleName }}" in manifest["content"]

    def test_unknown_group_fails(self, cli_runner: CliRunner, project: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "template", "show", "Widget"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "TEMPLATE_NOT_FOUND"
