"""TemplateService: inspect the template groups modules are generated from.

Groups come from the packaged defaults plus any ``templatesPath``
directories, with overrides shadowing packaged files of the same name.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from catalyst.config.store import MergedConfiguration
from catalyst.domain.errors import CatalystError
from catalyst.domain.types import ModuleKind
from catalyst.infrastructure.templates import TemplateRenderer, output_path
from catalyst.services.result import ServiceResult

logger = logging.getLogger(__name__)


def template_search_paths(merged: MergedConfiguration, project_dir: Path) -> list[Path]:
    """``templatesPath`` entries, relative ones anchored at *project_dir*."""
    return [project_dir / Path(entry).expanduser() for entry in merged.get_list("templatesPath")]


def _kind_fields(group: str) -> dict[str, Any]:
    kind = ModuleKind.for_template(group)
    if kind is None:
        return {"kind": None, "display_name": group, "description": "Custom template group"}
    return {"kind": kind.value, "display_name": kind.display_name, "description": kind.description}


class TemplateService:
    """List template groups and show what a group generates."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self._renderer = renderer

    def list_templates(self) -> ServiceResult:
        op = "list_templates"
        items: list[dict[str, Any]] = []
        for group in self._renderer.available_templates():
            files = self._renderer.group_files(group)
            items.append({"name": group, **_kind_fields(group), "files": len(files)})
        logger.debug("Found %d template groups", len(items))
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})

    def show_template(self, group: str, *, content: bool = False) -> ServiceResult:
        """Files of *group* with their output paths, origin and the variables they use."""
        op = "show_template"
        try:
            names = self._renderer.group_files(group)
            files: list[dict[str, Any]] = []
            variables: set[str] = set()
            for name in names:
                loader_name = f"{group}/{name}"
                text, origin = self._renderer.source(loader_name)
                variables |= self._renderer.variables(loader_name)
                entry: dict[str, Any] = {
                    "template": name,
                    "output": output_path(name),
                    "origin": origin,
                }
                if content:
                    entry["content"] = text
                files.append(entry)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": group,
                **_kind_fields(group),
                "files": files,
                "variables": sorted(variables),
            },
        )
