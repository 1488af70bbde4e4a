"""Jinja2 template loading with per-project override support.

Templates are organised in groups, one directory per module kind
(``CoreModule``, ``FeatureModule``, ``SharedModule``, ``MicroApp``).
Directories listed in ``templatesPath`` are searched before the packaged
defaults, so a project can override a single file of a group without
copying the rest.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import jinja2
from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader, meta

from catalyst.domain.errors import TemplateNotFound

TEMPLATE_SUFFIX = ".j2"

_PATH_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")
_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z]|[0-9])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def camel_case(value: str) -> str:
    words = [w for w in _WORD_SPLIT.split(value) if w]
    if not words:
        return ""
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def pascal_case(value: str) -> str:
    return "".join(w.capitalize() for w in _WORD_SPLIT.split(value) if w)


def snake_case(value: str) -> str:
    """``HTTPClientKit`` → ``http_client_kit``."""
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", value)
    return _WORD_BOUNDARY.sub(r"\1_\2", text).lower()


def kebab_case(value: str) -> str:
    return snake_case(value).replace("_", "-")


FILTERS = {
    "camelCase": camel_case,
    "pascalCase": pascal_case,
    "snakeCase": snake_case,
    "kebabCase": kebab_case,
    "moduleFileName": lambda name: f"{name}.swift",
    "testFileName": lambda name: f"{name}Tests.swift",
    "bundleIdentifier": lambda name, org="com.example": f"{org}.{name}",
}


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


def build_template_environment(search_paths: Iterable[Path] = ()) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults."""
    loaders: list[BaseLoader] = []
    directories = [str(p) for p in search_paths if p.is_dir()]
    if directories:
        loaders.append(FileSystemLoader(directories))
    loaders.append(PackageLoader("catalyst", "templates"))
    env = Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)
    env.filters.update(FILTERS)
    return env


def substitute_path(relative: str, context: Mapping[str, Any]) -> str:
    """Replace ``{{Key}}`` placeholders in a template path with string context values."""

    def replace(match: re.Match[str]) -> str:
        value = context.get(match.group(1))
        return value if isinstance(value, str) else match.group(0)

    return _PATH_PLACEHOLDER.sub(replace, relative)


def output_path(name: str) -> str:
    """Drop the ``.j2`` suffix from a template file name."""
    return name[: -len(TEMPLATE_SUFFIX)] if name.endswith(TEMPLATE_SUFFIX) else name


class TemplateRenderer:
    """Render single templates or whole template groups."""

    def __init__(self, search_paths: Iterable[Path] = ()) -> None:
        self._env = build_template_environment(search_paths)

    @property
    def environment(self) -> Environment:
        return self._env

    def available_templates(self) -> list[str]:
        """Template group names, sorted."""
        groups = {name.split("/", 1)[0] for name in self._env.list_templates() if "/" in name}
        return sorted(groups)

    def group_files(self, group: str) -> list[str]:
        """Loader-relative file names of *group* (``Sources/{{ModuleName}}/x.swift.j2``).

        Raises:
            TemplateNotFound: The group has no templates.
        """
        prefix = f"{group}/"
        names = [n[len(prefix) :] for n in self._env.list_templates() if n.startswith(prefix)]
        if not names:
            raise TemplateNotFound(group, self.available_templates())
        return names

    def source(self, name: str) -> tuple[str, str | None]:
        """Raw text of one template and the file it was loaded from.

        Raises:
            TemplateNotFound: No search path provides *name*.
        """
        loader = self._env.loader
        try:
            if loader is None:
                raise jinja2.TemplateNotFound(name)
            text, filename, _ = loader.get_source(self._env, name)
        except jinja2.TemplateNotFound as exc:
            raise TemplateNotFound(name, self.available_templates()) from exc
        return text, filename

    def variables(self, name: str) -> set[str]:
        """Context names used by *name*, in its path or its body.

        Names the template assigns itself are not included.
        """
        text, _ = self.source(name)
        body = meta.find_undeclared_variables(self._env.parse(text))
        return body | set(_PATH_PLACEHOLDER.findall(name))

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Render one template by its loader name (``CoreModule/Package.swift.j2``).

        Raises:
            TemplateNotFound: No search path provides *name*.
        """
        try:
            template = self._env.get_template(name)
        except jinja2.TemplateNotFound as exc:
            raise TemplateNotFound(name, self.available_templates()) from exc
        return template.render(**context)

    def render_group(self, group: str, context: Mapping[str, Any]) -> list[tuple[str, str]]:
        """Render every file of *group* as ``(output path, text)`` pairs.

        Output paths are relative to the package directory, with path
        placeholders substituted and the ``.j2`` suffix removed.

        Raises:
            TemplateNotFound: The group has no templates.
        """
        rendered: list[tuple[str, str]] = []
        for name in self.group_files(group):
            relative = output_path(substitute_path(name, context))
            rendered.append((relative, self.render(f"{group}/{name}", context)))
        return rendered
