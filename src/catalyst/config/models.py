"""Pydantic configuration schema with code-baked defaults.

Sparse YAML contract: defaults are baked here and every ``.catalyst.yml``
only carries overrides. Keys are camelCase on disk (``swiftVersion``,
``paths.coreModules``) to stay compatible with existing config files.

The schema is also the source of truth for string coercion in
``config set``: :func:`schema_kind` reports whether a dotted key holds a
list, a bool, a mapping or a plain scalar.
"""

from __future__ import annotations

import types
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class ModulePaths(BaseModel):
    """[paths] section: default target directory per module kind."""

    model_config = _CAMEL

    core_modules: str | None = "."
    feature_modules: str | None = "."
    shared_modules: str | None = "./Modules/Shared"
    micro_apps: str | None = "./MicroApps"


class CatalystConfig(BaseModel):
    """Root configuration composing every known key."""

    model_config = _CAMEL

    # --- Identity ---
    author: str | None = None
    organization_name: str | None = None
    bundle_identifier_prefix: str | None = None

    # --- Templates ---
    templates_path: list[str] | None = None
    default_template_variables: dict[str, str] | None = None

    # --- Modules ---
    swift_version: str | None = "6.0"
    default_platforms: list[str] | None = Field(default_factory=lambda: [".iOS(.v15)"])

    # --- Output ---
    verbose: bool | None = False
    color_output: bool | None = True

    # --- Paths ---
    default_modules_path: str | None = "."
    paths: ModulePaths = Field(default_factory=ModulePaths)

    # --- Package management ---
    brew_packages: list[str] | None = Field(
        default_factory=lambda: ["swiftlint", "swiftformat", "xcodes"]
    )

    # --- Dependency selection ---
    skip_dependency_resolver: bool | None = False
    dependency_exclusions: list[str] | None = None


def default_settings() -> dict[str, Any]:
    """Built-in defaults as a camelCase mapping (``None`` values omitted)."""
    return CatalystConfig().model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Schema introspection
# ---------------------------------------------------------------------------

LIST = "list"
BOOL = "bool"
MAPPING = "mapping"
SCALAR = "scalar"


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _fields_by_alias(model: type[BaseModel]) -> dict[str, Any]:
    return {(info.alias or name): info for name, info in model.model_fields.items()}


def schema_kind(path: str) -> str | None:
    """Classify the value stored at dotted *path*, or ``None`` for unknown keys.

    Examples:
        >>> schema_kind("dependencyExclusions")
        'list'
        >>> schema_kind("paths.coreModules")
        'scalar'
        >>> schema_kind("defaultTemplateVariables.Team")
        'scalar'
        >>> schema_kind("unknownKey") is None
        True
    """
    model: type[BaseModel] = CatalystConfig
    segments = path.split(".")
    for index, segment in enumerate(segments):
        info = _fields_by_alias(model).get(segment)
        if info is None:
            return None
        annotation = _unwrap_optional(info.annotation)
        last = index == len(segments) - 1
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            if last:
                return MAPPING
            model = annotation
            continue
        origin = get_origin(annotation)
        if not last:
            # Only free-form string maps accept a nested segment.
            return SCALAR if origin is dict and index == len(segments) - 2 else None
        if origin is list:
            return LIST
        if origin is dict:
            return MAPPING
        if annotation is bool:
            return BOOL
        return SCALAR
    return None
