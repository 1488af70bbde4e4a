"""Module and package classification enums.

ModuleKind mirrors the four scaffold flavours; PackageKind describes what a
workspace member directory turned out to contain.
"""

from __future__ import annotations

from enum import StrEnum


class ModuleKind(StrEnum):
    """Kinds of module the generator can scaffold."""

    CORE = "core"
    FEATURE = "feature"
    SHARED = "shared"
    MICROAPP = "microapp"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def template_name(self) -> str:
        """Template group used to render this kind (``CoreModule``, ``MicroApp``...)."""
        if self is ModuleKind.MICROAPP:
            return "MicroApp"
        return f"{self.value.capitalize()}Module"

    @property
    def paths_key(self) -> str:
        """Dotted configuration key holding the default target directory."""
        return _PATH_KEYS[self]

    @classmethod
    def for_template(cls, template: str) -> ModuleKind | None:
        """Kind rendered by template group *template*; ``None`` for custom groups."""
        return next((kind for kind in cls if kind.template_name == template), None)


_DISPLAY_NAMES: dict[ModuleKind, str] = {
    ModuleKind.CORE: "Core Module",
    ModuleKind.FEATURE: "Feature Module",
    ModuleKind.SHARED: "Shared Module",
    ModuleKind.MICROAPP: "MicroApp",
}

_DESCRIPTIONS: dict[ModuleKind, str] = {
    ModuleKind.CORE: "A module containing business logic, services, and models",
    ModuleKind.FEATURE: "A module containing UI components with automatic companion MicroApp",
    ModuleKind.SHARED: "A module of reusable helpers shared across features",
    ModuleKind.MICROAPP: "A standalone iOS app for testing a single feature in isolation",
}

_PATH_KEYS: dict[ModuleKind, str] = {
    ModuleKind.CORE: "paths.coreModules",
    ModuleKind.FEATURE: "paths.featureModules",
    ModuleKind.SHARED: "paths.sharedModules",
    ModuleKind.MICROAPP: "paths.microApps",
}


class PackageKind(StrEnum):
    """What a workspace member directory contains."""

    SWIFT_PACKAGE = "swift_package"
    XCODE_PROJECT = "xcode_project"
    FOLDER = "folder"

