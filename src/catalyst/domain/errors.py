"""Exception taxonomy for catalyst.

Every error names the resource it concerns (a file path, a dependency, a
template) so callers can report it without parsing the message. The
``code`` attribute is the stable identifier used when a service converts
an exception into a :class:`~catalyst.services.result.ServiceError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class CatalystError(Exception):
    """Base class for all catalyst errors."""

    code = "CATALYST_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def detail(self) -> dict[str, Any]:
        """Structured payload describing the offending resource."""
        return {}


class ConfigParseError(CatalystError):
    """A configuration source exists but is not a structured mapping."""

    code = "CONFIG_PARSE_ERROR"

    def __init__(self, source: Path | str, reason: str) -> None:
        super().__init__(f"Invalid configuration in {source}: {reason}")
        self.source = str(source)
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {"source": self.source, "reason": self.reason}


class ConfigKeyError(CatalystError):
    """A dotted key cannot be read or written with the requested type."""

    code = "CONFIG_KEY_ERROR"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Configuration key {path!r}: {reason}")
        self.path = path
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {"key": self.path, "reason": self.reason}


class ConfigIOError(CatalystError):
    """A configuration layer could not be written or removed."""

    code = "CONFIG_IO_ERROR"

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Cannot write configuration {path}: {reason}")
        self.path = str(path)
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}


class DependencyResolutionError(CatalystError):
    """A declared dependency cannot be turned into a manifest declaration."""

    code = "DEPENDENCY_RESOLUTION_ERROR"

    def __init__(self, dependency: str, reason: str) -> None:
        super().__init__(f"Cannot resolve dependency {dependency!r}: {reason}")
        self.dependency = dependency
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {"dependency": self.dependency, "reason": self.reason}


class WorkspaceIOError(CatalystError):
    """Filesystem failure or conflicting state around a workspace."""

    code = "WORKSPACE_IO_ERROR"

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Workspace {path}: {reason}")
        self.path = str(path)
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}


class WorkspaceCorruptionError(CatalystError):
    """A workspace container cannot be read or parsed at all."""

    code = "WORKSPACE_CORRUPT"

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Corrupt workspace {path}: {reason}")
        self.path = str(path)
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}


class WorkspaceInvalidError(CatalystError):
    """A workspace container parses but fails structural checks."""

    code = "WORKSPACE_INVALID"

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Invalid workspace {path}: {reason}")
        self.path = str(path)
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}


class TemplateNotFound(CatalystError):
    """The rendering collaborator has no template under the requested name."""

    code = "TEMPLATE_NOT_FOUND"

    def __init__(self, name: str, available: list[str]) -> None:
        known = ", ".join(available) if available else "none"
        super().__init__(f"Template {name!r} not found. Available templates: {known}")
        self.name = name
        self.available = list(available)

    def detail(self) -> dict[str, Any]:
        return {"template": self.name, "available": self.available}


class ModuleGenerationError(CatalystError):
    """A module cannot be generated at the requested location."""

    code = "MODULE_GENERATION_ERROR"

    def __init__(self, module: str, reason: str) -> None:
        super().__init__(f"Cannot generate module {module!r}: {reason}")
        self.module = module
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {"module": self.module, "reason": self.reason}
