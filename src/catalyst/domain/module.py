"""ModuleConfiguration — everything needed to scaffold one module.

The model is frozen. Each generated package also exposes an interface
product named after the module, which the manifest always lists last
among the main target dependencies.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field

from catalyst.domain.dependencies import LocalDependency, RemoteDependency
from catalyst.domain.types import ModuleKind

_MODULE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
INTERFACE_SUFFIX = "Interface"


def is_valid_module_name(name: str) -> bool:
    """Module names start with a letter and contain only alphanumerics or ``_``."""
    return bool(_MODULE_NAME.match(name))


def interface_product_name(module_name: str) -> str:
    return f"{module_name}{INTERFACE_SUFFIX}"


class ModuleConfiguration(BaseModel):
    """Inputs for generating a single module package.

    Optional identity fields left as ``None`` fall back to configuration
    values when the template context is assembled.
    """

    model_config = {"frozen": True}

    name: str
    kind: ModuleKind
    path: Path = Path(".")
    author: str | None = None
    organization_name: str | None = None
    bundle_identifier: str | None = None
    swift_version: str | None = None
    platforms: tuple[str, ...] = Field(default_factory=tuple)
    dependencies: tuple[RemoteDependency, ...] = Field(default_factory=tuple)
    local_dependencies: tuple[LocalDependency, ...] = Field(default_factory=tuple)
    custom_variables: dict[str, str] = Field(default_factory=dict)

    @property
    def package_path(self) -> Path:
        """Directory the generated package is written to."""
        return self.path / self.name
