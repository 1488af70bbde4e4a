"""Dependency declarations attached to a module.

Remote dependencies are identified by name alone; local dependencies by
the directory they live in. The exposed-within-available rule for local
dependencies is enforced by the resolver, not here, so that a bad
selection surfaces as a resolution error naming the package.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class RemoteDependency(BaseModel):
    """A package fetched from a source locator with an opaque version constraint."""

    model_config = {"frozen": True}

    name: str
    url: str
    version: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteDependency):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)


class LocalDependency(BaseModel):
    """A package referenced by filesystem path.

    Attributes:
        package_name: Name declared in the package manifest.
        path: Absolute directory of the package.
        exposed_products: Products the consuming module links against.
        available_products: Every non-test product the package offers.
    """

    model_config = {"frozen": True}

    package_name: str
    path: Path
    exposed_products: tuple[str, ...] = Field(default_factory=tuple)
    available_products: tuple[str, ...] = Field(default_factory=tuple)

    def unavailable_products(self) -> list[str]:
        """Exposed products missing from the available set, in exposed order."""
        available = set(self.available_products)
        return [p for p in self.exposed_products if p not in available]
