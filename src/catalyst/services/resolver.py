"""DependencyResolver — turn declared dependencies into manifest declarations.

Pipeline: VALIDATE → DEDUPLICATE → RELATIVIZE → RENDER

Two ordered lists come out of a resolution:

- package declarations: every local package as a path reference, then every
  remote package as a locator + requirement reference;
- main target declarations: one product reference per exposed local product,
  one name per remote package, then the module's own interface product,
  always last.

Resolution is a pure function of its arguments apart from the existence
check on local dependency directories; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from catalyst.domain.dependencies import LocalDependency, RemoteDependency
from catalyst.domain.errors import DependencyResolutionError
from catalyst.domain.module import ModuleConfiguration, interface_product_name
from catalyst.domain.paths import normalize, relative_path

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_VERSION = "1.0.0"


@dataclass(frozen=True)
class ResolvedDependencies:
    """Output of one resolution, ready to drop into a template context."""

    package_declarations: tuple[str, ...]
    main_target_declarations: tuple[str, ...]
    local_dependencies: tuple[dict[str, Any], ...]
    remote_dependencies: tuple[dict[str, str], ...]


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def render_requirement(constraint: str) -> str:
    """Render an opaque version constraint as a manifest requirement.

    Examples:
        >>> render_requirement("1.2.3")
        'from: "1.2.3"'
        >>> render_requirement("==2.0.0")
        'exact: "2.0.0"'
        >>> render_requirement("1.0.0..<2.0.0")
        '"1.0.0"..<"2.0.0"'
        >>> render_requirement("")
        'from: "1.0.0"'
    """
    text = constraint.strip()
    for operator in ("..<", "..."):
        if operator in text:
            lower, upper = (part.strip() for part in text.split(operator, 1))
            return f"{_quote(lower)}{operator}{_quote(upper)}"
    if text.startswith("=="):
        return f"exact: {_quote(text[2:].strip())}"
    return f"from: {_quote(text or DEFAULT_REMOTE_VERSION)}"


class DependencyResolver:
    """Computes canonical, ordered dependency declarations for one module."""

    def resolve_module(self, module: ModuleConfiguration) -> ResolvedDependencies:
        return self.resolve(
            module.name,
            module.package_path,
            module.local_dependencies,
            module.dependencies,
        )

    def resolve(
        self,
        module_name: str,
        target_path: Path,
        local_dependencies: Sequence[LocalDependency],
        remote_dependencies: Sequence[RemoteDependency],
    ) -> ResolvedDependencies:
        """Resolve both dependency lists relative to *target_path*.

        Raises:
            DependencyResolutionError: *target_path* is relative, a local
                dependency path is relative or missing, a local dependency
                exposes products it does not offer, or a remote dependency
                has no locator.
        """
        if not target_path.is_absolute():
            raise DependencyResolutionError(
                module_name, f"target path {target_path} is not absolute"
            )

        locals_ = self._merge_locals(local_dependencies)
        remotes = self._dedupe_remotes(remote_dependencies)

        package_decls: list[str] = []
        main_decls: list[str] = []
        local_contexts: list[dict[str, Any]] = []

        for dep in locals_:
            rel = self.relative_path(target_path, dep.path)
            package_decls.append(f".package(name: {_quote(dep.package_name)}, path: {_quote(rel)})")
            for product in dep.exposed_products:
                entry = f".product(name: {_quote(product)}, package: {_quote(dep.package_name)})"
                if entry not in main_decls:
                    main_decls.append(entry)
            local_contexts.append(
                {"name": dep.package_name, "path": rel, "products": list(dep.exposed_products)}
            )

        remote_contexts: list[dict[str, str]] = []
        for remote in remotes:
            requirement = render_requirement(remote.version)
            package_decls.append(f".package(url: {_quote(remote.url)}, {requirement})")
            entry = _quote(remote.name)
            if entry not in main_decls:
                main_decls.append(entry)
            remote_contexts.append(
                {
                    "name": remote.name,
                    "url": remote.url,
                    "version": remote.version or DEFAULT_REMOTE_VERSION,
                }
            )

        interface = _quote(interface_product_name(module_name))
        if interface in main_decls:
            main_decls.remove(interface)
        main_decls.append(interface)

        logger.debug(
            "Resolved %d local and %d remote dependencies for %s",
            len(locals_),
            len(remotes),
            module_name,
        )
        return ResolvedDependencies(
            package_declarations=tuple(package_decls),
            main_target_declarations=tuple(main_decls),
            local_dependencies=tuple(local_contexts),
            remote_dependencies=tuple(remote_contexts),
        )

    @staticmethod
    def relative_path(target_path: Path, dependency_path: Path) -> str:
        """Shortest relative path from the module directory to a dependency."""
        return relative_path(target_path.as_posix(), dependency_path.as_posix())

    # ------------------------------------------------------------------
    # Validation and deduplication
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_local(dep: LocalDependency) -> None:
        if not dep.path.is_absolute():
            raise DependencyResolutionError(dep.package_name, f"path {dep.path} is not absolute")
        if not dep.path.exists():
            raise DependencyResolutionError(dep.package_name, f"path {dep.path} does not exist")
        missing = dep.unavailable_products()
        if missing:
            offered = ", ".join(dep.available_products) or "none"
            raise DependencyResolutionError(
                dep.package_name,
                f"exposed products {missing} are not available (available: {offered})",
            )

    def _merge_locals(self, deps: Sequence[LocalDependency]) -> list[LocalDependency]:
        """Validate, then merge entries that point at the same directory."""
        merged: dict[str, LocalDependency] = {}
        for dep in deps:
            self._validate_local(dep)
            key = str(normalize(dep.path.as_posix()))
            existing = merged.get(key)
            if existing is None:
                merged[key] = dep
                continue
            exposed = list(existing.exposed_products)
            exposed.extend(p for p in dep.exposed_products if p not in exposed)
            available = list(existing.available_products)
            available.extend(p for p in dep.available_products if p not in available)
            merged[key] = existing.model_copy(
                update={"exposed_products": tuple(exposed), "available_products": tuple(available)}
            )
        return list(merged.values())

    @staticmethod
    def _dedupe_remotes(deps: Sequence[RemoteDependency]) -> list[RemoteDependency]:
        seen: list[RemoteDependency] = []
        for dep in deps:
            if not dep.url.strip():
                raise DependencyResolutionError(dep.name, "remote dependency has no source locator")
            if dep not in seen:
                seen.append(dep)
        return seen
