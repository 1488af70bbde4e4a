"""ModuleService — scaffold a new module package.

Pipeline: PLAN → RESOLVE → ASSEMBLE → RENDER → WRITE → REGISTER

Planning turns command input into an immutable
:class:`~catalyst.domain.module.ModuleConfiguration` whose directory is
absolute. Every later stage is delegated to the core components; this
service only sequences them and reports the outcome as a ServiceResult.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from catalyst.config.store import MergedConfiguration
from catalyst.domain.dependencies import LocalDependency, RemoteDependency
from catalyst.domain.errors import CatalystError, ModuleGenerationError
from catalyst.domain.module import ModuleConfiguration, is_valid_module_name
from catalyst.domain.types import ModuleKind
from catalyst.infrastructure.filesystem import atomic_write_text, find_workspace
from catalyst.infrastructure.templates import TemplateRenderer
from catalyst.services.assembler import ModuleConfigurationAssembler
from catalyst.services.clock import Clock
from catalyst.services.result import ServiceResult
from catalyst.services.selection import DependencyOption, discover_packages, make_options
from catalyst.services.templates import template_search_paths
from catalyst.services.workspace import WorkspaceRegistry

logger = logging.getLogger(__name__)


class ModuleService:
    """Generate module packages from templates and register them in a workspace."""

    def __init__(
        self,
        merged: MergedConfiguration,
        project_dir: Path,
        *,
        renderer: TemplateRenderer | None = None,
        registry: WorkspaceRegistry | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._merged = merged
        self._project_dir = project_dir.resolve()
        self._renderer = renderer or TemplateRenderer(self.template_search_paths())
        self._registry = registry or WorkspaceRegistry()
        self._assembler = ModuleConfigurationAssembler(clock=clock)

    def template_search_paths(self) -> list[Path]:
        return template_search_paths(self._merged, self._project_dir)

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def target_directory(self, kind: ModuleKind, path: Path | None = None) -> Path:
        """Parent directory for a new module of *kind*.

        An explicit *path* wins; otherwise ``paths.<kind>`` from the
        configuration, then ``defaultModulesPath``.
        """
        if path is None:
            configured = self._merged.get_str(kind.paths_key) or self._merged.get_str(
                "defaultModulesPath", "."
            )
            path = Path(configured or ".")
        return (self._project_dir / path.expanduser()).resolve()

    def plan(
        self,
        name: str,
        kind: ModuleKind,
        *,
        path: Path | None = None,
        author: str | None = None,
        organization_name: str | None = None,
        bundle_identifier: str | None = None,
        platforms: Sequence[str] = (),
        dependencies: Sequence[RemoteDependency] = (),
        local_dependencies: Sequence[LocalDependency] = (),
        custom_variables: Mapping[str, str] | None = None,
    ) -> ModuleConfiguration:
        """Build the module configuration for a generation request.

        Raises:
            ModuleGenerationError: *name* is not a valid module name.
        """
        if not is_valid_module_name(name):
            raise ModuleGenerationError(
                name,
                "names must start with a letter and contain only letters, digits or underscores",
            )
        return ModuleConfiguration(
            name=name,
            kind=kind,
            path=self.target_directory(kind, path),
            author=author,
            organization_name=organization_name,
            bundle_identifier=bundle_identifier,
            platforms=tuple(platforms),
            dependencies=tuple(dependencies),
            local_dependencies=tuple(local_dependencies),
            custom_variables=dict(custom_variables or {}),
        )

    def dependency_options(self) -> list[DependencyOption]:
        """Local products a new module may depend on, interfaces first.

        Empty when ``skipDependencyResolver`` is set.
        """
        if self._merged.get_bool("skipDependencyResolver"):
            logger.debug("Dependency selection disabled by configuration")
            return []
        exclusions = self._merged.get_list("dependencyExclusions")
        return make_options(discover_packages(self._project_dir), self._project_dir, exclusions)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def create_module(
        self,
        module: ModuleConfiguration,
        *,
        workspace: Path | None = None,
        register: bool = True,
        force: bool = False,
        dry_run: bool = False,
    ) -> ServiceResult:
        """Render and write *module*, then add it to a workspace.

        The workspace is *workspace* when given, else the first
        ``.xcworkspace`` in the project directory. A registration failure
        does not undo the written files; it is reported as a warning.
        """
        op = "create_module"
        package_path = module.package_path
        warnings: list[str] = []

        try:
            if package_path.exists() and not force:
                raise ModuleGenerationError(
                    module.name, f"{package_path} already exists (use --force to overwrite)"
                )
            context = self._assembler.assemble(module, self._merged)
            files = self._renderer.render_group(module.kind.template_name, context)
            if not dry_run:
                self._write_files(module, package_path, files)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc, name=module.name)

        target_workspace = None
        if register:
            target_workspace = workspace or find_workspace(self._project_dir)
        registered = False
        if target_workspace is not None and not dry_run:
            try:
                self._registry.add_package(package_path, target_workspace)
                registered = True
            except CatalystError as exc:
                logger.warning("Workspace registration failed: %s", exc.message)
                warnings.append(f"Not added to workspace: {exc.message}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": module.name,
                "kind": module.kind.value,
                "path": str(package_path),
                "files": [relative for relative, _ in files],
                "workspace": str(target_workspace) if target_workspace else None,
                "registered": registered,
                "dry_run": dry_run,
            },
            warnings=warnings,
        )

    @staticmethod
    def _write_files(
        module: ModuleConfiguration, package_path: Path, files: Sequence[tuple[str, str]]
    ) -> None:
        for relative, text in files:
            destination = package_path / relative
            try:
                atomic_write_text(destination, text)
            except OSError as exc:
                raise ModuleGenerationError(
                    module.name, f"cannot write {destination}: {exc}"
                ) from exc
        logger.info("Generated %s with %d files at %s", module.name, len(files), package_path)
