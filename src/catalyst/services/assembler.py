"""ModuleConfigurationAssembler — build the template context for one module.

The context is a plain ``dict`` handed to the template renderer. Given the
same module, merged configuration and clock it is always identical; the
``Date`` and ``Year`` fields are the only values read from the clock.
"""

from __future__ import annotations

from typing import Any

from catalyst.config.store import MergedConfiguration
from catalyst.domain.module import ModuleConfiguration
from catalyst.services.clock import Clock, SystemClock
from catalyst.services.resolver import DependencyResolver

TemplateContext = dict[str, Any]

RESERVED_KEYS = frozenset(
    {
        "ModuleName",
        "ModuleType",
        "Author",
        "OrganizationName",
        "BundleIdentifier",
        "SwiftVersion",
        "Platforms",
        "Dependencies",
        "PackageDependencies",
        "MainTargetDependencies",
        "LocalDependencies",
        "CustomVariables",
        "Date",
        "Year",
    }
)


class ModuleConfigurationAssembler:
    """Merge module fields, configuration fallbacks and resolved dependencies."""

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        resolver: DependencyResolver | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._resolver = resolver or DependencyResolver()

    def assemble(self, module: ModuleConfiguration, merged: MergedConfiguration) -> TemplateContext:
        """Build the template context.

        Identity fields prefer the module's own values and fall back to the
        merged configuration. Custom variables layer the module's values over
        ``defaultTemplateVariables``; they are spread at the top level but
        never shadow a reserved key.

        Raises:
            DependencyResolutionError: From the resolver.
            ConfigKeyError: A configuration fallback has the wrong type.
        """
        resolved = self._resolver.resolve_module(module)

        context: TemplateContext = {
            "ModuleName": module.name,
            "ModuleType": module.kind.value,
        }

        identity = {
            "Author": module.author or merged.get_str("author"),
            "OrganizationName": module.organization_name or merged.get_str("organizationName"),
            "BundleIdentifier": module.bundle_identifier or self._bundle_identifier(module, merged),
        }
        context.update({key: value for key, value in identity.items() if value})

        context["SwiftVersion"] = module.swift_version or merged.get_str("swiftVersion")
        context["Platforms"] = list(module.platforms) or merged.get_list("defaultPlatforms")
        context["Dependencies"] = [dict(d) for d in resolved.remote_dependencies]
        context["PackageDependencies"] = list(resolved.package_declarations)
        context["MainTargetDependencies"] = list(resolved.main_target_declarations)
        context["LocalDependencies"] = [
            {**d, "products": list(d["products"])} for d in resolved.local_dependencies
        ]

        custom = merged.get_mapping("defaultTemplateVariables")
        custom.update(module.custom_variables)
        context["CustomVariables"] = dict(sorted(custom.items()))

        now = self._clock.now()
        context["Date"] = now.isoformat()
        context["Year"] = now.year

        for key, value in context["CustomVariables"].items():
            if key not in RESERVED_KEYS:
                context[key] = value
        return context

    @staticmethod
    def _bundle_identifier(module: ModuleConfiguration, merged: MergedConfiguration) -> str | None:
        prefix = merged.get_str("bundleIdentifierPrefix")
        if not prefix:
            return None
        return f"{prefix.rstrip('.')}.{module.name.lower()}"
