"""Local dependency selection for new modules.

Discovers sibling Swift packages under a root directory, turns their
library products into numbered options and groups the products a user
picks into :class:`~catalyst.domain.dependencies.LocalDependency` values.

Manifests are read as text: the package name comes from ``Package(name:``
and products from ``.library(name:``. Products whose name ends in
``Tests`` are never offered.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from catalyst.domain.dependencies import LocalDependency
from catalyst.domain.errors import DependencyResolutionError
from catalyst.domain.module import INTERFACE_SUFFIX
from catalyst.domain.paths import relative_path
from catalyst.infrastructure.filesystem import find_package_dirs

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Package.swift"

_PACKAGE_NAME = re.compile(r"""Package\s*\(\s*name\s*:\s*"([^"]+)\"""")
_LIBRARY_NAME = re.compile(r"""\.library\s*\(\s*name\s*:\s*"([^"]+)\"""")
_INDEX_SEPARATORS = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class DiscoveredPackage:
    name: str
    path: Path
    products: tuple[str, ...]


@dataclass(frozen=True)
class DependencyOption:
    """One selectable product of a discovered package."""

    package_name: str
    package_path: Path
    product_name: str
    display_path: str
    available_products: tuple[str, ...]

    @property
    def is_interface(self) -> bool:
        return self.product_name.endswith(INTERFACE_SUFFIX)


def parse_manifest(text: str) -> tuple[str | None, list[str]]:
    """Extract ``(package name, library products)`` from manifest source."""
    match = _PACKAGE_NAME.search(text)
    name = match.group(1) if match else None
    products: list[str] = []
    for product in _LIBRARY_NAME.findall(text):
        if product not in products and not product.endswith("Tests"):
            products.append(product)
    return name, products


def describe_package(directory: Path) -> DiscoveredPackage:
    """Read the manifest in *directory*.

    Raises:
        DependencyResolutionError: No readable ``Package.swift``.
    """
    directory = directory.resolve()
    try:
        text = (directory / MANIFEST_NAME).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DependencyResolutionError(directory.name, f"cannot read manifest: {exc}") from exc
    name, products = parse_manifest(text)
    return DiscoveredPackage(name=name or directory.name, path=directory, products=tuple(products))


def discover_packages(root: Path) -> list[DiscoveredPackage]:
    """Find every package below *root*, excluding *root* itself.

    Manifests that cannot be read are skipped with a warning.
    """
    root = root.resolve()
    packages: list[DiscoveredPackage] = []
    for directory in find_package_dirs(root):
        if directory == root:
            continue
        try:
            packages.append(describe_package(directory))
        except DependencyResolutionError as exc:
            logger.warning("Could not inspect package at %s: %s", directory, exc.reason)
    logger.debug("Discovered %d local packages under %s", len(packages), root)
    return packages


def build_options(packages: Iterable[DiscoveredPackage], base: Path) -> list[DependencyOption]:
    """One option per product, sorted by package then product name."""
    base_text = base.resolve().as_posix()
    options = [
        DependencyOption(
            package_name=package.name,
            package_path=package.path,
            product_name=product,
            display_path=relative_path(base_text, package.path.as_posix()),
            available_products=tuple(sorted(package.products)),
        )
        for package in packages
        for product in package.products
    ]
    return sorted(options, key=lambda o: (o.package_name, o.product_name))


def filter_excluded(
    options: Sequence[DependencyOption], exclusions: Iterable[str] | None
) -> list[DependencyOption]:
    excluded = set(exclusions or ())
    if not excluded:
        return list(options)
    return [option for option in options if option.package_name not in excluded]


def order_options(options: Sequence[DependencyOption]) -> list[DependencyOption]:
    """Interface products first; relative order is otherwise preserved."""
    interfaces = [option for option in options if option.is_interface]
    others = [option for option in options if not option.is_interface]
    return interfaces + others


def make_options(
    packages: Iterable[DiscoveredPackage], base: Path, exclusions: Iterable[str] | None = None
) -> list[DependencyOption]:
    return order_options(filter_excluded(build_options(packages, base), exclusions))


def parse_indexes(text: str) -> list[int]:
    """Parse 1-based choices separated by commas or whitespace.

    Tokens that are not integers are ignored.

    Examples:
        >>> parse_indexes("1, 3 4")
        [1, 3, 4]
        >>> parse_indexes("two, 2")
        [2]
    """
    indexes: list[int] = []
    for token in _INDEX_SEPARATORS.split(text.strip()):
        if token.isdigit():
            indexes.append(int(token))
    return indexes


def pick(options: Sequence[DependencyOption], indexes: Iterable[int]) -> list[DependencyOption]:
    """Options at the given 1-based positions; out-of-range entries are dropped."""
    return [options[i - 1] for i in indexes if 0 < i <= len(options)]


def group_selections(options: Iterable[DependencyOption]) -> list[LocalDependency]:
    """Group chosen products by package path, in first-seen order."""
    grouped: dict[Path, tuple[DependencyOption, list[str]]] = {}
    for option in options:
        first, products = grouped.setdefault(option.package_path, (option, []))
        if option.product_name not in products:
            products.append(option.product_name)
    return [
        LocalDependency(
            package_name=first.package_name,
            path=first.package_path,
            exposed_products=tuple(products),
            available_products=first.available_products,
        )
        for first, products in grouped.values()
    ]
