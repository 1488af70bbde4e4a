"""Layered configuration store.

Precedence chain (highest to lowest):
  1. Project-local ``.catalyst.yml``
  2. User-wide ``~/.catalyst.yml``
  3. Code defaults — baked into :class:`~catalyst.config.models.CatalystConfig`

Each layer is an immutable snapshot of one YAML file. Folding walks the
layers lowest-precedence first: nested mappings merge key by key, while
scalars and lists from a higher layer replace the lower value outright.
``set`` never edits a layer in place; it swaps in a new snapshot, and only
an explicit ``save`` touches disk.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from io import StringIO
from pathlib import Path
from types import MappingProxyType
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from catalyst.config.models import BOOL, LIST, MAPPING, default_settings, schema_kind
from catalyst.domain.errors import ConfigIOError, ConfigKeyError, ConfigParseError
from catalyst.infrastructure.filesystem import atomic_write_text

logger = logging.getLogger(__name__)

ConfigValue = str | int | float | bool | list[Any] | dict[str, Any]

_TRUE = frozenset({"true", "yes", "1", "on"})
_FALSE = frozenset({"false", "no", "0", "off"})


class LayerKind(StrEnum):
    """Provenance of a configuration layer, in increasing precedence."""

    DEFAULT = "default"
    USER = "user"
    PROJECT = "project"


@dataclass(frozen=True)
class ConfigSource:
    """A configuration file location and the layer it feeds."""

    kind: LayerKind
    path: Path


@dataclass(frozen=True)
class ConfigLayer:
    """One immutable layer of settings plus where it came from."""

    kind: LayerKind
    data: Mapping[str, Any] = field(default_factory=dict)
    source: Path | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(copy.deepcopy(dict(self.data))))

    def thaw(self) -> dict[str, Any]:
        """A mutable deep copy of this layer's settings."""
        return copy.deepcopy(dict(self.data))


# ---------------------------------------------------------------------------
# YAML I/O
# ---------------------------------------------------------------------------


def _new_yaml(typ: str = "rt") -> YAML:
    """Create a fresh YAML instance (ruamel.yaml objects are stateful)."""
    y = YAML(typ=typ, pure=True)
    y.default_flow_style = False
    return y


def load_layer(source: ConfigSource) -> ConfigLayer | None:
    """Read one YAML source; ``None`` when the file does not exist.

    Raises:
        ConfigParseError: The path exists but is unreadable, is not valid
            YAML, or does not hold a mapping at the top level.
    """
    path = source.path
    if not path.exists():
        return None
    if not path.is_file():
        raise ConfigParseError(path, "not a regular file")
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigParseError(path, str(exc)) from exc
    try:
        data = _new_yaml("safe").load(raw)
    except YAMLError as exc:
        raise ConfigParseError(path, str(exc)) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(path, f"expected a mapping, found {type(data).__name__}")
    bad_keys = [k for k in data if not isinstance(k, str)]
    if bad_keys:
        raise ConfigParseError(path, f"non-string key {bad_keys[0]!r}")
    logger.debug("Loaded %s configuration from %s", source.kind, path)
    return ConfigLayer(kind=source.kind, data=data, source=path)


def dump_yaml(data: Mapping[str, Any]) -> str:
    """Serialize settings as block-style YAML."""
    stream = StringIO()
    _new_yaml().dump(copy.deepcopy(dict(data)), stream)
    return stream.getvalue()


def remove_layer_file(path: Path) -> bool:
    """Delete a layer file without reading it; ``False`` if it did not exist.

    Raises:
        ConfigIOError: The file exists but cannot be removed.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise ConfigIOError(path, str(exc)) from exc
    logger.debug("Removed configuration file %s", path)
    return True


# ---------------------------------------------------------------------------
# Merging and lookup
# ---------------------------------------------------------------------------


def _deep_merge(target: dict[str, Any], overlay: Mapping[str, Any]) -> None:
    for key, value in overlay.items():
        if value is None:
            # An empty YAML key (``author:``) means "not set", not "unset".
            continue
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            _deep_merge(current, value)
        else:
            target[key] = copy.deepcopy(dict(value) if isinstance(value, Mapping) else value)


def _lookup(data: Mapping[str, Any], path: str) -> Any:
    node: Any = data
    for segment in path.split("."):
        if not segment or not isinstance(node, Mapping) or segment not in node:
            return None
        node = node[segment]
    return node


def _type_name(value: Any) -> str:
    return type(value).__name__


@dataclass(frozen=True)
class MergedConfiguration:
    """Read-only view of all layers folded together."""

    data: Mapping[str, Any]
    layers: tuple[ConfigLayer, ...] = ()

    @classmethod
    def fold(cls, layers: Sequence[ConfigLayer]) -> MergedConfiguration:
        merged: dict[str, Any] = {}
        for layer in layers:
            _deep_merge(merged, layer.data)
        return cls(data=MappingProxyType(merged), layers=tuple(layers))

    @classmethod
    def defaults(cls) -> MergedConfiguration:
        return cls.fold([default_layer()])

    def get(self, path: str) -> ConfigValue | None:
        """Value at dotted *path*, or ``None`` if any segment is missing."""
        value = _lookup(self.data, path)
        if isinstance(value, Mapping):
            return copy.deepcopy(dict(value))
        if isinstance(value, list):
            return copy.deepcopy(value)
        return value

    def provenance(self, path: str) -> LayerKind | None:
        """Kind of the highest-precedence layer that defines *path*."""
        for layer in reversed(self.layers):
            if _lookup(layer.data, path) is not None:
                return layer.kind
        return None

    # --- Typed getters ---

    def get_str(self, path: str, default: str | None = None) -> str | None:
        value = self.get(path)
        if value is None:
            return default
        if isinstance(value, (dict, list, bool)):
            raise ConfigKeyError(path, f"expected a string, found {_type_name(value)}")
        return str(value)

    def get_bool(self, path: str, default: bool = False) -> bool:
        value = self.get(path)
        if value is None:
            return default
        if not isinstance(value, bool):
            raise ConfigKeyError(path, f"expected a bool, found {_type_name(value)}")
        return value

    def get_list(self, path: str, default: list[str] | None = None) -> list[str]:
        value = self.get(path)
        if value is None:
            return list(default or [])
        if not isinstance(value, list):
            raise ConfigKeyError(path, f"expected a list, found {_type_name(value)}")
        return [str(item) for item in value]

    def get_mapping(self, path: str) -> dict[str, str]:
        value = self.get(path)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ConfigKeyError(path, f"expected a mapping, found {_type_name(value)}")
        return {str(k): str(v) for k, v in value.items()}


def default_layer() -> ConfigLayer:
    return ConfigLayer(kind=LayerKind.DEFAULT, data=default_settings())


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ", ".join(_stringify(item) for item in value)
    return str(value)


def all_settings(config: MergedConfiguration | ConfigLayer | Mapping[str, Any]) -> dict[str, str]:
    """Flatten settings into a sorted ``dotted.key -> display string`` mapping."""
    data = config if isinstance(config, Mapping) else config.data
    flat: dict[str, str] = {}

    def walk(node: Mapping[str, Any], prefix: str) -> None:
        for key, value in node.items():
            dotted = f"{prefix}{key}"
            if value is None:
                continue
            if isinstance(value, Mapping):
                walk(value, f"{dotted}.")
            else:
                flat[dotted] = _stringify(value)

    walk(data, "")
    return dict(sorted(flat.items()))


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def _check_value(path: str, value: Any) -> Any:
    """Validate and normalize a value to the ConfigValue shapes."""
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_check_value(path, item) for item in value]
    if isinstance(value, Mapping):
        return {str(k): _check_value(path, v) for k, v in value.items()}
    raise ConfigKeyError(path, f"unsupported value type {_type_name(value)}")


def coerce_value(path: str, value: Any) -> Any:
    """Apply schema-driven string coercion for known keys.

    Only string input is coerced: list-typed keys split on commas (items
    trimmed, empties dropped) and bool-typed keys accept ``true/false``,
    ``yes/no``, ``on/off`` and ``1/0``. Everything else passes through.
    """
    if not isinstance(value, str):
        return _check_value(path, value)
    kind = schema_kind(path)
    if kind == LIST:
        return [item.strip() for item in value.split(",") if item.strip()]
    if kind == BOOL:
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ConfigKeyError(path, f"expected a bool, got {value!r}")
    if kind == MAPPING:
        raise ConfigKeyError(path, "expects a mapping; set individual sub-keys instead")
    return value


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ConfigurationStore:
    """Ordered configuration layers with dotted-path get/set and atomic save.

    Usage::

        store = ConfigurationStore.load(config_sources(home, project_dir))
        store.set("dependencyExclusions", "PackageA, PackageB", LayerKind.PROJECT)
        store.save(LayerKind.PROJECT)
    """

    def __init__(self, layers: Sequence[ConfigLayer]) -> None:
        self._layers: list[ConfigLayer] = list(layers)

    @classmethod
    def load(cls, sources: Sequence[ConfigSource]) -> ConfigurationStore:
        """Load defaults plus every source, in the given (increasing) precedence.

        Missing files become empty layers that still remember their path, so
        a later ``set``/``save`` can create them.
        """
        layers = [default_layer()]
        for source in sources:
            layer = load_layer(source)
            layers.append(layer or ConfigLayer(kind=source.kind, source=source.path))
        return cls(layers)

    @property
    def layers(self) -> tuple[ConfigLayer, ...]:
        return tuple(self._layers)

    @property
    def merged(self) -> MergedConfiguration:
        return MergedConfiguration.fold(self._layers)

    def get(self, path: str) -> ConfigValue | None:
        return self.merged.get(path)

    def layer(self, kind: LayerKind) -> ConfigLayer:
        """The highest-precedence layer of *kind*."""
        return self._layers[self._index(kind)]

    def _index(self, kind: LayerKind) -> int:
        for index in range(len(self._layers) - 1, -1, -1):
            if self._layers[index].kind == kind:
                return index
        msg = f"No {kind} configuration layer loaded"
        raise ValueError(msg)

    def set(self, path: str, value: Any, layer: LayerKind = LayerKind.PROJECT) -> None:
        """Set dotted *path* in one layer (in memory only).

        Raises:
            ConfigKeyError: Empty path segment, a non-mapping in the way,
                the defaults layer as target, or a value the schema rejects.
        """
        if layer == LayerKind.DEFAULT:
            raise ConfigKeyError(path, "built-in defaults are read-only")
        segments = path.split(".")
        if not all(segments):
            raise ConfigKeyError(path, "empty key segment")

        coerced = coerce_value(path, value)
        index = self._index(layer)
        current = self._layers[index]
        data = current.thaw()

        node = data
        for depth, segment in enumerate(segments[:-1]):
            child = node.get(segment)
            if child is None:
                child = node[segment] = {}
            elif not isinstance(child, dict):
                prefix = ".".join(segments[: depth + 1])
                raise ConfigKeyError(path, f"{prefix!r} is not a mapping")
            node = child
        node[segments[-1]] = coerced

        self._layers[index] = ConfigLayer(kind=current.kind, data=data, source=current.source)
        logger.debug("Set %s in %s layer", path, layer)

    def save(self, layer: LayerKind = LayerKind.PROJECT, destination: Path | None = None) -> Path:
        """Write one layer's settings to YAML atomically; returns the path written."""
        current = self.layer(layer)
        target = destination or current.source
        if target is None:
            raise ConfigIOError(f"<{layer}>", "layer has no file location")
        try:
            atomic_write_text(target, dump_yaml(current.data))
        except OSError as exc:
            raise ConfigIOError(target, str(exc)) from exc
        logger.info("Saved %s configuration to %s", layer, target)
        return target

    def reset(self, layer: LayerKind) -> bool:
        """Delete a layer's file and clear it in memory; ``False`` if there was no file."""
        index = self._index(layer)
        current = self._layers[index]
        if layer == LayerKind.DEFAULT or current.source is None:
            raise ConfigIOError(f"<{layer}>", "layer has no file location")
        existed = remove_layer_file(current.source)
        self._layers[index] = ConfigLayer(kind=current.kind, source=current.source)
        return existed
