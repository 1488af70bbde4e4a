"""ConfigService — ``config`` command operations over the layered store.

Reads go through the merged view; writes target exactly one layer
(project by default, user with ``--global``) and are persisted
immediately with an atomic replace. ``reset`` and ``init`` work from the
layer file locations alone, so they still succeed when an existing file
cannot be parsed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from catalyst.config.store import (
    ConfigLayer,
    ConfigSource,
    ConfigurationStore,
    LayerKind,
    MergedConfiguration,
    all_settings,
    default_layer,
    dump_yaml,
    remove_layer_file,
)
from catalyst.domain.errors import CatalystError, ConfigIOError, ConfigKeyError
from catalyst.infrastructure.filesystem import atomic_write_text
from catalyst.services.result import ServiceResult

logger = logging.getLogger(__name__)


class ConfigService:
    """Get, set, list, reset and initialise configuration.

    *store* may be passed when the caller has already loaded the layers;
    otherwise they are read from *sources* on the first read or write.
    """

    def __init__(
        self, sources: Sequence[ConfigSource], store: ConfigurationStore | None = None
    ) -> None:
        self._sources = list(sources)
        self._store = store

    def _loaded(self) -> ConfigurationStore:
        if self._store is None:
            self._store = ConfigurationStore.load(self._sources)
        return self._store

    def _location(self, layer: LayerKind) -> Path:
        for source in self._sources:
            if source.kind == layer:
                return source.path
        raise ConfigIOError(f"<{layer}>", "layer has no file location")

    def get(self, key: str) -> ServiceResult:
        op = "config_get"
        try:
            merged = self._loaded().merged
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        value = merged.get(key)
        if value is None:
            return ServiceResult.failure(op, ConfigKeyError(key, "not set"))
        source = merged.provenance(key)
        return ServiceResult(
            ok=True,
            op=op,
            data={"key": key, "value": value, "source": source.value if source else None},
        )

    def set(self, key: str, value: str, layer: LayerKind = LayerKind.PROJECT) -> ServiceResult:
        op = "config_set"
        try:
            store = self._loaded()
            store.set(key, value, layer)
            path = store.save(layer)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc, key=key)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "key": key,
                "value": MergedConfiguration.fold([store.layer(layer)]).get(key),
                "layer": layer.value,
                "path": str(path),
            },
        )

    def list_settings(self, layer: LayerKind | None = None) -> ServiceResult:
        """Flattened settings of the merged view, or of a single layer."""
        op = "config_list"
        try:
            store = self._loaded()
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        source: ConfigLayer | None = None
        if layer is None:
            settings = all_settings(store.merged)
        else:
            source = store.layer(layer)
            settings = all_settings(source)
        data = {
            "layer": layer.value if layer else "merged",
            "path": str(source.source) if source and source.source else None,
            "settings": settings,
            "count": len(settings),
        }
        return ServiceResult(ok=True, op=op, data=data)

    def reset(self, layer: LayerKind = LayerKind.PROJECT) -> ServiceResult:
        op = "config_reset"
        try:
            path = self._location(layer)
            removed = remove_layer_file(path)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        self._store = None
        return ServiceResult(
            ok=True,
            op=op,
            data={"layer": layer.value, "path": str(path), "removed": removed},
        )

    def init(self, layer: LayerKind = LayerKind.PROJECT, *, force: bool = False) -> ServiceResult:
        """Write the built-in defaults to a layer's file."""
        op = "config_init"
        try:
            target = self._location(layer)
        except CatalystError as exc:
            return ServiceResult.failure(op, exc)
        if target.exists() and not force:
            return ServiceResult.failure(
                op, ConfigIOError(target, "already exists (use --force to overwrite)")
            )
        try:
            atomic_write_text(target, dump_yaml(default_layer().data))
        except OSError as exc:
            return ServiceResult.failure(op, ConfigIOError(target, str(exc)))
        self._store = None
        logger.info("Initialised %s configuration at %s", layer, target)
        return ServiceResult(ok=True, op=op, data={"layer": layer.value, "path": str(target)})
