#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Model type registry
===================
Maps a content-type alias to the block model class that renders it.

The registry scans the configured model modules (packages are walked) for
classes tagged with ``@published_model`` the first time it is used, then
serves lookups from an immutable dict.  Building happens once under a lock;
after that reads need no synchronisation.

Two classes declaring the same alias is a configuration error and fails the
build instead of picking one.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import threading
from collections.abc import Iterable, Mapping
from functools import lru_cache
from types import MappingProxyType, ModuleType

from blockpreview.blocks.base import PUBLISHED_MODEL_TAG, PublishedElementModel
from blockpreview.core.config import get_settings
from .content import ContentElement, ValueFallback
from .errors import DuplicateContentTypeAliasError, UnknownContentTypeError

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

def _iter_modules(module_name: str) -> Iterable[ModuleType]:
    module = importlib.import_module(module_name)
    yield module
    if hasattr(module, "__path__"):
        for info in pkgutil.walk_packages(module.__path__, prefix=module.__name__ + "."):
            yield importlib.import_module(info.name)


def _tagged_classes(module: ModuleType) -> Iterable[type[PublishedElementModel]]:
    for obj in vars(module).values():
        if (
            inspect.isclass(obj)
            and obj.__module__ == module.__name__
            and PUBLISHED_MODEL_TAG in obj.__dict__
            and issubclass(obj, PublishedElementModel)
        ):
            yield obj


# -----------------------------------------------------------------------------

class ModelTypeRegistry:

    def __init__(
        self,
        modules: Iterable[str] = (),
        types: Iterable[type[PublishedElementModel]] = (),
    ):
        self._modules = tuple(modules)
        self._extra_types = tuple(types)
        for cls in self._extra_types:
            if PUBLISHED_MODEL_TAG not in cls.__dict__:
                raise TypeError(f"{cls.__qualname__} is not tagged with @published_model")
        self._lock = threading.Lock()
        self._types: Mapping[str, type[PublishedElementModel]] | None = None

    # ── Building ─────────────────────────────────────────────────────────────

    def _discover(self) -> list[type[PublishedElementModel]]:
        found: list[type[PublishedElementModel]] = list(self._extra_types)
        for name in self._modules:
            for module in _iter_modules(name):
                found.extend(_tagged_classes(module))
        return found

    def _build(self) -> Mapping[str, type[PublishedElementModel]]:
        by_alias: dict[str, list[type[PublishedElementModel]]] = {}
        for cls in self._discover():
            alias = getattr(cls, PUBLISHED_MODEL_TAG)
            bucket = by_alias.setdefault(alias, [])
            if cls not in bucket:
                bucket.append(cls)

        for alias, classes in by_alias.items():
            if len(classes) > 1:
                raise DuplicateContentTypeAliasError(alias, classes)

        log.info("Model registry built: %d block model(s)", len(by_alias))
        return MappingProxyType({alias: classes[0] for alias, classes in by_alias.items()})

    def _ensure_built(self) -> Mapping[str, type[PublishedElementModel]]:
        types = self._types
        if types is None:
            with self._lock:
                if self._types is None:
                    self._types = self._build()
                types = self._types
        return types

    # ── Lookup ───────────────────────────────────────────────────────────────

    @property
    def aliases(self) -> list[str]:
        return sorted(self._ensure_built())

    def resolve(self, alias: str) -> type[PublishedElementModel] | None:
        """Return the model class for *alias*, or ``None`` if none is declared."""
        return self._ensure_built().get(alias)

    def create(
        self,
        element: ContentElement,
        fallback: ValueFallback,
    ) -> PublishedElementModel:
        model_type = self.resolve(element.content_type_alias)
        if model_type is None:
            raise UnknownContentTypeError(element.content_type_alias)
        return model_type(element, fallback)


# -----------------------------------------------------------------------------

@lru_cache
def get_model_registry() -> ModelTypeRegistry:
    return ModelTypeRegistry(modules=get_settings().block_model_modules)


# -----------------------------------------------------------------------------
