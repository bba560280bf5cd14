"""Per-type cache of resolved metadata."""

import threading

from ..logging import get_logger
from .resolver import ResolverOptions, TypeResolver
from .types import TypeMetadata

logger = get_logger()


class TypeRegistry:
    """Resolve each type at most once and share the result.

    Concurrent lookups of the same type wait for a single computation.
    Failures are not cached: the next lookup resolves again and raises
    again, and other types are unaffected.
    """

    def __init__(self, options: ResolverOptions | None = None):
        self.resolver = TypeResolver(options)
        self._lock = threading.Lock()
        self._type_locks: dict[type, threading.Lock] = {}
        self._cache: dict[type, TypeMetadata] = {}

    @property
    def options(self) -> ResolverOptions:
        return self.resolver.options

    def get(self, cls: type) -> TypeMetadata:
        cached = self._cache.get(cls)
        if cached is not None:
            return cached

        with self._lock:
            type_lock = self._type_locks.setdefault(cls, threading.Lock())

        with type_lock:
            cached = self._cache.get(cls)
            if cached is not None:
                return cached

            try:
                metadata = self.resolver.resolve(cls)
                with self._lock:
                    self._cache[cls] = metadata
            finally:
                with self._lock:
                    self._type_locks.pop(cls, None)
            logger.info("type_registered", type=cls.__qualname__, members=len(metadata.members))
            return metadata

    def __contains__(self, cls: type) -> bool:
        return cls in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._type_locks.clear()
