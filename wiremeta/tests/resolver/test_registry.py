"""Tests for the type registry"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from pytest import raises

from wiremeta.resolver import (
    DuplicateWireNameError,
    ReflectionProvider,
    ResolverOptions,
    TypeRegistry,
    wire_field,
)
from wiremeta.resolver.naming import snake_case


@dataclass
class Item:
    sku: str
    quantity: int


@dataclass
class Broken:
    a: int = wire_field("same")
    b: int = wire_field("same")


class CountingProvider(ReflectionProvider):
    def __init__(self, delay: float = 0.0):
        self.calls = 0
        self.delay = delay
        self._lock = threading.Lock()

    def describe(self, cls):
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return super().describe(cls)


def describe_type_registry():
    def caches_resolved_metadata(expect):
        provider = CountingProvider()
        registry = TypeRegistry(ResolverOptions(provider=provider))

        first = registry.get(Item)
        second = registry.get(Item)

        expect(first is second) == True
        expect(provider.calls) == 1
        expect(Item in registry) == True
        expect(len(registry)) == 1

    def resolves_once_under_concurrency(expect):
        provider = CountingProvider(delay=0.05)
        registry = TypeRegistry(ResolverOptions(provider=provider))

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: registry.get(Item), range(16)))

        expect(provider.calls) == 1
        expect(all(r is results[0] for r in results)) == True

    def does_not_cache_failures(expect):
        provider = CountingProvider()
        registry = TypeRegistry(ResolverOptions(provider=provider))

        with raises(DuplicateWireNameError):
            registry.get(Broken)
        with raises(DuplicateWireNameError):
            registry.get(Broken)

        expect(provider.calls) == 2
        expect(Broken in registry) == False
        expect(registry._type_locks) == {}
        expect(registry.get(Item).type) == Item

    def uses_its_options(expect):
        registry = TypeRegistry(ResolverOptions(name_mutator=snake_case))
        expect(registry.options.name_mutator) == snake_case

    def clear_forgets_everything(expect):
        registry = TypeRegistry()
        registry.get(Item)
        registry.clear()
        expect(len(registry)) == 0
