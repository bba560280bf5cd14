"""Type descriptors: the introspection surface the resolver reads.

A descriptor lists a type's raw properties, fields and constructors with
their markers attached. The reflection provider builds them from live
classes; `StaticProvider` serves descriptors built by hand or by a code
generator.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from .errors import TypeIntrospectionError
from .markers import NO_MARKERS, MemberInfo
from .types import ConstructorCandidate, MemberKind, TypeKind


@dataclass(frozen=True, slots=True)
class MemberSource:
    """A declared property or field before naming and access policy apply.

    For fields, the getter always exists and the setter exists unless the
    field is immutable.
    """

    name: str
    kind: MemberKind
    value_type: Any
    has_getter: bool = True
    getter_public: bool = True
    has_setter: bool = True
    setter_public: bool = True
    static: bool = False
    markers: MemberInfo = NO_MARKERS

    def readable(self, allow_private: bool) -> bool:
        return self.has_getter and (self.getter_public or allow_private)

    def writable(self, allow_private: bool) -> bool:
        return self.has_setter and (self.setter_public or allow_private)


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Everything the resolver needs to know about one type."""

    type: type
    kind: TypeKind
    properties: tuple[MemberSource, ...] = ()
    fields: tuple[MemberSource, ...] = ()
    constructors: tuple[ConstructorCandidate, ...] = ()


class TypeDescriptorProvider(Protocol):
    """Produces a `TypeDescriptor` for a class."""

    def describe(self, cls: type) -> TypeDescriptor: ...


class StaticProvider:
    """Serve pre-built descriptors, delegating unknown types to `fallback`."""

    def __init__(
        self,
        descriptors: dict[type, TypeDescriptor] | None = None,
        fallback: TypeDescriptorProvider | None = None,
    ):
        self._descriptors: dict[type, TypeDescriptor] = dict(descriptors or {})
        self._fallback = fallback

    def register(self, descriptor: TypeDescriptor) -> None:
        self._descriptors[descriptor.type] = descriptor

    def describe(self, cls: type) -> TypeDescriptor:
        descriptor = self._descriptors.get(cls)
        if descriptor is not None:
            return descriptor
        if self._fallback is None:
            raise TypeIntrospectionError(
                f"No descriptor registered for {cls.__qualname__}", type=cls
            )
        return self._fallback.describe(cls)
