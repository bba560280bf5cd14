"""Resolved type metadata.

These dataclasses are the resolver's output: the members that take part in
the wire format and the constructor used to rebuild an instance. They are
frozen so a resolved type can be shared freely once published.
"""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

OMITTED: Any = object()
"""Argument to `ConstructorCandidate.invoke` that leaves a parameter to its default."""


def type_label(t: object) -> str:
    """Short display form of a declared type."""
    return t.__qualname__ if isinstance(t, type) else repr(t)


class MemberKind(StrEnum):
    """Declaration kind of a member."""

    PROPERTY = auto()
    FIELD = auto()


class TypeKind(StrEnum):
    """Classification of a resolved type."""

    REFERENCE = auto()
    VALUE = auto()  # frozen dataclasses and tuple subclasses


@dataclass(frozen=True, slots=True)
class MemberDescriptor:
    """One serializable member of a type."""

    wire_name: str
    attribute: str
    value_type: Any
    readable: bool
    writable: bool
    kind: MemberKind

    def get(self, instance: Any) -> Any:
        return getattr(instance, self.attribute)

    def set(self, instance: Any, value: Any) -> None:
        setattr(instance, self.attribute, value)


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """A bindable constructor parameter."""

    name: str
    value_type: Any
    has_default: bool = False
    keyword_only: bool = False


@dataclass(frozen=True, slots=True)
class ConstructorCandidate:
    """A constructor together with its ordered parameter list.

    `name` is "__init__" for the class constructor, otherwise the attribute
    name of an alternate constructor classmethod.
    """

    owner: type
    name: str
    parameters: tuple[ParameterInfo, ...]
    public: bool = True
    serialization: bool = False

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def is_init(self) -> bool:
        return self.name == "__init__"

    @property
    def signature(self) -> str:
        params = ", ".join(p.name for p in self.parameters)
        if self.is_init:
            return f"{self.owner.__qualname__}({params})"
        return f"{self.owner.__qualname__}.{self.name}({params})"

    def invoke(self, *args: Any) -> Any:
        """Call the constructor with one argument per parameter, in order.

        A parameter given `OMITTED` keeps its default value; the parameters
        after it are then passed by name.
        """
        positional = []
        keywords = {}
        by_name = False
        for param, value in zip(self.parameters, args, strict=True):
            if value is OMITTED:
                by_name = True
            elif param.keyword_only or by_name:
                keywords[param.name] = value
            else:
                positional.append(value)

        target = self.owner if self.is_init else getattr(self.owner, self.name)
        return target(*positional, **keywords)


ConstructorParameterBinding = tuple[MemberDescriptor, ...]


@dataclass(frozen=True, slots=True)
class TypeMetadata:
    """Resolved serialization metadata for one type.

    `constructor` is None when no constructor taking parameters was selected;
    callers then construct with no arguments and apply members via setters.
    `binding` holds one member per constructor parameter, in parameter order.
    """

    type: type
    kind: TypeKind
    members: tuple[MemberDescriptor, ...]
    constructor: ConstructorCandidate | None = None
    binding: ConstructorParameterBinding | None = None

    @property
    def is_reference(self) -> bool:
        return self.kind == TypeKind.REFERENCE

    @property
    def is_value(self) -> bool:
        return self.kind == TypeKind.VALUE

    def member(self, wire_name: str) -> MemberDescriptor | None:
        for m in self.members:
            if m.wire_name == wire_name:
                return m
        return None

    def writable_members(self) -> tuple[MemberDescriptor, ...]:
        return tuple(m for m in self.members if m.writable)
