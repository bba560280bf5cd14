"""Declarative serialization markers.

Members are configured either through dataclass field metadata
(`wire_field`), through `typing.Annotated` extras, or, for properties,
with the `member` decorator on the getter. Constructors are configured
with `constructor` and `serialization_constructor`.

Example:
    @dataclass
    class User:
        id: int = wire_field("ID")
        secret: str = wire_field(ignore=True, default="")
        email: Annotated[str, WireName("mail")] = ""

        @classmethod
        @serialization_constructor
        def restore(cls, id: int, mail: str) -> "User":
            return cls(id=id, email=mail)
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

METADATA_KEY = "wiremeta"

_MEMBER_ATTR = "__wiremeta_member__"
_CONSTRUCTOR_ATTR = "__wiremeta_constructor__"
_SERIALIZATION_ATTR = "__wiremeta_serialization_constructor__"


@dataclass(frozen=True)
class WireName:
    """Use `name` verbatim as the wire name instead of the naming policy."""

    name: str | None


@dataclass(frozen=True)
class Ignore:
    """Exclude the member from serialization."""


@dataclass(frozen=True)
class Generated:
    """Mark a field as synthesized; it never takes part in serialization."""


@dataclass(frozen=True)
class MemberInfo:
    """Marker values attached to one member."""

    name: str | None = None
    ignore: bool = False
    generated: bool = False

    def merge(self, other: "MemberInfo") -> "MemberInfo":
        return MemberInfo(
            name=other.name if other.name is not None else self.name,
            ignore=self.ignore or other.ignore,
            generated=self.generated or other.generated,
        )


NO_MARKERS = MemberInfo()

# Sentinel for missing default
_MISSING: Any = object()


def wire_field(
    name: str | None = None,
    *,
    ignore: bool = False,
    generated: bool = False,
    default: Any = _MISSING,
    default_factory: Any = _MISSING,
) -> Any:
    """Define a dataclass field with serialization markers.

    Args:
        name: Explicit wire name. None applies the naming policy.
        ignore: Exclude the field from serialization.
        generated: Treat the field as synthesized.
        default: Default value for the field.
        default_factory: Factory function for default value.

    Returns:
        A dataclass field with wiremeta metadata attached.
    """
    metadata = {METADATA_KEY: MemberInfo(name, ignore, generated)}

    if default is not _MISSING:
        return field(default=default, metadata=metadata)
    if default_factory is not _MISSING:
        return field(default_factory=default_factory, metadata=metadata)
    return field(metadata=metadata)


TFunc = TypeVar("TFunc", bound=Callable[..., Any])


def member(name: str | None = None, *, ignore: bool = False) -> Callable[[TFunc], TFunc]:
    """Attach serialization markers to a property getter.

    Apply beneath `@property`:

        @property
        @member("Id")
        def identifier(self) -> int: ...
    """

    def decorate(fn: TFunc) -> TFunc:
        setattr(fn, _MEMBER_ATTR, MemberInfo(name=name, ignore=ignore))
        return fn

    return decorate


def constructor(fn: TFunc) -> TFunc:
    """Mark a classmethod as an alternate constructor. Apply beneath `@classmethod`."""
    setattr(fn, _CONSTRUCTOR_ATTR, True)
    return fn


def serialization_constructor(fn: TFunc) -> TFunc:
    """Mark `__init__` or an alternate constructor as the deserialization constructor."""
    setattr(fn, _CONSTRUCTOR_ATTR, True)
    setattr(fn, _SERIALIZATION_ATTR, True)
    return fn


def markers_from_extras(extras: tuple[Any, ...]) -> MemberInfo:
    """Collect markers from `Annotated` metadata."""
    info = NO_MARKERS
    for extra in extras:
        if isinstance(extra, WireName):
            info = info.merge(MemberInfo(name=extra.name))
        elif isinstance(extra, Ignore):
            info = info.merge(MemberInfo(ignore=True))
        elif isinstance(extra, Generated):
            info = info.merge(MemberInfo(generated=True))
        elif isinstance(extra, MemberInfo):
            info = info.merge(extra)
    return info


def markers_of(fn: Any) -> MemberInfo:
    if fn is None:
        return NO_MARKERS
    return getattr(fn, _MEMBER_ATTR, NO_MARKERS)


def is_constructor(fn: Any) -> bool:
    return bool(getattr(fn, _CONSTRUCTOR_ATTR, False))


def is_serialization_constructor(fn: Any) -> bool:
    return bool(getattr(fn, _SERIALIZATION_ATTR, False))
