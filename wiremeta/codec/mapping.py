"""Encode objects to wire-name mappings and rebuild them from mappings.

Values pass through unchanged; turning them into bytes is the job of the
format layer on top.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from ..resolver import OMITTED, TypeRegistry

T = TypeVar("T")


class DecodeError(RuntimeError):
    """Raised when a mapping cannot be turned back into an instance."""


class MappingCodec:
    """Convert between instances and `wire name -> value` dictionaries."""

    def __init__(self, registry: TypeRegistry | None = None):
        self.registry = registry or TypeRegistry()

    def encode(self, obj: Any) -> dict[str, Any]:
        """Read every readable member of `obj` by wire name."""
        metadata = self.registry.get(type(obj))
        return {m.wire_name: m.get(obj) for m in metadata.members if m.readable}

    def decode(self, cls: type[T], data: Mapping[str, Any]) -> T:
        """Build an instance of `cls` from `data`.

        With a selected constructor, its parameters are filled in binding
        order and the remaining writable members are set afterwards.
        Otherwise the instance is default-constructed and every writable
        member present in `data` is set. Unknown keys are ignored.

        A bound parameter missing from `data` keeps its default value when
        it has one.

        Raises:
            DecodeError: A constructor parameter without a default has no
                value in `data`, or `cls` cannot be constructed without
                arguments.
        """
        metadata = self.registry.get(cls)

        if metadata.constructor is not None and metadata.binding is not None:
            args = []
            for param, member in zip(metadata.constructor.parameters, metadata.binding):
                if member.wire_name in data:
                    args.append(data[member.wire_name])
                elif param.has_default:
                    args.append(OMITTED)
                else:
                    raise DecodeError(
                        f"{cls.__qualname__}: missing {member.wire_name!r} "
                        f"for constructor parameter {param.name!r}"
                    )
            instance = metadata.constructor.invoke(*args)
            bound = {m.wire_name for m in metadata.binding}
        else:
            try:
                instance = cls()
            except TypeError as exc:
                raise DecodeError(
                    f"{cls.__qualname__} cannot be default-constructed: {exc}"
                ) from exc
            bound = set()

        for m in metadata.writable_members():
            if m.wire_name in bound or m.wire_name not in data:
                continue
            m.set(instance, data[m.wire_name])
        return instance
