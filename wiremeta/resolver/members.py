"""Member discovery: which members serialize, and under what wire name."""

from collections.abc import Callable, Iterator

from ..logging import get_logger
from .descriptors import MemberSource, TypeDescriptor
from .errors import DuplicateWireNameError
from .types import MemberDescriptor, MemberKind

logger = get_logger()

# Prefix of names the interpreter reserves or mangles
INTERNAL_PREFIX = "__"


def is_synthesized(source: MemberSource) -> bool:
    """Check whether a field is static or generated rather than declared state."""
    return (
        source.static or source.markers.generated or source.name.startswith(INTERNAL_PREFIX)
    )


def wire_name_of(source: MemberSource, name_mutator: Callable[[str], str]) -> str:
    if source.markers.name is not None:
        return source.markers.name
    return name_mutator(source.name)


def build_member(
    source: MemberSource, wire_name: str, allow_private: bool
) -> MemberDescriptor:
    """Build a member descriptor with access resolved against `allow_private`."""
    return MemberDescriptor(
        wire_name=wire_name,
        attribute=source.name,
        value_type=source.value_type,
        readable=source.readable(allow_private),
        writable=source.writable(allow_private),
        kind=source.kind,
    )


def _eligible(descriptor: TypeDescriptor) -> Iterator[MemberSource]:
    for source in descriptor.properties:
        if not source.markers.ignore:
            yield source
    for source in descriptor.fields:
        if not source.markers.ignore and not is_synthesized(source):
            yield source


def discover_members(
    descriptor: TypeDescriptor,
    name_mutator: Callable[[str], str],
    allow_private: bool = False,
) -> tuple[MemberDescriptor, ...]:
    """Enumerate the serializable members of a type.

    Properties come first, then fields. Members that can be neither read
    nor written are dropped. Wire names are compared case-sensitively; the
    first member to claim a name keeps it and any later claim is an error.

    Raises:
        DuplicateWireNameError: Two members compute the same wire name.
    """
    members: dict[str, MemberDescriptor] = {}

    for source in _eligible(descriptor):
        member = build_member(source, wire_name_of(source, name_mutator), allow_private)
        if not member.readable and not member.writable:
            logger.debug(
                "member_inaccessible",
                type=descriptor.type.__qualname__,
                attribute=source.name,
            )
            continue

        if member.wire_name in members:
            raise DuplicateWireNameError(descriptor.type, member.wire_name)
        members[member.wire_name] = member

    return tuple(members.values())


def count_by_kind(members: tuple[MemberDescriptor, ...]) -> dict[MemberKind, int]:
    counts = {kind: 0 for kind in MemberKind}
    for m in members:
        counts[m.kind] += 1
    return counts
