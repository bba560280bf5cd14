"""Constructor candidate selection and parameter-to-member binding."""

from collections import defaultdict
from dataclasses import dataclass
from enum import StrEnum, auto

from .descriptors import TypeDescriptor
from .errors import (
    AmbiguousConstructorParameterError,
    ConstructorParameterError,
    ConstructorParameterNotReadableError,
    ConstructorParameterTypeMismatchError,
    ConstructorParameterUnresolvedError,
    MultipleSerializationConstructorsError,
)
from .types import (
    ConstructorCandidate,
    ConstructorParameterBinding,
    MemberDescriptor,
    ParameterInfo,
    type_label,
)


class FailureReason(StrEnum):
    """Why a parameter could not be bound."""

    UNRESOLVED = auto()
    AMBIGUOUS = auto()
    TYPE_MISMATCH = auto()
    NOT_READABLE = auto()


@dataclass(frozen=True)
class ParameterFailure:
    """A constructor parameter that did not bind."""

    parameter: ParameterInfo
    reason: FailureReason
    matches: tuple[MemberDescriptor, ...] = ()

    @property
    def detail(self) -> str:
        if self.reason == FailureReason.UNRESOLVED:
            return "no matching member"
        if self.reason == FailureReason.AMBIGUOUS:
            return "ambiguous (" + ", ".join(m.wire_name for m in self.matches) + ")"
        member = self.matches[0]
        if self.reason == FailureReason.NOT_READABLE:
            return f"member {member.wire_name!r} is not readable"
        return (
            f"parameter type {type_label(self.parameter.value_type)} != "
            f"member type {type_label(member.value_type)}"
        )

    def __str__(self) -> str:
        return f"{self.parameter.name}: {self.detail}"

    def to_error(self, t: type) -> ConstructorParameterError:
        name = self.parameter.name
        if self.reason == FailureReason.UNRESOLVED:
            return ConstructorParameterUnresolvedError(t, name)
        if self.reason == FailureReason.AMBIGUOUS:
            return AmbiguousConstructorParameterError(t, name, [m.wire_name for m in self.matches])
        if self.reason == FailureReason.NOT_READABLE:
            return ConstructorParameterNotReadableError(t, name, self.matches[0].wire_name)
        return ConstructorParameterTypeMismatchError(t, name, self.detail)


@dataclass(frozen=True)
class BindingAttempt:
    """The outcome of binding one candidate against the member set."""

    candidate: ConstructorCandidate
    binding: ConstructorParameterBinding
    failures: tuple[ParameterFailure, ...]

    @property
    def accepted(self) -> bool:
        return not self.failures


def select_candidates(
    descriptor: TypeDescriptor,
) -> tuple[tuple[ConstructorCandidate, ...], bool]:
    """Pick the constructors to try, in trial order.

    Returns the candidates and whether they come from an explicit
    serialization marker. A single marked public constructor is returned
    alone. Otherwise every public constructor is returned, most parameters
    first; ties keep declaration order.

    Raises:
        MultipleSerializationConstructorsError: More than one public
            constructor carries the marker.
    """
    public = [c for c in descriptor.constructors if c.public]

    marked = [c for c in public if c.serialization]
    if len(marked) > 1:
        raise MultipleSerializationConstructorsError(
            descriptor.type, [c.signature for c in marked]
        )
    if marked:
        return (marked[0],), True

    return tuple(sorted(public, key=lambda c: c.arity, reverse=True)), False


def index_members(
    members: tuple[MemberDescriptor, ...],
) -> dict[str, list[MemberDescriptor]]:
    """Group members by case-folded wire name."""
    lookup: dict[str, list[MemberDescriptor]] = defaultdict(list)
    for m in members:
        lookup[m.wire_name.casefold()].append(m)
    return lookup


def bind_parameter(
    param: ParameterInfo, lookup: dict[str, list[MemberDescriptor]]
) -> MemberDescriptor | ParameterFailure:
    matches = tuple(lookup.get(param.name.casefold(), ()))
    if not matches:
        return ParameterFailure(param, FailureReason.UNRESOLVED)
    if len(matches) > 1:
        return ParameterFailure(param, FailureReason.AMBIGUOUS, matches)

    member = matches[0]
    if param.value_type != member.value_type:
        return ParameterFailure(param, FailureReason.TYPE_MISMATCH, matches)
    if not member.readable:
        return ParameterFailure(param, FailureReason.NOT_READABLE, matches)
    return member


def bind_candidate(
    candidate: ConstructorCandidate,
    members: tuple[MemberDescriptor, ...],
    lookup: dict[str, list[MemberDescriptor]] | None = None,
) -> BindingAttempt:
    """Align every parameter of `candidate` with a member.

    All parameters are evaluated so the attempt reports every failure; the
    binding is only meaningful when the attempt is accepted.
    """
    if lookup is None:
        lookup = index_members(members)

    bound: list[MemberDescriptor] = []
    failures: list[ParameterFailure] = []
    for param in candidate.parameters:
        result = bind_parameter(param, lookup)
        if isinstance(result, ParameterFailure):
            failures.append(result)
        else:
            bound.append(result)

    if failures:
        return BindingAttempt(candidate, (), tuple(failures))
    return BindingAttempt(candidate, tuple(bound), ())
