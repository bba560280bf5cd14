"""Configuration errors raised while resolving type metadata."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .constructors import BindingAttempt


def _type_name(t: type) -> str:
    return f"{t.__module__}.{t.__qualname__}"


class ResolutionError(RuntimeError):
    """Raised when a type cannot be resolved for serialization.

    Carries the offending type and, where there is one, the member or
    parameter name involved.
    """

    def __init__(self, message: str, *, type: type, name: str | None = None) -> None:
        super().__init__(message)
        self.type = type
        self.name = name


class TypeIntrospectionError(ResolutionError):
    """Raised when a type's annotations or signatures cannot be inspected."""


class DuplicateWireNameError(ResolutionError):
    """Raised when two members compute the same wire name."""

    def __init__(self, type: type, name: str) -> None:
        super().__init__(
            f"Duplicate wire name in type {_type_name(type)}: {name!r}",
            type=type,
            name=name,
        )


class MultipleSerializationConstructorsError(ResolutionError):
    """Raised when more than one public constructor carries the serialization marker."""

    def __init__(self, type: type, names: list[str]) -> None:
        super().__init__(
            f"More than one serialization constructor in type {_type_name(type)}: "
            + ", ".join(names),
            type=type,
        )
        self.names = names


class ConstructorParameterError(ResolutionError):
    """Base class for failures binding an explicit serialization constructor."""


class AmbiguousConstructorParameterError(ConstructorParameterError):
    """Raised when several members match a constructor parameter name."""

    def __init__(self, type: type, name: str, matches: list[str]) -> None:
        super().__init__(
            f"Ambiguous constructor parameter in type {_type_name(type)}: {name!r} "
            f"matches members {', '.join(repr(m) for m in matches)}",
            type=type,
            name=name,
        )
        self.matches = matches


class ConstructorParameterTypeMismatchError(ConstructorParameterError):
    """Raised when the matching member's declared type differs from the parameter's."""

    def __init__(self, type: type, name: str, detail: str) -> None:
        super().__init__(
            f"Constructor parameter type mismatch in type {_type_name(type)}: "
            f"{name!r} ({detail})",
            type=type,
            name=name,
        )


class ConstructorParameterNotReadableError(ConstructorParameterTypeMismatchError):
    """Raised when the matching member cannot be read."""

    def __init__(self, type: type, name: str, member: str) -> None:
        super().__init__(type, name, f"member {member!r} is not readable")


class ConstructorParameterUnresolvedError(ConstructorParameterError):
    """Raised when no member matches a constructor parameter name."""

    def __init__(self, type: type, name: str) -> None:
        super().__init__(
            f"No member matches constructor parameter in type {_type_name(type)}: {name!r}",
            type=type,
            name=name,
        )


class NoMatchingConstructorError(ResolutionError):
    """Raised when no public constructor binds all of its parameters."""

    def __init__(self, type: type, attempts: "tuple[BindingAttempt, ...]") -> None:
        lines = [f"No matching constructor for type {_type_name(type)}"]
        for attempt in attempts:
            reasons = "; ".join(str(f) for f in attempt.failures)
            lines.append(f"  {attempt.candidate.signature}: {reasons}")
        super().__init__("\n".join(lines), type=type)
        self.attempts = attempts
