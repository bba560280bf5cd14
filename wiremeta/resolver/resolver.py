"""Resolution driver: members plus the constructor that rebuilds the type."""

from dataclasses import dataclass, field

from ..logging import get_logger
from .constructors import bind_candidate, index_members, select_candidates
from .descriptors import TypeDescriptor, TypeDescriptorProvider
from .errors import NoMatchingConstructorError
from .members import count_by_kind, discover_members
from .naming import NamingPolicy, original
from .reflection import ReflectionProvider
from .types import MemberKind, TypeMetadata

logger = get_logger()


@dataclass(frozen=True)
class ResolverOptions:
    """Policy inputs of a resolution.

    Two resolutions of the same type under equal options produce equal
    metadata.
    """

    name_mutator: NamingPolicy = original
    allow_private: bool = False
    provider: TypeDescriptorProvider = field(default_factory=ReflectionProvider, compare=False)


class TypeResolver:
    """Resolve types to `TypeMetadata` under fixed options.

    The resolver keeps no state between calls; wrap it in a `TypeRegistry`
    to compute each type once.
    """

    def __init__(self, options: ResolverOptions | None = None):
        self.options = options or ResolverOptions()

    def resolve(self, cls: type) -> TypeMetadata:
        return self.resolve_descriptor(self.options.provider.describe(cls))

    def resolve_descriptor(self, descriptor: TypeDescriptor) -> TypeMetadata:
        """Resolve an already built descriptor.

        Raises:
            ResolutionError: The type's members or constructors are
                misconfigured. Nothing is returned for the type in that case.
        """
        t = descriptor.type
        members = discover_members(
            descriptor, self.options.name_mutator, self.options.allow_private
        )
        candidates, explicit = select_candidates(descriptor)
        lookup = index_members(members)

        constructor = None
        binding = None
        attempts = []
        for candidate in candidates:
            attempt = bind_candidate(candidate, members, lookup)
            if attempt.accepted:
                constructor, binding = candidate, attempt.binding
                break

            if explicit:
                raise attempt.failures[0].to_error(t)

            logger.debug(
                "constructor_rejected",
                type=t.__qualname__,
                constructor=candidate.signature,
                failures=[str(f) for f in attempt.failures],
            )
            attempts.append(attempt)
        else:
            if candidates:
                raise NoMatchingConstructorError(t, tuple(attempts))

        # parameterless construction is the caller's default path
        if constructor is not None and constructor.is_init and not constructor.parameters:
            constructor, binding = None, None

        counts = count_by_kind(members)
        logger.debug(
            "type_resolved",
            type=t.__qualname__,
            properties=counts[MemberKind.PROPERTY],
            fields=counts[MemberKind.FIELD],
            constructor=constructor.signature if constructor else None,
            explicit=explicit,
        )
        return TypeMetadata(
            type=t,
            kind=descriptor.kind,
            members=members,
            constructor=constructor,
            binding=binding,
        )


def resolve(
    cls: type,
    name_mutator: NamingPolicy = original,
    allow_private: bool = False,
    provider: TypeDescriptorProvider | None = None,
) -> TypeMetadata:
    """Resolve `cls` once, without caching."""
    options = ResolverOptions(
        name_mutator=name_mutator,
        allow_private=allow_private,
        provider=provider or ReflectionProvider(),
    )
    return TypeResolver(options).resolve(cls)
