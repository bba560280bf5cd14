"""Tests for constructor candidate selection and parameter binding"""

from pytest import raises

from wiremeta.resolver import (
    ConstructorCandidate,
    FailureReason,
    MemberDescriptor,
    MemberKind,
    MultipleSerializationConstructorsError,
    ParameterInfo,
    TypeDescriptor,
    TypeKind,
    bind_candidate,
    select_candidates,
)


class Target:
    pass


def ctor(*params, name="__init__", public=True, serialization=False):
    return ConstructorCandidate(
        owner=Target,
        name=name,
        parameters=tuple(ParameterInfo(n, t) for n, t in params),
        public=public,
        serialization=serialization,
    )


def mem(wire_name, value_type=int, readable=True, writable=True):
    return MemberDescriptor(
        wire_name=wire_name,
        attribute=wire_name,
        value_type=value_type,
        readable=readable,
        writable=writable,
        kind=MemberKind.FIELD,
    )


def with_constructors(*constructors):
    return TypeDescriptor(type=Target, kind=TypeKind.REFERENCE, constructors=constructors)


def describe_select_candidates():
    def orders_by_parameter_count_descending(expect):
        one = ctor(("x", int), name="one")
        three = ctor(("x", int), ("y", int), ("z", int), name="three")
        two = ctor(("x", int), ("y", int))

        candidates, explicit = select_candidates(with_constructors(one, three, two))
        expect(candidates) == (three, two, one)
        expect(explicit) == False

    def keeps_declaration_order_for_ties(expect):
        first = ctor(("a", int))
        second = ctor(("b", int), name="second")

        candidates, _ = select_candidates(with_constructors(first, second))
        expect(candidates) == (first, second)

    def skips_non_public_constructors(expect):
        public = ctor(("x", int))
        private = ctor(("x", int), ("y", int), name="_raw", public=False)

        candidates, _ = select_candidates(with_constructors(public, private))
        expect(candidates) == (public,)

    def returns_only_the_marked_constructor(expect):
        wide = ctor(("x", int), ("y", int))
        marked = ctor(("x", int), name="restore", serialization=True)

        candidates, explicit = select_candidates(with_constructors(wide, marked))
        expect(candidates) == (marked,)
        expect(explicit) == True

    def ignores_marker_on_non_public_constructor(expect):
        plain = ctor(("x", int))
        hidden = ctor(name="_restore", public=False, serialization=True)

        candidates, explicit = select_candidates(with_constructors(plain, hidden))
        expect(candidates) == (plain,)
        expect(explicit) == False

    def rejects_several_marked_constructors(expect):
        a = ctor(("x", int), name="a", serialization=True)
        b = ctor(("y", int), name="b", serialization=True)

        with raises(MultipleSerializationConstructorsError) as exinfo:
            select_candidates(with_constructors(a, b))

        expect(exinfo.value.type) == Target
        expect("Target.a(x)" in str(exinfo.value)) == True
        expect("Target.b(y)" in str(exinfo.value)) == True

    def yields_nothing_without_public_constructors(expect):
        candidates, explicit = select_candidates(with_constructors())
        expect(candidates) == ()
        expect(explicit) == False


def describe_bind_candidate():
    def binds_in_parameter_order(expect):
        x, y = mem("x"), mem("y")
        attempt = bind_candidate(ctor(("y", int), ("x", int)), (x, y))

        expect(attempt.accepted) == True
        expect(attempt.binding) == (y, x)

    def matches_names_case_insensitively(expect):
        ident = mem("Id")
        attempt = bind_candidate(ctor(("id", int)), (ident,))
        expect(attempt.binding) == (ident,)

    def fails_without_matching_member(expect):
        attempt = bind_candidate(ctor(("missing", int)), (mem("x"),))

        expect(attempt.accepted) == False
        expect(attempt.binding) == ()
        expect(attempt.failures[0].reason) == FailureReason.UNRESOLVED

    def fails_on_ambiguous_match(expect):
        attempt = bind_candidate(ctor(("id", int)), (mem("Id"), mem("ID")))

        expect(attempt.failures[0].reason) == FailureReason.AMBIGUOUS
        expect([m.wire_name for m in attempt.failures[0].matches]) == ["Id", "ID"]

    def requires_exact_type_equality(expect):
        attempt = bind_candidate(ctor(("x", float)), (mem("x", int),))

        expect(attempt.failures[0].reason) == FailureReason.TYPE_MISMATCH
        expect(str(attempt.failures[0])) == "x: parameter type float != member type int"

    def labels_union_types_by_repr(expect):
        attempt = bind_candidate(ctor(("n", int | None)), (mem("n", int),))
        expect(attempt.failures[0].detail) == "parameter type int | None != member type int"

    def does_not_treat_subclasses_as_equal(expect):
        attempt = bind_candidate(ctor(("flag", int)), (mem("flag", bool),))
        expect(attempt.failures[0].reason) == FailureReason.TYPE_MISMATCH

    def requires_readable_member(expect):
        attempt = bind_candidate(ctor(("x", int)), (mem("x", readable=False),))
        expect(attempt.failures[0].reason) == FailureReason.NOT_READABLE

    def accepts_read_only_members(expect):
        x = mem("x", writable=False)
        attempt = bind_candidate(ctor(("x", int)), (x,))
        expect(attempt.binding) == (x,)

    def evaluates_every_parameter(expect):
        candidate = ctor(("a", int), ("x", int), ("b", int))
        attempt = bind_candidate(candidate, (mem("x"),))

        expect(attempt.accepted) == False
        expect([f.parameter.name for f in attempt.failures]) == ["a", "b"]

    def parameterless_candidate_always_binds(expect):
        attempt = bind_candidate(ctor(), (mem("x"),))
        expect(attempt.accepted) == True
        expect(attempt.binding) == ()
