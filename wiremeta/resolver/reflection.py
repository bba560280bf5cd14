"""Build type descriptors from live Python classes."""

import dataclasses
import inspect
from collections.abc import Callable
from typing import Annotated, Any, ClassVar, Final, get_args, get_origin, get_type_hints

from ..logging import get_logger
from .descriptors import MemberSource, TypeDescriptor
from .errors import TypeIntrospectionError
from .markers import (
    METADATA_KEY,
    NO_MARKERS,
    MemberInfo,
    is_constructor,
    is_serialization_constructor,
    markers_from_extras,
    markers_of,
)
from .types import ConstructorCandidate, MemberKind, ParameterInfo, TypeKind

logger = get_logger()

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclasses.dataclass(frozen=True)
class _Annotation:
    value_type: Any
    extras: tuple[Any, ...] = ()
    static: bool = False
    final: bool = False
    init_only: bool = False


def unwrap_annotation(annotation: Any) -> _Annotation:
    """Strip Annotated, ClassVar and Final wrappers, keeping what they said."""
    extras: tuple[Any, ...] = ()
    static = final = False

    while True:
        if isinstance(annotation, dataclasses.InitVar):
            return _Annotation(annotation.type, extras, static, final, init_only=True)

        origin = get_origin(annotation)
        if origin is Annotated:
            extras += annotation.__metadata__
            annotation = annotation.__origin__
        elif origin is ClassVar or annotation is ClassVar:
            static = True
            args = get_args(annotation)
            annotation = args[0] if args else Any
        elif origin is Final or annotation is Final:
            final = True
            args = get_args(annotation)
            annotation = args[0] if args else Any
        else:
            return _Annotation(annotation, extras, static, final)


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _is_mangled(name: str, cls: type) -> bool:
    for klass in cls.__mro__:
        if name.startswith(f"_{klass.__name__.lstrip('_')}__"):
            return True
    return False


def _class_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exc:
        raise TypeIntrospectionError(
            f"Cannot resolve annotations of {cls.__qualname__}: {exc}", type=cls
        ) from exc


def _function_hints(cls: type, fn: Callable[..., Any]) -> dict[str, Any]:
    try:
        return get_type_hints(fn, localns={cls.__name__: cls}, include_extras=True)
    except (NameError, TypeError) as exc:
        raise TypeIntrospectionError(
            f"Cannot resolve annotations of {cls.__qualname__}.{fn.__name__}: {exc}", type=cls
        ) from exc


def _type_kind(cls: type) -> TypeKind:
    if issubclass(cls, tuple):
        return TypeKind.VALUE
    params = getattr(cls, "__dataclass_params__", None)
    if params is not None and params.frozen:
        return TypeKind.VALUE
    return TypeKind.REFERENCE


def _collect_properties(cls: type) -> dict[str, property]:
    found: dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                found[name] = attr
            elif name in found:
                # shadowed by a plain attribute further down the hierarchy
                del found[name]
    return found


def _property_annotation(cls: type, prop: property) -> _Annotation:
    if prop.fget is not None:
        hints = _function_hints(cls, prop.fget)
        if "return" in hints:
            return unwrap_annotation(hints["return"])
    if prop.fset is not None:
        hints = _function_hints(cls, prop.fset)
        params = list(inspect.signature(prop.fset).parameters)[1:]
        if params and params[0] in hints:
            return unwrap_annotation(hints[params[0]])
    return _Annotation(Any)


def _accessor_public(name: str, fn: Any) -> bool:
    return _is_public(name) and _is_public(getattr(fn, "__name__", ""))


def _describe_properties(cls: type, props: dict[str, property]) -> tuple[MemberSource, ...]:
    members = []
    for name, prop in props.items():
        annotation = _property_annotation(cls, prop)
        markers = markers_from_extras(annotation.extras).merge(markers_of(prop.fget))
        members.append(
            MemberSource(
                name=name,
                kind=MemberKind.PROPERTY,
                value_type=annotation.value_type,
                has_getter=prop.fget is not None,
                getter_public=_accessor_public(name, prop.fget),
                has_setter=prop.fset is not None,
                setter_public=_accessor_public(name, prop.fset),
                markers=markers,
            )
        )
    return tuple(members)


def _describe_fields(cls: type, skip: set[str]) -> tuple[MemberSource, ...]:
    dc_fields: dict[str, dataclasses.Field] = getattr(cls, "__dataclass_fields__", {})
    immutable_type = _type_kind(cls) == TypeKind.VALUE

    members = []
    for name, hint in _class_hints(cls).items():
        if name in skip:
            continue
        annotation = unwrap_annotation(hint)
        if annotation.init_only:
            continue

        markers = markers_from_extras(annotation.extras)
        dc_field = dc_fields.get(name)
        if dc_field is not None:
            markers = markers.merge(dc_field.metadata.get(METADATA_KEY, NO_MARKERS))
        if _is_mangled(name, cls):
            markers = markers.merge(MemberInfo(generated=True))

        public = _is_public(name)
        members.append(
            MemberSource(
                name=name,
                kind=MemberKind.FIELD,
                value_type=annotation.value_type,
                getter_public=public,
                has_setter=not (immutable_type or annotation.final),
                setter_public=public,
                static=annotation.static,
                markers=markers,
            )
        )
    return tuple(members)


def _parameters(cls: type, fn: Callable[..., Any]) -> tuple[ParameterInfo, ...]:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError) as exc:
        raise TypeIntrospectionError(
            f"Cannot read signature of {cls.__qualname__}.{fn.__name__}: {exc}", type=cls
        ) from exc
    hints = _function_hints(cls, fn)

    # first parameter is self or cls
    params = list(signature.parameters.values())[1:]
    return tuple(
        ParameterInfo(
            name=p.name,
            value_type=unwrap_annotation(hints.get(p.name, Any)).value_type,
            has_default=p.default is not inspect.Parameter.empty,
            keyword_only=p.kind == inspect.Parameter.KEYWORD_ONLY,
        )
        for p in params
        if p.kind not in _VARIADIC
    )


def _init_function(cls: type) -> Callable[..., Any] | None:
    if cls.__init__ is not object.__init__:
        return cls.__init__
    # named tuples build their instances in __new__
    if inspect.isfunction(cls.__new__):
        return cls.__new__
    return None


def _describe_constructors(cls: type) -> tuple[ConstructorCandidate, ...]:
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        return ()

    init = _init_function(cls)
    candidates = [
        ConstructorCandidate(
            owner=cls,
            name="__init__",
            parameters=_parameters(cls, init) if init is not None else (),
            serialization=is_serialization_constructor(init),
        )
    ]

    alternates: dict[str, Callable[..., Any]] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, classmethod) and is_constructor(attr.__func__):
                alternates[name] = attr.__func__

    for name, fn in alternates.items():
        candidates.append(
            ConstructorCandidate(
                owner=cls,
                name=name,
                parameters=_parameters(cls, fn),
                public=_is_public(name),
                serialization=is_serialization_constructor(fn),
            )
        )
    return tuple(candidates)


class ReflectionProvider:
    """Describe classes through runtime introspection."""

    def describe(self, cls: type) -> TypeDescriptor:
        props = _collect_properties(cls)
        descriptor = TypeDescriptor(
            type=cls,
            kind=_type_kind(cls),
            properties=_describe_properties(cls, props),
            fields=_describe_fields(cls, set(props)),
            constructors=_describe_constructors(cls),
        )
        logger.debug(
            "type_described",
            type=cls.__qualname__,
            properties=len(descriptor.properties),
            fields=len(descriptor.fields),
            constructors=len(descriptor.constructors),
        )
        return descriptor
