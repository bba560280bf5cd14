"""Type metadata resolver."""

from .constructors import BindingAttempt as BindingAttempt
from .constructors import FailureReason as FailureReason
from .constructors import ParameterFailure as ParameterFailure
from .constructors import bind_candidate as bind_candidate
from .constructors import select_candidates as select_candidates
from .descriptors import MemberSource as MemberSource
from .descriptors import StaticProvider as StaticProvider
from .descriptors import TypeDescriptor as TypeDescriptor
from .descriptors import TypeDescriptorProvider as TypeDescriptorProvider
from .errors import *
from .markers import Generated as Generated
from .markers import Ignore as Ignore
from .markers import WireName as WireName
from .markers import constructor as constructor
from .markers import member as member
from .markers import serialization_constructor as serialization_constructor
from .markers import wire_field as wire_field
from .members import discover_members as discover_members
from .naming import get_policy as get_policy
from .reflection import ReflectionProvider as ReflectionProvider
from .registry import TypeRegistry as TypeRegistry
from .resolver import ResolverOptions as ResolverOptions
from .resolver import TypeResolver as TypeResolver
from .resolver import resolve as resolve
from .types import *
