"""Mapping codec built on resolved type metadata."""

from .mapping import DecodeError as DecodeError
from .mapping import MappingCodec as MappingCodec
