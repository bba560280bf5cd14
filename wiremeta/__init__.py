"""wiremeta - Type metadata resolver for serialization engines."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wiremeta")
except PackageNotFoundError:
    __version__ = "(local)"
