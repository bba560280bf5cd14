"""Naming policies applied to member names without an explicit wire name."""

import re
from collections.abc import Callable

NamingPolicy = Callable[[str], str]

_CAPS_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _split_leading(name: str) -> tuple[str, str]:
    body = name.lstrip("_")
    return name[: len(name) - len(body)], body


def original(name: str) -> str:
    return name


def camel_case(name: str) -> str:
    """user_name -> userName. Leading underscores are kept."""
    prefix, body = _split_leading(name)
    if not body:
        return name
    words = [w for w in body.split("_") if w]
    head = words[0][0].lower() + words[0][1:]
    return prefix + head + "".join(w[0].upper() + w[1:] for w in words[1:])


def snake_case(name: str) -> str:
    """UserName -> user_name, HTTPServer -> http_server."""
    prefix, body = _split_leading(name)
    return prefix + _CAPS_BOUNDARY.sub("_", body).lower()


def lower_case(name: str) -> str:
    return name.lower()


POLICIES: dict[str, NamingPolicy] = {
    "original": original,
    "camel": camel_case,
    "snake": snake_case,
    "lower": lower_case,
}


def policy_names() -> list[str]:
    return list(POLICIES)


def get_policy(name: str) -> NamingPolicy:
    """Look up a naming policy by name."""
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown naming policy {name!r}, expected one of: {', '.join(POLICIES)}"
        ) from None
