"""Host collaborator interfaces and in-memory implementations.

The web container owns the descriptor, the request and the session.
This module defines the *structural* interfaces (``typing.Protocol``)
through which the resolver talks to it, plus lightweight in-memory
implementations suitable for testing and local development.

Every Protocol class is decorated with ``@runtime_checkable`` so that
``isinstance`` checks work at run-time in addition to static analysis.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from container_authz.core.types import Role

# ===================================================================
# Protocol (interface) definitions
# ===================================================================

@runtime_checkable
class ResourceResolver(Protocol):
    """Host lookup of web application resources by path."""

    def get_resource(self, path: str) -> str | None:
        """Return a locator (path or URL) for *path*, or ``None`` if absent."""
        ...


@runtime_checkable
class HostRequest(Protocol):
    """The part of an inbound request the container can answer for."""

    def is_user_in_role(self, role_name: str) -> bool:
        """Return ``True`` if the requesting identity holds *role_name*."""
        ...


@runtime_checkable
class PrincipalSession(Protocol):
    """A user session that records the principals granted at login."""

    def has_principal(self, principal: Role) -> bool:
        """Return ``True`` if the session subject holds *principal*."""
        ...


# ===================================================================
# In-memory implementations
# ===================================================================

class InMemoryResourceResolver:
    """Maps resource paths to locators from a fixed table."""

    def __init__(self, resources: Mapping[str, str] | None = None) -> None:
        self._resources: dict[str, str] = dict(resources or {})

    def put(self, path: str, locator: str) -> None:
        self._resources[path] = locator

    def get_resource(self, path: str) -> str | None:
        return self._resources.get(path)


class InMemoryRequest:
    """A request whose identity holds a fixed set of role names."""

    def __init__(self, role_names: Iterable[str] = ()) -> None:
        self._role_names = frozenset(role_names)

    def is_user_in_role(self, role_name: str) -> bool:
        return role_name in self._role_names


class InMemorySession:
    """A session whose subject holds a fixed set of principals."""

    def __init__(self, principals: Iterable[Role] = ()) -> None:
        self._principals = frozenset(principals)

    def has_principal(self, principal: Role) -> bool:
        return principal in self._principals
