"""Shared fixtures for container-authz conformance tests.

Provides descriptor builders, resolvers initialized from them, and
isolated security states.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

import pytest

from container_authz.resolver import ConstraintResolver
from container_authz.security import GlobalSecurityConfigurator, GlobalSecurityState

J2EE_NAMESPACE = "http://java.sun.com/xml/ns/j2ee"


# ---------------------------------------------------------------------------
# Descriptor helpers
# ---------------------------------------------------------------------------
def build_descriptor(
    constraints: Iterable[tuple[Sequence[str], Sequence[str]]] = (),
    declared_roles: Iterable[str] = (),
) -> str:
    """Render a web.xml from ``(url_patterns, role_names)`` pairs."""
    parts = [f'<web-app xmlns="{J2EE_NAMESPACE}" version="2.4">']
    for patterns, roles in constraints:
        parts.append("<security-constraint><web-resource-collection>")
        parts.extend(f"<url-pattern>{p}</url-pattern>" for p in patterns)
        parts.append("</web-resource-collection>")
        if roles:
            parts.append("<auth-constraint>")
            parts.extend(f"<role-name>{r}</role-name>" for r in roles)
            parts.append("</auth-constraint>")
        parts.append("</security-constraint>")
    for role in declared_roles:
        parts.append(f"<security-role><role-name>{role}</role-name></security-role>")
    parts.append("</web-app>")
    return "\n".join(parts)


ResolverFactory = Callable[..., ConstraintResolver]


@pytest.fixture()
def make_resolver(tmp_path: Path) -> ResolverFactory:
    """Return a factory that writes a descriptor and initializes a resolver."""
    counter = iter(range(1_000_000))

    def factory(
        constraints: Iterable[tuple[Sequence[str], Sequence[str]]] = (),
        declared_roles: Iterable[str] = (),
    ) -> ConstraintResolver:
        path = tmp_path / f"web-{next(counter)}.xml"
        path.write_text(build_descriptor(constraints, declared_roles), encoding="utf-8")
        resolver = ConstraintResolver()
        result = resolver.initialize(path)
        assert result.ok, result.error
        return resolver

    return factory


# ---------------------------------------------------------------------------
# Security state fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def security_state() -> GlobalSecurityState:
    return GlobalSecurityState()


@pytest.fixture()
def configurator(security_state: GlobalSecurityState) -> GlobalSecurityConfigurator:
    return GlobalSecurityConfigurator(security_state)
