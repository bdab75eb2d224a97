"""Level 1 -- Constraint resolution conformance tests.

Verifies the observable guarantees of ConstraintResolver: unconstrained
paths, the ALL shortcut, single-constraint intersection, the role
union, fail-open reloads and container-authorization detection.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from container_authz.core.types import Role
from container_authz.resolver import ConstraintResolver

ROLES = [Role("R1"), Role("R2"), Role.AUTHENTICATED, Role.ALL, Role("Ghost")]


class TestUnconstrainedPaths:
    """A path no constraint matches is never constrained."""

    @pytest.mark.parametrize("role", ROLES)
    def test_MUST_report_unmatched_path_unconstrained(
        self, make_resolver, role: Role
    ) -> None:
        resolver = make_resolver([(["/a"], ["R1"]), (["/b/*"], ["R2"])])
        assert not resolver.is_constrained("/c", role)
        assert not resolver.is_constrained("/bb", role)


class TestAllRole:
    """Role.ALL is satisfied by any constraint on the path."""

    @pytest.mark.parametrize(
        "roles", [["R1"], ["R1", "R2"], []], ids=["one", "many", "none"]
    )
    def test_MUST_match_any_constraint(self, make_resolver, roles: list[str]) -> None:
        resolver = make_resolver([(["/a"], roles)])
        assert resolver.is_constrained("/a", Role.ALL)


class TestIdentityIntersection:
    """Path and role must coincide on one constraint."""

    def test_MUST_NOT_combine_different_constraints(self, make_resolver) -> None:
        resolver = make_resolver([(["/a"], ["R1"]), (["/b"], ["R2"])])
        assert resolver.find_role("R2") is not None
        assert resolver.is_constrained("/a", Role.ALL)
        assert not resolver.is_constrained("/a", Role("R2"))
        assert not resolver.is_constrained("/b", Role("R1"))

    def test_MUST_match_when_one_constraint_has_both(self, make_resolver) -> None:
        resolver = make_resolver([(["/a"], ["R1"]), (["/a", "/b"], ["R2"])])
        assert resolver.is_constrained("/a", Role("R1"))
        assert resolver.is_constrained("/a", Role("R2"))
        assert resolver.is_constrained("/b", Role("R2"))
        assert not resolver.is_constrained("/b", Role("R1"))


class TestRoleUnion:
    """roles() is the union of constraint roles and declared roles."""

    def test_MUST_return_union_without_duplicates(self, make_resolver) -> None:
        resolver = make_resolver(
            [(["/a"], ["R1", "R2"]), (["/b"], ["R2"])],
            declared_roles=["R3", "R1"],
        )
        roles = resolver.roles()
        assert set(roles) == {Role("R1"), Role("R2"), Role("R3")}
        assert len(roles) == 3


class TestReloadFailOpen:
    """Reloading with an absent or empty descriptor clears the state."""

    def test_MUST_clear_state_when_descriptor_absent(
        self, make_resolver, tmp_path: Path
    ) -> None:
        resolver = make_resolver([(["/Delete.jsp", "/Login.jsp"], ["R1"])])
        assert resolver.is_container_authorized()

        result = resolver.initialize(tmp_path / "absent.xml")
        assert not result.ok
        assert not resolver.is_container_authorized()
        for path in ("/Delete.jsp", "/Login.jsp", "/a"):
            assert not resolver.is_constrained(path, Role.ALL)

    def test_MUST_clear_state_when_descriptor_empty(
        self, make_resolver, tmp_path: Path
    ) -> None:
        resolver = make_resolver([(["/Delete.jsp", "/Login.jsp"], ["R1"])])
        empty = tmp_path / "empty.xml"
        empty.write_text("", encoding="utf-8")

        assert resolver.initialize(empty).ok
        assert not resolver.is_container_authorized()
        assert not resolver.is_constrained("/Delete.jsp", Role.ALL)


class TestContainerAuthorization:
    """Container authorization requires both sentinel paths."""

    @pytest.mark.parametrize(
        ("patterns", "expected"),
        [
            (["/Delete.jsp", "/Login.jsp"], True),
            (["/*"], True),
            (["/Delete.jsp"], False),
            (["/Login.jsp"], False),
            (["/Wiki.jsp"], False),
        ],
    )
    def test_MUST_require_both_sentinels(
        self, make_resolver, patterns: list[str], expected: bool
    ) -> None:
        resolver = make_resolver([(patterns, ["AUTHENTICATED"])])
        assert resolver.is_container_authorized() is expected

    def test_MUST_match_delete_only_scenario(self, make_resolver) -> None:
        resolver = make_resolver([(["/Delete.jsp"], ["AUTHENTICATED"])])
        assert resolver.is_container_authorized() is False
        assert resolver.is_constrained("/Delete.jsp", Role.AUTHENTICATED)
        assert resolver.is_constrained("/Delete.jsp", Role.ALL)
        assert resolver.find_role("AUTHENTICATED") == Role.AUTHENTICATED
        assert resolver.find_role("Nonexistent") is None

    def test_MUST_default_to_unauthorized_before_initialize(self) -> None:
        assert ConstraintResolver().is_container_authorized() is False
