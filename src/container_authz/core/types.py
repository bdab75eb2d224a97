"""Shared domain types for descriptor-based authorization.

Key design decisions:
* ``Role`` is a plain Python class (not Pydantic) so that the reserved
  roles can live on the class itself and compare by name only.
* ``Constraint`` and ``ConstraintIndex`` are immutable; a new index is
  built on every descriptor load and never mutated afterwards.
* Constraint identity is the constraint's position in its index, so
  two declarations with identical content stay distinct.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar

# ---------------------------------------------------------------------------
# Role
# ---------------------------------------------------------------------------

class Role:
    """A named permission group.

    Roles are immutable and equal when their (case-sensitive) names are
    equal.  Four built-in roles exist: :attr:`ALL` matches every
    constrained role, :attr:`AUTHENTICATED` means any logged-in identity,
    :attr:`ASSERTED` an identity that claimed a name without logging in,
    and :attr:`ANONYMOUS` everyone else.
    """

    __slots__ = ("_name",)

    ALL: ClassVar[Role]
    ANONYMOUS: ClassVar[Role]
    ASSERTED: ClassVar[Role]
    AUTHENTICATED: ClassVar[Role]

    def __init__(self, name: str) -> None:
        if not name:
            msg = "Role name cannot be empty"
            raise ValueError(msg)
        object.__setattr__(self, "_name", name)

    @property
    def name(self) -> str:
        return self._name

    def is_builtin(self) -> bool:
        """Return ``True`` for the four reserved roles."""
        return self in _BUILTIN_ROLES

    def __setattr__(self, key: str, value: object) -> None:
        msg = "Role is immutable"
        raise AttributeError(msg)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Role):
            return self._name == other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Role", self._name))

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Role({self._name!r})"


Role.ALL = Role("ALL")
Role.ANONYMOUS = Role("ANONYMOUS")
Role.ASSERTED = Role("ASSERTED")
Role.AUTHENTICATED = Role("AUTHENTICATED")

_BUILTIN_ROLES = frozenset(
    {Role.ALL, Role.ANONYMOUS, Role.ASSERTED, Role.AUTHENTICATED}
)


# ---------------------------------------------------------------------------
# URL pattern matching
# ---------------------------------------------------------------------------

def url_pattern_matches(pattern: str, path: str) -> bool:
    """Return ``True`` if the container URL *pattern* matches *path*.

    Follows the servlet mapping rules:

    * ``/`` is the default mapping and matches every path.
    * ``/prefix/*`` matches ``/prefix`` itself and anything below it.
    * ``*.ext`` matches any path ending in ``.ext``.
    * Anything else must match exactly.
    """
    if pattern == "/":
        return True
    if pattern.endswith("/*"):
        prefix = pattern[:-2]
        return path == prefix or path.startswith(prefix + "/")
    if pattern.startswith("*."):
        return path.endswith(pattern[1:])
    return pattern == path


# ---------------------------------------------------------------------------
# Constraint
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Constraint:
    """One ``security-constraint`` declaration from the descriptor.

    Attributes
    ----------
    url_patterns:
        The URL patterns of every ``web-resource-collection``.
    role_names:
        Distinct role names from the ``auth-constraint``, in document
        order.  An empty tuple means no role restriction was declared,
        which is not the same as ``ALL``.
    """

    url_patterns: tuple[str, ...]
    role_names: tuple[str, ...] = ()

    def matches(self, path: str) -> bool:
        """Return ``True`` if any URL pattern of this constraint matches *path*."""
        return any(url_pattern_matches(p, path) for p in self.url_patterns)

    def requires(self, role: Role) -> bool:
        return role.name in self.role_names


# ---------------------------------------------------------------------------
# ConstraintIndex
# ---------------------------------------------------------------------------

class ConstraintIndex:
    """Immutable index over the constraints and roles of one descriptor.

    The role set is the union of every role named by a constraint and
    every role declared through ``security-role``, in first-seen order.

    Parameters
    ----------
    constraints:
        The constraints in document order.
    declared_roles:
        Role names declared independently of any constraint.
    """

    __slots__ = ("_constraints", "_roles", "_by_name", "_by_role")

    def __init__(
        self,
        constraints: Iterable[Constraint] = (),
        declared_roles: Iterable[str] = (),
    ) -> None:
        self._constraints: tuple[Constraint, ...] = tuple(constraints)

        by_role: dict[str, set[int]] = {}
        names: dict[str, None] = {}
        for position, constraint in enumerate(self._constraints):
            for name in constraint.role_names:
                by_role.setdefault(name, set()).add(position)
                names.setdefault(name, None)
        for name in declared_roles:
            names.setdefault(name, None)

        self._by_role: dict[str, frozenset[int]] = {
            name: frozenset(positions) for name, positions in by_role.items()
        }
        self._by_name: dict[str, Role] = {name: Role(name) for name in names}
        self._roles: tuple[Role, ...] = tuple(self._by_name.values())

    @classmethod
    def empty(cls) -> ConstraintIndex:
        return cls()

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return self._constraints

    @property
    def roles(self) -> tuple[Role, ...]:
        return self._roles

    def find_role(self, name: str) -> Role | None:
        return self._by_name.get(name)

    def matching_path(self, path: str) -> frozenset[int]:
        """Return the positions of every constraint whose pattern matches *path*."""
        return frozenset(
            position
            for position, constraint in enumerate(self._constraints)
            if constraint.matches(path)
        )

    def requiring_role(self, role: Role) -> frozenset[int]:
        """Return the positions of every constraint that names *role*."""
        return self._by_role.get(role.name, frozenset())

    def __len__(self) -> int:
        return len(self._constraints)

    def __repr__(self) -> str:
        return (
            f"ConstraintIndex(constraints={len(self._constraints)}, "
            f"roles={[r.name for r in self._roles]!r})"
        )
