"""Constraint resolver -- container-managed authorization decisions.

The :class:`ConstraintResolver` reads the web application's deployment
descriptor, builds an immutable
:class:`~container_authz.core.types.ConstraintIndex` and answers:

* is a resource path constrained to a role?
* which roles does the descriptor know about?
* does the container manage authorization at all?

The last answer is a heuristic: the container is considered in charge
when both sentinel paths (by default ``/Delete.jsp`` and ``/Login.jsp``)
are constrained under :attr:`Role.ALL`, which is the case when an
administrator enables the stock ``security-constraint`` block.

Descriptor errors fail open: the resolver logs them and continues with
an empty index, so every path reports as unconstrained and the host
falls back to its own authentication.

Usage
-----
::

    from container_authz.resolver import ConstraintResolver

    resolver = ConstraintResolver()
    result = resolver.initialize()
    if resolver.is_container_authorized():
        ...
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from container_authz.core.config import AuthzConfig
from container_authz.core.errors import (
    DescriptorError,
    DescriptorUnavailable,
    MalformedDescriptor,
)
from container_authz.core.types import ConstraintIndex, Role
from container_authz.descriptor.parser import parse_descriptor
from container_authz.descriptor.source import DescriptorSource

if TYPE_CHECKING:
    from container_authz.core.interfaces import (
        HostRequest,
        PrincipalSession,
        ResourceResolver,
    )

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Results and published state
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InitializationResult:
    """Outcome of :meth:`ConstraintResolver.initialize`.

    Attributes
    ----------
    container_authorized:
        Whether both sentinel paths are constrained under ``Role.ALL``.
    roles:
        The roles discovered in the descriptor.
    constraint_count:
        Number of security constraints parsed.
    error:
        The descriptor error that forced the empty index, if any.
    """

    container_authorized: bool
    roles: tuple[Role, ...] = ()
    constraint_count: int = 0
    error: DescriptorError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class _ResolverState:
    index: ConstraintIndex
    container_authorized: bool


_EMPTY_STATE = _ResolverState(ConstraintIndex.empty(), container_authorized=False)


# ---------------------------------------------------------------------------
# ConstraintResolver
# ---------------------------------------------------------------------------

class ConstraintResolver:
    """Resolves resource protection from the deployment descriptor.

    Queries are safe to run concurrently with :meth:`initialize`: the
    index and the cached container flag are published together by
    replacing a single reference, so readers see either the previous
    complete state or the new one.

    Parameters
    ----------
    config:
        Descriptor location, sentinel paths and fetch timeout.
    resolver:
        Optional host resource resolver used to locate the descriptor.
    """

    def __init__(
        self,
        config: AuthzConfig | None = None,
        *,
        resolver: ResourceResolver | None = None,
    ) -> None:
        self._config = config or AuthzConfig()
        self._resolver = resolver
        self._state = _EMPTY_STATE

    # -- lifecycle ----------------------------------------------------------

    def initialize(
        self,
        source: DescriptorSource | str | os.PathLike[str] | None = None,
        *,
        timeout: float | None = None,
    ) -> InitializationResult:
        """Load the descriptor and publish a new constraint index.

        Parameters
        ----------
        source:
            A :class:`DescriptorSource`, an explicit locator, or ``None``
            to discover the descriptor through the host resolver and the
            base directory.
        timeout:
            Overrides the configured timeout for remote descriptors.

        Returns
        -------
        InitializationResult
            Never raises for descriptor problems; the error is carried on
            the result and the resolver degrades to an empty index.
        """
        if not isinstance(source, DescriptorSource):
            source = DescriptorSource(
                self._config, resolver=self._resolver, locator=source
            )

        try:
            index = parse_descriptor(source.fetch(timeout=timeout))
        except DescriptorUnavailable as exc:
            logger.info("No deployment descriptor: %s", exc.message)
            return self._publish(_EMPTY_STATE, error=exc)
        except MalformedDescriptor as exc:
            logger.warning(
                "Malformed XML in deployment descriptor: %s", exc.message
            )
            return self._publish(_EMPTY_STATE, error=exc)

        authorized = all(
            self._is_constrained(index, path, Role.ALL)
            for path in self._config.sentinel_paths
        )

        return self._publish(_ResolverState(index, container_authorized=authorized))

    def _publish(
        self, state: _ResolverState, *, error: DescriptorError | None = None
    ) -> InitializationResult:
        self._state = state

        if state.container_authorized:
            logger.info("Using container-managed authentication.")
        else:
            logger.info("Using custom authentication.")
        if state.index.roles:
            logger.info(
                "The deployment descriptor defines these roles: %s",
                " ".join(role.name for role in state.index.roles),
            )

        return InitializationResult(
            container_authorized=state.container_authorized,
            roles=state.index.roles,
            constraint_count=len(state.index),
            error=error,
        )

    # -- queries ------------------------------------------------------------

    @property
    def index(self) -> ConstraintIndex:
        """The currently published constraint index."""
        return self._state.index

    def is_constrained(self, resource_path: str, role: Role) -> bool:
        """Return ``True`` if *resource_path* is constrained to *role*.

        A path is constrained to a role when a single security constraint
        both matches the path and names the role.  Two different
        constraints, one matching the path and one naming the role, do
        not count.  ``Role.ALL`` is satisfied by any constraint on the
        path.
        """
        return self._is_constrained(self._state.index, resource_path, role)

    @staticmethod
    def _is_constrained(index: ConstraintIndex, path: str, role: Role) -> bool:
        by_path = index.matching_path(path)
        if not by_path:
            return False

        if role == Role.ALL:
            return True

        by_role = index.requiring_role(role)
        if not by_role:
            return False

        return not by_path.isdisjoint(by_role)

    def is_container_authorized(self) -> bool:
        """Return whether the container protects the sentinel resources.

        Computed once per :meth:`initialize`; reload to recompute.
        """
        return self._state.container_authorized

    def find_role(self, name: str) -> Role | None:
        """Return the descriptor role called *name* (case-sensitive), if any."""
        return self._state.index.find_role(name)

    def roles(self) -> tuple[Role, ...]:
        """Return a snapshot of the roles known from the descriptor."""
        return self._state.index.roles

    # -- delegation to the host ----------------------------------------------

    @staticmethod
    def is_user_in_role(request: HostRequest, role: Role) -> bool:
        """Ask the container whether the requesting identity holds *role*."""
        return request.is_user_in_role(role.name)

    @staticmethod
    def is_session_in_role(
        session: PrincipalSession | None, role: Role | None
    ) -> bool:
        """Return ``True`` if the session subject already holds *role*.

        Relies on the login stack having placed the container roles on
        the session.  Returns ``False`` if either argument is ``None``.
        """
        if session is None or role is None:
            return False
        return session.has_principal(role)
