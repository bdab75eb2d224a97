"""Deployment descriptor loading.

* **DescriptorSource** -- locates ``WEB-INF/web.xml`` through the host
  resolver or the base directory and reads local or remote bytes.
* **parse_descriptor** -- turns descriptor bytes into an immutable
  :class:`~container_authz.core.types.ConstraintIndex`.
"""
from __future__ import annotations

from container_authz.descriptor.parser import parse_constraint, parse_descriptor
from container_authz.descriptor.source import DescriptorSource

__all__ = [
    "DescriptorSource",
    "parse_constraint",
    "parse_descriptor",
]
