"""Deployment descriptor parser.

Parses a ``web.xml`` document once into
:class:`~container_authz.core.types.Constraint` value objects and a
:class:`~container_authz.core.types.ConstraintIndex`; every later query
runs against the index, never the document.

The elements consumed are::

    web-app
    +-- security-constraint*
    |   +-- web-resource-collection*
    |   |   +-- url-pattern*
    |   +-- auth-constraint?
    |       +-- role-name*
    +-- security-role*
        +-- role-name

Namespaces are ignored, so J2EE 1.4, Java EE, Jakarta EE and
un-namespaced descriptors are all accepted.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator

import defusedxml.ElementTree as SafeET
from defusedxml import DefusedXmlException

from container_authz.core.errors import MalformedDescriptor
from container_authz.core.types import Constraint, ConstraintIndex

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "web-app"


def _local_name(tag: object) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on qualified tags."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            yield child


def _texts(element: ET.Element, *path: str) -> Iterator[str]:
    """Yield the trimmed, non-blank text of every element under *path*."""
    if not path:
        text = (element.text or "").strip()
        if text:
            yield text
        return
    head, *rest = path
    for child in _children(element, head):
        yield from _texts(child, *rest)


def _unique(values: Iterator[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def parse_constraint(element: ET.Element) -> Constraint:
    """Build a :class:`Constraint` from one ``security-constraint`` element."""
    return Constraint(
        url_patterns=_unique(
            _texts(element, "web-resource-collection", "url-pattern")
        ),
        role_names=_unique(_texts(element, "auth-constraint", "role-name")),
    )


def parse_descriptor(data: bytes) -> ConstraintIndex:
    """Parse descriptor bytes into a :class:`ConstraintIndex`.

    An empty or whitespace-only document yields an empty index.

    Raises
    ------
    MalformedDescriptor
        If the bytes are not well-formed XML, declare entities, or the
        root element is not ``web-app``.
    """
    if not data.strip():
        logger.debug("Deployment descriptor is empty")
        return ConstraintIndex.empty()

    try:
        root = SafeET.fromstring(data)
    except ET.ParseError as exc:
        raise MalformedDescriptor(
            f"Malformed XML in deployment descriptor: {exc}",
            details={"position": list(exc.position)},
        ) from exc
    except DefusedXmlException as exc:
        raise MalformedDescriptor(
            f"Forbidden construct in deployment descriptor: {exc}",
            details={"reason": type(exc).__name__},
        ) from exc

    root_name = _local_name(root.tag)
    if root_name != ROOT_ELEMENT:
        raise MalformedDescriptor(
            f"Expected <{ROOT_ELEMENT}> root element, found <{root_name}>",
            details={"root": root_name},
        )

    constraints = [
        parse_constraint(element)
        for element in _children(root, "security-constraint")
    ]
    declared = list(_texts(root, "security-role", "role-name"))

    index = ConstraintIndex(constraints, declared)
    logger.debug(
        "Parsed %d security constraint(s) and %d role(s)",
        len(index),
        len(index.roles),
    )
    return index
