"""Deployment descriptor discovery and retrieval.

The descriptor is located in this order:

1. An explicit locator passed by the caller.
2. The host :class:`~container_authz.core.interfaces.ResourceResolver`,
   asked for ``/WEB-INF/web.xml``.
3. ``WEB-INF/web.xml`` under the configured base directory.

Locators may be filesystem paths, ``file:`` URLs or ``http(s):`` URLs.
Remote descriptors are fetched with ``httpx``; a timeout is reported the
same way as a missing file.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx

from container_authz.core.config import AuthzConfig
from container_authz.core.errors import DescriptorUnavailable
from container_authz.core.interfaces import ResourceResolver

logger = logging.getLogger(__name__)

_REMOTE_SCHEMES = frozenset({"http", "https"})


class DescriptorSource:
    """Locates and reads the deployment descriptor bytes.

    Parameters
    ----------
    config:
        Supplies the descriptor path, base directory and fetch timeout.
    resolver:
        Optional host resource resolver, consulted before the base
        directory.
    locator:
        Optional explicit locator; skips discovery entirely.
    transport:
        Optional ``httpx`` transport used for remote locators.
    """

    def __init__(
        self,
        config: AuthzConfig | None = None,
        *,
        resolver: ResourceResolver | None = None,
        locator: str | os.PathLike[str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or AuthzConfig()
        self._resolver = resolver
        self._locator = os.fspath(locator) if locator is not None else None
        self._transport = transport

    def locate(self) -> str:
        """Return the descriptor locator.

        Raises
        ------
        DescriptorUnavailable
            If neither the host nor the base directory provides one.
        """
        if self._locator is not None:
            return self._locator

        path = self._config.descriptor_path
        if self._resolver is not None:
            locator = self._resolver.get_resource(path)
            if locator is not None:
                return locator

        base = Path(self._config.base_dir) if self._config.base_dir else Path.cwd()
        candidate = base / path.lstrip("/")
        if candidate.is_file():
            return str(candidate)

        raise DescriptorUnavailable(
            f"Unable to find {path} for processing",
            details={"descriptor_path": path, "base_dir": str(base)},
        )

    def fetch(self, *, timeout: float | None = None) -> bytes:
        """Locate the descriptor and return its raw bytes.

        Parameters
        ----------
        timeout:
            Overrides the configured fetch timeout for remote locators.

        Raises
        ------
        DescriptorUnavailable
            If the descriptor cannot be located, read or downloaded.
        """
        locator = self.locate()
        logger.info("Examining %s", locator)

        try:
            parts = urlsplit(locator)
        except ValueError as exc:
            raise DescriptorUnavailable(
                f"Invalid deployment descriptor locator {locator!r}: {exc}",
                details={"locator": locator},
            ) from exc

        scheme = parts.scheme.lower()
        if scheme in _REMOTE_SCHEMES:
            if timeout is None:
                timeout = self._config.fetch_timeout_seconds
            return self._fetch_remote(locator, timeout)
        if scheme == "file":
            return self._read_local(Path(url2pathname(parts.path)), locator)
        return self._read_local(Path(locator), locator)

    def _fetch_remote(self, url: str, timeout: float) -> bytes:
        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                response = client.get(url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise DescriptorUnavailable(
                f"Could not fetch deployment descriptor from {url}: {exc}",
                details={"locator": url},
            ) from exc
        return response.content

    @staticmethod
    def _read_local(path: Path, locator: str) -> bytes:
        # Embedded NUL bytes surface as ValueError rather than OSError.
        try:
            return path.read_bytes()
        except (OSError, ValueError) as exc:
            raise DescriptorUnavailable(
                f"Could not read deployment descriptor at {locator!r}: {exc}",
                details={"locator": locator},
            ) from exc
