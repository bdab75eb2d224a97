"""Security provider resolution and the default file-backed providers.

Providers are named by identifier, either ``package.module:Attribute``
or the dotted form ``package.module.Attribute``, and instantiated with
the locator of their configuration file.  The default providers only
record where their file lives and read it on demand; verifying
credentials or evaluating grants is left to the host.
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit
from urllib.request import url2pathname


def load_provider(identifier: str) -> type[Any]:
    """Import and return the class named by *identifier*.

    Raises
    ------
    ImportError
        If the module cannot be imported.
    AttributeError
        If the module has no such attribute.
    TypeError
        If the attribute is not a class.
    ValueError
        If the identifier is malformed.
    """
    if ":" in identifier:
        module_name, _, attr = identifier.partition(":")
    else:
        module_name, _, attr = identifier.rpartition(".")
    if not module_name or not attr:
        msg = f"Malformed provider identifier: {identifier!r}"
        raise ValueError(msg)

    obj = getattr(importlib.import_module(module_name), attr)
    if not isinstance(obj, type):
        msg = f"Provider {identifier!r} is not a class"
        raise TypeError(msg)
    return obj


def locator_to_path(locator: str) -> Path:
    """Convert a plain path or ``file:`` URL into a :class:`Path`."""
    if locator.startswith("file:"):
        return Path(url2pathname(urlsplit(locator).path))
    return Path(locator)


class _FileProvider:
    def __init__(self, locator: str) -> None:
        self.locator = locator
        self._text: str | None = None

    @property
    def path(self) -> Path:
        return locator_to_path(self.locator)

    @property
    def text(self) -> str:
        """The file contents, read on first access."""
        if self._text is None:
            return self.refresh()
        return self._text

    def refresh(self) -> str:
        """Re-read the configuration file and return its contents."""
        self._text = self.path.read_text(encoding="utf-8")
        return self._text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.locator!r})"


class LoginConfigFile(_FileProvider):
    """Default login configuration: a login-module configuration file."""


class PolicyFile(_FileProvider):
    """Default authorization policy: a grant-based policy file."""
