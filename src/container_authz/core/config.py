"""Resolver configuration.

Defines the validated configuration model consumed by the descriptor
source, the constraint resolver and the global security configurator.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DESCRIPTOR_PATH = "/WEB-INF/web.xml"
DEFAULT_SENTINEL_PATHS = ("/Delete.jsp", "/Login.jsp")


class AuthzConfig(BaseModel):
    """Configuration for container-managed authorization.

    All fields carry defaults matching a stock web application layout,
    so ``AuthzConfig()`` is sufficient for development.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    descriptor_path: str = Field(
        default=DEFAULT_DESCRIPTOR_PATH,
        min_length=1,
        description=(
            "Resource path of the deployment descriptor, as requested "
            "from the host resource resolver."
        ),
    )
    base_dir: str | None = Field(
        default=None,
        description=(
            "Directory the descriptor path is resolved against when the "
            "host resolver does not supply the descriptor.  Defaults to "
            "the current working directory."
        ),
    )
    sentinel_paths: tuple[str, str] = Field(
        default=DEFAULT_SENTINEL_PATHS,
        description=(
            "The delete and login resource paths probed under the ALL "
            "role to decide whether the container manages authorization."
        ),
    )
    fetch_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Timeout for fetching a descriptor from a remote locator.",
    )
    keystore_name: str = Field(
        default="keystore.jks",
        min_length=1,
        description=(
            "File name of the keystore expected next to the security "
            "policy file."
        ),
    )
