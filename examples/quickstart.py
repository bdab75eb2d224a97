#!/usr/bin/env python3
"""container-authz quickstart.

Demonstrates the two halves of the library:

1. Install a login configuration and a security policy into an
   explicit security state.
2. Load a deployment descriptor and ask which resources the container
   protects.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from container_authz import (
    ConstraintResolver,
    ExecutionContext,
    GlobalSecurityConfigurator,
    GlobalSecurityState,
    Role,
)

DESCRIPTOR = """<?xml version="1.0" encoding="UTF-8"?>
<web-app xmlns="http://java.sun.com/xml/ns/j2ee" version="2.4">
  <security-constraint>
    <web-resource-collection>
      <url-pattern>/Delete.jsp</url-pattern>
      <url-pattern>/Login.jsp</url-pattern>
      <url-pattern>/admin/*</url-pattern>
    </web-resource-collection>
    <auth-constraint>
      <role-name>Admin</role-name>
      <role-name>AUTHENTICATED</role-name>
    </auth-constraint>
  </security-constraint>
  <security-role>
    <role-name>Reader</role-name>
  </security-role>
</web-app>
"""


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        web_inf = Path(tmp) / "WEB-INF"
        web_inf.mkdir()
        (web_inf / "web.xml").write_text(DESCRIPTOR, encoding="utf-8")
        (web_inf / "login.conf").write_text("App { LoginModule required; };\n")

        # -- Step 1: Global security configuration ----------------------------
        # A private state keeps this example from touching the process-wide
        # one; real hosts pass PROCESS_SECURITY_STATE.
        state = GlobalSecurityState()
        configurator = GlobalSecurityConfigurator(
            state, ExecutionContext.unrestricted()
        )
        configurator.set_auth_configuration(web_inf / "login.conf")
        print(f"[1] Login configuration installed: {configurator.is_auth_configured()}")

        # -- Step 2: Constraint resolution ------------------------------------
        resolver = ConstraintResolver()
        result = resolver.initialize(web_inf / "web.xml")
        print(f"[2] Container authorized: {result.container_authorized}")
        print(f"    Roles: {', '.join(role.name for role in resolver.roles())}")

        for path in ("/Delete.jsp", "/admin/users", "/Wiki.jsp"):
            print(
                f"    {path:<14} ALL={resolver.is_constrained(path, Role.ALL)!s:<5} "
                f"Admin={resolver.is_constrained(path, Role('Admin'))}"
            )


if __name__ == "__main__":
    main()
