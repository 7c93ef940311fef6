# xmysql — convenience utilities for MySQL clients
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Schema (database) management.

Reads from ``information_schema`` are bounded by
:data:`READ_TIMEOUT_SECONDS` through the ``MAX_EXECUTION_TIME`` optimizer
hint, so a stuck server does not block the caller indefinitely.
"""

from __future__ import annotations

import logging
from typing import Any

from xmysql.db.operations import execute, fetch_one, fetch_scalar
from xmysql.templates import must_sqlw

logger = logging.getLogger(__name__)

READ_TIMEOUT_SECONDS = 3

# Optimizer hint placed right after SELECT in bounded reads
READ_HINT = f"/*+ MAX_EXECUTION_TIME({READ_TIMEOUT_SECONDS * 1000}) */"


def create_schema(conn: Any, name: str) -> None:
    """Create schema *name*.

    Raises:
        MySQLError: ``schema '<name>' not available`` if it already exists.
    """
    execute(conn, must_sqlw("CREATE SCHEMA $(name)", "name", name)).close()
    logger.debug("Created schema %s", name)


def drop_schema(conn: Any, name: str) -> None:
    """Drop schema *name*.

    Raises:
        MySQLError: ``schema '<name>' does not exist`` if it is missing.
    """
    execute(conn, must_sqlw("DROP SCHEMA $(name)", "name", name)).close()
    logger.debug("Dropped schema %s", name)


def schema_exists(conn: Any, name: str) -> bool:
    """Check whether schema *name* exists."""
    row = fetch_one(
        conn,
        f"SELECT {READ_HINT} 1 FROM information_schema.SCHEMATA WHERE SCHEMA_NAME = %s",
        (name,),
    )
    return row is not None


def current_schema(conn: Any) -> str:
    """Return the current schema of *conn*, or ``""`` when none is selected."""
    name = fetch_scalar(conn, f"SELECT {READ_HINT} SCHEMA()")
    return name or ""
