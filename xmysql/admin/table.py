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

"""Table introspection and table comments.

Table comments are a convenient place to keep small bits of metadata, for
example a JSON document describing a table's version::

    set_table_comment_json(conn, "events", {"version": 3})
    table_comment_json(conn, "events")  # {"version": 3}

When *schema* is omitted or empty, the current schema of the connection
is used.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from xmysql.admin.schema import READ_HINT, current_schema
from xmysql.db.errors import new_error
from xmysql.db.operations import execute, fetch_one
from xmysql.templates import must_sqlw

logger = logging.getLogger(__name__)


def table_exists(conn: Any, name: str) -> bool:
    """Check whether table *name* exists in the current schema."""
    schema = current_schema(conn)
    row = fetch_one(
        conn,
        f"SELECT {READ_HINT} 1 FROM information_schema.TABLES "
        "WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s",
        (schema, name),
    )
    return row is not None


def _qualified(table: str, schema: str | None) -> str:
    if schema:
        return must_sqlw("$(schema).$(table)", "schema", schema, "table", table)
    return table


def table_comment(conn: Any, table: str, schema: str | None = None) -> str:
    """Return the comment of *table*.

    Raises:
        MySQLError: If the table does not exist.
    """
    sql = (
        f"SELECT {READ_HINT} TABLE_COMMENT FROM information_schema.TABLES "
        "WHERE TABLE_NAME = %s AND TABLE_SCHEMA = "
    )
    if schema:
        sql += "%s"
        params: tuple[str, ...] = (table, schema)
    else:
        sql += "SCHEMA()"
        params = (table,)

    row = fetch_one(conn, sql, params)
    if row is None:
        raise new_error(LookupError(f"table '{table}' does not exist"))
    if isinstance(row, dict):
        return row["TABLE_COMMENT"]
    return row[0]


def table_comment_json(conn: Any, table: str, schema: str | None = None) -> Any:
    """Return the comment of *table* decoded as JSON.

    Raises:
        MySQLError: If the table does not exist.
        json.JSONDecodeError: If the comment is not valid JSON.
    """
    return json.loads(table_comment(conn, table, schema))


def set_table_comment(conn: Any, table: str, comment: str, schema: str | None = None) -> None:
    """Set the comment of *table* to *comment*."""
    ddl = must_sqlw("ALTER TABLE $(table) COMMENT = %s", "table", _qualified(table, schema))
    execute(conn, ddl, (comment,)).close()
    logger.debug("Set comment of table %s", table)


def set_table_comment_json(conn: Any, table: str, comment: Any, schema: str | None = None) -> None:
    """Set the comment of *table* to *comment* encoded as JSON."""
    set_table_comment(conn, table, json.dumps(comment, separators=(",", ":")), schema)
