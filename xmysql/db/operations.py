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

"""Pure-function query helpers.

All functions take a DB-API connection as their first argument.  Values
are bound with ``%s`` placeholders; identifiers go through
:func:`xmysql.templates.sqlw` before the statement reaches these helpers.

Driver exceptions are re-raised as :class:`~xmysql.db.errors.MySQLError`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import pymysql

from xmysql.db.errors import new_error

logger = logging.getLogger(__name__)


def execute(conn: Any, sql: str, params: Sequence = ()) -> Any:
    """Execute a single statement and return the cursor.

    Useful for INSERT / UPDATE / DELETE where you might need
    ``cursor.lastrowid`` or ``cursor.rowcount``.
    """
    cur = conn.cursor()
    try:
        cur.execute(sql, params or None)
    except pymysql.Error as exc:
        cur.close()
        raise new_error(exc) from exc
    return cur


def fetch_one(conn: Any, sql: str, params: Sequence = ()) -> Any:
    """Execute and return the first row, or ``None``."""
    cur = conn.cursor()
    try:
        cur.execute(sql, params or None)
        return cur.fetchone()
    except pymysql.Error as exc:
        raise new_error(exc) from exc
    finally:
        cur.close()


def fetch_all(conn: Any, sql: str, params: Sequence = ()) -> list[Any]:
    """Execute and return all rows."""
    cur = conn.cursor()
    try:
        cur.execute(sql, params or None)
        return list(cur.fetchall())
    except pymysql.Error as exc:
        raise new_error(exc) from exc
    finally:
        cur.close()


def fetch_scalar(conn: Any, sql: str, params: Sequence = ()) -> Any:
    """Execute and return the first column of the first row, or ``None``."""
    row = fetch_one(conn, sql, params)
    if row is None:
        return None
    # DictCursor rows are dicts, the default cursor returns tuples
    if isinstance(row, dict):
        return next(iter(row.values()), None)
    try:
        return row[0]
    except IndexError:
        return None
