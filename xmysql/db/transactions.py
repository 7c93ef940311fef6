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

"""Transaction context manager."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import pymysql

from xmysql.db.errors import error_tx_begin, error_tx_commit

logger = logging.getLogger(__name__)


@contextmanager
def transaction(conn: Any) -> Generator[Any, None, None]:
    """Context manager that commits on success, rolls back on exception.

    Usage::

        with transaction(conn):
            execute(conn, "INSERT INTO ...")
            execute(conn, "UPDATE ...")
        # auto-committed here

    Failing to start or commit the transaction raises a
    :class:`~xmysql.db.errors.MySQLError` with message
    ``failed starting transaction`` or ``failed committing transaction``.
    """
    try:
        conn.begin()
    except pymysql.Error as exc:
        raise error_tx_begin(exc) from exc

    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise

    try:
        conn.commit()
    except pymysql.Error as exc:
        logger.debug("Commit failed, rolling back: %s", exc)
        conn.rollback()
        raise error_tx_commit(exc) from exc
