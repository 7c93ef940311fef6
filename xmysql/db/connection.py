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

"""Database connection factory.

Returns a standard DB-API 2.0 connection from PyMySQL, configured from a
DSN (see :mod:`xmysql.db.dsn`).  Rows are returned as dictionaries.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import pymysql
import pymysql.cursors

from xmysql.db.dsn import connect_kwargs, mask_password_in_dsn
from xmysql.db.errors import new_error

logger = logging.getLogger(__name__)

DSN_ENV_VAR = "XMYSQL_DSN"
DEFAULT_DSN = "root:mysql@tcp(127.0.0.1:3306)/?parseTime=true"


def default_dsn() -> str:
    """Return the DSN from ``$XMYSQL_DSN``, or :data:`DEFAULT_DSN`."""
    return os.environ.get(DSN_ENV_VAR) or DEFAULT_DSN


def connect(dsn: str | None = None, **overrides: Any) -> pymysql.connections.Connection:
    """Open a MySQL connection described by *dsn*.

    Args:
        dsn: Data source name; defaults to :func:`default_dsn`.
        **overrides: Extra keyword arguments for ``pymysql.connect``,
            taking precedence over values from the DSN.

    Raises:
        MySQLError: If the DSN is invalid or the server cannot be reached.
    """
    dsn = dsn or default_dsn()
    try:
        kwargs = connect_kwargs(dsn)
    except ValueError as exc:
        raise new_error(exc) from exc

    kwargs.setdefault("cursorclass", pymysql.cursors.DictCursor)
    kwargs.update(overrides)

    try:
        conn = pymysql.connect(**kwargs)
    except pymysql.Error as exc:
        logger.debug("MySQL connection failed: %s", mask_password_in_dsn(dsn))
        raise new_error(exc) from exc

    logger.debug("MySQL connection opened: %s", mask_password_in_dsn(dsn))
    return conn
