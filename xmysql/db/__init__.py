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

"""Thin MySQL layer — pure functions over PyMySQL connections.

Usage::

    from xmysql.db import connect, fetch_all, execute, transaction

    conn = connect("app:secret@tcp(127.0.0.1:3306)/app")
    with transaction(conn):
        execute(conn, "INSERT INTO papers (doi, title) VALUES (%s, %s)", ("10.1101/x", "A paper"))
    rows = fetch_all(conn, "SELECT * FROM papers")
"""

from xmysql.db.connection import DEFAULT_DSN, DSN_ENV_VAR, connect, default_dsn
from xmysql.db.dsn import (
    DSN_PASSWORD_MASK,
    DSNConfig,
    connect_kwargs,
    mask_password_in_dsn,
    parse_dsn,
    replace_dsn_database,
    set_dsn_params,
)
from xmysql.db.errors import (
    CR_CONN_HOST_ERROR,
    CR_UNKNOWN_HOST,
    ER_DB_CREATE_EXISTS,
    ER_DB_DROP_EXISTS,
    ER_DUP_ENTRY,
    MySQLError,
    error_is,
    error_tx_begin,
    error_tx_commit,
    is_db_create_exists,
    new_error,
    new_error_message,
    new_error_query,
)
from xmysql.db.operations import execute, fetch_all, fetch_one, fetch_scalar
from xmysql.db.transactions import transaction

__all__ = [
    "connect",
    "default_dsn",
    "DEFAULT_DSN",
    "DSN_ENV_VAR",
    "DSNConfig",
    "DSN_PASSWORD_MASK",
    "parse_dsn",
    "connect_kwargs",
    "replace_dsn_database",
    "set_dsn_params",
    "mask_password_in_dsn",
    "MySQLError",
    "ER_DB_CREATE_EXISTS",
    "ER_DB_DROP_EXISTS",
    "ER_DUP_ENTRY",
    "CR_CONN_HOST_ERROR",
    "CR_UNKNOWN_HOST",
    "new_error",
    "new_error_message",
    "new_error_query",
    "error_is",
    "is_db_create_exists",
    "error_tx_begin",
    "error_tx_commit",
    "execute",
    "fetch_one",
    "fetch_all",
    "fetch_scalar",
    "transaction",
]
