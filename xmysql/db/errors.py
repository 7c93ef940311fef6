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

"""Normalised errors for MySQL driver exceptions.

:class:`MySQLError` wraps whatever the driver raised, remembers where in
the calling code it happened, and renders a shorter, friendlier message
for a handful of well-known server error numbers::

    try:
        execute(conn, "CREATE SCHEMA app")
    except pymysql.Error as exc:
        raise new_error(exc) from exc
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Sequence
from typing import Any

# MySQL server and client error numbers handled here
ER_DB_CREATE_EXISTS = 1007
ER_DB_DROP_EXISTS = 1008
ER_DUP_ENTRY = 1062
CR_CONN_HOST_ERROR = 2003
CR_UNKNOWN_HOST = 2005

_RE_QUOTED = re.compile(r"'(.*?)'")
_RE_SERVER_HOST = re.compile(r"MySQL server on '([^']*)'")

_PACKAGE = "xmysql"


class MySQLError(Exception):
    """A driver error with call-site information and a normalised message.

    Attributes:
        message: Fixed message overriding the driver's, or ``""``.
        driver_error: The original driver exception, if any.
        query: Statement that failed (only set by :func:`new_error_query`).
        values: Values interpolated into *query*.
        filename: Source file of the caller outside this package.
        line: Line number in *filename*.
        number: MySQL error number, ``0`` when unknown.
    """

    def __init__(
        self,
        message: str = "",
        driver_error: BaseException | None = None,
        *,
        query: str = "",
        values: Sequence[Any] | None = None,
        filename: str = "",
        line: int = 0,
        number: int = 0,
    ) -> None:
        super().__init__(message or driver_error)
        self.message = message
        self.driver_error = driver_error
        self.query = query
        self.values = list(values) if values is not None else []
        self.filename = filename
        self.line = line
        self.number = number

    def __str__(self) -> str:
        if self.message:
            return self.message
        if self.driver_error is None:
            return "unknown MySQL error"

        msg = _driver_message(self.driver_error)

        refused = _find_connection_refused(self.driver_error)
        if refused is not None:
            match = _RE_SERVER_HOST.search(msg)
            host = match.group(1) if match else "<unknown>"
            reason = refused.strerror or str(refused)
            return f"unknown MySQL server host '{host}' ({reason.lower()}) [2005:HY000]"

        if self.number <= 0:
            return msg

        # "Can't" would otherwise open a quoted part
        msg = msg.replace("an't", "annot").replace("oesn't", "oes not")

        if self.number == ER_DB_CREATE_EXISTS:
            quoted = _RE_QUOTED.findall(msg)
            if quoted:
                return f"schema '{quoted[0]}' not available"
        elif self.number == ER_DB_DROP_EXISTS:
            quoted = _RE_QUOTED.findall(msg)
            if quoted:
                return f"schema '{quoted[0]}' does not exist"
        elif self.number == ER_DUP_ENTRY:
            quoted = _RE_QUOTED.findall(msg)
            if quoted:
                return f"'{quoted[0]}' not available"

        return msg.lower()


def _driver_message(err: BaseException) -> str:
    """Return the driver's message without the error number.

    PyMySQL raises ``OperationalError(1046, "No database selected")``.
    """
    args = getattr(err, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return str(args[1])
    return str(err)


def _error_number(err: BaseException) -> int:
    for attr in ("number", "errno", "code"):
        value = getattr(err, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and value:
            return value
    args = getattr(err, "args", ())
    if args and isinstance(args[0], int) and not isinstance(args[0], bool):
        return args[0]
    return 0


def _find_connection_refused(err: BaseException) -> ConnectionRefusedError | None:
    """Look for a refused socket connection behind *err*.

    PyMySQL keeps the socket error in ``original_exception``; other drivers
    chain it as ``__cause__`` or ``__context__``.
    """
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        if isinstance(current, ConnectionRefusedError):
            return current
        seen.add(id(current))
        current = (
            getattr(current, "original_exception", None)
            or current.__cause__
            or current.__context__
        )
    return None


def _caller() -> tuple[str, int]:
    """Return file name and line of the first frame outside this package."""
    frame = inspect.currentframe()
    try:
        while frame is not None:
            module = frame.f_globals.get("__name__", "")
            if module != _PACKAGE and not module.startswith(_PACKAGE + "."):
                return frame.f_code.co_filename, frame.f_lineno
            frame = frame.f_back
        return "", 0
    finally:
        del frame


def new_error(err: BaseException) -> MySQLError:
    """Wrap *err*, storing the caller's file name and line number."""
    filename, line = _caller()
    number = _error_number(err)
    if _find_connection_refused(err) is not None:
        number = CR_UNKNOWN_HOST
    return MySQLError(
        driver_error=err,
        filename=filename,
        line=line,
        number=number,
    )


def new_error_message(err: BaseException, fmt: str, *args: Any) -> MySQLError:
    """Wrap *err* but use ``fmt % args`` as message."""
    e = new_error(err)
    e.message = fmt % args if args else fmt
    return e


def new_error_query(err: BaseException, query: str, values: Sequence[Any] = ()) -> MySQLError:
    """Wrap *err* keeping *query* and its *values*.

    Values may contain sensitive data; use while debugging only.
    """
    e = new_error(err)
    e.query = query
    e.values = list(values)
    return e


def error_is(err: BaseException, number: int) -> bool:
    """Return True if *err* is a wrapped driver error with MySQL *number*."""
    return (
        isinstance(err, MySQLError)
        and err.driver_error is not None
        and err.number == number
    )


def is_db_create_exists(err: BaseException) -> bool:
    return error_is(err, ER_DB_CREATE_EXISTS)


def error_tx_begin(err: BaseException) -> MySQLError:
    return new_error_message(err, "failed starting transaction")


def error_tx_commit(err: BaseException) -> MySQLError:
    return new_error_message(err, "failed committing transaction")
