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

"""General Query Log control.

The General Query Log records every statement the server receives.  It is
handy in tests (did my code issue the statement I expect?) but should not
be left on for a production instance.

Reading events with :func:`get_general_log_events` requires the ``TABLE``
log output::

    set_log_output(conn, LogOutput.TABLE)
    enable_general_log(conn)
    flush_general_log(conn)
    ...
    events = get_general_log_events(conn, arg_like="SELECT%")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from xmysql.admin.variables import global_variable
from xmysql.db.operations import execute, fetch_all

logger = logging.getLogger(__name__)

GENERAL_LOG_RESULT_HARD_LIMIT = 1000

_EVENT_COLUMNS = (
    "event_time", "user_host", "thread_id", "server_id", "command_type", "argument",
)


class LogOutput(Enum):
    """Destinations of the general and slow query logs."""
    NONE = "NONE"
    FILE = "FILE"
    TABLE = "TABLE"


@dataclass
class GeneralLogEvent:
    """A row of ``mysql.general_log``."""

    time: datetime
    user_host: str
    thread_id: int
    server_id: int
    command_type: str
    argument: str


def _text(value: Any) -> str:
    # user_host and argument are BLOB columns
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return "" if value is None else str(value)


def _row_to_event(row: Any) -> GeneralLogEvent:
    if isinstance(row, dict):
        row = tuple(row[c] for c in _EVENT_COLUMNS)
    event_time, user_host, thread_id, server_id, command_type, argument = row
    return GeneralLogEvent(
        time=event_time,
        user_host=_text(user_host),
        thread_id=int(thread_id),
        server_id=int(server_id),
        command_type=_text(command_type),
        argument=_text(argument),
    )


def set_log_output(conn: Any, *outputs: LogOutput | str) -> None:
    """Set the destinations of the general and slow query logs.

    Several destinations may be given.  ``NONE`` takes precedence over all
    others.  Does nothing when no output is given.
    """
    if not outputs:
        return

    selected = [LogOutput(o) for o in outputs]
    if LogOutput.NONE in selected:
        selected = [LogOutput.NONE]

    value = ",".join(dict.fromkeys(o.value for o in selected))
    execute(conn, "SET GLOBAL log_output = %s", (value,)).close()
    logger.info("Server log output set to %s", value)


def enable_general_log(conn: Any) -> None:
    """Turn on the General Query Log."""
    execute(conn, "SET GLOBAL general_log = 'ON'").close()
    logger.info("General query log enabled")


def disable_general_log(conn: Any) -> None:
    """Turn off the General Query Log."""
    execute(conn, "SET GLOBAL general_log = 'OFF'").close()
    logger.info("General query log disabled")


def general_query_log_enabled(conn: Any) -> bool:
    """Return whether the General Query Log is enabled."""
    return global_variable(conn, "general_log").upper() == "ON"


def get_general_log_events(
    conn: Any,
    arg_like: str = "",
    limit: int = 0,
) -> list[GeneralLogEvent]:
    """Retrieve events from ``mysql.general_log``, oldest first.

    Args:
        conn: A PyMySQL connection.
        arg_like: ``LIKE`` pattern filtering the ``argument`` column;
            empty for no filtering.
        limit: Maximum number of events.  ``0``, or anything above
            :data:`GENERAL_LOG_RESULT_HARD_LIMIT`, means the hard limit.
    """
    sql = f"SELECT {', '.join(_EVENT_COLUMNS)} FROM mysql.general_log"
    params: list[Any] = []
    if arg_like:
        sql += " WHERE argument LIKE %s"
        params.append(arg_like)

    if limit <= 0 or limit > GENERAL_LOG_RESULT_HARD_LIMIT:
        limit = GENERAL_LOG_RESULT_HARD_LIMIT

    sql += " ORDER BY event_time ASC LIMIT %s"
    params.append(limit)

    return [_row_to_event(row) for row in fetch_all(conn, sql, params)]


def flush_general_log(conn: Any) -> None:
    """Flush the general log file and truncate ``mysql.general_log``.

    The log is disabled while flushing and enabled again afterwards if it
    was enabled before.
    """
    enabled = general_query_log_enabled(conn)
    if enabled:
        disable_general_log(conn)

    try:
        execute(conn, "FLUSH GENERAL LOGS").close()
        execute(conn, "TRUNCATE TABLE mysql.general_log").close()
    finally:
        if enabled:
            enable_general_log(conn)
