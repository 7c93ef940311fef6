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

"""Schema, table and server administration helpers.

Usage::

    from xmysql.admin import create_schema, schema_exists, table_comment

    if not schema_exists(conn, "app"):
        create_schema(conn, "app")
"""

from xmysql.admin.schema import (
    READ_TIMEOUT_SECONDS,
    create_schema,
    current_schema,
    drop_schema,
    schema_exists,
)
from xmysql.admin.server_logs import (
    GENERAL_LOG_RESULT_HARD_LIMIT,
    GeneralLogEvent,
    LogOutput,
    disable_general_log,
    enable_general_log,
    flush_general_log,
    general_query_log_enabled,
    get_general_log_events,
    set_log_output,
)
from xmysql.admin.table import (
    set_table_comment,
    set_table_comment_json,
    table_comment,
    table_comment_json,
    table_exists,
)
from xmysql.admin.variables import global_variable

__all__ = [
    "READ_TIMEOUT_SECONDS",
    "create_schema",
    "drop_schema",
    "schema_exists",
    "current_schema",
    "table_exists",
    "table_comment",
    "table_comment_json",
    "set_table_comment",
    "set_table_comment_json",
    "global_variable",
    "LogOutput",
    "GeneralLogEvent",
    "GENERAL_LOG_RESULT_HARD_LIMIT",
    "set_log_output",
    "enable_general_log",
    "disable_general_log",
    "general_query_log_enabled",
    "get_general_log_events",
    "flush_general_log",
]
