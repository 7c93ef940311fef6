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

"""Server variables."""

from __future__ import annotations

from typing import Any

from xmysql.db.errors import new_error
from xmysql.db.operations import fetch_scalar


def global_variable(conn: Any, name: str) -> str:
    """Return the value of global variable *name* as a string.

    Raises:
        MySQLError: If the server has no such variable.
    """
    value = fetch_scalar(
        conn,
        "SELECT VARIABLE_VALUE FROM performance_schema.global_variables "
        "WHERE VARIABLE_NAME = %s",
        (name,),
    )
    if value is None:
        raise new_error(LookupError(f"unknown global variable '{name}'"))
    return str(value)
