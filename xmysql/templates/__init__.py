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

"""SQL statement templates with ``$(key)`` placeholders.

Splices identifiers that cannot be bound as parameters (schema names,
table names) into statements, refusing partial substitution.

Usage::

    from xmysql.templates import sqlw

    stmt = sqlw("SELECT 1 AS $(tbl)_value FROM $(tbl)", "tbl", "t1")
    # "SELECT 1 AS t1_value FROM t1"
"""

from xmysql.templates.substitute import (
    SubstitutionError,
    UnclosedSubstitutionError,
    UnresolvedPlaceholderError,
    UnusedValueError,
    must_sqlw,
    sqlw,
)

__all__ = [
    "sqlw",
    "must_sqlw",
    "SubstitutionError",
    "UnclosedSubstitutionError",
    "UnusedValueError",
    "UnresolvedPlaceholderError",
]
