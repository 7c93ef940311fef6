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

"""``$(key)`` placeholder substitution for SQL statements.

Substitution is meant for the structural parts of a statement that cannot
be bound as driver parameters, such as schema or table names::

    sqlw("SELECT c1 FROM $(tblName)", "tblName", "t1")
    # -> "SELECT c1 FROM t1"

Always prefer ``%s`` parameters for values.  Placeholders inside quoted
parts of the statement (``'...'``, ``"..."`` or backticks) are left alone.
Escaped or doubled quote characters are not recognised.
"""

from __future__ import annotations

QUOTE_CHARS = ("'", '"', "`")


class SubstitutionError(ValueError):
    """Base class for errors raised by :func:`sqlw`."""


class UnclosedSubstitutionError(SubstitutionError):
    """A ``$(`` was found without a closing ``)``."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"unclosed substitution at position {position}")


class UnusedValueError(SubstitutionError):
    """Values were given for keys that never appear as a placeholder."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = sorted(keys)
        super().__init__(f"placeholder missing for {','.join(self.keys)}")


class UnresolvedPlaceholderError(SubstitutionError):
    """The statement references keys for which no value was given."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = sorted(keys)
        super().__init__(f"key/value missing for {','.join(self.keys)}")


def _pairs_to_dict(key_value_pairs: tuple[str, ...]) -> dict[str, str]:
    values: dict[str, str] = {}
    # zip() drops a dangling key without a value
    for key, value in zip(key_value_pairs[::2], key_value_pairs[1::2]):
        values[key] = value
    return values


def sqlw(statement: str, *key_value_pairs: str) -> str:
    """Substitute ``$(key)`` placeholders in *statement*.

    Args:
        statement: SQL statement containing ``$(key)`` placeholders.
        *key_value_pairs: Alternating keys and values.  A later key
            overwrites an earlier one; a trailing key without value is
            ignored.

    Returns:
        The statement with every unquoted placeholder replaced.

    Raises:
        UnclosedSubstitutionError: ``$(`` without a closing ``)``.
        UnusedValueError: A key was given but not used in the statement.
        UnresolvedPlaceholderError: A placeholder has no value.
    """
    values = _pairs_to_dict(key_value_pairs)

    result: list[str] = []
    substituted: set[str] = set()
    not_provided: set[str] = set()
    quoted = ""

    length = len(statement)
    pos = 0
    while pos < length:
        char = statement[pos]
        if quoted:
            if char == quoted:
                quoted = ""
        elif char in QUOTE_CHARS:
            quoted = char
        elif char == "$" and statement.startswith("(", pos + 1):
            end = statement.find(")", pos + 2)
            if end == -1:
                raise UnclosedSubstitutionError(pos)
            key = statement[pos + 2:end]
            if key in values:
                result.append(values[key])
                substituted.add(key)
            else:
                not_provided.add(key)
            pos = end + 1
            continue

        result.append(char)
        pos += 1

    if len(values) != len(substituted):
        raise UnusedValueError([k for k in values if k not in substituted])
    if not_provided:
        raise UnresolvedPlaceholderError(list(not_provided))

    return "".join(result)


def must_sqlw(statement: str, *key_value_pairs: str) -> str:
    """Like :func:`sqlw`, but a failure is treated as a programming error.

    Use for statements defined in code, where a bad template is a bug and
    not something the caller can handle.  Raises ``RuntimeError``.
    """
    try:
        return sqlw(statement, *key_value_pairs)
    except SubstitutionError as exc:
        raise RuntimeError(f"invalid SQL template: {exc}") from exc
