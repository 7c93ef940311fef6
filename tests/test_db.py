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

"""Tests for xmysql.db — connection, operations, and transactions."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pymysql
import pymysql.cursors
import pytest

from xmysql.db import (
    DEFAULT_DSN,
    MySQLError,
    connect,
    default_dsn,
    execute,
    fetch_all,
    fetch_one,
    fetch_scalar,
    transaction,
)


def _mock_conn(one=None, rows=()):
    conn = MagicMock()
    cur = conn.cursor.return_value
    cur.fetchone.return_value = one
    cur.fetchall.return_value = list(rows)
    return conn, cur


class TestConnection:
    def test_default_dsn_from_env(self, monkeypatch):
        monkeypatch.setenv("XMYSQL_DSN", "u:p@tcp(db:3306)/x")
        assert default_dsn() == "u:p@tcp(db:3306)/x"

    def test_default_dsn_fallback(self, monkeypatch):
        monkeypatch.delenv("XMYSQL_DSN", raising=False)
        assert default_dsn() == DEFAULT_DSN

    def test_connect_uses_dsn(self):
        with patch("xmysql.db.connection.pymysql.connect") as mock_connect:
            conn = connect("u:pwd@tcp(db:3307)/app", autocommit=True)

        assert conn is mock_connect.return_value
        kwargs = mock_connect.call_args.kwargs
        assert kwargs["host"] == "db"
        assert kwargs["port"] == 3307
        assert kwargs["database"] == "app"
        assert kwargs["autocommit"] is True
        assert kwargs["cursorclass"] is pymysql.cursors.DictCursor

    def test_connect_failure_wrapped(self):
        cause = ConnectionRefusedError(111, "Connection refused")
        exc = pymysql.err.OperationalError(2003, f"Can't connect to MySQL server on 'db' ({cause})")
        exc.original_exception = cause
        with patch("xmysql.db.connection.pymysql.connect", side_effect=exc):
            with pytest.raises(MySQLError) as exc_info:
                connect("u:pwd@tcp(db:3306)/")

        assert exc_info.value.number == 2005
        assert "unknown MySQL server host 'db'" in str(exc_info.value)
        assert exc_info.value.__cause__ is exc

    def test_connect_invalid_dsn(self):
        with pytest.raises(MySQLError):
            connect("not a dsn")


class TestOperations:
    def test_execute_returns_cursor(self):
        conn, cur = _mock_conn()
        assert execute(conn, "INSERT INTO t (v) VALUES (%s)", ("a",)) is cur
        cur.execute.assert_called_once_with("INSERT INTO t (v) VALUES (%s)", ("a",))

    def test_execute_without_params(self):
        conn, cur = _mock_conn()
        execute(conn, "SELECT '100%'")
        cur.execute.assert_called_once_with("SELECT '100%'", None)

    def test_execute_error_wrapped(self):
        conn, cur = _mock_conn()
        cur.execute.side_effect = pymysql.err.OperationalError(1046, "No database selected")
        with pytest.raises(MySQLError, match="no database selected"):
            execute(conn, "SELECT * FROM t")
        cur.close.assert_called_once()

    def test_fetch_one(self):
        conn, cur = _mock_conn(one={"val": "hello"})
        assert fetch_one(conn, "SELECT val FROM t WHERE id=%s", (1,)) == {"val": "hello"}
        cur.close.assert_called_once()

    def test_fetch_one_returns_none(self):
        conn, _ = _mock_conn()
        assert fetch_one(conn, "SELECT * FROM t WHERE id=999") is None

    def test_fetch_all(self):
        conn, _ = _mock_conn(rows=[{"v": "a"}, {"v": "b"}])
        assert [r["v"] for r in fetch_all(conn, "SELECT v FROM t")] == ["a", "b"]

    def test_fetch_all_error_wrapped(self):
        conn, cur = _mock_conn()
        cur.execute.side_effect = pymysql.err.ProgrammingError(1146, "Table 'x.t' doesn't exist")
        with pytest.raises(MySQLError) as exc_info:
            fetch_all(conn, "SELECT v FROM t")
        assert str(exc_info.value) == "table 'x.t' does not exist"
        assert exc_info.value.number == 1146
        cur.close.assert_called_once()

    def test_fetch_scalar_dict_row(self):
        conn, _ = _mock_conn(one={"n": 42})
        assert fetch_scalar(conn, "SELECT n FROM t WHERE id=1") == 42

    def test_fetch_scalar_tuple_row(self):
        conn, _ = _mock_conn(one=(42,))
        assert fetch_scalar(conn, "SELECT n FROM t WHERE id=1") == 42

    def test_fetch_scalar_no_row(self):
        conn, _ = _mock_conn()
        assert fetch_scalar(conn, "SELECT n FROM t WHERE id=1") is None


class TestTransaction:
    def test_commit_on_success(self):
        conn, _ = _mock_conn()

        with transaction(conn):
            execute(conn, "INSERT INTO t (v) VALUES (%s)", ("committed",))

        conn.begin.assert_called_once()
        conn.commit.assert_called_once()
        conn.rollback.assert_not_called()

    def test_rollback_on_error(self):
        conn, _ = _mock_conn()

        with pytest.raises(RuntimeError, match="boom"):
            with transaction(conn):
                raise RuntimeError("boom")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()

    def test_begin_failure(self):
        conn, _ = _mock_conn()
        conn.begin.side_effect = pymysql.err.OperationalError(2013, "Lost connection")

        with pytest.raises(MySQLError, match="failed starting transaction"):
            with transaction(conn):
                pass

    def test_commit_failure(self):
        conn, _ = _mock_conn()
        conn.commit.side_effect = pymysql.err.OperationalError(2013, "Lost connection")

        with pytest.raises(MySQLError, match="failed committing transaction") as exc_info:
            with transaction(conn):
                pass

        assert exc_info.value.number == 2013
        conn.rollback.assert_called_once()
