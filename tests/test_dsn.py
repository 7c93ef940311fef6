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

"""Tests for xmysql.db.dsn."""

from __future__ import annotations

import pytest

from xmysql.db import MySQLError
from xmysql.db.dsn import (
    DSN_PASSWORD_MASK,
    DSNConfig,
    connect_kwargs,
    mask_password_in_dsn,
    parse_dsn,
    replace_dsn_database,
    set_dsn_params,
)

BASE_DSN = "u:pwd@tcp(127.0.0.1:3306)/"


class TestParseDSN:
    def test_full(self):
        config = parse_dsn("root:secret@tcp(db.example.com:3307)/app?parseTime=true&charset=utf8")
        assert config.user == "root"
        assert config.password == "secret"
        assert config.net == "tcp"
        assert config.addr == "db.example.com:3307"
        assert config.db_name == "app"
        assert config.params == {"parseTime": "true", "charset": "utf8"}

    def test_defaults(self):
        config = parse_dsn("/")
        assert config == DSNConfig()

    def test_port_added(self):
        assert parse_dsn("tcp(localhost)/").addr == "localhost:3306"

    def test_unix_socket(self):
        config = parse_dsn("app@unix(/var/run/mysqld/mysqld.sock)/app")
        assert config.net == "unix"
        assert config.addr == "/var/run/mysqld/mysqld.sock"
        assert config.user == "app"
        assert config.password == ""
        assert config.db_name == "app"

    def test_password_with_colon(self):
        assert parse_dsn("u:p:w@tcp(h:1)/").password == "p:w"

    def test_missing_slash(self):
        with pytest.raises(ValueError, match="missing the slash"):
            parse_dsn("foobar")

    def test_unterminated_address(self):
        with pytest.raises(ValueError, match="not terminated"):
            parse_dsn("u@tcp(127.0.0.1:3306/")

    def test_unknown_network(self):
        with pytest.raises(ValueError, match="unknown network type"):
            parse_dsn("u@pigeon(nest)/")

    def test_format_round_trip(self):
        dsn = "u:pwd@tcp(127.0.0.1:3306)/db?a=1&b=2"
        assert str(parse_dsn(dsn)) == dsn


class TestReplaceDSNDatabase:
    def test_without_database_name(self):
        assert replace_dsn_database(BASE_DSN, "foo") == BASE_DSN + "foo"

    def test_with_database_name(self):
        assert replace_dsn_database(BASE_DSN + "bar", "foo") == BASE_DSN + "foo"

    def test_keeps_params(self):
        dsn = replace_dsn_database(BASE_DSN + "bar?parseTime=true", "foo")
        assert dsn == BASE_DSN + "foo?parseTime=true"

    def test_invalid(self):
        with pytest.raises(MySQLError) as exc_info:
            replace_dsn_database("foobar", "foo")
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert "missing the slash" in str(exc_info.value)


class TestSetDSNParams:
    def test_set_some_parameter(self):
        dsn = set_dsn_params(BASE_DSN, {"fooBar": "1234"})
        assert dsn == "u:pwd@tcp(127.0.0.1:3306)/?fooBar=1234&parseTime=true"

    def test_parse_time_not_overridden(self):
        dsn = set_dsn_params(BASE_DSN + "?parseTime=false", {})
        assert dsn == "u:pwd@tcp(127.0.0.1:3306)/?parseTime=false"

    def test_parameter_overrides_existing(self):
        dsn = set_dsn_params(BASE_DSN + "?a=1", {"a": "2", "parseTime": "false"})
        assert dsn == "u:pwd@tcp(127.0.0.1:3306)/?a=2&parseTime=false"

    def test_invalid(self):
        with pytest.raises(MySQLError):
            set_dsn_params("foobar", {})


class TestMaskPasswordInDSN:
    def test_mask_password(self):
        expected = BASE_DSN.replace(":pwd", ":" + DSN_PASSWORD_MASK, 1)
        assert mask_password_in_dsn(BASE_DSN) == expected

    def test_dsn_without_password(self):
        have = BASE_DSN.replace(":pwd", ":", 1)
        expected = have.replace(":@", ":" + DSN_PASSWORD_MASK + "@", 1)
        assert mask_password_in_dsn(have) == expected

    def test_dsn_without_password_separator(self):
        assert mask_password_in_dsn("u@tcp(h:1)/") == "u:" + DSN_PASSWORD_MASK + "@tcp(h:1)/"

    def test_something_not_dsn(self):
        assert mask_password_in_dsn("foobar") == DSN_PASSWORD_MASK

    def test_password_never_leaks(self):
        masked = mask_password_in_dsn("u:pa/ss@tcp(h:1)/")
        assert "pa/ss" not in masked


class TestConnectKwargs:
    def test_tcp(self):
        kwargs = connect_kwargs("u:pwd@tcp(db:3307)/app?timeout=5s&readTimeout=500ms")
        assert kwargs["host"] == "db"
        assert kwargs["port"] == 3307
        assert kwargs["user"] == "u"
        assert kwargs["password"] == "pwd"
        assert kwargs["database"] == "app"
        assert kwargs["charset"] == "utf8mb4"
        assert kwargs["connect_timeout"] == 5.0
        assert kwargs["read_timeout"] == 0.5
        assert "write_timeout" not in kwargs

    def test_ipv6(self):
        kwargs = connect_kwargs("tcp([::1]:3306)/")
        assert kwargs["host"] == "::1"
        assert kwargs["port"] == 3306

    def test_unix(self):
        kwargs = connect_kwargs("u@unix(/tmp/x.sock)/?autocommit=true")
        assert kwargs["unix_socket"] == "/tmp/x.sock"
        assert "host" not in kwargs
        assert "database" not in kwargs
        assert kwargs["autocommit"] is True

    def test_invalid_duration(self):
        with pytest.raises(ValueError, match="invalid duration"):
            connect_kwargs("/?timeout=soon")
