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

"""MySQL Data Source Name (DSN) parsing and manipulation.

DSNs use the form shared by most MySQL tooling::

    [user[:password]@][net[(addr)]]/dbname[?param1=value1&paramN=valueN]

Examples:

- ``root:secret@tcp(127.0.0.1:3306)/app?parseTime=true``
- ``app@unix(/var/run/mysqld/mysqld.sock)/app``
- ``/app`` (TCP to ``127.0.0.1:3306``, no credentials)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, quote, unquote, urlencode

from xmysql.db.errors import new_error

DSN_PASSWORD_MASK = "********"
DEFAULT_TCP_ADDR = "127.0.0.1:3306"
DEFAULT_UNIX_ADDR = "/tmp/mysql.sock"
DEFAULT_PORT = 3306

_RE_DSN_PASSWORD = re.compile(r"^(.*):[^/]*?(@.*)$")
_RE_DURATION = re.compile(r"^(\d+(?:\.\d+)?)(ms|s|m|h)?$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0, None: 1.0}


@dataclass
class DSNConfig:
    """Parsed DSN.

    Attributes:
        user: User name, ``""`` when absent.
        password: Password, ``""`` when absent.
        net: Network type, ``tcp`` or ``unix``.
        addr: ``host:port`` for TCP, socket path for Unix sockets.
        db_name: Default database (schema), ``""`` for none.
        params: Connection options in the order they were given.
    """

    user: str = ""
    password: str = ""
    net: str = "tcp"
    addr: str = DEFAULT_TCP_ADDR
    db_name: str = ""
    params: dict[str, str] = field(default_factory=dict)

    def format(self) -> str:
        """Serialise back into a DSN; parameters are sorted by name."""
        parts: list[str] = []
        if self.user:
            parts.append(self.user)
            if self.password:
                parts.append(":" + self.password)
            parts.append("@")
        if self.net:
            parts.append(self.net)
            if self.addr:
                parts.append(f"({self.addr})")
        parts.append("/" + quote(self.db_name, safe=""))
        if self.params:
            parts.append("?" + urlencode(sorted(self.params.items())))
        return "".join(parts)

    def __str__(self) -> str:
        return self.format()


def parse_dsn(dsn: str) -> DSNConfig:
    """Parse *dsn* into a :class:`DSNConfig`.

    Raises:
        ValueError: If *dsn* is not a valid DSN.
    """
    slash = dsn.rfind("/")
    # A slash inside the address (unix socket path) does not count
    close = dsn.rfind(")")
    if close > slash:
        slash = dsn.find("/", close)
    if slash == -1:
        raise ValueError("invalid DSN: missing the slash separating the database name")

    config = DSNConfig(addr="")
    head, tail = dsn[:slash], dsn[slash + 1:]

    at = head.rfind("@")
    if at != -1:
        credentials, head = head[:at], head[at + 1:]
        user, sep, password = credentials.partition(":")
        config.user = user
        config.password = password if sep else ""

    if head:
        paren = head.find("(")
        if paren == -1:
            config.net = head
        else:
            if not head.endswith(")"):
                raise ValueError(
                    "invalid DSN: network address not terminated (missing closing brace)"
                )
            config.net = head[:paren]
            config.addr = head[paren + 1:-1]

    db_name, _, query = tail.partition("?")
    config.db_name = unquote(db_name)
    if query:
        for key, value in parse_qsl(query, keep_blank_values=True):
            config.params[key] = value

    _normalize(config)
    return config


def _normalize(config: DSNConfig) -> None:
    if not config.net:
        config.net = "tcp"
    if config.net == "tcp":
        if not config.addr:
            config.addr = DEFAULT_TCP_ADDR
        elif not _has_port(config.addr):
            config.addr = f"{config.addr}:{DEFAULT_PORT}"
    elif config.net == "unix":
        if not config.addr:
            config.addr = DEFAULT_UNIX_ADDR
    else:
        raise ValueError(f"invalid DSN: unknown network type {config.net!r}")


def _has_port(addr: str) -> bool:
    if addr.startswith("["):
        return "]:" in addr
    return ":" in addr


def _split_host_port(addr: str) -> tuple[str, int]:
    host, _, port = addr.rpartition(":")
    return host.strip("[]"), int(port)


def replace_dsn_database(dsn: str, name: str) -> str:
    """Return *dsn* with its database name replaced by *name*.

    Raises:
        MySQLError: If *dsn* cannot be parsed.
    """
    try:
        config = parse_dsn(dsn)
    except ValueError as exc:
        raise new_error(exc) from exc

    config.db_name = name
    return config.format()


def set_dsn_params(dsn: str, parameters: dict[str, str]) -> str:
    """Merge *parameters* into the options of *dsn*.

    ``parseTime=true`` is added unless it was already present or given.

    Raises:
        MySQLError: If *dsn* cannot be parsed.
    """
    try:
        config = parse_dsn(dsn)
    except ValueError as exc:
        raise new_error(exc) from exc

    config.params.update(parameters)
    config.params.setdefault("parseTime", "true")
    return config.format()


def mask_password_in_dsn(dsn: str) -> str:
    """Mask the password in *dsn*, usually before logging or displaying it.

    An empty password is masked too.  When nothing could be masked, the
    mask itself is returned so that a malformed DSN never leaks.
    """
    result = dsn
    if _RE_DSN_PASSWORD.match(dsn):
        result = _RE_DSN_PASSWORD.sub(r"\1:" + DSN_PASSWORD_MASK + r"\2", dsn)
    else:
        credentials, sep, rest = dsn.partition("@")
        if sep and ":" not in credentials:
            result = f"{credentials}:{DSN_PASSWORD_MASK}@{rest}"

    if result == dsn:
        return DSN_PASSWORD_MASK
    return result


def _parse_duration(value: str) -> float:
    """Parse durations such as ``5s``, ``500ms`` or ``1m`` into seconds."""
    match = _RE_DURATION.match(value.strip())
    if not match:
        raise ValueError(f"invalid duration {value!r}")
    return float(match.group(1)) * _DURATION_UNITS[match.group(2)]


def _parse_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "on", "yes")


def connect_kwargs(dsn: str) -> dict[str, Any]:
    """Translate *dsn* into keyword arguments for ``pymysql.connect``.

    Recognised options: ``charset``, ``timeout`` (connect timeout),
    ``readTimeout``, ``writeTimeout`` and ``autocommit``.  Other options
    (``parseTime`` and the like) are accepted and ignored.

    Raises:
        ValueError: If *dsn* or one of its options is invalid.
    """
    config = parse_dsn(dsn)

    kwargs: dict[str, Any] = {
        "user": config.user or None,
        "password": config.password,
        "charset": config.params.get("charset", "utf8mb4"),
    }
    if config.db_name:
        kwargs["database"] = config.db_name

    if config.net == "unix":
        kwargs["unix_socket"] = config.addr
    else:
        kwargs["host"], kwargs["port"] = _split_host_port(config.addr)

    for option, kwarg in (
        ("timeout", "connect_timeout"),
        ("readTimeout", "read_timeout"),
        ("writeTimeout", "write_timeout"),
    ):
        if option in config.params:
            kwargs[kwarg] = _parse_duration(config.params[option])

    if "autocommit" in config.params:
        kwargs["autocommit"] = _parse_bool(config.params["autocommit"])

    return kwargs
