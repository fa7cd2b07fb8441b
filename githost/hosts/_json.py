"""Typed decoding of host CLI JSON output."""

from __future__ import annotations

import typing as typ

import msgspec

from githost.common.time import parse_iso_datetime
from githost.hosts.errors import HostResponseShapeError

if typ.TYPE_CHECKING:
    import datetime as dt


T = typ.TypeVar("T")


def decode_cli_json(program: str, content: str, type_: type[T]) -> T:
    """Decode CLI stdout into ``type_``.

    Raises
    ------
    HostResponseShapeError
        If the output is not JSON or does not match ``type_``.

    """
    try:
        return msgspec.json.decode(content, type=type_)
    except msgspec.DecodeError as exc:
        raise HostResponseShapeError.invalid_json(program, content) from exc


def parse_cli_datetime(program: str, value: str) -> dt.datetime:
    """Parse a timestamp field from CLI output into aware UTC.

    Raises
    ------
    HostResponseShapeError
        If ``value`` is not an ISO 8601 timestamp with an offset.

    """
    try:
        return parse_iso_datetime(value)
    except ValueError as exc:
        raise HostResponseShapeError.invalid_json(program, value) from exc
