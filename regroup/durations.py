"""Duration strings such as ``5s``, ``1h30m`` or ``-1.5h``.

The accepted grammar is a possibly signed sequence of decimal numbers, each
with an optional fraction and a mandatory unit suffix. Valid units are
``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m`` and ``h``. The bare string
``0`` is also accepted. ``timedelta`` has microsecond resolution, so
nanosecond components are truncated.
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal

_NANOSECONDS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)([^\d.]*)")

_MAX_NANOSECONDS = (1 << 63) - 1


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a ``timedelta``.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    original = text
    sign = 1
    if text and text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f'invalid duration "{original}"')

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        if match is None:
            raise ValueError(f'invalid duration "{original}"')
        number, unit = match.groups()
        if not unit:
            raise ValueError(f'missing unit in duration "{original}"')
        scale = _NANOSECONDS_PER_UNIT.get(unit)
        if scale is None:
            raise ValueError(f'unknown unit "{unit}" in duration "{original}"')
        total += Decimal(number) * scale
        pos = match.end()

    nanoseconds = int(total)
    # int64 nanoseconds: one more on the negative side
    if nanoseconds > _MAX_NANOSECONDS + (sign < 0):
        raise ValueError(f'invalid duration "{original}"')
    return sign * timedelta(microseconds=nanoseconds // 1_000)


def _with_fraction(value: int, unit: int) -> str:
    whole, fraction = divmod(value, unit)
    if not fraction:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(fraction).rjust(width, '0').rstrip('0')}"


def format_duration(value: timedelta) -> str:
    """Render a ``timedelta`` in the form accepted by :func:`parse_duration`.

    >>> format_duration(timedelta(hours=1, minutes=30))
    '1h30m0s'
    """
    micros = value // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_with_fraction(micros, 1_000)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    parts = [sign]
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{_with_fraction(rest, 1_000_000)}s")
    return "".join(parts)


__all__ = ["parse_duration", "format_duration"]
