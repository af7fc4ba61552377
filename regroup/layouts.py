"""Timestamp layouts for temporal fields.

A layout option on a temporal field is one of:

* a named layout (``RFC3339``, ``DateOnly``, ``Kitchen``, ...);
* a ``strptime`` format, recognised by the presence of ``%``;
* a reference-time layout that spells out how the reference moment
  ``Mon Jan 2 15:04:05 MST 2006`` would be written, e.g. ``2006-01-02``.

Reference layouts are translated to ``strptime`` formats once and cached.
Fractions finer than a microsecond are truncated. A zone abbreviation
(``MST``, ``PST``, ``CEST``) is accepted but, as with ``%Z``, carries no
offset: the result is naive.
"""

from __future__ import annotations

import re
from datetime import datetime
from functools import lru_cache

RFC3339 = "RFC3339"

NAMED_LAYOUTS: dict[str, str] = {
    "ANSIC": "Mon Jan _2 15:04:05 2006",
    "UnixDate": "Mon Jan _2 15:04:05 MST 2006",
    "RFC822": "02 Jan 06 15:04 MST",
    "RFC822Z": "02 Jan 06 15:04 -0700",
    "RFC850": "Monday, 02-Jan-06 15:04:05 MST",
    "RFC1123": "Mon, 02 Jan 2006 15:04:05 MST",
    "RFC1123Z": "Mon, 02 Jan 2006 15:04:05 -0700",
    "Kitchen": "3:04PM",
    "Stamp": "Jan _2 15:04:05",
    "StampMilli": "Jan _2 15:04:05.000",
    "StampMicro": "Jan _2 15:04:05.000000",
    "StampNano": "Jan _2 15:04:05.000000000",
    "DateTime": "2006-01-02 15:04:05",
    "DateOnly": "2006-01-02",
    "TimeOnly": "15:04:05",
}

# Longest tokens first so that "2006" wins over "2" and "January" over "Jan".
_REFERENCE_TOKENS: list[tuple[str, str]] = [
    ("January", "%B"),
    ("Monday", "%A"),
    ("-07:00:00", "%z"),
    ("Z07:00:00", "%z"),
    ("-07:00", "%z"),
    ("Z07:00", "%z"),
    ("-0700", "%z"),
    ("Z0700", "%z"),
    ("2006", "%Y"),
    ("-07", "%z"),
    ("Z07", "%z"),
    ("Jan", "%b"),
    ("Mon", "%a"),
    ("MST", "%Z"),
    ("002", "%j"),
    ("01", "%m"),
    ("02", "%d"),
    ("_2", "%d"),
    ("03", "%I"),
    ("04", "%M"),
    ("05", "%S"),
    ("06", "%y"),
    ("15", "%H"),
    ("PM", "%p"),
    ("pm", "%p"),
    ("1", "%m"),
    ("2", "%d"),
    ("3", "%I"),
    ("4", "%M"),
    ("5", "%S"),
]

_FRACTION = re.compile(r"[.,](0+|9+)(?!\d)")
_SUBMICROSECOND = re.compile(r"([.,]\d{6})\d+")
_ZONE_ABBREVIATION = re.compile(r"(?<![A-Za-z])[A-Z]{3,5}(?![A-Za-z])")

_RFC3339_SHAPE = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})"
)


@lru_cache(maxsize=128)
def to_strptime(layout: str) -> str:
    """Translate a layout option into a ``strptime`` format string."""
    layout = NAMED_LAYOUTS.get(layout, layout)
    if "%" in layout:
        return layout

    out: list[str] = []
    pos = 0
    while pos < len(layout):
        fraction = _FRACTION.match(layout, pos)
        if fraction is not None and out and out[-1] == "%S":
            out.append(layout[pos] + "%f")
            pos = fraction.end()
            continue
        for token, directive in _REFERENCE_TOKENS:
            if layout.startswith(token, pos):
                # "Jan"/"Mon" followed by lowercase is ordinary text
                if token in ("Jan", "Mon") and layout[pos + 3 : pos + 4].islower():
                    continue
                out.append(directive)
                pos += len(token)
                break
        else:
            out.append(layout[pos])
            pos += 1
    return "".join(out)


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 date-time; offsets are mandatory."""
    if _RFC3339_SHAPE.fullmatch(text) is None:
        raise ValueError(f'cannot parse "{text}" as RFC3339')
    return datetime.fromisoformat(text.upper())


def parse_timestamp(text: str, layout: str | None = None) -> datetime:
    """Parse ``text`` according to ``layout`` (RFC 3339 when omitted).

    Raises:
        ValueError: If ``text`` does not follow the layout.
    """
    if not layout or layout in (RFC3339, "RFC3339Nano"):
        return parse_rfc3339(text)
    fmt = to_strptime(layout)
    if "%f" in fmt:
        text = _SUBMICROSECOND.sub(r"\1", text, count=1)
    if "%Z" in fmt:
        # strptime only knows UTC, GMT and the local zone names
        text = _ZONE_ABBREVIATION.sub("UTC", text, count=1)
    return datetime.strptime(text, fmt)


__all__ = [
    "RFC3339",
    "NAMED_LAYOUTS",
    "to_strptime",
    "parse_rfc3339",
    "parse_timestamp",
]
