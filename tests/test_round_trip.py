"""Rendering a record to text and binding it back reproduces its values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

import pytest

import regroup
from regroup import tagged
from regroup.durations import format_duration
from regroup.types import Float32, Int8, Int64, UInt16

PATTERN = regroup.must_compile(
    r"small=(?P<small>\S+) port=(?P<port>\S+) big=(?P<big>\S+) ratio=(?P<ratio>\S+)"
    r" weight=(?P<weight>\S+) ok=(?P<ok>\S+) name=(?P<name>\S+) took=(?P<took>\S+)"
    r" day=(?P<day>\S+) at=(?P<at>\S+)"
)


@dataclass
class Sample:
    small: Int8 = tagged("small", default=Int8(0))
    port: UInt16 = tagged("port", default=UInt16(0))
    big: Int64 = tagged("big", default=Int64(0))
    ratio: float = tagged("ratio", default=0.0)
    weight: Float32 = tagged("weight", default=Float32(0))
    ok: bool = tagged("ok", default=False)
    name: str = tagged("name", default="")
    took: timedelta = tagged("took", default=timedelta(0))
    day: date = tagged("day,02.01.2006", default=date.min)
    at: datetime = tagged("at", default=datetime.min)

    def render(self) -> str:
        return (
            f"small={self.small} port={self.port} big={self.big} ratio={self.ratio!r}"
            f" weight={float(self.weight)!r} ok={str(self.ok).lower()} name={self.name}"
            f" took={format_duration(self.took)} day={self.day:%d.%m.%Y}"
            f" at={self.at.isoformat()}"
        )


SAMPLES = [
    Sample(
        small=Int8(-128),
        port=UInt16(65535),
        big=Int64(2**63 - 1),
        ratio=0.1,
        weight=Float32(3.14),
        ok=True,
        name="alpha",
        took=timedelta(hours=1, minutes=2, microseconds=3),
        day=date(2024, 2, 29),
        at=datetime(2024, 3, 4, 5, 6, 7, 890000, tzinfo=timezone.utc),
    ),
    Sample(
        small=Int8(7),
        port=UInt16(0),
        big=Int64(-(2**63)),
        ratio=-2.5e-8,
        weight=Float32(-0.0),
        ok=False,
        name="β",
        took=-timedelta(milliseconds=1500),
        day=date(1999, 12, 31),
        at=datetime(1999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-7))),
    ),
]


@pytest.mark.parametrize("sample", SAMPLES, ids=["maxima", "minima"])
def test_render_and_rebind(sample):
    rebound = PATTERN.match_to_target(sample.render(), Sample())
    assert rebound == sample
    assert type(rebound.small) is Int8
    assert type(rebound.weight) is Float32


def test_match_all_round_trip():
    text = "\n".join(sample.render() for sample in SAMPLES)
    assert PATTERN.match_all_to_target(text, -1, Sample()) == SAMPLES
