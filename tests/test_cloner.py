from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from regroup import tagged
from regroup.cloner import clone_target
from regroup.types import UInt
from tests.factories import IncludingPointers, Inner, Single, make_including_pointers


@dataclass
class Branch:
    leaf: Optional[Inner] = None
    weight: Optional[float] = tagged("weight", default=None)


@dataclass
class Tree:
    left: Branch = field(default_factory=Branch)
    right: Optional[Branch] = None
    seen: Optional[datetime] = None
    name: str = "tree"


def test_nil_optionals_stay_nil():
    clone = clone_target(IncludingPointers())
    assert clone == IncludingPointers()


def test_allocated_optionals_are_fresh_zero_values():
    prototype = make_including_pointers()
    prototype.num = UInt(5)
    prototype.single.duration = timedelta(seconds=5)

    clone = clone_target(prototype)
    assert clone.num == 0
    assert isinstance(clone.num, UInt)
    assert clone.single == Single()
    assert clone.single is not prototype.single


def test_nested_optionals_are_mirrored_recursively():
    prototype = Tree(
        left=Branch(leaf=Inner(num=3), weight=1.5),
        right=Branch(),
        seen=datetime(2024, 1, 1),
        name="oak",
    )

    clone = clone_target(prototype)

    assert clone.left.leaf == Inner()
    assert clone.left.leaf is not prototype.left.leaf
    assert clone.left.weight == 0.0
    assert clone.right == Branch()
    assert clone.right is not prototype.right
    assert clone.seen == datetime.min
    # non-optional scalars are not copied from the prototype
    assert clone.name == "tree"


def test_clones_are_independent():
    prototype = Tree(left=Branch(leaf=Inner()))
    first, second = clone_target(prototype), clone_target(prototype)
    first.left.leaf.num = 10
    assert second.left.leaf.num == 0
    assert prototype.left.leaf.num == 0
