"""Fresh targets for repeated matches.

Every match of :meth:`Regroup.match_all_to_target` fills its own instance
built from a prototype. The prototype decides which optional fields are
allocated: ``None`` stays ``None`` (so binding into it still fails), a
record is cloned recursively and a scalar is reset to its zero value.
No clone shares a mutable sub-record with the prototype or another clone.
"""

from __future__ import annotations

from typing import Any, TypeVar

from regroup.records import FieldKind, describe_fields, new_record, zero_value

T = TypeVar("T")


def clone_target(prototype: T) -> T:
    record_type = type(prototype)
    clone = new_record(record_type)
    for descriptor in describe_fields(record_type):
        if not descriptor.writable:
            continue
        original = getattr(prototype, descriptor.name, None)
        value: Any
        if original is None:
            value = None
        elif descriptor.kind is FieldKind.RECORD:
            value = clone_target(original)
        elif descriptor.optional:
            # scalars without a zero (enums) are immutable and safe to share
            zero = zero_value(descriptor.inner)
            value = original if zero is None else zero
        else:
            continue
        setattr(clone, descriptor.name, value)
    return clone


__all__ = ["clone_target"]
