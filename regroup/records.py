"""Record introspection for dataclasses and pydantic models.

Both kinds of record are reduced to a list of :class:`FieldDescriptor`
entries in declaration order (inherited fields first), which is all the
binder and the cloner need to know about a record type.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

from regroup.converters import is_temporal
from regroup.exceptions import TypeNotConvertibleError
from regroup.tags import DEFAULT_TAG_KEY, Tag, parse_tag

_NONE_TYPE = type(None)


class FieldKind(str, Enum):
    SCALAR = "scalar"
    RECORD = "record"
    TEMPORAL = "temporal"


@dataclass(frozen=True)
class FieldDescriptor:
    """Declared shape of one record field.

    Attributes:
        name: Attribute name on the record.
        annotation: Resolved annotation as declared.
        inner: Annotation with ``Optional`` and ``Annotated`` removed.
        kind: Classification of ``inner``.
        optional: Whether ``None`` is an accepted value.
        tag: Parsed tag; ``tag.bound`` is false for untagged fields.
        writable: Whether the binder may assign the field.
    """

    name: str
    annotation: Any
    inner: Any
    kind: FieldKind
    optional: bool
    tag: Tag
    writable: bool


def is_pydantic_model(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def is_record_type(tp: Any) -> bool:
    return isinstance(tp, type) and (dataclasses.is_dataclass(tp) or is_pydantic_model(tp))


def is_frozen(record_type: type) -> bool:
    if is_pydantic_model(record_type):
        return bool(record_type.model_config.get("frozen", False))
    params = getattr(record_type, "__dataclass_params__", None)
    return bool(params and params.frozen)


def is_writable_record(target: Any) -> bool:
    """True for record instances (not classes) whose fields can be assigned."""
    record_type = type(target)
    return is_record_type(record_type) and not is_frozen(record_type)


def unwrap_annotation(hint: Any) -> tuple[Any, bool]:
    """Strip ``Annotated`` and ``Optional`` layers.

    Returns the underlying annotation and whether ``None`` was allowed.
    Unions of several non-None types are returned unchanged.
    """
    optional = False
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            hint = get_args(hint)[0]
            continue
        if origin is Union or origin is types.UnionType:
            args = get_args(hint)
            members = [arg for arg in args if arg is not _NONE_TYPE]
            if len(members) < len(args):
                optional = True
            if len(members) == 1:
                hint = members[0]
                continue
        return hint, optional


def _classify(inner: Any) -> FieldKind:
    if is_temporal(inner):
        return FieldKind.TEMPORAL
    if is_record_type(inner):
        return FieldKind.RECORD
    return FieldKind.SCALAR


def _descriptor(name: str, hint: Any, raw_tag: Any, writable: bool) -> FieldDescriptor:
    inner, optional = unwrap_annotation(hint)
    return FieldDescriptor(
        name=name,
        annotation=hint,
        inner=inner,
        kind=_classify(inner),
        optional=optional,
        tag=parse_tag(raw_tag if isinstance(raw_tag, str) else None),
        writable=writable and not name.startswith("_"),
    )


def _resolve_field_type(record_type: type, f: dataclasses.Field) -> Any:
    if not isinstance(f.type, str):
        return f.type
    # Evaluate the one annotation against the record's module namespace
    owner = type(
        record_type.__name__,
        (),
        {"__annotations__": {f.name: f.type}, "__module__": record_type.__module__},
    )
    try:
        return typing.get_type_hints(owner, include_extras=True)[f.name]
    except NameError as exc:
        raise TypeNotConvertibleError(f.type, f.name) from exc


def _dataclass_hints(record_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type, include_extras=True)
    except NameError:
        # A string annotation names a type outside the module namespace,
        # typically a class defined inside a function.
        return {
            f.name: _resolve_field_type(record_type, f)
            for f in dataclasses.fields(record_type)
        }


def _dataclass_fields(record_type: type, tag_key: str) -> list[FieldDescriptor]:
    hints = _dataclass_hints(record_type)
    writable = not is_frozen(record_type)
    return [
        _descriptor(f.name, hints.get(f.name, f.type), f.metadata.get(tag_key), writable)
        for f in dataclasses.fields(record_type)
    ]


def _pydantic_fields(record_type: type[BaseModel], tag_key: str) -> list[FieldDescriptor]:
    writable = not is_frozen(record_type)
    descriptors = []
    for name, info in record_type.model_fields.items():
        extra = info.json_schema_extra
        raw_tag = extra.get(tag_key) if isinstance(extra, dict) else None
        descriptors.append(
            _descriptor(name, info.annotation, raw_tag, writable and not info.frozen)
        )
    return descriptors


@lru_cache(maxsize=256)
def _describe(record_type: type, tag_key: str) -> tuple[FieldDescriptor, ...]:
    if is_pydantic_model(record_type):
        return tuple(_pydantic_fields(record_type, tag_key))
    return tuple(_dataclass_fields(record_type, tag_key))


def describe_fields(
    record_type: type, tag_key: str = DEFAULT_TAG_KEY
) -> tuple[FieldDescriptor, ...]:
    """Return the field descriptors of a dataclass or pydantic model type."""
    if not is_record_type(record_type):
        raise TypeError(f"{record_type!r} is not a dataclass or pydantic model")
    return _describe(record_type, tag_key)


_TEMPORAL_ZEROS = {datetime: datetime.min, date: date.min, time: time.min}


def zero_value(tp: Any) -> Any:
    """Default value of a bare field of type ``tp``.

    Numbers are ``0``, strings ``""``, booleans ``False``, durations zero,
    temporal types their ``min`` and records a zero-valued instance. Types
    without a natural zero (enums, unions, ``Any``) yield ``None``.
    """
    if is_record_type(tp):
        return new_record(tp)
    origin = get_origin(tp)
    if isinstance(origin, type) and origin is not types.UnionType:
        tp = origin  # list[str] -> list
    for temporal, zero in _TEMPORAL_ZEROS.items():
        if isinstance(tp, type) and issubclass(tp, temporal):
            return zero
    if not isinstance(tp, type) or issubclass(tp, Enum):
        return None
    try:
        return tp()
    except TypeError:
        return None


def _field_zero(descriptor: FieldDescriptor) -> Any:
    return None if descriptor.optional else zero_value(descriptor.inner)


def new_record(record_type: type) -> Any:
    """Zero-valued instance of ``record_type``.

    Declared defaults and default factories are honoured; fields without
    one get :func:`zero_value` of their type, and optional fields ``None``.
    """
    by_name = {d.name: d for d in describe_fields(record_type)}
    if is_pydantic_model(record_type):
        values = {
            name: _field_zero(by_name[name])
            for name, info in record_type.model_fields.items()
            if info.is_required()
        }
        return record_type.model_construct(**values)

    values = {
        f.name: _field_zero(by_name[f.name])
        for f in dataclasses.fields(record_type)
        if f.init
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    }
    return record_type(**values)


__all__ = [
    "FieldKind",
    "FieldDescriptor",
    "describe_fields",
    "is_frozen",
    "is_pydantic_model",
    "is_record_type",
    "is_writable_record",
    "new_record",
    "unwrap_annotation",
    "zero_value",
]
