"""Populate records from a group table.

Fields are visited in declaration order and each one goes through the same
decision sequence:

1. untagged scalar fields are left alone;
2. ``None`` in an optional field is an error, the binder never allocates;
3. record fields are filled recursively from the same group table;
4. ``exists`` fields receive whether their group captured any text;
5. other tagged fields are converted and assigned, empty captures keep the
   current value unless the tag says ``required``;
6. fields whose type has no converter are rejected.

Binding stops at the first failing field. Fields assigned before the
failure keep their new values.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from regroup.config import DEFAULT_CONFIG, BindingConfig
from regroup.converters import convert_temporal, get_converter
from regroup.exceptions import (
    ConversionError,
    NilOptionalFieldError,
    RequiredGroupEmptyError,
    TypeNotConvertibleError,
    UnknownGroupError,
)
from regroup.records import FieldDescriptor, FieldKind, describe_fields
from regroup.utils.logging_utils import TRACE_LEVEL

logger = logging.getLogger(__name__)


def fill(
    table: Mapping[str, str], target: Any, config: BindingConfig = DEFAULT_CONFIG
) -> None:
    """Assign every tagged, writable field of ``target`` from ``table``."""
    for descriptor in describe_fields(type(target), config.tag_key):
        if not descriptor.writable:
            continue
        bind_field(descriptor, target, table, config)


def bind_field(
    descriptor: FieldDescriptor,
    target: Any,
    table: Mapping[str, str],
    config: BindingConfig = DEFAULT_CONFIG,
) -> None:
    tag = descriptor.tag
    current = getattr(target, descriptor.name, None)

    if descriptor.kind is FieldKind.RECORD:
        if current is None:
            raise NilOptionalFieldError(descriptor.name, type(target).__name__)
        fill(table, current, config)
        return

    if not tag.bound:
        return

    if descriptor.optional and current is None:
        raise NilOptionalFieldError(descriptor.name, type(target).__name__)

    if tag.group not in table:
        raise UnknownGroupError(tag.group, descriptor.name)
    captured = table[tag.group]
    if config.strip_whitespace:
        captured = captured.strip()

    if tag.exists:
        if descriptor.inner is not bool:
            raise TypeNotConvertibleError(descriptor.inner, descriptor.name)
        setattr(target, descriptor.name, captured != "")
        return

    if captured == "":
        if tag.required:
            raise RequiredGroupEmptyError(tag.group, descriptor.name)
        return

    value = _convert(descriptor, captured, config)
    setattr(target, descriptor.name, value)
    logger.log(
        TRACE_LEVEL,
        "Bound group %r to %s.%s = %r",
        tag.group,
        type(target).__name__,
        descriptor.name,
        value,
    )


def _convert(descriptor: FieldDescriptor, captured: str, config: BindingConfig) -> Any:
    field_type = descriptor.inner
    group = descriptor.tag.group

    if descriptor.kind is FieldKind.TEMPORAL:
        layout = descriptor.tag.layout or config.default_time_layout
        try:
            return convert_temporal(captured, field_type, layout)
        except ValueError as exc:
            raise ConversionError(group, exc, descriptor.name) from exc

    converter = get_converter(field_type)
    if converter is None:
        raise TypeNotConvertibleError(field_type, descriptor.name)
    try:
        return converter(captured, field_type)
    except (ValueError, OverflowError, TypeError) as exc:
        raise ConversionError(group, exc, descriptor.name) from exc


__all__ = ["fill", "bind_field"]
