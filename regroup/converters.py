"""Conversion registry: captured text to typed field values.

The registry is a process-wide mapping from a field type to a converter
``(text, field_type) -> value``. Built-in converters cover strings,
booleans, integers, floats, the sized numeric types in
:mod:`regroup.types` and ``timedelta`` durations. Temporal types
(``datetime``, ``date``, ``time``) go through :func:`convert_temporal`
because they additionally need a layout.

Register additional converters before the first match operation; the
registry is not locked and is meant to be read-only once binding starts.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Callable

from regroup import types as sized
from regroup.durations import parse_duration
from regroup.exceptions import RegistryError
from regroup.layouts import parse_timestamp

logger = logging.getLogger(__name__)

Converter = Callable[[str, type], Any]

TEMPORAL_TYPES: tuple[type, ...] = (datetime, date, time)

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def convert_str(text: str, field_type: type) -> Any:
    return text if field_type is str else field_type(text)


def convert_bool(text: str, _field_type: type) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f'invalid boolean "{text}"')


def convert_int(text: str, field_type: type) -> Any:
    if _SIGNED.fullmatch(text) is None:
        raise ValueError(f'invalid integer "{text}"')
    return field_type(int(text, 10))


def convert_uint(text: str, field_type: type) -> Any:
    if _UNSIGNED.fullmatch(text) is None:
        raise ValueError(f'invalid unsigned integer "{text}"')
    return field_type(int(text, 10))


def convert_float(text: str, field_type: type) -> Any:
    # float() tolerates surrounding whitespace and digit separators
    if text != text.strip() or "_" in text:
        raise ValueError(f'invalid float "{text}"')
    return field_type(float(text))


def convert_duration(text: str, field_type: type) -> Any:
    value = parse_duration(text)
    return value if field_type is timedelta else field_type(seconds=value.total_seconds())


def convert_temporal(text: str, field_type: type, layout: str | None = None) -> Any:
    """Parse ``text`` into ``field_type`` (``datetime``, ``date`` or ``time``)."""
    parsed = parse_timestamp(text, layout)
    if issubclass(field_type, datetime):
        return parsed
    if issubclass(field_type, date):
        return parsed.date()
    if issubclass(field_type, time):
        return parsed.timetz()
    raise TypeError(f"{field_type!r} is not a temporal type")


def is_temporal(field_type: Any) -> bool:
    return isinstance(field_type, type) and issubclass(field_type, TEMPORAL_TYPES)


_BUILTIN_CONVERTERS: dict[type, Converter] = {
    str: convert_str,
    bool: convert_bool,
    int: convert_int,
    float: convert_float,
    timedelta: convert_duration,
    **{t: convert_int for t in sized.SIGNED_INT_TYPES},
    **{t: convert_uint for t in sized.UNSIGNED_INT_TYPES},
    **{t: convert_float for t in sized.FLOAT_TYPES},
}

_CONVERTERS: dict[type, Converter] = dict(_BUILTIN_CONVERTERS)


def register_converter(
    field_type: type, converter: Converter, *, replace: bool = False
) -> None:
    """Register ``converter`` for fields annotated with ``field_type``.

    Args:
        field_type: Exact field type the converter handles. Subclasses of
            ``field_type`` resolve to it unless they have their own entry.
        converter: Callable receiving the captured text and the field type.
            It should raise ``ValueError`` on malformed input.
        replace: Allow overriding an existing registration.

    Raises:
        RegistryError: If ``field_type`` is not a class, is temporal, the
            converter is not callable, or a converter is already registered
            and ``replace`` is false.
    """
    if not isinstance(field_type, type):
        raise RegistryError(f"field_type must be a class, got {field_type!r}")
    if is_temporal(field_type):
        raise RegistryError(
            f"{field_type.__name__} is converted through layouts and cannot be overridden"
        )
    if not callable(converter):
        raise RegistryError(f"converter for {field_type.__name__} must be callable")
    if field_type in _CONVERTERS and not replace:
        raise RegistryError(
            f"a converter for {field_type.__name__} is already registered; "
            f"pass replace=True to override it"
        )
    _CONVERTERS[field_type] = converter
    logger.info(
        "Registered converter: %s -> %s",
        field_type.__name__,
        getattr(converter, "__name__", converter),
    )


def unregister_converter(field_type: type) -> None:
    """Remove a registration; built-ins revert to their default converter."""
    if field_type in _BUILTIN_CONVERTERS:
        _CONVERTERS[field_type] = _BUILTIN_CONVERTERS[field_type]
    else:
        _CONVERTERS.pop(field_type, None)


def registered_types() -> list[type]:
    return list(_CONVERTERS)


def _lookup(field_type: type) -> Converter | None:
    for candidate in getattr(field_type, "__mro__", (field_type,)):
        converter = _CONVERTERS.get(candidate)
        if converter is not None:
            return converter
    return None


def get_converter(field_type: Any) -> Converter | None:
    """Return the converter for ``field_type``, or None if it is not convertible.

    The exact type wins; otherwise the nearest registered base class in the
    MRO is used, so ``str`` and ``int`` subclasses resolve without their own
    registration.
    """
    if not isinstance(field_type, type) or is_temporal(field_type):
        return None
    return _lookup(field_type)


__all__ = [
    "Converter",
    "TEMPORAL_TYPES",
    "convert_temporal",
    "get_converter",
    "is_temporal",
    "register_converter",
    "registered_types",
    "unregister_converter",
]
