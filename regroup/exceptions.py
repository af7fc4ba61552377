"""Regroup exception hierarchy.

Every error raised by the binding engine inherits from RegroupError, so
callers can handle any failure with a single except clause:

    try:
        pattern.match_to_target(line, record)
    except regroup.RegroupError as e:
        handle_gracefully(e)

Each variant also inherits from the closest builtin exception, so handlers
written against ``ValueError`` / ``LookupError`` / ``TypeError`` keep working.
Variants carry the structured details of the failure (group name, field
name, wrapped cause) as attributes rather than only in the message.
"""

from __future__ import annotations

from typing import Any


class RegroupError(Exception):
    """Base exception for all regroup errors."""


class CompileError(RegroupError, ValueError):
    """The regular expression engine rejected the expression."""

    def __init__(self, expression: str, cause: Exception) -> None:
        self.expression = expression
        self.cause = cause
        super().__init__(f"compilation error: {cause}")


class NoMatchError(RegroupError, LookupError):
    """The pattern found no match in the given text."""

    def __init__(self, text: str | None = None) -> None:
        self.text = text
        super().__init__("no match found for given string")


class NotARecordPointerError(RegroupError, TypeError):
    """The target is not a writable record instance."""

    def __init__(self, target: Any) -> None:
        self.target = target
        super().__init__(
            f"expected a writable dataclass or pydantic model instance, "
            f"got {type(target).__name__}"
        )


class UnknownGroupError(RegroupError, LookupError):
    """A field is tagged with a group that the pattern does not declare."""

    def __init__(self, group: str, field: str | None = None) -> None:
        self.group = group
        self.field = field
        super().__init__(f'group "{group}" not found in pattern')


class RequiredGroupEmptyError(RegroupError, ValueError):
    """A field marked ``required`` is bound to a group that captured nothing."""

    def __init__(self, group: str, field: str) -> None:
        self.group = group
        self.field = field
        super().__init__(f'required group "{group}" is empty for field "{field}"')


class NilOptionalFieldError(RegroupError, ValueError):
    """An optional field that must be pre-allocated is ``None`` at bind time."""

    def __init__(self, field: str, record: str | None = None) -> None:
        self.field = field
        self.record = record
        owner = f"{record}." if record else ""
        super().__init__(f"can't set value to nil optional field: {owner}{field}")


class TypeNotConvertibleError(RegroupError, TypeError):
    """No converter is registered for the field's declared type."""

    def __init__(self, type_: Any, field: str | None = None) -> None:
        self.type = type_
        self.field = field
        name = type_ if isinstance(type_, str) else getattr(type_, "__name__", repr(type_))
        suffix = f' (field "{field}")' if field else ""
        super().__init__(f'type "{name}" is not convertible{suffix}')


class ConversionError(RegroupError, ValueError):
    """A registered converter rejected the captured text."""

    def __init__(self, group: str, cause: Exception, field: str | None = None) -> None:
        self.group = group
        self.field = field
        self.cause = cause
        super().__init__(f'error parsing group "{group}": {cause}')


class RegistryError(RegroupError, ValueError):
    """Invalid converter registration."""


class ConfigurationError(RegroupError, ValueError):
    """Invalid binding configuration."""


__all__ = [
    "RegroupError",
    "CompileError",
    "NoMatchError",
    "NotARecordPointerError",
    "UnknownGroupError",
    "RequiredGroupEmptyError",
    "NilOptionalFieldError",
    "TypeNotConvertibleError",
    "ConversionError",
    "RegistryError",
    "ConfigurationError",
]
