"""Compiled patterns that bind their matches to records."""

from __future__ import annotations

import logging
import re
from itertools import islice
from typing import Any, Iterator, Sequence, TypeVar

from regroup.binder import fill
from regroup.cloner import clone_target
from regroup.config import DEFAULT_CONFIG, BindingConfig
from regroup.exceptions import (
    CompileError,
    ConfigurationError,
    NoMatchError,
    NotARecordPointerError,
)
from regroup.records import is_writable_record

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FLAG_LETTERS = {
    "A": re.ASCII,
    "I": re.IGNORECASE,
    "M": re.MULTILINE,
    "S": re.DOTALL,
    "X": re.VERBOSE,
}

_GROUP_NAME = re.compile(r"[^\W\d]\w*>")


def normalize_named_groups(expression: str) -> str:
    """Rewrite "(?<name>" group openers to Python's "(?P<name>".

    Escaped characters and character classes are copied unchanged, and
    lookbehinds ("(?<=", "(?<!") are left alone.
    """
    out: list[str] = []
    pos = 0
    in_class = False
    while pos < len(expression):
        ch = expression[pos]
        if ch == "\\":
            out.append(expression[pos : pos + 2])
            pos += 2
        elif in_class:
            in_class = ch != "]"
            out.append(ch)
            pos += 1
        elif ch == "[":
            # "]" right after "[" or "[^" is a literal member
            end = pos + 1
            if expression.startswith("^", end):
                end += 1
            if expression.startswith("]", end):
                end += 1
            out.append(expression[pos:end])
            pos = end
            in_class = True
        elif expression.startswith("(?<", pos) and _GROUP_NAME.match(expression, pos + 3):
            out.append("(?P<")
            pos += 3
        else:
            out.append(ch)
            pos += 1
    return "".join(out)


def parse_flags(flags: int | str | None) -> int:
    """Accept ``re`` flag bits or a string of flag letters such as ``"IM"``."""
    if not flags:
        return 0
    if isinstance(flags, int):
        return flags
    value = 0
    for letter in flags.upper():
        if letter not in _FLAG_LETTERS:
            raise ConfigurationError(
                f"unknown regex flag {letter!r}; expected any of {''.join(_FLAG_LETTERS)}"
            )
        value |= _FLAG_LETTERS[letter]
    return value


def group_table(group_names: Sequence[str], values: Sequence[str | None]) -> dict[str, str]:
    """Map group names to captured text.

    ``group_names`` and ``values`` are index-aligned and index 0 (the whole
    match) is skipped, as are unnamed groups. Groups that did not take part
    in the match map to ``""``.
    """
    table: dict[str, str] = {}
    for name, value in zip(group_names[1:], values[1:]):
        if name:
            table[name] = value or ""
    return table


def _skip_abutting_empty(matches: Iterator[re.Match[str]]) -> Iterator[re.Match[str]]:
    """Drop empty matches that start where the previous match ended."""
    last_end = -1
    for match in matches:
        if match.start() == match.end() == last_end:
            continue
        last_end = match.end()
        yield match


def _validate_target(target: Any) -> None:
    if not is_writable_record(target):
        raise NotARecordPointerError(target)


class Regroup:
    """A compiled regular expression bound to a :class:`BindingConfig`.

    Instances are immutable and can be shared between threads; CPython's
    compiled patterns hold no per-match state.
    """

    def __init__(self, pattern: re.Pattern[str], *, config: BindingConfig | None = None):
        self.pattern = pattern
        self.config = config or DEFAULT_CONFIG
        names = [""] * (pattern.groups + 1)
        for name, index in pattern.groupindex.items():
            names[index] = name
        self.group_names: tuple[str, ...] = tuple(names)

    def __repr__(self) -> str:
        return f"Regroup({self.pattern.pattern!r})"

    def _table(self, match: re.Match[str]) -> dict[str, str]:
        return group_table(self.group_names, (match.group(0), *match.groups()))

    def _matches(self, text: str, limit: int) -> Iterator[re.Match[str]]:
        found = _skip_abutting_empty(self.pattern.finditer(text))
        return found if limit < 0 else islice(found, limit)

    def groups(self, text: str) -> dict[str, str]:
        """Group table of the first match in ``text``.

        Raises:
            NoMatchError: If the pattern does not match.
        """
        match = self.pattern.search(text)
        if match is None:
            raise NoMatchError(text)
        return self._table(match)

    def match_to_target(self, text: str, target: T) -> T:
        """Fill ``target`` in place from the first match in ``text``.

        Returns ``target`` for convenience.

        Raises:
            NoMatchError: If the pattern does not match.
            NotARecordPointerError: If ``target`` is not a writable record.
            RegroupError: Any binding failure, see :mod:`regroup.binder`.
        """
        match = self.pattern.search(text)
        if match is None:
            raise NoMatchError(text)
        _validate_target(target)
        fill(self._table(match), target, self.config)
        return target

    def match_all_to_target(self, text: str, limit: int, prototype: T) -> list[T]:
        """Fill one clone of ``prototype`` per match, for up to ``limit`` matches.

        A negative ``limit`` means no limit. Optional sub-records that should
        be filled must be allocated on the prototype; each result receives its
        own copy of them. The first binding failure aborts the call and no
        results are returned.
        """
        _validate_target(prototype)
        matches = list(self._matches(text, limit))
        if not matches:
            raise NoMatchError(text)

        results: list[T] = []
        for match in matches:
            target = clone_target(prototype)
            fill(self._table(match), target, self.config)
            results.append(target)
        logger.debug("Bound %d matches of %r to %s", len(results), self, type(prototype).__name__)
        return results


def compile(
    expression: str,
    flags: int | str | None = 0,
    *,
    config: BindingConfig | None = None,
) -> Regroup:
    """Compile ``expression`` into a :class:`Regroup`.

    Raises:
        CompileError: If the regular expression is invalid.
    """
    source = normalize_named_groups(expression)
    try:
        pattern = re.compile(source, parse_flags(flags))
    except re.error as exc:
        raise CompileError(expression, exc) from exc
    logger.debug("Compiled %r with groups %s", expression, sorted(pattern.groupindex))
    return Regroup(pattern, config=config)


def must_compile(
    expression: str,
    flags: int | str | None = 0,
    *,
    config: BindingConfig | None = None,
) -> Regroup:
    """Like :func:`compile`, but a bad expression is a programming error.

    Intended for module-level constants; raises ``RuntimeError`` instead of
    a recoverable :class:`CompileError`.
    """
    try:
        return compile(expression, flags, config=config)
    except CompileError as exc:
        raise RuntimeError(f"regroup: compile({expression!r}): {exc}") from exc


def _ensure(pattern: str | Regroup) -> Regroup:
    return pattern if isinstance(pattern, Regroup) else compile(pattern)


def groups(pattern: str | Regroup, text: str) -> dict[str, str]:
    return _ensure(pattern).groups(text)


def match_to_target(pattern: str | Regroup, text: str, target: T) -> T:
    return _ensure(pattern).match_to_target(text, target)


def match_all_to_target(pattern: str | Regroup, text: str, limit: int, prototype: T) -> list[T]:
    return _ensure(pattern).match_all_to_target(text, limit, prototype)


__all__ = [
    "Regroup",
    "compile",
    "must_compile",
    "group_table",
    "normalize_named_groups",
    "parse_flags",
    "groups",
    "match_to_target",
    "match_all_to_target",
]
