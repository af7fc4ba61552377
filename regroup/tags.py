"""Field tags: ``"<group>[,<option>...]"``.

A tag names the capture group a field is bound to, followed by options:

* ``required`` - an empty capture is an error;
* ``exists`` - the field becomes ``True`` when the group captured text;
* anything else on a temporal field is a layout (``"ts,2006-01-02"``).

Keyword options are compared case-insensitively. Because the layout shares
the option slot, a temporal field can never use a layout literally spelled
``required`` or ``exists``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

REQUIRED_OPTION = "required"
EXISTS_OPTION = "exists"
KEYWORD_OPTIONS = frozenset({REQUIRED_OPTION, EXISTS_OPTION})

DEFAULT_TAG_KEY = "regroup"


@dataclass(frozen=True)
class Tag:
    group: str = ""
    options: tuple[str, ...] = ()

    @property
    def bound(self) -> bool:
        return bool(self.group)

    def has_option(self, keyword: str) -> bool:
        keyword = keyword.lower()
        return any(opt.lower() == keyword for opt in self.options)

    @property
    def required(self) -> bool:
        return self.has_option(REQUIRED_OPTION)

    @property
    def exists(self) -> bool:
        return self.has_option(EXISTS_OPTION)

    @property
    def layout(self) -> str | None:
        """First option that is not a keyword, taken verbatim."""
        for opt in self.options:
            if opt and opt.lower() not in KEYWORD_OPTIONS:
                return opt
        return None


UNBOUND = Tag()


def parse_tag(tag: str | None) -> Tag:
    """Split a tag into its group name and options.

    >>> parse_tag("ts, 2006-01-02 ,required")
    Tag(group='ts', options=('2006-01-02', 'required'))
    """
    if not tag:
        return UNBOUND
    group, *options = (segment.strip() for segment in tag.split(","))
    return Tag(group=group, options=tuple(options))


def tagged(tag: str, *, tag_key: str = DEFAULT_TAG_KEY, **field_kwargs: Any) -> Any:
    """``dataclasses.field`` carrying a regroup tag in its metadata.

    Example:
        @dataclass
        class Entry:
            level: str = tagged("level,required", default="")
            took: timedelta = tagged("took", default=timedelta(0))
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[tag_key] = tag
    return dataclasses.field(metadata=metadata, **field_kwargs)


__all__ = [
    "REQUIRED_OPTION",
    "EXISTS_OPTION",
    "KEYWORD_OPTIONS",
    "DEFAULT_TAG_KEY",
    "Tag",
    "UNBOUND",
    "parse_tag",
    "tagged",
]
