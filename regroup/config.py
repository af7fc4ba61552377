"""Binding configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from regroup.exceptions import ConfigurationError
from regroup.layouts import RFC3339

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class BindingConfig:
    """Options shared by every match operation of a compiled pattern.

    Attributes:
        tag_key: Metadata key holding the field tag (``"regroup"``).
        default_time_layout: Layout used by temporal fields whose tag carries
            no layout option.
        strip_whitespace: Trim captured values before they are converted.
    """

    tag_key: str = "regroup"
    default_time_layout: str = RFC3339
    strip_whitespace: bool = False

    def __post_init__(self) -> None:
        if not self.tag_key:
            raise ConfigurationError("tag_key must be a non-empty string")

    def with_options(self, **changes) -> "BindingConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BindingConfig":
        """Build a config from ``REGROUP_*`` environment variables."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        if "REGROUP_TAG_KEY" in env:
            kwargs["tag_key"] = env["REGROUP_TAG_KEY"]
        if "REGROUP_TIME_LAYOUT" in env:
            kwargs["default_time_layout"] = env["REGROUP_TIME_LAYOUT"]
        if "REGROUP_STRIP_WHITESPACE" in env:
            raw = env["REGROUP_STRIP_WHITESPACE"].strip().lower()
            if raw not in _TRUTHY | _FALSY:
                raise ConfigurationError(
                    f"REGROUP_STRIP_WHITESPACE must be a boolean, got {raw!r}"
                )
            kwargs["strip_whitespace"] = raw in _TRUTHY
        return cls(**kwargs)  # type: ignore[arg-type]


DEFAULT_CONFIG = BindingConfig()

__all__ = ["BindingConfig", "DEFAULT_CONFIG"]
