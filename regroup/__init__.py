"""regroup - bind named regular-expression groups to typed record fields.

The primary interface is a compiled pattern:

    from dataclasses import dataclass
    from datetime import timedelta
    import regroup

    @dataclass
    class Job:
        took: timedelta = regroup.tagged("took", default=timedelta(0))
        exit_code: int = regroup.tagged("code,required", default=0)

    pattern = regroup.compile(r"(?P<took>\\S+) exit=(?P<code>\\d*)")
    job = pattern.match_to_target("1m30s exit=2", Job())
    jobs = pattern.match_all_to_target(log_text, -1, Job())

Records are dataclasses or pydantic models. Optional sub-records are never
allocated by the binder: allocate them on the target (or on the prototype
passed to ``match_all_to_target``) before matching.
"""

from regroup._version import __version__
from regroup.config import DEFAULT_CONFIG, BindingConfig
from regroup.converters import register_converter, unregister_converter
from regroup.engine import (
    Regroup,
    compile,
    groups,
    match_all_to_target,
    match_to_target,
    must_compile,
)
from regroup.exceptions import (
    CompileError,
    ConfigurationError,
    ConversionError,
    NilOptionalFieldError,
    NoMatchError,
    NotARecordPointerError,
    RegistryError,
    RegroupError,
    RequiredGroupEmptyError,
    TypeNotConvertibleError,
    UnknownGroupError,
)
from regroup.tags import Tag, parse_tag, tagged

__all__ = [
    "__version__",
    # Patterns
    "Regroup",
    "compile",
    "must_compile",
    "groups",
    "match_to_target",
    "match_all_to_target",
    # Tags and configuration
    "tagged",
    "parse_tag",
    "Tag",
    "BindingConfig",
    "DEFAULT_CONFIG",
    # Converters
    "register_converter",
    "unregister_converter",
    # Exceptions
    "RegroupError",
    "CompileError",
    "ConfigurationError",
    "ConversionError",
    "NilOptionalFieldError",
    "NoMatchError",
    "NotARecordPointerError",
    "RegistryError",
    "RequiredGroupEmptyError",
    "TypeNotConvertibleError",
    "UnknownGroupError",
]
