import collections.abc
import dataclasses
import inspect
import typing
from typing import Callable, Optional

import sigtools.specifiers  # type: ignore

from .async_wrap import coroutine, ends_with_async, method
from .exceptions import InvalidArgument

# An async_wrap_condition is called with at most this many positional arguments: (name, klass, is_static)
_MAX_CONDITION_ARGS = 3


def condition_arity(condition: Callable) -> int:
    """Number of positional arguments `condition` accepts, capped at three."""
    try:
        sig = sigtools.specifiers.signature(condition)
    except (TypeError, ValueError):
        # no introspectable signature, e.g. some builtins - only pass the name
        return 1

    arity = 0
    for param in sig.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return _MAX_CONDITION_ARGS
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            arity += 1
    return min(arity, _MAX_CONDITION_ARGS)


def _check_method_names(method_names):
    if isinstance(method_names, (str, bytes)) or not isinstance(method_names, (list, tuple)):
        raise InvalidArgument(f"Optional method_names should be a list of strings if provided, got {method_names!r}")
    for name in method_names:
        if not isinstance(name, str):
            raise InvalidArgument(f"Optional method_names should only contain strings, got {name!r}")


@dataclasses.dataclass(frozen=True)
class WrapOptions:
    """Options for `wrap`, `wrap_static_methods` and `wrap_instance_methods`.

    Attributes:
        method_names: Wrap exactly these members. Disables the naming check.
        wrapper: Transform for generator functions. `None` leaves them alone.
        async_wrapper: Transform for other selected functions. `None` leaves them alone.
        async_wrap_condition: Decides which non-generator functions get wrapped when no
            `method_names` are given. Called with `(name)`, `(name, klass)` or
            `(name, klass, is_static)` depending on how many positional arguments it takes.
            `None` selects every function.
    """

    method_names: Optional[typing.Sequence[str]] = None
    wrapper: Optional[Callable] = coroutine
    async_wrapper: Optional[Callable] = method
    async_wrap_condition: Optional[Callable[..., bool]] = ends_with_async

    def __post_init__(self):
        if self.method_names is not None:
            _check_method_names(self.method_names)
            object.__setattr__(self, "method_names", tuple(self.method_names))

        for field in ("wrapper", "async_wrapper", "async_wrap_condition"):
            value = getattr(self, field)
            if value is not None and not callable(value):
                raise InvalidArgument(f"Optional {field} should be a callable if provided, got {value!r}")

        if self.async_wrap_condition is not None and condition_arity(self.async_wrap_condition) == 0:
            raise InvalidArgument("Optional async_wrap_condition should accept the method name as first argument")

    def should_wrap_plain(self, name: str, klass: type, is_static: bool) -> bool:
        if self.async_wrap_condition is None:
            return True
        args = (name, klass, is_static)[: condition_arity(self.async_wrap_condition)]
        return bool(self.async_wrap_condition(*args))


def conform_options(method_names=None, options=None) -> WrapOptions:
    """Conforms the optional arguments of the wrap functions to a single WrapOptions

    `options` can be a WrapOptions or a mapping with the same keys. `method_names`, when given,
    takes precedence over `options.method_names`.
    """
    if options is None:
        conformed = WrapOptions()
    elif isinstance(options, WrapOptions):
        conformed = options
    elif isinstance(options, collections.abc.Mapping):
        unknown = set(options) - {f.name for f in dataclasses.fields(WrapOptions)}
        if unknown:
            raise InvalidArgument(f"Unknown options: {', '.join(sorted(map(str, unknown)))}")
        conformed = WrapOptions(**options)
    else:
        raise InvalidArgument(f"Optional options should be a WrapOptions or a mapping if provided, got {options!r}")

    if method_names is not None:
        conformed = dataclasses.replace(conformed, method_names=method_names)
    return conformed
