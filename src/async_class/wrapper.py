import inspect
import logging
import typing
import warnings

from .async_wrap import is_generator_function_follow_wrapped, is_wrapped
from .exceptions import InvalidArgument
from .interface import Target
from .options import WrapOptions, conform_options

logger = logging.getLogger(__name__)

C = typing.TypeVar("C", bound=type)


def _is_accessor(value) -> bool:
    """Properties and other data descriptors are never wrapped."""
    if isinstance(value, property):
        return True
    value_type = type(value)
    return hasattr(value_type, "__set__") or hasattr(value_type, "__delete__")


def _underlying_function(value, target: Target):
    if target == Target.STATIC:
        if isinstance(value, (staticmethod, classmethod)) and inspect.isfunction(value.__func__):
            return value.__func__
        return None
    if inspect.isfunction(value):
        return value
    return None


def _actual_methods(klass: type, target: Target) -> list[tuple[str, typing.Any, typing.Callable]]:
    # Only own members, in definition order. Snapshot so we can replace entries while iterating.
    methods = []
    for key, value in list(vars(klass).items()):
        if _is_accessor(value):
            continue
        func = _underlying_function(value, target)
        if func is not None:
            methods.append((key, value, func))
    return methods


def _wrap_functions(klass: type, options: WrapOptions, target: Target) -> None:
    is_static = target == Target.STATIC
    for key, value, func in _actual_methods(klass, target):
        is_generator_function = is_generator_function_follow_wrapped(func)

        if options.method_names is not None:
            if key not in options.method_names:
                continue
        elif not is_generator_function and not options.should_wrap_plain(key, klass, is_static):
            continue

        transform = options.wrapper if is_generator_function else options.async_wrapper
        if transform is None:
            continue

        if is_wrapped(func):
            warnings.warn(f"Method {klass.__qualname__}.{key} is already wrapped, but getting wrapped again")
            continue

        new_func = transform(func)
        if is_static:
            # keep the staticmethod/classmethod descriptor
            new_func = type(value)(new_func)
        setattr(klass, key, new_func)
        logger.debug("Wrapped %s.%s with %s", klass.__qualname__, key, getattr(transform, "__name__", transform))


def _check_class(klass) -> None:
    if not inspect.isclass(klass):
        raise InvalidArgument(f"Argument {klass!r} is not a class")


def wrap(klass: C, method_names: typing.Optional[typing.Sequence[str]] = None, options=None) -> C:
    """Wraps static and instance methods whose name ends with Async, or are generator functions.

    Generator functions are wrapped with `coroutine()` and the others with `method()`. When
    `method_names` is given, exactly the methods found in it are wrapped and the Async suffix
    check is disabled. Properties and other data descriptors are never touched.

    The class is modified in place and returned, so this also works as a class decorator:

    ```python
    @wrap
    class DataStore:
        def getAsync(self, key): ...
    ```

    Raises InvalidArgument before modifying anything if the arguments are malformed.
    """
    _check_class(klass)
    conformed = conform_options(method_names, options)
    _wrap_functions(klass, conformed, Target.STATIC)
    _wrap_functions(klass, conformed, Target.INSTANCE)
    return klass


def wrap_static_methods(klass: C, method_names: typing.Optional[typing.Sequence[str]] = None, options=None) -> C:
    """Like `wrap`, but only for staticmethod and classmethod members."""
    _check_class(klass)
    conformed = conform_options(method_names, options)
    _wrap_functions(klass, conformed, Target.STATIC)
    return klass


def wrap_instance_methods(klass: C, method_names: typing.Optional[typing.Sequence[str]] = None, options=None) -> C:
    """Like `wrap`, but only for instance methods."""
    _check_class(klass)
    conformed = conform_options(method_names, options)
    _wrap_functions(klass, conformed, Target.INSTANCE)
    return klass
