import functools
import inspect
import typing

import typing_extensions

from .exceptions import suppress_tb_frames
from .interface import DEFAULT_ASYNC_SUFFIX, ORIGINAL_ATTR

T = typing.TypeVar("T")
P = typing_extensions.ParamSpec("P")

YieldHandler = typing.Callable[[typing.Any], typing.Any]


def is_generator_function_follow_wrapped(func: typing.Callable) -> bool:
    """Determine if func returns a generator, unwrapping decorators, but not our own transforms."""
    if hasattr(func, "__wrapped__") and not hasattr(func, ORIGINAL_ATTR):
        return is_generator_function_follow_wrapped(func.__wrapped__)
    return inspect.isgeneratorfunction(func)


def is_wrapped(func: typing.Callable) -> bool:
    return hasattr(func, ORIGINAL_ATTR)


def get_original(func: typing.Callable) -> typing.Callable:
    """Returns the function a default transform was applied to, or `func` itself if it wasn't wrapped."""
    return getattr(func, ORIGINAL_ATTR, func)


def ends_with_async(name: str) -> bool:
    """Default naming predicate. Case sensitive."""
    return name.endswith(DEFAULT_ASYNC_SUFFIX)


def _mark_wrapped(wrapper, func):
    setattr(wrapper, ORIGINAL_ATTR, func)
    return wrapper


def method(func: typing.Callable[P, typing.Any]) -> typing.Callable[P, typing.Coroutine[typing.Any, typing.Any, typing.Any]]:
    """Make `func` always hand back an awaitable.

    A synchronous return value resolves the awaitable and a synchronous exception
    is raised when it's awaited instead of at call time. If `func` itself returns
    an awaitable, that one is awaited.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        with suppress_tb_frames(1):
            res = func(*args, **kwargs)
        if inspect.isawaitable(res):
            return await res
        return res

    return _mark_wrapped(wrapper, func)


def coroutine(
    func: typing.Callable[P, typing.Generator[typing.Any, typing.Any, T]],
    *,
    yield_handler: typing.Optional[YieldHandler] = None,
) -> typing.Callable[P, typing.Coroutine[typing.Any, typing.Any, T]]:
    """Turn a generator function into a coroutine function.

    The generator is resumed until it returns. Every awaitable it yields is awaited
    and the result is sent back into the generator, or the exception is thrown into
    it. The generator's return value is the result of the coroutine.

    ```python
    @coroutine
    def fetch(key):
        raw = yield client.get(key)
        return decode(raw)
    ```

    Yielding something that isn't awaitable throws a `TypeError` into the generator,
    unless `yield_handler` turns it into an awaitable first, e.g.
    `functools.partial(coroutine, yield_handler=lambda aws: asyncio.gather(*aws))`
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        with suppress_tb_frames(1):
            gen = func(*args, **kwargs)
        value: typing.Any = None
        exc: typing.Optional[BaseException] = None
        try:
            while True:
                try:
                    with suppress_tb_frames(1):
                        if exc is not None:
                            yielded = gen.throw(exc)
                        else:
                            yielded = gen.send(value)
                except StopIteration as stop:
                    return stop.value

                value, exc = None, None
                if yield_handler is not None and not inspect.isawaitable(yielded):
                    yielded = yield_handler(yielded)

                if not inspect.isawaitable(yielded):
                    exc = TypeError(f"A value that is not awaitable was yielded from {func.__qualname__}: {yielded!r}")
                    continue

                try:
                    value = await yielded
                except Exception as yielded_exc:
                    exc = yielded_exc
        finally:
            gen.close()

    return _mark_wrapped(wrapper, func)
