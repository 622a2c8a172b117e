from .async_wrap import coroutine, ends_with_async, get_original, is_wrapped, method
from .exceptions import InvalidArgument
from .options import WrapOptions
from .wrapper import wrap, wrap_instance_methods, wrap_static_methods

__all__ = [
    "InvalidArgument",
    "WrapOptions",
    "coroutine",
    "ends_with_async",
    "get_original",
    "is_wrapped",
    "method",
    "wrap",
    "wrap_instance_methods",
    "wrap_static_methods",
]
