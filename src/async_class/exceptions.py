import os
from types import TracebackType
from typing import Optional

TRACEBACK_ENV_VAR = "ASYNC_CLASS_TRACEBACK"


class InvalidArgument(TypeError):
    """Raised when `wrap` and friends get arguments of the wrong shape.

    Always raised before the class is touched, so a failed call leaves the class as it was."""


def full_tracebacks_enabled() -> bool:
    return os.getenv(TRACEBACK_ENV_VAR, "0") == "1"


class suppress_tb_frames:
    """Utility context manager which can be used to suppress individual traceback frames

    E.g.
    This hides the frame of the function using the context manager from the traceback:

    ```py
    with suppress_tb_frames(1):
        return func(*args, **kwargs)
    ```

    Set ASYNC_CLASS_TRACEBACK=1 to keep every frame.
    """

    def __init__(self, n: int):
        self.n = n

    def __enter__(self):
        pass

    def __exit__(
        self, exc_type: Optional[type[BaseException]], exc: Optional[BaseException], tb: Optional[TracebackType]
    ) -> bool:
        if exc_type is None or exc is None:
            return False

        if full_tracebacks_enabled():
            return False

        final_tb = tb
        for _ in range(self.n):
            if final_tb is None or final_tb.tb_next is None:
                return False  # fewer frames than expected, keep the full traceback
            final_tb = final_tb.tb_next
        exc.with_traceback(final_tb)
        return False
