import enum


class Target(enum.Enum):
    STATIC = enum.auto()  # staticmethod and classmethod members
    INSTANCE = enum.auto()  # plain functions, bound on instances


# Plain methods whose name ends with this are wrapped by default
DEFAULT_ASYNC_SUFFIX = "Async"

# Set on functions produced by the default transforms, points back to the original function
ORIGINAL_ATTR = "_async_class_original"
