"""Error conditions raised by the statement builder and its result decoding"""


class PgFluentError(Exception):
    """Base class for pgfluent errors"""


class BadTypeError(PgFluentError, TypeError):
    """A value had an unexpected shape while decoding into a Record"""

    def __init__(self, message: str = "bad type error"):
        super().__init__(message)


class NotFoundError(PgFluentError, LookupError):
    """A single-row fetch returned no rows"""

    def __init__(self, message: str = "not found"):
        super().__init__(message)


class UnknownActionError(PgFluentError, ValueError):
    """The builder action is unset or is not one of SELECT/INSERT/UPDATE/DELETE"""

    def __init__(self, message: str = "unknown action"):
        super().__init__(message)


class TooManyArgumentsError(PgFluentError, ValueError):
    """An UPDATE names more columns than there are parameters to bind"""

    def __init__(self, message: str = "too many arguments"):
        super().__init__(message)


class PlaceholderMismatchError(PgFluentError, ValueError):
    """A fragment was given more values than it has ``?`` markers"""
