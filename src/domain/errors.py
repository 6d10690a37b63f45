"""Domain error types."""


class StatementEngineError(Exception):
    """Base class for projection engine errors."""


class InvalidInputError(StatementEngineError, ValueError):
    """Raised when statement inputs are malformed.

    Attributes:
        year: Calendar year of the offending value, when known.
        field: Name of the offending driver or parameter, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        year: int | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.year = year
        self.field = field


class UndefinedRatioError(StatementEngineError, ArithmeticError):
    """Raised when a derived ratio would divide by zero."""


__all__ = [
    "StatementEngineError",
    "InvalidInputError",
    "UndefinedRatioError",
]
