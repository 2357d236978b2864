"""Exception hierarchy for idcard-inspector."""


class IdCardError(Exception):
    """Base class for all errors raised by idcard-inspector."""


class InvalidIdentityNumberError(IdCardError, ValueError):
    """Raised when an attribute is requested from a number that failed validation."""

    def __init__(self, message: str = "身份证号码错误，无法解析信息") -> None:
        super().__init__(message)


class InvalidFormatError(IdCardError, ValueError):
    """Raised when a caller-supplied format token or argument is not allowed.

    Attributes:
        allowed: The accepted values, when the argument is an enumerated token.
    """

    def __init__(self, message: str, allowed: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.allowed = allowed


class RegionLookupError(IdCardError, LookupError):
    """Raised when a derived region code has no entry in the region table.

    The number itself validated; the table simply lacks coverage for it.

    Attributes:
        code: The 6-digit region code that could not be resolved.
    """

    def __init__(self, code: str) -> None:
        super().__init__(f"Region code not found in region table: {code}")
        self.code = code
