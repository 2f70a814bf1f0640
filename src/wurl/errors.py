"""wurl.errors
Every failure raised while parsing a URL is a URLError, which is a ValueError
so that callers written against urllib.parse keep working.
"""


class URLError(ValueError):
    pass


class EmptyHost(URLError):
    def __init__(self, message: str = "Empty host") -> None:
        super().__init__(message)


class InvalidIPv6Address(URLError):
    def __init__(self, message: str = "Invalid IPv6 address") -> None:
        super().__init__(message)


class UnsupportedIDNA(URLError):
    """Raised for non-ASCII domain labels. This is a missing feature, not a malformed host."""

    def __init__(self, message: str = "Non-ASCII domains (IDNA) are not supported yet.") -> None:
        super().__init__(message)


class RelativeURLWithoutBase(URLError):
    def __init__(self, message: str = "Relative URL without a base") -> None:
        super().__init__(message)


class InvalidPort(URLError):
    def __init__(self, message: str = "Invalid port number") -> None:
        super().__init__(message)
