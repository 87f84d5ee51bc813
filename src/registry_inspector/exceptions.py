"""Custom exceptions for the registry inspector."""


class RegistryError(Exception):
    """Base exception for all registry-related errors."""

    pass


class RegistryConnectionError(RegistryError):
    """Raised when the registry cannot be reached at all.

    Covers connect-phase transport failures (DNS, TCP, TLS handshake) and
    requests the HTTP client refused to build, e.g. from a malformed base URL.

    Attributes:
        url: URL that could not be reached, or ``"invalid"`` when no usable
            URL could be derived from the failure
        reason: Human-readable description of the failure
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Cannot connect to {url}: {reason}")
        self.url = url
        self.reason = reason


class RegistryRuntimeError(RegistryError):
    """Raised when the registry was reached but the operation failed.

    The originating exception, if any, is chained as ``__cause__``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def cause(self) -> BaseException | None:
        """The exception this error was raised from."""
        return self.__cause__
