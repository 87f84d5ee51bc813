"""Core value types shared by the inspector and its image handles."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RegistryConfig:
    """Immutable connection settings for one registry.

    Attributes:
        url: Registry base URL (e.g., http://localhost:5000), without trailing slash
        cert: Optional PEM-encoded certificate trusted in addition to the system roots
        timeout: Total per-request deadline in seconds, or None for no deadline
    """

    url: str
    cert: bytes | None = field(default=None, repr=False)
    timeout: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", self.url.rstrip("/"))

    def endpoint(self, path: str) -> str:
        """Build an absolute API URL from a path below the base URL."""
        return f"{self.url}/{path.lstrip('/')}"


@dataclass
class RequestResult:
    """Decoded response of a single GET request."""

    url: str
    status: int
    data: Any
    next_url: str | None = None
