"""Core HTTP plumbing and value types."""

from .connectivity import check_connectivity
from .session import create_session, create_ssl_context, session_scope
from .types import RegistryConfig, RequestResult

__all__ = [
    "RegistryConfig",
    "RequestResult",
    "check_connectivity",
    "create_session",
    "create_ssl_context",
    "session_scope",
]
