"""Registry Inspector - Async read-only client for Docker Registry API v2."""

__version__ = "0.1.0"

from .core.types import RegistryConfig
from .exceptions import (
    RegistryConnectionError,
    RegistryError,
    RegistryRuntimeError,
)
from .inspector import MANIFEST_V2_MEDIA_TYPE, RegistryImage, RegistryInspector
from .models import ImageDetails
from .registry import (
    check_registry_connectivity,
    get_image_details,
    list_images,
    list_tags,
)

__all__ = [
    "MANIFEST_V2_MEDIA_TYPE",
    "ImageDetails",
    "RegistryConfig",
    "RegistryConnectionError",
    "RegistryError",
    "RegistryImage",
    "RegistryInspector",
    "RegistryRuntimeError",
    "check_registry_connectivity",
    "get_image_details",
    "list_images",
    "list_tags",
]
