"""Async functional registry operations."""

from .core.connectivity import check_connectivity
from .core.types import RegistryConfig
from .inspector import RegistryImage, RegistryInspector
from .models import ImageDetails


async def check_registry_connectivity(registry_url: str, timeout: float = 10) -> bool:
    """Check whether a registry answers on its v2 API.

    Args:
        registry_url: Registry URL (e.g., "http://localhost:5000")
        timeout: Request timeout in seconds (default: 10)

    Returns:
        bool: True if ``GET /v2/`` returns 200

    Examples:
        accessible = await check_registry_connectivity("http://localhost:5000")
    """
    config = RegistryConfig(url=registry_url, timeout=timeout)
    return await check_connectivity(config)


async def list_images(
    registry_url: str, cert: bytes | None = None, timeout: float | None = None
) -> list[RegistryImage]:
    """List all repositories of a registry with their tags.

    Args:
        registry_url: Registry URL (e.g., "http://localhost:5000")
        cert: Optional PEM-encoded certificate to trust
        timeout: Optional request timeout in seconds

    Returns:
        list[RegistryImage]: One handle per repository, in catalog order

    Raises:
        RegistryConnectionError: If the registry cannot be reached
        RegistryRuntimeError: If a request or its parsing fails

    Examples:
        for image in await list_images("http://localhost:5000"):
            print(image.name, image.tags)
    """
    inspector = RegistryInspector(registry_url, cert=cert, timeout=timeout)
    return await inspector.images()


async def list_tags(
    registry_url: str,
    repository: str,
    cert: bytes | None = None,
    timeout: float | None = None,
) -> list[str]:
    """List the tags of one repository.

    Args:
        registry_url: Registry URL (e.g., "http://localhost:5000")
        repository: Repository name (e.g., "nginx", "mycompany/myapp")
        cert: Optional PEM-encoded certificate to trust
        timeout: Optional request timeout in seconds

    Returns:
        list[str]: Tags in registry order (e.g., ["latest", "v1.0.0"])

    Raises:
        RegistryConnectionError: If the registry cannot be reached
        RegistryRuntimeError: If the request or its parsing fails
    """
    inspector = RegistryInspector(registry_url, cert=cert, timeout=timeout)
    image = await inspector.image(repository)
    return image.tags


async def get_image_details(
    registry_url: str,
    repository: str,
    tag: str,
    cert: bytes | None = None,
    timeout: float | None = None,
) -> ImageDetails:
    """Resolve the image configuration of one tag.

    Args:
        registry_url: Registry URL (e.g., "http://localhost:5000")
        repository: Repository name (e.g., "nginx", "mycompany/myapp")
        tag: Tag name (e.g., "latest", "v1.0.0")
        cert: Optional PEM-encoded certificate to trust
        timeout: Optional request timeout in seconds

    Returns:
        ImageDetails: Command, environment, labels, architecture and creation time

    Raises:
        RegistryConnectionError: If the registry cannot be reached
        RegistryRuntimeError: If a request or its parsing fails

    Examples:
        details = await get_image_details("http://localhost:5000", "nginx", "latest")
        print(details.architecture, details.cmd)
    """
    config = RegistryConfig(url=registry_url, cert=cert, timeout=timeout)
    image = RegistryImage(config, repository, [])
    return await image.details(tag)
