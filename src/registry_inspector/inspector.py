"""Registry inspector and per-repository image handles."""

import logging

import aiohttp

from .core.connectivity import check_connectivity
from .core.session import get_json, parse_response, session_scope
from .core.types import RegistryConfig
from .exceptions import RegistryRuntimeError
from .models import (
    CatalogResponse,
    ConfigBlobResponse,
    ImageDetails,
    ManifestResponse,
    TagListResponse,
)
from .utils.digest import validate_digest

LOGGER = logging.getLogger(__name__)

MANIFEST_V2_MEDIA_TYPE = "application/vnd.docker.distribution.manifest.v2+json"


async def _fetch_tags(
    session: aiohttp.ClientSession, config: RegistryConfig, name: str
) -> TagListResponse:
    result = await get_json(
        session,
        config.endpoint(f"/v2/{name}/tags/list"),
        description=f"tag list of {name}",
    )
    return parse_response(result, TagListResponse.from_dict, f"tag list of {name}")


class RegistryImage:
    """A repository on a registry together with the tags it reported."""

    def __init__(self, config: RegistryConfig, name: str, tags: list[str]) -> None:
        self._config = config
        self._name = name
        self._tags = list(tags)

    def __repr__(self) -> str:
        return f"RegistryImage(name={self._name!r}, tags={self._tags!r})"

    @property
    def name(self) -> str:
        """Repository name."""
        return self._name

    @property
    def tags(self) -> list[str]:
        """Tags in the order the registry reported them."""
        return list(self._tags)

    @property
    def config(self) -> RegistryConfig:
        """Connection settings shared with every request."""
        return self._config

    async def details(
        self, tag: str, session: aiohttp.ClientSession | None = None
    ) -> ImageDetails:
        """Resolve the image configuration for one tag.

        Fetches the schema 2 manifest for ``tag``, then the config blob it
        references. The tag is not checked against :attr:`tags`; whatever the
        registry answers for it is returned.

        Args:
            tag: Tag to resolve (e.g., "latest")
            session: Optional session to reuse; it is left open

        Returns:
            Image details for the tag

        Raises:
            RegistryConnectionError: If the registry cannot be reached
            RegistryRuntimeError: If either request or its parsing fails
        """
        async with session_scope(self._config, session) as active:
            manifest = await self._fetch_manifest(active, tag)
            blob = await self._fetch_blob(active, manifest.config_digest)

        return ImageDetails.from_blob(self._name, tag, blob)

    async def _fetch_manifest(
        self, session: aiohttp.ClientSession, tag: str
    ) -> ManifestResponse:
        description = f"manifest of {self._name}:{tag}"
        result = await get_json(
            session,
            self._config.endpoint(f"/v2/{self._name}/manifests/{tag}"),
            description=description,
            headers={"Accept": MANIFEST_V2_MEDIA_TYPE},
        )
        manifest = parse_response(result, ManifestResponse.from_dict, description)

        if not validate_digest(manifest.config_digest):
            raise RegistryRuntimeError(
                f"Invalid config digest in {description}: {manifest.config_digest!r}"
            )
        return manifest

    async def _fetch_blob(
        self, session: aiohttp.ClientSession, digest: str
    ) -> ConfigBlobResponse:
        description = f"config blob {digest} of {self._name}"
        result = await get_json(
            session,
            self._config.endpoint(f"/v2/{self._name}/blobs/{digest}"),
            description=description,
        )
        return parse_response(result, ConfigBlobResponse.from_dict, description)


class RegistryInspector:
    """Read-only entry point to a Docker Registry v2.

    Example:
        inspector = RegistryInspector("http://localhost:5000")
        for image in await inspector.images():
            for tag in image.tags:
                print(await image.details(tag))
    """

    def __init__(
        self, url: str, cert: bytes | None = None, timeout: float | None = None
    ) -> None:
        """Initialize the inspector.

        No request is made and the URL is not validated here.

        Args:
            url: Registry URL (e.g., http://localhost:5000)
            cert: Optional PEM-encoded certificate to trust
            timeout: Optional total per-request deadline in seconds
        """
        self._config = RegistryConfig(url=url, cert=cert, timeout=timeout)

    def __repr__(self) -> str:
        return (
            f"RegistryInspector(url={self._config.url!r}, "
            f"cert={self._config.cert is not None})"
        )

    @property
    def url(self) -> str:
        """Registry base URL."""
        return self._config.url

    @property
    def config(self) -> RegistryConfig:
        """Connection settings shared with every request."""
        return self._config

    def with_cert(self, pem: bytes) -> "RegistryInspector":
        """Return a copy of this inspector that also trusts ``pem``.

        Args:
            pem: PEM-encoded certificate bytes

        Returns:
            New inspector; this one is left unchanged
        """
        return RegistryInspector(self._config.url, cert=pem, timeout=self._config.timeout)

    async def check_connectivity(self) -> bool:
        """Check if the registry answers on ``/v2/``."""
        return await check_connectivity(self._config)

    async def images(
        self, session: aiohttp.ClientSession | None = None
    ) -> list[RegistryImage]:
        """List every repository on the registry with its tags.

        Catalog pages announced through ``Link: <...>; rel="next"`` are
        followed. Tag lists are fetched one repository at a time, in catalog
        order. Any failure aborts the whole listing.

        Args:
            session: Optional session to reuse; it is left open

        Returns:
            One image handle per repository, in catalog order

        Raises:
            RegistryConnectionError: If the registry cannot be reached
            RegistryRuntimeError: If any request or its parsing fails
        """
        async with session_scope(self._config, session) as active:
            names = await self._fetch_catalog(active)

            images = []
            for name in names:
                tag_list = await _fetch_tags(active, self._config, name)
                images.append(RegistryImage(self._config, tag_list.name, tag_list.tags))
                LOGGER.debug("Repository %s has %d tags", tag_list.name, len(tag_list.tags))

        return images

    async def image(
        self, name: str, session: aiohttp.ClientSession | None = None
    ) -> RegistryImage:
        """Fetch the handle of a single repository without reading the catalog.

        Args:
            name: Repository name (e.g., "nginx", "mycompany/myapp")
            session: Optional session to reuse; it is left open

        Returns:
            Image handle with the repository's current tags
        """
        async with session_scope(self._config, session) as active:
            tag_list = await _fetch_tags(active, self._config, name)
        return RegistryImage(self._config, tag_list.name, tag_list.tags)

    async def _fetch_catalog(self, session: aiohttp.ClientSession) -> list[str]:
        names: list[str] = []
        url: str | None = self._config.endpoint("/v2/_catalog")
        visited: set[str] = set()

        while url is not None:
            if url in visited:
                raise RegistryRuntimeError(f"Catalog pagination loops at {url}")
            visited.add(url)
            result = await get_json(session, url, description="catalog response")
            catalog = parse_response(result, CatalogResponse.from_dict, "catalog response")
            names.extend(catalog.repositories)
            LOGGER.debug("Catalog page %s listed %d repositories", url, len(catalog.repositories))
            url = result.next_url

        return names
