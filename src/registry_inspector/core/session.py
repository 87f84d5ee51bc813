"""aiohttp session creation and request helpers."""

import asyncio
import json
import logging
import ssl
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Mapping, TypeVar

import aiohttp

from ..exceptions import RegistryConnectionError, RegistryError, RegistryRuntimeError
from .types import RegistryConfig, RequestResult

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def create_ssl_context(pem: bytes) -> ssl.SSLContext:
    """Create an SSL context trusting the system roots plus one PEM certificate.

    Args:
        pem: PEM-encoded certificate bytes

    Returns:
        Configured SSL context

    Raises:
        RegistryRuntimeError: If the certificate cannot be parsed
    """
    context = ssl.create_default_context()
    try:
        context.load_verify_locations(cadata=pem.decode("ascii"))
    except (ssl.SSLError, ValueError) as e:
        raise RegistryRuntimeError("Failed to parse PEM certificate") from e
    return context


async def create_session(config: RegistryConfig | None = None) -> aiohttp.ClientSession:
    """Create a client session for the given registry configuration.

    Args:
        config: Registry configuration; None gives a plain session

    Returns:
        New aiohttp session, owned by the caller

    Raises:
        RegistryRuntimeError: If the certificate is invalid or the session cannot be built
    """
    if config is None:
        return aiohttp.ClientSession()

    ssl_context = create_ssl_context(config.cert) if config.cert is not None else None

    connector = None
    try:
        if ssl_context is not None:
            connector = aiohttp.TCPConnector(ssl=ssl_context)
        session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        )
    except (TypeError, ValueError) as e:
        if connector is not None:
            await connector.close()
        raise RegistryRuntimeError("Failed to build HTTP session") from e

    LOGGER.debug("Created session for %r", config)
    return session


@asynccontextmanager
async def session_scope(
    config: RegistryConfig, session: aiohttp.ClientSession | None = None
) -> AsyncIterator[aiohttp.ClientSession]:
    """Yield the caller's session, or a fresh one that is closed on exit."""
    if session is not None:
        yield session
        return

    owned = await create_session(config)
    try:
        yield owned
    finally:
        await owned.close()


def translate_client_error(error: aiohttp.ClientError, url: str) -> RegistryError:
    """Classify an aiohttp failure as a connection or runtime error.

    Args:
        error: Error raised by aiohttp
        url: URL that was requested

    Returns:
        RegistryConnectionError for connect-phase and request-building failures,
        RegistryRuntimeError for everything else
    """
    LOGGER.error("Request to %s failed: %r", url, error)

    if isinstance(error, aiohttp.InvalidURL):
        return RegistryConnectionError("invalid", str(error) or "invalid URL")
    if isinstance(error, (aiohttp.ClientConnectorError, aiohttp.ConnectionTimeoutError)):
        return RegistryConnectionError(url, str(error))
    return RegistryRuntimeError(f"Request to {url} failed: {error}")


async def get_json(
    session: aiohttp.ClientSession,
    url: str,
    description: str,
    headers: Mapping[str, str] | None = None,
) -> RequestResult:
    """GET a URL and decode its body as JSON.

    The body is decoded whatever its Content-Type, since registries serve
    blobs as application/octet-stream and manifests under vendor media types.

    Args:
        session: Session to issue the request on
        url: Absolute URL
        description: What is being fetched, used in error messages
        headers: Extra request headers

    Returns:
        Decoded response, with the ``rel="next"`` link resolved if present

    Raises:
        RegistryConnectionError: If the registry cannot be reached
        RegistryRuntimeError: On any other failure, including non-2xx status
            and undecodable bodies
    """
    LOGGER.debug("GET %s", url)
    try:
        async with session.get(url, headers=headers) as resp:
            resp.raise_for_status()
            body = await resp.read()
            status = resp.status
            next_link = resp.links.get("next")
            next_url = str(resp.url.join(next_link["url"])) if next_link else None
    except aiohttp.ClientError as e:
        raise translate_client_error(e, url) from e
    except asyncio.TimeoutError as e:
        raise RegistryRuntimeError(f"Request to {url} timed out") from e

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise RegistryRuntimeError(f"Failed to parse {description}") from e

    return RequestResult(url=url, status=status, data=data, next_url=next_url)


def parse_response(result: RequestResult, factory: Callable[..., T], description: str) -> T:
    """Build a response model from decoded JSON.

    Raises:
        RegistryRuntimeError: If the JSON does not have the expected shape
    """
    try:
        return factory(result.data)
    except ValueError as e:
        raise RegistryRuntimeError(f"Failed to parse {description}: {e}") from e
