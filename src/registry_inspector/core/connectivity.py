"""Registry reachability check."""

import asyncio
import logging

import aiohttp

from .session import session_scope
from .types import RegistryConfig

LOGGER = logging.getLogger(__name__)


async def check_connectivity(
    config: RegistryConfig, session: aiohttp.ClientSession | None = None
) -> bool:
    """Check if the registry answers on the v2 API base endpoint.

    Args:
        config: Registry configuration
        session: Optional session to reuse

    Returns:
        True if ``GET /v2/`` returns 200
    """
    url = config.endpoint("/v2/")
    async with session_scope(config, session) as active:
        try:
            async with active.get(url) as resp:
                LOGGER.debug("GET %s -> %s", url, resp.status)
                return resp.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            LOGGER.debug("Registry at %s is not reachable: %r", config.url, e)
            return False
