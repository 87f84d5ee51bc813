"""Example usage of the async registry inspector."""

import asyncio
import logging
import os
from pathlib import Path

from registry_inspector import (
    RegistryConnectionError,
    RegistryError,
    RegistryInspector,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """List every image on the registry with the details of each tag."""
    registry_url = os.getenv("REGISTRY_URL", "http://localhost:5000")
    inspector = RegistryInspector(registry_url)

    # Trust a self-signed registry certificate if one is given
    cert_path = os.getenv("REGISTRY_CERT")
    if cert_path:
        inspector = inspector.with_cert(Path(cert_path).read_bytes())

    try:
        images = await inspector.images()
        logger.info(f"Found {len(images)} images on {inspector.url}")

        for image in images:
            logger.info(f"{image.name}: {image.tags}")
            for tag in image.tags:
                details = await image.details(tag)
                logger.info(
                    f"  {tag}: arch={details.architecture} created={details.created} "
                    f"cmd={details.cmd} labels={details.labels}"
                )

    except RegistryConnectionError as e:
        logger.error(f"Registry unreachable at {e.url}: {e.reason}")
    except RegistryError as e:
        logger.error(f"Registry error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
