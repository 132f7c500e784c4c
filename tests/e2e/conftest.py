"""
Fixtures for end-to-end tests against a live Cloudflare Images account.

Set CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN to run them; otherwise
every test in this directory is skipped.
"""

import logging
import os
import uuid

import pytest

from cfimages import ImagesClient
from cfimages.core.utils.constants import (
    ENV_CLOUDFLARE_ACCOUNT_ID,
    ENV_CLOUDFLARE_API_TOKEN,
    ENV_CLOUDFLARE_TIMEOUT,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

E2E_ID_PREFIX = "e2e-"


def pytest_collection_modifyitems(config, items):
    missing = [
        name for name in (ENV_CLOUDFLARE_ACCOUNT_ID, ENV_CLOUDFLARE_API_TOKEN) if not os.getenv(name)
    ]
    for item in items:
        if "e2e" not in item.nodeid.split("/"):
            continue
        item.add_marker(pytest.mark.e2e)
        if missing:
            item.add_marker(pytest.mark.skip(reason=f"Missing {', '.join(missing)}"))


# ============================================================================
# Client Fixture
# ============================================================================


@pytest.fixture
async def live_client():
    """Client for the account named in the environment."""
    client = ImagesClient(
        os.environ[ENV_CLOUDFLARE_ACCOUNT_ID],
        os.environ[ENV_CLOUDFLARE_API_TOKEN],
        timeout=float(os.getenv(ENV_CLOUDFLARE_TIMEOUT, "60")),
    )
    yield client
    await client.aclose()


@pytest.fixture
async def image_id(live_client):
    """Unique custom ID; the image is deleted after the test if it still exists."""
    custom_id = f"{E2E_ID_PREFIX}{uuid.uuid4().hex[:12]}"
    yield custom_id

    result = await live_client.delete(custom_id)
    if result.is_success:
        logger.info("Cleaned up leftover image %s", custom_id)
