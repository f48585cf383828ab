import httpx
from httpx import AsyncClient, Timeout
from contextlib import asynccontextmanager
from typing import Optional

from .config_loader import CONFIG

# Define a global network timeout loaded from the application's configuration.


NETWORK_TIMEOUT = CONFIG.network.timeout
USER_AGENT = f"Veritas-Guard/{CONFIG.version}"

# Retries smooth over transient network errors.


RETRIES = 3


@asynccontextmanager
async def get_async_http_client(timeout: Optional[float] = None):
    """
    Provides a new AsyncClient bound to the current event loop.

    Args:
        timeout: Overrides the configured network timeout, in seconds.
    """
    client = None
    try:
        client = AsyncClient(
            transport=httpx.AsyncHTTPTransport(retries=RETRIES),
            timeout=Timeout(timeout if timeout is not None else NETWORK_TIMEOUT),
            headers={"User-Agent": USER_AGENT},
        )
        yield client

    finally:
        if client:
            await client.aclose()
