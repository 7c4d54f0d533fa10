"""Pooled outbound HTTP client shared by external service clients (Groq)."""
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

OUTBOUND_TIMEOUT_SECONDS = 30.0
OUTBOUND_LIMITS = httpx.Limits(
    max_keepalive_connections=10,
    max_connections=50,
    keepalive_expiry=30.0,
)

_shared_client: Optional[httpx.AsyncClient] = None


def get_shared_http_client() -> httpx.AsyncClient:
    """Return the process-wide AsyncClient, creating it on first use."""
    global _shared_client

    if _shared_client is None or _shared_client.is_closed:
        _shared_client = httpx.AsyncClient(
            timeout=OUTBOUND_TIMEOUT_SECONDS,
            limits=OUTBOUND_LIMITS,
            headers={"User-Agent": "mystery-message-backend"},
        )
        logger.info("Created shared outbound HTTP client")

    return _shared_client


async def close_shared_http_client() -> None:
    """Close the shared client on shutdown; the next get creates a new one."""
    global _shared_client

    if _shared_client is not None:
        await _shared_client.aclose()
        _shared_client = None
        logger.info("Closed shared outbound HTTP client")
