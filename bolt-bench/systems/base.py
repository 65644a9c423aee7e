"""
Async base class for the S3-compatible backends (direct S3 and the Bolt proxy).
"""

import logging
from typing import Optional

import aioboto3
from botocore.config import Config

from configuration import (
    MAX_POOL_CONNECTIONS,
    CONNECT_TIMEOUT_SECONDS,
    READ_TIMEOUT_SECONDS,
    MAX_RETRIES,
)

logger = logging.getLogger(__name__)


class ObjectStorageSystem:
    """Async S3 client wrapper for one backend.

    Use as an async context manager; the underlying aioboto3 client is only
    available (as ``self.client``) inside the ``async with`` block.
    """

    name = "object-storage"

    def __init__(self, endpoint: Optional[str], credentials: dict, addressing_style: str = "auto"):
        self.endpoint = endpoint or None
        self.credentials = credentials
        self.addressing_style = addressing_style

        # Single source of truth for config
        self._config = self._create_config()

        # Empty strings mean "use the default credential chain"
        self.session = aioboto3.Session(
            aws_access_key_id=credentials.get("access_key_id") or None,
            aws_secret_access_key=credentials.get("secret_access_key") or None,
            aws_session_token=credentials.get("session_token") or None,
            region_name=credentials.get("region_name"),
        )

        self.client = None
        self._client_cm = None

        logger.debug(f"Initialized {self.name} storage (endpoint={self.endpoint or 'default'})")

    def _create_config(self) -> Config:
        """Create the botocore client config shared by every call on this backend."""
        return Config(
            max_pool_connections=MAX_POOL_CONNECTIONS,
            connect_timeout=CONNECT_TIMEOUT_SECONDS,
            read_timeout=READ_TIMEOUT_SECONDS,
            retries={
                'max_attempts': MAX_RETRIES,
                'mode': 'standard',
            },
            s3={
                'addressing_style': self.addressing_style,
            },
            tcp_keepalive=True,
        )

    async def __aenter__(self):
        """Async context manager entry."""
        self._client_cm = self.session.client(
            "s3",
            endpoint_url=self.endpoint,
            config=self._config,
        )
        self.client = await self._client_cm.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._client_cm:
            await self._client_cm.__aexit__(exc_type, exc_val, exc_tb)
        self.client = None
        self._client_cm = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self.endpoint!r})"


async def read_body(response: dict, amt: Optional[int] = None) -> bytes:
    """Read a GetObject response body and release its connection.

    Args:
        response: GetObject response
        amt: Read at most this many bytes; None reads the whole body

    Returns:
        Bytes read
    """
    async with response["Body"] as stream:
        return await stream.read(amt)
