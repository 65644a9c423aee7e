"""
Bolt caching proxy object storage system implementation.

Bolt exposes the S3 API, so the proxy is reached with a regular S3 client
pointed at the Bolt endpoint for the current region.
"""

from systems.base import ObjectStorageSystem
from configuration import BOLT_URL, BOLT_CUSTOM_DOMAIN, AWS_REGION
import logging

logger = logging.getLogger(__name__)


def resolve_bolt_endpoint(bolt_url: str = None, custom_domain: str = None, region: str = None) -> str:
    """Resolve the Bolt endpoint URL for a region.

    Args:
        bolt_url: Explicit endpoint, optionally containing a ``{region}`` placeholder
        custom_domain: Bolt deployment domain, used when ``bolt_url`` is empty
        region: AWS region name

    Returns:
        Endpoint URL

    Raises:
        ValueError: If neither a URL nor a custom domain is configured
    """
    bolt_url = BOLT_URL if bolt_url is None else bolt_url
    custom_domain = BOLT_CUSTOM_DOMAIN if custom_domain is None else custom_domain
    region = region or AWS_REGION

    if bolt_url:
        return bolt_url.replace("{region}", region)
    if custom_domain:
        return f"https://bolt.{region}.{custom_domain}"
    raise ValueError("Bolt endpoint is not configured: set BOLT_URL or BOLT_CUSTOM_DOMAIN")


class BoltSystem(ObjectStorageSystem):
    """Bolt caching proxy in front of S3."""

    name = "bolt"

    def __init__(self, credentials: dict = None, endpoint: str = None):
        if credentials is None:
            credentials = {}

        if endpoint is None:
            endpoint = resolve_bolt_endpoint(region=credentials.get("region_name"))

        # Bolt serves buckets as path segments of a single host
        super().__init__(
            endpoint=endpoint,
            credentials=credentials,
            addressing_style="path",
        )
        logger.debug(f"Initialized Bolt system at {endpoint}")
