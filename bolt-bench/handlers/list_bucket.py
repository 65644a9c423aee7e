"""
Smoke test: list a bucket through Bolt.
"""

import logging
from typing import Any

from botocore.exceptions import ClientError

from common.errors import InvalidRequestError
from common.request_types import SdkType
from common.storage_factory import create_storage_system

logger = logging.getLogger(__name__)


def bucket_from_event(event: Any) -> str:
    """The bucket name, passed either as the raw event string or as ``{"bucket": ...}``."""
    if isinstance(event, dict):
        event = event.get("bucket")
    if not event:
        raise InvalidRequestError("Missing required parameter 'bucket'")
    return str(event)


async def list_bucket(event: Any) -> bool:
    """List the bucket via Bolt and log every key.

    Returns:
        True on success, False if Bolt rejected the request
    """
    bucket = bucket_from_event(event)

    async with create_storage_system(SdkType.BOLT) as bolt_system:
        try:
            response = await bolt_system.client.list_objects_v2(Bucket=bucket)
        except ClientError as e:
            logger.error(f"Encountered error: {e}")
            return False

    for obj in response.get("Contents", []):
        logger.info(obj["Key"])
    return True
