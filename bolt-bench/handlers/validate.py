"""
Data validation: MD5 of an object as served by Bolt and by S3.
"""

import logging
from typing import Any, Dict

from common.errors import error_response
from common.events import ValidateRequest
from common.integrity import compute_md5, is_gzip_encoded
from common.request_types import BucketClean, SdkType
from common.storage_factory import create_storage_system
from systems.base import read_body

logger = logging.getLogger(__name__)


async def get_object_md5(storage_system, bucket: str, key: str) -> str:
    """Fetch an object and return its MD5, computed after gunzip for gzip encoded objects."""
    async with storage_system:
        response = await storage_system.client.get_object(Bucket=bucket, Key=key)
        gzipped = is_gzip_encoded(response.get("ContentEncoding"), key)
        data = await read_body(response)
    return compute_md5(data, gzipped)


async def validate_object(event: Dict[str, Any]) -> Dict[str, str]:
    """Retrieve the object from Bolt and S3 and return both MD5 hashes.

    Event parameters:
        bucket: bucket name
        key: key name
        bucketClean: ON if the source bucket was cleaned after crunch (the
            object then only exists in Bolt and S3 is not queried), OFF by default

    The hashes are returned for the caller to compare; they are not compared here.
    """
    request = ValidateRequest.from_event(event)

    try:
        result = {
            "bolt-md5": await get_object_md5(
                create_storage_system(SdkType.BOLT), request.bucket, request.key
            ),
        }
        if request.bucket_clean == BucketClean.OFF:
            result["s3-md5"] = await get_object_md5(
                create_storage_system(SdkType.S3), request.bucket, request.key
            )
    except Exception as e:
        return error_response(e)

    if "s3-md5" in result and result["s3-md5"] != result["bolt-md5"]:
        logger.warning(f"MD5 mismatch for s3://{request.bucket}/{request.key}")
    return result
