"""
CRUD dispatcher: sends a single object/bucket request to Bolt or S3.
"""

import re
import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional

from configuration import LIST_MAX_KEYS
from common.errors import error_response
from common.events import OpsRequest
from common.integrity import compute_md5, is_gzip_encoded
from common.request_types import RequestType
from common.storage_factory import create_storage_system
from systems.base import read_body

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_EXPIRY_DATE_RE = re.compile(r'expiry-date="([^"]+)"')


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def format_expiration(expiration: Optional[str]) -> str:
    """Expiry date of an ``x-amz-expiration`` header value, or "" if the object does not expire."""
    if not expiration:
        return ""
    match = _EXPIRY_DATE_RE.search(expiration)
    if not match:
        return expiration
    return format_timestamp(parsedate_to_datetime(match.group(1)))


class BoltS3OpsClient:
    """Processes events received by the CRUD handler.

    Extracts the parameters (sdkType, requestType, bucket/key/value) from the
    event, sends the matching request to Bolt or S3 and returns the relevant
    response fields as a flat string map.
    """

    def __init__(self):
        self.client = None
        self._operations = {
            RequestType.LIST_OBJECTS_V2: self.list_objects_v2,
            RequestType.LIST_BUCKETS: self.list_buckets,
            RequestType.HEAD_BUCKET: self.head_bucket,
            RequestType.GET_OBJECT: self.get_object,
            RequestType.HEAD_OBJECT: self.head_object,
            RequestType.PUT_OBJECT: self.put_object,
            RequestType.DELETE_OBJECT: self.delete_object,
        }

    async def process_event(self, event: Dict[str, Any]) -> Dict[str, str]:
        """Perform the requested operation and return its result.

        Raises:
            InvalidRequestError: If requestType/sdkType is unrecognised; raised
                before any SDK call. A missing parameter is returned as an error map.
        """
        request = OpsRequest.from_event(event)

        operation = self._operations.get(request.request_type)
        if operation is None:
            return {}

        logger.info(f"{request.request_type.name} via {request.sdk_type.name}")

        try:
            request.check_required()
            storage_system = create_storage_system(request.sdk_type)
            async with storage_system:
                self.client = storage_system.client
                return await operation(request)
        except Exception as e:
            return error_response(e)
        finally:
            self.client = None

    async def list_objects_v2(self, request: OpsRequest) -> Dict[str, str]:
        """Keys of the first page (up to 1000 objects) of the bucket."""
        response = await self.client.list_objects_v2(Bucket=request.bucket, MaxKeys=LIST_MAX_KEYS)
        return {
            "objects": ", ".join(obj["Key"] for obj in response.get("Contents", [])),
        }

    async def list_buckets(self, request: OpsRequest) -> Dict[str, str]:
        """Buckets owned by the sender of the request."""
        response = await self.client.list_buckets()
        return {
            "buckets": ", ".join(bucket["Name"] for bucket in response.get("Buckets", [])),
        }

    async def head_object(self, request: OpsRequest) -> Dict[str, str]:
        """Object metadata."""
        response = await self.client.head_object(Bucket=request.bucket, Key=request.key)
        return {
            "Expiration": format_expiration(response.get("Expiration")),
            "lastModified": format_timestamp(response.get("LastModified")),
            "ContentLength": str(response.get("ContentLength", "")),
            "ContentEncoding": response.get("ContentEncoding", ""),
            "ETag": response.get("ETag", ""),
            "VersionId": response.get("VersionId", ""),
            "StorageClass": response.get("StorageClass", ""),
        }

    async def get_object(self, request: OpsRequest) -> Dict[str, str]:
        """MD5 of the object, computed on the decompressed data if it is gzip encoded."""
        response = await self.client.get_object(Bucket=request.bucket, Key=request.key)
        gzipped = is_gzip_encoded(response.get("ContentEncoding"), request.key)
        data = await read_body(response)
        return {"md5": compute_md5(data, gzipped)}

    async def head_bucket(self, request: OpsRequest) -> Dict[str, str]:
        """Status code and region if the bucket exists."""
        response = await self.client.head_bucket(Bucket=request.bucket)
        metadata = response.get("ResponseMetadata", {})
        region = response.get("BucketRegion") or metadata.get("HTTPHeaders", {}).get("x-amz-bucket-region", "")
        return {
            "statusCode": str(metadata.get("HTTPStatusCode", "")),
            "region": region,
        }

    async def delete_object(self, request: OpsRequest) -> Dict[str, str]:
        response = await self.client.delete_object(Bucket=request.bucket, Key=request.key)
        return {
            "statusCode": str(response.get("ResponseMetadata", {}).get("HTTPStatusCode", "")),
        }

    async def put_object(self, request: OpsRequest) -> Dict[str, str]:
        """Upload ``value`` as the object body."""
        response = await self.client.put_object(
            Bucket=request.bucket, Key=request.key, Body=request.value.encode()
        )
        return {
            "ETag": response.get("ETag", ""),
            "Expiration": format_expiration(response.get("Expiration")),
            "VersionId": response.get("VersionId", ""),
        }
