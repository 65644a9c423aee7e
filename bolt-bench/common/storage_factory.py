"""
Factory module for creating storage system instances.
"""

import logging

# Silence boto3/botocore logging before any boto3-related import
logging.getLogger('botocore').setLevel(logging.CRITICAL)
logging.getLogger('botocore.credentials').setLevel(logging.CRITICAL)
logging.getLogger('boto3').setLevel(logging.CRITICAL)
logging.getLogger('aioboto3').setLevel(logging.CRITICAL)
logging.getLogger('aiobotocore').setLevel(logging.CRITICAL)
logging.getLogger('urllib3').setLevel(logging.CRITICAL)

from systems.bolt import BoltSystem
from systems.s3 import S3System
from configuration import (
    AWS_ACCESS_KEY_ID,
    AWS_SECRET_ACCESS_KEY,
    AWS_SESSION_TOKEN,
    AWS_REGION,
)
from common.request_types import SdkType

logger = logging.getLogger(__name__)


def _credentials() -> dict:
    return {
        "access_key_id": AWS_ACCESS_KEY_ID,
        "secret_access_key": AWS_SECRET_ACCESS_KEY,
        "session_token": AWS_SESSION_TOKEN,
        "region_name": AWS_REGION,
    }


def create_storage_system(sdk_type):
    """Create and return the storage system for a backend.

    Bolt and S3 share the same credentials and region; only the endpoint differs.

    Args:
        sdk_type: ``SdkType`` member, or its name ('bolt' / 's3', any case)

    Returns:
        Storage system instance (BoltSystem or S3System), to be used with ``async with``

    Raises:
        InvalidRequestError: If sdk_type is not supported
    """
    if not isinstance(sdk_type, SdkType):
        sdk_type = SdkType.parse(sdk_type, field="sdkType")

    if sdk_type == SdkType.BOLT:
        return BoltSystem(_credentials())

    return S3System(_credentials())
