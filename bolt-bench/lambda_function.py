"""
AWS Lambda entry points.

Each handler receives the invocation event (a flat string map) and returns a
flat, or one level nested, string map. Configure the function handler as
``lambda_function.<name>``, e.g. ``lambda_function.perf_handler``.
"""

import asyncio
import logging

# Required: Use uvloop for better performance
import uvloop
asyncio.set_event_loop_policy(uvloop.EventLoopPolicy())

from configuration import LOG_LEVEL, LOG_FORMAT
from handlers.auto_heal import auto_heal
from handlers.list_bucket import list_bucket
from handlers.ops import BoltS3OpsClient
from handlers.perf import BoltS3Perf
from handlers.validate import validate_object

# Set up logging (only if not already configured; the Lambda runtime installs its own handler)
if not logging.root.handlers:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logging.getLogger().setLevel(LOG_LEVEL)
logger = logging.getLogger(__name__)


def ops_handler(event, context):
    """Object/bucket CRUD on Bolt or S3.

    Event parameters:
        requestType: HEAD_OBJECT, GET_OBJECT, LIST_OBJECTS_V2, LIST_BUCKETS,
            HEAD_BUCKET, PUT_OBJECT or DELETE_OBJECT
        sdkType: BOLT or S3 (default S3)
        bucket, key, value: operation arguments
    """
    return asyncio.run(BoltS3OpsClient().process_event(event))


def perf_handler(event, context):
    """Performance benchmarks of Bolt against S3.

    Event parameters:
        requestType: LIST_OBJECTS_V2, PUT_OBJECT, DELETE_OBJECT, GET_OBJECT,
            GET_OBJECT_TTFB, GET_OBJECT_PASSTHROUGH, GET_OBJECT_PASSTHROUGH_TTFB
            or ALL (default)
        bucket: bucket name
        numKeys: number of objects, default and maximum 1000
        objLength: length of generated objects, default 100
    """
    return asyncio.run(BoltS3Perf().process_event(event))


def validate_obj_handler(event, context):
    """MD5 of an object as served by Bolt and S3 (bucket, key, bucketClean)."""
    return asyncio.run(validate_object(event))


def auto_heal_handler(event, context):
    """Time taken by Bolt to auto-heal an object (bucket, key, timeoutSeconds, maxAttempts)."""
    return asyncio.run(auto_heal(event))


def list_bucket_handler(event, context):
    """List a bucket via Bolt; the event is the bucket name."""
    return asyncio.run(list_bucket(event))
