"""
Auto-heal test: time until Bolt serves an object again.
"""

import asyncio
import logging
from typing import Any, Dict

from configuration import AUTO_HEAL_RETRY_DELAY_SECONDS, MS_PER_SECOND
from common.errors import AutoHealTimeoutError, error_response
from common.events import AutoHealRequest
from common.metrics_utils import now, elapsed_ms, format_value, LATENCY_UNIT
from common.request_types import SdkType
from common.storage_factory import create_storage_system

logger = logging.getLogger(__name__)


async def wait_for_heal(
    client,
    bucket: str,
    key: str,
    timeout_seconds: float = 0,
    max_attempts: int = 0,
    retry_delay_seconds: float = AUTO_HEAL_RETRY_DELAY_SECONDS,
) -> float:
    """Get the object repeatedly until a request succeeds.

    Every error is ignored; a failing get means the object has not healed yet.

    Args:
        client: S3 client (Bolt)
        bucket: Bucket name
        key: Key name
        timeout_seconds: Give up after this long; 0 for no deadline
        max_attempts: Give up after this many failed gets; 0 for no limit
        retry_delay_seconds: Pause between attempts

    Returns:
        Milliseconds from the first attempt until the successful one completed

    Raises:
        AutoHealTimeoutError: If the deadline or the attempt budget is exhausted
    """
    start = now()
    attempts = 0

    while True:
        attempts += 1
        try:
            response = await client.get_object(Bucket=bucket, Key=key)
            async with response["Body"]:
                pass
            heal_time_ms = elapsed_ms(start)
            logger.info(f"s3://{bucket}/{key} healed after {attempts} attempts")
            return heal_time_ms
        except Exception as e:
            logger.debug(f"Attempt {attempts} for s3://{bucket}/{key} failed: {e}")

        if max_attempts and attempts >= max_attempts:
            raise AutoHealTimeoutError(
                f"s3://{bucket}/{key} did not heal within {attempts} attempts"
            )
        if timeout_seconds and elapsed_ms(start) >= timeout_seconds * MS_PER_SECOND:
            raise AutoHealTimeoutError(
                f"s3://{bucket}/{key} did not heal within {timeout_seconds} seconds"
            )
        if retry_delay_seconds:
            await asyncio.sleep(retry_delay_seconds)


async def auto_heal(event: Dict[str, Any]) -> Dict[str, str]:
    """Measure the time Bolt takes to auto-heal an object.

    Event parameters:
        bucket: bucket name
        key: key name
        timeoutSeconds: deadline in seconds, 0 disables it
        maxAttempts: attempt budget, 0 (default) for unlimited
    """
    request = AutoHealRequest.from_event(event)
    if request.unbounded:
        logger.warning(
            f"Polling s3://{request.bucket}/{request.key} without a deadline or attempt limit"
        )

    try:
        async with create_storage_system(SdkType.BOLT) as bolt_system:
            heal_time_ms = await wait_for_heal(
                bolt_system.client,
                request.bucket,
                request.key,
                timeout_seconds=request.timeout_seconds,
                max_attempts=request.max_attempts,
            )
    except Exception as e:
        return error_response(e)

    return {"auto_heal_time": format_value(heal_time_ms, LATENCY_UNIT)}
