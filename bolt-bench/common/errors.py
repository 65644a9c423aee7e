"""
Exceptions raised by the handlers and conversion of failures into response maps.
"""

import logging
from typing import Dict

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class InvalidRequestError(ValueError):
    """A request parameter is missing or has an unrecognised value."""


class PerfStatsError(ValueError):
    """Samples cannot be summarised (empty list or zero total duration)."""


class AutoHealTimeoutError(TimeoutError):
    """The object did not become readable within the auto-heal budget."""


def error_response(error: Exception) -> Dict[str, str]:
    """Convert an exception into the standard error response map.

    Backend errors carry both ``errorMessage`` and ``errorCode``; any other
    exception carries only ``errorMessage``.
    """
    if isinstance(error, ClientError):
        error_info = error.response.get('Error', {})
        error_code = error_info.get('Code', 'Unknown')
        status_code = error.response.get('ResponseMetadata', {}).get('HTTPStatusCode', 0)
        logger.error(f"S3 error {error_code} (HTTP {status_code}): {error}")
        return {
            'errorMessage': error_info.get('Message') or str(error),
            'errorCode': error_code,
        }

    logger.error(f"Request failed: {error}", exc_info=True)
    return {'errorMessage': str(error)}
