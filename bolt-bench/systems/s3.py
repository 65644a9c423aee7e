"""
Direct AWS S3 object storage system implementation.
"""

from systems.base import ObjectStorageSystem
from configuration import S3_ENDPOINT
import logging

logger = logging.getLogger(__name__)


class S3System(ObjectStorageSystem):
    """AWS S3 accessed directly, without the Bolt proxy."""

    name = "s3"

    def __init__(self, credentials: dict = None):
        if credentials is None:
            credentials = {}

        super().__init__(
            endpoint=S3_ENDPOINT,
            credentials=credentials,
        )
        logger.debug("Initialized S3 system")
