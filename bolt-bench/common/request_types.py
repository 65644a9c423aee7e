"""
Closed sets of values accepted in handler events.
"""

from enum import Enum
from typing import Optional

from common.errors import InvalidRequestError


class ParsableEnum(Enum):
    """Enum parsed case-insensitively from event strings."""

    @classmethod
    def parse(cls, value: Optional[str], default: "ParsableEnum" = None, field: str = None):
        """Parse an event value into a member of this enum.

        Args:
            value: Raw event value (case-insensitive)
            default: Member returned when ``value`` is absent or empty
            field: Event key, used in the error message

        Returns:
            Enum member

        Raises:
            InvalidRequestError: If the value is absent with no default, or unrecognised
        """
        field = field or cls.__name__
        if not value:
            if default is None:
                raise InvalidRequestError(f"Missing required parameter '{field}'")
            return default

        try:
            return cls[value.strip().upper()]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise InvalidRequestError(
                f"Invalid {field} '{value}'. Valid values: {valid}"
            ) from None


class SdkType(ParsableEnum):
    """Backend an operation is sent to."""
    BOLT = "bolt"
    S3 = "s3"


class RequestType(ParsableEnum):
    """Operations supported by the CRUD dispatcher."""
    HEAD_OBJECT = "head_object"
    GET_OBJECT = "get_object"
    LIST_OBJECTS_V2 = "list_objects_v2"
    LIST_BUCKETS = "list_buckets"
    HEAD_BUCKET = "head_bucket"
    PUT_OBJECT = "put_object"
    DELETE_OBJECT = "delete_object"


class PerfRequestType(ParsableEnum):
    """Operations supported by the performance benchmark suite."""
    LIST_OBJECTS_V2 = "list_objects_v2"
    PUT_OBJECT = "put_object"
    DELETE_OBJECT = "delete_object"
    GET_OBJECT = "get_object"
    GET_OBJECT_TTFB = "get_object_ttfb"
    GET_OBJECT_PASSTHROUGH = "get_object_passthrough"
    GET_OBJECT_PASSTHROUGH_TTFB = "get_object_passthrough_ttfb"
    ALL = "all"

    @property
    def is_get(self) -> bool:
        return self.name.startswith("GET_OBJECT")

    @property
    def is_passthrough(self) -> bool:
        return "PASSTHROUGH" in self.name

    @property
    def is_ttfb(self) -> bool:
        return self.name.endswith("TTFB")


class BucketClean(ParsableEnum):
    """Whether the source bucket was cleaned after Bolt crunched it."""
    ON = "on"  # objects only exist in Bolt
    OFF = "off"
