"""
Typed views of the flat string maps passed to the handlers.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from configuration import (
    DEFAULT_NUM_KEYS,
    MAX_NUM_KEYS,
    DEFAULT_OBJ_LENGTH,
    AUTO_HEAL_TIMEOUT_SECONDS,
)
from common.errors import InvalidRequestError
from common.request_types import SdkType, RequestType, PerfRequestType, BucketClean


def _get(event: Dict[str, Any], field: str) -> Optional[str]:
    value = event.get(field)
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def _require(event: Dict[str, Any], field: str) -> str:
    value = _get(event, field)
    if value is None:
        raise InvalidRequestError(f"Missing required parameter '{field}'")
    return value


def _parse_number(event: Dict[str, Any], field: str, default, cast=int, minimum=1):
    raw = _get(event, field)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise InvalidRequestError(f"Parameter '{field}' must be a number, got '{raw}'") from None
    if not math.isfinite(value):
        raise InvalidRequestError(f"Parameter '{field}' must be finite, got '{raw}'")
    if value < minimum:
        raise InvalidRequestError(f"Parameter '{field}' must be >= {minimum}, got {raw}")
    return value


# Event keys each CRUD operation needs besides requestType
OPS_REQUIRED_FIELDS = {
    RequestType.HEAD_OBJECT: ("bucket", "key"),
    RequestType.GET_OBJECT: ("bucket", "key"),
    RequestType.LIST_OBJECTS_V2: ("bucket",),
    RequestType.LIST_BUCKETS: (),
    RequestType.HEAD_BUCKET: ("bucket",),
    RequestType.PUT_OBJECT: ("bucket", "key", "value"),
    RequestType.DELETE_OBJECT: ("bucket", "key"),
}


@dataclass(frozen=True)
class OpsRequest:
    """Event for the CRUD dispatcher."""
    request_type: RequestType
    sdk_type: SdkType = SdkType.S3
    bucket: Optional[str] = None
    key: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "OpsRequest":
        request_type = RequestType.parse(_get(event, "requestType"), field="requestType")
        sdk_type = SdkType.parse(_get(event, "sdkType"), default=SdkType.S3, field="sdkType")

        # value is the object body and is kept verbatim
        value = event.get("value")
        return cls(
            request_type=request_type,
            sdk_type=sdk_type,
            bucket=_get(event, "bucket"),
            key=_get(event, "key"),
            value=None if value is None else str(value),
        )

    def check_required(self):
        """Raise InvalidRequestError naming the first parameter the operation needs but lacks."""
        for field in OPS_REQUIRED_FIELDS.get(self.request_type, ()):
            if getattr(self, field) is None:
                raise InvalidRequestError(f"Missing required parameter '{field}'")


@dataclass(frozen=True)
class PerfRequest:
    """Event for the performance benchmark suite."""
    bucket: Optional[str] = None
    request_type: PerfRequestType = PerfRequestType.ALL
    num_keys: int = DEFAULT_NUM_KEYS
    obj_length: int = DEFAULT_OBJ_LENGTH

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "PerfRequest":
        request_type = PerfRequestType.parse(
            _get(event, "requestType"), default=PerfRequestType.ALL, field="requestType"
        )
        num_keys = min(_parse_number(event, "numKeys", DEFAULT_NUM_KEYS), MAX_NUM_KEYS)
        obj_length = _parse_number(event, "objLength", DEFAULT_OBJ_LENGTH)
        return cls(
            bucket=_get(event, "bucket"),
            request_type=request_type,
            num_keys=num_keys,
            obj_length=obj_length,
        )

    def check_required(self):
        if self.bucket is None:
            raise InvalidRequestError("Missing required parameter 'bucket'")


@dataclass(frozen=True)
class ValidateRequest:
    """Event for the object-integrity validator."""
    bucket: str
    key: str
    bucket_clean: BucketClean = BucketClean.OFF

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "ValidateRequest":
        return cls(
            bucket=_require(event, "bucket"),
            key=_require(event, "key"),
            bucket_clean=BucketClean.parse(
                _get(event, "bucketClean"), default=BucketClean.OFF, field="bucketClean"
            ),
        )


@dataclass(frozen=True)
class AutoHealRequest:
    """Event for the auto-heal poller.

    ``timeout_seconds`` of 0 disables the deadline and ``max_attempts`` of 0
    allows any number of attempts; polling is unbounded only when both are 0.
    """
    bucket: str
    key: str
    timeout_seconds: float = AUTO_HEAL_TIMEOUT_SECONDS
    max_attempts: int = 0

    @property
    def unbounded(self) -> bool:
        return not self.timeout_seconds and not self.max_attempts

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "AutoHealRequest":
        return cls(
            bucket=_require(event, "bucket"),
            key=_require(event, "key"),
            timeout_seconds=_parse_number(
                event, "timeoutSeconds", AUTO_HEAL_TIMEOUT_SECONDS, cast=float, minimum=0
            ),
            max_attempts=_parse_number(event, "maxAttempts", 0, minimum=0),
        )
