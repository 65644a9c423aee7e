"""
Tests for event parsing: enums, defaults and required parameters.
"""

import unittest
import sys
import os

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from configuration import DEFAULT_NUM_KEYS, MAX_NUM_KEYS, DEFAULT_OBJ_LENGTH, AUTO_HEAL_TIMEOUT_SECONDS
from common.errors import InvalidRequestError
from common.events import OpsRequest, PerfRequest, ValidateRequest, AutoHealRequest
from common.request_types import SdkType, RequestType, PerfRequestType, BucketClean


class TestRequestTypes(unittest.TestCase):
    """Case-insensitive enum parsing."""

    def test_parse_is_case_insensitive(self):
        self.assertEqual(SdkType.parse("bolt"), SdkType.BOLT)
        self.assertEqual(SdkType.parse("S3"), SdkType.S3)
        self.assertEqual(RequestType.parse("Get_Object"), RequestType.GET_OBJECT)
        self.assertEqual(BucketClean.parse("on"), BucketClean.ON)

    def test_default_when_absent(self):
        self.assertEqual(SdkType.parse(None, default=SdkType.S3), SdkType.S3)
        self.assertEqual(SdkType.parse("", default=SdkType.S3), SdkType.S3)

    def test_missing_without_default_raises(self):
        with self.assertRaises(InvalidRequestError):
            RequestType.parse(None, field="requestType")

    def test_invalid_value_lists_valid_values(self):
        with self.assertRaises(InvalidRequestError) as ctx:
            SdkType.parse("gcs", field="sdkType")
        message = str(ctx.exception)
        self.assertIn("sdkType", message)
        self.assertIn("BOLT", message)
        self.assertIn("S3", message)

    def test_perf_request_type_properties(self):
        self.assertTrue(PerfRequestType.GET_OBJECT.is_get)
        self.assertFalse(PerfRequestType.GET_OBJECT.is_ttfb)
        self.assertTrue(PerfRequestType.GET_OBJECT_PASSTHROUGH_TTFB.is_passthrough)
        self.assertTrue(PerfRequestType.GET_OBJECT_PASSTHROUGH_TTFB.is_ttfb)
        self.assertFalse(PerfRequestType.PUT_OBJECT.is_get)
        self.assertFalse(PerfRequestType.ALL.is_get)


class TestOpsRequest(unittest.TestCase):

    def test_sdk_type_defaults_to_s3(self):
        request = OpsRequest.from_event({"requestType": "get_object", "bucket": "b", "key": "k"})
        self.assertEqual(request.request_type, RequestType.GET_OBJECT)
        self.assertEqual(request.sdk_type, SdkType.S3)

    def test_unknown_operation_raises(self):
        with self.assertRaises(InvalidRequestError):
            OpsRequest.from_event({"requestType": "copy_object", "bucket": "b"})

    def test_missing_required_field_raises(self):
        request = OpsRequest.from_event({"requestType": "put_object", "bucket": "b", "key": "k"})
        with self.assertRaises(InvalidRequestError) as ctx:
            request.check_required()
        self.assertIn("value", str(ctx.exception))

    def test_list_buckets_needs_no_bucket(self):
        request = OpsRequest.from_event({"requestType": "LIST_BUCKETS", "sdkType": "bolt"})
        self.assertIsNone(request.bucket)
        self.assertEqual(request.sdk_type, SdkType.BOLT)

    def test_value_is_kept_verbatim(self):
        request = OpsRequest.from_event(
            {"requestType": "put_object", "bucket": "b", "key": "k", "value": "  x "}
        )
        self.assertEqual(request.value, "  x ")

    def test_blank_value_is_a_valid_body(self):
        for value in ("", "   "):
            request = OpsRequest.from_event(
                {"requestType": "put_object", "bucket": "b", "key": "k", "value": value}
            )
            request.check_required()
            self.assertEqual(request.value, value)


class TestPerfRequest(unittest.TestCase):

    def test_defaults(self):
        request = PerfRequest.from_event({"bucket": "b"})
        self.assertEqual(request.request_type, PerfRequestType.ALL)
        self.assertEqual(request.num_keys, DEFAULT_NUM_KEYS)
        self.assertEqual(request.obj_length, DEFAULT_OBJ_LENGTH)

    def test_num_keys_is_capped(self):
        request = PerfRequest.from_event({"bucket": "b", "numKeys": "5000"})
        self.assertEqual(request.num_keys, MAX_NUM_KEYS)

    def test_numeric_values_accepted(self):
        request = PerfRequest.from_event({"bucket": "b", "numKeys": 10, "objLength": "256"})
        self.assertEqual(request.num_keys, 10)
        self.assertEqual(request.obj_length, 256)

    def test_invalid_numbers_raise(self):
        for event in ({"bucket": "b", "numKeys": "ten"},
                      {"bucket": "b", "numKeys": "0"},
                      {"bucket": "b", "objLength": "-1"}):
            with self.assertRaises(InvalidRequestError):
                PerfRequest.from_event(event)

    def test_bucket_is_required(self):
        request = PerfRequest.from_event({"requestType": "list_objects_v2"})
        with self.assertRaises(InvalidRequestError):
            request.check_required()


class TestValidateRequest(unittest.TestCase):

    def test_bucket_clean_defaults_to_off(self):
        request = ValidateRequest.from_event({"bucket": "b", "key": "k"})
        self.assertEqual(request.bucket_clean, BucketClean.OFF)

    def test_invalid_bucket_clean_raises(self):
        with self.assertRaises(InvalidRequestError):
            ValidateRequest.from_event({"bucket": "b", "key": "k", "bucketClean": "maybe"})


class TestAutoHealRequest(unittest.TestCase):

    def test_defaults_are_bounded(self):
        request = AutoHealRequest.from_event({"bucket": "b", "key": "k"})
        self.assertEqual(request.timeout_seconds, AUTO_HEAL_TIMEOUT_SECONDS)
        self.assertEqual(request.max_attempts, 0)
        self.assertFalse(request.unbounded)

    def test_unbounded_is_explicit_opt_in(self):
        request = AutoHealRequest.from_event(
            {"bucket": "b", "key": "k", "timeoutSeconds": "0", "maxAttempts": "0"}
        )
        self.assertTrue(request.unbounded)

    def test_attempt_budget_only(self):
        request = AutoHealRequest.from_event(
            {"bucket": "b", "key": "k", "timeoutSeconds": "0", "maxAttempts": "3"}
        )
        self.assertEqual(request.max_attempts, 3)
        self.assertFalse(request.unbounded)

    def test_non_finite_timeout_raises(self):
        for timeout in ("nan", "inf", "-inf"):
            with self.assertRaises(InvalidRequestError):
                AutoHealRequest.from_event({"bucket": "b", "key": "k", "timeoutSeconds": timeout})


if __name__ == '__main__':
    unittest.main()
