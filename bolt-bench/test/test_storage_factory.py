"""
Tests for backend construction and Bolt endpoint resolution.
"""

import unittest
import sys
import os
from unittest.mock import patch

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.errors import InvalidRequestError
from common.request_types import SdkType
from common.storage_factory import create_storage_system
from systems.bolt import BoltSystem, resolve_bolt_endpoint
from systems.s3 import S3System


class TestResolveBoltEndpoint(unittest.TestCase):

    def test_url_with_region_placeholder(self):
        endpoint = resolve_bolt_endpoint("https://bolt.{region}.example.com", "", "eu-west-1")
        self.assertEqual(endpoint, "https://bolt.eu-west-1.example.com")

    def test_custom_domain(self):
        endpoint = resolve_bolt_endpoint("", "bolt.projectn.co", "us-east-2")
        self.assertEqual(endpoint, "https://bolt.us-east-2.bolt.projectn.co")

    def test_url_takes_precedence(self):
        endpoint = resolve_bolt_endpoint("http://localhost:9000", "example.com", "us-east-1")
        self.assertEqual(endpoint, "http://localhost:9000")

    def test_unconfigured_raises(self):
        with self.assertRaises(ValueError):
            resolve_bolt_endpoint("", "", "us-east-1")


class TestCreateStorageSystem(unittest.TestCase):

    def test_s3_system(self):
        system = create_storage_system(SdkType.S3)
        self.assertIsInstance(system, S3System)
        self.assertIsNone(system.client)

    def test_bolt_system_uses_path_addressing(self):
        with patch('systems.bolt.BOLT_URL', 'https://bolt.{region}.example.com'), \
             patch('common.storage_factory.AWS_REGION', 'us-west-2'):
            system = create_storage_system("bolt")

        self.assertIsInstance(system, BoltSystem)
        self.assertEqual(system.endpoint, "https://bolt.us-west-2.example.com")
        self.assertEqual(system._config.s3['addressing_style'], 'path')

    def test_unknown_type_raises(self):
        with self.assertRaises(InvalidRequestError):
            create_storage_system("gcs")


if __name__ == '__main__':
    unittest.main()
