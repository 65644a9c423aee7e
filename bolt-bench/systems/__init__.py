"""
S3-compatible backends: direct S3 and the Bolt proxy.
"""

from .base import ObjectStorageSystem
from .bolt import BoltSystem, resolve_bolt_endpoint
from .s3 import S3System

__all__ = ['ObjectStorageSystem', 'BoltSystem', 'S3System', 'resolve_bolt_endpoint']
