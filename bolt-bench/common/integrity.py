"""
Content hashing used to compare objects served by Bolt and S3.
"""

import gzip
import hashlib
from typing import Optional


def is_gzip_encoded(content_encoding: Optional[str], key: str) -> bool:
    """True if the object is gzip compressed, by Content-Encoding header or ``.gz`` suffix."""
    if content_encoding and content_encoding.strip().lower() == "gzip":
        return True
    return key.endswith(".gz")


def compute_md5(data: bytes, gzipped: bool = False) -> str:
    """Uppercase hex MD5 of ``data``, decompressed first when ``gzipped``."""
    if gzipped:
        data = gzip.decompress(data)
    return hashlib.md5(data).hexdigest().upper()
