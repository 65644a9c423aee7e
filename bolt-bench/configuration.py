"""
Configuration constants for the Bolt S3 Lambda benchmarks.

This module contains all configuration parameters including:
- AWS credentials, region and endpoints
- Bolt proxy endpoint resolution inputs
- Benchmark defaults and limits (key counts, object lengths, iterations)
- Client tuning (connection pool, timeouts, retries)
- Auto-heal polling bounds
"""

import os

# =============================================================================
# AWS CONFIGURATION
# =============================================================================

# Region the Lambda runs in; the runtime sets AWS_REGION for us
AWS_REGION: str = os.getenv("AWS_REGION", "us-east-1")

# Explicit credentials are optional: empty means the default credential chain
AWS_ACCESS_KEY_ID: str = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY: str = os.getenv("AWS_SECRET_ACCESS_KEY", "")
AWS_SESSION_TOKEN: str = os.getenv("AWS_SESSION_TOKEN", "")

# Optional endpoint override for the direct (S3) backend
S3_ENDPOINT: str = os.getenv("S3_ENDPOINT", "")

# =============================================================================
# BOLT CONFIGURATION
# =============================================================================

# Full Bolt endpoint; may contain a "{region}" placeholder
BOLT_URL: str = os.getenv("BOLT_URL", "")

# Used to derive https://bolt.{region}.{domain} when BOLT_URL is not set
BOLT_CUSTOM_DOMAIN: str = os.getenv("BOLT_CUSTOM_DOMAIN", "")

# =============================================================================
# BENCHMARK PARAMETERS
# =============================================================================

DEFAULT_NUM_KEYS: int = 1000
MAX_NUM_KEYS: int = 1000  # numKeys above this is capped
DEFAULT_OBJ_LENGTH: int = 100  # Bytes per generated object value

LIST_ITERATIONS: int = 10  # ListObjectsV2 calls per backend
LIST_MAX_KEYS: int = 1000

PERF_KEY_PREFIX: str = "bolt-s3-perf"

# Characters used for generated keys and values
ALPHANUMERIC_CHARS: str = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

# =============================================================================
# CLIENT TUNING
# =============================================================================

MAX_POOL_CONNECTIONS: int = 10  # Calls are issued sequentially
CONNECT_TIMEOUT_SECONDS: int = 5
READ_TIMEOUT_SECONDS: int = 60
MAX_RETRIES: int = 3

# =============================================================================
# AUTO-HEAL POLLING
# =============================================================================

# Deadline for a single auto-heal run (Lambda invocations end at 900 s)
AUTO_HEAL_TIMEOUT_SECONDS: float = float(os.getenv("AUTO_HEAL_TIMEOUT_SECONDS", "840"))
AUTO_HEAL_RETRY_DELAY_SECONDS: float = float(os.getenv("AUTO_HEAL_RETRY_DELAY_SECONDS", "0"))

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = "%(asctime)s - %(levelname)s - %(message)s"

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

MS_PER_SECOND: int = 1000
