"""
Synthetic keys and payloads for write-path benchmarks.
"""

import random
from typing import List

from configuration import ALPHANUMERIC_CHARS, PERF_KEY_PREFIX, DEFAULT_OBJ_LENGTH


def generate(length: int = DEFAULT_OBJ_LENGTH) -> str:
    """Return a pseudo-random alphanumeric string of ``length`` characters."""
    return "".join(random.choices(ALPHANUMERIC_CHARS, k=length))


def generate_key_names(num_keys: int, prefix: str = PERF_KEY_PREFIX) -> List[str]:
    """Return ``num_keys`` deterministic key names: prefix0, prefix1, ..."""
    return [f"{prefix}{i}" for i in range(num_keys)]
