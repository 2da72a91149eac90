"""
SKU generation.

Format: <CAT>-<last 6 digits of epoch ms>-<000..999>. Collisions are not
retried; the unique index on sku reports them as a conflict.
"""

import random
import time
from typing import Optional


def generate_sku(
    category: str,
    now_ms: Optional[int] = None,
    rand: Optional[int] = None,
) -> str:
    """
    Build a SKU for a product without one.

    Args:
        category: Product category; its first three letters form the prefix
        now_ms: Epoch milliseconds, defaults to the current time
        rand: Suffix in 0..999, defaults to a random value
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    if rand is None:
        rand = random.randint(0, 999)

    prefix = category[:3].upper()
    timestamp = str(now_ms)[-6:]
    return f"{prefix}-{timestamp}-{rand:03d}"
