"""
Identifier helpers.

Records carry a UUID primary key plus, for authors and categories, a short
public code. Path parameters may be either; these helpers tell them apart
and generate new codes.
"""

import random
import time
import uuid

CATEGORY_CODE_PREFIX = "cat-"

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def is_valid_uuid(value: str) -> bool:
    """Return True if value parses as a UUID."""
    try:
        uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def new_author_code(length: int = 8) -> str:
    """Random lowercase base36 code, e.g. 'k3j9x0ab'."""
    return "".join(random.choices(_BASE36, k=length))


def new_category_code() -> str:
    """Category code of the form 'cat-<epoch-ms>-<0..999>'."""
    return f"{CATEGORY_CODE_PREFIX}{int(time.time() * 1000)}-{random.randint(0, 999)}"
