"""
Common utility functions for the NekoBox backend.
"""

import datetime
import secrets
import string

ALPHANUMERIC = string.ascii_letters + string.digits


def utcnow() -> datetime.datetime:
    """
    Current UTC time as a naive datetime.

    Naive values are stored so that SQLite and server databases round-trip
    the same representation.
    """
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def random_string(length: int, alphabet: str = ALPHANUMERIC) -> str:
    """
    Generate a random string of the given length.

    Args:
        length: Number of characters to generate
        alphabet: Characters to choose from (letters and digits by default)

    Returns:
        Random string drawn with the ``secrets`` generator
    """
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")
    return "".join(secrets.choice(alphabet) for _ in range(length))
