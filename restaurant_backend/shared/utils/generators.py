"""ID and value generators (e.g. CUID)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    CUID2 values start with a letter and use [a-z0-9], which satisfies
    Appwrite's custom id rules (max 36 chars, no leading special char).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_order_number(prefix: str = "ORD") -> str:
    """Return a short human-readable order number, e.g. ORD-7F3K9Q2M (max 20 chars)."""
    alphabet = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
    suffix = "".join(secrets.choice(alphabet) for _ in range(8))
    return f"{prefix}-{suffix}"
