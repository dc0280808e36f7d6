"""ID and value generators (e.g. CUID, filename suffixes)."""

import secrets
import string

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

_BASE36_ALPHABET = string.digits + string.ascii_lowercase


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def random_base36(length: int = 6) -> str:
    """Return a random lowercase base36 string of the given length."""
    return "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(length))
