"""Identifier generation for spots and check-ins."""
import random
import string
import time
import uuid

_ALPHABET = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def fallback_id() -> str:
    """Random base-36 chunk followed by the base-36 epoch milliseconds."""
    return _to_base36(random.getrandbits(52)) + _to_base36(int(time.time() * 1000))


def generate_id() -> str:
    """
    Return a random UUID4 string.

    uuid4 needs os.urandom; on platforms without an entropy source the
    pseudo-random + timestamp form is used instead.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        return fallback_id()
