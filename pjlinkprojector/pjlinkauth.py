"""
Implements the PJLink authentication digest.

PJLink mandates MD5 over the random seed sent by the projector followed by the password. The
digest is a wire compatibility requirement, not a security primitive.

Created on 19 Oct 2026
"""

import hashlib
import string

SEED_LENGTH = 8
DIGEST_LENGTH = 32


def is_valid_seed(seed: str) -> bool:
    """
    Tests if the given seed has the shape of a PJLink authentication seed.
    """
    return (
        seed is not None
        and len(seed) == SEED_LENGTH
        and all(c in string.hexdigits for c in seed)
    )


def calculate_digest(seed: str, password: str) -> str:
    """
    Calculates the authentication digest for the given seed and password.

    The result is the lowercase hexadecimal MD5 of the seed directly followed by the password.
    """
    if not is_valid_seed(seed):
        raise ValueError(f"Invalid authentication seed '{seed}'")
    assert password is not None
    if not password.isascii():
        raise ValueError("Password contains non ASCII characters")

    digest = hashlib.md5(
        f"{seed}{password}".encode("ascii"), usedforsecurity=False
    ).hexdigest()

    return digest
