"""
Version Token Computation

Version tokens are fingerprints of the value being written: two writes of the
same value always produce the same token. They are used for change detection
and compare-and-swap, not as a collision-proof identity.

Two schemes are available:

- ``hashcode`` (default): 32-bit string hash code, ``s[0]*31^(n-1) + ... + s[n-1]``
  over UTF-16 code units with int32 wrap-around. Lone surrogates count as
  single code units. Tokens match those written by
  other keystore clients that use the same scheme. Distinct values can collide.
- ``digest``: first 8 bytes of the value's SHA-256, read as a signed 64-bit
  integer. Collisions are negligible, but tokens are not interchangeable with
  ``hashcode`` tokens.
"""

import hashlib
from typing import Callable, Dict

from ..exceptions import ValidationError


VersionFunction = Callable[[str], int]

DEFAULT_VERSION_SCHEME = "hashcode"


def string_hash_code(value: str) -> int:
    """Compute the 32-bit string hash code of a value.

    Args:
        value: String to fingerprint

    Returns:
        Signed 32-bit hash code

    Examples:
        >>> string_hash_code("")
        0
        >>> string_hash_code("a")
        97
        >>> string_hash_code("hello")
        99162322
    """
    encoded = value.encode('utf-16-be', 'surrogatepass')
    h = 0
    for i in range(0, len(encoded), 2):
        code_unit = (encoded[i] << 8) | encoded[i + 1]
        h = (31 * h + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def content_digest(value: str) -> int:
    """Compute a signed 64-bit token from the SHA-256 of a value's UTF-8 bytes."""
    digest = hashlib.sha256(value.encode('utf-8', 'surrogatepass')).digest()
    return int.from_bytes(digest[:8], byteorder='big', signed=True)


VERSION_SCHEMES: Dict[str, VersionFunction] = {
    "hashcode": string_hash_code,
    "digest": content_digest,
}


def get_version_function(scheme: str = DEFAULT_VERSION_SCHEME) -> VersionFunction:
    """Look up the version function for a scheme name.

    Raises:
        ValidationError: Unknown scheme
    """
    try:
        return VERSION_SCHEMES[scheme]
    except KeyError:
        raise ValidationError(
            f"Unknown version scheme '{scheme}'",
            errors={'version_scheme': f"must be one of {sorted(VERSION_SCHEMES)}"}
        ) from None
