from .versioning import (
    DEFAULT_VERSION_SCHEME,
    VERSION_SCHEMES,
    VersionFunction,
    content_digest,
    get_version_function,
    string_hash_code,
)

__all__ = [
    "DEFAULT_VERSION_SCHEME",
    "VERSION_SCHEMES",
    "VersionFunction",
    "content_digest",
    "get_version_function",
    "string_hash_code",
]
