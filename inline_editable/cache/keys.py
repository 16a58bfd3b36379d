"""Cache key builder for namespace blocks. Single place for the key format.

Components are percent-encoded (the separator included) so that two distinct
(namespace, locale) pairs can never produce the same key, and the result never
contains characters a cache store could reject.
"""

import hashlib
from urllib.parse import quote

from .interface import MAX_KEY_LENGTH

NAMESPACE_KEY_PREFIX = "__inline_prefix_"
NAMESPACE_KEY_SEP = "."

_HASHED_PREFIX = f"{NAMESPACE_KEY_PREFIX}sha256_"


def _encode_component(value: str) -> str:
    """Percent-encode everything except unreserved characters, then the separator."""
    return quote(value, safe="").replace(NAMESPACE_KEY_SEP, "%2E")


def namespace_key(namespace: str, locale: str) -> str:
    """Cache key addressing the block of one (namespace, locale) pair.

    Plain identifiers keep a readable key: ``("ui", "en")`` gives
    ``__inline_prefix_ui.en``. Pairs whose key would exceed MAX_KEY_LENGTH are
    addressed by a SHA-256 digest of the encoded pair instead.
    """
    encoded = f"{_encode_component(namespace)}{NAMESPACE_KEY_SEP}{_encode_component(locale)}"
    key = f"{NAMESPACE_KEY_PREFIX}{encoded}"
    if len(key) <= MAX_KEY_LENGTH:
        return key

    digest = hashlib.sha256(encoded.encode("utf-8")).hexdigest()
    return f"{_HASHED_PREFIX}{digest}"
