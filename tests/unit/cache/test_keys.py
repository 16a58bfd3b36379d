"""
Inline Editable - Cache Key Tests

Derivation of namespace block keys.
"""

import itertools

import pytest

from inline_editable.cache import MAX_KEY_LENGTH, NAMESPACE_KEY_PREFIX, namespace_key, validate_key
from inline_editable.content import ContentProvider
from inline_editable.errors import InvalidCacheKeyError


class TestNamespaceKey:
    """Test suite for namespace_key."""

    def test_plain_identifiers_are_readable(self) -> None:
        assert namespace_key("ui", "en") == "__inline_prefix_ui.en"
        assert namespace_key("checkout_page", "pt-BR") == "__inline_prefix_checkout_page.pt-BR"

    def test_provider_uses_same_key(self) -> None:
        assert ContentProvider.cache_key("ui", "en") == namespace_key("ui", "en")

    def test_deterministic(self) -> None:
        assert namespace_key("ui", "en") == namespace_key("ui", "en")

    def test_separator_in_components_does_not_collide(self) -> None:
        assert namespace_key("a.b", "c") != namespace_key("a", "b.c")
        assert namespace_key("a", "") != namespace_key("", "a")
        assert namespace_key("a%2Eb", "c") != namespace_key("a.b", "c")

    def test_distinct_pairs_give_distinct_keys(self) -> None:
        parts = ["", "a", "b", ".", "a.b", "%2E", "%", "x y", "é", "_", "a.", ".a"]
        pairs = list(itertools.product(parts, repeat=2))

        keys = {namespace_key(namespace, locale) for namespace, locale in pairs}

        assert len(keys) == len(pairs)

    def test_keys_pass_store_validation(self) -> None:
        for namespace, locale in [("ui", "en"), ("with space", "fr"), ("tab\there", "de"), ("", ""), ("日本", "ja")]:
            key = namespace_key(namespace, locale)
            assert validate_key(key) == key
            assert key.startswith(NAMESPACE_KEY_PREFIX)

    def test_long_pairs_are_hashed(self) -> None:
        key = namespace_key("n" * 400, "en")

        assert len(key) <= MAX_KEY_LENGTH
        assert key.startswith(f"{NAMESPACE_KEY_PREFIX}sha256_")
        assert key != namespace_key("n" * 401, "en")
        validate_key(key)


class TestValidateKey:
    """Key rules shared by every backend."""

    @pytest.mark.parametrize(
        "key",
        ["", "has space", "new\nline", "x" * (MAX_KEY_LENGTH + 1)],
    )
    def test_rejects_malformed_keys(self, key: str) -> None:
        with pytest.raises(InvalidCacheKeyError):
            validate_key(key)

    def test_accepts_max_length(self) -> None:
        key = "x" * MAX_KEY_LENGTH
        assert validate_key(key) == key
