"""Tests for version token computation (utils/versioning.py)."""

import hashlib

import pytest

from dynamodb_keystore.exceptions import ValidationError
from dynamodb_keystore.utils.versioning import (
    VERSION_SCHEMES,
    content_digest,
    get_version_function,
    string_hash_code,
)


class TestStringHashCode:
    """Test the 32-bit string hash code scheme."""

    @pytest.mark.parametrize("value,expected", [
        ("", 0),
        ("a", 97),
        ("abed", 2987136),
        ("hello", 99162322),
    ])
    def test_known_values(self, value, expected):
        assert string_hash_code(value) == expected

    def test_wraps_to_signed_32_bit(self):
        """Overflow wraps around like int32 arithmetic."""
        assert string_hash_code("polygenelubricants") == -2147483648

    def test_hashes_utf16_code_units(self):
        """Characters outside the BMP contribute both surrogates."""
        assert string_hash_code("\U0001F600") == 0xD83D * 31 + 0xDE00

    @pytest.mark.parametrize("value,expected", [
        ("\ud800", 55296),
        ("a\udc80b", 1843203),
    ])
    def test_lone_surrogates(self, value, expected):
        """Unpaired surrogates hash as single code units."""
        assert string_hash_code(value) == expected

    def test_identical_values_share_version(self):
        assert string_hash_code("same value") == string_hash_code("same value")

    def test_distinct_values_can_collide(self):
        """Known collision: the hash code is a fingerprint, not an identity."""
        assert string_hash_code("Aa") == string_hash_code("BB")

    def test_result_fits_in_int32(self):
        for value in ["x" * 1000, "keystore", "éèê"]:
            assert -2**31 <= string_hash_code(value) < 2**31


class TestContentDigest:
    """Test the SHA-256 digest scheme."""

    def test_matches_sha256_prefix(self):
        expected = int.from_bytes(hashlib.sha256(b"hello").digest()[:8], "big", signed=True)
        assert content_digest("hello") == expected

    def test_lone_surrogate(self):
        expected = int.from_bytes(hashlib.sha256(b"\xed\xa0\x80").digest()[:8], "big", signed=True)
        assert content_digest("\ud800") == expected

    def test_resolves_hash_code_collision(self):
        assert content_digest("Aa") != content_digest("BB")

    def test_result_fits_in_int64(self):
        for value in ["", "Aa", "\U0001F600"]:
            assert -2**63 <= content_digest(value) < 2**63


class TestGetVersionFunction:
    """Test scheme lookup."""

    def test_default_scheme_is_hash_code(self):
        assert get_version_function() is string_hash_code

    def test_lookup_by_name(self):
        assert get_version_function("digest") is content_digest
        assert set(VERSION_SCHEMES) == {"hashcode", "digest"}

    def test_unknown_scheme(self):
        with pytest.raises(ValidationError, match="Unknown version scheme 'crc'"):
            get_version_function("crc")
