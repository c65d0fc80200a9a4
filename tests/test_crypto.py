"""Tests for cloak.crypto — Fernet-backed CookieCipher."""

import time

import pytest

from cloak.crypto import CookieCipher, generate_key
from cloak.errors import ConfigurationError, TamperError


@pytest.fixture
def cipher() -> CookieCipher:
    return CookieCipher(generate_key())


class TestCookieCipherInit:
    def test_accepts_str_and_bytes_key(self) -> None:
        key = generate_key()
        CookieCipher(key)
        CookieCipher(key.encode("ascii"))

    def test_empty_key_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="must not be empty"):
            CookieCipher("")

    def test_malformed_key_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid cookie cipher key"):
            CookieCipher("not-a-fernet-key")

    def test_non_positive_ttl_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="ttl must be positive"):
            CookieCipher(generate_key(), ttl=0)

    def test_generate_key_is_random(self) -> None:
        assert generate_key() != generate_key()


class TestRoundTrip:
    @pytest.mark.parametrize("plaintext", ["value", "", "héllo wörld ✓", "a=b; c=d", "x" * 2000])
    def test_decrypt_recovers_plaintext(self, cipher: CookieCipher, plaintext: str) -> None:
        assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_ciphertext_is_cookie_safe(self, cipher: CookieCipher) -> None:
        token = cipher.encrypt("some value; with=separators")
        assert token.isascii()
        assert ";" not in token
        assert " " not in token
        assert "some value" not in token

    def test_encryption_is_randomized(self, cipher: CookieCipher) -> None:
        assert cipher.encrypt("value") != cipher.encrypt("value")


class TestTamperDetection:
    def test_wrong_key(self, cipher: CookieCipher) -> None:
        token = cipher.encrypt("value")
        other = CookieCipher(generate_key())

        with pytest.raises(TamperError):
            other.decrypt(token)

    def test_modified_token(self, cipher: CookieCipher) -> None:
        token = cipher.encrypt("value")
        flipped = "A" if token[20] != "A" else "B"
        tampered = token[:20] + flipped + token[21:]

        with pytest.raises(TamperError):
            cipher.decrypt(tampered)

    def test_truncated_token(self, cipher: CookieCipher) -> None:
        with pytest.raises(TamperError):
            cipher.decrypt(cipher.encrypt("value")[:-8])

    @pytest.mark.parametrize("garbage", ["not-ciphertext", "", "wrong", "%%%", "ünïcode"])
    def test_malformed_input(self, cipher: CookieCipher, garbage: str) -> None:
        with pytest.raises(TamperError):
            cipher.decrypt(garbage)

    def test_expired_token(self) -> None:
        cipher = CookieCipher(generate_key(), ttl=60)
        token = cipher._fernet.encrypt_at_time(b"value", int(time.time()) - 120).decode("ascii")

        with pytest.raises(TamperError):
            cipher.decrypt(token)

    def test_fresh_token_within_ttl(self) -> None:
        cipher = CookieCipher(generate_key(), ttl=60)
        assert cipher.decrypt(cipher.encrypt("value")) == "value"
