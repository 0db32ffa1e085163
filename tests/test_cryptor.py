"""
Unit tests for Cryptor module.

Tests:
- Encrypt / decrypt roundtrip
- Envelope length law
- Interoperable layout (independent reconstruction)
- StringCryptor and convenience functions
- Envelope info
"""

import pytest
import base64
import hashlib
import hmac
import os
from unittest.mock import patch

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from symmetric_cryptor import (
    Encryptor, Decryptor, StringCryptor, CryptorConfig, DEFAULT_CONFIG,
    encrypt, decrypt, encrypt_string, decrypt_string, get_envelope_info,
    EntropyError, DecryptionError
)
from symmetric_cryptor.cryptor.encryptor import random_bytes


PASSWORD = "correct horse battery staple"
TOKEN_BYTES = "symmetric_cryptor.cryptor.encryptor.secrets.token_bytes"


class TestRoundtrip:
    """Tests for encrypt -> decrypt."""

    def test_hello_world(self):
        """Example message should roundtrip exactly."""
        token = encrypt(b"Hello, World!", PASSWORD)
        assert decrypt(token, PASSWORD) == b"Hello, World!"

    def test_empty_message(self):
        """Empty plaintext should roundtrip."""
        assert decrypt(encrypt(b"", PASSWORD), PASSWORD) == b""

    @pytest.mark.parametrize("size", [1, 15, 16, 17, 31, 32, 33, 1000])
    def test_various_sizes(self, size):
        """Messages around block boundaries should roundtrip."""
        message = os.urandom(size)
        assert decrypt(encrypt(message, PASSWORD), PASSWORD) == message

    def test_bytes_password(self):
        """Bytes password should work like its UTF-8 str form."""
        token = encrypt(b"data", PASSWORD.encode("utf-8"))
        assert decrypt(token, PASSWORD) == b"data"

    def test_empty_password(self):
        """Empty password is allowed; password policy is out of scope."""
        assert decrypt(encrypt(b"data", ""), "") == b"data"

    def test_output_is_text(self):
        """encrypt should return base64 text."""
        token = encrypt(b"data", PASSWORD)
        assert isinstance(token, str)
        base64.b64decode(token, validate=True)

    def test_random_per_call(self):
        """Two encryptions of the same message should differ."""
        assert encrypt(b"same", PASSWORD) != encrypt(b"same", PASSWORD)

    def test_plaintext_must_be_bytes(self):
        """Non-bytes plaintext is rejected before any key derivation."""
        with patch("symmetric_cryptor.cryptor.encryptor.derive_key_pair") as mock_derive:
            for bad in (16, "text", None):
                with pytest.raises(TypeError):
                    Encryptor().encrypt(bad, PASSWORD)
        mock_derive.assert_not_called()

    def test_bytearray_plaintext(self):
        """bytearray plaintext is accepted."""
        token = encrypt(bytearray(b"mutable"), PASSWORD)
        assert decrypt(token, PASSWORD) == b"mutable"

    def test_decrypt_accepts_bytes_token(self):
        """Envelope may be passed as ASCII bytes."""
        token = encrypt(b"data", PASSWORD)
        assert decrypt(token.encode("ascii"), PASSWORD) == b"data"


class TestLengthLaw:
    """Tests for envelope size."""

    @pytest.mark.parametrize("size", [0, 1, 15, 16, 17, 100])
    def test_length(self, size):
        """Decoded length is 66 + 16 * ceil((len(m) + 1) / 16)."""
        token = encrypt(b"x" * size, PASSWORD)
        expected = 66 + 16 * ((size + 1 + 15) // 16)
        assert len(base64.b64decode(token)) == expected


class TestInteroperability:
    """Tests that the envelope matches an independent construction."""

    def test_layout_matches_reference_construction(self):
        """Envelope bytes should equal a hand-built v3 envelope."""
        enc_salt = bytes(range(8))
        mac_salt = bytes(range(8, 16))
        iv = bytes(range(16, 32))
        plaintext = b"Hello, World!"

        with patch(TOKEN_BYTES, side_effect=[enc_salt, mac_salt, iv]):
            token = encrypt(plaintext, PASSWORD)

        password = PASSWORD.encode("utf-8")
        cipher_key = hashlib.pbkdf2_hmac("sha1", password, enc_salt, 10000, 32)
        mac_key = hashlib.pbkdf2_hmac("sha1", password, mac_salt, 10000, 32)

        padder = padding.PKCS7(128).padder()
        padded = padder.update(plaintext) + padder.finalize()
        enc = Cipher(algorithms.AES(cipher_key), modes.CBC(iv)).encryptor()
        cipher_text = enc.update(padded) + enc.finalize()

        header = b"\x03\x01" + enc_salt + mac_salt + iv
        tag = hmac.new(mac_key, header + cipher_text, hashlib.sha256).digest()

        assert base64.b64decode(token) == header + cipher_text + tag

    def test_decrypts_hand_built_envelope(self):
        """A hand-built v3 envelope should decrypt."""
        enc_salt = os.urandom(8)
        mac_salt = os.urandom(8)
        iv = os.urandom(16)
        password = b"interop"

        cipher_key = hashlib.pbkdf2_hmac("sha1", password, enc_salt, 10000, 32)
        mac_key = hashlib.pbkdf2_hmac("sha1", password, mac_salt, 10000, 32)
        padder = padding.PKCS7(128).padder()
        padded = padder.update(b"from another implementation") + padder.finalize()
        enc = Cipher(algorithms.AES(cipher_key), modes.CBC(iv)).encryptor()
        cipher_text = enc.update(padded) + enc.finalize()
        header = b"\x03\x01" + enc_salt + mac_salt + iv
        tag = hmac.new(mac_key, header + cipher_text, hashlib.sha256).digest()

        token = base64.b64encode(header + cipher_text + tag).decode()
        assert decrypt(token, password) == b"from another implementation"


class TestEntropy:
    """Tests for the random source."""

    def test_random_bytes_length(self):
        """random_bytes should return the requested length."""
        assert len(random_bytes(16)) == 16

    def test_entropy_failure(self):
        """Unavailable random source should raise EntropyError."""
        with patch(TOKEN_BYTES, side_effect=OSError("entropy exhausted")):
            with pytest.raises(EntropyError):
                encrypt(b"data", PASSWORD)

    def test_entropy_failure_chained(self):
        """EntropyError should chain the underlying error."""
        with patch(TOKEN_BYTES, side_effect=NotImplementedError):
            with pytest.raises(EntropyError) as exc_info:
                random_bytes(8)
        assert isinstance(exc_info.value.__cause__, NotImplementedError)


class TestStringCryptor:
    """Tests for StringCryptor class."""

    def test_encrypt_decrypt_string(self):
        """Text roundtrip with UTF-8 characters."""
        cryptor = StringCryptor(PASSWORD)
        token = cryptor.encrypt_string("Grüße, 世界!")
        assert cryptor.decrypt_string(token) == "Grüße, 世界!"

    def test_encrypt_decrypt_bytes(self):
        """Bytes roundtrip through the class."""
        cryptor = StringCryptor(PASSWORD)
        assert cryptor.decrypt(cryptor.encrypt(b"\x00\xff")) == b"\x00\xff"

    def test_non_utf8_plaintext(self):
        """decrypt_string on binary plaintext should raise DecryptionError."""
        cryptor = StringCryptor(PASSWORD)
        token = cryptor.encrypt(b"\xff\xfe\xfd")
        with pytest.raises(DecryptionError):
            cryptor.decrypt_string(token)

    def test_convenience_functions(self):
        """encrypt_string and decrypt_string functions should work."""
        token = encrypt_string("Convenience function test", PASSWORD)
        assert decrypt_string(token, PASSWORD) == "Convenience function test"

    def test_interchangeable_with_encryptor(self):
        """StringCryptor output is a plain envelope."""
        token = StringCryptor(PASSWORD).encrypt_string("shared")
        assert Decryptor().decrypt(token, PASSWORD) == b"shared"


class TestEnvelopeInfo:
    """Tests for get_envelope_info."""

    def test_get_info(self):
        """Should report header fields without the password."""
        enc_salt = b"\x11" * 8
        mac_salt = b"\x22" * 8
        iv = b"\x33" * 16
        with patch(TOKEN_BYTES, side_effect=[enc_salt, mac_salt, iv]):
            token = Encryptor().encrypt(b"test content", PASSWORD)

        info = get_envelope_info(token)

        assert info['version'] == 3
        assert info['options'] == 1
        assert info['encryption_salt'] == enc_salt.hex()
        assert info['mac_salt'] == mac_salt.hex()
        assert info['iv'] == iv.hex()
        assert info['ciphertext_size'] == 16
        assert info['tag_size'] == 32
        assert info['envelope_size'] == 82


class TestConfig:
    """Tests for CryptorConfig."""

    def test_default_values(self):
        """Defaults match the v3 format."""
        assert DEFAULT_CONFIG.version == 3
        assert DEFAULT_CONFIG.options == 1
        assert DEFAULT_CONFIG.salt_length == 8
        assert DEFAULT_CONFIG.iv_length == 16
        assert DEFAULT_CONFIG.pbkdf2_iterations == 10000
        assert DEFAULT_CONFIG.key_length == 32
        assert DEFAULT_CONFIG.hmac_length == 32
        assert DEFAULT_CONFIG.header_length == 34
        assert DEFAULT_CONFIG.min_envelope_length == 66

    def test_immutable(self):
        """Config cannot be mutated."""
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.pbkdf2_iterations = 1

    def test_invalid_values(self):
        """Nonsensical configurations are rejected."""
        with pytest.raises(ValueError):
            CryptorConfig(salt_length=4)
        with pytest.raises(ValueError):
            CryptorConfig(iv_length=12)
        with pytest.raises(ValueError):
            CryptorConfig(key_length=16)
        with pytest.raises(ValueError):
            CryptorConfig(pbkdf2_iterations=0)
        with pytest.raises(ValueError):
            CryptorConfig(version=256)

    def test_block_size_must_be_aes(self):
        """IV and block size are tied to AES, not to each other."""
        with pytest.raises(ValueError):
            CryptorConfig(iv_length=8, block_size=8)
        with pytest.raises(ValueError):
            CryptorConfig(iv_length=32, block_size=32)

    def test_unknown_pbkdf2_hash(self):
        """PBKDF2 hash must be one the key derivation supports."""
        with pytest.raises(ValueError):
            CryptorConfig(pbkdf2_hash="md5")

    def test_unknown_hmac_hash(self):
        """HMAC hash must be a hashlib algorithm."""
        with pytest.raises(ValueError):
            CryptorConfig(hmac_hash="not-a-hash")

    def test_hmac_length_matches_digest(self):
        """Tag length must equal the HMAC digest size."""
        with pytest.raises(ValueError):
            CryptorConfig(hmac_hash="sha512")
        with pytest.raises(ValueError):
            CryptorConfig(hmac_length=16)

    def test_alternate_hashes_roundtrip(self):
        """A consistent non-default hash configuration roundtrips."""
        config = CryptorConfig(pbkdf2_hash="sha256", hmac_hash="sha512",
                               hmac_length=64, pbkdf2_iterations=1000)
        token = Encryptor(config).encrypt(b"data", PASSWORD)
        assert len(base64.b64decode(token)) == 34 + 16 + 64
        assert Decryptor(config).decrypt(token, PASSWORD) == b"data"

    def test_custom_config_roundtrip(self):
        """Encryptor and Decryptor honour a passed configuration."""
        config = CryptorConfig(pbkdf2_iterations=1000)
        token = Encryptor(config).encrypt(b"data", PASSWORD)
        assert Decryptor(config).decrypt(token, PASSWORD) == b"data"
        assert decrypt(token, PASSWORD, config=config) == b"data"
