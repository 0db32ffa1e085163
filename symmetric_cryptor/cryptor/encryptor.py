"""
Encryptor Module

Builds a version 3 envelope from plaintext and password:
- Random encryption salt, MAC salt and IV per message
- Two independent PBKDF2 keys (cipher key, MAC key)
- AES-256-CBC with PKCS#7 padding
- HMAC-SHA256 over header + ciphertext, appended as the tag
"""

import logging
import secrets
from typing import Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend

from ..config import CryptorConfig, DEFAULT_CONFIG
from ..core_crypto.authenticator import compute_tag
from ..core_crypto.key_derivation import derive_key_pair
from ..envelope.envelope_format import EnvelopeHeader, encode_envelope, encode_base64
from ..errors import EntropyError


logger = logging.getLogger(__name__)


def random_bytes(length: int) -> bytes:
    """
    Read bytes from the OS CSPRNG.

    Raises:
        EntropyError: If the random source is unavailable
    """
    try:
        return secrets.token_bytes(length)
    except (OSError, NotImplementedError) as exc:
        raise EntropyError("Random source unavailable") from exc


def cbc_encrypt(plaintext: bytes, key: bytes, iv: bytes,
                block_size: int = 16) -> bytes:
    """AES-CBC encrypt with PKCS#7 padding. Output is always block aligned."""
    padder = padding.PKCS7(block_size * 8).padder()
    padded = padder.update(plaintext) + padder.finalize()

    encryptor = Cipher(
        algorithms.AES(key), modes.CBC(iv), backend=default_backend()
    ).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


class Encryptor:
    """
    Password-based envelope encryptor.

    Stateless apart from its read-only configuration, so one instance
    can be shared between threads.

    Example:
        >>> token = Encryptor().encrypt(b"Hello, World!", "hunter2")
    """

    def __init__(self, config: CryptorConfig = DEFAULT_CONFIG):
        self._config = config

    @property
    def config(self) -> CryptorConfig:
        return self._config

    def encrypt_to_bytes(self, plaintext: bytes,
                         password: Union[str, bytes]) -> bytes:
        """
        Encrypt plaintext into raw envelope bytes.

        Args:
            plaintext: Message bytes (may be empty)
            password: Password (str is UTF-8 encoded)

        Returns:
            header | ciphertext | tag

        Raises:
            TypeError: If plaintext is not bytes
            EntropyError: If salts or IV cannot be generated
        """
        if not isinstance(plaintext, (bytes, bytearray, memoryview)):
            raise TypeError(f"Plaintext must be bytes, not {type(plaintext).__name__}")
        plaintext = bytes(plaintext)
        config = self._config

        encryption_salt = random_bytes(config.salt_length)
        mac_salt = random_bytes(config.salt_length)
        iv = random_bytes(config.iv_length)

        cipher_key, mac_key = derive_key_pair(
            password, encryption_salt, mac_salt, config
        )

        cipher_text = cbc_encrypt(plaintext, cipher_key, iv, config.block_size)

        header = EnvelopeHeader(
            version=config.version,
            options=config.options,
            encryption_salt=encryption_salt,
            mac_salt=mac_salt,
            iv=iv
        )
        tag = compute_tag(header.to_bytes(), cipher_text, mac_key, config)
        envelope = encode_envelope(header, cipher_text, tag, config)

        logger.debug("Encrypted %d plaintext bytes into %d-byte envelope",
                     len(plaintext), len(envelope))
        return envelope

    def encrypt(self, plaintext: bytes, password: Union[str, bytes]) -> str:
        """
        Encrypt plaintext and return the envelope as base64 text.

        Raises:
            EntropyError: If salts or IV cannot be generated
        """
        return encode_base64(self.encrypt_to_bytes(plaintext, password))
