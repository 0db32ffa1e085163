"""
String Cryptor Module

Password-bound front end over Encryptor and Decryptor.

Plaintext crosses the text boundary here only: encrypt_string() takes
UTF-8 text, decrypt_string() returns it. Everything below works on bytes.
"""

import logging
from typing import Union

from ..config import CryptorConfig, DEFAULT_CONFIG
from ..envelope.envelope_format import decode_envelope, decode_base64
from ..errors import DecryptionError
from .encryptor import Encryptor
from .decryptor import Decryptor


logger = logging.getLogger(__name__)


class StringCryptor:
    """
    Encrypts and decrypts messages under one password.

    Example:
        >>> cryptor = StringCryptor("correct horse battery staple")
        >>> token = cryptor.encrypt_string("Hello, World!")
        >>> cryptor.decrypt_string(token)
        'Hello, World!'
    """

    def __init__(self, password: Union[str, bytes],
                 config: CryptorConfig = DEFAULT_CONFIG):
        """
        Initialize with password.

        Args:
            password: Password (str is UTF-8 encoded)
            config: Cryptor configuration
        """
        self._password = password
        self._encryptor = Encryptor(config)
        self._decryptor = Decryptor(config)

    def encrypt(self, plaintext: bytes) -> str:
        """Encrypt bytes into a base64 envelope."""
        return self._encryptor.encrypt(plaintext, self._password)

    def decrypt(self, encoded: Union[str, bytes]) -> bytes:
        """Decrypt a base64 envelope into bytes."""
        return self._decryptor.decrypt(encoded, self._password)

    def encrypt_string(self, text: str) -> str:
        """Encrypt UTF-8 text into a base64 envelope."""
        return self.encrypt(text.encode('utf-8'))

    def decrypt_string(self, encoded: Union[str, bytes]) -> str:
        """
        Decrypt a base64 envelope into UTF-8 text.

        Raises:
            DecryptionError: If the authenticated plaintext is not UTF-8
        """
        plaintext = self.decrypt(encoded)
        try:
            return plaintext.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise DecryptionError("Plaintext is not valid UTF-8") from exc


def encrypt(plaintext: bytes, password: Union[str, bytes], **kwargs) -> str:
    """Convenience function for message encryption."""
    return Encryptor(**kwargs).encrypt(plaintext, password)


def decrypt(encoded: Union[str, bytes], password: Union[str, bytes],
            **kwargs) -> bytes:
    """Convenience function for message decryption."""
    return Decryptor(**kwargs).decrypt(encoded, password)


def encrypt_string(text: str, password: Union[str, bytes], **kwargs) -> str:
    """Convenience function for UTF-8 text encryption."""
    return StringCryptor(password, **kwargs).encrypt_string(text)


def decrypt_string(encoded: Union[str, bytes], password: Union[str, bytes],
                   **kwargs) -> str:
    """Convenience function for UTF-8 text decryption."""
    return StringCryptor(password, **kwargs).decrypt_string(encoded)


def get_envelope_info(encoded: Union[str, bytes],
                      config: CryptorConfig = DEFAULT_CONFIG) -> dict:
    """
    Get information about an envelope without decrypting.

    Args:
        encoded: Base64 envelope

    Returns:
        Dict with envelope metadata

    Raises:
        MalformedEnvelopeError: If the envelope cannot be parsed
        UnsupportedVersionError: If the version byte is unknown
    """
    envelope = decode_envelope(decode_base64(encoded), config)
    header = envelope.header

    return {
        'version': header.version,
        'options': header.options,
        'encryption_salt': header.encryption_salt.hex(),
        'mac_salt': header.mac_salt.hex(),
        'iv': header.iv.hex(),
        'ciphertext_size': len(envelope.cipher_text),
        'tag_size': len(envelope.tag),
        'envelope_size': envelope.total_length,
    }
