"""
Decryptor Module

Opens a version 3 envelope:

    DECODED -> HEADER_PARSED -> AUTHENTICATED -> DECRYPTED

Any failed transition is terminal. The tag is verified BEFORE the
cipher key is derived or any ciphertext is decrypted, and no partial
plaintext is ever returned.
"""

import logging
from enum import Enum
from typing import Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend

from ..config import CryptorConfig, DEFAULT_CONFIG
from ..core_crypto.authenticator import verify_tag
from ..core_crypto.key_derivation import derive_key
from ..envelope.envelope_format import decode_envelope, decode_base64
from ..errors import IntegrityError, DecryptionError


logger = logging.getLogger(__name__)


class DecryptionStage(Enum):
    """Stages reached while opening an envelope."""
    DECODED = "decoded"
    HEADER_PARSED = "header_parsed"
    AUTHENTICATED = "authenticated"
    DECRYPTED = "decrypted"


def cbc_decrypt(cipher_text: bytes, key: bytes, iv: bytes,
                block_size: int = 16) -> bytes:
    """
    AES-CBC decrypt and strip PKCS#7 padding.

    Raises:
        DecryptionError: If the data is not block aligned or the
            padding is invalid
    """
    decryptor = Cipher(
        algorithms.AES(key), modes.CBC(iv), backend=default_backend()
    ).decryptor()
    unpadder = padding.PKCS7(block_size * 8).unpadder()
    try:
        padded = decryptor.update(cipher_text) + decryptor.finalize()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise DecryptionError("Invalid ciphertext padding") from exc


class Decryptor:
    """
    Password-based envelope decryptor.

    Example:
        >>> Decryptor().decrypt(token, "hunter2")
        b'Hello, World!'
    """

    def __init__(self, config: CryptorConfig = DEFAULT_CONFIG):
        self._config = config

    @property
    def config(self) -> CryptorConfig:
        return self._config

    def decrypt_bytes(self, data: bytes, password: Union[str, bytes]) -> bytes:
        """
        Decrypt raw envelope bytes.

        Args:
            data: header | ciphertext | tag
            password: Password (str is UTF-8 encoded)

        Returns:
            Plaintext bytes

        Raises:
            MalformedEnvelopeError: If the envelope is truncated or misaligned
            UnsupportedVersionError: If the version byte is unknown
            IntegrityError: If the tag does not match
            DecryptionError: If the padding is invalid
        """
        config = self._config

        envelope = decode_envelope(data, config)
        self._log_stage(DecryptionStage.HEADER_PARSED)

        mac_key = derive_key(password, envelope.header.mac_salt, config)
        if not verify_tag(envelope, mac_key, config):
            logger.warning("Envelope authentication failed")
            raise IntegrityError()
        self._log_stage(DecryptionStage.AUTHENTICATED)

        cipher_key = derive_key(password, envelope.header.encryption_salt, config)
        plaintext = cbc_decrypt(
            envelope.cipher_text, cipher_key, envelope.header.iv, config.block_size
        )
        self._log_stage(DecryptionStage.DECRYPTED)
        return plaintext

    def decrypt(self, encoded: Union[str, bytes],
                password: Union[str, bytes]) -> bytes:
        """
        Decrypt a base64 envelope.

        Raises:
            MalformedEnvelopeError: If the text is not valid base64 or
                the envelope is truncated
            UnsupportedVersionError: If the version byte is unknown
            IntegrityError: If the tag does not match
            DecryptionError: If the padding is invalid
        """
        data = decode_base64(encoded)
        self._log_stage(DecryptionStage.DECODED)
        return self.decrypt_bytes(data, password)

    @staticmethod
    def _log_stage(stage: DecryptionStage) -> None:
        logger.debug("Decryption stage: %s", stage.value)
