"""
Key Derivation Module

PBKDF2 key derivation for the envelope format:
- HMAC-SHA1 pseudo-random function
- 10,000 iterations
- 32-byte output (AES-256 key or HMAC-SHA256 key)

The cipher key and the MAC key are derived independently from the
same password using two different salts.
"""

import logging
from typing import Tuple, Union

from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.backends import default_backend

from ..config import CryptorConfig, DEFAULT_CONFIG, PBKDF2_HASH_ALGORITHMS


logger = logging.getLogger(__name__)


def password_bytes(password: Union[str, bytes]) -> bytes:
    """Encode a text password as UTF-8; pass bytes through unchanged."""
    if isinstance(password, str):
        return password.encode('utf-8')
    if isinstance(password, (bytes, bytearray, memoryview)):
        return bytes(password)
    raise TypeError(f"Password must be str or bytes, not {type(password).__name__}")


def derive_key(password: Union[str, bytes], salt: bytes,
               config: CryptorConfig = DEFAULT_CONFIG) -> bytes:
    """
    Derive a symmetric key from a password using PBKDF2.

    Args:
        password: Password (str is UTF-8 encoded)
        salt: Salt of at least config.salt_length bytes
        config: Cryptor configuration

    Returns:
        config.key_length byte derived key

    Raises:
        ValueError: If the salt is shorter than config.salt_length
    """
    if len(salt) < config.salt_length:
        raise ValueError(
            f"Salt must be at least {config.salt_length} bytes, got {len(salt)}"
        )

    kdf = PBKDF2HMAC(
        algorithm=PBKDF2_HASH_ALGORITHMS[config.pbkdf2_hash](),
        length=config.key_length,
        salt=bytes(salt),
        iterations=config.pbkdf2_iterations,
        backend=default_backend()
    )
    return kdf.derive(password_bytes(password))


def derive_key_pair(password: Union[str, bytes], encryption_salt: bytes,
                    mac_salt: bytes,
                    config: CryptorConfig = DEFAULT_CONFIG) -> Tuple[bytes, bytes]:
    """
    Derive the (cipher_key, mac_key) pair for one envelope.

    Returns:
        Tuple of (cipher_key, mac_key)
    """
    logger.debug("Deriving key pair (%d PBKDF2 iterations each)",
                 config.pbkdf2_iterations)
    cipher_key = derive_key(password, encryption_salt, config)
    mac_key = derive_key(password, mac_salt, config)
    return cipher_key, mac_key
