# Symmetric Cryptor
"""
Password-based encrypted message envelopes (format version 3).

    [version | options | encryption_salt | mac_salt | iv | ciphertext | tag]

Interoperable with other implementations of the same format:
PBKDF2-HMAC-SHA1 (10,000 iterations), AES-256-CBC, HMAC-SHA256,
base64 text.
"""

from .config import CryptorConfig, DEFAULT_CONFIG
from .errors import (
    CryptorError,
    UnsupportedVersionError,
    MalformedEnvelopeError,
    IntegrityError,
    DecryptionError,
    EntropyError,
)
from .cryptor import (
    Encryptor,
    Decryptor,
    StringCryptor,
    encrypt,
    decrypt,
    encrypt_string,
    decrypt_string,
    get_envelope_info,
)

__version__ = "3.0.0"

__all__ = [
    'CryptorConfig',
    'DEFAULT_CONFIG',
    'CryptorError',
    'UnsupportedVersionError',
    'MalformedEnvelopeError',
    'IntegrityError',
    'DecryptionError',
    'EntropyError',
    'Encryptor',
    'Decryptor',
    'StringCryptor',
    'encrypt',
    'decrypt',
    'encrypt_string',
    'decrypt_string',
    'get_envelope_info',
]
