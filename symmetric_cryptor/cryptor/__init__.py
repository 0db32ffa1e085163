# Cryptor Module
"""
Password-based encryption of messages into version 3 envelopes:
- PBKDF2 key derivation (10,000 iterations, separate cipher and MAC keys)
- AES-256-CBC with PKCS#7 padding
- HMAC-SHA256 over header + ciphertext, verified BEFORE decryption
- Base64 text output
"""

from .encryptor import Encryptor, random_bytes, cbc_encrypt
from .decryptor import Decryptor, DecryptionStage, cbc_decrypt
from .string_cryptor import (
    StringCryptor,
    encrypt,
    decrypt,
    encrypt_string,
    decrypt_string,
    get_envelope_info,
)

__all__ = [
    'Encryptor',
    'Decryptor',
    'DecryptionStage',
    'StringCryptor',
    'encrypt',
    'decrypt',
    'encrypt_string',
    'decrypt_string',
    'get_envelope_info',
    'random_bytes',
    'cbc_encrypt',
    'cbc_decrypt',
]
