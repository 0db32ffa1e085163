# Core Cryptography Module
"""
Primitive wrappers used by the envelope format:
- PBKDF2-HMAC-SHA1 key derivation
- HMAC-SHA256 authentication tag
"""

from .key_derivation import derive_key, derive_key_pair, password_bytes
from .authenticator import compute_tag, verify_tag

__all__ = [
    'derive_key',
    'derive_key_pair',
    'password_bytes',
    'compute_tag',
    'verify_tag',
]
