"""
Cryptor Configuration

Fixed parameters of the version 3 password-based envelope format.

Format:
    [version | options | encryption_salt | mac_salt | iv | ciphertext | tag]

Every compliant implementation uses exactly these values. They are grouped
in an immutable CryptorConfig built once at import time; nothing in the
package mutates it.
"""

import hashlib
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import algorithms


# Constants
FORMAT_VERSION = 3
OPTIONS = 1                 # Password-based envelope
SALT_SIZE = 8               # 64-bit salts
BLOCK_SIZE = algorithms.AES.block_size // 8
IV_SIZE = BLOCK_SIZE        # AES block size
KEY_SIZE = 32               # AES-256 / HMAC key
HMAC_SIZE = 32              # HMAC-SHA256 output

# PBKDF2 configuration
PBKDF2_ITERATIONS = 10_000
PBKDF2_HASH = "sha1"        # PRF used by every v3 implementation
HMAC_HASH = "sha256"

PBKDF2_HASH_ALGORITHMS = {
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
}

CIPHER_NAME = "aes-256-cbc"

# Header size calculation
HEADER_SIZE = (
    1 +    # Version
    1 +    # Options
    8 +    # Encryption salt
    8 +    # MAC salt
    16     # IV
)  # Total: 34 bytes

MIN_ENVELOPE_SIZE = HEADER_SIZE + HMAC_SIZE  # 66 bytes


@dataclass(frozen=True)
class CryptorConfig:
    """Immutable set of algorithm identifiers and field sizes."""
    version: int = FORMAT_VERSION
    options: int = OPTIONS
    cipher: str = CIPHER_NAME
    salt_length: int = SALT_SIZE
    iv_length: int = IV_SIZE
    block_size: int = BLOCK_SIZE
    key_length: int = KEY_SIZE
    pbkdf2_iterations: int = PBKDF2_ITERATIONS
    pbkdf2_hash: str = PBKDF2_HASH
    hmac_hash: str = HMAC_HASH
    hmac_length: int = HMAC_SIZE

    def __post_init__(self):
        if not 0 <= self.version <= 0xFF or not 0 <= self.options <= 0xFF:
            raise ValueError("Version and options must each fit in one byte")
        if self.salt_length < SALT_SIZE:
            raise ValueError(f"Salt length must be at least {SALT_SIZE} bytes")
        if self.block_size != BLOCK_SIZE or self.iv_length != BLOCK_SIZE:
            raise ValueError(
                f"Block size and IV length must equal the AES block size ({BLOCK_SIZE})"
            )
        if self.key_length != KEY_SIZE:
            raise ValueError(f"Key length must be {KEY_SIZE} bytes")
        if self.pbkdf2_iterations < 1:
            raise ValueError("PBKDF2 iterations must be positive")
        if self.pbkdf2_hash not in PBKDF2_HASH_ALGORITHMS:
            raise ValueError(f"Unsupported PBKDF2 hash {self.pbkdf2_hash!r}")

        try:
            digest_size = hashlib.new(self.hmac_hash).digest_size
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Unsupported HMAC hash {self.hmac_hash!r}") from exc
        if digest_size != self.hmac_length:
            raise ValueError(
                f"HMAC length {self.hmac_length} does not match "
                f"{self.hmac_hash} digest size {digest_size}"
            )

    @property
    def header_length(self) -> int:
        """Size of version, options, both salts and IV."""
        return 1 + 1 + 2 * self.salt_length + self.iv_length

    @property
    def min_envelope_length(self) -> int:
        """Smallest structurally valid envelope (empty ciphertext)."""
        return self.header_length + self.hmac_length


DEFAULT_CONFIG = CryptorConfig()
