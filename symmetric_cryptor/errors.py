"""Exception hierarchy for the :mod:`symmetric_cryptor` package."""

__all__ = [
    "CryptorError",
    "UnsupportedVersionError",
    "MalformedEnvelopeError",
    "IntegrityError",
    "DecryptionError",
    "EntropyError",
]


class CryptorError(Exception):
    """Base exception for every envelope failure."""


class UnsupportedVersionError(CryptorError):
    """Raised when the envelope version byte is not the supported one."""

    def __init__(self, version: int):
        super().__init__(f"Unsupported envelope version {version:#04x}")
        self.version = version


class MalformedEnvelopeError(CryptorError):
    """Raised for invalid base64, truncated input or inconsistent lengths."""


class IntegrityError(CryptorError):
    """
    Raised when the authentication tag does not match.

    Covers both tampering and a wrong password. Carries no detail
    about which one occurred.
    """

    def __init__(self):
        super().__init__("Integrity check failed - wrong password or tampered data")


class DecryptionError(CryptorError):
    """Raised when the ciphertext cannot be decrypted after authentication."""


class EntropyError(CryptorError):
    """Raised when the random source cannot supply bytes."""
