"""
Envelope Format Module

Binary layout of the version 3 password-based envelope.

Envelope Format:
    [header | ciphertext | tag]

Header:
    - Version (1): 0x03
    - Options (1): 0x01, opaque
    - Encryption salt (8): PBKDF2 salt for the cipher key
    - MAC salt (8): PBKDF2 salt for the HMAC key
    - IV (16): AES-CBC initialization vector

Ciphertext has no length prefix: it is everything between the 34-byte
header and the trailing 32-byte tag. The whole byte sequence is
exchanged as base64 text.
"""

import base64
import binascii
import logging
import struct
from dataclasses import dataclass
from typing import Union

from ..config import CryptorConfig, DEFAULT_CONFIG
from ..errors import MalformedEnvelopeError, UnsupportedVersionError


logger = logging.getLogger(__name__)


@dataclass
class EnvelopeHeader:
    """Fixed-size envelope header."""
    version: int
    options: int
    encryption_salt: bytes
    mac_salt: bytes
    iv: bytes

    def validate(self, config: CryptorConfig = DEFAULT_CONFIG) -> None:
        """
        Check field sizes against the configuration.

        Raises:
            ValueError: If a field does not have its fixed size
        """
        if not 0 <= self.version <= 0xFF or not 0 <= self.options <= 0xFF:
            raise ValueError("Version and options must each fit in one byte")
        if len(self.encryption_salt) != config.salt_length:
            raise ValueError(f"Encryption salt must be {config.salt_length} bytes")
        if len(self.mac_salt) != config.salt_length:
            raise ValueError(f"MAC salt must be {config.salt_length} bytes")
        if len(self.iv) != config.iv_length:
            raise ValueError(f"IV must be {config.iv_length} bytes")

    def to_bytes(self) -> bytes:
        """Serialize header to bytes."""
        return (
            struct.pack('BB', self.version, self.options) +
            self.encryption_salt +
            self.mac_salt +
            self.iv
        )

    @classmethod
    def from_bytes(cls, data: bytes,
                   config: CryptorConfig = DEFAULT_CONFIG) -> 'EnvelopeHeader':
        """Deserialize header from bytes. Does not validate the version."""
        offset = 0

        version, options = struct.unpack('BB', data[offset:offset + 2])
        offset += 2

        encryption_salt = data[offset:offset + config.salt_length]
        offset += config.salt_length

        mac_salt = data[offset:offset + config.salt_length]
        offset += config.salt_length

        iv = data[offset:offset + config.iv_length]

        return cls(
            version=version,
            options=options,
            encryption_salt=bytes(encryption_salt),
            mac_salt=bytes(mac_salt),
            iv=bytes(iv)
        )


@dataclass
class ParsedEnvelope:
    """Envelope split into header, ciphertext and tag."""
    header: EnvelopeHeader
    cipher_text: bytes
    tag: bytes

    def header_bytes(self) -> bytes:
        """Header exactly as it appears on the wire."""
        return self.header.to_bytes()

    @property
    def total_length(self) -> int:
        return len(self.header_bytes()) + len(self.cipher_text) + len(self.tag)


def encode_header(header: EnvelopeHeader,
                  config: CryptorConfig = DEFAULT_CONFIG) -> bytes:
    header.validate(config)
    return header.to_bytes()


def encode_envelope(header: EnvelopeHeader, cipher_text: bytes,
                    tag: bytes = b"",
                    config: CryptorConfig = DEFAULT_CONFIG) -> bytes:
    """
    Concatenate header, ciphertext and (optionally) the tag.

    Args:
        header: Envelope header
        cipher_text: Padded AES-CBC ciphertext
        tag: HMAC tag, omitted when computing the tag itself

    Returns:
        Envelope bytes

    Raises:
        ValueError: If a header field does not have its fixed size
    """
    return encode_header(header, config) + cipher_text + tag


def decode_envelope(data: bytes,
                    config: CryptorConfig = DEFAULT_CONFIG) -> ParsedEnvelope:
    """
    Parse envelope bytes into header, ciphertext and tag.

    The length floor is checked first, then the version byte, so an
    unknown version is rejected before any field is interpreted.

    Raises:
        MalformedEnvelopeError: If the data is not bytes, is too short
            or the ciphertext is not block aligned
        UnsupportedVersionError: If the version byte is not supported
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise MalformedEnvelopeError(
            f"Envelope must be bytes, not {type(data).__name__}"
        )
    data = bytes(data)

    total_length = len(data)
    header_length = config.header_length
    tag_length = config.hmac_length

    if total_length < header_length + tag_length:
        raise MalformedEnvelopeError(
            f"Envelope too short ({total_length} bytes, need >= "
            f"{header_length + tag_length})"
        )

    version = data[0]
    if version != config.version:
        raise UnsupportedVersionError(version)

    header = EnvelopeHeader.from_bytes(data[:header_length], config)
    cipher_text = bytes(data[header_length:total_length - tag_length])
    tag = bytes(data[total_length - tag_length:])

    if len(cipher_text) % config.block_size:
        raise MalformedEnvelopeError(
            f"Ciphertext length {len(cipher_text)} is not a multiple of "
            f"{config.block_size}"
        )

    logger.debug("Parsed envelope: %d bytes, %d ciphertext bytes",
                 total_length, len(cipher_text))
    return ParsedEnvelope(header=header, cipher_text=cipher_text, tag=tag)


def encode_base64(data: bytes) -> str:
    """Standard padded base64 text of envelope bytes."""
    return base64.b64encode(data).decode('ascii')


def decode_base64(encoded: Union[str, bytes]) -> bytes:
    """
    Strictly decode base64 text, ignoring surrounding whitespace.

    Raises:
        MalformedEnvelopeError: If the text is not valid base64
    """
    if isinstance(encoded, str):
        try:
            encoded = encoded.strip().encode('ascii')
        except UnicodeEncodeError as exc:
            raise MalformedEnvelopeError("Envelope is not valid base64") from exc
    elif isinstance(encoded, (bytes, bytearray)):
        encoded = bytes(encoded).strip()
    else:
        raise MalformedEnvelopeError(
            f"Envelope must be str or bytes, not {type(encoded).__name__}"
        )

    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise MalformedEnvelopeError("Envelope is not valid base64") from exc
