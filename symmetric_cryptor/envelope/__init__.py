# Envelope Format Module
"""
Wire layout of the version 3 envelope:
    [version | options | encryption_salt | mac_salt | iv | ciphertext | tag]

Fixed offsets, no length prefixes, base64 text at the boundary.
"""

from .envelope_format import (
    EnvelopeHeader,
    ParsedEnvelope,
    encode_header,
    encode_envelope,
    decode_envelope,
    encode_base64,
    decode_base64,
)

__all__ = [
    'EnvelopeHeader',
    'ParsedEnvelope',
    'encode_header',
    'encode_envelope',
    'decode_envelope',
    'encode_base64',
    'decode_base64',
]
