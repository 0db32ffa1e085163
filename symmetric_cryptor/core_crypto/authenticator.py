"""
Authenticator Module

HMAC-SHA256 tag over the envelope header and ciphertext.

Security considerations:
- Tag covers version, options, both salts, IV and ciphertext
- Tag is verified BEFORE any decryption
- Constant-time comparison (hmac.compare_digest)
"""

import hmac
import logging

from ..config import CryptorConfig, DEFAULT_CONFIG


logger = logging.getLogger(__name__)


def compute_tag(header_bytes: bytes, cipher_text: bytes, mac_key: bytes,
                config: CryptorConfig = DEFAULT_CONFIG) -> bytes:
    """
    Compute the authentication tag.

    Args:
        header_bytes: Encoded header (version, options, salts, IV)
        cipher_text: Encrypted payload
        mac_key: Key derived from the MAC salt
        config: Cryptor configuration

    Returns:
        32-byte HMAC-SHA256 tag
    """
    mac = hmac.new(mac_key, digestmod=config.hmac_hash)
    mac.update(header_bytes)
    mac.update(cipher_text)
    return mac.digest()


def verify_tag(envelope, mac_key: bytes,
               config: CryptorConfig = DEFAULT_CONFIG) -> bool:
    """
    Recompute the tag of a parsed envelope and compare in constant time.

    Args:
        envelope: ParsedEnvelope from decode_envelope()
        mac_key: Key derived from the envelope's MAC salt

    Returns:
        True if the stored tag matches
    """
    expected = compute_tag(envelope.header_bytes(), envelope.cipher_text,
                           mac_key, config)
    is_valid = hmac.compare_digest(expected, envelope.tag)
    if not is_valid:
        logger.debug("Tag mismatch over %d ciphertext bytes", len(envelope.cipher_text))
    return is_valid
