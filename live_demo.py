#!/usr/bin/env python
"""
SYMMETRIC CRYPTOR LIVE DEMO

Walks through the version 3 password-based envelope:
- Encrypting a message into a base64 envelope
- Inspecting the header without the password
- Decrypting with the right password
- Rejecting a wrong password
- Detecting a tampered envelope
- Rejecting an unsupported version

Run with --interactive to pause between parts.
"""

import base64
import sys

from symmetric_cryptor import (
    StringCryptor, get_envelope_info,
    IntegrityError, UnsupportedVersionError
)


INTERACTIVE = "--interactive" in sys.argv


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "═" * 70)
    print(f"  {title}")
    print("═" * 70)


def print_step(step_num, description):
    """Print a numbered step"""
    print(f"\n  [{step_num}] {description}")


def pause(message="Press ENTER to continue..."):
    """Pause for presenter to explain"""
    if INTERACTIVE:
        print(f"\n  [PAUSE] {message}")
        input()


def main():
    password = "correct horse battery staple"
    message = "Hello, World!"
    cryptor = StringCryptor(password)

    print_header("PART 1: ENCRYPTION")

    print_step("1.1", f"Encrypting {message!r}")
    token = cryptor.encrypt_string(message)
    print(f"  Envelope: {token}")
    print(f"  Size: {len(base64.b64decode(token))} bytes "
          f"(66 bytes overhead + padded ciphertext)")

    pause()

    print_step("1.2", "Inspecting the header (no password needed)")
    for key, value in get_envelope_info(token).items():
        print(f"  - {key}: {value}")

    pause()

    print_header("PART 2: DECRYPTION")

    print_step("2.1", "Decrypting with the correct password")
    print(f"  Plaintext: {cryptor.decrypt_string(token)!r}")

    print_step("2.2", "Decrypting with a wrong password")
    try:
        StringCryptor("Tr0ub4dor&3").decrypt_string(token)
        print("  [X] Wrong password was accepted!")
    except IntegrityError as e:
        print(f"  [OK] Rejected: {e}")

    pause()

    print_header("PART 3: TAMPERING")

    data = bytearray(base64.b64decode(token))

    print_step("3.1", "Flipping one ciphertext bit")
    tampered = bytearray(data)
    tampered[40] ^= 0x01
    try:
        cryptor.decrypt(base64.b64encode(bytes(tampered)))
        print("  [X] Tampering went unnoticed!")
    except IntegrityError as e:
        print(f"  [OK] Rejected: {e}")

    print_step("3.2", "Changing the version byte to 0x05")
    downgraded = bytearray(data)
    downgraded[0] = 0x05
    try:
        cryptor.decrypt(base64.b64encode(bytes(downgraded)))
        print("  [X] Unknown version was accepted!")
    except UnsupportedVersionError as e:
        print(f"  [OK] Rejected before key derivation: {e}")

    print("\n\n" + "═" * 70)
    print("  DEMONSTRATION COMPLETE!")
    print("═" * 70)


if __name__ == "__main__":
    main()
