"""
Symmetric Cryptor - Command Line Entry Point

Commands:
  encrypt      Encrypt a message (--message, --in FILE or stdin) to base64
  decrypt      Decrypt a base64 envelope (argument or stdin)
  info         Show envelope header fields without decrypting

The password comes from --password or an interactive prompt.
"""

import argparse
import getpass
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .cryptor import Encryptor, Decryptor, get_envelope_info
from .errors import CryptorError, DecryptionError


def _read_password(args: argparse.Namespace) -> str:
    if args.password is not None:
        return args.password
    return getpass.getpass("Password: ")


def _read_envelope(args: argparse.Namespace) -> str:
    if args.envelope is not None:
        return args.envelope
    return sys.stdin.read()


def cmd_encrypt(args: argparse.Namespace) -> None:
    if args.message is not None:
        plaintext = args.message.encode("utf-8")
    elif args.input is not None:
        plaintext = Path(args.input).read_bytes()
    else:
        plaintext = sys.stdin.buffer.read()

    token = Encryptor().encrypt(plaintext, _read_password(args))
    print(token)


def cmd_decrypt(args: argparse.Namespace) -> None:
    plaintext = Decryptor().decrypt(_read_envelope(args), _read_password(args))

    if args.out is not None:
        Path(args.out).write_bytes(plaintext)
        print(f"[+] Decrypted {len(plaintext)} bytes -> {args.out}")
        return

    try:
        print(plaintext.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise DecryptionError("Plaintext is not UTF-8 text; use --out") from exc


def cmd_info(args: argparse.Namespace) -> None:
    info = get_envelope_info(_read_envelope(args))
    for key, value in info.items():
        print(f"{key}\t{value}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="symmetric-cryptor",
        description="Password-based encrypted message envelopes (format v3)"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_enc = sub.add_parser("encrypt", help="Encrypt a message")
    src = p_enc.add_mutually_exclusive_group()
    src.add_argument("-m", "--message", help="Plaintext message (UTF-8)")
    src.add_argument("-i", "--in", dest="input", help="Read plaintext bytes from file")
    p_enc.add_argument("-p", "--password", help="Password (prompted if omitted)")
    p_enc.set_defaults(func=cmd_encrypt)

    p_dec = sub.add_parser("decrypt", help="Decrypt a base64 envelope")
    p_dec.add_argument("envelope", nargs="?", help="Base64 envelope (stdin if omitted)")
    p_dec.add_argument("-p", "--password", help="Password (prompted if omitted)")
    p_dec.add_argument("-o", "--out", help="Write plaintext bytes to file")
    p_dec.set_defaults(func=cmd_decrypt)

    p_info = sub.add_parser("info", help="Show envelope header fields")
    p_info.add_argument("envelope", nargs="?", help="Base64 envelope (stdin if omitted)")
    p_info.set_defaults(func=cmd_info)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for Symmetric Cryptor."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except (CryptorError, OSError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
