#!/usr/bin/env python3
"""
cipher_cli.py: Command-line interface for the AES-GCM text/file helpers.

Usage:
  Encrypt text (prints base64):
    python cipher_cli.py encrypt -p "myKey123" -m "Hello World!"

  Decrypt text:
    python cipher_cli.py decrypt -p "myKey123" -m "<base64>"

  Encrypt a file in place / into another file:
    python cipher_cli.py encrypt -p 12345678 -i test1.txt
    python cipher_cli.py encrypt -p 12345678 -i report.pdf -o report.pdf.enc

  Decrypt a file in place / into another file:
    python cipher_cli.py decrypt -p 12345678 -i test1.txt
    python cipher_cli.py decrypt -p 12345678 -i report.pdf.enc -o report.pdf
"""

import os
import sys
import logging
import argparse
import traceback

import file_codec
import text_codec
from cipher_errors import (
    AuthenticationError,
    EncodingError,
    FileIOError,
    KeyDerivationError,
    MalformedInputError,
    CipherError,
)

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_KEY = 3
EXIT_AUTH = 4
EXIT_IO = 5


def _exit_code_for(err: Exception) -> int:
    if isinstance(err, (AuthenticationError, MalformedInputError)):
        return EXIT_AUTH
    if isinstance(err, (KeyDerivationError, EncodingError)):
        return EXIT_KEY
    if isinstance(err, FileNotFoundError):
        return EXIT_USAGE
    if isinstance(err, FileIOError):
        return EXIT_IO
    return EXIT_KEY


def _run_text(args: argparse.Namespace) -> int:
    if args.cmd == "encrypt":
        result = text_codec.encrypt(args.message, args.password)
    else:
        result = text_codec.decrypt(args.message, args.password)
    print(result)
    if args.verbose:
        print(f"[ok] {args.cmd.capitalize()}ed message.", file=sys.stderr)
    return EXIT_OK


def _run_file(args: argparse.Namespace) -> int:
    if not os.path.exists(args.in_path):
        print(f"[error] Input not found: {args.in_path}", file=sys.stderr)
        return EXIT_USAGE

    if args.out_path:
        if args.verbose:
            print(f"[info] {args.cmd.capitalize()}ing {args.in_path} → {args.out_path}", file=sys.stderr)
        op = file_codec.encrypt_file_to if args.cmd == "encrypt" else file_codec.decrypt_file_to
        op(args.in_path, args.out_path, args.password)
    else:
        if args.verbose:
            print(f"[info] {args.cmd.capitalize()}ing {args.in_path} in place", file=sys.stderr)
        op = file_codec.encrypt_file if args.cmd == "encrypt" else file_codec.decrypt_file
        op(args.in_path, args.password)

    if args.verbose:
        print(f"[ok] {args.cmd.capitalize()} complete.", file=sys.stderr)
    return EXIT_OK


def run(args: argparse.Namespace) -> int:
    if args.out_path and args.message is not None:
        print("[error] --out only applies to --in", file=sys.stderr)
        return EXIT_USAGE

    try:
        if args.message is not None:
            return _run_text(args)
        return _run_file(args)
    except (CipherError, OSError) as e:
        if isinstance(e, AuthenticationError):
            print(f"[error] {args.cmd.capitalize()} failed: wrong password or corrupted data", file=sys.stderr)
        else:
            print(f"[error] {args.cmd.capitalize()} failed: {e}", file=sys.stderr)
        if args.verbose: traceback.print_exc()
        return _exit_code_for(e)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="AES-GCM passphrase encryption for text and files")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common flags helper
    def add_common(cmd_parser: argparse.ArgumentParser, is_encrypt: bool):
        cmd_parser.add_argument("-p", "--password", dest="password", required=True, help="Passphrase for encryption/decryption")
        src = cmd_parser.add_mutually_exclusive_group(required=True)
        if is_encrypt:
            src.add_argument("-m", "--message", help="Inline text to encrypt (prints base64)")
        else:
            src.add_argument("-m", "--message", help="Base64 text to decrypt (prints plaintext)")
        src.add_argument("-i", "--in", dest="in_path", help="File to process (in place unless --out is given)")
        cmd_parser.add_argument("-o", "--out", dest="out_path", help="Write the result here instead of overwriting --in")
        cmd_parser.add_argument("--verbose", action="store_true", help="Verbose status output")

    pe = sub.add_parser("encrypt", help="Encrypt a message or file")
    add_common(pe, is_encrypt=True)

    pd = sub.add_parser("decrypt", help="Decrypt a message or file")
    add_common(pd, is_encrypt=False)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[debug] %(name)s: %(message)s")

    if args.cmd in ("encrypt", "decrypt"):
        return run(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
