# file_codec.py
"""
Whole-file encryption on top of CipherContext.

Files are read fully into memory and written back in one go. Same-path mode
overwrites the file directly: there is no backup and no atomic replace, and
concurrent calls on one path race (last writer wins).
"""
import logging
import os
from typing import Optional

from cipher_errors import FileIOError
from crypto_utils import CipherContext
from key_utils import KeyDeriver, Passphrase

log = logging.getLogger(__name__)


def _require_file(path, action: str):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Can't {action}, file '{path}' does not exist")


def _read(path) -> bytes:
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as e:
        raise FileIOError(f"Could not read '{path}': {e}") from e


def _write(path, data: bytes):
    try:
        with open(path, "wb") as fh:
            fh.write(data)
    except OSError as e:
        raise FileIOError(f"Could not write '{path}': {e}") from e


def _transform(src, dst, passphrase, deriver, action: str):
    _require_file(src, action)
    ctx = CipherContext.from_passphrase(passphrase, deriver)
    data = _read(src)
    out = ctx.seal(data) if action == "encrypt" else ctx.open(data)
    _write(dst, out)
    log.debug("%s: %s (%d bytes) -> %s (%d bytes)", action, src, len(data), dst, len(out))


def encrypt_file(path, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None):
    """Encrypt the file at path in place."""
    _transform(path, path, passphrase, deriver, "encrypt")


def decrypt_file(path, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None):
    """Decrypt the file at path in place. On any failure the file is not written."""
    _transform(path, path, passphrase, deriver, "decrypt")


def encrypt_file_to(src, dst, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None):
    _transform(src, dst, passphrase, deriver, "encrypt")


def decrypt_file_to(src, dst, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None):
    _transform(src, dst, passphrase, deriver, "decrypt")


def encrypt_to_file(data: bytes, path, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None):
    """Seal data and write it to path, creating or truncating the file."""
    sealed = CipherContext.from_passphrase(passphrase, deriver).seal(data)
    _write(path, sealed)
    log.debug("encrypt: %d bytes -> %s", len(data), path)


def decrypt_from_file(path, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None) -> bytes:
    """Open the sealed content of path and return the plaintext; path is left as is."""
    _require_file(path, "decrypt")
    ctx = CipherContext.from_passphrase(passphrase, deriver)
    return ctx.open(_read(path))
