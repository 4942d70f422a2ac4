# key_utils.py
import logging
from typing import Callable, Optional, Union

from Crypto.Protocol.KDF import PBKDF2
from Crypto.Hash import SHA256

from cipher_errors import KeyDerivationError

log = logging.getLogger(__name__)

KEY_LEN = 32
VALID_KEY_LENS = (16, 24, 32)
KDF_ITERS = 100_000
KDF_SALT_LEN = 16
KDF_CONTEXT = b"cipherutils/key-scrambler/v1"

Passphrase = Union[str, bytes, bytearray, memoryview]
KeyDeriver = Callable[[Passphrase], bytes]


def _passphrase_bytes(passphrase: Passphrase) -> bytes:
    if isinstance(passphrase, str):
        try:
            return passphrase.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError as e:
            raise KeyDerivationError(f"Passphrase is not encodable as UTF-8: {e.reason}") from e
    if isinstance(passphrase, (bytes, bytearray, memoryview)):
        return bytes(passphrase)
    raise KeyDerivationError(f"Passphrase must be str or bytes, not {type(passphrase).__name__}")


def derive_key(passphrase: Passphrase, key_len: int = KEY_LEN) -> bytes:
    """
    Scramble an arbitrary passphrase (any length, empty included) into a
    key_len-byte AES key.

    Pure function of its input: the PBKDF2 salt is a digest of KDF_CONTEXT and
    the passphrase itself, so the same passphrase yields the same key in every
    process. Short passphrases stay weak; nothing here enforces a minimum.
    """
    if key_len not in VALID_KEY_LENS:
        raise KeyDerivationError(f"Unsupported key length {key_len}; expected one of {VALID_KEY_LENS}")
    pw = _passphrase_bytes(passphrase)
    salt = SHA256.new(KDF_CONTEXT + pw).digest()[:KDF_SALT_LEN]
    return PBKDF2(pw, salt, dkLen=key_len, count=KDF_ITERS, hmac_hash_module=SHA256)


def resolve_key(passphrase: Passphrase, deriver: Optional[KeyDeriver] = None) -> bytes:
    """Run deriver (default: derive_key) and check it handed back bytes."""
    deriver = deriver or derive_key
    key = deriver(passphrase)
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise KeyDerivationError(f"Key deriver returned {type(key).__name__}, expected bytes")
    key = bytes(key)
    log.debug("Derived %d-byte key", len(key))
    return key
