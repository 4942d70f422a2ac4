# crypto_utils.py
import logging
from typing import Optional

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes

from cipher_errors import AuthenticationError, CipherInitError, RandomSourceError
from key_utils import KeyDeriver, Passphrase, VALID_KEY_LENS, resolve_key
from payload_format import AES_TAG_LEN, NONCE_LEN, build_sealed, split_sealed

log = logging.getLogger(__name__)


class CipherContext:
    """
    AES-GCM with one derived key. Build a new context for every call; nothing
    is cached between calls.
    """
    __slots__ = ("_key",)

    def __init__(self, key: bytes):
        self._key = bytes(key)

    @classmethod
    def from_passphrase(cls, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None) -> "CipherContext":
        return cls(resolve_key(passphrase, deriver))

    @property
    def key(self) -> bytes:
        return self._key

    def _check_key(self):
        if len(self._key) not in VALID_KEY_LENS:
            raise CipherInitError(f"Incorrect AES key length ({len(self._key)} bytes)")

    def _cipher(self, nonce: bytes):
        self._check_key()
        try:
            return AES.new(self._key, AES.MODE_GCM, nonce=nonce, mac_len=AES_TAG_LEN)
        except (ValueError, TypeError) as e:
            raise CipherInitError(f"Cannot initialise AES-GCM: {e}") from e

    def seal(self, plaintext: bytes) -> bytes:
        """Returns nonce + ciphertext + tag; a fresh random nonce every call."""
        try:
            nonce = get_random_bytes(NONCE_LEN)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError(f"Secure random source unavailable: {e}") from e
        cipher = self._cipher(nonce)
        ciphertext, tag = cipher.encrypt_and_digest(bytes(plaintext))
        log.debug("Sealed %d plaintext bytes", len(plaintext))
        return build_sealed(nonce, ciphertext, tag)

    def open(self, sealed: bytes) -> bytes:
        """Verify and decrypt; raises AuthenticationError without returning partial plaintext."""
        self._check_key()
        nonce, ciphertext, tag = split_sealed(bytes(sealed))
        cipher = self._cipher(nonce)
        try:
            plaintext = cipher.decrypt_and_verify(ciphertext, tag)
        except ValueError as e:
            raise AuthenticationError("Message authentication failed") from e
        log.debug("Opened %d plaintext bytes", len(plaintext))
        return plaintext


def encrypt_bytes(passphrase: Passphrase, plaintext: bytes, deriver: Optional[KeyDeriver] = None) -> bytes:
    return CipherContext.from_passphrase(passphrase, deriver).seal(plaintext)


def decrypt_bytes(passphrase: Passphrase, sealed: bytes, deriver: Optional[KeyDeriver] = None) -> bytes:
    return CipherContext.from_passphrase(passphrase, deriver).open(sealed)
