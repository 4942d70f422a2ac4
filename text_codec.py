# text_codec.py
from typing import Optional

from cipher_errors import EncodingError
from crypto_utils import CipherContext
from key_utils import KeyDeriver, Passphrase
from payload_format import from_text, to_text

# surrogateescape keeps arbitrary decrypted bytes representable as str and
# restores them unchanged when that str is encrypted again.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


def encrypt(plaintext: str, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None) -> str:
    """
    Seal plaintext under a key derived from passphrase and return the sealed
    bytes as standard padded base64.
    """
    try:
        data = plaintext.encode(TEXT_ENCODING, TEXT_ERRORS)
    except UnicodeEncodeError as e:
        raise EncodingError(f"Plaintext is not encodable as UTF-8: {e.reason}") from e
    ctx = CipherContext.from_passphrase(passphrase, deriver)
    return to_text(ctx.seal(data))


def decrypt(encoded: str, passphrase: Passphrase, deriver: Optional[KeyDeriver] = None) -> str:
    """
    Inverse of encrypt(). The base64 is checked before the key is derived, so
    garbage input fails with EncodingError whatever the passphrase.
    """
    sealed = from_text(encoded)
    ctx = CipherContext.from_passphrase(passphrase, deriver)
    return ctx.open(sealed).decode(TEXT_ENCODING, TEXT_ERRORS)
