# payload_format.py
import base64
import binascii

from cipher_errors import AuthenticationError, EncodingError, MalformedInputError

NONCE_LEN = 12
AES_TAG_LEN = 16

# Sealed message layout (same for text and files, no header, no version byte):
# [ nonce (NONCE_LEN) ][ ciphertext (len(plaintext)) ][ tag (AES_TAG_LEN) ]


def build_sealed(nonce: bytes, ciphertext: bytes, tag: bytes) -> bytes:
    if len(nonce) != NONCE_LEN:
        raise ValueError(f"Nonce must be {NONCE_LEN} bytes, got {len(nonce)}")
    return nonce + ciphertext + tag


def split_sealed(sealed: bytes) -> tuple[bytes, bytes, bytes]:
    """
    sealed: nonce + ciphertext + tag
    Returns: (nonce, ciphertext, tag)
    """
    if len(sealed) < NONCE_LEN:
        raise MalformedInputError(f"Sealed data too short: {len(sealed)} bytes, nonce alone is {NONCE_LEN}")
    nonce, rest = sealed[:NONCE_LEN], sealed[NONCE_LEN:]
    if len(rest) < AES_TAG_LEN:
        # Long enough to carry a nonce, so this is a failed open rather than bad framing.
        raise AuthenticationError("Message authentication failed")
    return nonce, rest[:-AES_TAG_LEN], rest[-AES_TAG_LEN:]


def to_text(sealed: bytes) -> str:
    return base64.b64encode(sealed).decode("ascii")


def from_text(encoded) -> bytes:
    """Strict standard-alphabet, padded base64 decode; CR and LF line breaks are skipped."""
    try:
        if isinstance(encoded, str):
            encoded = encoded.replace("\r", "").replace("\n", "")
        elif isinstance(encoded, (bytes, bytearray)):
            encoded = bytes(encoded).replace(b"\r", b"").replace(b"\n", b"")
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise EncodingError(f"Invalid base64 input: {e}") from e
