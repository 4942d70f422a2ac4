# cipher_errors.py
"""
Exceptions raised by the cipher pipeline.

Every error derives from CipherError and from the builtin that callers used to
catch for the same failure (ValueError for bad data, RuntimeError for the
environment, OSError for file I/O).
"""


class CipherError(Exception):
    """Base class for every failure raised by this project."""


class KeyDerivationError(CipherError, ValueError):
    """The key deriver could not turn the passphrase into a key."""


class CipherInitError(CipherError, ValueError):
    """The derived key does not fit the block cipher."""


class RandomSourceError(CipherError, RuntimeError):
    """Secure randomness was not available for a nonce."""


class MalformedInputError(CipherError, ValueError):
    """Sealed data is shorter than the nonce."""


class AuthenticationError(CipherError, ValueError):
    """Tag verification failed.

    Wrong passphrase and tampered data are reported the same way.
    """


class EncodingError(CipherError, ValueError):
    """Text is not valid base64."""


class FileIOError(CipherError, OSError):
    """Reading or writing a file failed."""
