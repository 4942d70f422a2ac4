import pytest

import key_utils


@pytest.fixture(autouse=True)
def fast_kdf(monkeypatch):
    # Full-strength PBKDF2 makes every call slow; the iteration count does not change any behavior under test.
    monkeypatch.setattr(key_utils, "KDF_ITERS", 1000)
