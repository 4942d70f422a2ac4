import pytest

import key_utils
from cipher_errors import KeyDerivationError
from key_utils import derive_key, resolve_key


def test_derive_key_is_deterministic():
    assert derive_key("myKey123") == derive_key("myKey123")


def test_derive_key_default_length():
    assert len(derive_key("myKey123")) == key_utils.KEY_LEN == 32


@pytest.mark.parametrize("key_len", [16, 24, 32])
def test_derive_key_supported_lengths(key_len):
    assert len(derive_key("pw", key_len=key_len)) == key_len


def test_derive_key_rejects_bad_length():
    with pytest.raises(KeyDerivationError):
        derive_key("pw", key_len=20)


def test_different_passphrases_give_different_keys():
    assert derive_key("1234") != derive_key("1235")


def test_empty_passphrase_is_accepted():
    assert len(derive_key("")) == 32


def test_str_and_utf8_bytes_agree():
    assert derive_key("pässword") == derive_key("pässword".encode("utf-8"))


def test_unencodable_passphrase_fails():
    with pytest.raises(KeyDerivationError):
        derive_key("bad\ud800")


def test_surrogate_escaped_passphrase_matches_raw_bytes():
    # argv bytes that are not UTF-8 arrive as surrogate escapes
    assert derive_key("pw\udcff") == derive_key(b"pw\xff")


def test_known_answer(monkeypatch):
    monkeypatch.setattr(key_utils, "KDF_ITERS", 1000)
    expected = bytes.fromhex("5d9a3c3b301f3e88c95d71f7a88a5d73240670fb69dbd23feecbd09958bd7a03")
    assert derive_key("myKey123") == expected


def test_non_string_passphrase_fails():
    with pytest.raises(KeyDerivationError):
        derive_key(12345)


def test_resolve_key_uses_custom_deriver():
    assert resolve_key("x", lambda p: b"k" * 16) == b"k" * 16


def test_resolve_key_rejects_non_bytes_result():
    with pytest.raises(KeyDerivationError):
        resolve_key("x", lambda p: "not bytes")


def test_resolve_key_propagates_deriver_error():
    err = KeyDerivationError("nope")

    def deriver(p):
        raise err

    with pytest.raises(KeyDerivationError) as exc:
        resolve_key("x", deriver)
    assert exc.value is err
