import pytest

from sketchlogic import envelope
from sketchlogic.errors import EnvelopeError


@pytest.mark.parametrize("plaintext", [
    b"",
    b"@MainActivity.java_var\n2:out\n",
    b"x" * 16,
    "@Main.java_onClick\né中".encode("utf-8"),
])
def test_encrypt_decrypt_round_trip(plaintext):
    encrypted = envelope.encrypt(plaintext)

    assert len(encrypted) % 16 == 0
    assert len(encrypted) > len(plaintext)
    assert envelope.decrypt(encrypted) == plaintext


def test_encryption_is_deterministic():
    # The IV is the key, so equal plaintexts always encrypt equally
    assert envelope.encrypt(b"logic") == envelope.encrypt(b"logic")


def test_explicit_key_matches_default():
    assert envelope.encrypt(b"logic", key=b"sketchwaresecure") == envelope.encrypt(b"logic")


@pytest.mark.parametrize("data", [b"short", b"x" * 17, b"x" * 31])
def test_partial_blocks_fail_to_decrypt(data):
    with pytest.raises(EnvelopeError):
        envelope.decrypt(data)


@pytest.mark.parametrize("key", [b"", b"tooshort", b"x" * 32])
def test_bad_key_length(key):
    with pytest.raises(EnvelopeError):
        envelope.encrypt(b"logic", key=key)
    with pytest.raises(EnvelopeError):
        envelope.decrypt(b"x" * 16, key=key)


def test_file_helpers(tmp_path):
    path = tmp_path / "logic"

    envelope.encrypt_file(path, b"@Main.java_var\n")

    assert path.read_bytes() != b"@Main.java_var\n"
    assert envelope.decrypt_file(path) == b"@Main.java_var\n"


def test_missing_file_is_an_envelope_error(tmp_path):
    with pytest.raises(EnvelopeError):
        envelope.decrypt_file(tmp_path / "missing")


def test_unwritable_path_is_an_envelope_error(tmp_path):
    with pytest.raises(EnvelopeError):
        envelope.encrypt_file(tmp_path / "no" / "such" / "dir" / "logic", b"data")
