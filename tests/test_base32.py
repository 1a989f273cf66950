import base64
import os

import pytest

from totp_service import base32
from totp_service.errors import InvalidBase32CharacterError, TotpError


def test_encode_empty():
    assert base32.encode(b"") == ""


def test_decode_empty():
    assert base32.decode("") == b""


def test_encode_hello():
    assert base32.encode_upper(b"Hello") == "JBSWY3DP"


def test_decode_hello():
    assert base32.decode_upper("JBSWY3DP") == b"Hello"


def test_encode_adds_padding():
    assert base32.encode(b"Hello!") == "JBSWY3DPEE======"


def test_decode_strips_padding():
    assert base32.decode("JBSWY3DPEE======") == b"Hello!"


def test_decode_unpadded_input():
    assert base32.decode("JBSWY3DPEE") == b"Hello!"


def test_decode_drops_incomplete_trailing_byte():
    # one char = 5 bits, not enough for a byte
    assert base32.decode("A") == b""
    assert base32.decode("A=======") == b""
    assert base32.decode("MEA") == b"a"


def test_decode_invalid_character_is_named():
    with pytest.raises(InvalidBase32CharacterError, match="Invalid Base32 character: 1") as exc:
        base32.decode("JBSWY31P")
    assert exc.value.character == "1"
    assert isinstance(exc.value, TotpError)


@pytest.mark.parametrize("text,bad", [
    ("jbswy3dp", "j"),   # lowercase is not part of the alphabet
    ("JBSW Y3DP", " "),
    ("ME=A", "="),       # padding only allowed at the end
    ("JBSWY3D0", "0"),
])
def test_decode_rejects(text, bad):
    with pytest.raises(InvalidBase32CharacterError) as exc:
        base32.decode(text)
    assert exc.value.character == bad


def test_matches_stdlib_encoding():
    samples = [b"f", b"fo", b"foo", b"foob", b"fooba", b"foobar", bytes(range(256))]
    for data in samples:
        assert base32.encode(data) == base64.b32encode(data).decode("ascii")


def test_round_trip_random_bytes():
    for size in (1, 7, 20, 32, 64, 101):
        data = os.urandom(size)
        assert base32.decode(base32.encode(data)) == data
