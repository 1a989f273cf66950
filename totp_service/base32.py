# totp_service/base32.py
# RFC 4648 Base32 (uppercase alphabet, '=' padding), done with a plain bit buffer.

from .errors import InvalidBase32CharacterError
from .messages import MESSAGES

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_DECODE_MAP = {ch: i for i, ch in enumerate(ALPHABET)}

_BITS_PER_BYTE = 8
_BITS_PER_CHAR = 5
_BLOCK_SIZE = 8  # output chars per 40-bit block


def encode(data: bytes) -> str:
    """Encode bytes to padded uppercase Base32. Empty input gives an empty string."""
    if not data:
        return ""

    out = []
    buffer = 0
    bits = 0
    for byte in data:
        buffer = ((buffer << _BITS_PER_BYTE) | byte) & 0xFFFF  # never holds more than 12 live bits
        bits += _BITS_PER_BYTE
        while bits >= _BITS_PER_CHAR:
            bits -= _BITS_PER_CHAR
            out.append(ALPHABET[(buffer >> bits) & 0x1F])

    if bits:
        out.append(ALPHABET[(buffer << (_BITS_PER_CHAR - bits)) & 0x1F])

    pad = -len(out) % _BLOCK_SIZE
    return "".join(out) + "=" * pad


def decode(text: str, messages=MESSAGES) -> bytes:
    """Decode uppercase Base32.

    Trailing '=' is stripped first. Any other character outside the alphabet
    raises InvalidBase32CharacterError naming it; leftover bits that do not
    fill a whole byte are dropped silently.
    """
    text = text.rstrip("=")
    out = bytearray()
    buffer = 0
    bits = 0
    for ch in text:
        value = _DECODE_MAP.get(ch)
        if value is None:
            raise InvalidBase32CharacterError(messages.get("encoding.invalid_base32_char", ch), ch)
        buffer = ((buffer << _BITS_PER_CHAR) | value) & 0xFFFF
        bits += _BITS_PER_CHAR
        if bits >= _BITS_PER_BYTE:
            bits -= _BITS_PER_BYTE
            out.append((buffer >> bits) & 0xFF)
    return bytes(out)


encode_upper = encode
decode_upper = decode
