"""M17 callsign encoding and LICH fragment packing helpers."""

from __future__ import annotations

M17_CHARS = " ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-/."

ENCODED_CALLSIGN_LENGTH = 6
BROADCAST = b"\xff" * ENCODED_CALLSIGN_LENGTH
MAX_CALLSIGN_LENGTH = 9
MAX_ENCODED = 40**9

LICH_FRAGMENT_LENGTH_BYTES = 6
LICH_FRAGMENT_FEC_LENGTH_BYTES = 12
_LICH_PART_BITS = 12
_LICH_FEC_PART_BITS = 24


def encode_callsign(callsign: str) -> bytes:
    """Encode a callsign into the six-byte base-40 M17 address form."""
    if callsign in ("ALL", "ALL      "):
        return BROADCAST

    value = 0
    for char in reversed(callsign[:MAX_CALLSIGN_LENGTH]):
        position = M17_CHARS.find(char)
        value = value * 40 + max(position, 0)
    return value.to_bytes(ENCODED_CALLSIGN_LENGTH, "big")


def decode_callsign(encoded: bytes) -> str:
    """Decode a six-byte M17 address; an out-of-range value gives ''."""
    if len(encoded) < ENCODED_CALLSIGN_LENGTH:
        raise ValueError(
            f"an encoded callsign needs {ENCODED_CALLSIGN_LENGTH} bytes, got {len(encoded)}"
        )
    raw = bytes(encoded[:ENCODED_CALLSIGN_LENGTH])
    if raw == BROADCAST:
        return "ALL"

    value = int.from_bytes(raw, "big")
    if value >= MAX_ENCODED:
        return ""

    chars = []
    while value > 0:
        value, digit = divmod(value, 40)
        chars.append(M17_CHARS[digit])
    return "".join(chars)


def _split(data: bytes, size: int, part_bits: int) -> tuple[int, int, int, int]:
    if len(data) < size:
        raise ValueError(f"need at least {size} bytes, got {len(data)}")
    value = int.from_bytes(bytes(data[:size]), "big")
    mask = (1 << part_bits) - 1
    return tuple(  # type: ignore[return-value]
        (value >> (part_bits * (3 - index))) & mask for index in range(4)
    )


def _combine(frags: tuple[int, ...], size: int, part_bits: int) -> bytes:
    mask = (1 << part_bits) - 1
    value = 0
    for frag in frags:
        value = (value << part_bits) | (frag & mask)
    return value.to_bytes(size, "big")


def split_fragment_lich(data: bytes) -> tuple[int, int, int, int]:
    """Split a 48-bit LICH fragment into four 12-bit words."""
    return _split(data, LICH_FRAGMENT_LENGTH_BYTES, _LICH_PART_BITS)


def split_fragment_lich_fec(data: bytes) -> tuple[int, int, int, int]:
    """Split a 96-bit Golay-coded LICH fragment into four 24-bit words."""
    return _split(data, LICH_FRAGMENT_FEC_LENGTH_BYTES, _LICH_FEC_PART_BITS)


def combine_fragment_lich(frag1: int, frag2: int, frag3: int, frag4: int) -> bytes:
    """Join four 12-bit words into a six-byte LICH fragment."""
    return _combine(
        (frag1, frag2, frag3, frag4), LICH_FRAGMENT_LENGTH_BYTES, _LICH_PART_BITS
    )


def combine_fragment_lich_fec(frag1: int, frag2: int, frag3: int, frag4: int) -> bytes:
    """Join four 24-bit Golay words into a twelve-byte LICH fragment."""
    return _combine(
        (frag1, frag2, frag3, frag4), LICH_FRAGMENT_FEC_LENGTH_BYTES, _LICH_FEC_PART_BITS
    )