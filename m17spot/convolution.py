"""Punctured rate-1/2 convolutional coding (K=5) used by M17 frames."""

from __future__ import annotations

from typing import NamedTuple, Sequence

PUNCTURE_LIST_LINK_SETUP = (
    2, 6, 10, 14, 18, 22, 26, 30, 34, 38, 42, 46, 50, 54, 58, 63, 67, 71, 75, 79, 83,
    87, 91, 95, 99, 103, 107, 111, 115, 119, 124, 128, 132, 136, 140, 144, 148, 152, 156, 160, 164, 168,
    172, 176, 180, 185, 189, 193, 197, 201, 205, 209, 213, 217, 221, 225, 229, 233, 237, 241, 246, 250, 254,
    258, 262, 266, 270, 274, 278, 282, 286, 290, 294, 298, 302, 307, 311, 315, 319, 323, 327, 331, 335, 339,
    343, 347, 351, 355, 359, 363, 368, 372, 376, 380, 384, 388, 392, 396, 400, 404, 408, 412, 416, 420, 424,
    429, 433, 437, 441, 445, 449, 453, 457, 461, 465, 469, 473, 477, 481, 485,
)
PUNCTURE_LIST_DATA = (
    11, 23, 35, 47, 59, 71, 83, 95, 107, 119, 131, 143, 155, 167, 179, 191, 203, 215, 227, 239, 251,
    263, 275, 287,
)

_LINK_SETUP_PUNCTURES = frozenset(PUNCTURE_LIST_LINK_SETUP)
_DATA_PUNCTURES = frozenset(PUNCTURE_LIST_DATA)

# Each punctured symbol adds one to every path metric, i.e. half an error.
PUNCTURE_LIST_LINK_SETUP_COUNT = len(PUNCTURE_LIST_LINK_SETUP) // 2
PUNCTURE_LIST_DATA_COUNT = len(PUNCTURE_LIST_DATA) // 2

LINK_SETUP_LENGTH_BYTES = 30
LINK_SETUP_FEC_LENGTH_BITS = 368
LINK_SETUP_FEC_LENGTH_BYTES = LINK_SETUP_FEC_LENGTH_BITS // 8
DATA_LENGTH_BYTES = 18
DATA_FEC_LENGTH_BITS = 272
DATA_FEC_LENGTH_BYTES = DATA_FEC_LENGTH_BITS // 8

_LINK_SETUP_STEPS = 244
_DATA_STEPS = 148

_BRANCH_TABLE1 = (0, 0, 0, 0, 2, 2, 2, 2)
_BRANCH_TABLE2 = (0, 2, 2, 0, 0, 2, 2, 0)
_NUM_OF_STATES_D2 = 8
_NUM_OF_STATES = 16
_M = 4
_K = 5


class DecodeResult(NamedTuple):
    """Decoded bytes together with the estimated number of bit errors."""

    data: bytes
    errors: int


def _to_bits(data: bytes, count: int) -> list[int]:
    return [(data[i >> 3] >> (7 - (i & 7))) & 1 for i in range(count)]


def _from_bits(bits: Sequence[int]) -> bytes:
    out = bytearray((len(bits) + 7) // 8)
    for position, bit in enumerate(bits):
        if bit:
            out[position >> 3] |= 0x80 >> (position & 7)
    return bytes(out)


def _require(data: bytes, size: int, what: str) -> bytes:
    if len(data) < size:
        raise ValueError(f"{what} needs at least {size} bytes, got {len(data)}")
    return bytes(data[:size])


def _encode(bits: Sequence[int]) -> list[int]:
    d1 = d2 = d3 = d4 = 0
    out: list[int] = []
    for d in bits:
        out.append(d ^ d3 ^ d4)
        out.append(d ^ d1 ^ d2 ^ d4)
        d1, d2, d3, d4 = d, d1, d2, d3
    return out


def _encode_punctured(data: bytes, steps: int, punctures: frozenset[int]) -> bytes:
    # The input is followed by zero tail bits that flush the shift register.
    padded = data + b"\x00"
    coded = _encode(_to_bits(padded, steps))
    return _from_bits([bit for index, bit in enumerate(coded) if index not in punctures])


def _depuncture(bits: Sequence[int], steps: int, punctures: frozenset[int]) -> list[int]:
    soft: list[int] = []
    for bit in bits:
        if len(soft) in punctures:
            soft.append(1)
        soft.append(2 if bit else 0)
    soft.extend([0] * (2 * steps - len(soft)))
    return soft


def _viterbi(soft: Sequence[int], steps: int, n_bits: int, puncture_count: int) -> DecodeResult:
    metrics = [0] * _NUM_OF_STATES
    decisions: list[int] = []

    for step in range(steps):
        s0 = soft[2 * step]
        s1 = soft[2 * step + 1]
        new = [0] * _NUM_OF_STATES
        word = 0
        for i in range(_NUM_OF_STATES_D2):
            j = i * 2
            metric = abs(_BRANCH_TABLE1[i] - s0) + abs(_BRANCH_TABLE2[i] - s1)
            upper = metrics[i]
            lower = metrics[i + _NUM_OF_STATES_D2]

            m0 = upper + metric
            m1 = lower + (_M - metric)
            if m0 >= m1:
                new[j] = m1
                word |= 1 << j
            else:
                new[j] = m0

            m0 = upper + (_M - metric)
            m1 = lower + metric
            if m0 >= m1:
                new[j + 1] = m1
                word |= 1 << (j + 1)
            else:
                new[j + 1] = m0
        decisions.append(word)
        metrics = new

    bits = [0] * n_bits
    state = 0
    offset = steps - n_bits
    for position in reversed(range(n_bits)):
        word = decisions[position + offset]
        bit = (word >> (state >> (9 - _K))) & 1
        state = (bit << 7) | (state >> 1)
        bits[position] = bit

    errors = min(metrics) // (_M >> 1) - puncture_count
    return DecodeResult(_from_bits(bits), errors)


def encode_link_setup(data: bytes) -> bytes:
    """Encode a 30-byte link setup frame into 46 punctured bytes."""
    lsf = _require(data, LINK_SETUP_LENGTH_BYTES, "a link setup frame")
    return _encode_punctured(lsf, _LINK_SETUP_STEPS, _LINK_SETUP_PUNCTURES)


def encode_data(data: bytes) -> bytes:
    """Encode an 18-byte frame number and payload into 34 punctured bytes."""
    payload = _require(data, DATA_LENGTH_BYTES, "a stream frame")
    return _encode_punctured(payload, _DATA_STEPS, _DATA_PUNCTURES)


def decode_link_setup(data: bytes) -> DecodeResult:
    """Viterbi-decode 46 coded bytes into a 30-byte link setup frame."""
    coded = _require(data, LINK_SETUP_FEC_LENGTH_BYTES, "a coded link setup frame")
    soft = _depuncture(
        _to_bits(coded, LINK_SETUP_FEC_LENGTH_BITS), _LINK_SETUP_STEPS, _LINK_SETUP_PUNCTURES
    )
    return _viterbi(soft, _LINK_SETUP_STEPS, 240, PUNCTURE_LIST_LINK_SETUP_COUNT)


def decode_data(data: bytes) -> DecodeResult:
    """Viterbi-decode 34 coded bytes into an 18-byte frame number and payload."""
    coded = _require(data, DATA_FEC_LENGTH_BYTES, "a coded stream frame")
    soft = _depuncture(_to_bits(coded, DATA_FEC_LENGTH_BITS), _DATA_STEPS, _DATA_PUNCTURES)
    return _viterbi(soft, _DATA_STEPS, 144, PUNCTURE_LIST_DATA_COUNT)