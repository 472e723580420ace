import pytest

from m17spot.m17utils import (
    combine_fragment_lich,
    combine_fragment_lich_fec,
    decode_callsign,
    encode_callsign,
    split_fragment_lich,
    split_fragment_lich_fec,
)


@pytest.mark.parametrize("callsign", ["ALL", "ALL      "])
def test_broadcast_encodes_to_all_ones(callsign):
    assert encode_callsign(callsign) == b"\xff" * 6


def test_all_ones_decodes_to_all():
    assert decode_callsign(b"\xff" * 6) == "ALL"


def test_single_letter_encoding():
    assert encode_callsign("A") == b"\x00\x00\x00\x00\x00\x01"


@pytest.mark.parametrize("callsign", ["N7TAE", "M17-USA", "N7TAE   B", "W1AW/P", "K1ABC.9"])
def test_callsign_round_trip(callsign):
    assert decode_callsign(encode_callsign(callsign)) == callsign


def test_trailing_spaces_are_dropped():
    assert decode_callsign(encode_callsign("N7TAE    ")) == "N7TAE"


def test_callsign_truncated_to_nine_characters():
    long_call = "ABCDEFGHIJKL"
    assert decode_callsign(encode_callsign(long_call)) == long_call[:9]


def test_encoded_length_is_six():
    assert len(encode_callsign("N7TAE   B")) == 6


def test_out_of_range_value_decodes_empty():
    assert decode_callsign((262144000000000).to_bytes(6, "big")) == ""


def test_decode_short_input_raises():
    with pytest.raises(ValueError):
        decode_callsign(b"\x00\x01")


def test_combine_lich_packs_twelve_bit_words():
    assert combine_fragment_lich(0xABC, 0x123, 0x456, 0x789) == bytes.fromhex("abc123456789")


def test_combine_lich_fec_packs_twenty_four_bit_words():
    result = combine_fragment_lich_fec(0xABCDEF, 0x012345, 0x6789AB, 0xCDEF01)
    assert result == bytes.fromhex("abcdef0123456789abcdef01")


def test_lich_split_round_trip():
    data = bytes([0x12, 0x34, 0x56, 0x78, 0x9A, 0xBC])
    assert combine_fragment_lich(*split_fragment_lich(data)) == data


def test_lich_fec_split_round_trip():
    data = bytes(range(1, 13))
    assert combine_fragment_lich_fec(*split_fragment_lich_fec(data)) == data


def test_split_words_fit_their_width():
    assert all(word <= 0xFFF for word in split_fragment_lich(b"\xff" * 6))
    assert all(word <= 0xFFFFFF for word in split_fragment_lich_fec(b"\xff" * 12))


def test_split_short_input_raises():
    with pytest.raises(ValueError):
        split_fragment_lich(b"\x00" * 5)
    with pytest.raises(ValueError):
        split_fragment_lich_fec(b"\x00" * 11)