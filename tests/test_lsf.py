import pytest

from m17spot.lsf import LSF_LENGTH_BYTES, META_LENGTH_BYTES, LinkSetupFrame
from m17spot.m17utils import BROADCAST, encode_callsign


def test_new_frame_is_empty_and_invalid():
    lsf = LinkSetupFrame()
    assert lsf.valid is False
    assert lsf.get_network() == bytes(LSF_LENGTH_BYTES)


def test_set_network_round_trip_and_valid():
    raw = bytes(range(LSF_LENGTH_BYTES))
    lsf = LinkSetupFrame(raw)
    assert lsf.valid is True
    assert lsf.get_network() == raw


def test_set_network_truncates_longer_input():
    raw = bytes(range(40))
    lsf = LinkSetupFrame()
    lsf.set_network(raw)
    assert lsf.get_network() == raw[:LSF_LENGTH_BYTES]


def test_set_network_short_input_raises():
    with pytest.raises(ValueError):
        LinkSetupFrame(b"\x00" * 10)


def test_source_and_dest_round_trip():
    lsf = LinkSetupFrame()
    lsf.source = "N0CALL"
    lsf.dest = "M17-M17 C"
    assert lsf.source == "N0CALL"
    assert lsf.dest == "M17-M17 C"
    raw = lsf.get_network()
    assert raw[6:12] == encode_callsign("N0CALL")
    assert raw[0:6] == encode_callsign("M17-M17 C")


def test_broadcast_destination():
    lsf = LinkSetupFrame()
    lsf.dest = "ALL"
    assert lsf.get_network()[0:6] == BROADCAST
    assert lsf.dest == "ALL"


@pytest.mark.parametrize("can", range(16))
def test_can_round_trip(can):
    lsf = LinkSetupFrame()
    lsf.can = can
    assert lsf.can == can


def test_type_fields_are_independent():
    lsf = LinkSetupFrame()
    lsf.can = 9
    lsf.data_type = 2
    lsf.encryption_type = 1
    lsf.encryption_sub_type = 3
    assert (lsf.can, lsf.data_type, lsf.encryption_type, lsf.encryption_sub_type) == (9, 2, 1, 3)
    lsf.data_type = 1
    assert (lsf.can, lsf.data_type, lsf.encryption_type, lsf.encryption_sub_type) == (9, 1, 1, 3)


def test_packet_stream_set():
    lsf = LinkSetupFrame()
    lsf.packet_stream = 1
    assert lsf.packet_stream == 1
    assert lsf.data_type == 0


def test_meta_round_trip_and_position():
    lsf = LinkSetupFrame()
    meta = bytes(range(1, META_LENGTH_BYTES + 1))
    lsf.meta = meta
    assert lsf.meta == meta
    assert lsf.get_network()[14:28] == meta
    assert lsf.get_network()[28:30] == b"\x00\x00"


def test_meta_short_raises():
    lsf = LinkSetupFrame()
    with pytest.raises(ValueError):
        lsf.meta = b"\x01\x02"
    assert lsf.meta == bytes(META_LENGTH_BYTES)
    assert lsf.get_network() == bytes(LSF_LENGTH_BYTES)


def test_reset_clears_and_invalidates():
    lsf = LinkSetupFrame(bytes([0xAA] * LSF_LENGTH_BYTES))
    lsf.reset()
    assert lsf.valid is False
    assert lsf.get_network() == bytes(LSF_LENGTH_BYTES)


def test_copy_is_independent():
    lsf = LinkSetupFrame(bytes(range(LSF_LENGTH_BYTES)))
    other = lsf.copy()
    assert other.get_network() == lsf.get_network()
    assert other.valid == lsf.valid
    other.source = "N0CALL"
    assert lsf.get_network() == bytes(range(LSF_LENGTH_BYTES))