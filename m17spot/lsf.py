"""The M17 link setup frame: addresses, type field and META data."""

from __future__ import annotations

from .m17utils import ENCODED_CALLSIGN_LENGTH, decode_callsign, encode_callsign

LSF_LENGTH_BYTES = 30
META_LENGTH_BYTES = 14

_DEST_OFFSET = 0
_SOURCE_OFFSET = 6
_TYPE_HIGH = 12
_TYPE_LOW = 13
_META_OFFSET = 14


class LinkSetupFrame:
    """A 30-byte link setup frame as carried over the network."""

    def __init__(self, data: bytes | None = None) -> None:
        self._lsf = bytearray(LSF_LENGTH_BYTES)
        self._valid = False
        if data is not None:
            self.set_network(data)

    def __repr__(self) -> str:
        return f"LinkSetupFrame({bytes(self._lsf).hex()}, valid={self._valid})"

    def get_network(self) -> bytes:
        """Return the raw 30 frame bytes."""
        return bytes(self._lsf)

    def set_network(self, data: bytes) -> None:
        """Load 30 raw frame bytes; the frame is then treated as valid."""
        if len(data) < LSF_LENGTH_BYTES:
            raise ValueError(
                f"a link setup frame needs {LSF_LENGTH_BYTES} bytes, got {len(data)}"
            )
        self._lsf[:] = bytes(data[:LSF_LENGTH_BYTES])
        self._valid = True

    def reset(self) -> None:
        """Clear every byte and mark the frame invalid."""
        self._lsf[:] = bytes(LSF_LENGTH_BYTES)
        self._valid = False

    def copy(self) -> LinkSetupFrame:
        """Return an independent copy of this frame."""
        other = LinkSetupFrame()
        other._lsf[:] = self._lsf
        other._valid = self._valid
        return other

    @property
    def valid(self) -> bool:
        return self._valid

    def _set_callsign(self, offset: int, callsign: str) -> None:
        self._lsf[offset:offset + ENCODED_CALLSIGN_LENGTH] = encode_callsign(callsign)

    @property
    def source(self) -> str:
        return decode_callsign(self._lsf[_SOURCE_OFFSET:_SOURCE_OFFSET + ENCODED_CALLSIGN_LENGTH])

    @source.setter
    def source(self, callsign: str) -> None:
        self._set_callsign(_SOURCE_OFFSET, callsign)

    @property
    def dest(self) -> str:
        return decode_callsign(self._lsf[_DEST_OFFSET:_DEST_OFFSET + ENCODED_CALLSIGN_LENGTH])

    @dest.setter
    def dest(self, callsign: str) -> None:
        self._set_callsign(_DEST_OFFSET, callsign)

    @property
    def packet_stream(self) -> int:
        return self._lsf[_TYPE_LOW] & 0x01

    @packet_stream.setter
    def packet_stream(self, value: int) -> None:
        self._lsf[_TYPE_LOW] &= 0xF7
        self._lsf[_TYPE_LOW] |= value & 0x01

    @property
    def data_type(self) -> int:
        return (self._lsf[_TYPE_LOW] >> 1) & 0x03

    @data_type.setter
    def data_type(self, value: int) -> None:
        self._lsf[_TYPE_LOW] &= 0xF9
        self._lsf[_TYPE_LOW] |= (value << 1) & 0x06

    @property
    def encryption_type(self) -> int:
        return (self._lsf[_TYPE_LOW] >> 3) & 0x03

    @encryption_type.setter
    def encryption_type(self, value: int) -> None:
        self._lsf[_TYPE_LOW] &= 0xE7
        self._lsf[_TYPE_LOW] |= (value << 3) & 0x18

    @property
    def encryption_sub_type(self) -> int:
        return (self._lsf[_TYPE_LOW] >> 5) & 0x03

    @encryption_sub_type.setter
    def encryption_sub_type(self, value: int) -> None:
        self._lsf[_TYPE_LOW] &= 0x9F
        self._lsf[_TYPE_LOW] |= (value << 5) & 0x60

    @property
    def can(self) -> int:
        return ((self._lsf[_TYPE_HIGH] << 1) & 0x0E) | ((self._lsf[_TYPE_LOW] >> 7) & 0x01)

    @can.setter
    def can(self, value: int) -> None:
        self._lsf[_TYPE_LOW] &= 0x7F
        self._lsf[_TYPE_LOW] |= (value << 7) & 0x80
        self._lsf[_TYPE_HIGH] &= 0xF8
        self._lsf[_TYPE_HIGH] |= (value >> 1) & 0x07

    @property
    def meta(self) -> bytes:
        return bytes(self._lsf[_META_OFFSET:_META_OFFSET + META_LENGTH_BYTES])

    @meta.setter
    def meta(self, data: bytes) -> None:
        if len(data) < META_LENGTH_BYTES:
            raise ValueError(
                f"the META field needs {META_LENGTH_BYTES} bytes, got {len(data)}"
            )
        self._lsf[_META_OFFSET:_META_OFFSET + META_LENGTH_BYTES] = bytes(
            data[:META_LENGTH_BYTES]
        )