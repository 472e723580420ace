"""MMDVM serial framing: building commands, reading replies and decoding them."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

MMDVM_FRAME_START = 0xE0

MMDVM_GET_VERSION = 0x00
MMDVM_GET_STATUS = 0x01
MMDVM_SET_CONFIG = 0x02
MMDVM_SET_MODE = 0x03
MMDVM_SET_FREQ = 0x04
MMDVM_SEND_CWID = 0x0A
MMDVM_ACK = 0x70
MMDVM_NAK = 0x7F
MMDVM_M17_LINK_SETUP = 0x45
MMDVM_M17_STREAM = 0x46
MMDVM_M17_PACKET = 0x47
MMDVM_M17_LOST = 0x48
MMDVM_M17_EOT = 0x49
MMDVM_SERIAL_DATA = 0x80
MMDVM_TRANSPARENT = 0x90
MMDVM_QSO_INFO = 0x91
MMDVM_DEBUG1 = 0xF1
MMDVM_DEBUG2 = 0xF2
MMDVM_DEBUG3 = 0xF3
MMDVM_DEBUG4 = 0xF4
MMDVM_DEBUG5 = 0xF5
MMDVM_DEBUG_DUMP = 0xFA

CAP1_DSTAR = 0x01
CAP1_DMR = 0x02
CAP1_YSF = 0x04
CAP1_P25 = 0x08
CAP1_NXDN = 0x10
CAP1_M17 = 0x20
CAP1_FM = 0x40
CAP2_POCSAG = 0x01
CAP2_AX25 = 0x02

_MAX_SHORT_FRAME = 255


class HardwareType(enum.Enum):
    UNKNOWN = enum.auto()
    MMDVM = enum.auto()
    DVMEGA = enum.auto()
    MMDVM_ZUMSPOT = enum.auto()
    MMDVM_HS_HAT = enum.auto()
    MMDVM_HS_DUAL_HAT = enum.auto()
    NANO_HOTSPOT = enum.auto()
    NANO_DV = enum.auto()
    D2RG_MMDVM_HS = enum.auto()
    MMDVM_HS = enum.auto()
    OPENGD77_HS = enum.auto()
    SKYBRIDGE = enum.auto()


_HARDWARE_PREFIXES = (
    (b"DVMEGA", HardwareType.DVMEGA),
    (b"ZUMspot", HardwareType.MMDVM_ZUMSPOT),
    (b"MMDVM_HS_Hat", HardwareType.MMDVM_HS_HAT),
    (b"MMDVM_HS_Dual_Hat", HardwareType.MMDVM_HS_DUAL_HAT),
    (b"Nano_hotSPOT", HardwareType.NANO_HOTSPOT),
    (b"Nano_DV", HardwareType.NANO_DV),
    (b"D2RG_MMDVM_HS", HardwareType.D2RG_MMDVM_HS),
    (b"MMDVM_HS-", HardwareType.MMDVM_HS),
    (b"OpenGD77_HS", HardwareType.OPENGD77_HS),
    (b"SkyBridge", HardwareType.SKYBRIDGE),
)


class Port(Protocol):
    def read(self, length: int) -> bytes: ...


class ModemReadError(OSError):
    """Reading from the modem port failed."""


@dataclass(frozen=True)
class Frame:
    """One complete frame received from the modem, start byte included."""

    raw: bytes
    type: int

    @property
    def offset(self) -> int:
        """Index of the first byte after the frame type."""
        return 4 if len(self.raw) > _MAX_SHORT_FRAME else 3

    @property
    def payload(self) -> bytes:
        return self.raw[self.offset:]


def build_frame(command: int, payload: bytes = b"") -> bytes:
    """Build a short frame: start byte, length, command and payload."""
    length = len(payload) + 3
    if length > _MAX_SHORT_FRAME:
        raise ValueError(f"a frame can hold at most {_MAX_SHORT_FRAME} bytes, got {length}")
    return bytes((MMDVM_FRAME_START, length, command & 0xFF)) + bytes(payload)


class _State(enum.Enum):
    START = enum.auto()
    LENGTH1 = enum.auto()
    LENGTH2 = enum.auto()
    TYPE = enum.auto()
    DATA = enum.auto()


class FrameReader:
    """Assembles frames from a port, resuming partial frames across calls."""

    def __init__(self, port: Port) -> None:
        self._port = port
        self._state = _State.START
        self._buffer = bytearray()
        self._length = 0
        self._type = 0

    def _read(self, length: int) -> bytes:
        try:
            data = self._port.read(length)
        except OSError as exc:
            self._state = _State.START
            raise ModemReadError("Error when reading from the modem") from exc
        return bytes(data[:length])

    def get_response(self) -> Frame | None:
        """Return the next complete frame, or None if none is available yet."""
        if self._state is _State.START:
            chunk = self._read(1)
            if not chunk or chunk[0] != MMDVM_FRAME_START:
                return None
            self._buffer = bytearray(chunk)
            self._length = 1
            self._state = _State.LENGTH1

        if self._state is _State.LENGTH1:
            chunk = self._read(1)
            if not chunk:
                return None
            self._buffer += chunk
            self._length = chunk[0]
            self._state = _State.LENGTH2 if self._length == 0 else _State.TYPE

        if self._state is _State.LENGTH2:
            chunk = self._read(1)
            if not chunk:
                return None
            self._buffer += chunk
            self._length = chunk[0] + _MAX_SHORT_FRAME
            self._state = _State.TYPE

        if self._state is _State.TYPE:
            chunk = self._read(1)
            if not chunk:
                return None
            self._buffer += chunk
            self._type = chunk[0]
            self._state = _State.DATA

        while len(self._buffer) < self._length:
            chunk = self._read(self._length - len(self._buffer))
            if not chunk:
                return None
            self._buffer += chunk

        frame = Frame(raw=bytes(self._buffer), type=self._type)
        self._state = _State.START
        self._buffer = bytearray()
        return frame


@dataclass(frozen=True)
class ModemStatus:
    """The modem state reported in a GET_STATUS reply."""

    mode: int = 0
    tx: bool = False
    cd: bool = False
    lockout: bool = False
    adc_overflow: bool = False
    rx_overflow: bool = False
    tx_overflow: bool = False
    dac_overflow: bool = False
    dstar_space: int = 0
    dmr_space1: int = 0
    dmr_space2: int = 0
    ysf_space: int = 0
    p25_space: int = 0
    nxdn_space: int = 0
    m17_space: int = 0
    pocsag_space: int = 0
    fm_space: int = 0
    ax25_space: int = 0


def _flag_fields(flags: int) -> dict[str, bool]:
    fields = {
        "tx": bool(flags & 0x01),
        "adc_overflow": bool(flags & 0x02),
        "rx_overflow": bool(flags & 0x04),
        "tx_overflow": bool(flags & 0x08),
        "lockout": bool(flags & 0x10),
        "dac_overflow": bool(flags & 0x20),
        "cd": bool(flags & 0x40),
    }
    for name, text in (
        ("adc_overflow", "MMDVM ADC levels have overflowed"),
        ("rx_overflow", "MMDVM RX buffer has overflowed"),
        ("tx_overflow", "MMDVM TX buffer has overflowed"),
        ("dac_overflow", "MMDVM DAC levels have overflowed"),
    ):
        if fields[name]:
            logger.error(text)
    return fields


def parse_status(protocol_version: int, frame: Frame) -> ModemStatus:
    """Decode a status reply; an unknown protocol version reports no buffer space."""
    raw = frame.raw
    o = frame.offset

    if protocol_version == 1:
        if len(raw) <= o + 6:
            raise ValueError("status frame is too short for protocol version 1")

        def optional(index: int) -> int:
            return raw[index] if len(raw) > index else 0

        return ModemStatus(
            mode=raw[o + 1],
            **_flag_fields(raw[o + 2]),
            dstar_space=raw[o + 3],
            dmr_space1=raw[o + 4],
            dmr_space2=raw[o + 5],
            ysf_space=raw[o + 6],
            p25_space=optional(o + 7),
            nxdn_space=optional(o + 8),
            pocsag_space=optional(o + 9),
            m17_space=optional(o + 10),
        )

    if protocol_version == 2:
        if len(raw) <= o + 12:
            raise ValueError("status frame is too short for protocol version 2")
        return ModemStatus(
            mode=raw[o],
            **_flag_fields(raw[o + 1]),
            dstar_space=raw[o + 3],
            dmr_space1=raw[o + 4],
            dmr_space2=raw[o + 5],
            ysf_space=raw[o + 6],
            p25_space=raw[o + 7],
            nxdn_space=raw[o + 8],
            m17_space=raw[o + 9],
            fm_space=raw[o + 10],
            pocsag_space=raw[o + 11],
            ax25_space=raw[o + 12],
        )

    return ModemStatus()


@dataclass(frozen=True)
class VersionInfo:
    """What a GET_VERSION reply says about the modem firmware."""

    protocol_version: int
    hardware: HardwareType
    description: str
    capabilities1: int
    capabilities2: int
    cpu_type: int | None = None
    udid: bytes = b""

    @property
    def has_m17(self) -> bool:
        return (self.capabilities1 & CAP1_M17) == CAP1_M17


def hardware_type(frame: Frame) -> HardwareType:
    """Identify the modem hardware from the description in a version reply."""
    raw = frame.raw
    if raw[4:10] == b"MMDVM " or raw[23:29] == b"MMDVM ":
        return HardwareType.MMDVM
    description = raw[4:]
    for prefix, kind in _HARDWARE_PREFIXES:
        if description.startswith(prefix):
            return kind
    return HardwareType.UNKNOWN


def _text(data: bytes) -> str:
    return data.decode("ascii", errors="replace")


def parse_version(frame: Frame) -> VersionInfo:
    """Decode a GET_VERSION reply; raises ValueError for an unsupported protocol."""
    raw = frame.raw
    if frame.type != MMDVM_GET_VERSION or len(raw) < 4:
        raise ValueError("not a version reply")

    version = raw[3]
    hardware = hardware_type(frame)

    if version == 1:
        return VersionInfo(
            protocol_version=1,
            hardware=hardware,
            description=_text(raw[4:]),
            capabilities1=CAP1_DSTAR | CAP1_DMR | CAP1_YSF | CAP1_P25 | CAP1_NXDN | CAP1_M17,
            capabilities2=CAP2_POCSAG,
        )

    if version == 2:
        if len(raw) < 23:
            raise ValueError("version frame is too short for protocol version 2")
        cpu = raw[6]
        udid = raw[7:19] if cpu == 2 else raw[7:23]
        return VersionInfo(
            protocol_version=2,
            hardware=hardware,
            description=_text(raw[23:]),
            capabilities1=raw[4],
            capabilities2=raw[5],
            cpu_type=cpu,
            udid=bytes(udid),
        )

    raise ValueError(
        f"MMDVM protocol version: {version}, unsupported by this version of the MMDVM modem"
    )