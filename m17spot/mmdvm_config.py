"""Command frames that configure and drive an MMDVM modem."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .mmdvm_frames import (
    MMDVM_GET_STATUS,
    MMDVM_GET_VERSION,
    MMDVM_QSO_INFO,
    MMDVM_SEND_CWID,
    MMDVM_SERIAL_DATA,
    MMDVM_SET_CONFIG,
    MMDVM_SET_FREQ,
    MMDVM_SET_MODE,
    HardwareType,
    build_frame,
)

DEFAULT_POCSAG_FREQUENCY = 433000000
MAX_CW_ID_LENGTH = 200
MAX_IP_INFO_LENGTH = 21
IP_INFO_MARKER = 250

_FLOAT = struct.Struct("<f")


def _f32(value: float) -> float:
    return _FLOAT.unpack(_FLOAT.pack(value))[0]


def level_byte(percent: float) -> int:
    """Convert a level in percent to the 0-255 byte the modem expects."""
    scaled = _f32(_f32(_f32(percent) * _f32(2.55)) + 0.5)
    return int(scaled) & 0xFF


def _flags(*pairs: tuple[bool, int]) -> int:
    value = 0
    for enabled, bit in pairs:
        if enabled:
            value |= bit
    return value


def _u32le(value: int) -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, "little")


@dataclass
class ModemConfig:
    """Every setting the modem receives in its configuration frames."""

    duplex: bool = False
    rx_invert: bool = False
    tx_invert: bool = False
    ptt_invert: bool = False
    tx_delay: int = 0
    debug: bool = False
    ysf_lo_dev: bool = False
    use_cos_as_lockout: bool = False
    dmr_color_code: int = 0
    dmr_delay: int = 0
    ysf_tx_hang: int = 4
    p25_tx_hang: int = 5
    nxdn_tx_hang: int = 5
    m17_tx_hang: int = 5
    rx_level: float = 0.0
    cw_id_tx_level: float = 0.0
    dstar_tx_level: float = 0.0
    dmr_tx_level: float = 0.0
    ysf_tx_level: float = 0.0
    p25_tx_level: float = 0.0
    nxdn_tx_level: float = 0.0
    m17_tx_level: float = 0.0
    pocsag_tx_level: float = 0.0
    fm_tx_level: float = 0.0
    ax25_tx_level: float = 0.0
    rf_level: float = 0.0
    rx_frequency: int = 0
    rx_offset: int = 0
    tx_frequency: int = 0
    tx_offset: int = 0
    pocsag_frequency: int = 0
    rx_dc_offset: int = 0
    tx_dc_offset: int = 0
    dstar_enabled: bool = False
    dmr_enabled: bool = False
    ysf_enabled: bool = False
    p25_enabled: bool = False
    nxdn_enabled: bool = False
    m17_enabled: bool = False
    pocsag_enabled: bool = False
    fm_enabled: bool = False
    ax25_enabled: bool = False
    ax25_rx_twist: int = 0
    ax25_tx_delay: int = 300
    ax25_slot_time: int = 30
    ax25_p_persist: int = 128

    @property
    def effective_rx_frequency(self) -> int:
        return self.rx_frequency + self.rx_offset

    @property
    def effective_tx_frequency(self) -> int:
        return self.tx_frequency + self.tx_offset

    @property
    def effective_pocsag_frequency(self) -> int:
        return self.pocsag_frequency + self.tx_offset

    def _option_flags(self) -> int:
        return _flags(
            (self.rx_invert, 0x01),
            (self.tx_invert, 0x02),
            (self.ptt_invert, 0x04),
            (self.ysf_lo_dev, 0x08),
            (self.debug, 0x10),
            (self.use_cos_as_lockout, 0x20),
            (not self.duplex, 0x80),
        )


def _config1(c: ModemConfig) -> bytes:
    modes = _flags(
        (c.dstar_enabled, 0x01),
        (c.dmr_enabled, 0x02),
        (c.ysf_enabled, 0x04),
        (c.p25_enabled, 0x08),
        (c.nxdn_enabled, 0x10),
        (c.pocsag_enabled, 0x20),
        (c.m17_enabled, 0x40),
    )
    payload = [
        c._option_flags(),
        modes,
        c.tx_delay // 10,
        0,
        level_byte(c.rx_level),
        level_byte(c.cw_id_tx_level),
        c.dmr_color_code,
        c.dmr_delay,
        128,
        level_byte(c.dstar_tx_level),
        level_byte(c.dmr_tx_level),
        level_byte(c.ysf_tx_level),
        level_byte(c.p25_tx_level),
        c.tx_dc_offset + 128,
        c.rx_dc_offset + 128,
        level_byte(c.nxdn_tx_level),
        c.ysf_tx_hang,
        level_byte(c.pocsag_tx_level),
        level_byte(c.fm_tx_level),
        c.p25_tx_hang,
        c.nxdn_tx_hang,
        level_byte(c.m17_tx_level),
        c.m17_tx_hang,
    ]
    return build_frame(MMDVM_SET_CONFIG, bytes(v & 0xFF for v in payload))


def _config2(c: ModemConfig) -> bytes:
    modes = _flags(
        (c.dstar_enabled, 0x01),
        (c.dmr_enabled, 0x02),
        (c.ysf_enabled, 0x04),
        (c.p25_enabled, 0x08),
        (c.nxdn_enabled, 0x10),
        (c.fm_enabled, 0x20),
        (c.m17_enabled, 0x40),
    )
    modes2 = _flags((c.pocsag_enabled, 0x01), (c.ax25_enabled, 0x02))
    payload = [
        c._option_flags(),
        modes,
        modes2,
        c.tx_delay // 10,
        0,
        c.tx_dc_offset + 128,
        c.rx_dc_offset + 128,
        level_byte(c.rx_level),
        level_byte(c.cw_id_tx_level),
        level_byte(c.dstar_tx_level),
        level_byte(c.dmr_tx_level),
        level_byte(c.ysf_tx_level),
        level_byte(c.p25_tx_level),
        level_byte(c.nxdn_tx_level),
        level_byte(c.m17_tx_level),
        level_byte(c.pocsag_tx_level),
        level_byte(c.fm_tx_level),
        level_byte(c.ax25_tx_level),
        0,
        0,
        c.ysf_tx_hang,
        c.p25_tx_hang,
        c.nxdn_tx_hang,
        c.m17_tx_hang,
        0,
        0,
        c.dmr_color_code,
        c.dmr_delay,
        c.ax25_rx_twist + 128,
        c.ax25_tx_delay // 10,
        c.ax25_slot_time // 10,
        c.ax25_p_persist,
        0,
        0,
        0,
        0,
        0,
    ]
    return build_frame(MMDVM_SET_CONFIG, bytes(v & 0xFF for v in payload))


def build_config(config: ModemConfig, protocol_version: int) -> bytes:
    """Build the SET_CONFIG frame for protocol version 1 or 2."""
    if protocol_version == 1:
        return _config1(config)
    if protocol_version == 2:
        return _config2(config)
    raise ValueError(f"no configuration frame for protocol version {protocol_version}")


def build_frequency(config: ModemConfig, hardware: HardwareType) -> bytes:
    """Build the SET_FREQ frame; a DVMEGA gets the short form without RF level."""
    payload = bytearray([0x00])
    payload += _u32le(config.effective_rx_frequency)
    payload += _u32le(config.effective_tx_frequency)
    if hardware is not HardwareType.DVMEGA:
        pocsag = (
            config.effective_pocsag_frequency
            if config.pocsag_enabled
            else DEFAULT_POCSAG_FREQUENCY
        )
        payload.append(level_byte(config.rf_level))
        payload += _u32le(pocsag)
    return build_frame(MMDVM_SET_FREQ, bytes(payload))


def build_set_mode(mode: int) -> bytes:
    """Build a SET_MODE frame."""
    return build_frame(MMDVM_SET_MODE, bytes([mode & 0xFF]))


def build_cw_id(callsign: str) -> bytes:
    """Build a SEND_CWID frame; the text is cut to 200 characters."""
    text = callsign[:MAX_CW_ID_LENGTH].encode("latin-1", errors="replace")
    return build_frame(MMDVM_SEND_CWID, text)


def build_get_status() -> bytes:
    """Build a GET_STATUS request."""
    return build_frame(MMDVM_GET_STATUS)


def build_get_version() -> bytes:
    """Build a GET_VERSION request."""
    return build_frame(MMDVM_GET_VERSION)


def build_serial(data: bytes) -> bytes:
    """Build a frame carrying serial data through the modem."""
    if not data:
        raise ValueError("serial data must not be empty")
    return build_frame(MMDVM_SERIAL_DATA, bytes(data))


def build_ip_info(address: str) -> bytes:
    """Build the QSO_INFO frame that shows an IP address on the modem display."""
    raw = address.encode("ascii")
    if len(raw) > MAX_IP_INFO_LENGTH:
        raise ValueError(
            f"an address can hold at most {MAX_IP_INFO_LENGTH} characters, got {len(raw)}"
        )
    return build_frame(MMDVM_QSO_INFO, bytes([IP_INFO_MARKER]) + raw)