"""A modem port that needs no hardware and answers like protocol-2 firmware."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

MMDVM_FRAME_START = 0xE0
MMDVM_GET_VERSION = 0x00
MMDVM_GET_STATUS = 0x01
MMDVM_SET_CONFIG = 0x02
MMDVM_SET_MODE = 0x03
MMDVM_SET_FREQ = 0x04
MMDVM_FM_PARAMS1 = 0x60
MMDVM_FM_PARAMS2 = 0x61
MMDVM_FM_PARAMS3 = 0x62
MMDVM_FM_PARAMS4 = 0x63
MMDVM_ACK = 0x70

PROTOCOL_VERSION = 2
HARDWARE = "Null Modem Controller"
BUFFER_SIZE = 200

_ACKED = frozenset(
    (
        MMDVM_SET_CONFIG,
        MMDVM_SET_FREQ,
        MMDVM_SET_MODE,
        MMDVM_FM_PARAMS1,
        MMDVM_FM_PARAMS2,
        MMDVM_FM_PARAMS3,
        MMDVM_FM_PARAMS4,
    )
)


class NullController:
    """Replies to version, status and configuration commands from a local buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self.is_open = False

    def open(self) -> bool:
        """Mark the port open; a null port always opens."""
        self.is_open = True
        return True

    def close(self) -> None:
        """Mark the port closed."""
        self.is_open = False

    def read(self, length: int) -> bytes:
        """Return up to ``length`` queued reply bytes."""
        chunk = bytes(self._buffer[:length])
        del self._buffer[:length]
        return chunk

    def write(self, data: bytes) -> int:
        """Accept a command frame and queue the reply it calls for."""
        if len(data) > 2:
            command = data[2]
            if command == MMDVM_GET_VERSION:
                self._queue(self._version_reply())
            elif command == MMDVM_GET_STATUS:
                self._queue(self._status_reply())
            elif command in _ACKED:
                self._queue(bytes((MMDVM_FRAME_START, 4, MMDVM_ACK, command)))
        return len(data)

    def _queue(self, reply: bytes) -> None:
        if len(self._buffer) + len(reply) > BUFFER_SIZE:
            logger.error("Overflow in the Null Controller Buffer")
            return
        self._buffer += reply

    @staticmethod
    def _version_reply() -> bytes:
        reply = bytearray((MMDVM_FRAME_START, 0, MMDVM_GET_VERSION, PROTOCOL_VERSION))
        reply += b"\xff\xff"  # mode capabilities
        reply.append(2)  # CPU type: ST-Micro ARM
        reply += bytes(16)  # UDID
        reply += HARDWARE.encode("ascii")
        reply[1] = len(reply)
        return bytes(reply)

    @staticmethod
    def _status_reply() -> bytes:
        reply = bytearray(20)
        reply[0] = MMDVM_FRAME_START
        reply[1] = 20
        reply[2] = MMDVM_GET_STATUS
        for index in (6, 7, 8, 9, 10, 11, 12, 13, 16, 17):
            reply[index] = 20
        return bytes(reply)