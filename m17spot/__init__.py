"""Building blocks for an M17-only hotspot: callsign coding, FEC, link setup frames, host lists, logging and MMDVM framing."""

__version__ = "0.1.4"

__all__ = [
    "convolution",
    "hostmap",
    "log",
    "lsf",
    "m17utils",
    "mmdvm_config",
    "mmdvm_frames",
    "nullcontroller",
]