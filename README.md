# m17spot

Pure-Python building blocks for an M17-only hotspot or repeater that talks
to an MMDVM modem. The package uses only the standard library.

## Modules

| Module | Contents |
| --- | --- |
| `m17spot.m17utils` | Base-40 callsign coding (`encode_callsign`, `decode_callsign`) and splitting/joining of LICH fragments, plain (four 12-bit words in 6 bytes) and Golay-coded (four 24-bit words in 12 bytes): `split_fragment_lich`, `split_fragment_lich_fec`, `combine_fragment_lich`, `combine_fragment_lich_fec`. |
| `m17spot.convolution` | The punctured rate-1/2, K=5 convolutional code of M17 link setup and stream frames. `encode_link_setup` (30 bytes → 46), `encode_data` (18 bytes → 34), and the Viterbi decoders `decode_link_setup` and `decode_data`, which return a `DecodeResult(data, errors)`. |
| `m17spot.lsf` | `LinkSetupFrame`: a 30-byte link setup frame with `source`, `dest`, `packet_stream`, `data_type`, `encryption_type`, `encryption_sub_type`, `can` and `meta` properties, plus `get_network`, `set_network`, `reset`, `copy` and `valid`. |
| `m17spot.hostmap` | `Host`, `HostMap` and `get_base`: reading semicolon-separated host files and looking hosts up by base callsign. |
| `m17spot.log` | `Logger` and `Level`: timestamped lines to the console and to a plain or daily-rotated log file. |
| `m17spot.mmdvm_frames` | MMDVM serial framing: `build_frame`, the incremental `FrameReader` (raising `ModemReadError` when the port fails), `Frame`, and decoding of replies with `parse_status` → `ModemStatus`, `parse_version` → `VersionInfo`, and `hardware_type` → `HardwareType`. |
| `m17spot.mmdvm_config` | Command frames for the modem: `ModemConfig`, `build_config` (protocol 1 or 2), `build_frequency`, `build_set_mode`, `build_cw_id`, `build_get_status`, `build_get_version`, `build_serial`, `build_ip_info`, and `level_byte`. |
| `m17spot.nullcontroller` | `NullController`: a port with no hardware behind it that answers version, status and configuration commands like protocol-2 firmware. |

## Callsigns

Callsigns are packed into six bytes with the 40-character M17 alphabet
(space, `A`–`Z`, `0`–`9`, `-`, `/`, `.`); at most nine characters are used
and unknown characters count as spaces. `ALL` encodes as six `0xFF` bytes.
`decode_callsign` returns `""` for a value outside the alphabet's range.

```python
from m17spot.m17utils import encode_callsign, decode_callsign

packed = encode_callsign("N7TAE")
assert len(packed) == 6
assert decode_callsign(packed) == "N7TAE"
```

## Forward error correction

```python
from m17spot.convolution import encode_data, decode_data

payload = bytes(range(18))
coded = encode_data(payload)           # 34 bytes
result = decode_data(coded)
assert result.data == payload and result.errors == 0
```

## Link setup frames

`LinkSetupFrame(data)` loads 30 raw bytes and marks the frame valid;
`LinkSetupFrame()` starts empty and invalid. The properties read and write
the bit fields in place:

```python
from m17spot.lsf import LinkSetupFrame

lsf = LinkSetupFrame(bytes(30))
lsf.source = "N0CALL"
lsf.dest = "ALL"
lsf.can = 3
raw = lsf.get_network()
```

The frame carries no CRC handling of its own: `get_network` returns the
bytes as stored.

## Host files

A host file holds one host per line, fields separated by `;`: callsign,
version, domain name, IPv4, IPv6, modules, special modules, port, source
and an optional URL. Blank lines and lines starting with `#` are skipped;
lines with the wrong number of fields are logged and skipped.

`get_base` takes the part of a callsign before its first space, `/` or `.`,
at most eight characters, and raises `ValueError` when that delimiter comes
before the third character. `HostMap.add` keeps only the addresses of the
enabled IP families and skips a host left with none; a later entry with the
same base replaces an earlier one. `HostMap.read` logs a warning for a file
it cannot open; `read_all` clears the table and reads both files in turn.

```python
from m17spot.hostmap import HostMap

hosts = HostMap(has_ipv4=True, has_ipv6=False)
hosts.read_all("M17Hosts.txt", "MyHosts.txt")
print(len(hosts), "hosts known")
host = hosts.find("M17-001 C")   # a Host, or None
```

## Logging

`Logger.open(daemon, path, root, file_level, display_level, rotate)` writes
to `<path>/<root>.log`, or with `rotate` to `<path>/<root>-YYYY-MM-DD.log`
(UTC date), and raises `OSError` if the file cannot be opened. A level of 0
turns a sink off; in daemon mode the console is off and standard error is
redirected into the log file. `Logger.log(level, message)` writes lines at
or above each threshold; a `Level.FATAL` message closes the file and raises
`SystemExit(1)`.

## Talking to a modem

`FrameReader` pulls frames from any object with a `read(length)` method,
keeping a partly received frame between calls and returning `None` until a
frame is complete. `NullController` makes it possible to try this without a
device:

```python
from m17spot.nullcontroller import NullController
from m17spot.mmdvm_config import build_get_version, build_get_status
from m17spot.mmdvm_frames import FrameReader, parse_version, parse_status

port = NullController()
port.open()
reader = FrameReader(port)

port.write(build_get_version())
info = parse_version(reader.get_response())
print(info.protocol_version, info.description, info.has_m17)

port.write(build_get_status())
status = parse_status(info.protocol_version, reader.get_response())
print(status.m17_space)
```

`build_config` and `build_frequency` turn a `ModemConfig` into the
SET_CONFIG and SET_FREQ frames; a DVMEGA gets the short frequency frame
without RF level and POCSAG frequency. Levels are given in percent and
converted by `level_byte`.

## What the package does not do

This package holds the pieces, not a running hotspot. It has no command to
start, no configuration-file reader, no serial, I2C or UDP modem ports, no
loop that drives a modem, no M17 stream state handling, no Golay or CRC
code, and no gateway that links to reflectors over the network or plays
voice announcements.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
directory.