"""A table of reachable M17 reflectors read from semicolon-separated host files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)

_BASE_DELIMITERS = " /."
_MAX_BASE_LENGTH = 8
_FIELDS = 10


@dataclass(frozen=True)
class Host:
    """One reflector entry."""

    cs: str
    version: str = ""
    domainname: str = ""
    ipv4address: str = ""
    ipv6address: str = ""
    mods: str = ""
    smods: str = ""
    port: int = 0
    source: str = ""
    url: str = ""


def get_base(callsign: str) -> str:
    """Return the base of a callsign, up to its first ' ', '/' or '.'; at most 8 chars."""
    positions = [p for p in (callsign.find(c) for c in _BASE_DELIMITERS) if p >= 0]
    if positions:
        pos = min(positions)
        if pos < 3:
            raise ValueError(f"'{callsign}' is not a callsign!")
    else:
        pos = _MAX_BASE_LENGTH
    return callsign[:min(pos, _MAX_BASE_LENGTH)]


def _split_fields(line: str) -> list[str]:
    fields = line.split(";")
    if fields and fields[-1] == "":
        fields.pop()
    return fields


class HostMap:
    """Hosts keyed by callsign base, limited to the enabled IP families."""

    def __init__(self, has_ipv4: bool = True, has_ipv6: bool = False) -> None:
        self.has_ipv4 = has_ipv4
        self.has_ipv6 = has_ipv6
        self._hosts: dict[str, Host] = {}

    def __len__(self) -> int:
        return len(self._hosts)

    def add(self, host: Host) -> None:
        """Add or redefine a host; hosts without a usable address are skipped."""
        try:
            base = get_base(host.cs)
        except ValueError as exc:
            logger.warning("%s", exc)
            return

        ipv4 = host.ipv4address if self.has_ipv4 else ""
        ipv6 = host.ipv6address if self.has_ipv6 else ""
        if not ipv4 and not ipv6:
            logger.info("Host %s doesn't have a compatible IP address", host.cs)
            return
        if base in self._hosts:
            logger.info("Host %s is being redefined", host.cs)
        self._hosts[base] = replace(host, ipv4address=ipv4, ipv6address=ipv6)

    def read(self, path: str | Path) -> None:
        """Add every host listed in a file; a missing file is only warned about."""
        try:
            handle = open(path, encoding="utf-8", errors="replace")
        except OSError:
            logger.warning("Could not open file '%s'", path)
            return

        with handle:
            for count, raw in enumerate(handle, start=1):
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                fields = _split_fields(line)
                if len(fields) == _FIELDS - 1:
                    fields.append("")
                if len(fields) != _FIELDS:
                    logger.warning(
                        "Line #%u of %s has %u elements, needs 10 item",
                        count, path, len(fields),
                    )
                    continue
                cs, version, dn, ip4, ip6, mods, smods, port, src, url = fields
                self.add(
                    Host(
                        cs=cs,
                        version=version,
                        domainname=dn,
                        ipv4address=ip4,
                        ipv6address=ip6,
                        mods=mods,
                        smods=smods,
                        port=int(port) & 0xFFFF,
                        source=src,
                        url=url,
                    )
                )

    def read_all(self, host_path: str | Path, my_host_path: str | Path) -> None:
        """Replace the table with the contents of the public and the local host files."""
        self._hosts.clear()
        self.read(host_path)
        self.read(my_host_path)
        logger.info("Read %u Hosts", len(self._hosts))

    def find(self, callsign: str) -> Host | None:
        """Look up a host by any callsign sharing its base."""
        try:
            base = get_base(callsign)
        except ValueError as exc:
            logger.warning("%s", exc)
            return None
        return self._hosts.get(base)