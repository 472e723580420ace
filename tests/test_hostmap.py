import logging

import pytest

from m17spot.hostmap import Host, HostMap, get_base

LINE_V4 = "M17-ABC;1.0;abc.example.com;192.0.2.10;;ABC;;17000;src;\n"
LINE_V6 = "M17-DEF;1.0;def.example.com;;2001:db8::1;AB;;17001;src;https://def.example.com\n"
LINE_BOTH = "M17-GHI;1.0;ghi.example.com;192.0.2.11;2001:db8::2;A;;17002;src;x\n"


def write_hosts(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_get_base_cuts_at_delimiter():
    assert get_base("M17-ABC C") == "M17-ABC"
    assert get_base("N0CALL/P") == "N0CALL"
    assert get_base("N0CALL.X") == "N0CALL"


def test_get_base_limits_length():
    assert get_base("ABCDEFGHIJ") == "ABCDEFGH"
    assert get_base("ABCDEFGHIJ K") == "ABCDEFGH"


def test_get_base_rejects_short_prefix():
    with pytest.raises(ValueError):
        get_base("AB/C")


def test_add_and_find_by_module_callsign():
    hosts = HostMap(has_ipv4=True, has_ipv6=False)
    hosts.add(Host(cs="M17-ABC", ipv4address="192.0.2.10", port=17000))
    found = hosts.find("M17-ABC C")
    assert found is not None
    assert found.ipv4address == "192.0.2.10"
    assert found.port == 17000
    assert len(hosts) == 1


def test_add_drops_disabled_families():
    hosts = HostMap(has_ipv4=True, has_ipv6=False)
    hosts.add(Host(cs="M17-DEF", ipv6address="2001:db8::1"))
    assert hosts.find("M17-DEF") is None
    hosts.add(Host(cs="M17-GHI", ipv4address="192.0.2.11", ipv6address="2001:db8::2"))
    found = hosts.find("M17-GHI")
    assert found.ipv6address == ""
    assert found.ipv4address == "192.0.2.11"


def test_add_redefines_host():
    hosts = HostMap(has_ipv4=True, has_ipv6=True)
    hosts.add(Host(cs="M17-ABC", ipv4address="192.0.2.10", port=1))
    hosts.add(Host(cs="M17-ABC", ipv4address="192.0.2.20", port=2))
    assert len(hosts) == 1
    assert hosts.find("M17-ABC").ipv4address == "192.0.2.20"


def test_add_bad_callsign_ignored():
    hosts = HostMap()
    hosts.add(Host(cs="A/BC", ipv4address="192.0.2.10"))
    assert len(hosts) == 0


def test_find_bad_callsign_returns_none():
    hosts = HostMap()
    assert hosts.find(" X") is None


def test_read_file(tmp_path):
    text = "# comment\n\n" + LINE_V4 + LINE_V6 + LINE_BOTH
    path = write_hosts(tmp_path, "hosts.txt", text)
    hosts = HostMap(has_ipv4=True, has_ipv6=True)
    hosts.read(path)
    assert len(hosts) == 3
    abc = hosts.find("M17-ABC A")
    assert abc.domainname == "abc.example.com"
    assert abc.mods == "ABC"
    assert abc.port == 17000
    defh = hosts.find("M17-DEF")
    assert defh.url == "https://def.example.com"


def test_read_skips_wrong_field_count(tmp_path, caplog):
    path = write_hosts(tmp_path, "hosts.txt", "M17-XYZ;1.0;only;three\n" + LINE_V4)
    hosts = HostMap(has_ipv4=True)
    with caplog.at_level(logging.WARNING):
        hosts.read(path)
    assert len(hosts) == 1
    assert hosts.find("M17-XYZ") is None
    assert "Line #1" in caplog.text


def test_read_missing_file_warns(tmp_path, caplog):
    hosts = HostMap()
    with caplog.at_level(logging.WARNING):
        hosts.read(tmp_path / "absent.txt")
    assert len(hosts) == 0
    assert "Could not open file" in caplog.text


def test_read_all_replaces_and_merges(tmp_path):
    public = write_hosts(tmp_path, "public.txt", LINE_V4 + LINE_BOTH)
    local = write_hosts(
        tmp_path, "local.txt", "M17-ABC;1.0;mine;192.0.2.99;;A;;17010;me;\n"
    )
    hosts = HostMap(has_ipv4=True, has_ipv6=False)
    hosts.add(Host(cs="M17-OLD", ipv4address="192.0.2.1"))
    hosts.read_all(public, local)
    assert hosts.find("M17-OLD") is None
    assert len(hosts) == 2
    assert hosts.find("M17-ABC").ipv4address == "192.0.2.99"


def test_read_invalid_port_raises(tmp_path):
    path = write_hosts(tmp_path, "hosts.txt", "M17-ABC;1;d;192.0.2.1;;A;;port;s;u\n")
    with pytest.raises(ValueError):
        HostMap().read(path)