import re
from datetime import datetime, timezone

import pytest

from m17spot.log import Level, Logger

LINE = re.compile(r"^(.): \d\d/\d\d \d\d:\d\d:\d\d\.\d{3} (.*)$")


def read_lines(path):
    return path.read_text().splitlines()


def test_file_log_without_rotation(tmp_path):
    log = Logger()
    log.open(False, tmp_path, "mspot", 1, 0, False)
    log.log(Level.INFO, "hello")
    log.close()
    lines = read_lines(tmp_path / "mspot.log")
    assert len(lines) == 1
    match = LINE.match(lines[0])
    assert match is not None
    assert match.group(1) == "M"
    assert match.group(2) == "hello"


@pytest.mark.parametrize(
    "level,char",
    [(Level.DEBUG, "D"), (Level.MESSAGE, "D"), (Level.WARNING, "I"), (Level.ERROR, "W")],
)
def test_level_characters(tmp_path, level, char):
    log = Logger()
    log.open(False, tmp_path, "lv", 1, 0, False)
    log.log(level, "x")
    log.close()
    assert LINE.match(read_lines(tmp_path / "lv.log")[0]).group(1) == char


def test_below_file_level_is_not_written(tmp_path):
    log = Logger()
    log.open(False, tmp_path, "mspot", 4, 0, False)
    log.log(Level.INFO, "quiet")
    log.log(Level.ERROR, "loud")
    log.close()
    lines = read_lines(tmp_path / "mspot.log")
    assert [LINE.match(line).group(2) for line in lines] == ["loud"]


def test_file_level_zero_creates_no_file(tmp_path):
    log = Logger()
    log.open(False, tmp_path, "mspot", 0, 0, False)
    log.log(Level.ERROR, "nothing")
    log.close()
    assert list(tmp_path.iterdir()) == []


def test_rotating_file_name_uses_utc_date(tmp_path):
    log = Logger()
    log.open(False, tmp_path, "mspot", 1, 0, True)
    log.log(Level.INFO, "rotated")
    log.close()
    files = [p.name for p in tmp_path.iterdir()]
    assert len(files) == 1
    name = files[0]
    assert re.fullmatch(r"mspot-\d{4}-\d\d-\d\d\.log", name)
    stamp = datetime.strptime(name[6:16], "%Y-%m-%d").date()
    assert abs((stamp - datetime.now(timezone.utc).date()).days) <= 1


def test_display_output(tmp_path, capsys):
    log = Logger()
    log.open(False, tmp_path, "mspot", 0, 2, False)
    log.log(Level.DEBUG, "hidden")
    log.log(Level.MESSAGE, "shown")
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 1
    assert LINE.match(out[0]).group(2) == "shown"


def test_daemon_disables_display(tmp_path, capsys):
    log = Logger()
    log.open(True, tmp_path, "mspot", 0, 1, False)
    log.log(Level.ERROR, "not on screen")
    assert capsys.readouterr().out == ""


def test_message_is_truncated(tmp_path):
    log = Logger()
    log.open(False, tmp_path, "mspot", 1, 0, False)
    log.log(Level.INFO, "a" * 1000)
    log.close()
    message = LINE.match(read_lines(tmp_path / "mspot.log")[0]).group(2)
    assert len(message) < 1000
    assert set(message) == {"a"}


def test_fatal_exits(tmp_path):
    log = Logger()
    log.open(False, tmp_path, "mspot", 1, 0, False)
    with pytest.raises(SystemExit) as info:
        log.log(Level.FATAL, "boom")
    assert info.value.code == 1
    lines = read_lines(tmp_path / "mspot.log")
    assert LINE.match(lines[-1]).group(2) == "boom"


def test_open_in_missing_directory_raises(tmp_path):
    log = Logger()
    with pytest.raises(OSError):
        log.open(False, tmp_path / "missing" / "dir", "mspot", 1, 0, False)