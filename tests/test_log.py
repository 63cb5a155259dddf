import logging
from pathlib import Path

import pytest

from walletsys import log


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8") if path.exists() else ""


@pytest.fixture
def files(tmp_path):
    error_file = tmp_path / "error.log"
    info_file = tmp_path / "info.log"
    log.init(str(error_file), str(info_file))
    return error_file, info_file


def test_get_path_map():
    assert log.get_path_map("err", "info") == {
        logging.CRITICAL: "err",
        logging.ERROR: "err",
        logging.WARNING: "err",
        logging.INFO: "info",
        logging.DEBUG: "info",
    }


def test_debugln_without_args_writes_to_info_file(files):
    error_file, info_file = files
    log.debugln()
    assert "level=DEBUG" in _read(info_file)
    assert _read(error_file) == ""


def test_infoln_writes_to_info_file(files):
    error_file, info_file = files
    log.infoln("hello")
    assert "hello" in _read(info_file)
    assert "hello" not in _read(error_file)


def test_warnln_writes_to_error_file(files):
    error_file, info_file = files
    log.warnln("careful")
    assert "level=WARNING" in _read(error_file)
    assert "careful" not in _read(info_file)


def test_errorln_joins_args_with_spaces(files):
    error_file, _ = files
    log.errorln("Redis.Fetch.Get", 1, "key")
    assert "Redis.Fetch.Get 1 key" in _read(error_file)


def test_fatalln_exits(files):
    error_file, _ = files
    with pytest.raises(SystemExit) as info:
        log.fatalln("app.Init", "down")
    assert info.value.code == 1
    assert "app.Init down" in _read(error_file)


def test_panicln_raises(files):
    error_file, _ = files
    with pytest.raises(RuntimeError, match="invalid prepare query"):
        log.panicln("invalid prepare query", "SELECT")
    assert "level=CRITICAL" in _read(error_file)


def test_init_twice_does_not_duplicate(tmp_path):
    error_file = tmp_path / "e.log"
    info_file = tmp_path / "i.log"
    log.init(str(error_file), str(info_file))
    log.init(str(error_file), str(info_file))
    log.infoln("once")
    assert _read(info_file).count("once") == 1


def test_init_creates_directories(tmp_path):
    error_file = tmp_path / "nested" / "dir" / "e.log"
    info_file = tmp_path / "nested" / "dir" / "i.log"
    log.init(str(error_file), str(info_file))
    log.errorln("boom")
    assert error_file.exists()