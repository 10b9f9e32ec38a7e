"""
Tests for command line parsing
"""

from pathlib import Path

import pytest

from xmltv2vdr.args import ArgumentParser, ArgumentValidator, PathManager


@pytest.fixture
def parser():
    return ArgumentParser()


def test_setting_overrides(parser):
    args = parser.parse_args(["-c", "channels.conf", "-x", "guide.xml", "-d", "vdr.local",
                              "-p", "2001", "-l", "300", "-X"])
    overrides = parser.get_setting_overrides(args)
    assert overrides["channels"] == "channels.conf"
    assert overrides["xmltv"] == "guide.xml"
    assert overrides["host"] == "vdr.local"
    assert overrides["port"] == 2001
    assert overrides["desclen"] == 300
    assert overrides["extras"] is True
    assert overrides["simulate"] is None
    assert overrides["timeout"] is None


@pytest.mark.parametrize(
    "argv, level",
    [
        ([], "warning"),
        (["-v"], "info"),
        (["-q"], "error"),
        (["-D"], "debug"),
    ],
)
def test_logging_levels(parser, argv, level):
    config = parser.get_logging_config(parser.parse_args(argv))
    assert config["level"] == level
    assert config == {"level": level, "file": "-D" in argv}


def test_quiet_and_verbose_are_exclusive(parser):
    with pytest.raises(SystemExit):
        parser.parse_args(["-q", "-v"])


@pytest.mark.parametrize("argv", [["-l", "-1"], ["-L", "-5"], ["-t", "-1"], ["-p", "70000"]])
def test_out_of_range_values_exit(parser, argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(argv)
    assert excinfo.value.code == 2
    assert "out of range" in capsys.readouterr().err


def test_version(parser, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("xmltv2vdr ")


def test_validator():
    assert ArgumentValidator.validate_non_negative("--desclen", 0) == (True, None)
    assert ArgumentValidator.validate_port(None) == (True, None)
    is_valid, error = ArgumentValidator.validate_port(-1)
    assert not is_valid
    assert "--port" in error


def test_default_paths(tmp_path):
    defaults = PathManager.get_system_defaults(str(tmp_path))
    assert defaults["config_file"] == tmp_path / "conf" / "xmltv2vdr.xml"
    assert defaults["log_file"] == tmp_path / "log" / "debug.log"


def test_default_paths_in_home():
    assert PathManager.get_system_defaults()["base_dir"] == Path.home() / "xmltv2vdr"
