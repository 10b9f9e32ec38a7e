"""
Tests for the XML settings file
"""

import logging
import xml.etree.ElementTree as ET

import pytest

from xmltv2vdr.config import ConfigManager


def write_config(path, *settings):
    body = "".join(f'<setting id="{key}">{value}</setting>' for key, value in settings)
    path.write_text(f'<?xml version="1.0" encoding="utf-8"?><settings version="1">{body}</settings>',
                    encoding="utf-8")
    return path


def test_default_file_is_created(tmp_path):
    config_file = tmp_path / "conf" / "xmltv2vdr.xml"
    config = ConfigManager(config_file, workdir=tmp_path).load_config()

    assert config_file.exists()
    assert config["channels"] == "channels.conf"
    assert config["host"] == "localhost"
    assert config["port"] == 6419
    assert config["timeout"] == 60
    assert config["lang"] == "en"
    assert config["extras"] is False


def test_values_are_converted(tmp_path):
    config_file = write_config(
        tmp_path / "settings.xml",
        ("desclen", "200"), ("extras", "true"), ("simulate", "yes"), ("adjust", "-60"),
    )
    config = ConfigManager(config_file).load_config()
    assert config["desclen"] == 200
    assert config["extras"] is True
    assert config["simulate"] is True
    assert config["adjust"] == -60


def test_value_attribute(tmp_path):
    config_file = tmp_path / "settings.xml"
    config_file.write_text('<settings><setting id="host" value="vdr.local"/></settings>',
                           encoding="utf-8")
    assert ConfigManager(config_file).load_config()["host"] == "vdr.local"


def test_command_line_overrides_file(tmp_path):
    config_file = write_config(tmp_path / "settings.xml", ("host", "vdr.local"), ("port", "2001"))
    config = ConfigManager(config_file).load_config({"host": "other", "port": None})
    assert config["host"] == "other"
    assert config["port"] == 2001


def test_invalid_values_fall_back_to_defaults(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    config_file = write_config(
        tmp_path / "settings.xml",
        ("timeout", "soon"), ("credits", "-3"), ("port", "70000"), ("colour", "blue"),
    )
    config = ConfigManager(config_file).load_config()
    assert config["timeout"] == 60
    assert config["credits"] == 0
    assert config["port"] == 6419
    assert "Unknown configuration setting: colour" in caplog.text


def test_malformed_file(tmp_path):
    config_file = tmp_path / "settings.xml"
    config_file.write_text("<settings>", encoding="utf-8")
    with pytest.raises(ET.ParseError):
        ConfigManager(config_file).load_config()


class TestPaths:

    def test_relative_path_uses_default_workdir(self, tmp_path):
        (tmp_path / "conf").mkdir()
        config_file = write_config(tmp_path / "conf" / "settings.xml", ("channels", "channels.conf"))
        manager = ConfigManager(config_file, workdir=tmp_path)
        manager.load_config()
        assert manager.resolve_path("channels") == tmp_path / "channels.conf"

    def test_workdir_setting(self, tmp_path):
        config_file = write_config(
            tmp_path / "settings.xml", ("workdir", str(tmp_path / "data")), ("xmltv", "guide.xml"),
        )
        manager = ConfigManager(config_file)
        manager.load_config()
        assert manager.resolve_path("xmltv") == tmp_path / "data" / "guide.xml"

    def test_absolute_path_is_kept(self, tmp_path):
        genres = tmp_path / "elsewhere" / "genres.conf"
        config_file = write_config(tmp_path / "settings.xml", ("genres", str(genres)))
        manager = ConfigManager(config_file, workdir=tmp_path / "work")
        manager.load_config()
        assert manager.resolve_path("genres") == genres

    def test_empty_setting_has_no_path(self, tmp_path):
        manager = ConfigManager(write_config(tmp_path / "settings.xml"))
        manager.load_config()
        assert manager.resolve_path("ratings") is None
