"""
Shared fixtures: lookup files, lookup tables and a small XMLTV document.
"""

import pytest

from xmltv2vdr.dictionaries import reload_translations
from xmltv2vdr.tables import LookupTables

# 2024-01-01 00:00:00 UTC
NOW = 1704067200

CHANNELS_CONF = """\
# VDR channels with the xmltv ids in the 14th field
:Satellite
Das Erste HD;ARD:11494:HC23M5O35P0S1:S19.2E:22000:5101=27:5102=deu@3:5104:0:10301:1:1019:0:das-erste.de
Local:522000:M64:C:6900:101:102:103:0:28:0:1051:0:local.tv,local-alt.tv
TNT:474000000:B8:T:0:201:202:0:0:100:0:5:0:tnt.fr
Unmapped:12188:h:S19.2E:27500:0:0:0:0:9:1:1:0
"""

GENRES_CONF = """\
# category:code
Movie:10
News / Current affairs:20
"""

RATINGS_CONF = """\
12:FSK12
PG:PG
"""

SAMPLE_XMLTV = b"""<?xml version="1.0" encoding="UTF-8"?>
<tv>
  <channel id="das-erste.de"><display-name>Das Erste</display-name></channel>
  <programme start="20240101010000 +0000" stop="20240101020000 +0000" channel="das-erste.de">
    <title lang="de">Tatort</title>
    <title lang="en">Crime Scene</title>
    <sub-title lang="en">The Case</sub-title>
    <desc lang="en">A detective story.</desc>
    <credits>
      <director>Jane Doe</director>
      <actor role="Hero">John Doe</actor>
      <actor>Max Roe</actor>
    </credits>
    <date>2023</date>
    <category lang="en">Movie</category>
    <episode-num system="xmltv_ns">1.2.0/3</episode-num>
    <rating system="FSK"><value>12</value></rating>
    <star-rating><value>4/5</value></star-rating>
  </programme>
  <programme start="20240101020000 +0000" stop="20240101023000 +0000" channel="local.tv">
    <title>Evening News</title>
  </programme>
</tv>
"""


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def channels_file(tmp_path):
    path = tmp_path / "channels.conf"
    path.write_text(CHANNELS_CONF, encoding="utf-8")
    return path


@pytest.fixture
def genres_file(tmp_path):
    path = tmp_path / "genres.conf"
    path.write_text(GENRES_CONF, encoding="utf-8")
    return path


@pytest.fixture
def ratings_file(tmp_path):
    path = tmp_path / "ratings.conf"
    path.write_text(RATINGS_CONF, encoding="utf-8")
    return path


@pytest.fixture
def lookup_tables(channels_file, genres_file, ratings_file):
    return LookupTables.load(channels_file, genres_file, ratings_file)


@pytest.fixture
def sample_xmltv():
    return SAMPLE_XMLTV


@pytest.fixture
def xmltv_file(tmp_path):
    path = tmp_path / "guide.xml"
    path.write_bytes(SAMPLE_XMLTV)
    return path


@pytest.fixture
def default_translations():
    """Restore the packaged catalogs after a test swapped them"""
    yield
    reload_translations()
