"""
Tests for VDR EPG record generation
"""

import pytest

from xmltv2vdr.credits import CreditsFormatter
from xmltv2vdr.language import LanguageResolver
from xmltv2vdr.record import ProgramRecord
from xmltv2vdr.renderer import EpgRenderer

START = 1704070800


def make_record(**fields):
    return ProgramRecord(
        channel="das-erste.de",
        start=START,
        stop=START + 3600,
        resolver=LanguageResolver("en"),
        credits=CreditsFormatter(),
        **fields,
    )


def test_empty_record():
    text = EpgRenderer().render(make_record())
    event_id = (START // 60) % 65536
    assert text == f"E {event_id} {START} 3600 0\r\nG FF\r\ne\r\n"


def test_priority_is_table_id():
    text = EpgRenderer(priority=3).render(make_record())
    assert text.split("\r\n")[0].endswith(" 3")


def test_full_record():
    record = make_record(
        title="Crime Scene",
        short_text="The Case",
        description="A detective story.",
        air_date="( 2023 )",
        genre="10",
        episode_label="Season 2 - Episode 3 ",
        episode_short="s02e03",
        star_rating="Rating : 4/5",
    )
    record.credits.add("director", "Jane Doe")

    lines = EpgRenderer().render(record).split("\r\n")
    assert lines[1] == "T Crime Scene"
    assert lines[2] == "S The Case"
    assert lines[3] == (
        "D Season 2 - Episode 3 ( 2023 )|A detective story.|Director : Jane Doe.|Rating : 4/5"
    )
    assert lines[4] == "G 10"
    assert lines[5] == "e"
    assert lines[6] == ""


def test_short_code_replaces_missing_short_text():
    record = make_record(
        title="Show",
        description="Plot.",
        episode_label="Season 2 - Episode 3 ",
        episode_short="s02e03",
    )
    lines = EpgRenderer().render(record).split("\r\n")
    assert "S s02e03" in lines
    assert "D Plot.|" in lines


def test_label_dropped_without_short_text_or_code():
    record = make_record(episode_label="1.2.0/3 ", air_date="( 2023 )")
    lines = EpgRenderer().render(record).split("\r\n")
    assert not any(line.startswith("S ") for line in lines)
    assert "D ( 2023 )|" in lines


@pytest.mark.parametrize(
    "star_rating, expected",
    [
        ("", "D Director : Jane Doe."),
        ("Rating : 3", "D Director : Jane Doe.|Rating : 3"),
    ],
)
def test_credits_terminator(star_rating, expected):
    record = make_record(star_rating=star_rating)
    record.credits.add("director", "Jane Doe")
    assert expected in EpgRenderer().render(record).split("\r\n")


def test_record_count():
    renderer = EpgRenderer()
    renderer.render(make_record())
    renderer.render(make_record())
    assert renderer.record_count == 2
