"""
xmltv2vdr.record - Program record

Everything collected for one programme between its start and end events,
including the per-element scratch state. A record is owned by the
accumulator and replaced by a fresh one for every programme.
"""

from dataclasses import dataclass
from typing import Optional

from .credits import CreditsFormatter
from .language import LanguageResolver

# VDR event ids are 16 bit
EVENT_ID_MODULO = 65536


@dataclass
class ProgramRecord:
    """A programme being accumulated"""
    channel: str
    start: int
    stop: int
    resolver: LanguageResolver
    credits: CreditsFormatter

    title: str = ""
    short_text: str = ""
    description: str = ""
    air_date: str = ""
    genre: str = ""
    rating: str = ""
    episode_label: str = ""
    episode_short: str = ""
    star_rating: str = ""

    # Per-element scratch state
    element_text: str = ""
    element_language: str = ""
    actor_role: str = ""
    episode_system: Optional[str] = None
    episode_done: bool = False
    value_owner: Optional[str] = None

    @property
    def program_id(self) -> int:
        """VDR event id derived from the start minute"""
        return (self.start // 60) % EVENT_ID_MODULO

    @property
    def duration(self) -> int:
        return self.stop - self.start

    @property
    def credits_text(self) -> str:
        return self.credits.text

    @property
    def credits_count(self) -> int:
        return self.credits.count
