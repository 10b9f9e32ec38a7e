"""
xmltv2vdr.accumulator - Programme state machine

Consumes guide events and builds one program record per XMLTV programme.
Two states: idle (no record) and in-programme (record held). A completed
programme is rendered and appended to its channel's text in the store.
"""

import logging
import re
import time
from typing import Dict, Iterable, Optional

from .credits import CREDIT_ROLES, CreditsFormatter
from .dictionaries import get_term_translation
from .episode import EpisodeNumberEncoder
from .events import PROGRAMME, ElementEnd, ElementStart, GuideEvent, ProgramStart, Text
from .language import LanguageResolver
from .record import ProgramRecord
from .renderer import EpgRenderer
from .store import ChannelRecordStore
from .tables import LookupTables
from .utils import TimeUtils

# Programmes that ended more than this many seconds ago are dropped
OUTDATED_SECONDS = 3600

LOCALIZED_ELEMENTS = ("title", "sub-title", "desc", "category")

# Line breaks inside element text, with the blanks around them
LINE_BREAKS = re.compile(r"\s*[\r\n]+\s*")


class ProgramAccumulator:
    """Turns guide events into rendered EPG records"""

    def __init__(
        self,
        tables: LookupTables,
        store: ChannelRecordStore,
        renderer: Optional[EpgRenderer] = None,
        adjust: int = 0,
        description_length: int = 0,
        credits_length: int = 0,
        language: str = "en",
        extras: bool = False,
        now: Optional[float] = None,
    ):
        """
        Args:
            tables: Channel, genre and rating lookup tables
            store: Destination of rendered records
            renderer: Record renderer (priority 0 when omitted)
            adjust: Minutes added to every start and stop time
            description_length: Description truncation, 0 keeps everything
            credits_length: Maximum credits kept, 0 keeps everything
            language: Preferred language tag
            extras: Capture the episode-num system and the star-rating
            now: Current time, defaults to time.time()
        """
        self.tables = tables
        self.store = store
        self.renderer = renderer or EpgRenderer()
        self.adjust = adjust
        self.description_length = description_length
        self.credits_length = credits_length
        self.language = language
        self.extras = extras
        self.pivot_time = (time.time() if now is None else now) - OUTDATED_SECONDS
        self.episode_encoder = EpisodeNumberEncoder(language)

        self.record: Optional[ProgramRecord] = None
        self.stats: Dict[str, int] = {
            "programmes": 0,
            "stored": 0,
            "split": 0,
            "outdated": 0,
            "invalid": 0,
            "unknown_genres": 0,
            "unknown_ratings": 0,
        }

    @property
    def in_program(self) -> bool:
        return self.record is not None

    def consume(self, events: Iterable[GuideEvent]):
        """Feed a whole event sequence"""
        for event in events:
            self.feed(event)

    def feed(self, event: GuideEvent):
        """Process one guide event"""
        if isinstance(event, ProgramStart):
            self._start_program(event)
        elif self.record is None:
            # Idle: stray children of a rejected programme
            return
        elif isinstance(event, ElementStart):
            self._start_element(event)
        elif isinstance(event, Text):
            self.record.element_text += event.text
        elif isinstance(event, ElementEnd):
            self._end_element(event)

    # Transitions

    def _start_program(self, event: ProgramStart):
        self.record = None
        self.stats["programmes"] += 1
        channel_name = self.tables.channels.get_name(event.channel)

        # Programmes split over several elements are not reassembled
        if event.clumpidx:
            logging.warning("Found split programme for %s", channel_name)
            self.stats["split"] += 1
            return

        try:
            start = TimeUtils.xmltv_to_epoch(event.start, self.adjust)
            stop = TimeUtils.xmltv_to_epoch(event.stop, self.adjust)
        except ValueError as e:
            logging.warning("Found invalid programme times for %s: %s", channel_name, e)
            self.stats["invalid"] += 1
            return

        if stop < self.pivot_time:
            logging.warning("Found outdated programme for %s", channel_name)
            self.stats["outdated"] += 1
            return

        self.record = ProgramRecord(
            channel=event.channel,
            start=start,
            stop=stop,
            resolver=LanguageResolver(self.language),
            credits=CreditsFormatter(self.credits_length, self.language),
        )

    def _start_element(self, event: ElementStart):
        record = self.record
        name = event.name
        attributes = event.attributes

        record.element_text = ""
        record.resolver.track(name)
        record.element_language = attributes.get("lang", "")

        if name == "actor":
            record.actor_role = attributes.get("role", "")
        elif name == "episode-num":
            # Only the first numbering scheme of a programme is honored
            if self.extras and record.episode_system is None and not record.episode_done:
                record.episode_system = attributes.get("system") or None
        elif name == "rating":
            record.value_owner = name
        elif name == "star-rating" and self.extras:
            record.value_owner = name

    def _end_element(self, event: ElementEnd):
        record = self.record
        name = event.name

        if name == PROGRAMME:
            self._complete_program()
            return

        # Every EPG field is a single PUTE line
        text = LINE_BREAKS.sub(" ", record.element_text.strip())
        record.element_text = ""

        if name in LOCALIZED_ELEMENTS:
            value = record.resolver.resolve(text, record.element_language)
            if name == "title":
                record.title = value
            elif name == "sub-title":
                record.short_text = value
            elif name == "desc":
                if self.description_length:
                    value = value[: self.description_length]
                record.description = value
            else:
                self._set_genre(value)
        elif name == "date":
            record.air_date = f"( {text} )"
        elif name in CREDIT_ROLES:
            if text:
                record.credits.add(name, text, record.actor_role or None)
            record.actor_role = ""
        elif name == "episode-num":
            if not record.episode_done:
                episode = self.episode_encoder.encode(text, record.episode_system)
                record.episode_label = episode.label
                record.episode_short = episode.short_code
                record.episode_done = True
        elif name == "value":
            if record.value_owner == "rating":
                self._add_rating(text)
            elif record.value_owner == "star-rating":
                word = get_term_translation("Rating", self.language)
                record.star_rating = f"{word} : {text}"
            record.value_owner = None
        elif name == "rating":
            # Rating given as direct text instead of a nested value
            if text:
                self._add_rating(text)
            record.value_owner = None
        elif name == "star-rating":
            record.value_owner = None

    def _set_genre(self, category: str):
        genre = self.tables.genres.get(category)
        if genre:
            self.record.genre = genre
        else:
            logging.warning("Genre unknown : %s", category)
            self.stats["unknown_genres"] += 1

    def _add_rating(self, value: str):
        rating = self.tables.ratings.get(value)
        if rating:
            self.record.rating += rating
        else:
            logging.warning("Rating unknown : %s", value)
            self.stats["unknown_ratings"] += 1

    def _complete_program(self):
        record = self.record
        entry = self.renderer.render(record)
        self.store.append(record.channel, entry)
        self.stats["stored"] += 1
        logging.debug("Add programme :\n%s", entry)
        self.record = None

    def get_statistics(self) -> Dict[str, int]:
        return dict(self.stats)
