"""
Conversion orchestrator

The XmltvConverter coordinates the conversion pass:
- Lookup tables (channels, genres, ratings)
- Guide event tokenizer
- Programme accumulator and record renderer

Its result is the channel record store handed to the SVDRP client.
"""

import logging
import time
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Union

from .accumulator import ProgramAccumulator
from .events import iter_guide_events
from .renderer import EpgRenderer
from .store import ChannelRecordStore
from .tables import LookupTables


class XmltvConverter:
    """Converts an XMLTV document into per-channel VDR EPG text"""

    def __init__(self, tables: LookupTables, config: Dict[str, Any], now: Optional[float] = None):
        self.tables = tables
        self.config = config
        self.now = now
        self.store: Optional[ChannelRecordStore] = None
        self.stats: Dict[str, Any] = {}

    def convert(self, xmltv_source: Union[str, Path, BinaryIO]) -> ChannelRecordStore:
        """
        Run the whole XMLTV document through the accumulator

        Args:
            xmltv_source: XMLTV file name or binary file object

        Returns:
            ChannelRecordStore with one entry per known channel
        """
        logging.info("Parsing %s...", xmltv_source)
        parse_start = time.time()

        self.store = ChannelRecordStore(self.tables.channels)
        accumulator = ProgramAccumulator(
            tables=self.tables,
            store=self.store,
            renderer=EpgRenderer(priority=self.config.get("priority", 0)),
            adjust=self.config.get("adjust", 0),
            description_length=self.config.get("desclen", 0),
            credits_length=self.config.get("credits", 0),
            language=self.config.get("lang", "en"),
            extras=self.config.get("extras", False),
            now=self.now,
        )
        accumulator.consume(iter_guide_events(xmltv_source))

        self.stats = accumulator.get_statistics()
        self.stats["parse_time"] = time.time() - parse_start
        self.stats["channels_with_data"] = self.store.non_empty_count()
        self._log_statistics()

        return self.store

    def _log_statistics(self):
        stats = self.stats
        logging.info(
            "%d programmes found, %d converted in %.2f seconds",
            stats["programmes"],
            stats["stored"],
            stats["parse_time"],
        )
        if stats["split"] or stats["outdated"] or stats["invalid"]:
            logging.info(
                "  Rejected: %d split, %d outdated, %d invalid",
                stats["split"],
                stats["outdated"],
                stats["invalid"],
            )
        if stats["unknown_genres"] or stats["unknown_ratings"]:
            logging.info(
                "  Unknown values: %d genres, %d ratings",
                stats["unknown_genres"],
                stats["unknown_ratings"],
            )
        logging.info("  Channels with data: %d/%d", stats["channels_with_data"], len(self.store))

    def get_statistics(self) -> Dict[str, Any]:
        return dict(self.stats)
