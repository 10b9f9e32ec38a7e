"""
xmltv2vdr.tables - Lookup tables

Loads the three flat configuration files used during conversion:

- channels: VDR channels.conf lines extended with a 14th field holding the
  comma separated XMLTV channel ids mapped to the channel
- genres:   <XMLTV category>:<VDR genre code>
- ratings:  <XMLTV rating value>:<age code>

All files are UTF-8, '#' starts a comment and blank lines are ignored.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple


class LookupFileError(Exception):
    """A lookup file is missing or unreadable"""


class ChannelFileError(LookupFileError):
    """A channel line cannot be turned into a channel selector"""


# channels.conf field positions
CHANNEL_FIELDS = 14
NAME, FREQUENCY, SOURCE, SID, NID, TID, XMLTV_IDS = 0, 1, 3, 9, 10, 11, 13


@dataclass
class ChannelEntry:
    """VDR channel mapped to one or more XMLTV channel ids"""
    name: str
    selector: str


def read_config_lines(path: Path) -> Iterator[Tuple[int, str]]:
    """Yield (line number, line) for non-blank lines with comments removed"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise LookupFileError(f"cannot open {path} file: {e}") from e

    for line_number, line in enumerate(lines, 1):
        line = line.split("#", 1)[0].rstrip("\r\n")
        if not line.strip():
            continue
        yield line_number, line


def load_mapping_file(path: Path, kind: str) -> Dict[str, str]:
    """
    Load a '<text>:<code>' file

    Args:
        path: File to read
        kind: What the file maps, for log messages (genre, rating)

    Returns:
        Dictionary text -> code
    """
    logging.info("Parsing %s...", path)
    mapping: Dict[str, str] = {}

    for line_number, line in read_config_lines(path):
        if ":" not in line:
            logging.warning("Ignoring %s line %d in %s: %s", kind, line_number, path, line)
            continue
        text, code = line.rsplit(":", 1)
        mapping[text.strip()] = code.strip()
        logging.debug("Add %s %s with code %s", kind, text.strip(), code.strip())

    logging.info("%d %ss found.", len(mapping), kind)
    return mapping


class ChannelTable:
    """XMLTV channel id -> VDR channel"""

    def __init__(self):
        self.entries: Dict[str, ChannelEntry] = {}
        self.unmapped: List[str] = []

    def load(self, path: Path) -> "ChannelTable":
        """Parse a channels file"""
        logging.info("Parsing %s...", path)

        for line_number, line in read_config_lines(path):
            fields = line.split(":")
            name = fields[NAME]
            xmltv_ids = fields[XMLTV_IDS] if len(fields) >= CHANNEL_FIELDS else ""

            if not xmltv_ids.strip():
                if not name:
                    logging.warning("Ignoring header: %s", line.lstrip(":"))
                else:
                    self.unmapped.append(name)
                continue

            entry = ChannelEntry(name=name, selector=self._build_selector(fields, path, line_number))
            for xmltv_id in xmltv_ids.split(","):
                xmltv_id = xmltv_id.strip()
                if xmltv_id:
                    self.entries[xmltv_id] = entry
                    logging.debug("Add channel %s : %s", xmltv_id, entry.selector)

        logging.info("%d channels found.", len(self.entries))
        if self.unmapped:
            logging.info(
                "Channels with no xmltv info : %s * Total : %d *",
                ", ".join(self.unmapped),
                len(self.unmapped),
            )
        return self

    @staticmethod
    def _build_selector(fields: List[str], path: Path, line_number: int) -> str:
        """
        Build the 'C' line identifying the channel in a PUTE block

        The channel is addressed by source-nid-tid-sid when it has a network
        id, by source-nid-frequency-sid otherwise.
        """
        name = fields[NAME]
        source = fields[SOURCE]
        frequency = fields[FREQUENCY]
        sid, nid, tid = fields[SID].strip(), fields[NID].strip(), fields[TID].strip()

        if not name or not source or not all(value.isdigit() for value in (sid, nid, tid)):
            raise ChannelFileError(f"{path}:{line_number}: malformed channel line")

        if source == "T":
            frequency = frequency[:3]

        if int(nid) > 0:
            return f"C {source}-{nid}-{tid}-{sid} {name}"
        return f"C {source}-{nid}-{frequency}-{sid} {name}"

    def get(self, xmltv_id: str) -> Optional[ChannelEntry]:
        return self.entries.get(xmltv_id)

    def get_name(self, xmltv_id: str) -> str:
        """VDR channel name, or the XMLTV id for unknown channels"""
        entry = self.entries.get(xmltv_id)
        return entry.name if entry else xmltv_id

    def get_selector(self, xmltv_id: str) -> Optional[str]:
        entry = self.entries.get(xmltv_id)
        return entry.selector if entry else None

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class LookupTables:
    """Channel, genre and rating tables used by the conversion"""

    def __init__(
        self,
        channels: ChannelTable,
        genres: Optional[Dict[str, str]] = None,
        ratings: Optional[Dict[str, str]] = None,
    ):
        self.channels = channels
        self.genres = genres or {}
        self.ratings = ratings or {}

    @classmethod
    def load(
        cls,
        channels_file: Path,
        genres_file: Optional[Path] = None,
        ratings_file: Optional[Path] = None,
    ) -> "LookupTables":
        """Load all tables; genre and rating files are optional"""
        genres = load_mapping_file(genres_file, "genre") if genres_file else {}
        ratings = load_mapping_file(ratings_file, "rating") if ratings_file else {}
        channels = ChannelTable().load(channels_file)
        return cls(channels, genres, ratings)
