"""
xmltv2vdr.store - Per-channel EPG text

Append-only accumulation of rendered records, one text blob per XMLTV
channel id, in channel table order.
"""

import logging
from typing import Dict, Iterable, Iterator, Tuple


class ChannelRecordStore:
    """Rendered EPG text keyed by XMLTV channel id"""

    def __init__(self, channels: Iterable[str] = ()):
        self._texts: Dict[str, str] = {}
        for channel in channels:
            self.register(channel)

    def register(self, channel: str):
        """Create an empty entry for a known channel"""
        self._texts.setdefault(channel, "")

    def append(self, channel: str, text: str):
        if channel not in self._texts:
            logging.debug("Storing programme for unknown channel %s", channel)
        self._texts[channel] = self._texts.get(channel, "") + text

    def get(self, channel: str) -> str:
        return self._texts.get(channel, "")

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._texts.items())

    def non_empty_count(self) -> int:
        return sum(1 for text in self._texts.values() if text)

    def __contains__(self, channel: str) -> bool:
        return channel in self._texts

    def __len__(self) -> int:
        return len(self._texts)
