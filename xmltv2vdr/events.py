"""
xmltv2vdr.events - XMLTV guide events

Turns an XMLTV document into a forward-only sequence of guide events:
programme starts, element starts, element text and element ends.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional, Union

PROGRAMME = "programme"


@dataclass(frozen=True)
class ProgramStart:
    """Start of a programme element"""
    channel: str
    start: str
    stop: Optional[str] = None
    clumpidx: Optional[str] = None


@dataclass(frozen=True)
class ElementStart:
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class ElementEnd:
    name: str


GuideEvent = Union[ProgramStart, ElementStart, Text, ElementEnd]


def iter_guide_events(source: Union[str, Path, BinaryIO]) -> Iterator[GuideEvent]:
    """
    Parse an XMLTV document into guide events

    Args:
        source: File name or binary file object

    Yields:
        Guide events in document order

    Raises:
        xml.etree.ElementTree.ParseError: on malformed XML
    """
    if isinstance(source, Path):
        source = str(source)

    root = None
    depth = 0
    for event, elem in ET.iterparse(source, events=("start", "end")):
        if event == "start":
            if root is None:
                root = elem
            depth += 1
            if elem.tag == PROGRAMME:
                yield ProgramStart(
                    channel=elem.get("channel", ""),
                    start=elem.get("start", ""),
                    stop=elem.get("stop"),
                    clumpidx=elem.get("clumpidx"),
                )
            else:
                yield ElementStart(elem.tag, dict(elem.attrib))
        else:
            if elem.tag != PROGRAMME and elem.text:
                yield Text(elem.text)
            yield ElementEnd(elem.tag)

            # Finished channel and programme subtrees are not needed anymore
            depth -= 1
            if depth == 1:
                elem.clear()
                root.remove(elem)
