"""
xmltv2vdr.renderer - VDR EPG record generation

Serializes a completed program record into the line oriented format read by
VDR's PUTE command:

    E <event id> <start time> <duration> <table id>
    T <title>
    S <short text>
    D <description>
    G <genre>
    e

Every line is CRLF terminated.
"""

from typing import List

from .record import ProgramRecord

# Genre code sent when the category is unknown
UNKNOWN_GENRE = "FF"


class EpgRenderer:
    """Generates VDR EPG records from program records"""

    def __init__(self, priority: int = 0):
        self.priority = priority
        self.record_count = 0

    def render(self, record: ProgramRecord) -> str:
        """Render one record, CRLF terminated"""
        lines: List[str] = [
            f"E {record.program_id} {record.start} {record.duration} {self.priority}"
        ]

        if record.title:
            lines.append(f"T {record.title}")

        episode_label = record.episode_label
        if record.short_text:
            lines.append(f"S {record.short_text}")
        else:
            # The short code stands in for the short text; the long label
            # is then left out of the description
            if record.episode_short:
                lines.append(f"S {record.episode_short}")
            episode_label = ""

        description = self._build_description(record, episode_label)
        if description:
            lines.append(f"D {description}")

        lines.append(f"G {record.genre or UNKNOWN_GENRE}")
        lines.append("e")

        self.record_count += 1
        return "".join(f"{line}\r\n" for line in lines)

    def _build_description(self, record: ProgramRecord, episode_label: str) -> str:
        """Episode label and date, description, credits and star rating, '|' separated"""
        header = episode_label + record.air_date
        if header:
            header += "|"

        description = record.description
        if description:
            description += "|"

        credits = record.credits_text
        if credits:
            credits += "."
            if record.star_rating:
                credits += "|"

        return f"{header}{description}{credits}{record.star_rating}"
