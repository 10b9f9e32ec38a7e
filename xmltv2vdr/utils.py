"""
xmltv2vdr.utils - Time utilities

Conversion of XMLTV timestamps into VDR epoch seconds.
"""

import re
from datetime import datetime, timedelta, timezone

# YYYYmmddHHMMSS, possibly truncated, followed by an optional offset
XMLTV_TIME_PATTERN = re.compile(
    r"^(?P<digits>\d{4,14})\s*(?:(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})|(?P<utc>UTC|GMT|Z))?$",
    re.IGNORECASE,
)

# Completes a truncated XMLTV timestamp (month and day default to 01)
XMLTV_TIME_PADDING = "00000101000000"


class TimeUtils:
    """Time and date utilities"""

    @staticmethod
    def xmltv_to_epoch(xmltv_time: str, adjust_minutes: int = 0) -> int:
        """
        Convert an XMLTV timestamp into seconds since the epoch

        Args:
            xmltv_time: Timestamp like '20080715003000 -0600'
            adjust_minutes: Offset added to the result, in minutes

        Returns:
            Epoch seconds, shifted by the adjustment

        A timestamp without offset is interpreted as local time.
        """
        if xmltv_time is None:
            raise ValueError("Missing XMLTV time")

        match = XMLTV_TIME_PATTERN.match(xmltv_time.strip())
        if not match:
            raise ValueError(f"Invalid XMLTV time: {xmltv_time!r}")

        digits = match.group("digits")
        digits += XMLTV_TIME_PADDING[len(digits):]
        dt = datetime.strptime(digits, "%Y%m%d%H%M%S")

        if match.group("sign"):
            offset = timedelta(
                hours=int(match.group("hours")), minutes=int(match.group("minutes"))
            )
            if match.group("sign") == "-":
                offset = -offset
            dt = dt.replace(tzinfo=timezone(offset))
        elif match.group("utc"):
            dt = dt.replace(tzinfo=timezone.utc)

        return int(dt.timestamp()) + adjust_minutes * 60
