"""
xmltv2vdr.episode - Episode numbering

Turns XMLTV episode-num values into a readable label for the EPG description
and, for the positional xmltv_ns scheme, a short sNNeNN code.
"""

from dataclasses import dataclass
from typing import Optional

from .dictionaries import get_term_translation

# Zero-based "season.episode.part", each optionally "number/total"
POSITIONAL_SCHEME = "xmltv_ns"


@dataclass
class EpisodeNumber:
    """Encoded episode number"""
    label: str = ""
    short_code: str = ""


class EpisodeNumberEncoder:
    """Encodes episode-num text according to its numbering scheme"""

    # (word, short code prefix) for season, episode and part
    COMPONENTS = (("Season", "s"), ("Episode", "e"), ("Part", None))

    def __init__(self, language: str = "en"):
        self.language = language

    def encode(self, text: str, system: Optional[str] = None) -> EpisodeNumber:
        """
        Encode episode-num text

        Args:
            text: Element text
            system: Numbering scheme from the element's system attribute,
                    None when not captured

        Returns:
            EpisodeNumber with label (space terminated) and short code
        """
        if not system:
            return EpisodeNumber(label=f"{text} ")

        if system == POSITIONAL_SCHEME:
            return self._encode_positional(text)

        word = get_term_translation("Episode", self.language)
        return EpisodeNumber(label=f"{word} {text} ")

    def _encode_positional(self, text: str) -> EpisodeNumber:
        groups = (text.split(".") + ["", ""])[:3]

        labels = []
        short_code = ""
        for (word, prefix), group in zip(self.COMPONENTS, groups):
            number, _, total = group.partition("/")
            number = number.strip()
            total = total.strip()

            # Zero-based; a zero or missing number is not displayed
            if not number.isdigit() or int(number) == 0:
                continue

            display = int(number) + 1
            component = f"{get_term_translation(word, self.language)} {display}"
            if total:
                component += f"/{total}"
            labels.append(component)

            if prefix:
                short_code += f"{prefix}{display:02d}"

        # The label is space terminated even when nothing is displayed
        return EpisodeNumber(label=" - ".join(labels) + " ", short_code=short_code)
