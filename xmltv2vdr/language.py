"""
xmltv2vdr.language - Preferred language selection

XMLTV repeats localized elements (title, sub-title, desc, category) once per
language. The resolver keeps the best candidate seen so far for one element
kind: the preferred language, else an untagged value, else the first found.
"""

import logging
from typing import Optional


class LanguageResolver:
    """Best-so-far candidate for repeated localized elements of one kind"""

    def __init__(self, preferred_language: str):
        self.preferred_language = preferred_language
        self.element: Optional[str] = None
        self.value = ""
        self.current_language = ""

    def track(self, element: str):
        """Forget the held candidate when the element kind changes"""
        if element != self.element:
            self.element = element
            self.value = ""
            self.current_language = ""

    def resolve(self, value: str, language: Optional[str] = None) -> str:
        """
        Offer a candidate and return the value currently held

        A preferred-language candidate always replaces the held one, even an
        earlier preferred-language pick. Between untagged candidates the
        first one is kept.
        """
        language = language or ""

        logging.debug(
            "element: %s new value: %r current value: %r current lang: %r new lang: %r",
            self.element,
            value,
            self.value,
            self.current_language,
            language,
        )

        if not self.value:
            self.value = value
            self.current_language = language
        elif language == self.preferred_language:
            self.value = value
            self.current_language = language

        return self.value
