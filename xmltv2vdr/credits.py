"""
xmltv2vdr.credits - Credits formatting

Builds the credits part of the EPG description, grouping consecutive
entries of the same role into one clause:

    Director : Jane Doe.|Actor : John Doe "Hero", Max Roe
"""

import logging
from typing import Optional

from .dictionaries import get_term_translation

# XMLTV credit roles, in DTD order
CREDIT_ROLES = (
    "director",
    "actor",
    "writer",
    "adapter",
    "producer",
    "presenter",
    "commentator",
    "guest",
)


class CreditsFormatter:
    """Accumulates credits in encounter order"""

    def __init__(self, max_count: int = 0, language: str = "en"):
        self.max_count = max_count
        self.language = language
        self.text = ""
        self.count = 0
        self._current_role: Optional[str] = None

    def add(self, role: str, name: str, qualifier: Optional[str] = None) -> bool:
        """
        Add one credit

        Args:
            role: Credit role (director, actor...)
            name: Person name
            qualifier: Character played, actors only

        Returns:
            False when the credit was dropped because the cap is reached
        """
        if self.max_count and self.count >= self.max_count:
            logging.debug("Credits limit %d reached, dropping %s %s", self.max_count, role, name)
            return False

        if role == self._current_role:
            self.text += f", {name}"
        else:
            self._current_role = role
            if self.count:
                self.text += ".|"
            self.text += f"{get_term_translation(role.capitalize(), self.language)} : {name}"

        if qualifier:
            self.text += f' "{qualifier}"'

        self.count += 1
        return True
