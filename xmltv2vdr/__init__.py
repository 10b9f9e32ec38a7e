"""
xmltv2vdr - XMLTV to VDR EPG converter

Converts XMLTV programme data into VDR EPG records and pushes them to a
running VDR over SVDRP.
"""

__version__ = "1.0.0"
__author__ = "xmltv2vdr contributors"
__license__ = "GPL-2.0"

from .accumulator import ProgramAccumulator
from .config import ConfigManager
from .converter import XmltvConverter
from .credits import CreditsFormatter
from .episode import EpisodeNumberEncoder
from .language import LanguageResolver
from .record import ProgramRecord
from .renderer import EpgRenderer
from .store import ChannelRecordStore
from .svdrp import SimulatedTransport, SocketTransport, SvdrpClient
from .tables import ChannelTable, LookupTables
from .dictionaries import get_term_translation, get_available_languages, reload_translations

__all__ = [
    "ProgramAccumulator",
    "ConfigManager",
    "XmltvConverter",
    "CreditsFormatter",
    "EpisodeNumberEncoder",
    "LanguageResolver",
    "ProgramRecord",
    "EpgRenderer",
    "ChannelRecordStore",
    "SimulatedTransport",
    "SocketTransport",
    "SvdrpClient",
    "ChannelTable",
    "LookupTables",
    "get_term_translation",
    "get_available_languages",
    "reload_translations",
]
