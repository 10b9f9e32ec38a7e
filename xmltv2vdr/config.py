"""
xmltv2vdr.config - Configuration management

Handles XML settings file parsing, type conversion and validation. Command
line values override the file.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Optional


class ConfigManager:
    """Manages the xmltv2vdr settings file"""

    # Default configuration template
    DEFAULT_CONFIG = """<?xml version="1.0" encoding="utf-8"?>
<settings version="1">
  <setting id="channels">channels.conf</setting>
  <setting id="genres"></setting>
  <setting id="ratings"></setting>
  <setting id="host">localhost</setting>
  <setting id="port">6419</setting>
  <setting id="timeout">60</setting>
  <setting id="adjust">0</setting>
  <setting id="desclen">0</setting>
  <setting id="credits">0</setting>
  <setting id="priority">0</setting>
  <setting id="lang">en</setting>
  <setting id="extras">false</setting>
  <setting id="simulate">false</setting>
</settings>"""

    # Valid settings and their types
    VALID_SETTINGS = {
        # Files
        'workdir': str,
        'xmltv': str,
        'channels': str,
        'genres': str,
        'ratings': str,

        # SVDRP
        'host': str,
        'port': int,
        'timeout': int,
        'simulate': bool,

        # EPG content
        'adjust': int,
        'desclen': int,
        'credits': int,
        'priority': int,
        'lang': str,
        'extras': bool,
    }

    DEFAULTS = {
        'workdir': '',
        'xmltv': '',
        'channels': '',
        'genres': '',
        'ratings': '',
        'host': 'localhost',
        'port': 6419,
        'timeout': 60,
        'simulate': False,
        'adjust': 0,
        'desclen': 0,
        'credits': 0,
        'priority': 0,
        'lang': 'en',
        'extras': False,
    }

    # Settings which must not be negative
    NON_NEGATIVE = ('timeout', 'desclen', 'credits')

    def __init__(self, config_file: Path, workdir: Optional[Path] = None):
        self.config_file = Path(config_file)
        self.default_workdir = Path(workdir) if workdir else self.config_file.parent
        self.settings: Dict[str, Any] = {}
        self.version: str = "1"

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Load and validate configuration file

        Args:
            overrides: Values from the command line, None entries are ignored

        Returns:
            Settings dictionary
        """
        if not self.config_file.exists():
            self._create_default_config()

        self._parse_config_file()

        for setting_id, value in (overrides or {}).items():
            if value is None:
                continue
            self.settings[setting_id] = value
            logging.debug('Using %s from command line: %s', setting_id, value)

        self._set_defaults()
        self._validate_config()

        return self.settings

    def _create_default_config(self):
        """Create default configuration file"""
        logging.info('Creating default configuration: %s', self.config_file)
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w', encoding='utf-8') as f:
            f.write(self.DEFAULT_CONFIG)

    def _parse_config_file(self):
        """Parse XML configuration file"""
        try:
            tree = ET.parse(self.config_file)
        except ET.ParseError as e:
            logging.error('Cannot parse configuration file %s: %s', self.config_file, e)
            raise

        root = tree.getroot()
        logging.info('Reading configuration from: %s', self.config_file)
        self.version = root.attrib.get('version', '1')

        for setting in root.findall('setting'):
            setting_id = setting.get('id')
            setting_value = setting.get('value')
            if setting_value is None:
                setting_value = setting.text
            if setting_value is not None:
                setting_value = setting_value.strip()

            logging.debug('Config setting: %s = %s', setting_id, setting_value)

            if setting_id not in self.VALID_SETTINGS:
                logging.warning('Unknown configuration setting: %s = %s', setting_id, setting_value)
                continue

            if not setting_value:
                continue

            self.settings[setting_id] = self._convert(setting_id, setting_value)

    def _convert(self, setting_id: str, value: str) -> Any:
        """Convert a setting to its declared type, default on failure"""
        expected_type = self.VALID_SETTINGS[setting_id]

        if expected_type == bool:
            return self._parse_boolean(value)
        if expected_type == int:
            try:
                return int(value)
            except ValueError:
                logging.warning(
                    'Invalid %s setting "%s", using default %s',
                    setting_id, value, self.DEFAULTS[setting_id],
                )
                return self.DEFAULTS[setting_id]
        return value

    def _parse_boolean(self, value: Any) -> bool:
        """Parse boolean values from configuration"""
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ('true', '1', 'yes', 'on')
        return bool(value)

    def _set_defaults(self):
        """Set default values for missing settings"""
        for key, default_value in self.DEFAULTS.items():
            if key not in self.settings or self.settings[key] is None:
                self.settings[key] = default_value

    def _validate_config(self):
        """Validate numeric ranges"""
        for setting_id in self.NON_NEGATIVE:
            if self.settings[setting_id] < 0:
                logging.warning(
                    'Invalid %s %d, using default %d',
                    setting_id, self.settings[setting_id], self.DEFAULTS[setting_id],
                )
                self.settings[setting_id] = self.DEFAULTS[setting_id]

        port = self.settings['port']
        if port < 0 or port > 65535:
            logging.warning('Invalid port %d, using default %d', port, self.DEFAULTS['port'])
            self.settings['port'] = self.DEFAULTS['port']

    def get_workdir(self) -> Path:
        workdir = self.settings.get('workdir')
        return Path(workdir).expanduser() if workdir else self.default_workdir

    def resolve_path(self, setting_id: str) -> Optional[Path]:
        """File setting as a path, relative names resolved against the work directory"""
        value = self.settings.get(setting_id)
        if not value:
            return None
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.get_workdir() / path
        return path

    def log_config_summary(self):
        """Log configuration summary"""
        logging.info('Configuration values processed:')
        logging.info('  workdir: %s', self.get_workdir())
        logging.info('  xmltv: %s', self.resolve_path('xmltv'))
        logging.info('  channels: %s', self.resolve_path('channels'))
        logging.info('  genres: %s', self.resolve_path('genres') or 'none')
        logging.info('  ratings: %s', self.resolve_path('ratings') or 'none')

        if self.settings.get('simulate'):
            logging.info('  destination: simulation (stdout)')
        else:
            logging.info('  destination: %s:%d', self.settings.get('host'), self.settings.get('port'))
        logging.info('  timeout: %ds', self.settings.get('timeout'))

        logging.info('  time adjustment: %d minutes', self.settings.get('adjust'))
        desclen = self.settings.get('desclen')
        logging.info('  description length: %s', desclen if desclen else 'unlimited')
        credits = self.settings.get('credits')
        logging.info('  credits: %s', credits if credits else 'unlimited')
        logging.info('  priority: %d', self.settings.get('priority'))
        logging.info('  preferred language: %s', self.settings.get('lang'))
        logging.info('  extra attributes (episode-num, star-rating): %s', self.settings.get('extras'))
