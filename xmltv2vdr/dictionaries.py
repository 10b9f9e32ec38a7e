"""
xmltv2vdr.dictionaries - i18n Translation system using .po files

Handles the localized words written into EPG descriptions (credit roles,
episode numbering words, rating prefix) using standard .po (Portable Object)
files. English is the source language; French and Spanish catalogs ship with
the package.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import polib


class TranslationManager:
    """Manages translations using .po files with caching and fallback"""

    def __init__(self, locales_dir: Optional[Path] = None):
        """
        Initialize translation manager

        Args:
            locales_dir: Directory containing locale subdirectories with .po files
                        If None, uses package default locales directory
        """
        self.locales_dir = locales_dir or self._get_default_locales_dir()
        self.translations: Dict[str, Dict[str, str]] = {}
        self.available_languages = ["en", "fr", "es"]
        self.fallback_language = "en"

        self._load_translations()

    def _get_default_locales_dir(self) -> Path:
        """Get default locales directory relative to this module"""
        return Path(__file__).parent / "locales"

    def _load_translations(self):
        """Load all .po files from locales directory"""
        if not self.locales_dir.exists():
            logging.warning("Locales directory not found: %s", self.locales_dir)
            return

        for lang_code in self.available_languages:
            if lang_code == self.fallback_language:
                continue  # English is the source language

            po_file = self.locales_dir / lang_code / "LC_MESSAGES" / "xmltv2vdr.po"

            if po_file.exists():
                try:
                    po = polib.pofile(str(po_file))

                    lang_translations = {}
                    for entry in po:
                        if entry.msgstr and not entry.obsolete:
                            # Case-insensitive lookup
                            lang_translations[entry.msgid.lower().strip()] = entry.msgstr

                    self.translations[lang_code] = lang_translations
                    logging.debug(
                        "Loaded %d translations for %s", len(lang_translations), lang_code
                    )

                except (OSError, ValueError) as e:
                    logging.warning("Error loading %s translations: %s", lang_code, e)
            else:
                logging.debug("Translation file not found: %s", po_file)

        total_loaded = sum(len(trans) for trans in self.translations.values())
        logging.debug(
            "Translation system initialized: %d languages, %d total translations",
            len(self.translations),
            total_loaded,
        )

    @staticmethod
    def normalize_language(language: Optional[str]) -> str:
        """Reduce a language tag like 'fr-CA' or 'fr_CA' to its primary subtag"""
        if not language:
            return ""
        return language.replace("_", "-").split("-")[0].lower()

    def translate(self, text: str, target_language: str) -> str:
        """
        Translate text to target language

        Args:
            text: English source text
            target_language: Target language tag (fr, en, es, fr-CA...)

        Returns:
            Translated text or original if translation not found
        """
        target_language = self.normalize_language(target_language)

        if target_language not in self.available_languages:
            target_language = self.fallback_language

        if target_language == self.fallback_language or not self.translations.get(target_language):
            return text

        translated = self.translations[target_language].get(text.lower().strip())
        if translated:
            return translated

        logging.debug('No translation found for "%s" in %s', text, target_language)
        return text

    def get_available_languages(self) -> List[str]:
        """Get list of supported language codes"""
        return self.available_languages.copy()


# Global translation manager instance
_translation_manager: Optional[TranslationManager] = None


def get_translation_manager() -> TranslationManager:
    """Get or create global translation manager instance"""
    global _translation_manager
    if _translation_manager is None:
        _translation_manager = TranslationManager()
    return _translation_manager


def get_term_translation(term: str, target_language: str) -> str:
    """
    Get translated term (Director, Season, Rating...) using .po files

    Args:
        term: English term to translate
        target_language: Target language tag

    Returns:
        Translated term or original if translation not found
    """
    return get_translation_manager().translate(term, target_language)


def get_available_languages() -> List[str]:
    """Get list of supported language codes"""
    return get_translation_manager().get_available_languages()


def reload_translations(locales_dir: Optional[Path] = None):
    """
    Reload translations from .po files

    Args:
        locales_dir: Optional custom locales directory
    """
    global _translation_manager
    _translation_manager = TranslationManager(locales_dir)
