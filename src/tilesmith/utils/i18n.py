"""Internationalization support."""

import json
import locale
import logging
import sys
from pathlib import Path

_logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en"

SUPPORTED_LANGUAGES = ["en", "ko"]

# Shown in the language menu in their own script
LANGUAGE_NAMES = {
    "en": "English",
    "ko": "한국어",
}


def get_locales_dir() -> Path:
    """Get the locales directory, inside the bundle for frozen apps."""
    if getattr(sys, "frozen", False):
        return Path(sys._MEIPASS) / "tilesmith" / "locales"
    return Path(__file__).parent.parent / "locales"


def detect_language() -> str:
    """Pick a supported language from the system locale."""
    lang_code = locale.getlocale()[0]
    if lang_code and lang_code.split("_")[0].lower() in ("ko", "korean"):
        return "ko"
    return FALLBACK_LANGUAGE


def _read_locale(locales_dir: Path, language: str) -> dict[str, str]:
    path = locales_dir / f"{language}.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        _logger.warning(f"Cannot read locale {path}: {e}")
        return {}


class I18n:
    """UI strings for one language, with English for any missing key."""

    def __init__(self, language: str, locales_dir: Path | None = None):
        if language not in SUPPORTED_LANGUAGES:
            language = FALLBACK_LANGUAGE
        self.language = language

        locales_dir = locales_dir or get_locales_dir()
        self._translations = _read_locale(locales_dir, FALLBACK_LANGUAGE)
        if language != FALLBACK_LANGUAGE:
            self._translations.update(_read_locale(locales_dir, language))

    def get(self, key: str, **kwargs) -> str:
        """Get translated string, or the key itself if nothing matches."""
        text = self._translations.get(key, key)
        if kwargs:
            try:
                text = text.format(**kwargs)
            except KeyError:
                pass
        return text


# Global instance
_i18n: I18n | None = None


def get_i18n() -> I18n:
    """Get the global I18n instance, using the saved language if any."""
    global _i18n
    if _i18n is None:
        from tilesmith.utils.settings import Settings

        saved = Settings().load_language()
        _i18n = I18n(saved if saved in SUPPORTED_LANGUAGES else detect_language())
    return _i18n


def tr(key: str, **kwargs) -> str:
    """Translate a key. Shortcut for get_i18n().get(key)."""
    return get_i18n().get(key, **kwargs)
