"""
Display strings for the publishing tools.

Lookups fall back to English, then to the key itself.
"""

from typing import Dict, Optional

from story_publish import config

FALLBACK_LOCALE = 'en'

MESSAGES: Dict[str, Dict[str, str]] = {
    'en': {
        'store.archiveFilename': 'Twine Archive.html',
    },
    'de': {
        'store.archiveFilename': 'Twine-Archiv.html',
    },
    'es': {
        'store.archiveFilename': 'Archivo de Twine.html',
    },
    'fr': {
        'store.archiveFilename': 'Archive Twine.html',
    },
}


def translate(key: str, locale: Optional[str] = None) -> str:
    """Translate a message key into a display string.

    Args:
        key: Dotted message key, e.g. 'store.archiveFilename'
        locale: Locale code such as 'de' or 'fr-CA' (default: configured locale)

    Returns:
        The translated string, the English string, or the key itself
    """
    locale = (locale or config.LOCALE).replace('_', '-')

    for candidate in (locale, locale.split('-')[0], FALLBACK_LOCALE):
        messages = MESSAGES.get(candidate, {})
        if key in messages:
            return messages[key]

    return key
