import gettext
import logging
import os

_domain = 'pysubparse'
# No catalogs ship yet, so every language falls back to the source messages
_locales_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'locales')
_translation : gettext.NullTranslations = gettext.NullTranslations()
_language : str = 'en'

def initialize_localization(language : str|None = None) -> None:
    """
    Load the message catalog for a language, falling back to untranslated messages.

    The language defaults to the PYSUBPARSE_LANGUAGE environment variable, then English.
    """
    global _translation, _language
    language = language or os.getenv('PYSUBPARSE_LANGUAGE') or 'en'
    _translation = gettext.translation(_domain, localedir=_locales_dir, languages=[language], fallback=True)
    _language = language

    if isinstance(_translation, gettext.GNUTranslations):
        logging.debug(f"Loaded {language} translations from {_locales_dir}")

def set_language(language : str) -> None:
    """ Switch the active language """
    initialize_localization(language)

def get_language() -> str:
    return _language

def _(text : str) -> str:
    """ Translate a message using the active catalog """
    return _translation.gettext(text)
