"""
Translation support for the agent portal
"""
import logging

logger = logging.getLogger(__name__)

# Built-in catalogs, keyed by language code then by source string
CATALOGS = {
    'en': {},
    'de': {
        'Fulltext': 'Volltext',
        'Please note that the session limit is almost reached.':
            'Bitte beachten Sie, dass das Sitzungslimit fast erreicht ist.',
        'Session limit reached! Please try again later.':
            'Sitzungslimit erreicht! Bitte versuchen Sie es später erneut.',
        'Search tickets by ticket number': 'Tickets nach Ticketnummer durchsuchen',
        'Search tickets by fulltext': 'Tickets im Volltext durchsuchen',
        'Warning': 'Warnung',
    },
}


class Language:
    """Translate UI strings for a single language"""

    def __init__(self, code='en'):
        if code not in CATALOGS:
            logger.warning(f"No catalog for language '{code}', falling back to 'en'")
            code = 'en'
        self.code = code
        self.catalog = CATALOGS[code]

    def translate(self, text, *params):
        """Translate text and fill %s placeholders with params in order"""
        if text is None:
            return ''
        translated = self.catalog.get(text, text)
        for param in params:
            if '%s' not in translated:
                break
            translated = translated.replace('%s', str(param), 1)
        return translated
