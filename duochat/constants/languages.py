"""Language codes accepted by the translation endpoints.

Must stay in sync with the language picker in the chat frontend.
"""

SUPPORTED_LANGUAGES = ('en', 'zh-CN', 'zh-TW')

# Sentinel accepted only as a source language
AUTO_DETECT = 'auto'


def is_supported_language(code):
    """Check a language code against SUPPORTED_LANGUAGES (case sensitive)."""
    return isinstance(code, str) and code in SUPPORTED_LANGUAGES
